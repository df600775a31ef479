"""
Round Scheduling

Cancellable one-shot timers used for the reveal delay between a correct guess
and the next round.
"""

import threading
from typing import Callable, List


class ScheduledTask:
    """Handle for a scheduled callback."""

    def __init__(self, callback: Callable[[], None]):
        self.callback = callback
        self.cancelled = False
        self.done = False

    def cancel(self) -> None:
        self.cancelled = True

    def run(self) -> None:
        if self.cancelled or self.done:
            return
        self.done = True
        self.callback()


class Scheduler:
    """Interface: run ``callback`` once after ``delay`` seconds."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        raise NotImplementedError


class ThreadingScheduler(Scheduler):
    """Runs callbacks on daemon ``threading.Timer`` threads."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        task = _TimerTask(callback)
        timer = threading.Timer(max(0.0, delay), task.run)
        timer.daemon = True
        task.timer = timer
        timer.start()
        return task


class _TimerTask(ScheduledTask):
    timer = None

    def cancel(self) -> None:
        super().cancel()
        if self.timer is not None:
            self.timer.cancel()


class ManualScheduler(Scheduler):
    """
    Virtual clock for tests and headless simulations.

    Nothing runs until ``advance`` or ``run_pending`` is called.
    """

    def __init__(self):
        self.now = 0.0
        self._queue: List[tuple] = []
        self._counter = 0

    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        task = ScheduledTask(callback)
        self._counter += 1
        self._queue.append((self.now + max(0.0, delay), self._counter, task))
        return task

    @property
    def pending(self) -> int:
        return sum(1 for _, _, task in self._queue if not task.cancelled and not task.done)

    def advance(self, seconds: float) -> int:
        """Move the clock forward and run every task that came due. Returns how many ran."""
        deadline = self.now + seconds
        ran = 0
        while True:
            due = [entry for entry in self._queue if entry[0] <= deadline]
            if not due:
                break
            entry = min(due)
            self._queue.remove(entry)
            self.now = max(self.now, entry[0])
            task = entry[2]
            if not task.cancelled and not task.done:
                task.run()
                ran += 1
        self.now = deadline
        return ran

    def run_pending(self) -> int:
        """Run everything queued, regardless of due time."""
        if not self._queue:
            return 0
        latest = max(entry[0] for entry in self._queue)
        return self.advance(max(0.0, latest - self.now))
