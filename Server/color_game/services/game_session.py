"""
Game Session

One player's game: score, lives, hints, help charges, the current round's
target and options, and the rules that move the game from round to round.
"""

import random
import threading
import time
import uuid
from contextlib import contextmanager
from typing import List, Optional, Set

from ..config.game_settings import GameSettings
from ..models.color import Color
from ..models.game import (
    ActionOutcome, ActionResult, GameEvent, GamePhase, GameState, Severity
)
from ..utils.color_math import coerce_color, describe_color, distance
from ..utils.game_logger import game_logger
from .color_generator import ColorSetGenerator
from .listeners import GameListener
from .scheduler import ScheduledTask, Scheduler, ThreadingScheduler

STATUS_AWAITING_GUESS = "Make your guess!"
STATUS_CORRECT = "Correct! Great job!"
STATUS_NO_HINTS = "No hints remaining!"
STATUS_NO_HELP = "No help remaining!"
STATUS_NOTHING_TO_ELIMINATE = "No more options to eliminate!"
STATUS_HELP_USED = "Eliminated a wrong option!"
MESSAGE_GAME_IS_OVER = "Game is over. Start a new game!"


class GameSession:
    """
    Mutable game record plus its transition rules.

    Every public method runs under the session lock, so requests from HTTP
    threads, Socket.IO handlers and the reveal timer are handled one at a time.
    Guesses and assists that arrive while a round transition is running
    (``is_animating``) or after game over are dropped.
    """

    def __init__(self,
                 settings: Optional[GameSettings] = None,
                 rng: Optional[random.Random] = None,
                 scheduler: Optional[Scheduler] = None,
                 listener: Optional[GameListener] = None,
                 game_id: Optional[str] = None):
        self.game_id = game_id or str(uuid.uuid4())
        self.settings = (settings or GameSettings()).validate()
        self.rng = rng or random.Random()
        self.generator = ColorSetGenerator(self.settings, self.rng)
        self.scheduler = scheduler or ThreadingScheduler()
        self.listener = listener or GameListener()

        self._lock = threading.RLock()
        self._events: Optional[List[GameEvent]] = None
        self._pending_task: Optional[ScheduledTask] = None
        self._round_token = 0
        self.closed = False

        self.score = 0
        self.lives_remaining = self.settings.max_lives
        self.hints_remaining = self.settings.max_hints
        self.help_remaining = self.settings.max_help
        self.target_color: Optional[Color] = None
        self.options: List[Color] = []
        self.eliminated_options: Set[Color] = set()
        self.is_animating = False
        self.game_over = False
        self.phase = GamePhase.PLAYING
        self.round_number = 0
        self.status = ""
        self.status_severity = Severity.INFO
        self.created_at = time.time()
        self.last_activity = self.created_at

        self.reset_game()

    # ------------------------------------------------------------------
    # Renderer-to-core commands
    # ------------------------------------------------------------------

    def resolve_guess(self, selected) -> ActionResult:
        """
        Resolve a guess against the current target.

        Raises:
            InvalidColorFormat: If ``selected`` is not a parsable color
        """
        guess = coerce_color(selected)
        with self._command('guess') as events:
            if self.game_over or self.is_animating:
                return self._ignored('guess')
            if guess not in self.options or guess in self.eliminated_options:
                return self._ignored('guess')

            if guess == self.target_color:
                self.score += 1
                self._emit('score_changed', score=self.score)
                self._set_status(STATUS_CORRECT, Severity.SUCCESS)
                self.phase = GamePhase.ROUND_RESOLVED
                self.is_animating = True
                self._schedule_next_round()
                game_logger.log_game_event(
                    self.game_id, 'correct_guess',
                    score=self.score, round=self.round_number, color=guess.hex
                )
                return ActionResult('guess', ActionOutcome.CORRECT,
                                    STATUS_CORRECT, Severity.SUCCESS, events)

            self.lives_remaining = max(0, self.lives_remaining - 1)
            self._emit('lives_changed',
                       remaining=self.lives_remaining, maximum=self.settings.max_lives)

            if self.lives_remaining == 0:
                self.game_over = True
                self.phase = GamePhase.GAME_OVER
                message = f"Game Over! Final Score: {self.score}"
                self._set_status(message, Severity.ERROR)
                self._emit('game_over', final_score=self.score)
                game_logger.log_game_event(
                    self.game_id, 'game_over',
                    final_score=self.score, rounds_played=self.round_number,
                    target=self.target_color.hex, final_guess=guess.hex
                )
                return ActionResult('guess', ActionOutcome.GAME_OVER,
                                    message, Severity.ERROR, events)

            noun = 'life' if self.lives_remaining == 1 else 'lives'
            message = f"Wrong guess! {self.lives_remaining} {noun} remaining"
            self._set_status(message, Severity.ERROR)
            game_logger.log_game_event(
                self.game_id, 'wrong_guess',
                lives_remaining=self.lives_remaining, guess=guess.hex
            )
            return ActionResult('guess', ActionOutcome.INCORRECT,
                                message, Severity.ERROR, events)

    def use_hint(self) -> ActionResult:
        """Spend a hint to learn which decoy sits closest to the target."""
        with self._command('hint') as events:
            if self.is_animating:
                return self._ignored('hint')
            if self.game_over:
                return ActionResult('hint', ActionOutcome.EXHAUSTED,
                                    MESSAGE_GAME_IS_OVER, Severity.WARNING, events)
            if self.hints_remaining <= 0:
                self._set_status(STATUS_NO_HINTS, Severity.WARNING)
                return ActionResult('hint', ActionOutcome.EXHAUSTED,
                                    STATUS_NO_HINTS, Severity.WARNING, events)

            decoys = [i for i, c in enumerate(self.options)
                      if c != self.target_color and c not in self.eliminated_options]
            if not decoys:
                decoys = [i for i, c in enumerate(self.options) if c != self.target_color]
            closest = min(decoys, key=lambda i: distance(self.options[i], self.target_color))

            self.hints_remaining -= 1
            self._emit('hints_changed', remaining=self.hints_remaining)
            message = (f"Hint: option {closest + 1} ({describe_color(self.options[closest])}) "
                       f"is the closest decoy. Don't be fooled!")
            self._set_status(message, Severity.INFO)
            game_logger.log_game_event(
                self.game_id, 'hint_used',
                hints_remaining=self.hints_remaining, decoy_index=closest
            )
            return ActionResult('hint', ActionOutcome.HINT, message, Severity.INFO, events)

    def use_help(self) -> ActionResult:
        """Spend a help charge to knock out one wrong option."""
        with self._command('help') as events:
            if self.is_animating:
                return self._ignored('help')
            if self.game_over:
                return ActionResult('help', ActionOutcome.EXHAUSTED,
                                    MESSAGE_GAME_IS_OVER, Severity.WARNING, events)
            if self.help_remaining <= 0:
                self._set_status(STATUS_NO_HELP, Severity.WARNING)
                return ActionResult('help', ActionOutcome.EXHAUSTED,
                                    STATUS_NO_HELP, Severity.WARNING, events)

            candidates = [i for i, c in enumerate(self.options)
                          if c != self.target_color and c not in self.eliminated_options]
            if not candidates:
                self._set_status(STATUS_NOTHING_TO_ELIMINATE, Severity.WARNING)
                return ActionResult('help', ActionOutcome.EXHAUSTED,
                                    STATUS_NOTHING_TO_ELIMINATE, Severity.WARNING, events)

            self.help_remaining -= 1
            index = self.rng.choice(candidates)
            self.eliminated_options.add(self.options[index])
            self._emit('help_changed', remaining=self.help_remaining)
            self._emit('option_eliminated', index=index)
            self._set_status(STATUS_HELP_USED, Severity.INFO)
            game_logger.log_game_event(
                self.game_id, 'help_used',
                help_remaining=self.help_remaining, eliminated_index=index
            )
            return ActionResult('help', ActionOutcome.HELP,
                                STATUS_HELP_USED, Severity.INFO, events)

    def reset_game(self) -> ActionResult:
        """Start over: full counters, score 0, fresh round. Cancels a pending advance."""
        with self._command('new_game') as events:
            self._cancel_pending()
            self._round_token += 1

            self.score = 0
            self.lives_remaining = self.settings.max_lives
            self.hints_remaining = self.settings.max_hints
            self.help_remaining = self.settings.max_help
            self.eliminated_options.clear()
            self.game_over = False
            self.is_animating = False
            self.phase = GamePhase.PLAYING
            self.round_number = 0

            self._emit('score_changed', score=self.score)
            self._emit('lives_changed',
                       remaining=self.lives_remaining, maximum=self.settings.max_lives)
            self._emit('hints_changed', remaining=self.hints_remaining)
            self._emit('help_changed', remaining=self.help_remaining)

            self.new_round()
            game_logger.log_game_event(
                self.game_id, 'game_started',
                policy=self.settings.policy.value, max_lives=self.settings.max_lives
            )
            return ActionResult('new_game', ActionOutcome.NEW_GAME,
                                self.status, self.status_severity, events)

    # ------------------------------------------------------------------
    # Round lifecycle
    # ------------------------------------------------------------------

    def new_round(self) -> None:
        """Pick a new target, regenerate the options and wait for a guess."""
        with self._lock:
            if self.game_over:
                return

            # A generation failure leaves the previous round untouched
            target = self.generator.pick_target(list(self.options))
            options = self.generator.generate_options(target)

            self.target_color = target
            self.options = options
            self.eliminated_options.clear()
            self.round_number += 1
            # Clears the reveal guard set by a correct guess
            self.is_animating = False
            self.phase = GamePhase.ROUND_ACTIVE
            self._emit('target_changed', color=self.target_color)
            self._emit('options_changed', colors=list(self.options))
            self._set_status(STATUS_AWAITING_GUESS, Severity.INFO)
            game_logger.log_game_event(
                self.game_id, 'round_started',
                round=self.round_number, target=self.target_color.hex
            )

    def _schedule_next_round(self) -> None:
        token = self._round_token
        self._cancel_pending()
        self._pending_task = self.scheduler.schedule(
            self.settings.reveal_delay_seconds, lambda: self._advance_round(token)
        )

    def _advance_round(self, token: int) -> None:
        with self._lock:
            # A reset or close since scheduling makes this callback stale
            if self.closed or token != self._round_token or self.phase != GamePhase.ROUND_RESOLVED:
                return
            self._pending_task = None
            self.new_round()

    def _cancel_pending(self) -> None:
        if self._pending_task is not None:
            self._pending_task.cancel()
            self._pending_task = None

    def close(self) -> None:
        """Cancel timers; the session accepts no further scheduled work."""
        with self._lock:
            self._cancel_pending()
            self._round_token += 1
            self.closed = True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def option_at(self, index: int) -> Optional[Color]:
        with self._lock:
            if 0 <= index < len(self.options):
                return self.options[index]
            return None

    @property
    def options_disabled(self) -> bool:
        return self.game_over

    @property
    def has_pending_round(self) -> bool:
        task = self._pending_task
        return task is not None and not task.cancelled and not task.done

    def snapshot(self) -> GameState:
        """Client-facing copy of the current state."""
        with self._lock:
            eliminated_indices = [i for i, c in enumerate(self.options)
                                  if c in self.eliminated_options]
            return GameState(
                game_id=self.game_id,
                phase=self.phase.value,
                round_number=self.round_number,
                score=self.score,
                lives_remaining=self.lives_remaining,
                max_lives=self.settings.max_lives,
                hints_remaining=self.hints_remaining,
                max_hints=self.settings.max_hints,
                help_remaining=self.help_remaining,
                max_help=self.settings.max_help,
                target_color=self.target_color.hex if self.target_color else None,
                options=[c.hex for c in self.options],
                eliminated_options=[self.options[i].hex for i in eliminated_indices],
                eliminated_indices=eliminated_indices,
                options_disabled=self.options_disabled,
                is_animating=self.is_animating,
                game_over=self.game_over,
                status=self.status,
                status_severity=self.status_severity.value,
                policy=self.settings.policy.value,
            )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @contextmanager
    def _command(self, action: str):
        with self._lock:
            self.last_activity = time.time()
            outer = self._events
            events: List[GameEvent] = []
            self._events = events
            try:
                yield events
            finally:
                self._events = outer

    def _ignored(self, action: str) -> ActionResult:
        return ActionResult(action, ActionOutcome.IGNORED)

    def _set_status(self, message: str, severity: Severity) -> None:
        self.status = message
        self.status_severity = severity
        self._emit('status', message=message, severity=severity.value)

    def _emit(self, name: str, **kwargs) -> None:
        payload = {key: _jsonable(value) for key, value in kwargs.items()}
        if self._events is not None:
            self._events.append(GameEvent(name, payload))
        try:
            getattr(self.listener, f"on_{name}")(**kwargs)
        except Exception as e:
            # Listener failures are logged, never raised into game logic
            game_logger.log_error(None, e, f"notify_{name}", self.game_id)


def _jsonable(value):
    if isinstance(value, Color):
        return value.hex
    if isinstance(value, (list, tuple)) and value and isinstance(value[0], Color):
        return [c.hex for c in value]
    return value
