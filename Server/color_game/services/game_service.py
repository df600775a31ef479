"""
Game Service

Keeps the active color match sessions and routes renderer commands to them.
"""

import random
import time
from typing import Callable, Dict, Optional

from ..config.game_settings import GameSettings
from ..models.game import ActionOutcome, ActionResult, GameState
from ..utils.game_logger import game_logger
from .game_session import GameSession
from .listeners import GameListener
from .scheduler import Scheduler, ThreadingScheduler


class GameService:
    """
    Game service managing multiple game sessions.

    This class handles:
    - Session creation with per-game settings overrides
    - Command routing (guess, hint, help, new game) by game id
    - Session removal and idle-session cleanup
    """

    def __init__(self,
                 settings: Optional[GameSettings] = None,
                 scheduler: Optional[Scheduler] = None,
                 rng_factory: Optional[Callable[[], random.Random]] = None):
        self.settings = (settings or GameSettings()).validate()
        self.scheduler = scheduler or ThreadingScheduler()
        self.rng_factory = rng_factory or random.Random
        self.games: Dict[str, GameSession] = {}  # Store active games by game_id

    def create_new_game(self,
                        overrides: Optional[dict] = None,
                        listener: Optional[GameListener] = None,
                        game_id: Optional[str] = None) -> str:
        """
        Creates a new game session and plays its first round.

        Args:
            overrides: Optional rule overrides (policy, target_source, max_lives, ...)
            listener: Renderer that receives the session's updates
            game_id: Explicit id, generated when omitted

        Returns:
            str: Unique game ID for this session

        Raises:
            ValueError: If the overrides are invalid
        """
        settings = self.settings.with_overrides(overrides)
        session = GameSession(
            settings=settings,
            rng=self.rng_factory(),
            scheduler=self.scheduler,
            listener=listener,
            game_id=game_id,
        )
        self.games[session.game_id] = session
        return session.game_id

    def get_session(self, game_id: str) -> Optional[GameSession]:
        return self.games.get(game_id)

    def get_game_state(self, game_id: str) -> Optional[GameState]:
        """
        Returns the current game state for a session.

        Returns:
            GameState object or None if game not found
        """
        session = self.games.get(game_id)
        if session is None:
            return None
        return session.snapshot()

    def submit_guess(self, game_id: str, color) -> Optional[ActionResult]:
        """
        Resolves a guess for a session.

        Returns:
            ActionResult or None if game not found

        Raises:
            InvalidColorFormat: If ``color`` cannot be parsed
        """
        session = self.games.get(game_id)
        if session is None:
            return None
        return session.resolve_guess(color)

    def submit_guess_by_index(self, game_id: str, index: int) -> Optional[ActionResult]:
        """Guess the option shown at ``index``; out-of-range indexes are ignored."""
        session = self.games.get(game_id)
        if session is None:
            return None
        color = session.option_at(index)
        if color is None:
            return ActionResult("guess", ActionOutcome.IGNORED)
        return session.resolve_guess(color)

    def request_hint(self, game_id: str) -> Optional[ActionResult]:
        session = self.games.get(game_id)
        return session.use_hint() if session else None

    def request_help(self, game_id: str) -> Optional[ActionResult]:
        session = self.games.get(game_id)
        return session.use_help() if session else None

    def request_new_game(self, game_id: str) -> Optional[ActionResult]:
        session = self.games.get(game_id)
        return session.reset_game() if session else None

    def set_listener(self, game_id: str, listener: GameListener) -> bool:
        """Attach a renderer to an existing session."""
        session = self.games.get(game_id)
        if session is None:
            return False
        session.listener = listener
        return True

    def delete_game(self, game_id: str) -> bool:
        """
        Removes a game session from memory and cancels its timers.

        Returns:
            bool: True if game was deleted, False if not found
        """
        session = self.games.pop(game_id, None)
        if session is None:
            return False
        session.close()
        return True

    def cleanup_idle_games(self, max_idle_seconds: float) -> Dict:
        """
        Remove sessions with no activity for ``max_idle_seconds``.

        Returns:
            Dictionary with the count and ids of removed sessions
        """
        now = time.time()
        expired = [game_id for game_id, session in list(self.games.items())
                   if now - session.last_activity > max_idle_seconds]

        for game_id in expired:
            self.delete_game(game_id)
            game_logger.log_game_event(game_id, 'game_expired', max_idle_seconds=max_idle_seconds)

        return {
            "cleaned_count": len(expired),
            "removed_game_ids": expired
        }


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(settings: Optional[GameSettings] = None,
                            scheduler: Optional[Scheduler] = None,
                            rng_factory: Optional[Callable[[], random.Random]] = None) -> GameService:
    """Initialize the global game service instance."""
    global _game_service
    _game_service = GameService(settings, scheduler, rng_factory)
    return _game_service
