"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class _ParsableEnum(Enum):
    """Enum whose members can be looked up case-insensitively by value."""

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        choices = ', '.join(m.value for m in cls)
        raise ValueError(f"Invalid {cls.__name__} '{value}'. Must be one of: {choices}")


class GenerationPolicy(_ParsableEnum):
    """How the five distractors of a round are produced."""
    SIMILAR = "similar"
    CONTRASTING = "contrasting"
    BASIC_DISTINCT = "basic_distinct"


class TargetSource(_ParsableEnum):
    """Where the round's target color is drawn from."""
    PALETTE = "palette"
    RANDOM = "random"


class GamePhase(Enum):
    """Round lifecycle."""
    PLAYING = "PLAYING"
    ROUND_ACTIVE = "ROUND_ACTIVE"
    ROUND_RESOLVED = "ROUND_RESOLVED"
    GAME_OVER = "GAME_OVER"


class Severity(Enum):
    """Status message severity, mapped to a text color by the view."""
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class ActionOutcome(Enum):
    """Outcome of a renderer-to-core command."""
    CORRECT = "correct"
    INCORRECT = "incorrect"
    GAME_OVER = "game_over"
    HINT = "hint"
    HELP = "help"
    NEW_GAME = "new_game"
    EXHAUSTED = "exhausted"
    IGNORED = "ignored"


@dataclass
class GameEvent:
    """One core-to-renderer notification, e.g. ('lives_changed', {...})."""
    name: str
    payload: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ActionResult:
    """Descriptor returned by every session command."""
    action: str
    outcome: ActionOutcome
    message: Optional[str] = None
    severity: Optional[Severity] = None
    events: List[GameEvent] = field(default_factory=list)

    @property
    def accepted(self) -> bool:
        return self.outcome not in (ActionOutcome.IGNORED, ActionOutcome.EXHAUSTED)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "action": self.action,
            "outcome": self.outcome.value,
            "message": self.message,
            "severity": self.severity.value if self.severity else None,
            "events": [{"name": e.name, "payload": e.payload} for e in self.events],
        }


@dataclass
class GameState:
    """Client-facing snapshot of a game session."""
    game_id: str
    phase: str
    round_number: int
    score: int
    lives_remaining: int
    max_lives: int
    hints_remaining: int
    max_hints: int
    help_remaining: int
    max_help: int
    target_color: Optional[str]
    options: List[str]
    eliminated_options: List[str]
    eliminated_indices: List[int]
    options_disabled: bool
    is_animating: bool
    game_over: bool
    status: str
    status_severity: str
    policy: str = GenerationPolicy.SIMILAR.value
