"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .color import Color
from .errors import ColorGameError, InvalidColorFormat, ColorGenerationError
from .game import (
    ActionOutcome, ActionResult, GameEvent, GamePhase, GameState,
    GenerationPolicy, Severity, TargetSource
)

__all__ = [
    'Color',
    'ColorGameError', 'InvalidColorFormat', 'ColorGenerationError',
    'ActionOutcome', 'ActionResult', 'GameEvent', 'GamePhase', 'GameState',
    'GenerationPolicy', 'Severity', 'TargetSource'
]
