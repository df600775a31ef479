"""
Services Package

Contains all business logic and service classes.
"""

from .color_generator import ColorSetGenerator
from .game_service import GameService, get_game_service, initialize_game_service
from .game_session import GameSession
from .listeners import GameListener, SocketIOListener, game_room
from .scheduler import ManualScheduler, ScheduledTask, Scheduler, ThreadingScheduler

__all__ = [
    'ColorSetGenerator',
    'GameService', 'get_game_service', 'initialize_game_service',
    'GameSession',
    'GameListener', 'SocketIOListener', 'game_room',
    'ManualScheduler', 'ScheduledTask', 'Scheduler', 'ThreadingScheduler'
]
