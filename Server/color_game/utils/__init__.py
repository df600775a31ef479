"""
Utilities Package

Contains color math, helper functions and the game logger.
"""

from .color_math import (
    clamp, hex_to_rgb, rgb_to_hex, distance, color_name,
    nearest_color_name, describe_color, coerce_color
)
from .helpers import get_user_identity, key_to_option_index
from .game_logger import game_logger

__all__ = [
    'clamp', 'hex_to_rgb', 'rgb_to_hex', 'distance', 'color_name',
    'nearest_color_name', 'describe_color', 'coerce_color',
    'get_user_identity', 'key_to_option_index', 'game_logger'
]
