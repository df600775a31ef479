"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Game rules, palette and per-session settings
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import (
    BASE_PALETTE, NAMED_COLORS, OPTION_COUNT, GameSettings,
    validate_palette_integrity, get_palette_statistics
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Game rules
    'BASE_PALETTE', 'NAMED_COLORS', 'OPTION_COUNT', 'GameSettings',
    'validate_palette_integrity', 'get_palette_statistics'
]
