"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables from config.env (if present next to this module)
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.env'))


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = _env_bool('DEBUG', 'False')
    TESTING = False

    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 5000))

    # Game Settings
    MAX_LIVES = int(os.getenv('MAX_LIVES', 5))
    MAX_HINTS = int(os.getenv('MAX_HINTS', 3))
    MAX_HELP = int(os.getenv('MAX_HELP', 3))
    VARIATION_AMOUNT = int(os.getenv('VARIATION_AMOUNT', 76))
    MIN_CONTRAST_DISTANCE = float(os.getenv('MIN_CONTRAST_DISTANCE', 150))
    REVEAL_DELAY_MS = int(os.getenv('REVEAL_DELAY_MS', 1000))
    GENERATION_POLICY = os.getenv('GENERATION_POLICY', 'similar')
    TARGET_SOURCE = os.getenv('TARGET_SOURCE', '')  # empty = policy default
    EXCLUDE_ON_SCREEN = _env_bool('EXCLUDE_ON_SCREEN', 'True')

    # Session Housekeeping
    SESSION_IDLE_TIMEOUT_SECONDS = int(os.getenv('SESSION_IDLE_TIMEOUT_SECONDS', 1800))
    CLEANUP_INTERVAL_SECONDS = int(os.getenv('CLEANUP_INTERVAL_SECONDS', 60))

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    REVEAL_DELAY_MS = 0


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
