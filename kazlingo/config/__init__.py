"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Game rules, constants and the game registry (business logic)
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import (
    MAX_ATTEMPTS, WORD_LENGTH, DEFAULT_LEVEL, GameType, GameDefinition, GAMES,
    ANSWER_CHECKED_GAMES, get_game, find_game_by_key, default_levels, validate_word
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Game rules
    'MAX_ATTEMPTS', 'WORD_LENGTH', 'DEFAULT_LEVEL', 'GameType', 'GameDefinition', 'GAMES',
    'ANSWER_CHECKED_GAMES', 'get_game', 'find_game_by_key', 'default_levels', 'validate_word'
]
