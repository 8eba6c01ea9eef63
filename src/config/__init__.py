"""
Configuration module for the outfit scoring engine.

Usage:
    from config import get_settings, DEFAULT_SCORING_CONFIG

    settings = get_settings()
    scoring_config = settings.scoring_config()
"""

from config.constants import DEFAULT_SCORING_CONFIG, DEFAULT_WEIGHTS, ScoringConfig
from config.settings import Settings, get_settings

__all__ = [
    "DEFAULT_SCORING_CONFIG",
    "DEFAULT_WEIGHTS",
    "ScoringConfig",
    "Settings",
    "get_settings",
]
