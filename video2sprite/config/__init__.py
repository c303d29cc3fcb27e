"""Configuration management for video2sprite."""

from video2sprite.config.manager import ConfigManager, get_config, get_config_manager
from video2sprite.config.models import (
    MatteSettings,
    OutputSettings,
    SamplingSettings,
    Video2SpriteConfig,
)

__all__ = [
    # Manager
    "ConfigManager",
    "get_config",
    "get_config_manager",
    # Models
    "MatteSettings",
    "OutputSettings",
    "SamplingSettings",
    "Video2SpriteConfig",
]
