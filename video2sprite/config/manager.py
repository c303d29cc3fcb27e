"""
Configuration management for video2sprite.

This module handles loading, validating, and saving configuration as YAML.
"""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from ..utils import ConfigurationError, get_logger
from .models import Video2SpriteConfig

logger = get_logger(__name__)


class ConfigManager:
    """Manages video2sprite configuration."""

    DEFAULT_CONFIG_LOCATIONS = [
        Path.home() / ".video2sprite.yaml",
        Path.home() / ".config" / "video2sprite" / "config.yaml",
        Path.cwd() / ".video2sprite.yaml",
    ]

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Optional path to configuration file
        """
        self.config_path = config_path
        self._config: Optional[Video2SpriteConfig] = None

    @property
    def config(self) -> Video2SpriteConfig:
        """
        Get current configuration, loading it if necessary.

        Raises:
            ConfigurationError: If configuration cannot be loaded
        """
        if self._config is None:
            self._config = self.load()
        return self._config

    def load(self, config_path: Optional[Path] = None) -> Video2SpriteConfig:
        """
        Load configuration from file or create default.

        Args:
            config_path: Optional path to configuration file

        Returns:
            Loaded configuration

        Raises:
            ConfigurationError: If configuration file is missing or invalid
        """
        path = config_path or self.config_path

        if path:
            if not path.exists():
                raise ConfigurationError(f"Configuration file not found: {path}")
            self._config = self._load_from_file(path)
            return self._config

        for default_path in self.DEFAULT_CONFIG_LOCATIONS:
            if default_path.exists():
                logger.info(f"Loading configuration from {default_path}")
                self._config = self._load_from_file(default_path)
                return self._config

        logger.debug("No configuration file found, using defaults")
        self._config = Video2SpriteConfig()
        return self._config

    def _load_from_file(self, path: Path) -> Video2SpriteConfig:
        """
        Load configuration from YAML file.

        Raises:
            ConfigurationError: If file cannot be loaded or parsed
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Failed to read configuration: {e}") from e

        if data is None:
            raise ConfigurationError(f"Configuration file is empty: {path}")

        try:
            config = Video2SpriteConfig(**data)
        except (ValidationError, TypeError) as e:
            raise ConfigurationError(f"Invalid configuration in {path}: {e}") from e

        logger.debug(f"Successfully loaded configuration from {path}")
        return config

    def save(
        self, path: Optional[Path] = None, config: Optional[Video2SpriteConfig] = None
    ) -> None:
        """
        Save configuration to file.

        Args:
            path: Path to save configuration (uses default if None)
            config: Configuration to save (uses current if None)

        Raises:
            ConfigurationError: If configuration cannot be saved
        """
        cfg = config or self.config
        save_path = path or self.config_path or self.DEFAULT_CONFIG_LOCATIONS[0]

        try:
            save_path.parent.mkdir(parents=True, exist_ok=True)
            data = cfg.model_dump(mode="json")
            with open(save_path, "w", encoding="utf-8") as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False, indent=2)
        except OSError as e:
            raise ConfigurationError(f"Failed to save configuration: {e}") from e

        logger.info(f"Configuration saved to {save_path}")

    def init_default_config(self, path: Optional[Path] = None, force: bool = False) -> Path:
        """
        Initialize default configuration file.

        Args:
            path: Path to create configuration file (uses default if None)
            force: Overwrite existing file

        Returns:
            Path to created configuration file

        Raises:
            ConfigurationError: If file already exists and force=False
        """
        target_path = path or self.DEFAULT_CONFIG_LOCATIONS[0]

        if target_path.exists() and not force:
            raise ConfigurationError(
                f"Configuration file already exists: {target_path}. Use force=True to overwrite."
            )

        self.save(target_path, Video2SpriteConfig())
        return target_path

    def reload(self) -> Video2SpriteConfig:
        """Reload configuration from file."""
        self._config = None
        return self.load()


# Global configuration manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(config_path: Optional[Path] = None) -> ConfigManager:
    """
    Get global configuration manager instance.

    Args:
        config_path: Optional path to configuration file

    Returns:
        ConfigManager instance
    """
    global _config_manager

    if _config_manager is None:
        _config_manager = ConfigManager(config_path)

    return _config_manager


def get_config(config_path: Optional[Path] = None) -> Video2SpriteConfig:
    """Get video2sprite configuration."""
    return get_config_manager(config_path).config
