"""Configuration management for mediascrub."""

from mediascrub.config.manager import ConfigManager, ConfigError
from mediascrub.config.defaults import DEFAULT_CONFIG

__all__ = ["ConfigManager", "ConfigError", "DEFAULT_CONFIG"]
