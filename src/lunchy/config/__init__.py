"""Configuration module."""

from lunchy.config.loader import load_config
from lunchy.config.models import ConfigError, LunchyConfig
from lunchy.config.paths import (
    PLIST_EXTENSION,
    PROFILE_FILENAME,
    get_launch_agents_path,
)

__all__ = [
    "ConfigError",
    "LunchyConfig",
    "PLIST_EXTENSION",
    "PROFILE_FILENAME",
    "get_launch_agents_path",
    "load_config",
]
