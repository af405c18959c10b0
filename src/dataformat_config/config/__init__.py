"""Configuration module."""

from .constants import (
    DEFAULT_CHARSET,
    DEFAULT_RESOURCES_DIR,
    DEFAULT_STAGE_GROUP,
    MAX_OVERRUN_LIMIT,
    UNBOUNDED_DATA_LEN,
)
from .loader import load_format_settings, load_yaml_file
from .settings import ValidatorSettings, clear_settings_cache, get_settings

__all__ = [
    # Defaults
    "DEFAULT_CHARSET",
    "DEFAULT_RESOURCES_DIR",
    "DEFAULT_STAGE_GROUP",
    "MAX_OVERRUN_LIMIT",
    "UNBOUNDED_DATA_LEN",
    # Settings
    "ValidatorSettings",
    "get_settings",
    "clear_settings_cache",
    # Config loading
    "load_yaml_file",
    "load_format_settings",
]
