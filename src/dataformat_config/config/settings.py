"""
Validator settings and configuration management.

Supports loading from:
1. YAML configuration files (dataformat.yaml)
2. Environment variables (fallback)
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from .constants import DEFAULT_RESOURCES_DIR, DEFAULT_STAGE_GROUP, MAX_OVERRUN_LIMIT

logger = logging.getLogger(__name__)


@dataclass
class ValidatorSettings:
    """
    Host environment settings for data format validation.

    These are not format settings; they describe where the validator
    runs: the directory resources such as Protobuf descriptors are
    resolved against, the read buffer ceiling, and the group label for
    diagnostics that do not belong to a format group.
    """

    resources_dir: str = DEFAULT_RESOURCES_DIR
    overrun_limit: int = MAX_OVERRUN_LIMIT
    stage_group: str = DEFAULT_STAGE_GROUP

    def validate(self) -> list[str]:
        """Validate settings values. Returns list of errors."""
        errors = []

        if not self.resources_dir:
            errors.append("resources_dir is required")
        if self.overrun_limit < 1:
            errors.append(f"overrun_limit must be >= 1, got {self.overrun_limit}")
        if not self.stage_group:
            errors.append("stage_group is required")

        return errors

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "resources_dir": self.resources_dir,
            "overrun_limit": self.overrun_limit,
            "stage_group": self.stage_group,
        }

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "ValidatorSettings":
        """Create from configuration dictionary (e.g., from YAML)."""
        section = config.get("validator", config)
        return cls(
            resources_dir=str(section.get("resources_dir", DEFAULT_RESOURCES_DIR)),
            overrun_limit=int(section.get("overrun_limit", MAX_OVERRUN_LIMIT)),
            stage_group=section.get("stage_group", DEFAULT_STAGE_GROUP),
        )

    @classmethod
    def from_env(cls) -> "ValidatorSettings":
        """Create from environment variables."""

        def safe_int(key: str, default: int) -> int:
            """Safely parse int from env var, using default on error."""
            try:
                return int(os.environ.get(key, str(default)))
            except ValueError:
                return default

        return cls(
            resources_dir=os.environ.get("DATAFORMAT_RESOURCES_DIR", DEFAULT_RESOURCES_DIR),
            overrun_limit=safe_int("DATAFORMAT_OVERRUN_LIMIT", MAX_OVERRUN_LIMIT),
            stage_group=os.environ.get("DATAFORMAT_STAGE_GROUP", DEFAULT_STAGE_GROUP),
        )


# Default config file path
DEFAULT_CONFIG_PATH = Path("dataformat.yaml")


@lru_cache
def get_settings(config_path: Optional[str] = None) -> ValidatorSettings:
    """
    Get cached settings instance.

    Loads from a YAML config file if available, otherwise from env vars.

    Args:
        config_path: Optional path to a YAML config file

    Returns:
        ValidatorSettings instance
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    if path.exists():
        try:
            from .loader import load_yaml_file

            return ValidatorSettings.from_dict(load_yaml_file(path))
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to load settings from {path}: {e}")
            logger.warning("Falling back to environment variables")

    return ValidatorSettings.from_env()


def clear_settings_cache() -> None:
    """Clear the cached settings (useful for testing)."""
    get_settings.cache_clear()
