"""
YAML configuration loader.

Loads validator settings and data format settings from YAML files.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Any, Union

import yaml

if TYPE_CHECKING:
    from ..formats.settings import FormatSettings


def load_yaml_file(file_path: Union[str, Path]) -> dict[str, Any]:
    """
    Read a YAML file containing a single mapping.

    Args:
        file_path: Path to the YAML file

    Returns:
        Parsed mapping (empty dict for an empty file)

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the file is not valid YAML or not a mapping
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(
            f"Expected a mapping at the top level of {path}, got {type(data).__name__}"
        )
    return data


def load_format_settings(file_path: Union[str, Path]) -> "FormatSettings":
    """
    Load data format settings from a YAML file.

    The file holds the flat settings mapping, optionally nested under a
    ``data_format_config`` key:

        data_format: LOG
        charset: UTF-8
        log_mode: REGEX
        regex: '^(\\S+) (\\S+)$'
        field_path_to_group:
          - {field_path: /host, group: 1}

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the YAML is invalid or a setting has a bad value
        UnsupportedDataFormatError: If data_format is missing or unknown
    """
    from ..formats.settings import FormatSettings

    data = load_yaml_file(file_path)
    return FormatSettings.from_dict(data.get("data_format_config", data))
