"""
Pytest configuration and shared fixtures for unit tests.
"""

import pytest

from dataformat_config.config import clear_settings_cache
from dataformat_config.formats import (
    DataFormat,
    FormatSettings,
    ProtobufSettings,
)

DESCRIPTOR_FILE = "events.desc"


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """
    Keep every test independent of the host environment.

    Clears the cached ValidatorSettings and removes DATAFORMAT_* variables
    so get_settings() always starts from defaults.
    """
    for key in ("DATAFORMAT_RESOURCES_DIR", "DATAFORMAT_OVERRUN_LIMIT", "DATAFORMAT_STAGE_GROUP"):
        monkeypatch.delenv(key, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def resources_dir(tmp_path):
    """Resources directory holding a Protobuf descriptor file."""
    resources = tmp_path / "resources"
    resources.mkdir()
    (resources / DESCRIPTOR_FILE).write_bytes(b"\x0a\x0bevents.proto")
    return resources


@pytest.fixture
def valid_settings():
    """
    Factory for fully valid default settings of any format.

    PROTOBUF has no usable defaults, so it gets the descriptor file from
    the resources_dir fixture and a message type.
    """

    def _make(data_format: DataFormat, **kwargs) -> FormatSettings:
        if data_format == DataFormat.PROTOBUF:
            return FormatSettings(
                format_settings=ProtobufSettings(
                    descriptor_file=DESCRIPTOR_FILE,
                    message_type="events.PageView",
                ),
                **kwargs,
            )
        return FormatSettings.for_format(data_format, **kwargs)

    return _make
