"""
Shared fixtures for integration tests.

Provides:
- An isolated working directory with a resources directory
- A helper for writing YAML format configs
"""

import pytest

from dataformat_config.config import clear_settings_cache

# =============================================================================
# ENVIRONMENT FIXTURES
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_workdir(tmp_path, monkeypatch):
    """
    Run each test in an empty working directory with a clean environment.

    get_settings() looks for dataformat.yaml in the working directory, so
    moving into tmp_path keeps a developer's local file out of the tests.
    """
    for key in ("DATAFORMAT_RESOURCES_DIR", "DATAFORMAT_OVERRUN_LIMIT", "DATAFORMAT_STAGE_GROUP"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    clear_settings_cache()
    yield tmp_path
    clear_settings_cache()


@pytest.fixture
def resources_dir(tmp_path):
    """Resources directory with a Protobuf descriptor file."""
    resources = tmp_path / "resources"
    resources.mkdir()
    (resources / "events.desc").write_bytes(b"\x0a\x0bevents.proto")
    return resources


@pytest.fixture
def write_config(tmp_path):
    """Write YAML text to a config file and return its path."""

    def _write(text: str, name: str = "format.yaml"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
