"""
Unit tests for validator settings and YAML configuration loading.
"""

import pytest

from dataformat_config.config import (
    DEFAULT_RESOURCES_DIR,
    DEFAULT_STAGE_GROUP,
    MAX_OVERRUN_LIMIT,
    ValidatorSettings,
    clear_settings_cache,
    get_settings,
    load_format_settings,
    load_yaml_file,
)
from dataformat_config.exceptions import UnsupportedDataFormatError
from dataformat_config.formats import DataFormat, LogMode, LogSettings


class TestValidatorSettings:
    """Tests for the ValidatorSettings dataclass."""

    def test_defaults(self):
        settings = ValidatorSettings()
        assert settings.resources_dir == DEFAULT_RESOURCES_DIR
        assert settings.overrun_limit == MAX_OVERRUN_LIMIT
        assert settings.stage_group == DEFAULT_STAGE_GROUP
        assert settings.validate() == []

    def test_validate_reports_all_errors(self):
        errors = ValidatorSettings(resources_dir="", overrun_limit=0, stage_group="").validate()
        assert len(errors) == 3
        assert any("overrun_limit" in e for e in errors)

    def test_round_trip_dict(self):
        settings = ValidatorSettings(resources_dir="/srv/res", overrun_limit=10, stage_group="G")
        assert ValidatorSettings.from_dict(settings.to_dict()) == settings

    def test_from_dict_validator_section(self):
        settings = ValidatorSettings.from_dict(
            {"validator": {"resources_dir": "protos", "overrun_limit": "512"}}
        )
        assert settings.resources_dir == "protos"
        assert settings.overrun_limit == 512
        assert settings.stage_group == DEFAULT_STAGE_GROUP

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("DATAFORMAT_RESOURCES_DIR", "/etc/res")
        monkeypatch.setenv("DATAFORMAT_OVERRUN_LIMIT", "4096")
        monkeypatch.setenv("DATAFORMAT_STAGE_GROUP", "STAGE")

        settings = ValidatorSettings.from_env()
        assert settings.resources_dir == "/etc/res"
        assert settings.overrun_limit == 4096
        assert settings.stage_group == "STAGE"

    def test_from_env_bad_int_uses_default(self, monkeypatch):
        monkeypatch.setenv("DATAFORMAT_OVERRUN_LIMIT", "lots")
        assert ValidatorSettings.from_env().overrun_limit == MAX_OVERRUN_LIMIT


class TestGetSettings:
    """Tests for cached settings loading."""

    def test_reads_yaml(self, tmp_path):
        config = tmp_path / "dataformat.yaml"
        config.write_text("validator:\n  resources_dir: protos\n  overrun_limit: 2048\n")

        settings = get_settings(str(config))
        assert settings.resources_dir == "protos"
        assert settings.overrun_limit == 2048

    def test_cached(self, tmp_path):
        config = tmp_path / "dataformat.yaml"
        config.write_text("validator:\n  stage_group: FIRST\n")
        first = get_settings(str(config))

        config.write_text("validator:\n  stage_group: SECOND\n")
        assert get_settings(str(config)) is first

        clear_settings_cache()
        assert get_settings(str(config)).stage_group == "SECOND"

    def test_missing_file_uses_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DATAFORMAT_STAGE_GROUP", "FROM_ENV")
        settings = get_settings(str(tmp_path / "absent.yaml"))
        assert settings.stage_group == "FROM_ENV"

    def test_invalid_yaml_falls_back(self, tmp_path, caplog):
        config = tmp_path / "dataformat.yaml"
        config.write_text("validator: [unclosed\n")

        with caplog.at_level("WARNING"):
            settings = get_settings(str(config))

        assert settings == ValidatorSettings()
        assert "Falling back" in caplog.text


class TestLoadYamlFile:
    """Tests for YAML file loading."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_yaml_file(tmp_path / "nope.yaml")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_yaml_file(path) == {}

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError, match="Expected a mapping"):
            load_yaml_file(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("key: [unclosed\n")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_yaml_file(path)


class TestLoadFormatSettings:
    """Tests for loading FormatSettings from YAML."""

    def test_flat_document(self, tmp_path):
        path = tmp_path / "format.yaml"
        path.write_text(
            "data_format: LOG\n"
            "charset: ISO-8859-1\n"
            "log_mode: REGEX\n"
            "regex: '^(\\S+) (.*)$'\n"
            "field_path_to_group:\n"
            "  - {field_path: /host, group: 1}\n"
        )
        settings = load_format_settings(path)

        assert settings.data_format == DataFormat.LOG
        assert settings.charset == "ISO-8859-1"
        assert isinstance(settings.format_settings, LogSettings)
        assert settings.format_settings.log_mode == LogMode.REGEX
        assert settings.format_settings.regex == r"^(\S+) (.*)$"
        assert settings.format_settings.field_path_to_group_map() == {"/host": 1}

    def test_nested_document(self, tmp_path):
        path = tmp_path / "format.yaml"
        path.write_text("data_format_config:\n  data_format: TEXT\n  text_max_line_len: 80\n")
        settings = load_format_settings(path)

        assert settings.data_format == DataFormat.TEXT
        assert settings.format_settings.max_line_len == 80

    def test_unknown_format(self, tmp_path):
        path = tmp_path / "format.yaml"
        path.write_text("data_format: PARQUET\n")
        with pytest.raises(UnsupportedDataFormatError):
            load_format_settings(path)
