"""
Unit tests for data format enumerations and settings variants.
"""

import pytest

from dataformat_config.config import DEFAULT_CHARSET
from dataformat_config.exceptions import UnsupportedDataFormatError
from dataformat_config.formats import (
    FORMAT_SETTINGS_TYPES,
    AvroSettings,
    Compression,
    CsvHeader,
    CsvMode,
    CsvRecordType,
    DataFormat,
    DelimitedSettings,
    FormatSettings,
    JsonMode,
    JsonSettings,
    LogMode,
    LogSettings,
    OnParseError,
    ProtobufSettings,
    RegexGroupMapping,
    SdcJsonSettings,
    TextSettings,
    XmlSettings,
    coerce_enum,
)


class TestCoerceEnum:
    """Tests for enum coercion from configuration values."""

    def test_member_passes_through(self):
        assert coerce_enum(LogMode, LogMode.GROK) is LogMode.GROK

    def test_name_is_case_insensitive(self):
        assert coerce_enum(LogMode, "grok") is LogMode.GROK
        assert coerce_enum(CsvMode, " Excel ") is CsvMode.EXCEL

    def test_invalid_name_raises(self):
        with pytest.raises(ValueError, match="Invalid LogMode"):
            coerce_enum(LogMode, "SYSLOG")

    def test_non_string_raises(self):
        with pytest.raises(ValueError):
            coerce_enum(DataFormat, 3)


class TestVariantDefaults:
    """Tests for per-format default values."""

    def test_every_format_has_a_variant(self):
        """Each DataFormat maps to exactly one settings class."""
        assert set(FORMAT_SETTINGS_TYPES) == set(DataFormat)
        for data_format, cls in FORMAT_SETTINGS_TYPES.items():
            assert cls.data_format == data_format

    def test_text_defaults(self):
        assert TextSettings().max_line_len == 1024

    def test_json_defaults(self):
        settings = JsonSettings()
        assert settings.content == JsonMode.MULTIPLE_OBJECTS
        assert settings.max_object_len == 4096

    def test_delimited_defaults(self):
        settings = DelimitedSettings()
        assert settings.file_format == CsvMode.CSV
        assert settings.header == CsvHeader.NO_HEADER
        assert settings.max_object_len == 1024
        assert settings.custom_delimiter == "|"
        assert settings.custom_escape == "\\"
        assert settings.custom_quote == '"'
        assert settings.record_type == CsvRecordType.LIST_MAP
        assert settings.skip_start_lines == 0

    def test_xml_defaults(self):
        settings = XmlSettings()
        assert settings.record_element == ""
        assert settings.max_object_len == 4096

    def test_log_defaults(self):
        settings = LogSettings()
        assert settings.log_mode == LogMode.COMMON_LOG_FORMAT
        assert settings.max_line_len == 1024
        assert settings.on_parse_error == OnParseError.ERROR
        assert settings.max_stack_trace_lines == 50
        assert settings.custom_log_format == '%h %l %u %t "%r" %>s %b'
        assert settings.grok_pattern == "%{COMMONAPACHELOG}"
        assert settings.field_path_to_group == []

    def test_protobuf_defaults(self):
        settings = ProtobufSettings()
        assert settings.descriptor_file == ""
        assert settings.message_type == ""
        assert settings.is_delimited is True

    def test_avro_defaults(self):
        settings = AvroSettings()
        assert settings.schema_in_message is True
        assert settings.avro_schema == ""


class TestDelimitedSettings:
    """Tests for delimited settings checks."""

    def test_mode_names_are_coerced(self):
        settings = DelimitedSettings(file_format="custom", header="WITH_HEADER", record_type="list")
        assert settings.file_format == CsvMode.CUSTOM
        assert settings.header == CsvHeader.WITH_HEADER
        assert settings.record_type == CsvRecordType.LIST

    @pytest.mark.parametrize("name", ["custom_delimiter", "custom_escape", "custom_quote"])
    def test_multi_character_rejected(self, name):
        with pytest.raises(ValueError, match=name):
            DelimitedSettings(**{name: "||"})

    def test_empty_character_rejected(self):
        with pytest.raises(ValueError, match="custom_delimiter"):
            DelimitedSettings(custom_delimiter="")


class TestLogSettings:
    """Tests for log settings helpers."""

    def test_field_path_mapping_last_wins(self):
        """Duplicate field paths keep the last group."""
        settings = LogSettings(
            log_mode=LogMode.REGEX,
            field_path_to_group=[("/a", 1), ("/a", 2)],
        )
        assert settings.field_path_to_group_map() == {"/a": 2}

    def test_field_path_mapping_accepts_dicts(self):
        settings = LogSettings(
            field_path_to_group=[
                {"field_path": "/host", "group": "1"},
                RegexGroupMapping("/status", 2),
            ]
        )
        assert settings.field_path_to_group_map() == {"/host": 1, "/status": 2}

    @pytest.mark.parametrize(
        "entry",
        [
            {"field_path": "/a"},
            {"group": 1},
            {"field_path": "/a", "group": "one"},
            {"field_path": "/a", "group": None},
            {"field_path": "/a", "group": True},
            {"field_path": None, "group": 1},
            ("/a",),
            "/a",
            5,
        ],
    )
    def test_malformed_mapping_entry(self, entry):
        """Bad entries are reported as ValueError naming the entry."""
        with pytest.raises(ValueError, match="Invalid field_path_to_group entry"):
            RegexGroupMapping.from_value(entry)

    def test_mapping_must_be_a_list(self):
        with pytest.raises(ValueError, match="field_path_to_group must be a list"):
            LogSettings(field_path_to_group=5)

    def test_effective_log4j_format_default(self):
        """The custom layout is ignored unless enabled."""
        settings = LogSettings(log4j_custom_log_format="%m%n")
        assert settings.effective_log4j_format == "%r [%t] %-5p %c %x - %m%n"

    def test_effective_log4j_format_custom(self):
        settings = LogSettings(
            enable_log4j_custom_log_format=True,
            log4j_custom_log_format="%d %p %m%n",
        )
        assert settings.effective_log4j_format == "%d %p %m%n"

    def test_invalid_log_mode_rejected(self):
        with pytest.raises(ValueError):
            LogSettings(log_mode="SYSLOG")


class TestNumericFields:
    """Numeric settings must be integers."""

    @pytest.mark.parametrize(
        "make_settings",
        [
            lambda v: TextSettings(max_line_len=v),
            lambda v: JsonSettings(max_object_len=v),
            lambda v: DelimitedSettings(max_object_len=v),
            lambda v: DelimitedSettings(skip_start_lines=v),
            lambda v: XmlSettings(max_object_len=v),
            lambda v: LogSettings(max_line_len=v),
            lambda v: LogSettings(max_stack_trace_lines=v),
        ],
    )
    @pytest.mark.parametrize("value", [None, "10", 1.5, True])
    def test_non_integer_rejected(self, make_settings, value):
        with pytest.raises(ValueError, match="must be an integer"):
            make_settings(value)

    def test_null_bound_from_dict(self):
        with pytest.raises(ValueError, match="max_line_len"):
            FormatSettings.from_dict({"data_format": "TEXT", "text_max_line_len": None})


class TestFormatSettings:
    """Tests for the FormatSettings boundary record."""

    def test_universal_defaults(self):
        settings = FormatSettings(format_settings=TextSettings())
        assert settings.charset == DEFAULT_CHARSET
        assert settings.remove_ctrl_chars is False
        assert settings.compression == Compression.NONE
        assert settings.file_pattern_in_archive == "*"
        assert settings.data_format == DataFormat.TEXT

    @pytest.mark.parametrize("data_format", list(DataFormat))
    def test_for_format(self, data_format):
        settings = FormatSettings.for_format(data_format)
        assert settings.data_format == data_format
        assert isinstance(settings.format_settings, FORMAT_SETTINGS_TYPES[data_format])

    def test_for_format_by_name(self):
        settings = FormatSettings.for_format("sdc_json", charset="latin-1")
        assert isinstance(settings.format_settings, SdcJsonSettings)
        assert settings.charset == "latin-1"

    def test_for_format_unknown(self):
        with pytest.raises(UnsupportedDataFormatError, match="PARQUET"):
            FormatSettings.for_format("PARQUET")

    def test_unknown_variant_has_no_format(self):
        settings = FormatSettings(format_settings=object())
        assert settings.data_format is None


class TestFormatSettingsFromDict:
    """Tests for converting flat configuration mappings."""

    def test_picks_live_fields_only(self):
        """Keys for other formats are ignored."""
        settings = FormatSettings.from_dict(
            {
                "data_format": "XML",
                "charset": "UTF-16",
                "xml_record_element": "row",
                "xml_max_object_len": 8192,
                "text_max_line_len": 0,
                "regex": "(",
            }
        )
        assert settings.format_settings == XmlSettings(record_element="row", max_object_len=8192)
        assert settings.charset == "UTF-16"

    def test_log_settings(self):
        settings = FormatSettings.from_dict(
            {
                "data_format": "LOG",
                "log_mode": "REGEX",
                "log_max_object_len": 2048,
                "regex": r"^(\S+) (.*)$",
                "field_path_to_group": [
                    {"field_path": "/host", "group": 1},
                    {"field_path": "/message", "group": 2},
                ],
                "on_parse_error": "include_as_stack_trace",
                "max_stack_trace_lines": 10,
            }
        )
        log = settings.format_settings
        assert isinstance(log, LogSettings)
        assert log.log_mode == LogMode.REGEX
        assert log.max_line_len == 2048
        assert log.field_path_to_group_map() == {"/host": 1, "/message": 2}
        assert log.on_parse_error == OnParseError.INCLUDE_AS_STACK_TRACE
        assert log.max_stack_trace_lines == 10

    def test_delimited_settings(self):
        settings = FormatSettings.from_dict(
            {
                "data_format": "DELIMITED",
                "csv_file_format": "CUSTOM",
                "csv_custom_delimiter": ";",
                "csv_skip_start_lines": 2,
                "compression": "archive",
                "file_pattern_in_archive": "*.csv",
            }
        )
        assert settings.format_settings.file_format == CsvMode.CUSTOM
        assert settings.format_settings.custom_delimiter == ";"
        assert settings.format_settings.skip_start_lines == 2
        assert settings.compression == Compression.ARCHIVE
        assert settings.file_pattern_in_archive == "*.csv"

    def test_protobuf_settings(self):
        settings = FormatSettings.from_dict(
            {
                "data_format": "PROTOBUF",
                "proto_descriptor_file": "events.desc",
                "message_type": "events.PageView",
                "is_delimited": False,
            }
        )
        assert settings.format_settings == ProtobufSettings(
            descriptor_file="events.desc",
            message_type="events.PageView",
            is_delimited=False,
        )

    def test_missing_data_format(self):
        with pytest.raises(UnsupportedDataFormatError):
            FormatSettings.from_dict({"charset": "UTF-8"})

    def test_unknown_data_format(self):
        with pytest.raises(UnsupportedDataFormatError) as exc_info:
            FormatSettings.from_dict({"data_format": "PARQUET"})
        assert exc_info.value.data_format == "PARQUET"
        assert "TEXT" in exc_info.value.available_formats

    def test_invalid_mode_name(self):
        with pytest.raises(ValueError, match="JsonMode"):
            FormatSettings.from_dict({"data_format": "JSON", "json_content": "LINES"})
