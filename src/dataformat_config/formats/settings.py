"""
Per-format settings and the FormatSettings boundary record.

Each data format has its own settings dataclass holding only the fields
that are live for that format. FormatSettings pairs the universal
settings (charset, compression, ...) with exactly one of them, so the
active format is always the tag of the variant it carries.

Configuration usually arrives as one flat mapping with every field for
every format (the shape a form or config file naturally produces).
FormatSettings.from_dict() converts that shape, picking the fields for
the active format and ignoring the rest.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional, Union

from ..config.constants import (
    DEFAULT_APACHE_CUSTOM_LOG_FORMAT,
    DEFAULT_CHARSET,
    DEFAULT_CSV_DELIMITER,
    DEFAULT_CSV_ESCAPE,
    DEFAULT_CSV_MAX_OBJECT_LEN,
    DEFAULT_CSV_QUOTE,
    DEFAULT_FILE_PATTERN_IN_ARCHIVE,
    DEFAULT_GROK_PATTERN,
    DEFAULT_JSON_MAX_OBJECT_LEN,
    DEFAULT_LOG4J_CUSTOM_FORMAT,
    DEFAULT_LOG_MAX_OBJECT_LEN,
    DEFAULT_MAX_STACK_TRACE_LINES,
    DEFAULT_REGEX,
    DEFAULT_TEXT_MAX_LINE_LEN,
    DEFAULT_XML_MAX_OBJECT_LEN,
)
from ..exceptions import UnsupportedDataFormatError
from .types import (
    Compression,
    CsvHeader,
    CsvMode,
    CsvRecordType,
    DataFormat,
    JsonMode,
    LogMode,
    OnParseError,
    coerce_enum,
)


def _require_int(name: str, value: Any) -> None:
    """Reject numeric settings that are not integers (bools included)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")


# =============================================================================
# Simple Formats
# =============================================================================


@dataclass
class TextSettings:
    """Settings for line-oriented text."""

    data_format: ClassVar[DataFormat] = DataFormat.TEXT

    max_line_len: int = DEFAULT_TEXT_MAX_LINE_LEN

    def __post_init__(self):
        _require_int("max_line_len", self.max_line_len)

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "TextSettings":
        return cls(max_line_len=config.get("text_max_line_len", DEFAULT_TEXT_MAX_LINE_LEN))


@dataclass
class JsonSettings:
    """Settings for JSON documents."""

    data_format: ClassVar[DataFormat] = DataFormat.JSON

    content: JsonMode = JsonMode.MULTIPLE_OBJECTS
    max_object_len: int = DEFAULT_JSON_MAX_OBJECT_LEN

    def __post_init__(self):
        self.content = coerce_enum(JsonMode, self.content)
        _require_int("max_object_len", self.max_object_len)

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "JsonSettings":
        return cls(
            content=config.get("json_content", JsonMode.MULTIPLE_OBJECTS),
            max_object_len=config.get("json_max_object_len", DEFAULT_JSON_MAX_OBJECT_LEN),
        )


@dataclass
class DelimitedSettings:
    """
    Settings for delimited (CSV-like) data.

    The custom delimiter, escape and quote characters only apply when
    file_format is CUSTOM, but they are always carried into the parser
    factory configuration. Each must be exactly one character.
    """

    data_format: ClassVar[DataFormat] = DataFormat.DELIMITED

    file_format: CsvMode = CsvMode.CSV
    header: CsvHeader = CsvHeader.NO_HEADER
    max_object_len: int = DEFAULT_CSV_MAX_OBJECT_LEN
    custom_delimiter: str = DEFAULT_CSV_DELIMITER
    custom_escape: str = DEFAULT_CSV_ESCAPE
    custom_quote: str = DEFAULT_CSV_QUOTE
    record_type: CsvRecordType = CsvRecordType.LIST_MAP
    skip_start_lines: int = 0

    def __post_init__(self):
        """Coerce mode names and enforce single-character settings."""
        self.file_format = coerce_enum(CsvMode, self.file_format)
        self.header = coerce_enum(CsvHeader, self.header)
        self.record_type = coerce_enum(CsvRecordType, self.record_type)
        _require_int("max_object_len", self.max_object_len)
        _require_int("skip_start_lines", self.skip_start_lines)

        for name in ("custom_delimiter", "custom_escape", "custom_quote"):
            value = getattr(self, name)
            if not isinstance(value, str) or len(value) != 1:
                raise ValueError(
                    f"{name} must be a single character, got {value!r}"
                )

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "DelimitedSettings":
        return cls(
            file_format=config.get("csv_file_format", CsvMode.CSV),
            header=config.get("csv_header", CsvHeader.NO_HEADER),
            max_object_len=config.get("csv_max_object_len", DEFAULT_CSV_MAX_OBJECT_LEN),
            custom_delimiter=config.get("csv_custom_delimiter", DEFAULT_CSV_DELIMITER),
            custom_escape=config.get("csv_custom_escape", DEFAULT_CSV_ESCAPE),
            custom_quote=config.get("csv_custom_quote", DEFAULT_CSV_QUOTE),
            record_type=config.get("csv_record_type", CsvRecordType.LIST_MAP),
            skip_start_lines=config.get("csv_skip_start_lines", 0),
        )


@dataclass
class XmlSettings:
    """
    Settings for XML documents.

    An empty record_element treats the whole document as one record.
    """

    data_format: ClassVar[DataFormat] = DataFormat.XML

    record_element: str = ""
    max_object_len: int = DEFAULT_XML_MAX_OBJECT_LEN

    def __post_init__(self):
        _require_int("max_object_len", self.max_object_len)

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "XmlSettings":
        return cls(
            record_element=config.get("xml_record_element") or "",
            max_object_len=config.get("xml_max_object_len", DEFAULT_XML_MAX_OBJECT_LEN),
        )


@dataclass
class AvroSettings:
    """Settings for Avro data. The schema text is optional."""

    data_format: ClassVar[DataFormat] = DataFormat.AVRO

    schema_in_message: bool = True
    avro_schema: str = ""

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "AvroSettings":
        return cls(
            schema_in_message=config.get("schema_in_message", True),
            avro_schema=config.get("avro_schema") or "",
        )


@dataclass
class ProtobufSettings:
    """
    Settings for Protobuf data.

    descriptor_file is relative to the resources directory supplied at
    validation time.
    """

    data_format: ClassVar[DataFormat] = DataFormat.PROTOBUF

    descriptor_file: str = ""
    message_type: str = ""
    is_delimited: bool = True

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "ProtobufSettings":
        return cls(
            descriptor_file=config.get("proto_descriptor_file") or "",
            message_type=config.get("message_type") or "",
            is_delimited=config.get("is_delimited", True),
        )


@dataclass
class SdcJsonSettings:
    """SDC record JSON has no format-specific settings."""

    data_format: ClassVar[DataFormat] = DataFormat.SDC_JSON

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "SdcJsonSettings":
        return cls()


# =============================================================================
# Log Format
# =============================================================================


@dataclass
class RegexGroupMapping:
    """Maps a capture group of the log regex to a record field path."""

    field_path: str
    group: int

    @classmethod
    def from_value(cls, value: Any) -> "RegexGroupMapping":
        """Create from a mapping, a (field_path, group) pair, or an instance."""
        if isinstance(value, cls):
            return value
        try:
            if isinstance(value, dict):
                field_path, group = value["field_path"], value["group"]
            else:
                field_path, group = value
            if not isinstance(field_path, str):
                raise TypeError("field_path must be a string")
            if isinstance(group, bool):
                raise TypeError("group must be a number")
            return cls(field_path=field_path, group=int(group))
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid field_path_to_group entry {value!r}: {e}") from e


@dataclass
class LogSettings:
    """
    Settings for log files.

    Only the fields for the active log_mode are live; the others keep
    their defaults and are ignored by validation.
    """

    data_format: ClassVar[DataFormat] = DataFormat.LOG

    log_mode: LogMode = LogMode.COMMON_LOG_FORMAT
    max_line_len: int = DEFAULT_LOG_MAX_OBJECT_LEN
    retain_original_line: bool = False
    custom_log_format: str = DEFAULT_APACHE_CUSTOM_LOG_FORMAT
    regex: str = DEFAULT_REGEX
    field_path_to_group: list[RegexGroupMapping] = field(default_factory=list)
    grok_pattern_definition: str = ""
    grok_pattern: str = DEFAULT_GROK_PATTERN
    on_parse_error: OnParseError = OnParseError.ERROR
    max_stack_trace_lines: int = DEFAULT_MAX_STACK_TRACE_LINES
    enable_log4j_custom_log_format: bool = False
    log4j_custom_log_format: str = DEFAULT_LOG4J_CUSTOM_FORMAT

    def __post_init__(self):
        self.log_mode = coerce_enum(LogMode, self.log_mode)
        self.on_parse_error = coerce_enum(OnParseError, self.on_parse_error)
        _require_int("max_line_len", self.max_line_len)
        _require_int("max_stack_trace_lines", self.max_stack_trace_lines)
        if not isinstance(self.field_path_to_group or [], (list, tuple)):
            raise ValueError(
                f"field_path_to_group must be a list, got {self.field_path_to_group!r}"
            )
        self.field_path_to_group = [
            RegexGroupMapping.from_value(m) for m in self.field_path_to_group or []
        ]

    def field_path_to_group_map(self) -> dict[str, int]:
        """
        Convert the ordered mapping list into a dict keyed by field path.

        Duplicate field paths keep the group of the last entry.
        """
        mapping: dict[str, int] = {}
        for entry in self.field_path_to_group:
            mapping[entry.field_path] = entry.group
        return mapping

    @property
    def effective_log4j_format(self) -> str:
        """The Log4j layout in use: the custom one when enabled, else the default."""
        if self.enable_log4j_custom_log_format:
            return self.log4j_custom_log_format
        return DEFAULT_LOG4J_CUSTOM_FORMAT

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "LogSettings":
        return cls(
            log_mode=config.get("log_mode", LogMode.COMMON_LOG_FORMAT),
            max_line_len=config.get("log_max_object_len", DEFAULT_LOG_MAX_OBJECT_LEN),
            retain_original_line=config.get("retain_original_line", False),
            custom_log_format=config.get("custom_log_format", DEFAULT_APACHE_CUSTOM_LOG_FORMAT),
            regex=config.get("regex", DEFAULT_REGEX),
            field_path_to_group=config.get("field_path_to_group") or [],
            grok_pattern_definition=config.get("grok_pattern_definition") or "",
            grok_pattern=config.get("grok_pattern", DEFAULT_GROK_PATTERN),
            on_parse_error=config.get("on_parse_error", OnParseError.ERROR),
            max_stack_trace_lines=config.get(
                "max_stack_trace_lines", DEFAULT_MAX_STACK_TRACE_LINES
            ),
            enable_log4j_custom_log_format=config.get(
                "enable_log4j_custom_log_format", False
            ),
            log4j_custom_log_format=config.get(
                "log4j_custom_log_format", DEFAULT_LOG4J_CUSTOM_FORMAT
            ),
        )


FormatVariant = Union[
    TextSettings,
    JsonSettings,
    DelimitedSettings,
    XmlSettings,
    LogSettings,
    AvroSettings,
    ProtobufSettings,
    SdcJsonSettings,
]

FORMAT_SETTINGS_TYPES: dict[DataFormat, type] = {
    cls.data_format: cls
    for cls in (
        TextSettings,
        JsonSettings,
        DelimitedSettings,
        XmlSettings,
        LogSettings,
        AvroSettings,
        ProtobufSettings,
        SdcJsonSettings,
    )
}


# =============================================================================
# Boundary Record
# =============================================================================


@dataclass
class FormatSettings:
    """
    Universal settings plus the settings of exactly one data format.

    Attributes:
        format_settings: Variant for the active format (its type is the tag)
        charset: Charset name for text-based formats
        remove_ctrl_chars: Strip control characters while reading
        compression: Compression of the incoming data
        file_pattern_in_archive: Glob/regex of files to read inside archives
    """

    format_settings: FormatVariant
    charset: str = DEFAULT_CHARSET
    remove_ctrl_chars: bool = False
    compression: Compression = Compression.NONE
    file_pattern_in_archive: str = DEFAULT_FILE_PATTERN_IN_ARCHIVE

    def __post_init__(self):
        self.compression = coerce_enum(Compression, self.compression)

    @property
    def data_format(self) -> Optional[DataFormat]:
        """The active format, or None if the variant is not a known format."""
        return getattr(self.format_settings, "data_format", None)

    @classmethod
    def for_format(cls, data_format: Union[DataFormat, str], **kwargs) -> "FormatSettings":
        """
        Create settings with all defaults for the given format.

        Args:
            data_format: Format member or name
            **kwargs: Universal settings overrides

        Raises:
            UnsupportedDataFormatError: If the format is unknown
        """
        return cls(format_settings=_settings_type(data_format)(), **kwargs)

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "FormatSettings":
        """
        Create FormatSettings from a flat configuration dictionary.

        The dictionary must contain ``data_format``; every other key is
        optional and keys for inactive formats are ignored.

        Raises:
            UnsupportedDataFormatError: If data_format is missing or unknown
            ValueError: If a mode name, delimiter character, numeric bound
                or field path mapping is invalid
        """
        variant_cls = _settings_type(config.get("data_format"))
        return cls(
            format_settings=variant_cls.from_dict(config),
            charset=config.get("charset", DEFAULT_CHARSET),
            remove_ctrl_chars=config.get("remove_ctrl_chars", False),
            compression=config.get("compression", Compression.NONE),
            file_pattern_in_archive=config.get(
                "file_pattern_in_archive", DEFAULT_FILE_PATTERN_IN_ARCHIVE
            ),
        )


def _settings_type(data_format: Union[DataFormat, str, None]) -> type:
    """Look up the settings variant class for a format member or name."""
    try:
        fmt = coerce_enum(DataFormat, data_format)
    except ValueError:
        raise UnsupportedDataFormatError(
            data_format, available_formats=[f.name for f in DataFormat]
        ) from None
    return FORMAT_SETTINGS_TYPES[fmt]
