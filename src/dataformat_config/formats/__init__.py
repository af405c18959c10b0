"""Data format enumerations and per-format settings."""

from .settings import (
    FORMAT_SETTINGS_TYPES,
    AvroSettings,
    DelimitedSettings,
    FormatSettings,
    FormatVariant,
    JsonSettings,
    LogSettings,
    ProtobufSettings,
    RegexGroupMapping,
    SdcJsonSettings,
    TextSettings,
    XmlSettings,
)
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

__all__ = [
    # Enumerations
    "DataFormat",
    "Compression",
    "JsonMode",
    "CsvMode",
    "CsvHeader",
    "CsvRecordType",
    "LogMode",
    "OnParseError",
    "coerce_enum",
    # Settings
    "FormatSettings",
    "FormatVariant",
    "FORMAT_SETTINGS_TYPES",
    "TextSettings",
    "JsonSettings",
    "DelimitedSettings",
    "XmlSettings",
    "LogSettings",
    "RegexGroupMapping",
    "AvroSettings",
    "ProtobufSettings",
    "SdcJsonSettings",
]
