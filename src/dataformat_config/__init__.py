"""
Data format parser configuration validation.

Validates the settings of a data format (TEXT, JSON, DELIMITED, XML, LOG,
AVRO, PROTOBUF, SDC_JSON), collecting every problem in one pass, and
builds the immutable configuration a parser factory needs.

Usage:
    from dataformat_config import (
        FormatSettings,
        LogSettings,
        LogMode,
        validate_data_format,
    )

    settings = FormatSettings(
        format_settings=LogSettings(log_mode=LogMode.REGEX, regex=r"^(\\S+) (.*)$"),
        charset="UTF-8",
    )
    result = validate_data_format(settings, resources_dir="resources")

    if result.is_valid:
        factory_config = result.parser_factory
    else:
        for diagnostic in result.diagnostics:
            print(diagnostic)
"""

from .builder import ParserFactoryBuilder, ParserFactoryConfig
from .config import ValidatorSettings, get_settings, load_format_settings
from .exceptions import (
    ConstructionError,
    FormatConfigError,
    PatternCompileError,
    UnsupportedDataFormatError,
)
from .formats import (
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
)
from .orchestrator import ValidationResult, validate_data_format
from .validation import (
    DataFormatGroups,
    Diagnostic,
    ErrorCodes,
    ErrorKind,
    LogFormatValidator,
    resolve_charset,
)

__all__ = [
    # Orchestrator
    "validate_data_format",
    "ValidationResult",
    # Builder
    "ParserFactoryBuilder",
    "ParserFactoryConfig",
    # Settings
    "FormatSettings",
    "TextSettings",
    "JsonSettings",
    "DelimitedSettings",
    "XmlSettings",
    "LogSettings",
    "RegexGroupMapping",
    "AvroSettings",
    "ProtobufSettings",
    "SdcJsonSettings",
    # Enumerations
    "DataFormat",
    "Compression",
    "JsonMode",
    "CsvMode",
    "CsvHeader",
    "CsvRecordType",
    "LogMode",
    "OnParseError",
    # Diagnostics
    "Diagnostic",
    "ErrorCodes",
    "ErrorKind",
    "DataFormatGroups",
    "LogFormatValidator",
    "resolve_charset",
    # Configuration
    "ValidatorSettings",
    "get_settings",
    "load_format_settings",
    # Exceptions
    "FormatConfigError",
    "UnsupportedDataFormatError",
    "ConstructionError",
    "PatternCompileError",
]
