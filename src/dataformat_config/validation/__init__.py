"""
Validation of data format settings.

Provides the charset resolver, the per-format field validators, the log
format sub-validator, and the diagnostics they produce.
"""

from .charset import DEFAULT_CODEC, resolve_charset
from .diagnostics import (
    DataFormatGroups,
    Diagnostic,
    ErrorCodes,
    ErrorKind,
    make_diagnostic,
)
from .fields import (
    FieldValidator,
    get_field_validator,
    list_supported_formats,
    register,
)
from .log_format import LogFormatValidator
from .patterns import (
    GrokDictionary,
    apache_format_to_regex,
    compile_log_line_pattern,
    compile_regex,
    log4j_layout_to_regex,
)
from .xml_names import is_valid_xml_name

__all__ = [
    # Diagnostics
    "Diagnostic",
    "ErrorCodes",
    "ErrorKind",
    "DataFormatGroups",
    "make_diagnostic",
    # Charset
    "DEFAULT_CODEC",
    "resolve_charset",
    # Field validators
    "FieldValidator",
    "get_field_validator",
    "list_supported_formats",
    "register",
    "LogFormatValidator",
    "is_valid_xml_name",
    # Patterns
    "GrokDictionary",
    "apache_format_to_regex",
    "log4j_layout_to_regex",
    "compile_regex",
    "compile_log_line_pattern",
]
