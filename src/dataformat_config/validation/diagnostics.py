"""
Diagnostics collected during a validation pass.

A diagnostic records one problem with one setting. Diagnostics are
appended in the order problems are discovered and are never merged or
deduplicated.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Broad category of a diagnostic."""

    FIELD_RANGE = "field_range"
    STRUCTURAL = "structural"
    MISSING_REQUIRED = "missing_required"
    RESOURCE = "resource"
    UNSUPPORTED_VALUE = "unsupported_value"
    CONSTRUCTION = "construction"


class ErrorCodes:
    """Standard error codes for data format diagnostics."""

    # Range errors
    MAX_LENGTH_TOO_SMALL = "max_length_too_small"
    VALUE_BELOW_MINIMUM = "value_below_minimum"

    # Structural errors
    INVALID_XML_ELEMENT_NAME = "invalid_xml_element_name"
    INVALID_LOG_FORMAT = "invalid_log_format"
    INVALID_REGEX = "invalid_regex"
    REGEX_GROUP_OUT_OF_RANGE = "regex_group_out_of_range"

    # Required settings
    MISSING_REQUIRED_FIELD = "missing_required_field"

    # Resource errors
    DESCRIPTOR_FILE_NOT_FOUND = "descriptor_file_not_found"

    # Unsupported values
    UNKNOWN_CHARSET = "unknown_charset"
    UNSUPPORTED_DATA_FORMAT = "unsupported_data_format"

    # Builder errors
    PARSER_FACTORY_ERROR = "parser_factory_error"


class DataFormatGroups:
    """Settings group labels used to place diagnostics next to their fields."""

    TEXT = "TEXT"
    JSON = "JSON"
    DELIMITED = "DELIMITED"
    XML = "XML"
    LOG = "LOG"
    AVRO = "AVRO"
    PROTOBUF = "PROTOBUF"


# error code -> (kind, message template)
_ERROR_DEFINITIONS: dict[str, tuple[ErrorKind, str]] = {
    ErrorCodes.MAX_LENGTH_TOO_SMALL: (
        ErrorKind.FIELD_RANGE,
        "Max data object length cannot be less than 1",
    ),
    ErrorCodes.VALUE_BELOW_MINIMUM: (
        ErrorKind.FIELD_RANGE,
        "Value {0} is below the minimum of {1}",
    ),
    ErrorCodes.INVALID_XML_ELEMENT_NAME: (
        ErrorKind.STRUCTURAL,
        "Invalid XML element name '{0}'",
    ),
    ErrorCodes.INVALID_LOG_FORMAT: (
        ErrorKind.STRUCTURAL,
        "Invalid log format '{0}': {1}",
    ),
    ErrorCodes.INVALID_REGEX: (
        ErrorKind.STRUCTURAL,
        "Invalid regular expression '{0}': {1}",
    ),
    ErrorCodes.REGEX_GROUP_OUT_OF_RANGE: (
        ErrorKind.STRUCTURAL,
        "Regular expression has {0} groups but field path '{1}' maps to group {2}",
    ),
    ErrorCodes.MISSING_REQUIRED_FIELD: (
        ErrorKind.MISSING_REQUIRED,
        "A value is required",
    ),
    ErrorCodes.DESCRIPTOR_FILE_NOT_FOUND: (
        ErrorKind.RESOURCE,
        "Protobuf descriptor file '{0}' does not exist",
    ),
    ErrorCodes.UNKNOWN_CHARSET: (
        ErrorKind.UNSUPPORTED_VALUE,
        "Unsupported charset '{0}'",
    ),
    ErrorCodes.UNSUPPORTED_DATA_FORMAT: (
        ErrorKind.UNSUPPORTED_VALUE,
        "Unsupported data format '{0}'",
    ),
    ErrorCodes.PARSER_FACTORY_ERROR: (
        ErrorKind.CONSTRUCTION,
        "Cannot create the parser factory: {0}",
    ),
}


@dataclass(frozen=True)
class Diagnostic:
    """
    A single validation problem.

    Attributes:
        group: Settings group the field belongs to (None for builder errors)
        field: Field identifier (None for builder errors)
        error_code: One of ErrorCodes
        details: Values formatted into the message
    """

    group: Optional[str]
    field: Optional[str]
    error_code: str
    details: tuple = ()

    @property
    def kind(self) -> ErrorKind:
        """Category derived from the error code."""
        return _ERROR_DEFINITIONS[self.error_code][0]

    @property
    def message(self) -> str:
        """Human-readable message with details filled in."""
        template = _ERROR_DEFINITIONS[self.error_code][1]
        if self.error_code == ErrorCodes.MISSING_REQUIRED_FIELD and self.field:
            return f"'{self.field}' is required"
        return template.format(*self.details)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "group": self.group,
            "field": self.field,
            "error_code": self.error_code,
            "kind": self.kind.value,
            "message": self.message,
        }

    def __str__(self) -> str:
        location = ".".join(part for part in (self.group, self.field) if part)
        if location:
            return f"[{location}] {self.error_code}: {self.message}"
        return f"{self.error_code}: {self.message}"


def make_diagnostic(
    group: Optional[str],
    field: Optional[str],
    error_code: str,
    *details: object,
) -> Diagnostic:
    """
    Create a diagnostic for a known error code.

    Raises:
        KeyError: If error_code is not a known ErrorCodes value
    """
    if error_code not in _ERROR_DEFINITIONS:
        raise KeyError(f"Unknown error code: {error_code}")
    return Diagnostic(group=group, field=field, error_code=error_code, details=tuple(details))
