"""
Data format and mode enumerations.

Every enumeration uses its member name as its value so configuration
files can refer to members by name (e.g. ``log_mode: REGEX``).
"""

from enum import Enum
from typing import Type, TypeVar, Union

E = TypeVar("E", bound=Enum)


class DataFormat(Enum):
    """Supported data formats. Drives all validation dispatch."""

    TEXT = "TEXT"
    JSON = "JSON"
    DELIMITED = "DELIMITED"
    XML = "XML"
    LOG = "LOG"
    AVRO = "AVRO"
    PROTOBUF = "PROTOBUF"
    SDC_JSON = "SDC_JSON"


class Compression(Enum):
    """Compression applied to the incoming data."""

    NONE = "NONE"
    COMPRESSED_FILE = "COMPRESSED_FILE"
    ARCHIVE = "ARCHIVE"
    COMPRESSED_ARCHIVE = "COMPRESSED_ARCHIVE"


class JsonMode(Enum):
    """Layout of JSON content."""

    ARRAY_OBJECTS = "ARRAY_OBJECTS"
    MULTIPLE_OBJECTS = "MULTIPLE_OBJECTS"


class CsvMode(Enum):
    """Delimited file dialect."""

    CSV = "CSV"
    EXCEL = "EXCEL"
    MYSQL = "MYSQL"
    TDF = "TDF"
    RFC4180 = "RFC4180"
    CUSTOM = "CUSTOM"


class CsvHeader(Enum):
    """Header line handling for delimited data."""

    WITH_HEADER = "WITH_HEADER"
    IGNORE_HEADER = "IGNORE_HEADER"
    NO_HEADER = "NO_HEADER"


class CsvRecordType(Enum):
    """Root field type produced for delimited records."""

    LIST = "LIST"
    LIST_MAP = "LIST_MAP"


class LogMode(Enum):
    """Log line format."""

    COMMON_LOG_FORMAT = "COMMON_LOG_FORMAT"
    APACHE_CUSTOM_LOG_FORMAT = "APACHE_CUSTOM_LOG_FORMAT"
    REGEX = "REGEX"
    GROK = "GROK"
    LOG4J = "LOG4J"


class OnParseError(Enum):
    """What to do with a log line that does not match the format."""

    ERROR = "ERROR"
    IGNORE = "IGNORE"
    INCLUDE_AS_STACK_TRACE = "INCLUDE_AS_STACK_TRACE"


def coerce_enum(enum_cls: Type[E], value: Union[E, str]) -> E:
    """
    Convert a member or member name into an enum member.

    Args:
        enum_cls: Target enumeration
        value: Enum member or (case-insensitive) member name

    Returns:
        The enum member

    Raises:
        ValueError: If the name does not match any member
    """
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls[value.strip().upper()]
        except KeyError:
            pass
    valid = ", ".join(m.name for m in enum_cls)
    raise ValueError(f"Invalid {enum_cls.__name__}: {value!r} (expected one of: {valid})")
