"""
Parser factory builder and the immutable configuration it produces.

The builder is filled in a fixed order: universal settings first
(charset, overrun limit, control characters, compression, archive file
pattern), format-specific settings second (max data length, modes,
key/value settings), then build() is called exactly once.

Usage:
    builder = ParserFactoryBuilder(DataFormat.DELIMITED)
    config = (
        builder.with_charset("utf-8")
        .with_overrun_limit(MAX_OVERRUN_LIMIT)
        .with_max_data_len(1024)
        .with_mode(CsvMode.CSV)
        .with_setting(CSV_DELIMITER_KEY, "|")
        .build()
    )
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Type, TypeVar

from .config.constants import (
    LOG_APACHE_CUSTOM_FORMAT_KEY,
    LOG_GROK_PATTERN_DEFINITION_KEY,
    LOG_GROK_PATTERN_KEY,
    LOG_LOG4J_FORMAT_KEY,
    LOG_REGEX_KEY,
    UNBOUNDED_DATA_LEN,
)
from .exceptions import ConstructionError, PatternCompileError
from .formats.types import Compression, DataFormat, LogMode
from .validation.patterns import compile_log_line_pattern

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

# setting key holding the format string for each log mode
_LOG_FORMAT_KEYS = {
    LogMode.APACHE_CUSTOM_LOG_FORMAT: LOG_APACHE_CUSTOM_FORMAT_KEY,
    LogMode.REGEX: LOG_REGEX_KEY,
    LogMode.GROK: LOG_GROK_PATTERN_KEY,
    LogMode.LOG4J: LOG_LOG4J_FORMAT_KEY,
}


@dataclass(frozen=True)
class ParserFactoryConfig:
    """
    Ready-to-use configuration for instantiating per-stream parsers.

    Attributes:
        data_format: Format the parsers read
        charset: Canonical codec name
        overrun_limit: Ceiling for buffered reads
        remove_ctrl_chars: Strip control characters while reading
        compression: Compression of the incoming data
        file_pattern_in_archive: File pattern inside archives
        max_data_len: Max record/line/object length, -1 for no limit
        modes: Mode enumerations keyed by their type
        settings: Format-specific key/value settings
        line_pattern: Compiled log line pattern (LOG only)
    """

    data_format: DataFormat
    charset: str
    overrun_limit: int
    remove_ctrl_chars: bool
    compression: Compression
    file_pattern_in_archive: str
    max_data_len: int
    modes: Mapping[type, Enum] = field(default_factory=lambda: MappingProxyType({}))
    settings: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    line_pattern: Optional[re.Pattern] = None

    @property
    def is_unbounded(self) -> bool:
        """Whether records have no maximum length."""
        return self.max_data_len == UNBOUNDED_DATA_LEN

    def get_mode(self, mode_type: Type[E]) -> Optional[E]:
        """Get the configured member of a mode enumeration, if any."""
        return self.modes.get(mode_type)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a format-specific setting."""
        return self.settings.get(key, default)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "data_format": self.data_format.value,
            "charset": self.charset,
            "overrun_limit": self.overrun_limit,
            "remove_ctrl_chars": self.remove_ctrl_chars,
            "compression": self.compression.value,
            "file_pattern_in_archive": self.file_pattern_in_archive,
            "max_data_len": self.max_data_len,
            "modes": {t.__name__: m.value for t, m in self.modes.items()},
            "settings": {
                k: v.value if isinstance(v, Enum) else dict(v) if isinstance(v, Mapping) else v
                for k, v in self.settings.items()
            },
            "line_pattern": self.line_pattern.pattern if self.line_pattern else None,
        }


class ParserFactoryBuilder:
    """
    Accumulates parser factory settings and assembles a ParserFactoryConfig.

    Setters return the builder for chaining. build() may only be called
    once; any failure inside it is raised as ConstructionError.
    """

    def __init__(self, data_format: DataFormat):
        self.data_format = data_format
        self._charset: Optional[str] = None
        self._overrun_limit: Optional[int] = None
        self._remove_ctrl_chars = False
        self._compression = Compression.NONE
        self._file_pattern_in_archive = "*"
        self._max_data_len: Optional[int] = None
        self._modes: dict[type, Enum] = {}
        self._settings: dict[str, Any] = {}
        self._built = False

    # -------------------------------------------------------------------------
    # Universal settings
    # -------------------------------------------------------------------------

    def with_charset(self, charset: str) -> "ParserFactoryBuilder":
        self._charset = charset
        return self

    def with_overrun_limit(self, overrun_limit: int) -> "ParserFactoryBuilder":
        self._overrun_limit = overrun_limit
        return self

    def with_remove_ctrl_chars(self, remove_ctrl_chars: bool) -> "ParserFactoryBuilder":
        self._remove_ctrl_chars = remove_ctrl_chars
        return self

    def with_compression(self, compression: Compression) -> "ParserFactoryBuilder":
        self._compression = compression
        return self

    def with_file_pattern_in_archive(self, pattern: str) -> "ParserFactoryBuilder":
        self._file_pattern_in_archive = pattern
        return self

    # -------------------------------------------------------------------------
    # Format-specific settings
    # -------------------------------------------------------------------------

    def with_max_data_len(self, max_data_len: int) -> "ParserFactoryBuilder":
        """Set the max data length; UNBOUNDED_DATA_LEN (-1) means no limit."""
        self._max_data_len = max_data_len
        return self

    def with_mode(self, mode: Enum) -> "ParserFactoryBuilder":
        """Set a mode. One member is kept per enumeration type."""
        self._modes[type(mode)] = mode
        return self

    def with_setting(self, key: str, value: Any) -> "ParserFactoryBuilder":
        self._settings[key] = value
        return self

    # -------------------------------------------------------------------------
    # Assembly
    # -------------------------------------------------------------------------

    def build(self) -> ParserFactoryConfig:
        """
        Assemble the parser factory configuration.

        Returns:
            Immutable ParserFactoryConfig

        Raises:
            ConstructionError: If required values are missing, the builder
                               was already used, or a log line pattern fails
                               to compile
        """
        if self._built:
            raise ConstructionError("Parser factory builder has already been built")
        self._built = True

        if not self._charset:
            raise ConstructionError("Charset is not set")
        if self._overrun_limit is None or self._overrun_limit < 1:
            raise ConstructionError(
                f"Overrun limit must be at least 1, got {self._overrun_limit}"
            )
        if self._max_data_len is None:
            raise ConstructionError(
                f"Max data length is not set for {self.data_format.value}"
            )

        line_pattern = None
        if self.data_format == DataFormat.LOG:
            line_pattern = self._compile_log_pattern()

        logger.debug(
            f"Built {self.data_format.value} parser factory config "
            f"(charset={self._charset}, max_data_len={self._max_data_len})"
        )
        return ParserFactoryConfig(
            data_format=self.data_format,
            charset=self._charset,
            overrun_limit=self._overrun_limit,
            remove_ctrl_chars=self._remove_ctrl_chars,
            compression=self._compression,
            file_pattern_in_archive=self._file_pattern_in_archive,
            max_data_len=self._max_data_len,
            modes=MappingProxyType(dict(self._modes)),
            settings=MappingProxyType(dict(self._settings)),
            line_pattern=line_pattern,
        )

    def _compile_log_pattern(self) -> re.Pattern:
        """Compile the line pattern for the configured log mode."""
        log_mode = self._modes.get(LogMode)
        if log_mode is None:
            raise ConstructionError("Log mode is not set")

        key = _LOG_FORMAT_KEYS.get(log_mode)
        log_format = self._settings.get(key) if key else None
        try:
            return compile_log_line_pattern(
                log_mode,
                log_format,
                grok_definitions=self._settings.get(LOG_GROK_PATTERN_DEFINITION_KEY, ""),
            )
        except PatternCompileError as e:
            raise ConstructionError(
                f"Cannot compile {log_mode.value} pattern '{e.pattern}'", cause=e
            ) from e
