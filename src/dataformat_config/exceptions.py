"""
Custom exceptions for the data format configuration package.

Provides specialized exception classes for the few conditions that are
raised rather than collected as diagnostics: caller contract violations
and failures inside the parser factory builder.
"""

from typing import Optional


class FormatConfigError(Exception):
    """
    Base exception for all data format configuration errors.

    All other exceptions in this package inherit from this class,
    allowing for broad exception catching when needed.
    """

    pass


class UnsupportedDataFormatError(FormatConfigError):
    """
    Raised when a data format is unknown or has no registered validator.

    This indicates a misconfigured caller rather than a fixable user
    setting, so it is never folded into the diagnostic list.

    Attributes:
        data_format: The offending format name or value
        available_formats: List of supported format names
    """

    def __init__(
        self,
        data_format: object,
        available_formats: Optional[list[str]] = None,
    ):
        self.data_format = data_format
        self.available_formats = available_formats or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with available formats."""
        if self.available_formats:
            available = ", ".join(sorted(self.available_formats))
            return (
                f"Unsupported data format: '{self.data_format}'. "
                f"Supported formats: {available}"
            )
        return f"Unsupported data format: '{self.data_format}'"


class ConstructionError(FormatConfigError):
    """
    Raised when the parser factory builder cannot assemble a configuration.

    Attributes:
        message: Detailed error message
        cause: The underlying exception, if any
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.message = message
        self.cause = cause
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with the underlying cause."""
        if self.cause is not None:
            return f"{self.message} ({type(self.cause).__name__}: {self.cause})"
        return self.message


class PatternCompileError(FormatConfigError):
    """
    Raised when a log line pattern cannot be translated or compiled.

    Covers Apache custom log formats, Log4j layouts, grok patterns and
    plain regular expressions.

    Attributes:
        pattern: The pattern that failed
        reason: Why it failed
        position: Character offset of the failure (optional)
    """

    def __init__(
        self,
        reason: str,
        pattern: str,
        position: Optional[int] = None,
    ):
        self.reason = reason
        self.pattern = pattern
        self.position = position
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with position context."""
        if self.position is not None:
            return f"{self.reason} at position {self.position}"
        return self.reason
