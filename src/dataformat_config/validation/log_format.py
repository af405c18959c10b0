"""
Log format sub-validator.

LOG has the richest settings of any format: five log modes, each with
its own required strings, plus regex group mapping and stack trace
handling for Log4j. LogFormatValidator checks the fields that are live
for the active mode and then fills the parser factory builder with them.
"""

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING

from ..config.constants import (
    LOG_APACHE_CUSTOM_FORMAT_KEY,
    LOG_FIELD_PATH_TO_GROUP_KEY,
    LOG_GROK_PATTERN_DEFINITION_KEY,
    LOG_GROK_PATTERN_KEY,
    LOG_LOG4J_FORMAT_KEY,
    LOG_MAX_STACK_TRACE_LINES_KEY,
    LOG_ON_PARSE_ERROR_KEY,
    LOG_REGEX_KEY,
    LOG_RETAIN_ORIGINAL_LINE_KEY,
)
from ..exceptions import PatternCompileError
from ..formats.settings import LogSettings
from ..formats.types import LogMode, OnParseError
from .diagnostics import DataFormatGroups, Diagnostic, ErrorCodes, make_diagnostic
from .patterns import apache_format_to_regex, compile_regex

if TYPE_CHECKING:
    from ..builder import ParserFactoryBuilder

logger = logging.getLogger(__name__)


class LogFormatValidator:
    """
    Validates LOG settings and populates the parser factory builder.

    validate() never raises; every problem becomes one diagnostic.
    populate_builder() may be called whatever validate() found, so the
    builder always sees the full set of log values.

    Usage:
        validator = LogFormatValidator(settings.format_settings)
        diagnostics = validator.validate()
        validator.populate_builder(builder)
    """

    def __init__(self, settings: LogSettings, group: str = DataFormatGroups.LOG):
        self.settings = settings
        self.group = group

    def validate(self) -> list[Diagnostic]:
        """
        Validate the fields that are live for the active log mode.

        Returns:
            Diagnostics in discovery order (empty if valid)
        """
        diagnostics: list[Diagnostic] = []
        settings = self.settings

        if settings.max_line_len < 1:
            diagnostics.append(self._issue("log_max_object_len", ErrorCodes.MAX_LENGTH_TOO_SMALL))

        mode = settings.log_mode
        if mode == LogMode.APACHE_CUSTOM_LOG_FORMAT:
            diagnostics.extend(self._validate_apache_format())
        elif mode == LogMode.REGEX:
            diagnostics.extend(self._validate_regex())
        elif mode == LogMode.GROK:
            if not settings.grok_pattern:
                diagnostics.append(self._issue("grok_pattern", ErrorCodes.MISSING_REQUIRED_FIELD))
        elif mode == LogMode.LOG4J:
            diagnostics.extend(self._validate_log4j())

        logger.debug(f"Validated {mode.name} log settings: {len(diagnostics)} issue(s)")
        return diagnostics

    def _validate_apache_format(self) -> list[Diagnostic]:
        fmt = self.settings.custom_log_format
        if not fmt:
            return [self._issue("custom_log_format", ErrorCodes.MISSING_REQUIRED_FIELD)]
        try:
            apache_format_to_regex(fmt)
        except PatternCompileError as e:
            return [self._issue("custom_log_format", ErrorCodes.INVALID_LOG_FORMAT, fmt, str(e))]
        return []

    def _validate_regex(self) -> list[Diagnostic]:
        regex = self.settings.regex
        if not regex:
            return [self._issue("regex", ErrorCodes.MISSING_REQUIRED_FIELD)]
        try:
            pattern = compile_regex(regex)
        except PatternCompileError as e:
            return [self._issue("regex", ErrorCodes.INVALID_REGEX, regex, str(e))]

        diagnostics = []
        for field_path, group in self.settings.field_path_to_group_map().items():
            if not 0 <= group <= pattern.groups:
                diagnostics.append(
                    self._issue(
                        "field_path_to_group",
                        ErrorCodes.REGEX_GROUP_OUT_OF_RANGE,
                        pattern.groups,
                        field_path,
                        group,
                    )
                )
        return diagnostics

    def _validate_log4j(self) -> list[Diagnostic]:
        settings = self.settings
        diagnostics = []
        if settings.enable_log4j_custom_log_format and not settings.log4j_custom_log_format:
            diagnostics.append(
                self._issue("log4j_custom_log_format", ErrorCodes.MISSING_REQUIRED_FIELD)
            )
        if (
            settings.on_parse_error == OnParseError.INCLUDE_AS_STACK_TRACE
            and settings.max_stack_trace_lines < 0
        ):
            diagnostics.append(
                self._issue(
                    "max_stack_trace_lines",
                    ErrorCodes.VALUE_BELOW_MINIMUM,
                    settings.max_stack_trace_lines,
                    0,
                )
            )
        return diagnostics

    def _issue(self, field: str, error_code: str, *details: object) -> Diagnostic:
        return make_diagnostic(self.group, field, error_code, *details)

    def populate_builder(self, builder: "ParserFactoryBuilder") -> None:
        """Set the log mode, max line length and every log setting on the builder."""
        settings = self.settings
        (
            builder.with_max_data_len(settings.max_line_len)
            .with_mode(settings.log_mode)
            .with_setting(LOG_RETAIN_ORIGINAL_LINE_KEY, settings.retain_original_line)
            .with_setting(LOG_APACHE_CUSTOM_FORMAT_KEY, settings.custom_log_format)
            .with_setting(LOG_REGEX_KEY, settings.regex)
            .with_setting(
                LOG_FIELD_PATH_TO_GROUP_KEY,
                MappingProxyType(settings.field_path_to_group_map()),
            )
            .with_setting(LOG_GROK_PATTERN_DEFINITION_KEY, settings.grok_pattern_definition)
            .with_setting(LOG_GROK_PATTERN_KEY, settings.grok_pattern)
            .with_setting(LOG_LOG4J_FORMAT_KEY, settings.effective_log4j_format)
            .with_setting(LOG_ON_PARSE_ERROR_KEY, settings.on_parse_error)
            .with_setting(LOG_MAX_STACK_TRACE_LINES_KEY, settings.max_stack_trace_lines)
        )
