"""
Data format validation orchestrator.

Runs one validation pass over a FormatSettings:

1. Resolve the charset (unknown names fall back to UTF-8)
2. Validate the fields of the active format (LOG delegates further)
3. Populate the parser factory builder, universal values first
4. Build the parser factory configuration

Every stage runs regardless of what earlier stages found, so a single
pass reports every problem. The one exception is a format with no
registered validator, which ends the pass immediately.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from .builder import ParserFactoryBuilder, ParserFactoryConfig
from .config.settings import get_settings
from .exceptions import ConstructionError, UnsupportedDataFormatError
from .formats.settings import FormatSettings
from .formats.types import DataFormat
from .validation.charset import resolve_charset
from .validation.diagnostics import Diagnostic, ErrorCodes, make_diagnostic
from .validation.fields import get_field_validator

logger = logging.getLogger(__name__)

DATA_FORMAT_FIELD = "data_format"


@dataclass
class ValidationResult:
    """
    Outcome of a validation pass.

    Attributes:
        is_valid: True if every field check passed and the build succeeded
        diagnostics: Every problem found, in discovery order
        data_format: Format that was validated (None if unsupported)
        charset: Resolved codec name (None if the pass halted early)
        parser_factory: Built configuration, only set when is_valid is True
    """

    is_valid: bool
    diagnostics: list[Diagnostic] = field(default_factory=list)
    data_format: Optional[DataFormat] = None
    charset: Optional[str] = None
    parser_factory: Optional[ParserFactoryConfig] = None

    @property
    def error_codes(self) -> list[str]:
        return [d.error_code for d in self.diagnostics]

    def diagnostics_for(self, field_name: str) -> list[Diagnostic]:
        """Diagnostics reported against one field."""
        return [d for d in self.diagnostics if d.field == field_name]

    def to_dict(self) -> dict:
        """Convert result to dictionary."""
        return {
            "is_valid": self.is_valid,
            "data_format": self.data_format.value if self.data_format else None,
            "charset": self.charset,
            "error_count": len(self.diagnostics),
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "parser_factory": self.parser_factory.to_dict() if self.parser_factory else None,
        }


def validate_data_format(
    settings: FormatSettings,
    resources_dir: Optional[Union[str, Path]] = None,
    overrun_limit: Optional[int] = None,
    stage_group: Optional[str] = None,
) -> ValidationResult:
    """
    Validate data format settings and build the parser factory configuration.

    Args:
        settings: Universal settings plus the active format's settings
        resources_dir: Directory for resolving resources such as Protobuf
                       descriptor files (default: from ValidatorSettings)
        overrun_limit: Ceiling for buffered reads (default: from ValidatorSettings)
        stage_group: Group for charset and format diagnostics
                     (default: from ValidatorSettings)

    Returns:
        ValidationResult with validity, diagnostics and, when valid,
        the parser factory configuration
    """
    if resources_dir is None or overrun_limit is None or stage_group is None:
        defaults = get_settings()
        resources_dir = defaults.resources_dir if resources_dir is None else resources_dir
        overrun_limit = defaults.overrun_limit if overrun_limit is None else overrun_limit
        stage_group = defaults.stage_group if stage_group is None else stage_group

    data_format = settings.data_format
    try:
        field_validator = get_field_validator(
            data_format
            if data_format is not None
            else type(settings.format_settings).__name__
        )
    except UnsupportedDataFormatError as e:
        logger.error(str(e))
        return ValidationResult(
            is_valid=False,
            diagnostics=[
                make_diagnostic(
                    stage_group,
                    DATA_FORMAT_FIELD,
                    ErrorCodes.UNSUPPORTED_DATA_FORMAT,
                    e.data_format,
                )
            ],
        )

    diagnostics: list[Diagnostic] = []

    # Stage 1: charset
    charset, charset_issue = resolve_charset(settings.charset, stage_group)
    if charset_issue is not None:
        diagnostics.append(charset_issue)

    # Stage 2: format fields
    diagnostics.extend(
        field_validator.validate(settings.format_settings, Path(resources_dir))
    )
    fields_valid = not diagnostics

    # Stage 3: builder, universal values first
    builder = (
        ParserFactoryBuilder(data_format)
        .with_charset(charset)
        .with_overrun_limit(overrun_limit)
        .with_remove_ctrl_chars(settings.remove_ctrl_chars)
        .with_compression(settings.compression)
        .with_file_pattern_in_archive(settings.file_pattern_in_archive)
    )
    field_validator.populate_builder(settings.format_settings, builder)

    # Stage 4: build
    parser_factory = None
    try:
        parser_factory = builder.build()
    except ConstructionError as e:
        logger.warning(f"Parser factory construction failed: {e}")
        diagnostics.append(make_diagnostic(None, None, ErrorCodes.PARSER_FACTORY_ERROR, str(e)))

    is_valid = fields_valid and parser_factory is not None
    logger.info(
        f"Validated {data_format.value} settings: "
        f"{'valid' if is_valid else 'invalid'}, {len(diagnostics)} issue(s)"
    )
    return ValidationResult(
        is_valid=is_valid,
        diagnostics=diagnostics,
        data_format=data_format,
        charset=charset,
        parser_factory=parser_factory if is_valid else None,
    )
