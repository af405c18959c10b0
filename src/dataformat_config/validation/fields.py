"""
Per-format field validators.

Each data format has one FieldValidator that checks the fields of its
settings variant and knows how to feed them to the parser factory
builder. Validators are stateless and registered by data format.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Type, Union

from ..config.constants import (
    AVRO_SCHEMA_IN_MESSAGE_KEY,
    AVRO_SCHEMA_KEY,
    CSV_DELIMITER_KEY,
    CSV_ESCAPE_KEY,
    CSV_QUOTE_KEY,
    CSV_SKIP_START_LINES_KEY,
    PROTO_DELIMITED_KEY,
    PROTO_DESCRIPTOR_FILE_KEY,
    PROTO_MESSAGE_TYPE_KEY,
    UNBOUNDED_DATA_LEN,
    XML_RECORD_ELEMENT_KEY,
)
from ..exceptions import UnsupportedDataFormatError
from ..formats.settings import FormatVariant
from ..formats.types import DataFormat
from .diagnostics import DataFormatGroups, Diagnostic, ErrorCodes, make_diagnostic
from .log_format import LogFormatValidator
from .xml_names import is_valid_xml_name

if TYPE_CHECKING:
    from ..builder import ParserFactoryBuilder

logger = logging.getLogger(__name__)


class FieldValidator(ABC):
    """
    Validates the settings of one data format.

    Subclasses must implement:
        - validate(): Return diagnostics for the format's fields
        - populate_builder(): Feed the format's values to the builder
    """

    data_format: DataFormat
    group: Optional[str] = None

    @abstractmethod
    def validate(self, settings: FormatVariant, resources_dir: Path) -> list[Diagnostic]:
        """
        Check every field of the settings; never stop at the first problem.

        Args:
            settings: Settings variant for this validator's format
            resources_dir: Directory referenced resources are resolved against

        Returns:
            Diagnostics in discovery order (empty if valid)
        """
        pass

    @abstractmethod
    def populate_builder(self, settings: FormatVariant, builder: "ParserFactoryBuilder") -> None:
        """Set the format-specific values on the builder."""
        pass

    def _check_min_length(self, field: str, value: int) -> list[Diagnostic]:
        if value < 1:
            return [make_diagnostic(self.group, field, ErrorCodes.MAX_LENGTH_TOO_SMALL)]
        return []


# =============================================================================
# Registry
# =============================================================================

_VALIDATORS: dict[DataFormat, Type[FieldValidator]] = {}


def register(data_format: DataFormat):
    """
    Decorator to register a field validator for a data format.

    Example:
        @register(DataFormat.TEXT)
        class TextFieldValidator(FieldValidator):
            ...
    """

    def decorator(validator_class: Type[FieldValidator]) -> Type[FieldValidator]:
        if not issubclass(validator_class, FieldValidator):
            raise TypeError(
                f"Validator class must inherit from FieldValidator, "
                f"got {validator_class.__name__}"
            )
        validator_class.data_format = data_format
        _VALIDATORS[data_format] = validator_class
        return validator_class

    return decorator


def get_field_validator(data_format: Union[DataFormat, str, None]) -> FieldValidator:
    """
    Get a validator instance for a data format.

    Raises:
        UnsupportedDataFormatError: If no validator is registered for the format
    """
    validator_class = _VALIDATORS.get(data_format)
    if validator_class is None:
        raise UnsupportedDataFormatError(
            getattr(data_format, "value", data_format),
            available_formats=[f.value for f in _VALIDATORS],
        )
    return validator_class()


def list_supported_formats() -> list[DataFormat]:
    """List formats with a registered validator, in declaration order."""
    return [f for f in DataFormat if f in _VALIDATORS]


# =============================================================================
# Validators
# =============================================================================


@register(DataFormat.TEXT)
class TextFieldValidator(FieldValidator):
    group = DataFormatGroups.TEXT

    def validate(self, settings, resources_dir):
        return self._check_min_length("text_max_line_len", settings.max_line_len)

    def populate_builder(self, settings, builder):
        builder.with_max_data_len(settings.max_line_len)


@register(DataFormat.JSON)
class JsonFieldValidator(FieldValidator):
    group = DataFormatGroups.JSON

    def validate(self, settings, resources_dir):
        return self._check_min_length("json_max_object_len", settings.max_object_len)

    def populate_builder(self, settings, builder):
        builder.with_max_data_len(settings.max_object_len).with_mode(settings.content)


@register(DataFormat.DELIMITED)
class DelimitedFieldValidator(FieldValidator):
    """Single-character settings are enforced by DelimitedSettings itself."""

    group = DataFormatGroups.DELIMITED

    def validate(self, settings, resources_dir):
        diagnostics = self._check_min_length("csv_max_object_len", settings.max_object_len)
        if settings.skip_start_lines < 0:
            diagnostics.append(
                make_diagnostic(
                    self.group,
                    "csv_skip_start_lines",
                    ErrorCodes.VALUE_BELOW_MINIMUM,
                    settings.skip_start_lines,
                    0,
                )
            )
        return diagnostics

    def populate_builder(self, settings, builder):
        (
            builder.with_max_data_len(settings.max_object_len)
            .with_mode(settings.file_format)
            .with_mode(settings.header)
            .with_mode(settings.record_type)
            .with_setting(CSV_SKIP_START_LINES_KEY, settings.skip_start_lines)
            .with_setting(CSV_DELIMITER_KEY, settings.custom_delimiter)
            .with_setting(CSV_ESCAPE_KEY, settings.custom_escape)
            .with_setting(CSV_QUOTE_KEY, settings.custom_quote)
        )


@register(DataFormat.XML)
class XmlFieldValidator(FieldValidator):
    group = DataFormatGroups.XML

    def validate(self, settings, resources_dir):
        diagnostics = self._check_min_length("xml_max_object_len", settings.max_object_len)
        element = settings.record_element
        if element and not is_valid_xml_name(element):
            diagnostics.append(
                make_diagnostic(
                    self.group,
                    "xml_record_element",
                    ErrorCodes.INVALID_XML_ELEMENT_NAME,
                    element,
                )
            )
        return diagnostics

    def populate_builder(self, settings, builder):
        builder.with_max_data_len(settings.max_object_len).with_setting(
            XML_RECORD_ELEMENT_KEY, settings.record_element
        )


@register(DataFormat.LOG)
class LogFieldValidator(FieldValidator):
    """Delegates to LogFormatValidator."""

    group = DataFormatGroups.LOG

    def validate(self, settings, resources_dir):
        return LogFormatValidator(settings, self.group).validate()

    def populate_builder(self, settings, builder):
        LogFormatValidator(settings, self.group).populate_builder(builder)


@register(DataFormat.AVRO)
class AvroFieldValidator(FieldValidator):
    group = DataFormatGroups.AVRO

    def validate(self, settings, resources_dir):
        return []

    def populate_builder(self, settings, builder):
        (
            builder.with_max_data_len(UNBOUNDED_DATA_LEN)
            .with_setting(AVRO_SCHEMA_KEY, settings.avro_schema)
            .with_setting(AVRO_SCHEMA_IN_MESSAGE_KEY, settings.schema_in_message)
        )


@register(DataFormat.PROTOBUF)
class ProtobufFieldValidator(FieldValidator):
    """
    Checks the descriptor file and the message type independently.

    The descriptor file path is relative to the resources directory and
    must exist at validation time.
    """

    group = DataFormatGroups.PROTOBUF

    def validate(self, settings, resources_dir):
        diagnostics = []

        if not settings.descriptor_file:
            diagnostics.append(
                make_diagnostic(self.group, "proto_descriptor_file", ErrorCodes.MISSING_REQUIRED_FIELD)
            )
        else:
            descriptor = (Path(resources_dir) / settings.descriptor_file).absolute()
            if not descriptor.exists():
                logger.debug(f"Protobuf descriptor file not found: {descriptor}")
                diagnostics.append(
                    make_diagnostic(
                        self.group,
                        "proto_descriptor_file",
                        ErrorCodes.DESCRIPTOR_FILE_NOT_FOUND,
                        str(descriptor),
                    )
                )

        if not settings.message_type:
            diagnostics.append(
                make_diagnostic(self.group, "message_type", ErrorCodes.MISSING_REQUIRED_FIELD)
            )

        return diagnostics

    def populate_builder(self, settings, builder):
        (
            builder.with_setting(PROTO_DESCRIPTOR_FILE_KEY, settings.descriptor_file)
            .with_setting(PROTO_MESSAGE_TYPE_KEY, settings.message_type)
            .with_setting(PROTO_DELIMITED_KEY, settings.is_delimited)
            .with_max_data_len(UNBOUNDED_DATA_LEN)
        )


@register(DataFormat.SDC_JSON)
class SdcJsonFieldValidator(FieldValidator):
    def validate(self, settings, resources_dir):
        return []

    def populate_builder(self, settings, builder):
        builder.with_max_data_len(UNBOUNDED_DATA_LEN)
