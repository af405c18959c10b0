"""
Unit tests for validation diagnostics.
"""

import pytest

from dataformat_config.validation import (
    DataFormatGroups,
    Diagnostic,
    ErrorCodes,
    ErrorKind,
    make_diagnostic,
)


class TestMakeDiagnostic:
    """Tests for diagnostic creation."""

    def test_details_are_stored_as_tuple(self):
        diagnostic = make_diagnostic(
            DataFormatGroups.LOG, "regex", ErrorCodes.INVALID_REGEX, "(", "missing )"
        )
        assert diagnostic.details == ("(", "missing )")

    def test_unknown_code_raises(self):
        with pytest.raises(KeyError, match="no_such_code"):
            make_diagnostic(None, None, "no_such_code")

    def test_equal_diagnostics_compare_equal(self):
        """Diagnostics are values; repeated passes can be compared directly."""
        first = make_diagnostic("XML", "xml_record_element", ErrorCodes.INVALID_XML_ELEMENT_NAME, "1bad")
        second = make_diagnostic("XML", "xml_record_element", ErrorCodes.INVALID_XML_ELEMENT_NAME, "1bad")
        assert first == second
        assert hash(first) == hash(second)


class TestDiagnosticKinds:
    """Tests for error code categorisation."""

    @pytest.mark.parametrize(
        "code,kind",
        [
            (ErrorCodes.MAX_LENGTH_TOO_SMALL, ErrorKind.FIELD_RANGE),
            (ErrorCodes.VALUE_BELOW_MINIMUM, ErrorKind.FIELD_RANGE),
            (ErrorCodes.INVALID_XML_ELEMENT_NAME, ErrorKind.STRUCTURAL),
            (ErrorCodes.INVALID_LOG_FORMAT, ErrorKind.STRUCTURAL),
            (ErrorCodes.INVALID_REGEX, ErrorKind.STRUCTURAL),
            (ErrorCodes.REGEX_GROUP_OUT_OF_RANGE, ErrorKind.STRUCTURAL),
            (ErrorCodes.MISSING_REQUIRED_FIELD, ErrorKind.MISSING_REQUIRED),
            (ErrorCodes.DESCRIPTOR_FILE_NOT_FOUND, ErrorKind.RESOURCE),
            (ErrorCodes.UNKNOWN_CHARSET, ErrorKind.UNSUPPORTED_VALUE),
            (ErrorCodes.UNSUPPORTED_DATA_FORMAT, ErrorKind.UNSUPPORTED_VALUE),
            (ErrorCodes.PARSER_FACTORY_ERROR, ErrorKind.CONSTRUCTION),
        ],
    )
    def test_kind(self, code, kind):
        assert Diagnostic(None, None, code).kind == kind


class TestDiagnosticMessages:
    """Tests for message rendering."""

    def test_missing_required_names_field(self):
        diagnostic = make_diagnostic("PROTOBUF", "message_type", ErrorCodes.MISSING_REQUIRED_FIELD)
        assert diagnostic.message == "'message_type' is required"

    def test_details_formatted(self):
        diagnostic = make_diagnostic(
            "LOG", "field_path_to_group", ErrorCodes.REGEX_GROUP_OUT_OF_RANGE, 2, "/a", 5
        )
        assert diagnostic.message == (
            "Regular expression has 2 groups but field path '/a' maps to group 5"
        )

    def test_str_with_location(self):
        diagnostic = make_diagnostic("TEXT", "text_max_line_len", ErrorCodes.MAX_LENGTH_TOO_SMALL)
        assert str(diagnostic) == (
            "[TEXT.text_max_line_len] max_length_too_small: "
            "Max data object length cannot be less than 1"
        )

    def test_str_without_location(self):
        diagnostic = make_diagnostic(None, None, ErrorCodes.PARSER_FACTORY_ERROR, "boom")
        assert str(diagnostic) == "parser_factory_error: Cannot create the parser factory: boom"

    def test_to_dict(self):
        diagnostic = make_diagnostic("DATA_FORMAT", "charset", ErrorCodes.UNKNOWN_CHARSET, "x")
        assert diagnostic.to_dict() == {
            "group": "DATA_FORMAT",
            "field": "charset",
            "error_code": "unknown_charset",
            "kind": "unsupported_value",
            "message": "Unsupported charset 'x'",
        }
