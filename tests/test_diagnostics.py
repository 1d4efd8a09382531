"""Tests for the diagnostics package: codes, templates, formatter and errors.

Tests structured Diagnostic objects, all three DiagnosticFormatter output
formats, control-character escaping and the exception hierarchy.

Python 3.13+.
"""

from __future__ import annotations

import json

import pytest
from hypothesis import given
from hypothesis import strategies as st

from deferredtext.diagnostics import (
    DeferredTextError,
    Diagnostic,
    DiagnosticCode,
    DiagnosticFormatter,
    ErrorCategory,
    ErrorTemplate,
    FormatMismatchError,
    MalformedEncodingError,
    OutputFormat,
    ResourceNotFoundError,
    UnboundedRecursionError,
)

# ============================================================================
# Codes
# ============================================================================


class TestDiagnosticCode:
    """Test code numbering and categories."""

    def test_codes_unique(self) -> None:
        values = [code.value for code in DiagnosticCode]
        assert len(values) == len(set(values))

    @pytest.mark.parametrize(
        ("prefix", "low", "high"),
        [
            ("RESOURCE", 1000, 1999),
            ("PLURAL", 1000, 1999),
            ("SEPARATOR", 1000, 1999),
            ("ARGUMENT", 2000, 2999),
            ("ENCODING", 3000, 3999),
        ],
    )
    def test_code_ranges(self, prefix: str, low: int, high: int) -> None:
        codes = [c for c in DiagnosticCode if c.name.startswith(prefix)]
        assert codes
        assert all(low <= c.value <= high for c in codes)

    def test_error_category_is_str(self) -> None:
        assert ErrorCategory.ENCODING == "encoding"
        assert str(ErrorCategory.RECURSION) == "recursion"


class TestDiagnostic:
    """Test the Diagnostic dataclass."""

    def test_str_is_message(self) -> None:
        diagnostic = ErrorTemplate.max_depth_exceeded(100)
        assert str(diagnostic) == "Maximum nesting depth (100) exceeded"

    def test_frozen(self) -> None:
        diagnostic = ErrorTemplate.max_depth_exceeded(100)
        with pytest.raises(AttributeError):
            diagnostic.message = "changed"  # type: ignore[misc]

    def test_format_error_uses_rust_style(self) -> None:
        diagnostic = ErrorTemplate.resource_not_found("greeting", "en_US")
        assert diagnostic.format_error() == DiagnosticFormatter().format(diagnostic)
        assert diagnostic.format_error().startswith("error[RESOURCE_NOT_FOUND]")


# ============================================================================
# Templates
# ============================================================================


class TestErrorTemplate:
    """Test message text and attached fields of every template."""

    @pytest.mark.parametrize(
        ("diagnostic", "code", "message"),
        [
            (
                ErrorTemplate.resource_not_found(7, "de"),
                DiagnosticCode.RESOURCE_NOT_FOUND,
                "Resource '7' not found for locale 'de'",
            ),
            (
                ErrorTemplate.plural_resource_not_found("months", "en"),
                DiagnosticCode.PLURAL_RESOURCE_NOT_FOUND,
                "Plural resource 'months' not found for locale 'en'",
            ),
            (
                ErrorTemplate.plural_category_not_found("p", "few", "en"),
                DiagnosticCode.PLURAL_CATEGORY_NOT_FOUND,
                "Plural resource 'p' has no 'few' or 'other' variant for locale 'en'",
            ),
            (
                ErrorTemplate.separator_not_found("comma", "fr"),
                DiagnosticCode.SEPARATOR_NOT_FOUND,
                "Separator 'comma' not found for locale 'fr'",
            ),
            (
                ErrorTemplate.placeholder_invalid("%q", 0, "unknown conversion 'q'"),
                DiagnosticCode.PLACEHOLDER_INVALID,
                "Invalid placeholder at position 0: unknown conversion 'q'",
            ),
            (
                ErrorTemplate.argument_missing("%s %s", 2, 1),
                DiagnosticCode.ARGUMENT_MISSING,
                "Placeholder requires argument 2 but only 1 supplied",
            ),
            (
                ErrorTemplate.argument_unused("%s", [2, 3]),
                DiagnosticCode.ARGUMENT_UNUSED,
                "Argument(s) 2, 3 not used by template",
            ),
            (
                ErrorTemplate.argument_type_mismatch("%d", 1, "d", "text"),
                DiagnosticCode.ARGUMENT_TYPE_MISMATCH,
                "Conversion '%d' cannot format argument 1 (text)",
            ),
            (
                ErrorTemplate.encoding_truncated(5, 4, 1),
                DiagnosticCode.ENCODING_TRUNCATED,
                "Truncated encoding at offset 5: needed 4 byte(s), 1 available",
            ),
            (
                ErrorTemplate.encoding_unknown_tag(0, "value", 9),
                DiagnosticCode.ENCODING_UNKNOWN_TAG,
                "Unknown value discriminant 9 at offset 0",
            ),
            (
                ErrorTemplate.encoding_invalid_flag(12, 2),
                DiagnosticCode.ENCODING_INVALID_FLAG,
                "Invalid boolean flag 2 at offset 12",
            ),
            (
                ErrorTemplate.encoding_trailing_bytes(3, 2),
                DiagnosticCode.ENCODING_TRAILING_BYTES,
                "2 trailing byte(s) after value ending at offset 3",
            ),
            (
                ErrorTemplate.encoding_length_exceeded(4, 999, 10),
                DiagnosticCode.ENCODING_LENGTH_EXCEEDED,
                "Length prefix 999 at offset 4 exceeds limit 10",
            ),
        ],
    )
    def test_message(self, diagnostic: Diagnostic, code: DiagnosticCode, message: str) -> None:
        assert diagnostic.code == code
        assert diagnostic.message == message
        assert diagnostic.severity == "error"

    def test_lookup_fields(self) -> None:
        diagnostic = ErrorTemplate.resource_not_found(42, "en_US")
        assert diagnostic.resource_id == "42"
        assert diagnostic.locale == "en_US"
        assert diagnostic.offset is None

    def test_format_fields(self) -> None:
        diagnostic = ErrorTemplate.argument_missing("Hello %s", 1, 0)
        assert diagnostic.template == "Hello %s"
        assert diagnostic.hint is not None

    def test_encoding_fields(self) -> None:
        diagnostic = ErrorTemplate.encoding_invalid_text(8, "bad byte")
        assert diagnostic.offset == 8
        assert diagnostic.message.endswith("bad byte")

    def test_number_format_failed(self) -> None:
        diagnostic = ErrorTemplate.number_format_failed(1.5, "de_DE", "boom")
        assert diagnostic.code == DiagnosticCode.NUMBER_FORMAT_FAILED
        assert "'1.5'" in diagnostic.message
        assert diagnostic.locale == "de_DE"


# ============================================================================
# Formatter
# ============================================================================


class TestDiagnosticFormatter:
    """Test DiagnosticFormatter output formats."""

    def test_defaults(self) -> None:
        formatter = DiagnosticFormatter()
        assert formatter.output_format == OutputFormat.RUST
        assert formatter.sanitize is False
        assert formatter.max_content_length == 100

    def test_rust_lookup(self) -> None:
        diagnostic = ErrorTemplate.resource_not_found("greeting", "en_US")
        assert DiagnosticFormatter().format(diagnostic) == (
            "error[RESOURCE_NOT_FOUND]: Resource 'greeting' not found for locale 'en_US'\n"
            "  --> resource: greeting\n"
            "  = help: Check that the string resource is defined in the catalog"
        )

    def test_rust_offset(self) -> None:
        diagnostic = ErrorTemplate.encoding_truncated(5, 4, 1)
        lines = DiagnosticFormatter().format(diagnostic).splitlines()
        assert lines[0] == (
            "error[ENCODING_TRUNCATED]: Truncated encoding at offset 5: "
            "needed 4 byte(s), 1 available"
        )
        assert lines[1] == "  --> offset 5"

    def test_rust_template_and_note(self) -> None:
        diagnostic = Diagnostic(
            code=DiagnosticCode.ARGUMENT_MISSING,
            message="missing",
            template="%s",
            help_url="https://example.org/errors",
            severity="warning",
        )
        assert DiagnosticFormatter().format(diagnostic) == (
            "warning[ARGUMENT_MISSING]: missing\n"
            "  = template: %s\n"
            "  = note: see https://example.org/errors"
        )

    def test_simple(self) -> None:
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        diagnostic = ErrorTemplate.separator_not_found("comma", "en")
        assert formatter.format(diagnostic) == (
            "SEPARATOR_NOT_FOUND: Separator 'comma' not found for locale 'en'"
        )

    def test_json(self) -> None:
        formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)
        data = json.loads(formatter.format(ErrorTemplate.resource_not_found(7, "de")))
        assert data["code"] == "RESOURCE_NOT_FOUND"
        assert data["code_value"] == 1001
        assert data["resource_id"] == "7"
        assert data["locale"] == "de"
        assert data["severity"] == "error"
        assert "offset" not in data
        assert "help_url" not in data

    def test_json_offset(self) -> None:
        formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)
        data = json.loads(formatter.format(ErrorTemplate.encoding_invalid_flag(12, 2)))
        assert data["offset"] == 12

    def test_control_characters_escaped(self) -> None:
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        diagnostic = Diagnostic(code=DiagnosticCode.PLACEHOLDER_INVALID, message="a\nb\x00c")
        assert formatter.format(diagnostic) == "PLACEHOLDER_INVALID: a\\nb\\x00c"

    def test_injected_resource_line_stays_on_one_line(self) -> None:
        diagnostic = ErrorTemplate.resource_not_found("x\nerror[FAKE]: y", "en")
        output = DiagnosticFormatter().format(diagnostic)
        assert not any(line.startswith("error[FAKE]") for line in output.splitlines())

    def test_sanitize_truncates(self) -> None:
        formatter = DiagnosticFormatter(
            output_format=OutputFormat.SIMPLE, sanitize=True, max_content_length=10
        )
        diagnostic = Diagnostic(code=DiagnosticCode.ARGUMENT_UNUSED, message="x" * 20)
        assert formatter.format(diagnostic) == "ARGUMENT_UNUSED: " + "x" * 10 + "..."

    def test_format_all(self) -> None:
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        output = formatter.format_all([
            ErrorTemplate.max_depth_exceeded(3),
            ErrorTemplate.encoding_truncated(0, 1, 0),
        ])
        assert output.count("\n\n") == 1

    @given(st.text(max_size=200))
    def test_rust_message_is_single_line(self, message: str) -> None:
        """Arbitrary message text never adds lines to the header."""
        diagnostic = Diagnostic(code=DiagnosticCode.ARGUMENT_MISSING, message=message)
        assert "\n" not in DiagnosticFormatter().format(diagnostic)


# ============================================================================
# Errors
# ============================================================================


class TestErrors:
    """Test the exception hierarchy."""

    @pytest.mark.parametrize(
        ("error_type", "category"),
        [
            (ResourceNotFoundError, ErrorCategory.LOOKUP),
            (FormatMismatchError, ErrorCategory.FORMAT),
            (MalformedEncodingError, ErrorCategory.ENCODING),
            (UnboundedRecursionError, ErrorCategory.RECURSION),
        ],
    )
    def test_categories(self, error_type: type[DeferredTextError], category: ErrorCategory) -> None:
        assert issubclass(error_type, DeferredTextError)
        assert error_type.category == category

    def test_plain_message(self) -> None:
        error = FormatMismatchError("bad template", template="%q")
        assert str(error) == "bad template"
        assert error.diagnostic is None
        assert error.template == "%q"

    def test_diagnostic_message(self) -> None:
        diagnostic = ErrorTemplate.resource_not_found(7, "en")
        error = ResourceNotFoundError(diagnostic, resource_id=7, locale="en")
        assert error.diagnostic is diagnostic
        assert str(error) == diagnostic.format_error()
        assert error.resource_id == 7
        assert error.locale == "en"

    def test_encoding_offset(self) -> None:
        error = MalformedEncodingError(ErrorTemplate.encoding_truncated(3, 1, 0), offset=3)
        assert error.offset == 3

    def test_recursion_max_depth(self) -> None:
        error = UnboundedRecursionError(ErrorTemplate.max_depth_exceeded(9), max_depth=9)
        assert error.max_depth == 9
        assert error.category == "recursion"

    def test_catchable_as_base(self) -> None:
        with pytest.raises(DeferredTextError):
            raise MalformedEncodingError("corrupt")
