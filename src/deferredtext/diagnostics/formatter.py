"""Diagnostic formatting service.

Centralizes diagnostic output formatting with configurable options.
Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]

# Control characters are escaped so user-supplied templates and resource
# ids cannot inject fake lines into logs.
_CONTROL_ESCAPES: dict[int, str] = {
    code: f"\\x{code:02x}" for code in [*range(0x00, 0x20), 0x7F]
}
_CONTROL_ESCAPES[ord("\n")] = "\\n"
_CONTROL_ESCAPES[ord("\r")] = "\\r"
_CONTROL_ESCAPES[ord("\t")] = "\\t"


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    RUST = "rust"  # Rust compiler-style output (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Centralizes formatting of Diagnostic objects into human-readable
    or machine-readable output.

    Attributes:
        output_format: Output style (rust, simple, json)
        sanitize: Truncate content to prevent information leakage
        max_content_length: Maximum content length when sanitizing

    Example:
        >>> formatter = DiagnosticFormatter()
        >>> diagnostic = ErrorTemplate.resource_not_found("greeting", "en_US")
        >>> print(formatter.format(diagnostic))
        error[RESOURCE_NOT_FOUND]: Resource 'greeting' not found for locale 'en_US'
          --> resource: greeting
          = help: Check that the string resource is defined in the catalog

        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(diagnostic))
        RESOURCE_NOT_FOUND: Resource 'greeting' not found for locale 'en_US'
    """

    output_format: OutputFormat = OutputFormat.RUST
    sanitize: bool = False
    max_content_length: int = 100

    def format(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic.

        Args:
            diagnostic: Diagnostic to format

        Returns:
            Formatted diagnostic string
        """
        match self.output_format:
            case OutputFormat.RUST:
                return self._format_rust(diagnostic)
            case OutputFormat.SIMPLE:
                return self._format_simple(diagnostic)
            case OutputFormat.JSON:
                return self._format_json(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Format multiple diagnostics separated by blank lines."""
        return "\n\n".join(self.format(d) for d in diagnostics)

    def _format_rust(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in Rust compiler style.

        Example output:
            error[ENCODING_TRUNCATED]: Truncated encoding at offset 5: ...
              --> offset 5
              = help: The buffer was cut short in transport or storage
        """
        message = self._escape(diagnostic.message)
        parts = [f"{diagnostic.severity}[{diagnostic.code.name}]: {message}"]

        if diagnostic.resource_id is not None:
            parts.append(f"  --> resource: {self._escape(diagnostic.resource_id)}")
        elif diagnostic.offset is not None:
            parts.append(f"  --> offset {diagnostic.offset}")

        if diagnostic.template is not None:
            parts.append(f"  = template: {self._escape(diagnostic.template)}")

        if diagnostic.hint:
            parts.append(f"  = help: {self._escape(diagnostic.hint)}")

        if diagnostic.help_url:
            parts.append(f"  = note: see {diagnostic.help_url}")

        return "\n".join(parts)

    def _format_simple(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in single-line format.

        Example output:
            RESOURCE_NOT_FOUND: Resource 'greeting' not found for locale 'en_US'
        """
        return f"{diagnostic.code.name}: {self._escape(diagnostic.message)}"

    def _format_json(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic as JSON.

        Example output:
            {"code": "RESOURCE_NOT_FOUND", "code_value": 1001, "message": "...", ...}
        """
        data: dict[str, str | int | None] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": self._maybe_sanitize(diagnostic.message),
            "severity": diagnostic.severity,
        }

        if diagnostic.resource_id is not None:
            data["resource_id"] = diagnostic.resource_id

        if diagnostic.locale is not None:
            data["locale"] = diagnostic.locale

        if diagnostic.template is not None:
            data["template"] = self._maybe_sanitize(diagnostic.template)

        if diagnostic.offset is not None:
            data["offset"] = diagnostic.offset

        if diagnostic.hint:
            data["hint"] = self._maybe_sanitize(diagnostic.hint)

        if diagnostic.help_url:
            data["help_url"] = diagnostic.help_url

        return json.dumps(data, ensure_ascii=False)

    def _escape(self, text: str) -> str:
        """Escape control characters, then apply sanitization."""
        return self._maybe_sanitize(text.translate(_CONTROL_ESCAPES))

    def _maybe_sanitize(self, text: str) -> str:
        """Truncate text if sanitization is enabled.

        Args:
            text: Text to possibly truncate

        Returns:
            Original or truncated text
        """
        if self.sanitize and len(text) > self.max_content_length:
            return text[: self.max_content_length] + "..."
        return text
