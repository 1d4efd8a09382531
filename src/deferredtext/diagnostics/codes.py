"""Diagnostic codes and data structures.

Defines error codes and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "ErrorCategory",
]


class ErrorCategory(StrEnum):
    """Error categorization for DeferredTextError subclasses.

    Inherits from ``StrEnum`` so that ``str(category)`` and direct string
    comparisons work without accessing ``.value``.

    Categories:
        LOOKUP: Resource identifier absent from the resolution context
        FORMAT: Placeholder/argument arity or type mismatch
        ENCODING: Corrupt or truncated serialized buffer
        RECURSION: Nested value chain deeper than the configured limit
    """

    LOOKUP = "lookup"
    FORMAT = "format"
    ENCODING = "encoding"
    RECURSION = "recursion"


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Lookup errors (missing strings, plurals, separators)
        2000-2999: Format errors (placeholder/argument mismatches)
        3000-3999: Encoding errors (codec input rejected)
        4000-4999: Recursion errors (nesting limit exceeded)
    """

    # Lookup errors (1000-1999)
    RESOURCE_NOT_FOUND = 1001
    PLURAL_RESOURCE_NOT_FOUND = 1002
    PLURAL_CATEGORY_NOT_FOUND = 1003
    SEPARATOR_NOT_FOUND = 1004

    # Format errors (2000-2999)
    PLACEHOLDER_INVALID = 2001
    ARGUMENT_MISSING = 2002
    ARGUMENT_UNUSED = 2003
    ARGUMENT_TYPE_MISMATCH = 2004
    NUMBER_FORMAT_FAILED = 2005

    # Encoding errors (3000-3999)
    ENCODING_TRUNCATED = 3001
    ENCODING_UNKNOWN_TAG = 3002
    ENCODING_INVALID_FLAG = 3003
    ENCODING_INVALID_TEXT = 3004
    ENCODING_TRAILING_BYTES = 3005
    ENCODING_INVALID_VALUE = 3006
    ENCODING_LENGTH_EXCEEDED = 3007

    # Recursion errors (4000-4999)
    MAX_DEPTH_EXCEEDED = 4001


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        help_url: Documentation URL for this error
        resource_id: Resource identifier involved (lookup errors)
        locale: Locale of the resolution context (lookup errors)
        template: Template being formatted (format errors)
        offset: Byte offset in the encoded buffer (encoding errors)
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    help_url: str | None = None
    resource_id: str | None = None
    locale: str | None = None
    template: str | None = None
    offset: int | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Delegates to DiagnosticFormatter for consistent output with
        control-character escaping.

        Example output:
            error[RESOURCE_NOT_FOUND]: Resource 'greeting' not found for locale 'en_US'
              --> resource: greeting
              = help: Check that the resource is defined in the catalog

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
