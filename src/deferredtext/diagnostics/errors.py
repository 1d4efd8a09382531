"""Deferred-text exception hierarchy with structured diagnostics.

All exceptions optionally carry a Diagnostic object for rich error
information. Every failure of resolve(), encode() and decode() is one of
the four concrete types below; none of them is recovered internally.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, ErrorCategory

__all__ = [
    "DeferredTextError",
    "FormatMismatchError",
    "MalformedEncodingError",
    "ResourceNotFoundError",
    "UnboundedRecursionError",
]


class DeferredTextError(Exception):
    """Base exception for all deferred-text errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
        category: Error category of the concrete subclass
    """

    category: ErrorCategory

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize DeferredTextError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class ResourceNotFoundError(DeferredTextError):
    """Resource identifier has no entry in the resolution context.

    Raised for plain templates, plural templates and join separators.
    Never replaced by a default or empty string.

    Attributes:
        resource_id: The identifier that was looked up
        locale: Locale of the context that was asked
    """

    category = ErrorCategory.LOOKUP

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        resource_id: int | str | None = None,
        locale: str = "",
    ) -> None:
        super().__init__(message)
        self.resource_id = resource_id
        self.locale = locale


class FormatMismatchError(DeferredTextError):
    """Template placeholders do not match the supplied arguments.

    Examples:
    - More placeholders than arguments
    - Arguments left unused by the template
    - %d applied to a fractional number or to text
    - Unknown conversion or dangling '%'

    Attributes:
        template: The template being formatted
    """

    category = ErrorCategory.FORMAT

    def __init__(self, message: str | Diagnostic, *, template: str = "") -> None:
        super().__init__(message)
        self.template = template


class MalformedEncodingError(DeferredTextError):
    """Serialized buffer is truncated or otherwise corrupt.

    The codec does not attempt partial recovery.

    Attributes:
        offset: Byte offset at which decoding failed
    """

    category = ErrorCategory.ENCODING

    def __init__(self, message: str | Diagnostic, *, offset: int = 0) -> None:
        super().__init__(message)
        self.offset = offset


class UnboundedRecursionError(DeferredTextError):
    """Nested value chain exceeds the maximum depth.

    Treated as a caller error; output is never silently truncated.

    Attributes:
        max_depth: The limit that was exceeded
    """

    category = ErrorCategory.RECURSION

    def __init__(self, message: str | Diagnostic, *, max_depth: int = 0) -> None:
        super().__init__(message)
        self.max_depth = max_depth
