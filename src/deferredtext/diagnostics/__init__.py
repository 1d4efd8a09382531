"""Diagnostic system for deferred-text errors.

Provides structured error diagnostics with codes, hints, and typed exceptions.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, ErrorCategory
from .errors import (
    DeferredTextError,
    FormatMismatchError,
    MalformedEncodingError,
    ResourceNotFoundError,
    UnboundedRecursionError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "DeferredTextError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorCategory",
    "ErrorTemplate",
    "FormatMismatchError",
    "MalformedEncodingError",
    "OutputFormat",
    "ResourceNotFoundError",
    "UnboundedRecursionError",
]
