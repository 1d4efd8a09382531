"""Shared constants for deferredtext.

This module provides centralized configuration constants used across the
value model, resolver and codec. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Identifiers: The null resource identifier
- Depth limits: Recursion protection for resolution and encoding
- Formatting: Separator, float digits and markup vocabulary
- Cache limits: Memory bounds for LocaleContext caching
- Codec limits: Fixed-width integer bounds of the wire format

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Identifiers
    "NULL_RESOURCE_ID",
    # Depth limits
    "MAX_DEPTH",
    # Formatting
    "DEFAULT_SEPARATOR",
    "DEFAULT_FLOAT_DIGITS",
    "DEFAULT_MARKUP_TAGS",
    # Cache limits
    "MAX_LOCALE_CACHE_SIZE",
    # Codec limits
    "INT64_MIN",
    "INT64_MAX",
    "MAX_ENCODED_LENGTH",
]

# ============================================================================
# IDENTIFIERS
# ============================================================================

# The null resource identifier. A Lookup or Joined carrying it does not name
# any resource: its arguments (or parts) are used as literal fragments.
NULL_RESOURCE_ID: int = 0

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum nesting of NestedArg values. Applies to resolve(), encode() and
# decode(). 100 levels of nested deferred text is malformed input.
MAX_DEPTH: int = 100

# ============================================================================
# FORMATTING
# ============================================================================

# Separator placed between fragments of a Joined value with a null separator id.
DEFAULT_SEPARATOR: str = " "

# Fraction digits used by %f when the placeholder carries no precision.
DEFAULT_FLOAT_DIGITS: int = 6

# Inline markup tags recognized when classifying resolved text as rich.
DEFAULT_MARKUP_TAGS: frozenset[str] = frozenset({
    "a", "b", "big", "br", "em", "font", "i", "p", "s",
    "small", "span", "strike", "strong", "sub", "sup", "tt", "u",
})

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Maximum cached LocaleContext instances.
# 128 covers typical multi-region applications (major locales + variants).
MAX_LOCALE_CACHE_SIZE: int = 128

# ============================================================================
# CODEC LIMITS
# ============================================================================

# Integers (resource ids, NumberArg values, quantities) travel as signed i64.
INT64_MIN: int = -(2**63)
INT64_MAX: int = 2**63 - 1

# Upper bound on any single length prefix read by decode() (64 MiB).
# Prevents allocation of huge buffers from a corrupt length field.
MAX_ENCODED_LENGTH: int = 64 * 1024 * 1024
