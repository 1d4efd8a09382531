"""Locale utilities for BCP-47 to POSIX conversion and fallback chains.

Centralizes locale normalization so catalog keys, LocaleContext cache keys
and plural-rule lookups agree on one canonical form.

Python 3.13+.
"""

from __future__ import annotations

import functools
import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "get_system_locale",
    "locale_fallback_chain",
    "normalize_locale",
]


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).
    Encoding suffixes (".UTF-8") are dropped.

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("de_DE.UTF-8")
        'de_DE'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.split(".", 1)[0].replace("-", "_")


def locale_fallback_chain(locale_code: str) -> tuple[str, ...]:
    """Build the lookup chain from most to least specific locale.

    The chain ends with the root locale (empty string), which holds
    locale-independent resources.

    Example:
        >>> locale_fallback_chain("sr-Latn-RS")
        ('sr_Latn_RS', 'sr_Latn', 'sr', '')
        >>> locale_fallback_chain("")
        ('',)
    """
    normalized = normalize_locale(locale_code)
    if not normalized:
        return ("",)
    subtags = normalized.split("_")
    chain = ["_".join(subtags[:end]) for end in range(len(subtags), 0, -1)]
    chain.append("")
    return tuple(chain)


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Thread-safe via lru_cache internal locking.

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def get_system_locale() -> str:
    """Detect system locale from the environment, defaulting to en_US.

    Checks LC_ALL, LC_MESSAGES and LANG in that order, ignoring the "C" and
    "POSIX" pseudo-locales.
    """
    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var)
        if value and value not in ("C", "POSIX") and not value.startswith("C."):
            return normalize_locale(value)
    return "en_US"
