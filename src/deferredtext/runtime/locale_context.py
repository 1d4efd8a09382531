"""Locale context for thread-safe number formatting.

This module provides locale-aware formatting without global state mutation.
Uses Babel for CLDR-compliant number formatting.

Architecture:
    - LocaleContext: Immutable locale configuration container
    - Formatters use Babel (thread-safe, CLDR-based)
    - No dependency on Python's locale module (avoids global state)
    - Each CatalogContext owns its LocaleContext (locale isolation)

Python 3.13+. Uses Babel for i18n.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from threading import RLock
from typing import ClassVar

from babel import Locale, UnknownLocaleError
from babel import numbers as babel_numbers

from deferredtext.constants import MAX_LOCALE_CACHE_SIZE
from deferredtext.diagnostics import ErrorTemplate, FormatMismatchError
from deferredtext.locale_utils import normalize_locale

__all__ = ["LocaleContext"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LocaleContext:
    """Immutable locale configuration for formatting operations.

    Use LocaleContext.create() factory to construct instances with proper validation.
    Direct construction via __init__ is not recommended (bypasses validation).

    Cache Management:
        LocaleContext uses an internal LRU cache for instance reuse:
        - LocaleContext.clear_cache(): Clear all cached instances
        - LocaleContext.cache_size(): Get current cache size
        - LocaleContext.cache_info(): Get detailed cache statistics

    Examples:
        >>> ctx = LocaleContext.create('en-US')
        >>> ctx.format_number(1234, use_grouping=True)
        '1,234'

        >>> ctx = LocaleContext.create('de-DE')
        >>> ctx.format_number(1234.5, is_double=True, fraction_digits=2)
        '1234,50'

        >>> # Invalid locales fall back to en_US with warning logged
        >>> ctx = LocaleContext.create('invalid-locale')
        >>> ctx.is_fallback
        True

    Thread Safety:
        LocaleContext is immutable and thread-safe. Cache operations are
        protected by RLock.
    """

    _cache: ClassVar[OrderedDict[str, "LocaleContext"]] = OrderedDict()
    _cache_lock: ClassVar[RLock] = RLock()

    locale_code: str
    _babel_locale: Locale
    is_fallback: bool = False

    @classmethod
    def clear_cache(cls) -> None:
        """Clear the locale context cache."""
        with cls._cache_lock:
            cls._cache.clear()

    @classmethod
    def cache_size(cls) -> int:
        """Get current number of cached LocaleContext instances."""
        with cls._cache_lock:
            return len(cls._cache)

    @classmethod
    def cache_info(cls) -> dict[str, int | tuple[str, ...]]:
        """Get detailed cache statistics.

        Returns:
            Dictionary with size, max_size and cached locales (LRU order)
        """
        with cls._cache_lock:
            return {
                "size": len(cls._cache),
                "max_size": MAX_LOCALE_CACHE_SIZE,
                "locales": tuple(cls._cache.keys()),
            }

    @classmethod
    def create(cls, locale_code: str) -> "LocaleContext":
        """Create LocaleContext with graceful fallback for invalid locales.

        For unknown or invalid locales, logs a warning and falls back to en_US
        while preserving the original locale_code for debugging. Use
        create_or_raise() for strict validation.

        Thread Safety:
            Concurrent calls with same locale_code return the same instance.

        Args:
            locale_code: BCP 47 or POSIX locale identifier

        Returns:
            LocaleContext instance
        """
        cache_key = normalize_locale(locale_code)

        with cls._cache_lock:
            if cache_key in cls._cache:
                cls._cache.move_to_end(cache_key)
                return cls._cache[cache_key]

        used_fallback = False
        try:
            babel_locale = Locale.parse(cache_key)
        except UnknownLocaleError as e:
            logger.warning("Unknown locale '%s': %s. Falling back to en_US", locale_code, e)
            babel_locale = Locale.parse("en_US")
            used_fallback = True
        except (ValueError, TypeError) as e:
            logger.warning(
                "Invalid locale format '%s': %s. Falling back to en_US", locale_code, e
            )
            babel_locale = Locale.parse("en_US")
            used_fallback = True

        ctx = cls(locale_code=locale_code, _babel_locale=babel_locale, is_fallback=used_fallback)

        # Double-check: another thread may have populated the key meanwhile
        with cls._cache_lock:
            if cache_key in cls._cache:
                return cls._cache[cache_key]
            if len(cls._cache) >= MAX_LOCALE_CACHE_SIZE:
                cls._cache.popitem(last=False)
            cls._cache[cache_key] = ctx
            return ctx

    @classmethod
    def create_or_raise(cls, locale_code: str) -> "LocaleContext":
        """Create LocaleContext or raise on validation failure.

        Raises:
            ValueError: If locale code is invalid or unknown
        """
        try:
            babel_locale = Locale.parse(normalize_locale(locale_code))
        except UnknownLocaleError as e:
            msg = f"Unknown locale identifier '{locale_code}': {e}"
            raise ValueError(msg) from None
        except (ValueError, TypeError) as e:
            msg = f"Invalid locale format '{locale_code}': {e}"
            raise ValueError(msg) from None
        return cls(locale_code=locale_code, _babel_locale=babel_locale)

    @property
    def babel_locale(self) -> Locale:
        """Pre-validated Babel Locale object for this context."""
        return self._babel_locale

    def format_number(
        self,
        value: int | float,
        *,
        is_double: bool = False,
        fraction_digits: int | None = None,
        use_grouping: bool = False,
    ) -> str:
        """Format number with locale-specific digits and separators.

        Args:
            value: Number to format
            is_double: Format as a fractional number (default: integral)
            fraction_digits: Exact fraction digits for doubles. None keeps
                the shortest representation that round-trips the value.
                Ignored for integral numbers.
            use_grouping: Use the locale's grouping separator (default: False)

        Returns:
            Formatted number string according to locale rules

        Raises:
            FormatMismatchError: If Babel cannot format the value

        Examples:
            >>> ctx = LocaleContext.create('en-US')
            >>> ctx.format_number(0.345, is_double=True, fraction_digits=4)
            '0.3450'
            >>> ctx.format_number(234.99, is_double=True)
            '234.99'
            >>> LocaleContext.create('lv-LV').format_number(1234567, use_grouping=True)
            '1 234 567'
        """
        integer_part = "#,##0" if use_grouping else "0"
        try:
            if not is_double:
                return str(
                    babel_numbers.format_decimal(
                        int(value), format=integer_part, locale=self.babel_locale
                    )
                )

            # repr() is the shortest string that round-trips the double
            number = Decimal(repr(float(value)))
            if fraction_digits is None:
                fraction_digits = max(0, -int(number.as_tuple().exponent))

            format_pattern = (
                f"{integer_part}.{'0' * fraction_digits}" if fraction_digits else integer_part
            )
            # Doubles reach 1e308; quantizing needs every integer digit in scope
            with localcontext() as decimal_context:
                decimal_context.prec = max(28, number.adjusted() + fraction_digits + 2)
                number = number.quantize(Decimal(1).scaleb(-fraction_digits), ROUND_HALF_UP)
                return str(
                    babel_numbers.format_decimal(
                        number, format=format_pattern, locale=self.babel_locale
                    )
                )
        except (ValueError, TypeError, InvalidOperation, OverflowError) as e:
            raise FormatMismatchError(
                ErrorTemplate.number_format_failed(value, self.locale_code, str(e))
            ) from e
