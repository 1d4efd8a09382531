"""Tests for LocaleContext - Babel-backed number formatting without global state.

Tests immutable locale configuration, thread-safe caching and CLDR-compliant
number formatting for integral and double values.
"""

from __future__ import annotations

import logging
import threading
from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from deferredtext.constants import MAX_LOCALE_CACHE_SIZE
from deferredtext.diagnostics import DiagnosticCode, FormatMismatchError
from deferredtext.runtime.locale_context import LocaleContext

# ============================================================================
# Cache Management Tests
# ============================================================================


class TestLocaleContextCacheManagement:
    """Test LocaleContext cache operations (clear_cache, cache_size, cache_info)."""

    def test_clear_cache_empties_cache(self) -> None:
        """clear_cache() empties the cache."""
        LocaleContext.clear_cache()
        LocaleContext.create("en-US")
        LocaleContext.create("de-DE")
        assert LocaleContext.cache_size() > 0

        LocaleContext.clear_cache()
        assert LocaleContext.cache_size() == 0

    def test_cache_size_returns_count(self) -> None:
        """cache_size() returns number of cached instances."""
        LocaleContext.clear_cache()
        LocaleContext.create("en-US")
        assert LocaleContext.cache_size() == 1

        LocaleContext.create("de-DE")
        assert LocaleContext.cache_size() == 2

    def test_same_instance_for_equivalent_codes(self) -> None:
        """BCP-47 and POSIX spellings share one cache entry."""
        LocaleContext.clear_cache()
        assert LocaleContext.create("en-US") is LocaleContext.create("en_US")
        assert LocaleContext.cache_size() == 1

    def test_cache_info(self) -> None:
        LocaleContext.clear_cache()
        LocaleContext.create("fr-FR")
        info = LocaleContext.cache_info()
        assert info["size"] == 1
        assert info["max_size"] == MAX_LOCALE_CACHE_SIZE
        assert info["locales"] == ("fr_FR",)

    def test_lru_eviction(self) -> None:
        """The least recently used entry is evicted at capacity."""
        LocaleContext.clear_cache()
        LocaleContext.create("en_US")
        for i in range(MAX_LOCALE_CACHE_SIZE):
            LocaleContext.create(f"xx_{i}")
        assert LocaleContext.cache_size() == MAX_LOCALE_CACHE_SIZE
        assert "en_US" not in LocaleContext.cache_info()["locales"]  # type: ignore[operator]
        LocaleContext.clear_cache()

    def test_concurrent_create_returns_one_instance(self) -> None:
        LocaleContext.clear_cache()
        results: list[LocaleContext] = []

        def worker() -> None:
            results.append(LocaleContext.create("pl_PL"))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len({id(r) for r in results}) == 1


# ============================================================================
# Creation and Fallback
# ============================================================================


class TestLocaleContextCreation:
    """Test create() fallback and create_or_raise() strictness."""

    def test_known_locale(self) -> None:
        ctx = LocaleContext.create("de-DE")
        assert ctx.is_fallback is False
        assert ctx.babel_locale.territory == "DE"

    def test_unknown_locale_falls_back(self, caplog: pytest.LogCaptureFixture) -> None:
        LocaleContext.clear_cache()
        with caplog.at_level(logging.WARNING, logger="deferredtext.runtime.locale_context"):
            ctx = LocaleContext.create("xx-YY")
        assert ctx.is_fallback is True
        assert ctx.locale_code == "xx-YY"
        assert str(ctx.babel_locale) == "en_US"
        assert any("Falling back to en_US" in r.getMessage() for r in caplog.records)

    def test_create_or_raise_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unknown locale identifier"):
            LocaleContext.create_or_raise("xx-YY")

    def test_create_or_raise_known(self) -> None:
        assert LocaleContext.create_or_raise("lv_LV").is_fallback is False


# ============================================================================
# Number Formatting
# ============================================================================


class TestFormatNumber:
    """Test integral and double formatting."""

    @pytest.mark.parametrize(
        ("locale", "value", "grouping", "expected"),
        [
            ("en_US", 1234567, False, "1234567"),
            ("en_US", 1234567, True, "1,234,567"),
            ("de_DE", 1234567, True, "1.234.567"),
            ("en_US", -42, False, "-42"),
            ("en_US", 0, False, "0"),
        ],
    )
    def test_integral(self, locale: str, value: int, grouping: bool, expected: str) -> None:
        ctx = LocaleContext.create(locale)
        assert ctx.format_number(value, use_grouping=grouping) == expected

    @pytest.mark.parametrize(
        ("value", "digits", "expected"),
        [
            (0.345, 4, "0.3450"),
            (234.99, None, "234.99"),
            (234.99, 1, "235.0"),
            (2.5, 0, "3"),
            (0.125, 2, "0.13"),
            (1e16, None, "10000000000000000"),
            (1.0, None, "1.0"),
        ],
    )
    def test_double_en(self, value: float, digits: int | None, expected: str) -> None:
        ctx = LocaleContext.create("en_US")
        assert ctx.format_number(value, is_double=True, fraction_digits=digits) == expected

    def test_double_de(self) -> None:
        ctx = LocaleContext.create("de_DE")
        assert ctx.format_number(1234.5, is_double=True, fraction_digits=2) == "1234,50"

    def test_huge_double(self) -> None:
        """Values near the double maximum keep every integer digit."""
        ctx = LocaleContext.create("en_US")
        result = ctx.format_number(1.7976931348623157e308, is_double=True, fraction_digits=1)
        assert result.startswith("17976931348623157")
        assert result.endswith(".0")

    def test_babel_failure_wrapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Babel errors surface as FormatMismatchError."""
        from babel import numbers as babel_numbers

        def broken(*args: object, **kwargs: object) -> str:
            msg = "boom"
            raise ValueError(msg)

        monkeypatch.setattr(babel_numbers, "format_decimal", broken)
        with pytest.raises(FormatMismatchError) as exc_info:
            LocaleContext.create("en_US").format_number(1)
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.NUMBER_FORMAT_FAILED

    @given(st.floats(min_value=-1e15, max_value=1e15, allow_nan=False))
    def test_shortest_repr_round_trips(self, value: float) -> None:
        """Without explicit digits, en_US output parses back to the same double."""
        ctx = LocaleContext.create("en_US")
        assert float(ctx.format_number(value, is_double=True)) == value

    @given(st.integers(min_value=-(2**63), max_value=2**63 - 1))
    def test_integral_exact(self, value: int) -> None:
        ctx = LocaleContext.create("en_US")
        assert Decimal(ctx.format_number(value)) == value
