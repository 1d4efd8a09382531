"""CLDR plural rules implementation using Babel.

Provides plural category selection for all locales using Babel's CLDR data.

Python 3.13+. Depends on Babel for CLDR data.

Reference: https://www.unicode.org/cldr/charts/47/supplemental/language_plural_rules.html
"""

from babel.core import UnknownLocaleError

from deferredtext.locale_utils import get_babel_locale

__all__ = ["select_plural_category"]


def select_plural_category(n: int | float, locale: str) -> str:
    """Select CLDR plural category for number using Babel's CLDR data.

    Args:
        n: Number to categorize
        locale: Locale code (e.g., "lv_LV", "en_US", "ar-SA")

    Returns:
        Plural category: "zero", "one", "two", "few", "many", or "other"

    Examples:
        >>> select_plural_category(0, "lv_LV")
        'zero'
        >>> select_plural_category(1, "en_US")
        'one'
        >>> select_plural_category(5, "ru_RU")
        'many'
        >>> select_plural_category(42, "ja_JP")
        'other'

    Unknown or malformed locales use the CLDR root rule, which maps every
    number to "other" and makes no language-specific assumption.
    """
    try:
        locale_obj = get_babel_locale(locale)
    except (UnknownLocaleError, ValueError):
        return "other"

    return locale_obj.plural_form(n)
