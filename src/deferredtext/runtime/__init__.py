"""Deferred-text runtime package.

Provides resolution of DeferredText values, the TextContext protocol the
resolver consumes, and the Babel-backed reference context.
Depends on the text package for the value model.

Python 3.13+.
"""

from .context import CatalogContext, TextContext
from .formatting import format_template, parse_template
from .locale_context import LocaleContext
from .markup import contains_markup
from .plural_rules import select_plural_category
from .resolver import TextResolver, resolve

__all__ = [
    "CatalogContext",
    "LocaleContext",
    "TextContext",
    "TextResolver",
    "contains_markup",
    "format_template",
    "parse_template",
    "resolve",
    "select_plural_category",
]
