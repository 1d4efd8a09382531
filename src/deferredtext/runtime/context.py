"""Resolution context: the interface the resolver consumes.

The resolver never touches resources, locale data or plural rules itself;
it asks a TextContext. Platforms adapt their own resource systems to this
protocol. CatalogContext is the reference implementation over a
ResourceCatalog, using Babel for number formatting and CLDR plural rules.

Python 3.13+. Uses Babel via LocaleContext and plural_rules.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from deferredtext.diagnostics import ErrorTemplate, ResourceNotFoundError
from deferredtext.locale_utils import get_system_locale, normalize_locale
from deferredtext.resources.catalog import ResourceCatalog
from deferredtext.runtime.locale_context import LocaleContext
from deferredtext.runtime.plural_rules import select_plural_category
from deferredtext.text.values import ResourceId

__all__ = ["CatalogContext", "TextContext"]

logger = logging.getLogger(__name__)


@runtime_checkable
class TextContext(Protocol):
    """Runtime text-resolution context.

    Supplies the locale, resource lookup, number formatting and plural-rule
    evaluation. Lookup methods raise ResourceNotFoundError for absent ids;
    they never substitute a default.

    The context is passed per call and is not retained by the resolver.
    """

    @property
    def locale(self) -> str:
        """Locale code used for every lookup and formatting call."""
        ...

    def lookup_template(self, resource_id: ResourceId) -> str:
        """Return the raw template string for resource_id."""
        ...

    def lookup_plural_template(self, resource_id: ResourceId, category: str) -> str:
        """Return the template of plural resource resource_id for category."""
        ...

    def lookup_separator(self, resource_id: ResourceId) -> str:
        """Return the join separator named by resource_id."""
        ...

    def format_number(
        self,
        value: int | float,
        *,
        is_double: bool,
        fraction_digits: int | None = None,
        use_grouping: bool = False,
    ) -> str:
        """Format a number with the locale's conventions."""
        ...

    def select_plural_category(self, quantity: int) -> str:
        """Return the CLDR plural category of quantity in this locale."""
        ...


class CatalogContext:
    """TextContext over a ResourceCatalog.

    Plural templates fall back from the selected category to ``other``
    within the resource found for the locale. Number formatting and plural
    selection use Babel's CLDR data for the context's locale.

    Thread Safety:
        Immutable after construction; safe to share between threads.

    Example:
        >>> catalog = StaticCatalog.from_mapping({"en": {"strings": {"hi": "Hi %s"}}})
        >>> ctx = CatalogContext(catalog, "en_US")
        >>> ctx.lookup_template("hi")
        'Hi %s'
    """

    __slots__ = ("_catalog", "_locale", "_locale_context")

    def __init__(self, catalog: ResourceCatalog, locale: str | None = None) -> None:
        """Initialize context.

        Args:
            catalog: Resource source for templates, plurals and separators
            locale: Locale code (BCP-47 or POSIX). None uses the system locale.
        """
        resolved_locale = normalize_locale(locale) if locale is not None else get_system_locale()
        self._catalog = catalog
        self._locale = resolved_locale
        self._locale_context = LocaleContext.create(resolved_locale)

    def __repr__(self) -> str:
        return f"CatalogContext(locale={self._locale!r})"

    @property
    def locale(self) -> str:
        """Normalized locale code of this context."""
        return self._locale

    @property
    def locale_context(self) -> LocaleContext:
        """Babel-backed formatter for this context's locale."""
        return self._locale_context

    def lookup_template(self, resource_id: ResourceId) -> str:
        """Return the raw template for resource_id.

        Raises:
            ResourceNotFoundError: If no locale in the fallback chain defines it
        """
        template = self._catalog.get_template(self._locale, resource_id)
        if template is None:
            raise ResourceNotFoundError(
                ErrorTemplate.resource_not_found(resource_id, self._locale),
                resource_id=resource_id,
                locale=self._locale,
            )
        return template

    def lookup_plural_template(self, resource_id: ResourceId, category: str) -> str:
        """Return the template for category, falling back to 'other'.

        Raises:
            ResourceNotFoundError: If the plural resource is absent, or has
                neither the category nor an 'other' variant
        """
        variants = self._catalog.get_plural(self._locale, resource_id)
        if variants is None:
            raise ResourceNotFoundError(
                ErrorTemplate.plural_resource_not_found(resource_id, self._locale),
                resource_id=resource_id,
                locale=self._locale,
            )
        template = variants.get(category)
        if template is None:
            template = variants.get("other")
            if template is None:
                raise ResourceNotFoundError(
                    ErrorTemplate.plural_category_not_found(resource_id, category, self._locale),
                    resource_id=resource_id,
                    locale=self._locale,
                )
            logger.debug(
                "Plural '%s' has no '%s' variant for %s; using 'other'",
                resource_id,
                category,
                self._locale,
            )
        return template

    def lookup_separator(self, resource_id: ResourceId) -> str:
        """Return the separator for resource_id.

        Raises:
            ResourceNotFoundError: If no locale in the fallback chain defines it
        """
        separator = self._catalog.get_separator(self._locale, resource_id)
        if separator is None:
            raise ResourceNotFoundError(
                ErrorTemplate.separator_not_found(resource_id, self._locale),
                resource_id=resource_id,
                locale=self._locale,
            )
        return separator

    def format_number(
        self,
        value: int | float,
        *,
        is_double: bool,
        fraction_digits: int | None = None,
        use_grouping: bool = False,
    ) -> str:
        """Format a number via the Babel-backed LocaleContext."""
        return self._locale_context.format_number(
            value,
            is_double=is_double,
            fraction_digits=fraction_digits,
            use_grouping=use_grouping,
        )

    def select_plural_category(self, quantity: int) -> str:
        """Return the CLDR plural category of quantity for this locale."""
        return select_plural_category(quantity, self._locale)
