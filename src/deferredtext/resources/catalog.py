"""Resource catalogs backing the reference resolution context.

Provides the protocol a resource source must satisfy and an immutable
in-memory implementation with a locale fallback chain.

Components:
    ResourceCatalog - Protocol for template, plural and separator lookup
    StaticCatalog - Immutable in-memory catalog keyed by locale

Lookup follows the fallback chain of the requested locale
(``de_AT`` -> ``de`` -> root ``""``); the first locale defining the id
wins. A plural resource is taken as a whole from one locale: its
categories are never merged across locales.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Protocol

from deferredtext.locale_utils import locale_fallback_chain, normalize_locale
from deferredtext.text.values import ResourceId, validate_resource_id

__all__ = ["ResourceCatalog", "StaticCatalog"]

logger = logging.getLogger(__name__)

# Plural category sets are validated against the CLDR vocabulary.
_PLURAL_CATEGORIES: frozenset[str] = frozenset({"zero", "one", "two", "few", "many", "other"})

type _Table[V] = Mapping[str, Mapping[ResourceId, V]]


class ResourceCatalog(Protocol):
    """Protocol for locale-aware resource lookup.

    Implementations return None for an absent id; raising is left to the
    resolution context, which knows how to describe the failure.

    This is a Protocol (structural typing) rather than ABC to allow
    platform resource systems to be adapted without inheritance.
    """

    def get_template(self, locale: str, resource_id: ResourceId) -> str | None:
        """Return the raw template for resource_id, or None."""
        ...

    def get_plural(self, locale: str, resource_id: ResourceId) -> Mapping[str, str] | None:
        """Return the category -> template mapping for resource_id, or None."""
        ...

    def get_separator(self, locale: str, resource_id: ResourceId) -> str | None:
        """Return the join separator for resource_id, or None."""
        ...


@dataclass(frozen=True, slots=True)
class StaticCatalog:
    """Immutable in-memory resource catalog.

    Build with from_mapping() from plain dictionaries; the tables are frozen
    into read-only mappings with normalized locale keys.

    Example:
        >>> catalog = StaticCatalog.from_mapping({
        ...     "en": {
        ...         "strings": {"greeting": "Hello %s"},
        ...         "plurals": {"months": {"one": "%d month", "other": "%d months"}},
        ...         "separators": {"comma": ", "},
        ...     },
        ... })
        >>> catalog.get_template("en_US", "greeting")
        'Hello %s'
        >>> catalog.get_plural("en_US", "months")["other"]
        '%d months'
    """

    strings: _Table[str] = field(default_factory=lambda: MappingProxyType({}))
    plurals: _Table[Mapping[str, str]] = field(default_factory=lambda: MappingProxyType({}))
    separators: _Table[str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_mapping(
        cls, data: Mapping[str, Mapping[str, Mapping[ResourceId, object]]]
    ) -> StaticCatalog:
        """Build a catalog from ``{locale: {section: {id: value}}}``.

        Sections are ``strings`` (id -> template), ``plurals``
        (id -> {category: template}) and ``separators`` (id -> separator).
        The empty-string locale is the root, consulted last.

        Raises:
            ValueError: On an unknown section, an invalid resource id, a
                plural category outside CLDR's vocabulary, or a locale
                defined twice after normalization
            TypeError: On values of the wrong type
        """
        strings: dict[str, Mapping[ResourceId, str]] = {}
        plurals: dict[str, Mapping[ResourceId, Mapping[str, str]]] = {}
        separators: dict[str, Mapping[ResourceId, str]] = {}

        for raw_locale, sections in data.items():
            locale = normalize_locale(raw_locale)
            if locale in strings:
                msg = f"Locale '{raw_locale}' defined more than once"
                raise ValueError(msg)
            unknown = set(sections) - {"strings", "plurals", "separators"}
            if unknown:
                msg = f"Unknown catalog section(s) for '{raw_locale}': {sorted(unknown)}"
                raise ValueError(msg)

            strings[locale] = _freeze_texts(sections.get("strings", {}), "strings")
            separators[locale] = _freeze_texts(sections.get("separators", {}), "separators")
            plurals[locale] = _freeze_plurals(sections.get("plurals", {}))
            logger.debug(
                "Catalog locale '%s': %d string(s), %d plural(s), %d separator(s)",
                locale,
                len(strings[locale]),
                len(plurals[locale]),
                len(separators[locale]),
            )

        return cls(
            strings=MappingProxyType(strings),
            plurals=MappingProxyType(plurals),
            separators=MappingProxyType(separators),
        )

    @property
    def locales(self) -> tuple[str, ...]:
        """Normalized locales defined by this catalog."""
        return tuple(self.strings)

    def get_template(self, locale: str, resource_id: ResourceId) -> str | None:
        """Return the template for resource_id along the locale fallback chain."""
        return _lookup(self.strings, locale, resource_id)

    def get_plural(self, locale: str, resource_id: ResourceId) -> Mapping[str, str] | None:
        """Return the plural variants for resource_id along the fallback chain."""
        return _lookup(self.plurals, locale, resource_id)

    def get_separator(self, locale: str, resource_id: ResourceId) -> str | None:
        """Return the separator for resource_id along the fallback chain."""
        return _lookup(self.separators, locale, resource_id)


def _lookup[V](table: _Table[V], locale: str, resource_id: ResourceId) -> V | None:
    for candidate in locale_fallback_chain(locale):
        entries = table.get(candidate)
        if entries is not None and resource_id in entries:
            return entries[resource_id]
    return None


def _freeze_texts(section: Mapping[ResourceId, object], name: str) -> Mapping[ResourceId, str]:
    frozen: dict[ResourceId, str] = {}
    for resource_id, value in section.items():
        validate_resource_id(resource_id, allow_null=False)
        if not isinstance(value, str):
            msg = f"{name}[{resource_id!r}] must be str, got {type(value).__name__}"
            raise TypeError(msg)
        frozen[resource_id] = value
    return MappingProxyType(frozen)


def _freeze_plurals(
    section: Mapping[ResourceId, object],
) -> Mapping[ResourceId, Mapping[str, str]]:
    frozen: dict[ResourceId, Mapping[str, str]] = {}
    for resource_id, variants in section.items():
        validate_resource_id(resource_id, allow_null=False)
        if not isinstance(variants, Mapping) or not variants:
            msg = f"plurals[{resource_id!r}] must be a non-empty mapping of category -> str"
            raise TypeError(msg)
        unknown = set(variants) - _PLURAL_CATEGORIES
        if unknown:
            msg = f"plurals[{resource_id!r}] has unknown categories: {sorted(unknown)}"
            raise ValueError(msg)
        for category, template in variants.items():
            if not isinstance(template, str):
                msg = f"plurals[{resource_id!r}][{category!r}] must be str"
                raise TypeError(msg)
        frozen[resource_id] = MappingProxyType(dict(variants))
    return MappingProxyType(frozen)
