"""Deferred-text value model and constructor functions.

Python 3.13+. Zero external dependencies.
"""

from .factory import as_arg, joined, plural, resource, text
from .values import (
    EMPTY,
    Arg,
    DeferredText,
    Empty,
    Joined,
    Literal,
    Lookup,
    NestedArg,
    NumberArg,
    Plural,
    Quantity,
    ResolvedText,
    ResourceId,
    TextArg,
    is_arg,
    is_deferred_text,
    is_null_id,
    validate_resource_id,
)

__all__ = [
    "EMPTY",
    "Arg",
    "DeferredText",
    "Empty",
    "Joined",
    "Literal",
    "Lookup",
    "NestedArg",
    "NumberArg",
    "Plural",
    "Quantity",
    "ResolvedText",
    "ResourceId",
    "TextArg",
    "as_arg",
    "is_arg",
    "is_deferred_text",
    "is_null_id",
    "joined",
    "plural",
    "resource",
    "text",
    "validate_resource_id",
]
