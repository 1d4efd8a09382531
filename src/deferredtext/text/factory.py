"""Constructor functions for deferred text.

Producer-facing API that accepts plain Python values and builds the
corresponding variant. Values are coerced into arguments by as_arg():

    str           -> TextArg
    int           -> NumberArg (integral)
    float/Decimal -> NumberArg (double)
    DeferredText  -> NestedArg
    Arg           -> unchanged

Example:
    >>> text("Formatted Text with %d and %.4f and %s", 45, 0.345, "everything")
    Literal(template='Formatted Text with %d and %.4f and %s', args=(...))
    >>> resource(NULL_RESOURCE_ID, "Success", "Text")
    Joined(separator_id=0, parts=('Success', 'Text'))
    >>> plural("months", Quantity(3, use_formatted_cardinal=True), 12)
    Plural(id='months', quantity=Quantity(value=3, ...), args=(NumberArg(value=12, ...),))

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from decimal import Decimal

from deferredtext.constants import NULL_RESOURCE_ID
from deferredtext.text.values import (
    Arg,
    Joined,
    Literal,
    Lookup,
    NestedArg,
    NumberArg,
    Plural,
    Quantity,
    ResourceId,
    TextArg,
    is_arg,
    is_deferred_text,
    is_null_id,
)

__all__ = ["as_arg", "joined", "plural", "resource", "text"]

type ArgLike = str | int | float | Decimal | Arg | Literal | Lookup | Joined | Plural


def as_arg(value: object) -> Arg:
    """Coerce a plain Python value into a format argument.

    Args:
        value: Value to coerce

    Returns:
        TextArg, NumberArg or NestedArg

    Raises:
        TypeError: If value has no argument form (bool, None, containers, ...)
        ValueError: If a number is out of range or not finite
    """
    match value:
        case bool():
            # bool is an int subtype but carries no numeric meaning
            msg = "bool cannot be used as a format argument"
            raise TypeError(msg)
        case str():
            return TextArg(value)
        case int():
            return NumberArg(value)
        case float():
            return NumberArg(value, is_double=True)
        case Decimal():
            return NumberArg(float(value), is_double=True)
        case _ if is_arg(value):
            return value
        case _ if is_deferred_text(value):
            return NestedArg(value)
        case _:
            msg = f"Cannot use {type(value).__name__} as a format argument"
            raise TypeError(msg)


def text(template: str, *args: ArgLike) -> Literal:
    """Build a Literal from a template and positional arguments."""
    return Literal(template, tuple(as_arg(a) for a in args))


def resource(resource_id: ResourceId, *args: ArgLike) -> Lookup | Joined:
    """Build a Lookup for resource_id with positional arguments.

    With the null id and more than one argument, all of them str, the
    arguments are fragments to join: a Joined with the default separator is
    returned instead. With the null id and a single str the Lookup resolves
    to that text unchanged.

    Args:
        resource_id: String resource id, or NULL_RESOURCE_ID
        *args: Format arguments (see as_arg)

    Returns:
        Lookup, or Joined for the null-id fragment form
    """
    if (
        is_null_id(resource_id)
        and len(args) > 1
        and all(isinstance(a, str) for a in args)
    ):
        return Joined(NULL_RESOURCE_ID, tuple(args))  # type: ignore[arg-type]
    return Lookup(resource_id, tuple(as_arg(a) for a in args))


def joined(*parts: str, separator: ResourceId = NULL_RESOURCE_ID) -> Joined:
    """Build a Joined from literal fragments.

    Args:
        *parts: Fragments, in output order
        separator: Separator resource id; the null id joins with one space
    """
    return Joined(separator, parts)


def plural(resource_id: ResourceId, quantity: Quantity | int, *args: ArgLike) -> Plural:
    """Build a Plural for resource_id.

    Args:
        resource_id: Plural resource id
        quantity: Quantity, or a bare int (no formatted cardinal)
        *args: Explicit format arguments (see as_arg)
    """
    if not isinstance(quantity, Quantity):
        quantity = Quantity(quantity)
    return Plural(resource_id, quantity, tuple(as_arg(a) for a in args))
