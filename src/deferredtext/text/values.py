"""Deferred-text value model.

A DeferredText value describes how to produce text later, against a
resolution context, instead of holding the resolved string. The variant
set is closed:

    Empty   - no content; the EMPTY singleton
    Literal - format template with positional arguments
    Lookup  - template fetched by resource id, then formatted
    Joined  - literal fragments joined with a (looked-up) separator
    Plural  - quantity-sensitive template, then formatted

All nodes are frozen, slotted dataclasses with tuple fields, so values are
immutable, hashable and compare structurally. Immutability also makes a
value that contains itself impossible to construct.

Constructors validate shape only. They never consult resources: a missing
resource surfaces at resolution time.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar, TypeIs

from deferredtext.constants import INT64_MAX, INT64_MIN, NULL_RESOURCE_ID

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Identifiers
    "ResourceId",
    "is_null_id",
    "validate_resource_id",
    # Arguments
    "TextArg",
    "NumberArg",
    "NestedArg",
    "Quantity",
    # Variants
    "Empty",
    "EMPTY",
    "Literal",
    "Lookup",
    "Joined",
    "Plural",
    # Result
    "ResolvedText",
    # Type aliases
    "Arg",
    "DeferredText",
    "is_deferred_text",
    "is_arg",
]

# ============================================================================
# IDENTIFIERS
# ============================================================================

type ResourceId = int | str


def is_null_id(resource_id: ResourceId) -> bool:
    """Check whether resource_id is the null identifier."""
    return type(resource_id) is int and resource_id == NULL_RESOURCE_ID


def validate_resource_id(resource_id: object, *, allow_null: bool = True) -> None:
    """Validate a resource identifier.

    Integer ids must be non-negative and fit a signed 64-bit slot. String ids
    must be non-empty.

    Args:
        resource_id: Identifier to validate
        allow_null: Accept the null identifier (default: True)

    Raises:
        TypeError: If resource_id is neither int nor str (bool is rejected)
        ValueError: If resource_id is out of range, empty, or null when
            allow_null is False
    """
    if isinstance(resource_id, bool) or not isinstance(resource_id, (int, str)):
        msg = f"Resource id must be int or str, got {type(resource_id).__name__}"
        raise TypeError(msg)
    if isinstance(resource_id, int):
        if resource_id < 0 or resource_id > INT64_MAX:
            msg = f"Resource id must be in [0, {INT64_MAX}], got {resource_id}"
            raise ValueError(msg)
        if not allow_null and resource_id == NULL_RESOURCE_ID:
            msg = "Resource id must not be the null identifier"
            raise ValueError(msg)
    elif not resource_id:
        msg = "Resource id must not be an empty string"
        raise ValueError(msg)


def _check_int64(value: int, what: str) -> None:
    if value < INT64_MIN or value > INT64_MAX:
        msg = f"{what} must fit a signed 64-bit integer, got {value}"
        raise ValueError(msg)


# ============================================================================
# ARGUMENTS
# ============================================================================


@dataclass(frozen=True, slots=True)
class TextArg:
    """Plain text argument, substituted verbatim."""

    text: str

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            msg = f"TextArg.text must be str, got {type(self.text).__name__}"
            raise TypeError(msg)


@dataclass(frozen=True, slots=True)
class NumberArg:
    """Numeric argument, formatted with the context's locale conventions.

    Attributes:
        value: The number; an int when is_double is False, a float otherwise
        is_double: Fractional (double-precision) rather than integral number

    Precision is fixed at construction: a double keeps the exact IEEE 754
    value it was built with, and the codec transports it bit-for-bit.
    Negative zero is stored as 0.0, so equal arguments also format and
    encode identically.

    Example:
        >>> NumberArg(500)
        NumberArg(value=500, is_double=False)
        >>> NumberArg(234.99, is_double=True)
        NumberArg(value=234.99, is_double=True)
    """

    value: int | float
    is_double: bool = False

    def __post_init__(self) -> None:
        """Validate value kind against is_double and normalize doubles to float."""
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            msg = f"NumberArg.value must be int or float, not {type(self.value).__name__}"
            raise TypeError(msg)
        if not isinstance(self.is_double, bool):
            msg = f"NumberArg.is_double must be bool, got {type(self.is_double).__name__}"
            raise TypeError(msg)
        if self.is_double:
            try:
                value = float(self.value)
            except OverflowError as e:
                msg = f"NumberArg.value is out of double range: {self.value}"
                raise ValueError(msg) from e
            if not math.isfinite(value):
                msg = f"NumberArg.value must be finite, got {value}"
                raise ValueError(msg)
            # -0.0 == 0.0; keep one representation
            object.__setattr__(self, "value", value + 0.0)
        else:
            if isinstance(self.value, float):
                msg = "NumberArg with a float value requires is_double=True"
                raise TypeError(msg)
            _check_int64(self.value, "NumberArg.value")


@dataclass(frozen=True, slots=True)
class NestedArg:
    """Argument that is itself deferred text, resolved before substitution."""

    value: DeferredText

    def __post_init__(self) -> None:
        if not is_deferred_text(self.value):
            msg = f"NestedArg.value must be DeferredText, got {type(self.value).__name__}"
            raise TypeError(msg)


type Arg = TextArg | NumberArg | NestedArg

_ARG_TYPES: tuple[type, ...] = (TextArg, NumberArg, NestedArg)


def is_arg(obj: object) -> TypeIs[Arg]:
    """Type guard for the Arg union."""
    return isinstance(obj, _ARG_TYPES)


def _normalize_args(owner: object, args: object) -> None:
    """Freeze args into a tuple and check every element is an Arg."""
    if isinstance(args, (str, bytes)):
        msg = f"{type(owner).__name__}.args must be a sequence of Arg, not a string"
        raise TypeError(msg)
    frozen = tuple(args)  # type: ignore[call-overload]
    for position, arg in enumerate(frozen):
        if not is_arg(arg):
            msg = (
                f"{type(owner).__name__}.args[{position}] must be "
                f"TextArg, NumberArg or NestedArg, got {type(arg).__name__}"
            )
            raise TypeError(msg)
    object.__setattr__(owner, "args", frozen)


@dataclass(frozen=True, slots=True)
class Quantity:
    """Quantity driving plural category selection.

    Attributes:
        value: Integer selecting the plural category
        use_formatted_cardinal: Offer the locale-formatted value as an
            implicit leading argument to the selected template
    """

    value: int
    use_formatted_cardinal: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            msg = f"Quantity.value must be int, got {type(self.value).__name__}"
            raise TypeError(msg)
        if not isinstance(self.use_formatted_cardinal, bool):
            msg = "Quantity.use_formatted_cardinal must be bool"
            raise TypeError(msg)
        _check_int64(self.value, "Quantity.value")


# ============================================================================
# VARIANTS
# ============================================================================


@dataclass(frozen=True, slots=True, repr=False)
class Empty:
    """No content. Always resolves to the empty string.

    A singleton: Empty() returns EMPTY. Carries no identifier and no args,
    and is distinct from a zero-argument Literal.
    """

    _instance: ClassVar[Empty | None] = None

    def __new__(cls) -> Empty:
        if cls._instance is None:
            cls._instance = object.__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "EMPTY"

    def __reduce__(self) -> tuple[type[Empty], tuple[()]]:
        return (Empty, ())


EMPTY: Empty = Empty()


@dataclass(frozen=True, slots=True)
class Literal:
    """Format template with positional placeholders.

    Example:
        >>> Literal("Hello %s", (TextArg("World"),))
        Literal(template='Hello %s', args=(TextArg(text='World'),))
    """

    template: str
    args: tuple[Arg, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.template, str):
            msg = f"Literal.template must be str, got {type(self.template).__name__}"
            raise TypeError(msg)
        _normalize_args(self, self.args)


@dataclass(frozen=True, slots=True)
class Lookup:
    """Template obtained from the context by id, then formatted with args.

    With the null id and a single TextArg, the argument text is the result.
    """

    id: ResourceId
    args: tuple[Arg, ...] = ()

    def __post_init__(self) -> None:
        validate_resource_id(self.id)
        _normalize_args(self, self.args)


@dataclass(frozen=True, slots=True)
class Joined:
    """Literal fragments concatenated with a separator between them.

    Attributes:
        separator_id: Null id for a single space, or the id of a separator
            resource resolved from the context
        parts: Literal fragments, in output order
    """

    separator_id: ResourceId
    parts: tuple[str, ...]

    def __post_init__(self) -> None:
        validate_resource_id(self.separator_id)
        if isinstance(self.parts, (str, bytes)):
            msg = "Joined.parts must be a sequence of str, not a string"
            raise TypeError(msg)
        parts = tuple(self.parts)
        for position, part in enumerate(parts):
            if not isinstance(part, str):
                msg = f"Joined.parts[{position}] must be str, got {type(part).__name__}"
                raise TypeError(msg)
        object.__setattr__(self, "parts", parts)


@dataclass(frozen=True, slots=True)
class Plural:
    """Quantity-sensitive phrase.

    Attributes:
        id: Plural resource id (never the null identifier)
        quantity: Quantity selecting the plural category
        args: Explicit format arguments
    """

    id: ResourceId
    quantity: Quantity
    args: tuple[Arg, ...] = ()

    def __post_init__(self) -> None:
        validate_resource_id(self.id, allow_null=False)
        if not isinstance(self.quantity, Quantity):
            msg = f"Plural.quantity must be Quantity, got {type(self.quantity).__name__}"
            raise TypeError(msg)
        _normalize_args(self, self.args)


type DeferredText = Empty | Literal | Lookup | Joined | Plural

_DEFERRED_TEXT_TYPES: tuple[type, ...] = (Empty, Literal, Lookup, Joined, Plural)


def is_deferred_text(obj: object) -> TypeIs[DeferredText]:
    """Type guard for the DeferredText union."""
    return isinstance(obj, _DEFERRED_TEXT_TYPES)


# ============================================================================
# RESULT
# ============================================================================


@dataclass(frozen=True, slots=True)
class ResolvedText:
    """Outcome of resolving a DeferredText value.

    Attributes:
        content: The resolved string
        is_rich: The string carries recognized inline markup and should be
            handed to a rich-text renderer rather than shown as plain text
    """

    content: str
    is_rich: bool = False

    def __str__(self) -> str:
        """Return content for output."""
        return self.content
