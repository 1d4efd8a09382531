"""Positional template substitution.

Templates use printf-style placeholders with a fixed set of conversions:

    %[index$][flags][width][.precision]conversion

    conversion  s (any argument), d (integral number), f (double)
    index       1-based explicit argument index; placeholders without one
                consume arguments sequentially, independently of indexed ones
    flags       '-' left-justify, '0' zero-pad, ',' locale grouping,
                '+' always show the sign (the last three numeric only)
    width       minimum field width
    precision   %f fraction digits (default 6); %s maximum length
    %%          literal percent sign

Every template is parsed in full, even with no arguments, and every
supplied argument must be consumed, so a mismatch between placeholders and
arguments always raises FormatMismatchError.

Python 3.13+. Zero external dependencies (numbers are formatted by the
TextContext).
"""

from __future__ import annotations

import functools
import math
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, NoReturn

from deferredtext.constants import DEFAULT_FLOAT_DIGITS
from deferredtext.diagnostics import ErrorTemplate, FormatMismatchError
from deferredtext.text.values import Arg, DeferredText, NestedArg, NumberArg, TextArg

if TYPE_CHECKING:
    from deferredtext.runtime.context import TextContext

__all__ = ["Placeholder", "format_template", "parse_template"]

_PLACEHOLDER_RE = re.compile(
    r"%(?:(?P<index>\d+)\$)?(?P<flags>[-0+,]*)(?P<width>[1-9]\d*)?"
    r"(?:\.(?P<precision>\d+))?(?P<conversion>[sdf%])"
)

# Flags accepted per conversion
_ALLOWED_FLAGS: dict[str, frozenset[str]] = {
    "s": frozenset("-"),
    "d": frozenset("-0+,"),
    "f": frozenset("-0+,"),
}


@dataclass(frozen=True, slots=True)
class Placeholder:
    """One parsed placeholder.

    Attributes:
        position: Character offset of the '%' in the template
        index: Explicit 1-based argument index, or None for sequential
        flags: Flag characters in template order
        width: Minimum field width, or None
        precision: Precision, or None
        conversion: 's', 'd' or 'f'
    """

    position: int
    index: int | None
    flags: str
    width: int | None
    precision: int | None
    conversion: str


type Segment = str | Placeholder


@functools.lru_cache(maxsize=512)
def parse_template(template: str) -> tuple[Segment, ...]:
    """Split a template into literal text and placeholders.

    ``%%`` becomes a literal ``%`` in the surrounding text segment.

    Raises:
        FormatMismatchError: On a dangling '%', an unknown conversion, index
            0, or flags/precision the conversion does not accept
    """
    segments: list[Segment] = []
    text: list[str] = []
    pos = 0
    while True:
        start = template.find("%", pos)
        if start == -1:
            text.append(template[pos:])
            break
        text.append(template[pos:start])
        match = _PLACEHOLDER_RE.match(template, start)
        if match is None:
            _invalid(template, start, "expected %s, %d, %f or %%")
        pos = match.end()

        conversion = match["conversion"]
        if conversion == "%":
            if match.end() - start != 2:
                _invalid(template, start, "'%%' takes no index, flags, width or precision")
            text.append("%")
            continue

        placeholder = _build_placeholder(template, start, match)
        if text:
            segments.append("".join(text))
            text = []
        segments.append(placeholder)

    tail = "".join(text)
    if tail:
        segments.append(tail)
    return tuple(segments)


def _build_placeholder(template: str, start: int, match: re.Match[str]) -> Placeholder:
    conversion = match["conversion"]
    flags = match["flags"]
    index = int(match["index"]) if match["index"] is not None else None
    width = int(match["width"]) if match["width"] is not None else None
    precision = int(match["precision"]) if match["precision"] is not None else None

    if index == 0:
        _invalid(template, start, "argument index is 1-based")
    if len(set(flags)) != len(flags):
        _invalid(template, start, f"repeated flag in '{flags}'")
    illegal = set(flags) - _ALLOWED_FLAGS[conversion]
    if illegal:
        names = "".join(sorted(illegal))
        _invalid(template, start, f"flag(s) {names!r} not allowed with %{conversion}")
    if ("-" in flags or "0" in flags) and width is None:
        _invalid(template, start, "'-' and '0' flags require a width")
    if "-" in flags and "0" in flags:
        _invalid(template, start, "'-' and '0' flags are exclusive")
    if precision is not None and conversion == "d":
        _invalid(template, start, "%d takes no precision")

    return Placeholder(start, index, flags, width, precision, conversion)


def _invalid(template: str, position: int, detail: str) -> NoReturn:
    raise FormatMismatchError(
        ErrorTemplate.placeholder_invalid(template, position, detail),
        template=template,
    )


def format_template(
    template: str,
    args: Sequence[Arg],
    context: TextContext,
    resolve_nested: Callable[[DeferredText], str],
    *,
    optional_leading: int = 0,
) -> str:
    """Substitute args into template by position.

    Args:
        template: Template with printf-style placeholders
        args: Arguments in substitution order
        context: Supplies locale number formatting
        resolve_nested: Resolves a NestedArg's value to its content
        optional_leading: Number of leading args the template may leave
            unused (the implicit plural cardinal)

    Returns:
        The formatted string

    Raises:
        FormatMismatchError: On invalid placeholders, missing or unused
            arguments, or an argument the conversion cannot format
    """
    segments = parse_template(template)
    used: set[int] = set()
    sequential = 0
    out: list[str] = []

    for segment in segments:
        if isinstance(segment, str):
            out.append(segment)
            continue
        if segment.index is None:
            sequential += 1
            index = sequential
        else:
            index = segment.index
        if index > len(args):
            raise FormatMismatchError(
                ErrorTemplate.argument_missing(template, index, len(args)),
                template=template,
            )
        used.add(index)
        out.append(_render(template, segment, index, args[index - 1], context, resolve_nested))

    unused = [i for i in range(optional_leading + 1, len(args) + 1) if i not in used]
    if unused:
        raise FormatMismatchError(
            ErrorTemplate.argument_unused(template, unused),
            template=template,
        )
    return "".join(out)


def _render(
    template: str,
    placeholder: Placeholder,
    index: int,
    arg: Arg,
    context: TextContext,
    resolve_nested: Callable[[DeferredText], str],
) -> str:
    """Render one argument for its placeholder, including padding."""
    conversion = placeholder.conversion
    match arg:
        case TextArg(text=text) if conversion == "s":
            rendered = text
        case NestedArg(value=value) if conversion == "s":
            rendered = resolve_nested(value)
        case NumberArg(value=value, is_double=is_double) if conversion == "s":
            rendered = context.format_number(value, is_double=is_double)
        case NumberArg(value=value, is_double=False) if conversion == "d":
            rendered = _format_signed(placeholder, value, context, fraction_digits=None)
        case NumberArg(value=value, is_double=True) if conversion == "f":
            digits = (
                placeholder.precision
                if placeholder.precision is not None
                else DEFAULT_FLOAT_DIGITS
            )
            rendered = _format_signed(placeholder, value, context, fraction_digits=digits)
        case _:
            raise FormatMismatchError(
                ErrorTemplate.argument_type_mismatch(
                    template, index, conversion, _describe(arg)
                ),
                template=template,
            )

    if conversion == "s" and placeholder.precision is not None:
        rendered = rendered[: placeholder.precision]
    return _pad(placeholder, rendered)


def _format_signed(
    placeholder: Placeholder,
    value: int | float,
    context: TextContext,
    *,
    fraction_digits: int | None,
) -> str:
    """Format a number for %d/%f, honouring the ',', '+' and '0' flags."""
    is_double = fraction_digits is not None
    grouping = "," in placeholder.flags
    if "+" not in placeholder.flags and "0" not in placeholder.flags:
        return context.format_number(
            value, is_double=is_double, fraction_digits=fraction_digits, use_grouping=grouping
        )

    magnitude = context.format_number(
        abs(value), is_double=is_double, fraction_digits=fraction_digits, use_grouping=grouping
    )
    if math.copysign(1.0, value) < 0:
        sign = "-"
    elif "+" in placeholder.flags:
        sign = "+"
    else:
        sign = ""
    if "0" in placeholder.flags and placeholder.width is not None:
        magnitude = magnitude.rjust(placeholder.width - len(sign), "0")
    return sign + magnitude


def _pad(placeholder: Placeholder, rendered: str) -> str:
    if placeholder.width is None or len(rendered) >= placeholder.width:
        return rendered
    if "-" in placeholder.flags:
        return rendered.ljust(placeholder.width)
    return rendered.rjust(placeholder.width)


def _describe(arg: Arg) -> str:
    match arg:
        case TextArg():
            return "text"
        case NumberArg(is_double=True):
            return "double"
        case NumberArg():
            return "integer"
        case NestedArg():
            return "nested text"
        case _:
            return type(arg).__name__
