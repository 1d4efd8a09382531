"""Binary codec for deferred text.

Encodes a DeferredText value into a compact, deterministic byte string
and decodes it back to an equal value. The format is versionless and
self-describing; all integers are big-endian.

Wire Format:
    value       u8 discriminant, then the variant's fields in order
                  EMPTY=0    (no fields)
                  LITERAL=1  string template, args
                  LOOKUP=2   resource id, args
                  JOINED=3   resource id (separator), parts
                  PLURAL=4   resource id, quantity, args
    string      u32 byte length, UTF-8 bytes
    resource id u8 kind (0 int, 1 str), then i64 or string
    args        u32 count, then per argument a u8 tag:
                  TEXT=0     string
                  NUMBER=1   u8 is_double, then f64 or i64
                  NESTED=2   value
    parts       u32 count, then strings
    quantity    i64 value, u8 use_formatted_cardinal

Strings are UTF-8 with surrogatepass, so any Python str round-trips,
including lone surrogates. Doubles travel as their IEEE 754 bit pattern.

decode() is strict: truncation, unknown discriminants, boolean bytes other
than 0/1, invalid UTF-8, a negative-zero double, values that fail
constructor validation, oversized length prefixes and trailing bytes all
raise MalformedEncodingError. There is no partial recovery.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import base64
import logging
import math
import struct
from enum import IntEnum

from deferredtext.constants import MAX_DEPTH, MAX_ENCODED_LENGTH
from deferredtext.core.depth_guard import DepthGuard
from deferredtext.diagnostics import ErrorTemplate, MalformedEncodingError
from deferredtext.text.values import (
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
    ResourceId,
    TextArg,
)

__all__ = [
    "ArgTag",
    "IdKind",
    "ValueTag",
    "decode",
    "decode_from_str",
    "encode",
    "encode_to_str",
]

logger = logging.getLogger(__name__)

_U8 = struct.Struct(">B")
_U32 = struct.Struct(">I")
_I64 = struct.Struct(">q")
_F64 = struct.Struct(">d")

_TEXT_ERRORS = "surrogatepass"


class ValueTag(IntEnum):
    """Discriminant byte of a serialized value."""

    EMPTY = 0
    LITERAL = 1
    LOOKUP = 2
    JOINED = 3
    PLURAL = 4


class ArgTag(IntEnum):
    """Tag byte of a serialized argument."""

    TEXT = 0
    NUMBER = 1
    NESTED = 2


class IdKind(IntEnum):
    """Kind byte of a serialized resource id."""

    INT = 0
    STR = 1


# ============================================================================
# ENCODING
# ============================================================================


class _Encoder:
    """Writes one value into a byte buffer.

    A fresh encoder is created per encode() call; its depth guard tracks
    NestedArg nesting for that call only.
    """

    __slots__ = ("_guard", "_out")

    def __init__(self, max_depth: int) -> None:
        self._guard = DepthGuard(max_depth)
        self._out = bytearray()

    def encode(self, value: DeferredText) -> bytes:
        self._write_value(value)
        return bytes(self._out)

    def _write_value(self, value: DeferredText) -> None:
        with self._guard:
            match value:
                case Empty():
                    self._write_u8(ValueTag.EMPTY)
                case Literal(template=template, args=args):
                    self._write_u8(ValueTag.LITERAL)
                    self._write_str(template)
                    self._write_args(args)
                case Lookup(id=resource_id, args=args):
                    self._write_u8(ValueTag.LOOKUP)
                    self._write_id(resource_id)
                    self._write_args(args)
                case Joined(separator_id=separator_id, parts=parts):
                    self._write_u8(ValueTag.JOINED)
                    self._write_id(separator_id)
                    self._write_count(len(parts))
                    for part in parts:
                        self._write_str(part)
                case Plural(id=resource_id, quantity=quantity, args=args):
                    self._write_u8(ValueTag.PLURAL)
                    self._write_id(resource_id)
                    self._out += _I64.pack(quantity.value)
                    self._write_u8(int(quantity.use_formatted_cardinal))
                    self._write_args(args)
                case _:
                    msg = f"Cannot encode {type(value).__name__}; expected DeferredText"
                    raise TypeError(msg)

    def _write_args(self, args: tuple[Arg, ...]) -> None:
        self._write_count(len(args))
        for arg in args:
            match arg:
                case TextArg(text=text):
                    self._write_u8(ArgTag.TEXT)
                    self._write_str(text)
                case NumberArg(value=value, is_double=True):
                    self._write_u8(ArgTag.NUMBER)
                    self._write_u8(1)
                    self._out += _F64.pack(value)
                case NumberArg(value=value):
                    self._write_u8(ArgTag.NUMBER)
                    self._write_u8(0)
                    self._out += _I64.pack(value)
                case NestedArg(value=nested):
                    self._write_u8(ArgTag.NESTED)
                    self._write_value(nested)

    def _write_id(self, resource_id: ResourceId) -> None:
        if isinstance(resource_id, str):
            self._write_u8(IdKind.STR)
            self._write_str(resource_id)
        else:
            self._write_u8(IdKind.INT)
            self._out += _I64.pack(resource_id)

    def _write_str(self, text: str) -> None:
        data = text.encode("utf-8", _TEXT_ERRORS)
        self._write_count(len(data))
        self._out += data

    def _write_count(self, count: int) -> None:
        if count > MAX_ENCODED_LENGTH:
            msg = f"Length {count} exceeds the encodable limit {MAX_ENCODED_LENGTH}"
            raise ValueError(msg)
        self._out += _U32.pack(count)

    def _write_u8(self, byte: int) -> None:
        self._out += _U8.pack(byte)


# ============================================================================
# DECODING
# ============================================================================


class _Decoder:
    """Reads one value from a byte buffer, tracking the read offset.

    Every failure carries the offset of the field being read.
    """

    __slots__ = ("_data", "_guard", "_pos")

    def __init__(self, data: bytes, max_depth: int) -> None:
        self._data = memoryview(data)
        self._guard = DepthGuard(max_depth)
        self._pos = 0

    def decode(self) -> DeferredText:
        value = self._read_value()
        remaining = len(self._data) - self._pos
        if remaining:
            raise MalformedEncodingError(
                ErrorTemplate.encoding_trailing_bytes(self._pos, remaining),
                offset=self._pos,
            )
        return value

    def _read_value(self) -> DeferredText:
        with self._guard:
            start = self._pos
            tag = self._read_u8()
            match tag:
                case ValueTag.EMPTY:
                    return EMPTY
                case ValueTag.LITERAL:
                    template = self._read_str()
                    args = self._read_args()
                    return self._construct(start, Literal, template, args)
                case ValueTag.LOOKUP:
                    resource_id = self._read_id()
                    args = self._read_args()
                    return self._construct(start, Lookup, resource_id, args)
                case ValueTag.JOINED:
                    separator_id = self._read_id()
                    count = self._read_count()
                    parts = tuple(self._read_str() for _ in range(count))
                    return self._construct(start, Joined, separator_id, parts)
                case ValueTag.PLURAL:
                    resource_id = self._read_id()
                    quantity_value = self._read_i64()
                    use_formatted_cardinal = self._read_flag()
                    args = self._read_args()
                    quantity = Quantity(quantity_value, use_formatted_cardinal)
                    return self._construct(start, Plural, resource_id, quantity, args)
                case _:
                    raise MalformedEncodingError(
                        ErrorTemplate.encoding_unknown_tag(start, "value", tag),
                        offset=start,
                    )

    def _read_args(self) -> tuple[Arg, ...]:
        count = self._read_count()
        args: list[Arg] = []
        for _ in range(count):
            start = self._pos
            tag = self._read_u8()
            match tag:
                case ArgTag.TEXT:
                    args.append(TextArg(self._read_str()))
                case ArgTag.NUMBER:
                    if self._read_flag():
                        value: int | float = _F64.unpack(self._take(_F64.size))[0]
                        if value == 0.0 and math.copysign(1.0, value) < 0:
                            raise MalformedEncodingError(
                                ErrorTemplate.encoding_invalid_value(
                                    start, "negative zero is encoded as 0.0"
                                ),
                                offset=start,
                            )
                        args.append(self._construct(start, NumberArg, value, True))
                    else:
                        args.append(NumberArg(self._read_i64()))
                case ArgTag.NESTED:
                    args.append(NestedArg(self._read_value()))
                case _:
                    raise MalformedEncodingError(
                        ErrorTemplate.encoding_unknown_tag(start, "argument", tag),
                        offset=start,
                    )
        return tuple(args)

    def _read_id(self) -> ResourceId:
        start = self._pos
        kind = self._read_u8()
        match kind:
            case IdKind.INT:
                return self._read_i64()
            case IdKind.STR:
                return self._read_str()
            case _:
                raise MalformedEncodingError(
                    ErrorTemplate.encoding_unknown_tag(start, "resource id", kind),
                    offset=start,
                )

    def _read_str(self) -> str:
        length = self._read_count()
        start = self._pos
        raw = self._take(length)
        try:
            return bytes(raw).decode("utf-8", _TEXT_ERRORS)
        except UnicodeDecodeError as e:
            offset = start + e.start
            raise MalformedEncodingError(
                ErrorTemplate.encoding_invalid_text(offset, e.reason),
                offset=offset,
            ) from e

    def _read_count(self) -> int:
        start = self._pos
        count: int = _U32.unpack(self._take(_U32.size))[0]
        if count > MAX_ENCODED_LENGTH:
            raise MalformedEncodingError(
                ErrorTemplate.encoding_length_exceeded(start, count, MAX_ENCODED_LENGTH),
                offset=start,
            )
        return count

    def _read_flag(self) -> bool:
        start = self._pos
        flag = self._read_u8()
        if flag > 1:
            raise MalformedEncodingError(
                ErrorTemplate.encoding_invalid_flag(start, flag),
                offset=start,
            )
        return flag == 1

    def _read_i64(self) -> int:
        value: int = _I64.unpack(self._take(_I64.size))[0]
        return value

    def _read_u8(self) -> int:
        return self._take(1)[0]

    def _take(self, size: int) -> memoryview:
        available = len(self._data) - self._pos
        if size > available:
            raise MalformedEncodingError(
                ErrorTemplate.encoding_truncated(self._pos, size, available),
                offset=self._pos,
            )
        chunk = self._data[self._pos : self._pos + size]
        self._pos += size
        return chunk

    def _construct[T](self, start: int, cls: type[T], *fields: object) -> T:
        """Build a node, reporting constructor rejections as malformed input."""
        try:
            return cls(*fields)
        except (TypeError, ValueError) as e:
            raise MalformedEncodingError(
                ErrorTemplate.encoding_invalid_value(start, str(e)),
                offset=start,
            ) from e


# ============================================================================
# PUBLIC API
# ============================================================================


def encode(value: DeferredText, *, max_depth: int = MAX_DEPTH) -> bytes:
    """Serialize value to bytes.

    Encoding is deterministic: equal values produce identical bytes
    (NumberArg stores negative zero as 0.0).

    Args:
        value: Deferred text to serialize
        max_depth: Nesting limit, counting the top-level value

    Returns:
        Encoded bytes

    Raises:
        UnboundedRecursionError: If NestedArg nesting exceeds max_depth
        TypeError: If value is not a DeferredText
        ValueError: If a string or sequence is longer than MAX_ENCODED_LENGTH

    Example:
        >>> encode(EMPTY)
        b'\\x00'
    """
    data = _Encoder(max_depth).encode(value)
    logger.debug("Encoded %s into %d byte(s)", type(value).__name__, len(data))
    return data


def decode(
    data: bytes | bytearray | memoryview, *, max_depth: int = MAX_DEPTH
) -> DeferredText:
    """Deserialize a value produced by encode().

    Args:
        data: Encoded bytes; must contain exactly one value
        max_depth: Nesting limit, counting the top-level value

    Returns:
        The decoded value, equal to the one that was encoded

    Raises:
        MalformedEncodingError: If data is truncated or otherwise corrupt
        UnboundedRecursionError: If the encoded nesting exceeds max_depth
        TypeError: If data is not bytes-like
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        msg = f"decode() expects bytes-like data, got {type(data).__name__}"
        raise TypeError(msg)
    value = _Decoder(bytes(data), max_depth).decode()
    logger.debug("Decoded %s from %d byte(s)", type(value).__name__, len(data))
    return value


def encode_to_str(value: DeferredText, *, max_depth: int = MAX_DEPTH) -> str:
    """Serialize value to URL-safe base64 text.

    For text-only stores such as JSON documents, query strings or saved
    UI state.
    """
    return base64.urlsafe_b64encode(encode(value, max_depth=max_depth)).decode("ascii")


def decode_from_str(encoded: str, *, max_depth: int = MAX_DEPTH) -> DeferredText:
    """Deserialize text produced by encode_to_str().

    Raises:
        MalformedEncodingError: If encoded is not valid URL-safe base64 or
            the decoded bytes are corrupt
        UnboundedRecursionError: If the encoded nesting exceeds max_depth
    """
    try:
        data = base64.b64decode(encoded, altchars=b"-_", validate=True)
    except ValueError as e:
        raise MalformedEncodingError(
            ErrorTemplate.encoding_invalid_value(0, f"invalid base64: {e}"),
            offset=0,
        ) from e
    return decode(data, max_depth=max_depth)
