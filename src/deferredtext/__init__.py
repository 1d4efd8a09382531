"""deferredtext - deferred, serializable, locale-resolved text.

Describes user-visible text as a value (a literal template, a resource
lookup, a joined list of fragments or a quantity-sensitive plural) that is
resolved later against a locale-aware context, and that can be serialized
and restored with full fidelity in between.

Public API:
    text, resource, joined, plural - Constructors from plain Python values
    EMPTY, Literal, Lookup, Joined, Plural - The closed variant set
    TextResolver, resolve - Resolution to ResolvedText
    encode, decode - Deterministic binary codec
    CatalogContext, StaticCatalog - Babel-backed reference context

Exceptions:
    DeferredTextError - Base exception class
    ResourceNotFoundError - Unknown resource ids
    FormatMismatchError - Placeholder/argument mismatch
    MalformedEncodingError - Corrupt serialized data
    UnboundedRecursionError - Nesting beyond the depth limit

Submodules:
    deferredtext.text - Value model and constructors
    deferredtext.runtime - Resolver, TextContext protocol, Babel formatting
    deferredtext.resources - Resource catalogs
    deferredtext.codec - Binary and base64 serialization
    deferredtext.diagnostics - Error types, codes and formatters
"""

from .codec import decode, decode_from_str, encode, encode_to_str
from .constants import NULL_RESOURCE_ID
from .diagnostics import (
    DeferredTextError,
    FormatMismatchError,
    MalformedEncodingError,
    ResourceNotFoundError,
    UnboundedRecursionError,
)
from .resources import ResourceCatalog, StaticCatalog
from .runtime import CatalogContext, TextContext, TextResolver, resolve
from .text import (
    EMPTY,
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
    joined,
    plural,
    resource,
    text,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("deferredtext")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "EMPTY",
    "NULL_RESOURCE_ID",
    "CatalogContext",
    "DeferredText",
    "DeferredTextError",
    "Empty",
    "FormatMismatchError",
    "Joined",
    "Literal",
    "Lookup",
    "MalformedEncodingError",
    "NestedArg",
    "NumberArg",
    "Plural",
    "Quantity",
    "ResolvedText",
    "ResourceCatalog",
    "ResourceId",
    "ResourceNotFoundError",
    "StaticCatalog",
    "TextArg",
    "TextContext",
    "TextResolver",
    "UnboundedRecursionError",
    "__version__",
    "decode",
    "decode_from_str",
    "encode",
    "encode_to_str",
    "joined",
    "plural",
    "resolve",
    "resource",
    "text",
]
