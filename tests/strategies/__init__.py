"""Hypothesis strategies for deferredtext property-based testing.

Usage:
    from tests.strategies import deferred_texts, resource_ids
    from tests.strategies.text import leaf_args, nested_chain
"""

from .text import (
    deferred_texts,
    finite_doubles,
    flat_deferred_texts,
    int64s,
    leaf_args,
    nested_chain,
    plain_text,
    quantities,
    resource_ids,
)

__all__ = [
    "deferred_texts",
    "finite_doubles",
    "flat_deferred_texts",
    "int64s",
    "leaf_args",
    "nested_chain",
    "plain_text",
    "quantities",
    "resource_ids",
]
