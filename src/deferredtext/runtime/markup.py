"""Inline markup detection for rich-text classification.

A resolved string is rich when it contains at least one recognized inline
tag (opening, closing or self-closing). The decision is made on the final
string, after substitution, and depends on content only: entity-escaped
markup such as ``&lt;b&gt;`` is plain text.

Python 3.13+. Zero external dependencies.
"""

import functools
import re

from deferredtext.constants import DEFAULT_MARKUP_TAGS

__all__ = ["contains_markup", "markup_pattern"]


@functools.lru_cache(maxsize=32)
def markup_pattern(tags: frozenset[str]) -> re.Pattern[str]:
    """Compile the tag-matching pattern for a tag vocabulary.

    Longer names are tried first so ``strong`` is not shadowed by ``s``.
    A tag name must be followed by whitespace, ``/`` or ``>``: ``<bold>``
    does not match ``b``.

    Raises:
        ValueError: If tags is empty or contains an invalid tag name
    """
    if not tags:
        msg = "Markup tag set must not be empty"
        raise ValueError(msg)
    for tag in tags:
        if not tag.isalnum():
            msg = f"Invalid markup tag name: {tag!r}"
            raise ValueError(msg)
    names = "|".join(sorted(tags, key=lambda t: (-len(t), t)))
    return re.compile(rf"</?(?:{names})(?=[\s/>])[^<>]*>", re.IGNORECASE)


def contains_markup(text: str, tags: frozenset[str] = DEFAULT_MARKUP_TAGS) -> bool:
    """Check whether text contains a recognized inline markup tag.

    Examples:
        >>> contains_markup("Some <b>bold</b> text")
        True
        >>> contains_markup("Some &lt;b&gt;bold&lt;/b&gt; text")
        False
        >>> contains_markup("a < b and c > d")
        False
    """
    if "<" not in text:
        return False
    return markup_pattern(tags).search(text) is not None
