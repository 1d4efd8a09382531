"""Deferred-text resolver - turns values into ResolvedText.

Pattern-matches on the closed variant set, asks the TextContext for
templates, separators, plural categories and number formatting, and
resolves NestedArg values recursively before substitution.
Python 3.13+. Indirect dependency: Babel (via the reference context).

Thread Safety:
    Resolution state (the depth guard) is created per resolve() call and
    passed explicitly, so a TextResolver is fully reentrant and can be
    shared between threads. The context is used for the duration of one
    call and never retained.

Failure semantics:
    ResourceNotFoundError, FormatMismatchError and UnboundedRecursionError
    propagate to the caller unchanged. There is no fallback text: callers
    decide what to show when resolution fails.
"""

import logging

from deferredtext.constants import DEFAULT_MARKUP_TAGS, DEFAULT_SEPARATOR, MAX_DEPTH
from deferredtext.core.depth_guard import DepthGuard
from deferredtext.diagnostics import DeferredTextError
from deferredtext.runtime.context import TextContext
from deferredtext.runtime.formatting import format_template
from deferredtext.runtime.markup import contains_markup, markup_pattern
from deferredtext.text.values import (
    Arg,
    DeferredText,
    Empty,
    Joined,
    Literal,
    Lookup,
    NumberArg,
    Plural,
    ResolvedText,
    TextArg,
    is_null_id,
)

__all__ = ["TextResolver", "resolve"]

logger = logging.getLogger(__name__)

# Debug messages are high-volume; keep resolved content short in logs.
_LOG_TRUNCATE_DEBUG: int = 50

_EMPTY_RESULT = ResolvedText("", False)


class TextResolver:
    """Resolves DeferredText values against a TextContext.

    Args:
        max_depth: Maximum nesting depth of NestedArg chains, counting the
            top-level value (default: MAX_DEPTH, clamped to the interpreter
            recursion limit)
        markup_tags: Inline tags that classify a result as rich text

    Example:
        >>> resolver = TextResolver()
        >>> resolver.resolve(text("Hello %s", "World"), ctx)
        ResolvedText(content='Hello World', is_rich=False)
    """

    __slots__ = ("_markup_tags", "_max_depth")

    def __init__(
        self,
        *,
        max_depth: int = MAX_DEPTH,
        markup_tags: frozenset[str] = DEFAULT_MARKUP_TAGS,
    ) -> None:
        # Compile eagerly so a bad vocabulary fails here, not mid-resolution
        markup_pattern(frozenset(markup_tags))
        self._markup_tags = frozenset(markup_tags)
        self._max_depth = DepthGuard(max_depth).max_depth

    @property
    def max_depth(self) -> int:
        """Effective nesting limit after clamping."""
        return self._max_depth

    @property
    def markup_tags(self) -> frozenset[str]:
        """Tags recognized as inline markup."""
        return self._markup_tags

    def resolve(self, value: DeferredText, context: TextContext) -> ResolvedText:
        """Resolve value to text in context.

        Args:
            value: Deferred text to resolve (never mutated)
            context: Resolution context supplying locale and resources

        Returns:
            ResolvedText with content and rich-text classification

        Raises:
            ResourceNotFoundError: A referenced id is absent from the context
            FormatMismatchError: Placeholders do not match the arguments
            UnboundedRecursionError: Nesting exceeds max_depth
            TypeError: value is not a DeferredText
        """
        guard = DepthGuard(self._max_depth)
        try:
            with guard:
                result = self._resolve(value, context, guard)
        except DeferredTextError as e:
            logger.debug("Resolution of %r failed: %s", value, type(e).__name__)
            raise
        logger.debug(
            "Resolved %s for locale %s: %s (rich=%s)",
            type(value).__name__,
            context.locale,
            result.content[:_LOG_TRUNCATE_DEBUG],
            result.is_rich,
        )
        return result

    def _resolve(
        self, value: DeferredText, context: TextContext, guard: DepthGuard
    ) -> ResolvedText:
        """Dispatch on the variant."""
        match value:
            case Empty():
                return _EMPTY_RESULT
            case Literal(template=template, args=args):
                return self._classify(self._format(template, args, context, guard))
            case Lookup(id=resource_id, args=args):
                return self._resolve_lookup(resource_id, args, context, guard)
            case Joined():
                return self._resolve_joined(value, context)
            case Plural():
                return self._resolve_plural(value, context, guard)
            case _:
                msg = f"Cannot resolve {type(value).__name__}; expected DeferredText"
                raise TypeError(msg)

    def _resolve_lookup(
        self,
        resource_id: int | str,
        args: tuple[Arg, ...],
        context: TextContext,
        guard: DepthGuard,
    ) -> ResolvedText:
        """Resolve a Lookup, including the null-id single-fragment path."""
        if is_null_id(resource_id) and len(args) == 1 and isinstance(args[0], TextArg):
            return self._classify(args[0].text)
        template = context.lookup_template(resource_id)
        return self._classify(self._format(template, args, context, guard))

    def _resolve_joined(self, value: Joined, context: TextContext) -> ResolvedText:
        """Concatenate fragments with the separator between consecutive parts.

        A separator lookup failure aborts the whole join.
        """
        if is_null_id(value.separator_id):
            separator = DEFAULT_SEPARATOR
        else:
            separator = context.lookup_separator(value.separator_id)

        is_rich = any(self._is_rich(part) for part in value.parts)
        if len(value.parts) > 1 and self._is_rich(separator):
            is_rich = True
        return ResolvedText(separator.join(value.parts), is_rich)

    def _resolve_plural(
        self, value: Plural, context: TextContext, guard: DepthGuard
    ) -> ResolvedText:
        """Select the plural template for the quantity, then format it.

        With use_formatted_cardinal the quantity is prepended as an integral
        argument the template may use or ignore. Without it and without
        explicit args the template is returned unformatted.
        """
        quantity = value.quantity
        category = context.select_plural_category(quantity.value)
        template = context.lookup_plural_template(value.id, category)

        if quantity.use_formatted_cardinal:
            args: tuple[Arg, ...] = (NumberArg(quantity.value), *value.args)
            content = self._format(template, args, context, guard, optional_leading=1)
        elif value.args:
            content = self._format(template, value.args, context, guard)
        else:
            content = template
        return self._classify(content)

    def _format(
        self,
        template: str,
        args: tuple[Arg, ...],
        context: TextContext,
        guard: DepthGuard,
        *,
        optional_leading: int = 0,
    ) -> str:
        def resolve_nested(nested: DeferredText) -> str:
            with guard:
                return self._resolve(nested, context, guard).content

        return format_template(
            template, args, context, resolve_nested, optional_leading=optional_leading
        )

    def _is_rich(self, content: str) -> bool:
        return contains_markup(content, self._markup_tags)

    def _classify(self, content: str) -> ResolvedText:
        return ResolvedText(content, self._is_rich(content))


_default_resolver = TextResolver()


def resolve(value: DeferredText, context: TextContext) -> ResolvedText:
    """Resolve value in context with the default TextResolver.

    See TextResolver.resolve for the failure contract.
    """
    return _default_resolver.resolve(value, context)
