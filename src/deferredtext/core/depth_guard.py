"""Unified depth limiting for recursion protection.

Provides reusable depth tracking to prevent stack overflow from:
- Deeply nested NestedArg chains during resolution
- Deeply nested values during encoding
- Adversarial buffers that claim deep nesting during decoding

Thread-safe: uses explicit state, no thread-local storage.
Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from deferredtext.constants import MAX_DEPTH
from deferredtext.diagnostics import ErrorTemplate, UnboundedRecursionError

__all__ = ["DepthGuard", "depth_clamp"]

logger = logging.getLogger(__name__)

# Interpreter frames consumed per nesting level on the deepest path (resolver:
# dispatch, format, render, nested callback).
_FRAMES_PER_LEVEL: int = 6


@dataclass(slots=True)
class DepthGuard:
    """Context manager for tracking and limiting recursion depth.

    Usage in resolution:
        guard = DepthGuard()
        with guard:
            nested = self._resolve(arg.value, context, guard)

    Usage in decoding:
        guard = DepthGuard(max_depth=50)
        with guard:
            value = self._read_value()

    Mutability Note:
        Intentionally mutable (not frozen=True) to enable stateful depth
        tracking via context manager protocol. The current_depth field is
        incremented/decremented on __enter__/__exit__.

    Thread Safety:
        Uses explicit instance state, fully reentrant.
        Each call stack maintains its own DepthGuard instance.

    Attributes:
        max_depth: Maximum allowed depth (default: MAX_DEPTH)
        current_depth: Current recursion depth
    """

    max_depth: int = MAX_DEPTH
    current_depth: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        """Clamp max_depth against Python recursion limit."""
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        """Enter guarded section, increment depth.

        Validates depth limit BEFORE incrementing: __exit__ is not called when
        __enter__ raises, so incrementing first would leave current_depth
        permanently elevated.
        """
        if self.current_depth >= self.max_depth:
            raise UnboundedRecursionError(
                ErrorTemplate.max_depth_exceeded(self.max_depth),
                max_depth=self.max_depth,
            )
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit guarded section, decrement depth."""
        self.current_depth -= 1

    @property
    def depth(self) -> int:
        """Current depth (alias for current_depth)."""
        return self.current_depth

    def is_exceeded(self) -> bool:
        """Check if depth limit has been reached."""
        return self.current_depth >= self.max_depth


def depth_clamp(requested_depth: int, reserve_frames: int = 50) -> int:
    """Clamp requested depth against Python recursion limit.

    Each nesting level costs a few interpreter frames (resolver dispatch,
    formatter, argument rendering), so the safe depth is a fraction of the
    remaining recursion budget. Logs a warning if clamping occurs.

    Args:
        requested_depth: Desired maximum depth
        reserve_frames: Stack frames to reserve for call overhead (default: 50)

    Returns:
        Safe depth value, clamped if necessary

    Raises:
        ValueError: If requested_depth is less than 1

    Example:
        >>> depth_clamp(100)  # default recursion limit 1000
        100
    """
    if requested_depth < 1:
        msg = f"max_depth must be >= 1, got {requested_depth}"
        raise ValueError(msg)
    max_safe_depth = max(1, (sys.getrecursionlimit() - reserve_frames) // _FRAMES_PER_LEVEL)
    if requested_depth > max_safe_depth:
        logger.warning(
            "Requested depth %d exceeds Python recursion limit (%d). "
            "Clamping to %d to prevent RecursionError. "
            "Consider increasing sys.setrecursionlimit() if needed.",
            requested_depth,
            sys.getrecursionlimit(),
            max_safe_depth,
        )
        return max_safe_depth
    return requested_depth
