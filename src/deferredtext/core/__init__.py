"""Core utilities shared across the value model, resolver and codec.

By isolating these utilities here, we maintain a clean dependency graph:

    core <- text <- runtime / codec

Exports:
    DepthGuard: Context manager for recursion depth limiting
    depth_clamp: Clamp a depth limit against the interpreter recursion limit

Python 3.13+.
"""

from .depth_guard import DepthGuard, depth_clamp

__all__ = ["DepthGuard", "depth_clamp"]
