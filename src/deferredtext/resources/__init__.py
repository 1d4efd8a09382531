"""Resource catalogs for the reference resolution context.

Python 3.13+. Zero external dependencies.
"""

from .catalog import ResourceCatalog, StaticCatalog

__all__ = ["ResourceCatalog", "StaticCatalog"]
