# Path: inspomatch/core/indexing/__init__.py
# Purpose: Package initializer for indexing utilities.
# Layer: core/indexing.
# Details: Exposes catalog loading and index building helpers.

from .catalog import load_catalog, record_from_entry
from .index_builder import IndexBuilder

__all__ = ["IndexBuilder", "load_catalog", "record_from_entry"]
