# Path: inspomatch/core/vector_store/__init__.py
# Purpose: Package initializer for vector store interfaces and implementations.
# Layer: core/vector_store.
# Details: Exposes the base vector store contract, the flat cosine store, and a settings-driven factory.

from inspomatch.config.settings import VectorStoreSettings

from .base import VectorStore
from .flat_store import FlatCosineStore


def build_vector_store(settings: VectorStoreSettings) -> VectorStore:
    """Instantiate the vector store named in settings."""

    if settings.name == "flat_cosine":
        return FlatCosineStore(dim=settings.dim)
    raise ValueError(f"Unknown vector store: {settings.name}")


__all__ = ["VectorStore", "FlatCosineStore", "build_vector_store"]
