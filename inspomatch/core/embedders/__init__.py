# Path: inspomatch/core/embedders/__init__.py
# Purpose: Package initializer for embedder implementations and interfaces.
# Layer: core/embedders.
# Details: Exposes the base interface, the reference multimodal embedder, and a settings-driven factory.

from inspomatch.config.settings import EmbedderSettings

from .base import Embedder
from .multimodal_embedder import MultimodalEmbedder


def build_embedder(settings: EmbedderSettings) -> Embedder:
    """Instantiate the embedder named in settings."""

    if settings.name == "multimodal":
        return MultimodalEmbedder(dim=settings.dim, image_size=settings.image_size, seed=settings.seed)
    raise ValueError(f"Unknown embedder: {settings.name}")


__all__ = ["Embedder", "MultimodalEmbedder", "build_embedder"]
