# Path: inspomatch/core/embedders/multimodal_embedder.py
# Purpose: Provide a deterministic multimodal embedder producing 1408-dimensional vectors.
# Layer: core/embedders.
# Details: Projects pixel grids and colour histograms through a seeded matrix; text uses a hashed bag of words.

from __future__ import annotations

import hashlib
import re
from typing import Optional

import numpy as np
from PIL import Image

from .base import Embedder

TOKEN_PATTERN = re.compile(r"[a-z0-9]+(?:-[a-z0-9]+)*")
HISTOGRAM_BINS = 8


class MultimodalEmbedder(Embedder):
    """Local stand-in for a hosted multimodal embedding model.

    Image and text vectors share one space so an image fused with its tag
    context lands near photos indexed with similar tags.
    """

    def __init__(
        self,
        dim: int = 1408,
        image_size: int = 16,
        seed: int = 1408,
        image_weight: float = 0.6,
        text_weight: float = 0.4,
        name: str = "multimodal",
    ) -> None:
        if image_weight + text_weight == 0:
            raise ValueError("Image and text weights must not sum to zero.")
        self.name = name
        self.dim = dim
        self.image_size = image_size
        self.image_weight = image_weight
        self.text_weight = text_weight
        feature_size = image_size * image_size * 3 + HISTOGRAM_BINS * 3
        rng = np.random.default_rng(seed)
        self._projection = rng.standard_normal((feature_size, dim)).astype(np.float32) / np.sqrt(dim)

    def embed_image(self, image: Image.Image) -> np.ndarray:
        """Embed an image from its downsampled pixels and per-channel histograms."""

        rgb = image.convert("RGB")
        grid = np.asarray(rgb.resize((self.image_size, self.image_size)), dtype=np.float32) / 255.0
        pixels = grid.flatten() - grid.mean()

        full = np.asarray(rgb, dtype=np.uint8).reshape(-1, 3)
        histograms = [
            np.histogram(full[:, channel], bins=HISTOGRAM_BINS, range=(0, 256))[0].astype(np.float32)
            for channel in range(3)
        ]
        histogram = np.concatenate(histograms) / max(1, full.shape[0])

        features = np.concatenate([pixels, histogram]).astype(np.float32)
        return self._normalize(features @ self._projection)

    def embed_text(self, text: str) -> np.ndarray:
        """Embed text with a signed hashing trick over lowercase tokens."""

        vector = np.zeros(self.dim, dtype=np.float32)
        for token in TOKEN_PATTERN.findall(text.lower()):
            digest = hashlib.sha1(token.encode("utf-8")).digest()
            index = int.from_bytes(digest[:4], "little") % self.dim
            sign = 1.0 if digest[4] % 2 == 0 else -1.0
            vector[index] += sign
        return self._normalize(vector)

    def embed_multimodal(self, image: Optional[Image.Image] = None, text: Optional[str] = None) -> np.ndarray:
        """Fuse modalities with weights favouring image content."""

        if image is None and not text:
            raise ValueError("Image or text input must be supplied for multimodal embedding.")

        image_vector = self.embed_image(image) if image is not None else None
        text_vector = self.embed_text(text) if text else None

        if image_vector is None:
            return text_vector  # type: ignore[return-value]
        if text_vector is None or not text_vector.any():
            return image_vector

        fused = (self.image_weight * image_vector) + (self.text_weight * text_vector)
        return self._normalize(fused)
