# Path: inspomatch/core/analysis/tagger.py
# Purpose: Extract descriptive tags from an image for tag matching and embedding context.
# Layer: core/analysis.
# Details: Deterministic pixel statistics stand in for a hosted vision model.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import numpy as np
from PIL import Image

NAMED_COLORS: Dict[str, Tuple[int, int, int]] = {
    "black": (20, 20, 20),
    "white": (240, 240, 240),
    "gray": (128, 128, 128),
    "brown": (120, 72, 40),
    "blonde": (220, 190, 120),
    "red": (200, 30, 40),
    "pink": (235, 150, 180),
    "orange": (235, 130, 40),
    "yellow": (240, 220, 60),
    "green": (60, 160, 70),
    "blue": (50, 90, 200),
    "purple": (130, 60, 160),
}

BRIGHT_THRESHOLD = 0.65
DARK_THRESHOLD = 0.35
VIBRANT_THRESHOLD = 0.45
MUTED_THRESHOLD = 0.15
SQUARE_TOLERANCE = 0.1


@dataclass
class ImageAnalysis:
    """Tags and palette derived from one image."""

    tags: List[str] = field(default_factory=list)
    dominant_colors: List[str] = field(default_factory=list)


class ImageTagger:
    """Derive colour, tone, and framing tags from pixels."""

    def __init__(self, max_colors: int = 3, sample_size: int = 64) -> None:
        self.max_colors = max_colors
        self.sample_size = sample_size
        self._palette_names = list(NAMED_COLORS)
        self._palette = np.array([NAMED_COLORS[name] for name in self._palette_names], dtype=np.float32)

    def analyze(self, image: Image.Image) -> ImageAnalysis:
        """Return tags for the image, most dominant colours first."""

        rgb = image.convert("RGB")
        pixels = np.asarray(rgb.resize((self.sample_size, self.sample_size)), dtype=np.float32).reshape(-1, 3)

        dominant = self._dominant_colors(pixels)
        tags = [f"{name}-tones" for name in dominant]
        tags.extend(self._tone_tags(pixels))
        tags.append(self._orientation_tag(rgb.size))

        return ImageAnalysis(tags=_dedupe(tags), dominant_colors=dominant)

    def _dominant_colors(self, pixels: np.ndarray) -> List[str]:
        distances = np.linalg.norm(pixels[:, None, :] - self._palette[None, :, :], axis=2)
        nearest = np.argmin(distances, axis=1)
        counts = np.bincount(nearest, minlength=len(self._palette_names))
        # Stable order so ties resolve by palette position.
        ranked = np.argsort(-counts, kind="stable")
        return [self._palette_names[idx] for idx in ranked[: self.max_colors] if counts[idx] > 0]

    @staticmethod
    def _tone_tags(pixels: np.ndarray) -> List[str]:
        scaled = pixels / 255.0
        brightness = float(scaled.mean())
        saturation = float((scaled.max(axis=1) - scaled.min(axis=1)).mean())

        tags: List[str] = []
        if brightness >= BRIGHT_THRESHOLD:
            tags.append("bright")
        elif brightness <= DARK_THRESHOLD:
            tags.append("dark")
        if saturation >= VIBRANT_THRESHOLD:
            tags.append("vibrant")
        elif saturation <= MUTED_THRESHOLD:
            tags.append("muted")
        return tags

    @staticmethod
    def _orientation_tag(size: Tuple[int, int]) -> str:
        width, height = size
        ratio = width / max(1, height)
        if abs(ratio - 1.0) <= SQUARE_TOLERANCE:
            return "square"
        return "landscape" if ratio > 1.0 else "portrait"


def _dedupe(tags: List[str]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for tag in tags:
        key = tag.strip().lower()
        if key and key not in seen:
            seen.add(key)
            ordered.append(key)
    return ordered
