# Path: inspomatch/core/analysis/__init__.py
# Purpose: Package initializer for image analysis helpers.
# Layer: core/analysis.
# Details: Exposes the pixel-based image tagger.

from .tagger import ImageAnalysis, ImageTagger

__all__ = ["ImageAnalysis", "ImageTagger"]
