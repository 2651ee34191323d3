# Path: inspomatch/config/__init__.py
# Purpose: Package initializer for configuration module.
# Layer: config.
# Details: Exposes settings models for application-wide configuration.

from .settings import AppSettings, EmbedderSettings, ScoringSettings, SearchSettings, VectorStoreSettings

__all__ = ["AppSettings", "EmbedderSettings", "ScoringSettings", "SearchSettings", "VectorStoreSettings"]
