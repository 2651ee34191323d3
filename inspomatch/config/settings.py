# Path: inspomatch/config/settings.py
# Purpose: Provide typed application configuration models.
# Layer: config.
# Details: Centralizes settings for embedders, vector stores, scoring weights, and match search parameters.

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field, model_validator


class EmbedderSettings(BaseModel):
    """Settings describing which embedder implementation to use and how to build it."""

    name: str = Field(default="multimodal", description="Identifier of the embedder implementation.")
    dim: int = Field(default=1408, gt=0, description="Dimensionality of produced embeddings.")
    seed: int = Field(default=1408, description="Seed for the deterministic projection matrix.")
    image_size: int = Field(default=16, gt=0, description="Side length of the downsampled image grid.")


class VectorStoreSettings(BaseModel):
    """Settings controlling vector store selection and persistence paths."""

    name: str = Field(default="flat_cosine", description="Identifier of the vector store implementation.")
    dim: int = Field(default=1408, gt=0, description="Expected embedding dimensionality for the index.")
    index_path: Path = Field(default=Path("storage/indexes/service_media"), description="Path prefix of the serialized index.")


class ScoringSettings(BaseModel):
    """Weights and thresholds used by the hybrid scorer and the re-ranker."""

    vector_weight: float = Field(default=0.7, ge=0, description="Blend weight of the vector similarity score.")
    tag_weight: float = Field(default=0.3, ge=0, description="Blend weight of the tag overlap score.")
    min_score: int = Field(default=40, ge=0, le=100, description="Matches below this final score are dropped.")
    diversity_boost: bool = Field(default=True, description="Suppress near-duplicate distances when re-ranking.")
    diversity_distance_threshold: float = Field(default=0.05, ge=0, description="Minimum distance gap between admitted matches.")
    diversity_guaranteed: int = Field(default=3, ge=1, description="Number of matches admitted regardless of closeness.")
    diversity_min_results: int = Field(default=6, ge=1, description="Diversity pass only runs with at least this many matches.")

    @model_validator(mode="after")
    def _check_weights(self) -> "ScoringSettings":
        if self.vector_weight + self.tag_weight <= 0:
            raise ValueError("Scoring weights must not sum to zero.")
        if self.vector_weight < self.tag_weight:
            raise ValueError("Vector weight must be greater than or equal to tag weight.")
        return self


class SearchSettings(BaseModel):
    """Parameters of the ephemeral inspiration search."""

    max_results: int = Field(default=20, ge=1, le=100, description="Number of nearest neighbours fetched per query.")
    context_tag_limit: int = Field(default=10, ge=0, description="Tags folded into the enriched embedding context.")


class AppSettings(BaseModel):
    """Top-level application settings shared across services and interfaces."""

    catalog_path: Path = Field(default=Path("storage/catalog/service_media.json"), description="Manifest of indexed service media.")
    batch_size: int = Field(default=8, gt=0, description="Batch size for indexing tasks.")
    embedder: EmbedderSettings = Field(default_factory=EmbedderSettings)
    vector_store: VectorStoreSettings = Field(default_factory=VectorStoreSettings)
    scoring: ScoringSettings = Field(default_factory=ScoringSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    api_enabled: bool = Field(default=True, description="Flag indicating if the HTTP API should be initialized.")
    log_level: str = Field(default="INFO", description="Verbosity level for application logs.")

    @model_validator(mode="after")
    def _check_dimensions(self) -> "AppSettings":
        if self.embedder.dim != self.vector_store.dim:
            raise ValueError(
                f"Embedder dimension {self.embedder.dim} does not match vector store dimension {self.vector_store.dim}."
            )
        return self

    @classmethod
    def from_env(cls, environ: dict | None = None) -> "AppSettings":
        """Instantiate settings, applying INSPOMATCH_* environment overrides when present."""

        env = os.environ if environ is None else environ
        settings = cls()

        if env.get("INSPOMATCH_LOG_LEVEL"):
            settings.log_level = env["INSPOMATCH_LOG_LEVEL"].upper()
        if env.get("INSPOMATCH_CATALOG_PATH"):
            settings.catalog_path = Path(env["INSPOMATCH_CATALOG_PATH"])
        if env.get("INSPOMATCH_INDEX_PATH"):
            settings.vector_store.index_path = Path(env["INSPOMATCH_INDEX_PATH"])

        scoring = settings.scoring.model_dump()
        if env.get("INSPOMATCH_MIN_SCORE"):
            scoring["min_score"] = int(env["INSPOMATCH_MIN_SCORE"])
        if env.get("INSPOMATCH_DIVERSITY_BOOST"):
            scoring["diversity_boost"] = env["INSPOMATCH_DIVERSITY_BOOST"].lower() in ("true", "1", "yes")
        settings.scoring = ScoringSettings.model_validate(scoring)

        if env.get("INSPOMATCH_MAX_RESULTS"):
            settings.search = SearchSettings(
                max_results=int(env["INSPOMATCH_MAX_RESULTS"]),
                context_tag_limit=settings.search.context_tag_limit,
            )
        return settings


__all__ = ["AppSettings", "EmbedderSettings", "ScoringSettings", "SearchSettings", "VectorStoreSettings"]
