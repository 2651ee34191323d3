# Path: inspomatch/core/search/pipeline.py
# Purpose: Orchestrate the ephemeral inspiration search: analyze a photo, retrieve, score, and re-rank.
# Layer: core/search.
# Details: Resolves query embeddings, delegates retrieval to the vector store, then runs the scoring engine.

from __future__ import annotations

from typing import Any, Dict, List, Optional

import numpy as np
from PIL import Image

from inspomatch.config.settings import ScoringSettings, SearchSettings
from inspomatch.core.analysis.tagger import ImageTagger
from inspomatch.core.embedders.base import Embedder
from inspomatch.core.models.domain import (
    Candidate,
    InspirationAnalysis,
    InspirationQuery,
    LocationFilter,
    ScoredMatch,
)
from inspomatch.core.models.rows import parse_candidate
from inspomatch.core.scoring import ScoringWeights, calculate_hybrid_score, re_rank
from inspomatch.core.vector_store.base import VectorStore
from inspomatch.exceptions import CandidateParseError
from inspomatch.logging_config import get_logger

logger = get_logger("search.pipeline")


def build_enriched_context(notes: Optional[str], tags: List[str], tag_limit: int = 10) -> str:
    """Join the client's notes with the leading visual tags."""

    parts = [notes, *tags[:tag_limit]]
    return " ".join(part.strip() for part in parts if part and part.strip())


def location_to_filter(location: Optional[LocationFilter]) -> Optional[Dict[str, Any]]:
    """Translate a location restriction into a vector store payload filter.

    Radius is accepted but not applied; matching is by city and optional state.
    """

    if location is None or not location.city:
        return None
    filter: Dict[str, Any] = {"provider_city": location.city}
    if location.state:
        filter["provider_state"] = location.state
    return filter


def score_candidate(candidate: Candidate, query_tags: List[str], weights: ScoringWeights) -> ScoredMatch:
    """Run the hybrid scorer over one candidate."""

    hybrid = calculate_hybrid_score(candidate.distance, query_tags, candidate.tags, candidate.category, weights)
    return ScoredMatch(
        media_id=candidate.media_id,
        distance=candidate.distance,
        tags=list(candidate.tags),
        category=candidate.category,
        display=candidate.display,
        vector_score=hybrid.vector_score,
        tag_score=hybrid.tag_score,
        final_score=hybrid.final_score,
        matching_tags=hybrid.matching_tags,
        breakdown=hybrid.breakdown,
    )


class InspirationSearchPipeline:
    """High-level service bridging the API layer with the embedder, tagger, vector store, and scoring engine."""

    def __init__(
        self,
        embedder: Embedder,
        vector_store: VectorStore,
        tagger: Optional[ImageTagger] = None,
        scoring: Optional[ScoringSettings] = None,
        search: Optional[SearchSettings] = None,
    ) -> None:
        if embedder.dim != vector_store.dim:
            raise ValueError(
                f"Embedder dimension {embedder.dim} does not match vector store dimension {vector_store.dim}."
            )
        self.embedder = embedder
        self.vector_store = vector_store
        self.tagger = tagger or ImageTagger()
        self.scoring = scoring or ScoringSettings()
        self.search_settings = search or SearchSettings()
        self.weights = ScoringWeights(vector=self.scoring.vector_weight, tags=self.scoring.tag_weight)

    def analyze(self, image: Image.Image, notes: Optional[str] = None) -> InspirationAnalysis:
        """
        Extract tags and an enriched multimodal embedding from an inspiration photo.

        External calls:
        - inspomatch/core/analysis/tagger.py::ImageTagger.analyze - visual feature tags.
        - inspomatch/core/embedders/base.py::Embedder.embed_multimodal - image fused with notes and tags.
        """

        analysis = self.tagger.analyze(image)
        context = build_enriched_context(notes, analysis.tags, self.search_settings.context_tag_limit)
        embedding = self.embedder.embed_multimodal(image, context or None)
        logger.info(f"Analyzed inspiration: {len(analysis.tags)} tags, {embedding.shape[0]}-dim embedding")
        logger.debug(f"Tags: {', '.join(analysis.tags[:8])} | context: {context[:80]!r}")
        return InspirationAnalysis(
            tags=analysis.tags,
            embedding=embedding,
            dominant_colors=analysis.dominant_colors,
            context=context,
        )

    def match(self, query: InspirationQuery, max_results: Optional[int] = None) -> List[ScoredMatch]:
        """
        Retrieve, score, and re-rank service media for an inspiration query.

        External calls:
        - inspomatch/core/vector_store/flat_store.py::FlatCosineStore.search - nearest neighbours by cosine distance.
        - inspomatch/core/scoring/hybrid.py::calculate_hybrid_score - per-candidate blended score.
        - inspomatch/core/scoring/rerank.py::re_rank - cutoff, ordering, and diversity pass.
        """

        limit = max_results or self.search_settings.max_results
        embedding = np.asarray(query.embedding, dtype=np.float32).reshape(-1)
        if embedding.shape[0] != self.vector_store.dim:
            raise ValueError(
                f"Embedding dimensionality {embedding.shape[0]} does not match index dimension {self.vector_store.dim}."
            )

        filter = location_to_filter(query.location)
        raw_results = self.vector_store.search(embedding, k=limit, filter=filter)
        logger.info(f"Raw matches found: {len(raw_results)} (limit {limit}, filter {filter})")

        candidates = self._parse_candidates(raw_results)
        scored = [score_candidate(candidate, query.tags, self.weights) for candidate in candidates]
        if scored:
            top = scored[0]
            logger.debug(f"Closest candidate {top.media_id}: distance {top.distance:.4f}, {top.breakdown}")

        ranked = re_rank(
            scored,
            min_score=self.scoring.min_score,
            diversity_boost=self.scoring.diversity_boost,
            distance_threshold=self.scoring.diversity_distance_threshold,
            guaranteed=self.scoring.diversity_guaranteed,
            diversity_min_results=self.scoring.diversity_min_results,
        )
        logger.info(f"Matches after re-ranking: {len(ranked)}")
        if ranked:
            summary = ", ".join(f"{m.final_score}% (V:{m.vector_score}% T:{m.tag_score}%)" for m in ranked[:3])
            logger.debug(f"Top scores: {summary}")
        return ranked

    def search_image(
        self,
        image: Image.Image,
        notes: Optional[str] = None,
        location: Optional[LocationFilter] = None,
        max_results: Optional[int] = None,
    ) -> List[ScoredMatch]:
        """Analyze an inspiration photo and match it in one call."""

        analysis = self.analyze(image, notes)
        query = InspirationQuery(embedding=analysis.embedding, tags=analysis.tags, location=location)
        return self.match(query, max_results=max_results)

    def _parse_candidates(self, raw_results: List[tuple]) -> List[Candidate]:
        candidates: List[Candidate] = []
        for media_id, distance in raw_results:
            try:
                candidates.append(parse_candidate(media_id, distance, self.vector_store.get_payload(media_id)))
            except CandidateParseError as exc:
                logger.warning(f"Skipping candidate: {exc}")
        return candidates
