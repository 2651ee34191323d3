# Path: inspomatch/core/scoring/hybrid.py
# Purpose: Blend vector similarity and tag overlap into a single match score.
# Layer: core/scoring.
# Details: Owns the weighting policy; category is carried for display and never changes the numbers.

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .tags import matching_tags
from .transform import clamp_score, score_from_distance


@dataclass(frozen=True)
class ScoringWeights:
    """Relative weights of the vector and tag sub-scores."""

    vector: float = 0.7
    tags: float = 0.3

    def __post_init__(self) -> None:
        if self.vector < 0 or self.tags < 0:
            raise ValueError("Scoring weights must be non-negative.")
        if self.vector + self.tags <= 0:
            raise ValueError("Scoring weights must not sum to zero.")
        if self.vector < self.tags:
            raise ValueError("Vector weight must be greater than or equal to tag weight.")


DEFAULT_WEIGHTS = ScoringWeights()


@dataclass(frozen=True)
class HybridScore:
    """Result of scoring one candidate against an inspiration query."""

    vector_score: int
    tag_score: int
    final_score: int
    distance: float
    category: str
    matching_tags: List[str] = field(default_factory=list)
    breakdown: str = ""


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up."""

    return int(math.floor(value + 0.5))


def blend_scores(vector_score: float, tag_score: float, has_tags: bool, weights: ScoringWeights = DEFAULT_WEIGHTS) -> float:
    """Weighted blend of the sub-scores, falling back to the vector score when the query has no tags."""

    if not has_tags:
        return clamp_score(vector_score)
    total = weights.vector + weights.tags
    blended = (weights.vector * vector_score + weights.tags * tag_score) / total
    return clamp_score(blended)


def calculate_hybrid_score(
    distance: float,
    query_tags: Sequence[str],
    candidate_tags: Sequence[str],
    category: str,
    weights: Optional[ScoringWeights] = None,
) -> HybridScore:
    """
    Score a candidate from its cosine distance and tag overlap.

    Args:
        distance: Cosine distance between query and candidate embeddings.
        query_tags: Tags extracted from the inspiration photo.
        candidate_tags: Tags stored with the candidate media.
        category: Service category, reported in the breakdown only.
        weights: Blend weights (defaults to 0.7 vector / 0.3 tags).

    Returns:
        HybridScore with integer sub-scores and the unrounded distance.
    """
    weights = weights or DEFAULT_WEIGHTS

    vector_score = score_from_distance(distance)
    matched = matching_tags(query_tags, candidate_tags)
    has_tags = len(query_tags) > 0
    tag_score = 100.0 * len(matched) / max(1, len(query_tags)) if has_tags else 0.0
    final_score = blend_scores(vector_score, tag_score, has_tags, weights)

    vector_display = round_half_up(vector_score)
    tag_display = round_half_up(tag_score)
    final_display = round_half_up(final_score)
    breakdown = f"Vector: {vector_display}% | Tags: {tag_display}% ({len(matched)}/{len(query_tags)}) | Category: {category}"

    return HybridScore(
        vector_score=vector_display,
        tag_score=tag_display,
        final_score=final_display,
        distance=distance,
        category=category,
        matching_tags=matched,
        breakdown=breakdown,
    )
