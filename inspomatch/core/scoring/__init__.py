# Path: inspomatch/core/scoring/__init__.py
# Purpose: Package initializer for the match scoring engine.
# Layer: core/scoring.
# Details: Stateless functions: score transform, tag matcher, hybrid scorer, and re-ranker.

from .hybrid import DEFAULT_WEIGHTS, HybridScore, ScoringWeights, calculate_hybrid_score
from .rerank import diversify, re_rank
from .tags import matching_tags, normalize_tag
from .transform import clamp_score, score_from_distance, similarity_to_score

__all__ = [
    "DEFAULT_WEIGHTS",
    "HybridScore",
    "ScoringWeights",
    "calculate_hybrid_score",
    "clamp_score",
    "diversify",
    "matching_tags",
    "normalize_tag",
    "re_rank",
    "score_from_distance",
    "similarity_to_score",
]
