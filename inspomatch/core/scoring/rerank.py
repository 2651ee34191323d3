# Path: inspomatch/core/scoring/rerank.py
# Purpose: Order scored matches and optionally thin out near-duplicates.
# Layer: core/scoring.
# Details: Stable descending sort on final score followed by a distance-gap diversity pass.

from __future__ import annotations

from typing import List, Protocol, Sequence, TypeVar


class Rankable(Protocol):
    final_score: float
    distance: float


T = TypeVar("T", bound=Rankable)

DEFAULT_MIN_SCORE = 40
DIVERSITY_DISTANCE_THRESHOLD = 0.05
DIVERSITY_GUARANTEED = 3
DIVERSITY_MIN_RESULTS = 6


def diversify(
    ranked: Sequence[T],
    distance_threshold: float = DIVERSITY_DISTANCE_THRESHOLD,
    guaranteed: int = DIVERSITY_GUARANTEED,
) -> List[T]:
    """Keep the top match, then admit matches whose distance differs from every admitted one.

    The first ``guaranteed`` matches are admitted regardless of closeness.
    """

    if not ranked:
        return []

    admitted: List[T] = [ranked[0]]
    for match in ranked[1:]:
        is_different = all(abs(kept.distance - match.distance) > distance_threshold for kept in admitted)
        if is_different or len(admitted) < guaranteed:
            admitted.append(match)
    return admitted


def re_rank(
    matches: Sequence[T],
    min_score: float = DEFAULT_MIN_SCORE,
    diversity_boost: bool = False,
    *,
    distance_threshold: float = DIVERSITY_DISTANCE_THRESHOLD,
    guaranteed: int = DIVERSITY_GUARANTEED,
    diversity_min_results: int = DIVERSITY_MIN_RESULTS,
) -> List[T]:
    """
    Filter, sort and optionally diversify scored matches.

    Args:
        matches: Scored matches in candidate order.
        min_score: Matches with a lower final score are dropped.
        diversity_boost: Apply the distance-gap diversity pass.
        distance_threshold: Minimum distance gap for a match to count as different.
        guaranteed: Matches always admitted by the diversity pass.
        diversity_min_results: Diversity only runs with at least this many survivors.

    Returns:
        New list ordered by final score, highest first; ties keep input order.
    """
    filtered = [match for match in matches if match.final_score >= min_score]
    filtered.sort(key=lambda match: match.final_score, reverse=True)

    if not diversity_boost or len(filtered) < diversity_min_results:
        return filtered
    return diversify(filtered, distance_threshold=distance_threshold, guaranteed=guaranteed)
