# Path: inspomatch/core/scoring/transform.py
# Purpose: Convert cosine distance into a perception-scaled match percentage.
# Layer: core/scoring.
# Details: Piecewise-linear curve stretches high-similarity bands and compresses low similarity toward zero.

from __future__ import annotations

import math

# (lower similarity bound, score at bound, slope), highest band first.
SIMILARITY_BANDS = (
    (0.98, 95.0, 250.0),
    (0.90, 85.0, 125.0),
    (0.80, 70.0, 150.0),
    (0.70, 55.0, 150.0),
    (0.60, 40.0, 150.0),
)
LOW_SIMILARITY_SLOPE = 66.7


def clamp_score(value: float, low: float = 0.0, high: float = 100.0) -> float:
    """Clamp a score into ``[low, high]``; NaN maps to ``low``."""

    if math.isnan(value):
        return low
    return max(low, min(high, value))


def similarity_to_score(similarity: float) -> float:
    """Map a cosine similarity onto the 0-100 match scale."""

    for lower, base, slope in SIMILARITY_BANDS:
        if similarity >= lower:
            return clamp_score(base + (similarity - lower) * slope)
    # 0.60 * 66.7 overshoots the 40-point band floor; cap it so the curve stays monotonic.
    low_band_ceiling = SIMILARITY_BANDS[-1][1]
    return clamp_score(max(0.0, min(similarity * LOW_SIMILARITY_SLOPE, low_band_ceiling)))


def score_from_distance(distance: float) -> float:
    """Return the match percentage for a cosine distance in ``[0, 2]``.

    Out-of-range distances are not rejected; they run through the same curve
    and the result is clamped to ``[0, 100]``.
    """

    return similarity_to_score(1.0 - distance)
