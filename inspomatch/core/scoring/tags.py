# Path: inspomatch/core/scoring/tags.py
# Purpose: Find which inspiration tags also describe a candidate service photo.
# Layer: core/scoring.
# Details: Case-insensitive exact set membership; no synonym or fuzzy expansion.

from __future__ import annotations

from typing import Iterable, List, Sequence


def normalize_tag(tag: str) -> str:
    """Lowercase and strip a tag for comparison."""

    return tag.strip().lower()


def matching_tags(query_tags: Sequence[str], candidate_tags: Iterable[str]) -> List[str]:
    """Return the query tags present in ``candidate_tags``.

    Output keeps the query's order, casing and duplicates.
    """

    candidate_set = {normalize_tag(tag) for tag in candidate_tags}
    if not candidate_set:
        return []
    return [tag for tag in query_tags if normalize_tag(tag) in candidate_set]
