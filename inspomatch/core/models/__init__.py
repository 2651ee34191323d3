# Path: inspomatch/core/models/__init__.py
# Purpose: Package initializer for domain model definitions.
# Layer: core/models.
# Details: Exposes dataclasses used across scoring, search, and indexing layers plus boundary row parsing.

from .domain import (
    Candidate,
    InspirationAnalysis,
    InspirationQuery,
    LocationFilter,
    ScoredMatch,
    ServiceDisplay,
    ServiceMediaRecord,
)
from .rows import CandidateRow, parse_candidate

__all__ = [
    "Candidate",
    "CandidateRow",
    "InspirationAnalysis",
    "InspirationQuery",
    "LocationFilter",
    "ScoredMatch",
    "ServiceDisplay",
    "ServiceMediaRecord",
    "parse_candidate",
]
