# Path: inspomatch/core/models/domain.py
# Purpose: Define domain models shared across analysis, indexing, scoring, and search workflows.
# Layer: core/models.
# Details: Lightweight dataclasses keep the scoring core strictly typed; none of them are persisted.

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np


@dataclass(frozen=True)
class LocationFilter:
    """Optional restriction of matches to a provider location."""

    city: str
    state: Optional[str] = None
    radius: Optional[float] = None


@dataclass
class InspirationQuery:
    """Ephemeral query built from an analyzed inspiration photo."""

    embedding: np.ndarray
    tags: List[str] = field(default_factory=list)
    location: Optional[LocationFilter] = None


@dataclass(frozen=True)
class ServiceDisplay:
    """Display metadata of an indexed service media item, passed through untouched."""

    media_url: str = ""
    thumbnail_url: Optional[str] = None
    service_id: str = ""
    service_title: str = ""
    service_price_min: float = 0.0
    service_currency: str = ""
    provider_id: str = ""
    provider_business_name: str = ""
    provider_slug: str = ""
    provider_logo_url: Optional[str] = None
    provider_city: str = ""
    provider_state: str = ""


@dataclass(frozen=True)
class Candidate:
    """One indexed service media item returned by a similarity search."""

    media_id: str
    distance: float
    tags: List[str]
    category: str
    display: ServiceDisplay = field(default_factory=ServiceDisplay)


@dataclass
class ScoredMatch:
    """Candidate enriched with the derived match scores."""

    media_id: str
    distance: float
    tags: List[str]
    category: str
    display: ServiceDisplay
    vector_score: int
    tag_score: int
    final_score: int
    matching_tags: List[str] = field(default_factory=list)
    breakdown: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Flatten the match into a JSON-serializable mapping."""

        payload = asdict(self)
        display = payload.pop("display")
        payload.update(display)
        return payload


@dataclass
class InspirationAnalysis:
    """Tags and embedding extracted from an inspiration photo."""

    tags: List[str]
    embedding: np.ndarray
    dominant_colors: List[str] = field(default_factory=list)
    context: str = ""


@dataclass
class ServiceMediaRecord:
    """Catalog entry describing a provider's service photo to be indexed."""

    media_id: str
    path: Path
    tags: List[str] = field(default_factory=list)
    category: str = "general"
    display: ServiceDisplay = field(default_factory=ServiceDisplay)
