# Path: inspomatch/core/models/rows.py
# Purpose: Validate loosely typed datastore rows before they reach the scoring core.
# Layer: core/models.
# Details: Pydantic models coerce payload dictionaries into strictly typed Candidate records.

from __future__ import annotations

import math
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from inspomatch.exceptions import CandidateParseError

from .domain import Candidate, ServiceDisplay

DEFAULT_CATEGORY = "general"


class CandidateRow(BaseModel):
    """One raw similarity-search row: vector store payload plus id and distance."""

    model_config = ConfigDict(extra="ignore")

    media_id: str
    distance: float
    tags: List[str] = []
    category: str = DEFAULT_CATEGORY
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

    @field_validator("media_id", "service_id", "provider_id", mode="before")
    @classmethod
    def _stringify_ids(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("distance")
    @classmethod
    def _finite_distance(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("distance must be a finite number")
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return [str(tag) for tag in value if tag is not None]

    @field_validator("category", mode="before")
    @classmethod
    def _default_category(cls, value: Any) -> Any:
        return value or DEFAULT_CATEGORY

    @field_validator("service_price_min", mode="before")
    @classmethod
    def _default_price(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    def to_candidate(self) -> Candidate:
        """Build the typed Candidate consumed by the hybrid scorer."""

        display = ServiceDisplay(
            media_url=self.media_url,
            thumbnail_url=self.thumbnail_url,
            service_id=self.service_id,
            service_title=self.service_title,
            service_price_min=self.service_price_min,
            service_currency=self.service_currency,
            provider_id=self.provider_id,
            provider_business_name=self.provider_business_name,
            provider_slug=self.provider_slug,
            provider_logo_url=self.provider_logo_url,
            provider_city=self.provider_city,
            provider_state=self.provider_state,
        )
        return Candidate(
            media_id=self.media_id,
            distance=self.distance,
            tags=list(self.tags),
            category=self.category,
            display=display,
        )


def parse_candidate(media_id: Any, distance: Any, payload: Optional[Dict[str, Any]]) -> Candidate:
    """Validate a raw (id, distance, payload) triple into a Candidate."""

    data: Dict[str, Any] = dict(payload or {})
    data["media_id"] = media_id
    data["distance"] = distance
    try:
        return CandidateRow.model_validate(data).to_candidate()
    except ValidationError as exc:
        raise CandidateParseError(media_id, str(exc)) from exc
