# Path: inspomatch/api/schemas.py
# Purpose: Define request and response bodies of the inspiration HTTP API.
# Layer: api.
# Details: Pydantic models validate loosely typed JSON before it reaches the search pipeline.

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from inspomatch.core.models.domain import LocationFilter, ScoredMatch


class LocationPayload(BaseModel):
    city: str = Field(min_length=1)
    state: Optional[str] = None
    radius: Optional[float] = Field(default=None, ge=0, description="Radius in miles; accepted but not applied.")

    def to_filter(self) -> LocationFilter:
        return LocationFilter(city=self.city, state=self.state, radius=self.radius)


class AnalyzeRequest(BaseModel):
    """Base64-encoded inspiration photo with optional client notes."""

    image_base64: str = Field(min_length=1)
    notes: Optional[str] = None


class AnalysisPayload(BaseModel):
    tags: List[str]
    dominant_colors: List[str] = []
    embedding: List[float]


class AnalyzeResponse(BaseModel):
    message: str
    analysis: AnalysisPayload


class MatchRequest(BaseModel):
    """Embedding and tags previously returned by the analyze endpoint."""

    embedding: List[float] = Field(min_length=1)
    tags: List[str] = []
    location: Optional[LocationPayload] = None
    max_results: int = Field(default=20, ge=1, le=100)


class InspirationMatch(BaseModel):
    media_id: str
    media_url: str
    thumbnail_url: Optional[str] = None
    service_id: str
    service_title: str
    service_price_min: float
    service_currency: str
    provider_id: str
    provider_business_name: str
    provider_slug: str
    provider_logo_url: Optional[str] = None
    provider_city: str
    provider_state: str
    category: str
    match_score: int = Field(ge=0, le=100)
    vector_score: int = Field(ge=0, le=100)
    tag_score: int = Field(ge=0, le=100)
    distance: float
    matching_tags: List[str]
    ai_tags: List[str]

    @classmethod
    def from_match(cls, match: ScoredMatch) -> "InspirationMatch":
        display = match.display
        return cls(
            media_id=match.media_id,
            media_url=display.media_url,
            thumbnail_url=display.thumbnail_url,
            service_id=display.service_id,
            service_title=display.service_title,
            service_price_min=display.service_price_min,
            service_currency=display.service_currency,
            provider_id=display.provider_id,
            provider_business_name=display.provider_business_name,
            provider_slug=display.provider_slug,
            provider_logo_url=display.provider_logo_url,
            provider_city=display.provider_city,
            provider_state=display.provider_state,
            category=match.category,
            match_score=match.final_score,
            vector_score=match.vector_score,
            tag_score=match.tag_score,
            distance=match.distance,
            matching_tags=match.matching_tags,
            ai_tags=match.tags,
        )


class MatchResponse(BaseModel):
    message: str
    matches: List[InspirationMatch]
    total_matches: int
