# Path: inspomatch/api/app.py
# Purpose: Expose a FastAPI application for ephemeral inspiration search.
# Layer: api.
# Details: Provides health checks plus analyze and match endpoints delegating to the core pipeline.

from __future__ import annotations

import base64
import binascii
import io
from typing import Dict, Optional

import numpy as np
from PIL import Image, UnidentifiedImageError

from inspomatch.core.models.domain import InspirationQuery
from inspomatch.core.search.pipeline import InspirationSearchPipeline
from inspomatch.exceptions import ImageDecodeError
from inspomatch.logging_config import get_logger

from .schemas import AnalysisPayload, AnalyzeRequest, AnalyzeResponse, InspirationMatch, MatchRequest, MatchResponse

logger = get_logger("api")


def decode_image(image_base64: str) -> Image.Image:
    """Decode a base64 (optionally data-URL prefixed) image payload."""

    if image_base64.startswith("data:") and "," in image_base64:
        image_base64 = image_base64.split(",", 1)[1]
    # MIME encoders wrap lines.
    image_base64 = "".join(image_base64.split())
    try:
        raw = base64.b64decode(image_base64, validate=True)
        with Image.open(io.BytesIO(raw)) as image:
            image.load()
            return image.copy()
    except (binascii.Error, UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
        raise ImageDecodeError(f"Could not decode image: {exc}") from exc


def create_app(pipeline: Optional[InspirationSearchPipeline] = None):  # type: ignore[override]
    """Create a FastAPI app instance configured with the provided search pipeline."""

    from fastapi import FastAPI, HTTPException

    app = FastAPI(title="InspoMatch API", version="0.1.0")

    def require_pipeline() -> InspirationSearchPipeline:
        if pipeline is None:
            raise HTTPException(status_code=500, detail="Search pipeline is not configured.")
        return pipeline

    @app.get("/health")
    def health() -> Dict[str, str]:
        """Return a simple health status payload."""

        return {"status": "ok"}

    @app.post("/inspiration/analyze", response_model=AnalyzeResponse)
    def analyze(payload: AnalyzeRequest) -> AnalyzeResponse:
        """Analyze an inspiration photo without storing it."""

        active = require_pipeline()
        try:
            image = decode_image(payload.image_base64)
        except ImageDecodeError as exc:
            logger.warning(str(exc))
            raise HTTPException(status_code=400, detail="Image could not be decoded.") from exc

        analysis = active.analyze(image, notes=payload.notes)
        return AnalyzeResponse(
            message="Image analyzed successfully",
            analysis=AnalysisPayload(
                tags=analysis.tags,
                dominant_colors=analysis.dominant_colors,
                embedding=analysis.embedding.astype(float).tolist(),
            ),
        )

    @app.post("/inspiration/match", response_model=MatchResponse)
    def match(payload: MatchRequest) -> MatchResponse:
        """Match an analyzed inspiration against indexed provider service media."""

        active = require_pipeline()
        query = InspirationQuery(
            embedding=np.asarray(payload.embedding, dtype=np.float32),
            tags=payload.tags,
            location=payload.location.to_filter() if payload.location else None,
        )
        try:
            ranked = active.match(query, max_results=payload.max_results)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        matches = [InspirationMatch.from_match(item) for item in ranked]
        return MatchResponse(
            message="Matches found" if matches else "No matches found",
            matches=matches,
            total_matches=len(matches),
        )

    return app
