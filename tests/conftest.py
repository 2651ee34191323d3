"""
Pytest fixtures for InspoMatch tests.
"""

import base64
import io
import math
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import pytest
from PIL import Image

# Add project root to path for package imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from inspomatch.config import ScoringSettings, SearchSettings
from inspomatch.core.analysis import ImageTagger
from inspomatch.core.embedders import MultimodalEmbedder
from inspomatch.core.search import InspirationSearchPipeline
from inspomatch.core.vector_store import FlatCosineStore

TEST_DIM = 8


@dataclass
class RankedItem:
    """Minimal object with the attributes the re-ranker reads."""

    name: str
    final_score: float
    distance: float


def vector_with_similarity(similarity: float, dim: int = TEST_DIM) -> np.ndarray:
    """Unit vector whose cosine similarity to the first basis vector is ``similarity``."""
    vector = np.zeros(dim, dtype=np.float32)
    vector[0] = similarity
    vector[1] = math.sqrt(max(0.0, 1.0 - similarity * similarity))
    return vector


def query_vector(dim: int = TEST_DIM) -> np.ndarray:
    vector = np.zeros(dim, dtype=np.float32)
    vector[0] = 1.0
    return vector


def media_payload(tags: List[str], category: str = "hair", city: str = "Lagos", **extra: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "tags": tags,
        "category": category,
        "media_url": "https://cdn.example.com/media.jpg",
        "service_id": "svc-1",
        "service_title": "Bridal Updo",
        "service_price_min": 120.0,
        "service_currency": "USD",
        "provider_id": "prov-1",
        "provider_business_name": "Glow Studio",
        "provider_slug": "glow-studio",
        "provider_city": city,
        "provider_state": "LA",
    }
    payload.update(extra)
    return payload


def solid_image(color=(200, 30, 40), size=(64, 32)) -> Image.Image:
    return Image.new("RGB", size, color)


def encode_png(image: Image.Image) -> str:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return base64.b64encode(buffer.getvalue()).decode("ascii")


@pytest.fixture
def embedder() -> MultimodalEmbedder:
    """Small deterministic embedder."""
    return MultimodalEmbedder(dim=TEST_DIM, image_size=4)


@pytest.fixture
def store() -> FlatCosineStore:
    """Empty vector store matching the test embedder dimension."""
    return FlatCosineStore(dim=TEST_DIM)


@pytest.fixture
def tagger() -> ImageTagger:
    return ImageTagger()


@pytest.fixture
def pipeline(embedder, store, tagger) -> InspirationSearchPipeline:
    """Pipeline with default scoring (min score 40, diversity on)."""
    return InspirationSearchPipeline(
        embedder=embedder,
        vector_store=store,
        tagger=tagger,
        scoring=ScoringSettings(),
        search=SearchSettings(),
    )


def add_media(store: FlatCosineStore, media_id: str, similarity: float, payload: Optional[Dict[str, Any]] = None) -> None:
    store.add([media_id], vector_with_similarity(similarity, store.dim).reshape(1, -1), [payload or media_payload([])])


@pytest.fixture
def temp_dir(tmp_path) -> Path:
    """Temporary directory for files written by a test."""
    return tmp_path
