"""
Tests for the HTTP API.
"""

import base64

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from inspomatch.api import create_app
from inspomatch.api.app import decode_image
from inspomatch.exceptions import ImageDecodeError

from conftest import TEST_DIM, add_media, encode_png, media_payload, query_vector, solid_image


@pytest.fixture
def client(pipeline) -> TestClient:
    return TestClient(create_app(pipeline))


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestAnalyzeEndpoint:
    """POST /inspiration/analyze"""

    def test_returns_tags_and_embedding(self, client):
        response = client.post("/inspiration/analyze", json={"image_base64": encode_png(solid_image()), "notes": "soft glam"})
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Image analyzed successfully"
        assert body["analysis"]["tags"] == ["red-tones", "vibrant", "landscape"]
        assert body["analysis"]["dominant_colors"] == ["red"]
        assert len(body["analysis"]["embedding"]) == TEST_DIM

    def test_data_url_prefix_accepted(self, client):
        payload = "data:image/png;base64," + encode_png(solid_image())
        assert client.post("/inspiration/analyze", json={"image_base64": payload}).status_code == 200

    def test_undecodable_image(self, client):
        response = client.post("/inspiration/analyze", json={"image_base64": "bm90IGFuIGltYWdl"})
        assert response.status_code == 400

    def test_missing_image(self, client):
        assert client.post("/inspiration/analyze", json={}).status_code == 422


class TestMatchEndpoint:
    """POST /inspiration/match"""

    def test_no_matches_message(self, client):
        response = client.post("/inspiration/match", json={"embedding": query_vector().tolist(), "tags": ["bridal"]})
        assert response.status_code == 200
        assert response.json() == {"message": "No matches found", "matches": [], "total_matches": 0}

    def test_matches_serialized(self, client, store):
        add_media(store, "close", 0.98, media_payload(["bridal", "updo"]))
        add_media(store, "far", 0.55, media_payload(["casual"]))
        response = client.post(
            "/inspiration/match",
            json={"embedding": query_vector().tolist(), "tags": ["Bridal", "updo"], "max_results": 10},
        )
        body = response.json()
        assert response.status_code == 200
        assert body["message"] == "Matches found"
        assert body["total_matches"] == 1
        match = body["matches"][0]
        assert match["media_id"] == "close"
        assert match["matching_tags"] == ["Bridal", "updo"]
        assert match["ai_tags"] == ["bridal", "updo"]
        assert match["provider_slug"] == "glow-studio"
        assert 95 <= match["match_score"] <= 100

    def test_location_filter(self, client, store):
        add_media(store, "lagos", 0.95, media_payload([], city="Lagos"))
        add_media(store, "austin", 0.97, media_payload([], city="Austin"))
        response = client.post(
            "/inspiration/match",
            json={"embedding": query_vector().tolist(), "location": {"city": "Lagos"}},
        )
        assert [m["media_id"] for m in response.json()["matches"]] == ["lagos"]

    def test_wrong_dimension(self, client):
        response = client.post("/inspiration/match", json={"embedding": [0.1, 0.2]})
        assert response.status_code == 400

    def test_max_results_bounds(self, client):
        response = client.post("/inspiration/match", json={"embedding": query_vector().tolist(), "max_results": 0})
        assert response.status_code == 422

    def test_analyze_then_match_round_trip(self, client, pipeline, store, embedder, tagger):
        """An indexed photo is found again through both endpoints."""
        image = solid_image((50, 90, 200), size=(40, 80))
        tags = tagger.analyze(image).tags
        store.add(["look"], embedder.embed_multimodal(image, " ".join(tags)).reshape(1, -1), [media_payload(tags)])

        analysis = client.post("/inspiration/analyze", json={"image_base64": encode_png(image)}).json()["analysis"]
        response = client.post("/inspiration/match", json={"embedding": analysis["embedding"], "tags": analysis["tags"]})
        (match,) = response.json()["matches"]
        assert match["media_id"] == "look"
        assert match["match_score"] == 100


class TestUnconfigured:
    def test_missing_pipeline(self):
        client = TestClient(create_app())
        response = client.post("/inspiration/match", json={"embedding": [1.0]})
        assert response.status_code == 500


class TestDecodeImage:
    def test_invalid_base64(self):
        with pytest.raises(ImageDecodeError):
            decode_image("***")

    def test_line_wrapped_base64(self):
        """MIME-style base64 with embedded newlines still decodes."""
        wrapped = base64.encodebytes(base64.b64decode(encode_png(solid_image()))).decode("ascii")
        assert "\n" in wrapped
        assert decode_image(wrapped).size == (64, 32)

    def test_decompression_bomb_rejected(self, monkeypatch):
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
        with pytest.raises(ImageDecodeError):
            decode_image(encode_png(solid_image(size=(200, 200))))


class TestOversizedUpload:
    def test_oversized_image_is_bad_request(self, client, monkeypatch):
        """Images past the decompression limit are a client error, not a crash."""
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
        response = client.post("/inspiration/analyze", json={"image_base64": encode_png(solid_image(size=(200, 200)))})
        assert response.status_code == 400
