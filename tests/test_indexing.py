"""
Tests for catalog loading and index building.
"""

import json

import pytest

from inspomatch.core.indexing import IndexBuilder, load_catalog, record_from_entry

from conftest import TEST_DIM, solid_image


def write_catalog(temp_dir, entries):
    manifest = temp_dir / "catalog.json"
    manifest.write_text(json.dumps(entries))
    return manifest


@pytest.fixture
def photo_dir(temp_dir):
    photos = temp_dir / "photos"
    photos.mkdir()
    solid_image((200, 30, 40)).save(photos / "red.png")
    solid_image((50, 90, 200), size=(32, 64)).save(photos / "blue.png")
    return photos


class TestLoadCatalog:
    """JSON manifest parsing."""

    def test_relative_paths_resolved(self, temp_dir, photo_dir):
        manifest = write_catalog(
            temp_dir,
            [{"media_id": "m1", "path": "photos/red.png", "tags": ["Bridal"], "category": "hair", "provider_city": "Lagos"}],
        )
        (record,) = load_catalog(manifest)
        assert record.path == photo_dir / "red.png"
        assert record.tags == ["Bridal"]
        assert record.display.provider_city == "Lagos"

    def test_media_object_form(self, temp_dir, photo_dir):
        manifest = write_catalog(temp_dir, {"media": [{"media_id": 5, "path": "photos/blue.png"}]})
        (record,) = load_catalog(manifest)
        assert record.media_id == "5"
        assert record.category == "general"

    def test_price_coerced_to_float(self, temp_dir):
        record = record_from_entry({"media_id": "m", "path": "a.jpg", "service_price_min": "45"}, temp_dir)
        assert record.display.service_price_min == 45.0

    def test_missing_path_rejected(self, temp_dir):
        with pytest.raises(ValueError):
            record_from_entry({"media_id": "m"}, temp_dir)

    def test_unsupported_extension_rejected(self, temp_dir):
        with pytest.raises(ValueError):
            record_from_entry({"media_id": "m", "path": "notes.txt"}, temp_dir)


class TestIndexBuilder:
    """Embedding catalog photos into the vector store."""

    def test_builds_index_with_payloads(self, temp_dir, photo_dir, embedder, store, tagger):
        manifest = write_catalog(
            temp_dir,
            [
                {"media_id": "red", "path": "photos/red.png", "tags": ["bridal"], "category": "hair"},
                {"media_id": "blue", "path": "photos/blue.png", "category": "nails"},
            ],
        )
        builder = IndexBuilder(embedder=embedder, vector_store=store, tagger=tagger, batch_size=1)
        assert builder.build_index(load_catalog(manifest), show_progress=False) == 2
        assert len(store) == 2

        payload = store.get_payload("red")
        assert payload["tags"][0] == "bridal"
        assert "red-tones" in payload["tags"]
        assert payload["category"] == "hair"
        assert payload["path"].endswith("red.png")

    def test_catalog_tags_only_without_tagger(self, temp_dir, photo_dir, embedder, store):
        manifest = write_catalog(temp_dir, [{"media_id": "red", "path": "photos/red.png", "tags": ["bridal", "Bridal "]}])
        IndexBuilder(embedder=embedder, vector_store=store).build_index(load_catalog(manifest), show_progress=False)
        assert store.get_payload("red")["tags"] == ["bridal"]

    def test_unreadable_images_skipped(self, temp_dir, photo_dir, embedder, store):
        (photo_dir / "broken.jpg").write_bytes(b"not an image")
        manifest = write_catalog(
            temp_dir,
            [
                {"media_id": "ok", "path": "photos/red.png"},
                {"media_id": "broken", "path": "photos/broken.jpg"},
                {"media_id": "gone", "path": "photos/missing.png"},
            ],
        )
        indexed = IndexBuilder(embedder=embedder, vector_store=store).build_index(load_catalog(manifest), show_progress=False)
        assert indexed == 1
        assert store.get_payload("broken") is None

    def test_vectors_match_store_dimension(self, temp_dir, photo_dir, embedder, store):
        manifest = write_catalog(temp_dir, [{"media_id": "ok", "path": "photos/red.png"}])
        IndexBuilder(embedder=embedder, vector_store=store).build_index(load_catalog(manifest), show_progress=False)
        assert store.dim == TEST_DIM
        assert len(store.search(embedder.embed_image(solid_image()), k=1)) == 1
