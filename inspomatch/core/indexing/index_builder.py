# Path: inspomatch/core/indexing/index_builder.py
# Purpose: Build and update the service media embedding index from catalog records.
# Layer: core/indexing.
# Details: Coordinates tagging, multimodal embedding, and vector store insertion with progress reporting.

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import numpy as np
from PIL import Image
from tqdm import tqdm

from inspomatch.core.analysis.tagger import ImageTagger
from inspomatch.core.embedders.base import Embedder
from inspomatch.core.models.domain import ServiceMediaRecord
from inspomatch.core.vector_store.base import VectorStore
from inspomatch.logging_config import get_logger

logger = get_logger("indexing.builder")


class IndexBuilder:
    """Batch process service photos to populate the configured vector store."""

    def __init__(
        self,
        embedder: Embedder,
        vector_store: VectorStore,
        tagger: Optional[ImageTagger] = None,
        batch_size: int = 8,
    ) -> None:
        self.embedder = embedder
        self.vector_store = vector_store
        self.tagger = tagger
        self.batch_size = batch_size

    def build_index(self, records: Iterable[ServiceMediaRecord], show_progress: bool = True) -> int:
        """
        Encode service photos and push embeddings into the vector store.

        External calls:
        - inspomatch/core/analysis/tagger.py::ImageTagger.analyze - derive tags merged with catalog tags.
        - inspomatch/core/embedders/base.py::Embedder.embed_multimodal - embed image plus tag context.
        - inspomatch/core/vector_store/flat_store.py::FlatCosineStore.add - append vectors to the index backend.

        Returns:
            Number of records indexed.
        """

        batch_ids: List[str] = []
        batch_vectors: List[np.ndarray] = []
        batch_payloads: List[Dict[str, Any]] = []
        indexed = 0
        skipped = 0

        for record in tqdm(list(records), desc="Indexing service media", unit="img", disable=not show_progress):
            image = self._load_image(record.path)
            if image is None:
                skipped += 1
                logger.warning(f"Skipping {record.media_id}: cannot open {record.path}")
                continue

            tags = self._merge_tags(record.tags, image)
            vector = self.embedder.embed_multimodal(image, " ".join(tags) or None)
            batch_ids.append(record.media_id)
            batch_vectors.append(vector)
            batch_payloads.append(self._payload(record, tags))

            if len(batch_ids) >= self.batch_size:
                indexed += self._flush(batch_ids, batch_vectors, batch_payloads)
                batch_ids, batch_vectors, batch_payloads = [], [], []

        if batch_ids:
            indexed += self._flush(batch_ids, batch_vectors, batch_payloads)

        logger.info(f"Indexed {indexed} service media ({skipped} skipped)")
        return indexed

    def _merge_tags(self, catalog_tags: List[str], image: Image.Image) -> List[str]:
        """Catalog tags first, then tagger tags not already present."""

        merged: List[str] = []
        seen = set()
        extra = self.tagger.analyze(image).tags if self.tagger is not None else []
        for tag in [*catalog_tags, *extra]:
            key = tag.strip().lower()
            if key and key not in seen:
                seen.add(key)
                merged.append(tag.strip())
        return merged

    @staticmethod
    def _payload(record: ServiceMediaRecord, tags: List[str]) -> Dict[str, Any]:
        payload: Dict[str, Any] = asdict(record.display)
        payload["tags"] = tags
        payload["category"] = record.category
        payload["path"] = str(record.path)
        return payload

    def _flush(self, ids: List[str], vectors: List[np.ndarray], payloads: List[Dict[str, Any]]) -> int:
        """Send the accumulated batch to the vector store."""

        matrix = np.vstack(vectors).astype(np.float32)
        self.vector_store.add(ids, matrix, payloads)
        return len(ids)

    @staticmethod
    def _load_image(path: Path) -> Optional[Image.Image]:
        """Open an image from disk, returning None if loading fails."""

        try:
            with Image.open(path) as image:
                image.load()
                return image.copy()
        except (OSError, FileNotFoundError):
            return None
