# Path: inspomatch/core/vector_store/flat_store.py
# Purpose: Provide an exhaustive in-memory cosine-distance vector store.
# Layer: core/vector_store.
# Details: Implements add/search/save/load with numpy; rows are L2-normalized so distance is 1 - dot.

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from inspomatch.logging_config import get_logger

from .base import VectorStore

logger = get_logger("vector_store.flat")


def _normalize_rows(vectors: np.ndarray) -> np.ndarray:
    norms = np.linalg.norm(vectors, axis=1, keepdims=True)
    norms[norms == 0] = 1.0
    return (vectors / norms).astype(np.float32)


def _matches_filter(payload: Optional[Dict[str, Any]], filter: Dict[str, Any]) -> bool:
    if not payload:
        return False
    for key, expected in filter.items():
        actual = payload.get(key)
        if isinstance(expected, str) and isinstance(actual, str):
            if actual.strip().lower() != expected.strip().lower():
                return False
        elif actual != expected:
            return False
    return True


class FlatCosineStore(VectorStore):
    """Brute-force cosine search over every stored vector.

    Suited to catalogs of a few tens of thousands of photos; an ANN index can
    replace it behind the same interface.
    """

    def __init__(self, dim: int, name: str = "flat_cosine") -> None:
        self.dim = dim
        self.name = name
        self._ids: List[str] = []
        self._vectors: Optional[np.ndarray] = None
        self._payloads: Dict[str, Dict[str, Any]] = {}

    def __len__(self) -> int:
        return len(self._ids)

    def add(self, ids: List[str], vectors: np.ndarray, payloads: Optional[List[Dict[str, Any]]] = None) -> None:
        """Add vectors to the store with optional payload metadata.

        Re-adding an existing id replaces its vector and payload.
        """

        if vectors.ndim != 2 or vectors.shape[1] != self.dim:
            raise ValueError(f"Vector dimensionality {vectors.shape[-1]} does not match store dimension {self.dim}.")
        if vectors.shape[0] != len(ids):
            raise ValueError("Vectors length must match ids length.")

        payloads = payloads or [{} for _ in ids]
        if len(payloads) != len(ids):
            raise ValueError("Payloads length must match ids length.")

        ids = [str(item_id) for item_id in ids]
        normalized = _normalize_rows(vectors.astype(np.float32))

        existing = {item_id: position for position, item_id in enumerate(self._ids)}
        new_ids: List[str] = []
        new_rows: List[np.ndarray] = []
        for item_id, row, payload in zip(ids, normalized, payloads):
            position = existing.get(item_id)
            if position is None:
                existing[item_id] = len(self._ids) + len(new_ids)
                new_ids.append(item_id)
                new_rows.append(row)
            elif position < len(self._ids) and self._vectors is not None:
                self._vectors[position] = row
            else:
                new_rows[position - len(self._ids)] = row
            self._payloads[item_id] = dict(payload)

        if new_rows:
            stacked = np.vstack(new_rows)
            self._vectors = stacked if self._vectors is None else np.vstack([self._vectors, stacked])
            self._ids.extend(new_ids)
        logger.debug(f"Added {len(ids)} vectors ({len(new_ids)} new), store size {len(self._ids)}")

    def search(self, query: np.ndarray, k: int, filter: Optional[Dict[str, Any]] = None) -> List[Tuple[str, float]]:
        """Return the k nearest neighbors by cosine distance."""

        if self._vectors is None or len(self._ids) == 0:
            return []

        query = np.asarray(query, dtype=np.float32).reshape(-1)
        if query.shape[0] != self.dim:
            raise ValueError(f"Query dimensionality {query.shape[0]} does not match store dimension {self.dim}.")

        norm = np.linalg.norm(query)
        if norm > 0:
            query = query / norm
        distances = 1.0 - self._vectors @ query
        ranked_indices = np.argsort(distances, kind="stable")

        # inspomatch/core/search/pipeline.py::InspirationSearchPipeline.match - consumes these (id, distance) pairs.
        results: List[Tuple[str, float]] = []
        for idx in ranked_indices:
            item_id = self._ids[idx]
            if filter and not _matches_filter(self._payloads.get(item_id), filter):
                continue
            results.append((item_id, float(distances[idx])))
            if len(results) >= k:
                break
        return results

    def save(self, path: str) -> None:
        """Persist vectors and payloads to disk as lightweight JSON + numpy arrays."""

        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        vectors = self._vectors if self._vectors is not None else np.empty((0, self.dim), dtype=np.float32)
        np.save(target.with_suffix(".npy"), vectors)
        metadata = {"dim": self.dim, "ids": self._ids, "payloads": self._payloads}
        target.with_suffix(".json").write_text(json.dumps(metadata), encoding="utf-8")
        logger.info(f"Saved {len(self._ids)} vectors to {target}")

    def load(self, path: str) -> None:
        """Load vectors and payloads previously saved by :meth:`save`."""

        target = Path(path)
        vector_path = target.with_suffix(".npy")
        metadata_path = target.with_suffix(".json")
        if not vector_path.exists() or not metadata_path.exists():
            raise FileNotFoundError(f"Missing vector store files for {path}.")

        metadata = json.loads(metadata_path.read_text(encoding="utf-8"))
        stored_dim = int(metadata.get("dim", self.dim))
        if stored_dim != self.dim:
            raise ValueError(f"Stored index dimension {stored_dim} does not match store dimension {self.dim}.")

        vectors = np.load(vector_path).astype(np.float32)
        self._ids = [str(item_id) for item_id in metadata.get("ids", [])]
        self._vectors = vectors if len(self._ids) else None
        self._payloads = {str(key): value for key, value in metadata.get("payloads", {}).items()}
        logger.info(f"Loaded {len(self._ids)} vectors from {target}")

    def get_payload(self, id: str) -> Optional[Dict[str, Any]]:
        """Retrieve payload previously associated with the given id."""

        return self._payloads.get(id)
