# Path: inspomatch/core/vector_store/base.py
# Purpose: Define the VectorStore interface for indexing and searching service media embeddings.
# Layer: core/vector_store.
# Details: Provides abstract methods for persistence, filtered search, and payload retrieval.

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

import numpy as np


class VectorStore(ABC):
    """Abstract base class for pluggable vector store backends."""

    name: str
    dim: int

    @abstractmethod
    def add(self, ids: List[str], vectors: np.ndarray, payloads: Optional[List[Dict[str, Any]]] = None) -> None:
        """Add vectors and optional payloads into the index."""

    @abstractmethod
    def search(self, query: np.ndarray, k: int, filter: Optional[Dict[str, Any]] = None) -> List[Tuple[str, float]]:
        """Search for nearest neighbors and return (id, cosine distance) pairs, closest first."""

    @abstractmethod
    def save(self, path: str) -> None:
        """Persist the index to disk."""

    @abstractmethod
    def load(self, path: str) -> None:
        """Load a serialized index from disk."""

    @abstractmethod
    def get_payload(self, id: str) -> Optional[Dict[str, Any]]:
        """Return stored payload data for the given identifier if available."""

    @abstractmethod
    def __len__(self) -> int:
        """Return the number of indexed vectors."""
