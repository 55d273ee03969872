"""
Abstract interface for vector stores keyed by insertion ordinal.
"""

from abc import ABC, abstractmethod
from typing import List

import numpy as np

from .types import QueryResult


class IVectorStore(ABC):
    """Abstract interface for vector storage operations."""

    @abstractmethod
    def add_document(self, text: str, vector: np.ndarray) -> int:
        """Store a vector and its document text, returning the assigned ordinal."""
        pass

    @abstractmethod
    def search_with_scores(self, query_vector: np.ndarray, k: int = 5) -> List[QueryResult]:
        """Return up to k nearest documents with ordinals and distances, closest first."""
        pass

    @abstractmethod
    def save_index(self) -> None:
        """Flush the index to persistent storage."""
        pass

    @property
    @abstractmethod
    def count(self) -> int:
        """Number of stored documents."""
        pass

    def search(self, query_vector: np.ndarray, k: int = 5) -> List[str]:
        """Return up to k nearest document texts, closest first."""
        return [result.text for result in self.search_with_scores(query_vector, k)]
