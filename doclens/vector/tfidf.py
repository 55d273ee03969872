"""
TF-IDF vectorizer projecting documentation text into fixed-length vectors.
"""

import math
import threading
from collections import Counter
from typing import Dict, List, Optional

import numpy as np

from .tokenizer import tokenize


class TfIdfVectorizer:
    """Incremental TF-IDF vectorizer with an append-only vocabulary.

    Each vocabulary term owns the vector slot matching the order in which it was
    first seen. Only the first ``dimension`` terms are represented; terms seen
    after the slots are filled never appear in any vector.

    The IDF table is only rebuilt by ``fit``. Calls to ``transform`` made after
    ``add_document`` but before ``fit`` use the previous (stale) IDF values.
    """

    def __init__(self, dimension: int = 384):
        """
        Initialize an empty vectorizer.

        Args:
            dimension: Length of every vector produced by transform (default: 384)
        """
        self.dimension = dimension

        self._terms: List[str] = []             # slot -> term, append-only
        self._document_frequency: Dict[str, int] = {}
        self._idf: Dict[str, float] = {}
        self._document_count = 0

        self._lock = threading.Lock()

    @property
    def document_count(self) -> int:
        """Number of documents added so far."""
        return self._document_count

    @property
    def vocabulary_size(self) -> int:
        """Number of distinct terms seen, including those beyond the last slot."""
        return len(self._terms)

    def slot_of(self, term: str) -> Optional[int]:
        """Vector slot of a term, or None if unseen or beyond the dimension."""
        try:
            slot = self._terms.index(term)
        except ValueError:
            return None
        return slot if slot < self.dimension else None

    def document_frequency(self, term: str) -> int:
        """Number of added documents containing the term."""
        return self._document_frequency.get(term, 0)

    def idf(self, term: str) -> Optional[float]:
        """IDF value from the last fit, or None if the term was not fit yet."""
        return self._idf.get(term)

    def add_document(self, text: str) -> None:
        """Register a document's distinct terms in the vocabulary."""
        with self._lock:
            self._document_count += 1
            for term in dict.fromkeys(tokenize(text)):
                if term not in self._document_frequency:
                    self._terms.append(term)
                    self._document_frequency[term] = 1
                else:
                    self._document_frequency[term] += 1

    def fit(self) -> None:
        """Recompute the IDF table from the current vocabulary: idf = ln(N / df)."""
        with self._lock:
            total = self._document_count
            # Build then swap so readers never see a half-built table
            self._idf = {
                term: math.log(total / self._document_frequency[term])
                for term in self._terms
            }

    def transform(self, text: str) -> np.ndarray:
        """Project text onto the vocabulary slots as raw term count times IDF."""
        counts = Counter(tokenize(text))
        idf = self._idf
        vector = np.zeros(self.dimension, dtype=np.float32)

        for slot, term in enumerate(self._terms[:self.dimension]):
            tf = counts.get(term, 0)
            if tf:
                vector[slot] = tf * idf.get(term, 0.0)

        return vector
