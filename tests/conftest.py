"""
Shared fixtures for the documentation index tests.
"""

import pytest

from doclens.vector.hnsw_store import HnswVectorStore
from doclens.vector.tfidf import TfIdfVectorizer


@pytest.fixture
def index_path(tmp_path):
    """Index file location inside a per-test directory."""
    return str(tmp_path / "data" / "vector_index.bin")


@pytest.fixture
def make_store(index_path):
    """Factory for stores sharing the per-test index path."""
    def _make(**kwargs):
        kwargs.setdefault("index_path", index_path)
        return HnswVectorStore(**kwargs)
    return _make


@pytest.fixture
def vectorizer():
    return TfIdfVectorizer(dimension=384)

