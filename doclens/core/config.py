"""
Configuration for the documentation index.
Every tunable is read from the environment (or a local .env file) at import time.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Fixed by the feature layout of the vectorizer; a persisted index built with a
# different dimension is rejected on load.
VECTOR_DIMENSION = 384
VECTOR_METRIC = "cosine"
INDEX_FORMAT_VERSION = 1

# Index location
INDEX_PATH = os.getenv("DOCLENS_INDEX_PATH", "./data/vector_index.bin")

# HNSW graph parameters
MAX_ELEMENTS = int(os.getenv("DOCLENS_MAX_ELEMENTS", "10000"))
HNSW_M = int(os.getenv("DOCLENS_HNSW_M", "16"))
EF_CONSTRUCTION = int(os.getenv("DOCLENS_EF_CONSTRUCTION", "200"))
EF_SEARCH = int(os.getenv("DOCLENS_EF_SEARCH", "50"))

# Query pipeline
SIMILAR_QUESTIONS_K = int(os.getenv("DOCLENS_SIMILAR_QUESTIONS_K", "5"))

# Ingestion
CHECKPOINT_EVERY = int(os.getenv("DOCLENS_CHECKPOINT_EVERY", "50"))


def ensure_index_directory(index_path: str = None):
    """Ensure the directory holding the index file exists."""
    Path(index_path or INDEX_PATH).parent.mkdir(parents=True, exist_ok=True)


def validate_index_config():
    """Validate index configuration and return any issues."""
    issues = []

    if MAX_ELEMENTS < 1:
        issues.append("DOCLENS_MAX_ELEMENTS must be >= 1")

    if HNSW_M < 2:
        issues.append("DOCLENS_HNSW_M must be >= 2")

    if EF_CONSTRUCTION < 1:
        issues.append("DOCLENS_EF_CONSTRUCTION must be >= 1")

    if EF_SEARCH < 1:
        issues.append("DOCLENS_EF_SEARCH must be >= 1")

    if SIMILAR_QUESTIONS_K < 1:
        issues.append("DOCLENS_SIMILAR_QUESTIONS_K must be >= 1")

    if CHECKPOINT_EVERY < 1:
        issues.append("DOCLENS_CHECKPOINT_EVERY must be >= 1")

    if not INDEX_PATH:
        issues.append("DOCLENS_INDEX_PATH must not be empty")

    return issues


def get_vectorizer():
    """Get a fresh TF-IDF vectorizer sized to the index dimension."""
    from doclens.vector.tfidf import TfIdfVectorizer
    return TfIdfVectorizer(dimension=VECTOR_DIMENSION)


def get_vector_store(index_path: str = None):
    """Get the HNSW vector store, loading the persisted index if one exists.

    Raises:
        ConfigurationError: validate_index_config reported issues
    """
    from doclens.core.errors import ConfigurationError
    from doclens.vector.hnsw_store import HnswVectorStore

    issues = validate_index_config()
    if issues:
        from doclens.util.logging import logger
        logger.log_operation("config.validate", "failed", {"issues": issues})
        raise ConfigurationError(issues)

    return HnswVectorStore(
        index_path=index_path or INDEX_PATH,
        dimension=VECTOR_DIMENSION,
        max_elements=MAX_ELEMENTS,
        m=HNSW_M,
        ef_construction=EF_CONSTRUCTION,
        ef_search=EF_SEARCH,
    )


def get_search_service(vectorizer, vector_store):
    """Get a query pipeline over the given vectorizer and store."""
    from doclens.core.search_service import SearchService
    return SearchService(vectorizer, vector_store, similar_questions_k=SIMILAR_QUESTIONS_K)
