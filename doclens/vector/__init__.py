"""
Vector layer: tokenizer, TF-IDF vectorizer and the HNSW document index.
"""

# Package initialization for vector module
from .tokenizer import tokenize
from .tfidf import TfIdfVectorizer
from .index import IVectorStore
from .hnsw_store import HnswVectorStore
from .types import QueryResult

__all__ = [
    'tokenize',
    'TfIdfVectorizer',
    'IVectorStore',
    'HnswVectorStore',
    'QueryResult'
]
