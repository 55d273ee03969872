"""
Record types returned by vector stores.
"""

from dataclasses import dataclass


@dataclass
class QueryResult:
    """Represents a search result from a vector store."""

    ordinal: int
    """Insertion position of the matching document"""

    distance: float
    """Cosine distance to the query (0 = identical direction)"""

    text: str
    """Stored document text for the ordinal"""
