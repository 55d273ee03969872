"""
Typed failures raised by the vectorizer, the vector store and the query pipeline.
"""


class DocLensError(Exception):
    """Base class for all doclens failures."""


class DimensionMismatchError(DocLensError, ValueError):
    """A vector's length differs from the configured index dimension."""

    def __init__(self, actual: int, expected: int):
        self.actual = actual
        self.expected = expected
        super().__init__(f"Vector dimension {actual} does not match expected dimension {expected}")


class CapacityExceededError(DocLensError):
    """Insertion beyond the configured maximum element count."""

    def __init__(self, max_elements: int):
        self.max_elements = max_elements
        super().__init__(f"Vector index is full ({max_elements} elements)")


class IndexLoadError(DocLensError):
    """Persisted index exists but is unreadable or incompatible."""


class ConfigurationError(DocLensError):
    """Index settings failed validation."""

    def __init__(self, issues):
        self.issues = list(issues)
        super().__init__("Invalid index configuration: " + "; ".join(self.issues))
