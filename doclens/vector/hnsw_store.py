"""
FAISS HNSW vector store with on-disk persistence.

The index file is a single numpy ``.npz`` archive holding two arrays: ``graph``,
the FAISS native serialization of the HNSW graph, and ``meta``, a JSON string
with the format version, dimension, metric and the ordinal -> text list. It is
written to a temporary file and swapped in with one ``os.replace``, so a crash
during save leaves the previous checkpoint intact.
"""

import json
import os
import threading
from typing import List

import faiss
import numpy as np

from ..core.config import INDEX_FORMAT_VERSION as FORMAT_VERSION
from ..core.config import VECTOR_METRIC as METRIC
from ..core.config import ensure_index_directory
from ..core.errors import CapacityExceededError, DimensionMismatchError, IndexLoadError
from ..util.logging import logger
from .index import IVectorStore
from .types import QueryResult


class HnswVectorStore(IVectorStore):
    """Approximate nearest-neighbour store over cosine distance.

    Vectors are L2-normalised before insertion and searched by inner product,
    so ``1 - score`` is the cosine distance. FAISS assigns sequential ids,
    which double as document ordinals.

    Inserts, searches and saves share one lock: FAISS HNSW does not allow
    ``add`` to run alongside ``search``, and the text list must never lag the graph.
    """

    def __init__(self, index_path: str, dimension: int = 384, max_elements: int = 10000,
                 m: int = 16, ef_construction: int = 200, ef_search: int = 50):
        """
        Load the index at index_path, or create an empty one if the file is absent.

        Args:
            index_path: File the index is read from and saved to
            dimension: Dimension of the vectors (default: 384)
            max_elements: Maximum number of stored documents
            m: Per-node connectivity of the HNSW graph
            ef_construction: Candidate list size while building the graph
            ef_search: Minimum candidate list size while searching

        Raises:
            IndexLoadError: The file exists but is unreadable or incompatible
        """
        self.index_path = index_path
        self.dimension = dimension
        self.max_elements = max_elements
        self.m = m
        self.ef_construction = ef_construction
        self.ef_search = ef_search

        self._documents: List[str] = []
        self._lock = threading.RLock()

        if os.path.exists(index_path):
            self.index = self._load_index()
        else:
            self.index = self._create_index()
            logger.log_index_persistence("created", index_path, 0, details={
                "dimension": dimension,
                "max_elements": max_elements,
            })

    @property
    def count(self) -> int:
        """Number of stored documents."""
        return self.index.ntotal

    @property
    def documents(self) -> List[str]:
        """Copy of the stored document texts in ordinal order."""
        with self._lock:
            return list(self._documents)

    def get_document(self, ordinal: int) -> str:
        """Document text stored under an ordinal."""
        if ordinal < 0:
            raise IndexError(f"Ordinal must be >= 0, got {ordinal}")
        return self._documents[ordinal]

    def _create_index(self):
        index = faiss.IndexHNSWFlat(self.dimension, self.m, faiss.METRIC_INNER_PRODUCT)
        index.hnsw.efConstruction = self.ef_construction
        index.hnsw.efSearch = self.ef_search
        return index

    def _load_error(self, message: str, count: int = 0) -> IndexLoadError:
        logger.log_index_persistence("load", self.index_path, count, status="failed", details={"error": message})
        return IndexLoadError(message)

    def _load_index(self):
        """Read the archive, rejecting anything that does not match this store."""
        try:
            with np.load(self.index_path, allow_pickle=False) as archive:
                graph = archive["graph"]
                meta = json.loads(archive["meta"].item())
            index = faiss.deserialize_index(graph)
        except Exception as e:
            raise self._load_error(f"Unreadable vector index at {self.index_path}: {e}") from e

        if not isinstance(meta, dict):
            raise self._load_error(f"Index metadata at {self.index_path} is not an object")

        if meta.get("format_version") != FORMAT_VERSION:
            raise self._load_error(
                f"Unsupported index format version {meta.get('format_version')} (expected {FORMAT_VERSION})"
            )
        if meta.get("dimension") != self.dimension or meta.get("metric") != METRIC:
            raise self._load_error(
                f"Index metadata describes a {meta.get('metric')}/{meta.get('dimension')} index, "
                f"expected {METRIC}/{self.dimension}"
            )
        if index.d != self.dimension:
            raise self._load_error(
                f"Vector index at {self.index_path} has dimension {index.d}, expected {self.dimension}"
            )
        if not hasattr(index, "hnsw") or index.metric_type != faiss.METRIC_INNER_PRODUCT:
            raise self._load_error(f"Vector index at {self.index_path} is not a cosine HNSW index")

        documents = meta.get("documents")
        if not isinstance(documents, list) or len(documents) != index.ntotal:
            raise self._load_error(
                f"Index metadata holds {len(documents) if isinstance(documents, list) else 'no'} "
                f"documents for {index.ntotal} vectors",
                index.ntotal,
            )
        if index.ntotal > self.max_elements:
            raise self._load_error(
                f"Vector index holds {index.ntotal} elements, more than max_elements={self.max_elements}",
                index.ntotal,
            )

        index.hnsw.efSearch = self.ef_search
        self._documents = documents

        logger.log_index_persistence("loaded", self.index_path, index.ntotal)
        return index

    def _as_vector(self, vector) -> np.ndarray:
        """Coerce to a float32 row and check it against the index dimension."""
        array = np.asarray(vector, dtype=np.float32)
        if array.ndim != 1 or array.shape[0] != self.dimension:
            raise DimensionMismatchError(array.size, self.dimension)
        return array

    @staticmethod
    def _normalize(vector: np.ndarray) -> np.ndarray:
        norm = np.linalg.norm(vector)
        if norm == 0:
            return vector
        return vector / norm

    def add_document(self, text: str, vector: np.ndarray) -> int:
        """Insert a vector under the next ordinal and store its text.

        Raises:
            DimensionMismatchError: vector length differs from the index dimension
            CapacityExceededError: the store already holds max_elements documents
        """
        array = self._as_vector(vector)

        with self._lock:
            ordinal = self.index.ntotal
            if ordinal >= self.max_elements:
                logger.log_vector_operation("add", ordinal, {"error": "capacity"}, status="failed")
                raise CapacityExceededError(self.max_elements)

            normalized = np.ascontiguousarray(self._normalize(array), dtype=np.float32)
            self.index.add(normalized.reshape(1, -1))
            self._documents.append(text)

        logger.log_vector_operation("added", ordinal, {"text_length": len(text)})
        return ordinal

    def search_with_scores(self, query_vector: np.ndarray, k: int = 5) -> List[QueryResult]:
        """Search for the k nearest documents by cosine distance, closest first.

        Returns an empty list if the store is empty, k is not positive, or the
        query vector is all zeros.
        """
        array = self._as_vector(query_vector)

        norm = np.linalg.norm(array)
        if norm == 0 or k <= 0:
            return []

        query = np.ascontiguousarray(array / norm, dtype=np.float32).reshape(1, -1)

        with self._lock:
            total = self.index.ntotal
            if not total:
                return []

            top_k = min(k, total)
            params = faiss.SearchParametersHNSW()
            params.efSearch = max(self.ef_search, top_k)

            scores, labels = self.index.search(query, top_k, params=params)

            results = []
            for score, label in zip(scores[0], labels[0]):
                if label < 0:
                    continue
                results.append(QueryResult(
                    ordinal=int(label),
                    distance=float(1.0 - score),
                    text=self._documents[int(label)],
                ))

        return results

    def save_index(self) -> None:
        """Write the index archive to index_path, replacing any existing file."""
        with self._lock:
            ensure_index_directory(self.index_path)

            meta = {
                "format_version": FORMAT_VERSION,
                "dimension": self.dimension,
                "metric": METRIC,
                "documents": self._documents,
            }
            graph = faiss.serialize_index(self.index)
            count = self.index.ntotal

            tmp_path = self.index_path + ".tmp"
            try:
                # A file object keeps np.savez from appending ".npz" to the name
                with open(tmp_path, "wb") as f:
                    np.savez(f, graph=graph, meta=np.array(json.dumps(meta)))
                os.replace(tmp_path, self.index_path)
            except OSError as e:
                logger.log_index_persistence("save", self.index_path, count, status="failed", details={"error": str(e)})
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise

        logger.log_index_persistence("saved", self.index_path, count)
