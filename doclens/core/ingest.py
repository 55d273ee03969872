"""
Ingestion of package documentation into the vectorizer and the vector index.
"""

from typing import Dict, Iterable, List, Optional

from ..util.logging import logger
from ..vector.index import IVectorStore
from ..vector.tfidf import TfIdfVectorizer


def build_document_text(package_name: str, description: str, sections: Optional[Dict[str, str]] = None) -> str:
    """Join package name, description and README section bodies into one document."""
    parts = [package_name, description]
    if sections:
        parts.extend(sections.values())
    return " ".join(parts)


class DocumentIngestor:
    """
    Feeds documents through the vectorizer into the vector store in chunks.

    After every chunk the IDF table is refit and the index saved, so a crash
    loses at most the chunk in progress.
    """

    def __init__(self, vectorizer: TfIdfVectorizer, vector_store: IVectorStore, checkpoint_every: int = 50):
        if checkpoint_every < 1:
            raise ValueError("checkpoint_every must be >= 1")
        self.vectorizer = vectorizer
        self.vector_store = vector_store
        self.checkpoint_every = checkpoint_every

    def ingest(self, texts: Iterable[str]) -> int:
        """
        Index documents, saving the vector store after each chunk.

        Args:
            texts: Document strings, e.g. from build_document_text

        Returns:
            Number of documents inserted into the vector store

        Raises:
            CapacityExceededError: the store filled up; earlier chunks are already saved
        """
        texts = list(texts)
        total = len(texts)
        ingested = 0

        for start in range(0, total, self.checkpoint_every):
            chunk = texts[start:start + self.checkpoint_every]
            ingested += self._ingest_chunk(chunk)

            self.vector_store.save_index()
            logger.log_ingest_checkpoint(ingested, total, self.vector_store.count)

        return ingested

    def _ingest_chunk(self, chunk: List[str]) -> int:
        for text in chunk:
            self.vectorizer.add_document(text)
        self.vectorizer.fit()

        inserted = 0
        for text in chunk:
            self.vector_store.add_document(text, self.vectorizer.transform(text))
            inserted += 1
        return inserted
