"""
Query pipeline: vectorize a question, search the index, map ordinals back to text.
"""

from typing import Callable, List

from ..util.logging import logger
from ..vector.index import IVectorStore
from ..vector.tfidf import TfIdfVectorizer
from .schema import Answer

SIMILAR_QUESTION_MAX_WORDS = 10


def to_similar_question(text: str, max_words: int = SIMILAR_QUESTION_MAX_WORDS) -> str:
    """
    Shorten a document to a question-like excerpt.

    Takes the text before the first period, falling back to the whole text when
    that is blank, and keeps at most max_words words (with a trailing "..." when cut).
    """
    first_sentence = text.split(".", 1)[0].strip()
    words = (first_sentence or text).split()
    if len(words) > max_words:
        return " ".join(words[:max_words]) + "..."
    return " ".join(words)


class SearchService:
    """
    Answers natural-language questions against the documentation index.

    Holds no persistent state of its own: the vectorizer and vector store are
    owned by the caller and shared with ingestion.
    """

    def __init__(self, vectorizer: TfIdfVectorizer, vector_store: IVectorStore, similar_questions_k: int = 5):
        self.vectorizer = vectorizer
        self.vector_store = vector_store
        self.similar_questions_k = similar_questions_k
        self._subscribers: List[Callable[[Answer], None]] = []

    def subscribe(self, callback: Callable[[Answer], None]) -> None:
        """Register a callback receiving every Answer produced by answer()."""
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: Callable[[Answer], None]) -> None:
        """Stop delivering answers to a callback."""
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def answer(self, query: str, k: int = 5) -> Answer:
        """
        Find the k documents closest to the query plus short similar-question excerpts.

        Args:
            query: Natural-language question
            k: Maximum number of documents in results

        Returns:
            Answer with empty lists when nothing is indexed or nothing matches
        """
        query_vector = self.vectorizer.transform(query)

        results = self.vector_store.search(query_vector, k)
        similar = self.vector_store.search(query_vector, self.similar_questions_k)

        answer = Answer(
            query=query,
            results=results,
            similar_questions=[to_similar_question(text) for text in similar],
        )

        logger.log_query(query, k, len(results))

        for callback in list(self._subscribers):
            callback(answer)

        return answer
