"""
Result models handed from the query pipeline to its callers.
"""

from typing import List

from pydantic import BaseModel, Field


class Answer(BaseModel):
    """Ranked documentation matches for one query."""

    query: str
    results: List[str] = Field(default_factory=list)
    similar_questions: List[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.results
