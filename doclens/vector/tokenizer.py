"""
Tokenizer shared by indexing and querying.
"""

import re
from typing import List

_NON_WORD = re.compile(r"\W+", re.ASCII)


def tokenize(text: str) -> List[str]:
    """Lowercase text and split on runs of non-word characters, dropping empty tokens."""
    return [token for token in _NON_WORD.split(text.lower()) if token]
