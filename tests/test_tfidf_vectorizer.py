"""
Test cases for the TF-IDF vectorizer.
"""

import math

import numpy as np
import pytest

from doclens.vector.tfidf import TfIdfVectorizer


def test_transform_length_fixed_for_small_vocabulary(vectorizer):
    """Test that a tiny vocabulary still yields a full-length vector."""
    vectorizer.add_document("flutter provider")
    vectorizer.fit()

    vector = vectorizer.transform("flutter provider")
    assert vector.shape == (384,)
    assert np.all(vector[2:] == 0)


def test_transform_length_fixed_for_large_vocabulary(vectorizer):
    """Test that vocabularies larger than the dimension are truncated, not grown."""
    big_document = " ".join(f"term{i}" for i in range(500))
    vectorizer.add_document(big_document)
    vectorizer.add_document("other words")
    vectorizer.fit()

    assert vectorizer.vocabulary_size == 502
    assert vectorizer.transform(big_document).shape == (384,)


def test_document_frequency_counts_distinct_terms_per_document(vectorizer):
    """Test that repeated words in one document count once."""
    vectorizer.add_document("state state state")
    vectorizer.add_document("state management")

    assert vectorizer.document_frequency("state") == 2
    assert vectorizer.document_frequency("management") == 1
    assert vectorizer.document_frequency("unknown") == 0
    assert vectorizer.document_count == 2


def test_idf_is_natural_log_without_smoothing(vectorizer):
    """Test idf = ln(N / df)."""
    vectorizer.add_document("a b")
    vectorizer.add_document("a c")
    vectorizer.fit()

    assert vectorizer.idf("a") == pytest.approx(0.0)
    assert vectorizer.idf("b") == pytest.approx(math.log(2))
    assert vectorizer.idf("missing") is None


def test_term_frequency_is_raw_count(vectorizer):
    """Test that tf is not normalized by document length."""
    vectorizer.add_document("a b")
    vectorizer.add_document("a c")
    vectorizer.fit()

    vector = vectorizer.transform("b b b c")
    assert vector[vectorizer.slot_of("b")] == pytest.approx(3 * math.log(2))
    assert vector[vectorizer.slot_of("c")] == pytest.approx(math.log(2))
    assert vector[vectorizer.slot_of("a")] == 0


def test_slots_follow_first_seen_order(vectorizer):
    """Test that slot assignment is the append order of new terms."""
    vectorizer.add_document("json serialization")
    vectorizer.add_document("http json client")

    assert vectorizer.slot_of("json") == 0
    assert vectorizer.slot_of("serialization") == 1
    assert vectorizer.slot_of("http") == 2
    assert vectorizer.slot_of("client") == 3
    assert vectorizer.slot_of("never_seen") is None


def test_terms_beyond_dimension_are_dropped():
    """Test that terms added after all slots are taken never reach a vector."""
    vectorizer = TfIdfVectorizer(dimension=3)
    vectorizer.add_document("a b c")
    vectorizer.add_document("d")
    vectorizer.fit()

    assert vectorizer.slot_of("d") is None
    assert vectorizer.idf("d") == pytest.approx(math.log(2))
    assert np.all(vectorizer.transform("d d") == 0)


def test_fit_is_idempotent(vectorizer):
    """Test that fitting twice without new documents leaves IDF unchanged."""
    for text in ["flutter provider", "dart http", "provider riverpod"]:
        vectorizer.add_document(text)
    vectorizer.fit()
    first = {term: vectorizer.idf(term) for term in ["flutter", "provider", "dart", "http", "riverpod"]}

    vectorizer.fit()
    second = {term: vectorizer.idf(term) for term in first}

    assert first == second


def test_transform_is_deterministic(vectorizer):
    """Test that identical text against unchanged state gives identical vectors."""
    vectorizer.add_document("json serialization codegen")
    vectorizer.add_document("http networking client for dart")
    vectorizer.fit()

    text = "json codegen for dart"
    assert np.array_equal(vectorizer.transform(text), vectorizer.transform(text))


def test_transform_before_fit_is_all_zero(vectorizer):
    """Test that an unfit vectorizer produces valid zero vectors."""
    vectorizer.add_document("state management")

    vector = vectorizer.transform("state management")
    assert vector.shape == (384,)
    assert not vector.any()


def test_stale_idf_until_refit(vectorizer):
    """Test that new documents only affect vectors after the next fit."""
    vectorizer.add_document("a b")
    vectorizer.add_document("a c")
    vectorizer.fit()
    before = vectorizer.transform("b d")

    vectorizer.add_document("d e")
    stale = vectorizer.transform("b d")
    assert np.array_equal(before, stale)

    vectorizer.fit()
    refreshed = vectorizer.transform("b d")
    assert refreshed[vectorizer.slot_of("b")] == pytest.approx(math.log(3))
    assert refreshed[vectorizer.slot_of("d")] == pytest.approx(math.log(3))


def test_empty_document_still_counts_towards_n(vectorizer):
    vectorizer.add_document("")
    vectorizer.add_document("solo")
    vectorizer.fit()

    assert vectorizer.document_count == 2
    assert vectorizer.idf("solo") == pytest.approx(math.log(2))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
