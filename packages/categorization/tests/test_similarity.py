from types import SimpleNamespace

import pytest

from packages.categorization.similarity import (
    combined_text,
    find_similar_transactions,
    string_similarity,
)


def test_near_duplicate_store_numbers():
    assert string_similarity("STARBUCKS #4521", "STARBUCKS #4522") > 0.6


def test_different_merchants():
    assert string_similarity("STARBUCKS", "WALMART") <= 0.6


def test_identical_and_empty():
    assert string_similarity("abc", "abc") == 1.0
    assert string_similarity("", "") == 1.0
    assert string_similarity("abc", "") == 0.0


def test_normalized_by_longer_string():
    # one insertion over a 5 character string
    assert string_similarity("kroge", "kroger") == pytest.approx(5 / 6)
    assert string_similarity("kroger", "kroge") == pytest.approx(5 / 6)


def test_combined_text():
    assert combined_text("Shell OIL", None) == "shell oil "
    assert combined_text(None, "SHELL") == " shell"


def test_find_similar_with_mappings():
    records = [
        {"id": "1", "description": "STARBUCKS STORE 4522", "merchant": "STARBUCKS"},
        {"id": "2", "description": "WALMART SUPERCENTER", "merchant": "WALMART"},
        {"id": "3", "description": "STARBUCKS STORE 0017", "merchant": "STARBUCKS"},
        {"id": "4", "description": "STARBUCKS"},
    ]
    similar = find_similar_transactions("STARBUCKS STORE 4521", "STARBUCKS", records)
    assert [r["id"] for r in similar] == ["1", "3"]


def test_find_similar_with_objects():
    records = [
        SimpleNamespace(description="SHELL OIL 5742", merchant="SHELL"),
        SimpleNamespace(description="SHELL OIL 5743", merchant=None),
        SimpleNamespace(description="NETFLIX.COM", merchant="NETFLIX"),
    ]
    similar = find_similar_transactions("SHELL OIL 5741", "SHELL", records)
    assert similar == [records[0], records[1]]


def test_threshold_is_strict():
    records = [{"description": "ab", "merchant": ""}]
    # "ab " vs "ax ": one substitution over three characters
    assert find_similar_transactions("ax", "", records, threshold=2 / 3) == []
    assert find_similar_transactions("ax", "", records, threshold=0.5) == records
