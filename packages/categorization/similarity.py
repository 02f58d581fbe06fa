"""Edit-distance similarity for grouping near-duplicate transactions.

Used to suggest batch recategorization: once a user fixes one transaction,
stored transactions whose text is within a small edit distance are offered
for the same change.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Optional

from rapidfuzz.distance import Levenshtein

DEFAULT_SIMILARITY_THRESHOLD = 0.6


def string_similarity(first: str, second: str) -> float:
    """1 - levenshtein(longer, shorter) / len(longer); 1.0 for two empty strings."""
    longer, shorter = (first, second) if len(first) > len(second) else (second, first)
    if not longer:
        return 1.0
    return (len(longer) - Levenshtein.distance(longer, shorter)) / len(longer)


def _get(record: Any, name: str) -> Optional[str]:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def combined_text(description: Optional[str], merchant: Optional[str]) -> str:
    return f"{description or ''} {merchant or ''}".lower()


def find_similar_transactions(
    description: Optional[str],
    merchant: Optional[str],
    transactions: Iterable[Any],
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> list:
    """
    Return the records whose description + merchant text is more than
    ``threshold`` similar to the target's.

    Records may be mappings or objects exposing ``description``/``merchant``.
    """
    target = combined_text(description, merchant)
    return [
        record
        for record in transactions
        if string_similarity(
            target, combined_text(_get(record, "description"), _get(record, "merchant"))
        )
        > threshold
    ]
