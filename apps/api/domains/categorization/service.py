"""Categorization service: shared rule categorizer and batch classification.

The categorizer is a process-wide singleton, so vendor overrides
registered through the API apply to every later request.
"""

import threading
from typing import Optional

import structlog

from apps.api.core.config import settings
from packages.categorization.rules import RuleCategorizer
from packages.categorization.similarity import find_similar_transactions

logger = structlog.get_logger()

# Module-level singleton (thread-safe init)
_categorizer: Optional[RuleCategorizer] = None
_categorizer_lock = threading.Lock()


def get_categorizer() -> RuleCategorizer:
    """Get or create the shared categorizer, seeded from VENDOR_OVERRIDES_FILE."""
    global _categorizer
    if _categorizer is None:
        with _categorizer_lock:
            if _categorizer is None:  # Double-checked locking
                categorizer = RuleCategorizer()
                if settings.VENDOR_OVERRIDES_FILE:
                    applied = categorizer.registry.load_overrides(settings.VENDOR_OVERRIDES_FILE)
                    logger.info(
                        "vendor_overrides_loaded",
                        path=settings.VENDOR_OVERRIDES_FILE,
                        count=applied,
                    )
                _categorizer = categorizer
                logger.info("categorizer_initialized", vendors=len(categorizer.registry))
    return _categorizer


def classify_single(description: str, merchant: Optional[str] = None) -> dict:
    prediction = get_categorizer().classify(description, merchant)
    return {"category": prediction.category.value, "confidence": prediction.confidence}


def classify_batch(items: list[tuple[str, Optional[str]]]) -> list[dict]:
    """Classify (description, merchant) pairs in input order."""
    return [classify_single(description, merchant) for description, merchant in items]


def add_override(vendor: str, category: str) -> None:
    get_categorizer().add_vendor_override(vendor, category)


def similar_transactions(
    description: str,
    merchant: Optional[str],
    records: list[dict],
    threshold: Optional[float] = None,
) -> list[dict]:
    """Stored records similar to the target, for batch recategorization."""
    if threshold is None:
        threshold = settings.SIMILARITY_THRESHOLD
    return find_similar_transactions(description, merchant, records, threshold)
