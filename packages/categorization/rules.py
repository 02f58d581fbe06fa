import json
import logging
import threading
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .constants import (
    DEFAULT_CATEGORY_KEYWORDS,
    DEFAULT_VENDOR_TABLE,
    Category,
    to_category,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoryPrediction:
    category: Category
    confidence: int


def _vendor_matches(vendor: str, merchant_lower: str) -> bool:
    # Covers truncated ("STARBUCK") and padded ("STARBUCKS #4521") merchants
    return vendor in merchant_lower or merchant_lower in vendor


class VendorRegistry:
    """
    Vendor name fragment -> category, seeded from the built-in table.

    Overrides insert or replace in place; a new vendor is scanned after the
    existing ones. Writers and scans are serialized by a lock.
    """

    def __init__(self, entries: Optional[Mapping[str, Category]] = None):
        source = DEFAULT_VENDOR_TABLE if entries is None else entries
        self._table: Dict[str, Category] = {
            str(vendor).lower(): to_category(category)
            for vendor, category in source.items()
        }
        self._lock = threading.Lock()

    def add_override(self, vendor: str, category) -> None:
        key = str(vendor).strip().lower()
        if not key:
            raise ValueError("Vendor must not be empty")
        label = to_category(category)
        with self._lock:
            self._table[key] = label
        logger.info(f"Vendor override: {key!r} -> {label.value}")

    def load_overrides(self, path: str) -> int:
        """
        Seed overrides from a JSON object file: {"vendor": "Category", ...}.
        Entries with unknown categories are skipped. Returns the count applied.
        """
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Vendor overrides file must hold a JSON object: {path}")

        applied = 0
        for vendor, category in data.items():
            try:
                self.add_override(vendor, category)
            except ValueError as e:
                logger.warning(f"Ignoring vendor override {vendor!r}: {e}")
                continue
            applied += 1
        return applied

    def items(self) -> List[Tuple[str, Category]]:
        """Snapshot of the table in scan order."""
        with self._lock:
            return list(self._table.items())

    def get(self, vendor: str) -> Optional[Category]:
        with self._lock:
            return self._table.get(str(vendor).lower())

    def __contains__(self, vendor) -> bool:
        return self.get(vendor) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._table)

    def match_merchant(self, merchant: str) -> Optional[Category]:
        merchant_lower = merchant.lower()
        for vendor, category in self.items():
            if _vendor_matches(vendor, merchant_lower):
                return category
        return None

    def match_text(self, text: str) -> Optional[Category]:
        text_lower = text.lower()
        for vendor, category in self.items():
            if vendor in text_lower:
                return category
        return None


class KeywordMatcher:
    def __init__(self, keywords: Optional[Mapping[Category, List[str]]] = None):
        # Category -> generic phrases; dict order is the priority order
        source = DEFAULT_CATEGORY_KEYWORDS if keywords is None else keywords
        self.rules: Dict[Category, List[str]] = {
            to_category(category): [k.lower() for k in phrases]
            for category, phrases in source.items()
        }

    def predict(self, text: str) -> Optional[Category]:
        """
        Check if text contains any known keywords.
        Returns Category if match found, else None.
        """
        if not text:
            return None

        text_lower = text.lower()
        for category, phrases in self.rules.items():
            if any(phrase in text_lower for phrase in phrases):
                return category

        return None

    def count(self, text: str, category: Category) -> int:
        """Number of the category's phrases present in text."""
        text_lower = (text or "").lower()
        return sum(1 for phrase in self.rules.get(category, []) if phrase in text_lower)


class RuleCategorizer:
    """Deterministic vendor/keyword categorizer with an advisory confidence."""

    def __init__(
        self,
        registry: Optional[VendorRegistry] = None,
        keyword_matcher: Optional[KeywordMatcher] = None,
    ):
        self.registry = registry if registry is not None else VendorRegistry()
        self.keyword_matcher = keyword_matcher or KeywordMatcher()

    @staticmethod
    def _search_text(description: Optional[str], merchant: Optional[str]) -> str:
        return f"{description or ''} {merchant or ''}".lower()

    def add_vendor_override(self, vendor: str, category) -> None:
        self.registry.add_override(vendor, category)

    def categorize(self, description: Optional[str], merchant: Optional[str] = None) -> Category:
        """
        Resolve a single category; never fails.

        Order: vendor table on merchant, vendor table on the combined text,
        keyword table, then Other.
        """
        if merchant:
            category = self.registry.match_merchant(merchant)
            if category is not None:
                return category

        search_text = self._search_text(description, merchant)

        category = self.registry.match_text(search_text)
        if category is not None:
            return category

        category = self.keyword_matcher.predict(search_text)
        if category is not None:
            return category

        return Category.OTHER

    def confidence(
        self,
        description: Optional[str],
        merchant: Optional[str],
        category,
    ) -> int:
        """
        0-100 score from the signals supporting ``category``.

        Each vendor entry of that category matching the merchant counts 2,
        each of its keywords found in the combined text counts 1; three
        points or more is 100.
        """
        try:
            category = to_category(category)
        except ValueError:
            return 0

        match_count = 0
        if merchant:
            merchant_lower = merchant.lower()
            for vendor, vendor_category in self.registry.items():
                if vendor_category == category and _vendor_matches(vendor, merchant_lower):
                    match_count += 2

        match_count += self.keyword_matcher.count(
            self._search_text(description, merchant), category
        )

        return max(0, min(100, int(match_count / 3 * 100 + 0.5)))

    def classify(self, description: Optional[str], merchant: Optional[str] = None) -> CategoryPrediction:
        category = self.categorize(description, merchant)
        return CategoryPrediction(
            category=category,
            confidence=self.confidence(description, merchant, category),
        )

    def label(self, candidates: Iterable) -> list:
        """Set ``category`` and ``confidence`` on each candidate in place."""
        labelled = []
        for candidate in candidates:
            prediction = self.classify(candidate.description, candidate.merchant)
            candidate.category = prediction.category
            candidate.confidence = prediction.confidence
            labelled.append(candidate)
        return labelled
