"""Category constants for transaction classification.

This module defines the closed set of spending categories, the built-in vendor
table and the keyword table used by the rule categorizer. Every label a
transaction can carry is a member of ``Category``.
"""

from enum import Enum


class Category(str, Enum):
    """Standard transaction categories for classification."""

    GROCERIES = "Groceries"
    GAS_FUEL = "Gas/Fuel"
    RESTAURANTS = "Restaurants"
    UTILITIES = "Utilities"
    INSURANCE = "Insurance"
    SUBSCRIPTIONS = "Subscriptions"
    ENTERTAINMENT = "Entertainment"
    TRANSPORTATION = "Transportation"
    HEALTHCARE = "Healthcare"
    SHOPPING = "Shopping"
    TRANSFER = "Transfer"
    SALARY = "Salary"
    INVESTMENT = "Investment"
    OTHER = "Other"


CATEGORY_LABELS: list[str] = [c.value for c in Category]


def to_category(label) -> Category:
    """Coerce a label to ``Category``; raises ``ValueError`` for unknown labels."""
    if isinstance(label, Category):
        return label
    try:
        return Category(str(label).strip())
    except ValueError:
        raise ValueError(
            f"Unknown category {label!r}. Must be one of {CATEGORY_LABELS}."
        ) from None


# Vendor name fragment -> category. Order matters: first match wins.
DEFAULT_VENDOR_TABLE: dict[str, Category] = {
    # Groceries
    "whole foods": Category.GROCERIES,
    "trader joes": Category.GROCERIES,
    "safeway": Category.GROCERIES,
    "kroger": Category.GROCERIES,
    "hyvee": Category.GROCERIES,
    "walmart": Category.GROCERIES,
    "target": Category.GROCERIES,
    "costco": Category.GROCERIES,
    "publix": Category.GROCERIES,
    "instacart": Category.GROCERIES,
    # Gas/Fuel
    "shell": Category.GAS_FUEL,
    "chevron": Category.GAS_FUEL,
    "exxon": Category.GAS_FUEL,
    "mobil": Category.GAS_FUEL,
    "speedway": Category.GAS_FUEL,
    "texaco": Category.GAS_FUEL,
    "bp": Category.GAS_FUEL,
    "sunoco": Category.GAS_FUEL,
    "76": Category.GAS_FUEL,
    "sinclair": Category.GAS_FUEL,
    "citgo": Category.GAS_FUEL,
    # Restaurants
    "mcdonalds": Category.RESTAURANTS,
    "subway": Category.RESTAURANTS,
    "burger king": Category.RESTAURANTS,
    "taco bell": Category.RESTAURANTS,
    "chick-fil-a": Category.RESTAURANTS,
    "chipotle": Category.RESTAURANTS,
    "panera": Category.RESTAURANTS,
    "olive garden": Category.RESTAURANTS,
    "applebees": Category.RESTAURANTS,
    "buffalo wild wings": Category.RESTAURANTS,
    "pizza hut": Category.RESTAURANTS,
    "dominos": Category.RESTAURANTS,
    "papa john's": Category.RESTAURANTS,
    "starbucks": Category.RESTAURANTS,
    "dunkin": Category.RESTAURANTS,
    # Utilities
    "electric": Category.UTILITIES,
    "water": Category.UTILITIES,
    "gas": Category.UTILITIES,
    "internet": Category.UTILITIES,
    "cable": Category.UTILITIES,
    "phone": Category.UTILITIES,
    # Insurance
    "geico": Category.INSURANCE,
    "state farm": Category.INSURANCE,
    "allstate": Category.INSURANCE,
    "progressive": Category.INSURANCE,
    "liberty mutual": Category.INSURANCE,
    "insurance": Category.INSURANCE,
    # Subscriptions
    "netflix": Category.SUBSCRIPTIONS,
    "spotify": Category.SUBSCRIPTIONS,
    "hulu": Category.SUBSCRIPTIONS,
    "disney": Category.SUBSCRIPTIONS,
    "adobe": Category.SUBSCRIPTIONS,
    "microsoft": Category.SUBSCRIPTIONS,
    "apple": Category.SUBSCRIPTIONS,
    "amazon prime": Category.SUBSCRIPTIONS,
    "gym": Category.SUBSCRIPTIONS,
    "membership": Category.SUBSCRIPTIONS,
    # Entertainment
    "movie": Category.ENTERTAINMENT,
    "cinema": Category.ENTERTAINMENT,
    "theatre": Category.ENTERTAINMENT,
    "concert": Category.ENTERTAINMENT,
    "game": Category.ENTERTAINMENT,
    "steam": Category.ENTERTAINMENT,
    "playstation": Category.ENTERTAINMENT,
    "xbox": Category.ENTERTAINMENT,
    # Transportation
    "uber": Category.TRANSPORTATION,
    "lyft": Category.TRANSPORTATION,
    "taxi": Category.TRANSPORTATION,
    "parking": Category.TRANSPORTATION,
    "metro": Category.TRANSPORTATION,
    "transit": Category.TRANSPORTATION,
    "airline": Category.TRANSPORTATION,
    "delta": Category.TRANSPORTATION,
    "united": Category.TRANSPORTATION,
    "american": Category.TRANSPORTATION,
    # Healthcare
    "hospital": Category.HEALTHCARE,
    "clinic": Category.HEALTHCARE,
    "pharmacy": Category.HEALTHCARE,
    "cvs": Category.HEALTHCARE,
    "walgreens": Category.HEALTHCARE,
    "doctor": Category.HEALTHCARE,
    "dentist": Category.HEALTHCARE,
    "medical": Category.HEALTHCARE,
    # Shopping
    "amazon": Category.SHOPPING,
    "ebay": Category.SHOPPING,
    "mall": Category.SHOPPING,
    "store": Category.SHOPPING,
    "shop": Category.SHOPPING,
}


# Generic phrases per category, checked in declaration order
DEFAULT_CATEGORY_KEYWORDS: dict[Category, list[str]] = {
    Category.GROCERIES: [
        "grocery",
        "supermarket",
        "produce",
        "market",
        "food",
        "fruit",
        "vegetable",
    ],
    Category.GAS_FUEL: ["gas station", "fuel", "petrol", "pump", "diesel"],
    Category.RESTAURANTS: [
        "restaurant",
        "cafe",
        "diner",
        "food service",
        "fast food",
        "delivery",
    ],
    Category.UTILITIES: [
        "utility",
        "power",
        "electricity",
        "water",
        "gas service",
        "internet service",
        "cable service",
    ],
    Category.INSURANCE: ["insurance", "premium"],
    Category.SHOPPING: [
        "retail",
        "merchandise",
        "clothing",
        "apparel",
        "shoes",
        "electronics",
    ],
    Category.ENTERTAINMENT: [
        "movie",
        "entertainment",
        "game",
        "sports",
        "ticket",
        "recreation",
    ],
    Category.TRANSPORTATION: [
        "transportation",
        "vehicle",
        "car",
        "transit",
        "parking",
        "taxi",
        "airline",
        "travel",
    ],
    Category.HEALTHCARE: [
        "health",
        "medical",
        "healthcare",
        "prescription",
        "hospital",
        "clinic",
        "wellness",
    ],
    Category.SUBSCRIPTIONS: [
        "subscription",
        "monthly",
        "recurring",
        "membership",
        "premium",
    ],
    Category.TRANSFER: ["transfer", "deposit", "withdrawal"],
    Category.SALARY: ["payroll", "salary", "income", "wage", "payment"],
    Category.INVESTMENT: ["investment", "brokerage", "stock", "mutual fund"],
    Category.OTHER: [],
}
