"""
Bank Statement Row Parser - turns one raw statement row into a transaction candidate.

Expected columns: Date, Type, Description, Check #, Amount.
Features: date normalization, type-aware descriptions, amounts in minor units
          (cents), best-effort merchant extraction.
"""

import re
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Dict, Any, Mapping

from packages.categorization.constants import Category

from .dates import parse_date, is_ambiguous_date
from .merchant_extractor import MerchantExtractor

logger = logging.getLogger(__name__)

UNKNOWN_DESCRIPTION = "Unknown"

# Canonical statement columns
DATE_COLUMN = "Date"
TYPE_COLUMN = "Type"
DESCRIPTION_COLUMN = "Description"
CHECK_COLUMN = "Check #"
AMOUNT_COLUMN = "Amount"
STATEMENT_COLUMNS = [
    DATE_COLUMN,
    TYPE_COLUMN,
    DESCRIPTION_COLUMN,
    CHECK_COLUMN,
    AMOUNT_COLUMN,
]

# Transaction types as exported by the bank
DEPOSIT_TYPE = "Deposits"
CHECK_TYPE = "Checks"
UNPREFIXED_TYPES = ("Debit Card", "Account Transfers")

_NUMERIC_PREFIX = re.compile(r"-?(?:\d+\.?\d*|\.\d+)")


class RowParseError(ValueError):
    """A statement row that cannot become a transaction."""

    def __init__(self, field: str, value: Any, message: str):
        self.field = field
        self.value = value
        super().__init__(message)


@dataclass
class TransactionCandidate:
    """Normalized, not yet persisted transaction."""

    date: date
    description: str
    amount: int  # minor currency units, signed
    merchant: str
    category: Category = Category.OTHER
    category_confirmed: bool = False
    confidence: int = 0
    transaction_type: str = ""
    check_number: str = ""
    date_ambiguous: bool = False

    def to_record(self) -> Dict[str, Any]:
        """Fields handed to the persistence store."""
        return {
            "date": self.date.isoformat(),
            "description": self.description,
            "amount": self.amount,
            "merchant": self.merchant,
            "category": Category(self.category).value,
            "category_confirmed": self.category_confirmed,
            "confidence": self.confidence,
        }

    def to_row(self) -> Dict[str, str]:
        """Render back into a raw statement row."""
        return {
            DATE_COLUMN: self.date.isoformat(),
            TYPE_COLUMN: self.transaction_type,
            DESCRIPTION_COLUMN: self.description,
            CHECK_COLUMN: self.check_number,
            AMOUNT_COLUMN: format_amount(self.amount),
        }


def _field(row: Mapping[str, Any], name: str) -> str:
    value = row.get(name)
    if value is None:
        return ""
    if isinstance(value, float) and value != value:  # NaN from pandas
        return ""
    return str(value).strip()


def parse_amount(amount_value: Any) -> int:
    """
    Parse a statement amount into signed minor units.

    "$1,234.56" -> 123456, "-45.00" -> -4500, "(12.50)" -> -1250
    """
    amount_str = "" if amount_value is None else str(amount_value).strip()

    # Handle parentheses for negative numbers
    negative = amount_str.startswith("(") and amount_str.endswith(")")

    cleaned = re.sub(r"[^\d.\-]", "", amount_str)
    match = _NUMERIC_PREFIX.match(cleaned)
    if not match:
        raise RowParseError(AMOUNT_COLUMN, amount_value, f"Invalid amount: {amount_value!r}")

    try:
        value = Decimal(match.group(0))
    except InvalidOperation:
        raise RowParseError(AMOUNT_COLUMN, amount_value, f"Invalid amount: {amount_value!r}")

    if negative and value > 0:
        value = -value

    return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_amount(minor_units: int) -> str:
    """Inverse of ``parse_amount`` for plain decimal strings."""
    sign = "-" if minor_units < 0 else ""
    whole, cents = divmod(abs(minor_units), 100)
    return f"{sign}{whole}.{cents:02d}"


def build_description(description: str, transaction_type: str = "", check_number: str = "") -> str:
    """
    Prefix the description with the bank's transaction type.

    Deposits, debit card purchases and account transfers are left alone.
    A description that already carries the prefix is returned unchanged.
    """
    description = description or UNKNOWN_DESCRIPTION
    txn_type = (transaction_type or "").strip()
    if not txn_type or txn_type.casefold() == DEPOSIT_TYPE.casefold():
        return description

    if txn_type.casefold() == CHECK_TYPE.casefold() and check_number:
        prefix = f"Check #{check_number}: "
    elif txn_type.casefold() not in {t.casefold() for t in UNPREFIXED_TYPES}:
        prefix = f"{txn_type}: "
    else:
        return description

    if description.startswith(prefix):
        return description
    return prefix + description


class StatementRowParser:
    """Normalizes raw statement rows into ``TransactionCandidate`` objects."""

    def __init__(self, merchant_extractor: Optional[MerchantExtractor] = None):
        self.merchant_extractor = merchant_extractor or MerchantExtractor()

    def parse_row(self, row: Mapping[str, Any]) -> TransactionCandidate:
        """
        Normalize one row.

        Raises:
            RowParseError: the Date or Amount field is missing or unreadable
        """
        date_str = _field(row, DATE_COLUMN)
        if not date_str:
            raise RowParseError(DATE_COLUMN, date_str, "Missing date")

        txn_date = parse_date(date_str)
        if txn_date is None:
            raise RowParseError(DATE_COLUMN, date_str, f"Invalid date format: {date_str!r}")

        txn_type = _field(row, TYPE_COLUMN)
        check_number = _field(row, CHECK_COLUMN)
        description = build_description(
            _field(row, DESCRIPTION_COLUMN), txn_type, check_number
        )

        amount = parse_amount(_field(row, AMOUNT_COLUMN))

        return TransactionCandidate(
            date=txn_date,
            description=description,
            amount=amount,
            merchant=self.merchant_extractor.extract(description),
            category=Category.OTHER,
            category_confirmed=False,
            transaction_type=txn_type,
            check_number=check_number,
            date_ambiguous=is_ambiguous_date(date_str),
        )


def parse_row(row: Mapping[str, Any]) -> TransactionCandidate:
    """Convenience function to normalize a single statement row."""
    return StatementRowParser().parse_row(row)
