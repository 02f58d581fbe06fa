"""
Statement Ingestion Engine

Bank statement CSV parsing and transaction normalization.
"""

__version__ = "0.1.0"

from .parser import StatementRowParser, TransactionCandidate, RowParseError, parse_row
from .merchant_extractor import MerchantExtractor
from .import_transactions import (
    IngestResult,
    NoValidTransactionsError,
    SkippedRow,
    parse_csv_content,
    parse_file,
)

__all__ = [
    "StatementRowParser",
    "TransactionCandidate",
    "RowParseError",
    "parse_row",
    "MerchantExtractor",
    "IngestResult",
    "NoValidTransactionsError",
    "SkippedRow",
    "parse_csv_content",
    "parse_file",
]
