import io
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import IO, Any, Dict, Iterable, List, Optional, Tuple

import pandas as pd

from .parser import (
    DATE_COLUMN,
    STATEMENT_COLUMNS,
    RowParseError,
    StatementRowParser,
    TransactionCandidate,
)

logger = logging.getLogger(__name__)

NO_VALID_TRANSACTIONS = "No valid transactions found in file"

# utf-8-sig also reads BOM-less UTF-8; latin-1 accepts any byte, so it goes last
CSV_ENCODINGS = ["utf-8-sig", "cp1252"]
FALLBACK_ENCODING = "latin-1"


class NoValidTransactionsError(ValueError):
    """Raised when a statement yields zero usable rows."""

    def __init__(self, message: str = NO_VALID_TRANSACTIONS):
        super().__init__(message)


@dataclass
class SkippedRow:
    """
    A data row excluded from the output, with the reason.

    ``row_number`` is the 1-based position among the non-blank data rows
    (header excluded), not the physical line of the file.
    """

    row_number: int
    reason: str
    raw: Dict[str, str] = field(default_factory=dict)


@dataclass
class IngestResult:
    transactions: List[TransactionCandidate]
    skipped: List[SkippedRow] = field(default_factory=list)

    @property
    def ambiguous_dates(self) -> int:
        return sum(1 for t in self.transactions if t.date_ambiguous)


def _normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Map header labels onto the canonical statement columns.
    Matching ignores case and surrounding whitespace; unknown columns are kept.
    """
    canonical = {name.lower(): name for name in STATEMENT_COLUMNS}

    rename_map = {}
    found = set()
    for col in df.columns:
        key = str(col).strip().lower()
        target = canonical.get(key)
        if target and target not in found:
            rename_map[col] = target
            found.add(target)

    return df.rename(columns=rename_map)


def _is_admissible(row: Dict[str, str]) -> bool:
    """Skip blank rows and header lines repeated inside the file."""
    date_value = row.get(DATE_COLUMN, "").strip()
    if not date_value or date_value.lower() == DATE_COLUMN.lower():
        return False
    return any(str(v).strip() for v in row.values())


def validate_transaction(transaction: Optional[TransactionCandidate]) -> bool:
    """A candidate is usable when it has a date, an amount and a description."""
    if transaction is None:
        return False
    return bool(
        transaction.date
        and transaction.amount is not None
        and transaction.description
    )


def get_date_range(transactions: Iterable[TransactionCandidate]) -> Tuple[date, date]:
    """Earliest and latest transaction dates (today for both if there are none)."""
    dates = sorted(t.date for t in transactions if isinstance(t.date, date))
    if not dates:
        today = date.today()
        return today, today
    return dates[0], dates[-1]


def parse_dataframe(df: pd.DataFrame, row_parser: Optional[StatementRowParser] = None) -> IngestResult:
    """
    Normalize every admissible row of a statement DataFrame.

    Raises:
        NoValidTransactionsError: if no row survives normalization
    """
    row_parser = row_parser or StatementRowParser()
    df = _normalize_columns(df).fillna("")

    transactions: List[TransactionCandidate] = []
    skipped: List[SkippedRow] = []

    for row_number, (_, series) in enumerate(df.iterrows(), start=1):
        row = {str(k): str(v) for k, v in series.to_dict().items()}

        if not _is_admissible(row):
            continue

        try:
            txn = row_parser.parse_row(row)
        except RowParseError as e:
            logger.debug(f"Skipping row {row_number} ({e.field}): {e}")
            skipped.append(SkippedRow(row_number=row_number, reason=str(e), raw=row))
            continue

        if not validate_transaction(txn):
            skipped.append(
                SkippedRow(row_number=row_number, reason="Incomplete transaction", raw=row)
            )
            continue

        transactions.append(txn)

    if not transactions:
        raise NoValidTransactionsError()

    result = IngestResult(transactions=transactions, skipped=skipped)
    if result.ambiguous_dates:
        logger.warning(
            f"{result.ambiguous_dates} transaction(s) have ambiguous MM/DD dates; assumed US order"
        )
    logger.info(
        f"Successfully parsed {len(transactions)} transactions ({len(skipped)} skipped)"
    )
    return result


def parse_csv_content(file_content: IO) -> IngestResult:
    """
    Parses a CSV statement (text stream) into transaction candidates.
    Standard Columns: Date, Type, Description, Check #, Amount
    """
    df = pd.read_csv(
        file_content,
        dtype=str,
        index_col=False,
        keep_default_na=False,
        skip_blank_lines=True,
    )
    return parse_dataframe(df)


def decode_content(file_content: bytes) -> str:
    """Decode uploaded bytes, trying common bank export encodings."""
    for encoding in CSV_ENCODINGS:
        try:
            return file_content.decode(encoding)
        except UnicodeDecodeError:
            continue

    logger.warning(f"Statement is neither UTF-8 nor cp1252; decoding as {FALLBACK_ENCODING}")
    return file_content.decode(FALLBACK_ENCODING)


def parse_file(file_content: bytes, filename: str = "statement.csv") -> IngestResult:
    """
    Parses an uploaded statement file.

    Only CSV exports are supported; ``filename`` is used for logging.
    """
    logger.info(f"Reading statement {filename} ({len(file_content)} bytes)")
    text_stream = io.StringIO(decode_content(file_content))
    return parse_csv_content(text_stream)
