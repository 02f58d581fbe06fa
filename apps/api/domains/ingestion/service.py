"""Ingestion service: statement preview and confirmed save."""

import structlog

from apps.api.core.store import SupabaseStore
from apps.api.domains.categorization.service import get_categorizer
from packages.ingestion_engine.import_transactions import parse_file

logger = structlog.get_logger()


def preview_statement(contents: bytes, filename: str) -> dict:
    """Parse and categorize an uploaded statement without persisting it.

    Raises NoValidTransactionsError when no row survives; pandas parser
    errors propagate.
    """
    result = parse_file(contents, filename)
    candidates = get_categorizer().label(result.transactions)

    transactions = []
    for candidate in candidates:
        record = candidate.to_record()
        record["date_ambiguous"] = candidate.date_ambiguous
        transactions.append(record)

    skipped = [{"row_number": s.row_number, "reason": s.reason} for s in result.skipped]
    logger.info(
        "ingest_complete",
        count=len(transactions),
        skipped=len(skipped),
        ambiguous_dates=result.ambiguous_dates,
        filename=filename,
    )
    return {"transactions": transactions, "count": len(transactions), "skipped": skipped}


def save_transactions(store: SupabaseStore, user_id: str, records: list[dict]) -> list[str]:
    ids = store.save_transactions(user_id, records)
    logger.info("transactions_saved", count=len(ids), user_id=user_id)
    return ids
