"""Ingestion router: CSV statement preview and confirmed import.

Upload parses and categorizes without touching the store; the client
reviews the preview and posts the rows it keeps to /ingest/confirm.
"""

import pandas as pd
import structlog
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from apps.api.core.auth import get_current_user_id
from apps.api.core.config import settings
from apps.api.core.errors import IngestionError, PersistenceError
from apps.api.core.store import SupabaseStore, get_store
from apps.api.domains.ingestion import service
from apps.api.domains.ingestion.schemas import (
    ConfirmRequest,
    ConfirmResponse,
    IngestResponse,
)
from packages.ingestion_engine.import_transactions import NoValidTransactionsError

router = APIRouter(prefix="/ingest", tags=["ingestion"])
logger = structlog.get_logger()

ALLOWED_EXTENSIONS = (".csv", ".txt")


@router.post("/csv", response_model=IngestResponse)
async def ingest_csv(
    file: UploadFile = File(...),
    user_id: str = Depends(get_current_user_id),
):
    """Accept a CSV statement and return the categorized preview."""
    filename = file.filename or ""
    if not filename.lower().endswith(ALLOWED_EXTENSIONS):
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type. Accepted: {', '.join(ALLOWED_EXTENSIONS)}",
        )

    contents = await file.read()
    if len(contents) > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"File too large (max {settings.MAX_UPLOAD_BYTES // (1024 * 1024)}MB)",
        )

    try:
        return service.preview_statement(contents, filename)
    except NoValidTransactionsError as e:
        logger.warning("ingest_empty", filename=filename, user_id=user_id)
        raise IngestionError(str(e))
    except (pd.errors.ParserError, pd.errors.EmptyDataError, ValueError) as e:
        logger.error("file_parse_failed", error=str(e), filename=filename)
        raise HTTPException(status_code=400, detail="Failed to parse file")


@router.post("/confirm", response_model=ConfirmResponse, status_code=201)
async def confirm_import(
    request: ConfirmRequest,
    user_id: str = Depends(get_current_user_id),
    store: SupabaseStore = Depends(get_store),
):
    """Persist previewed transactions for the current user."""
    records = [
        t.model_dump(mode="json", exclude={"date_ambiguous"}) for t in request.transactions
    ]
    try:
        ids = service.save_transactions(store, user_id, records)
    except Exception as e:
        logger.error("transactions_save_failed", error=str(e), count=len(records), user_id=user_id)
        raise PersistenceError()

    return ConfirmResponse(ids=ids, count=len(ids))
