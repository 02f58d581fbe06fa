"""Categorization router: label set, classify, batch classify, overrides, similar."""

import structlog
from fastapi import APIRouter, Depends, HTTPException

from apps.api.core.auth import get_current_user_id
from apps.api.core.errors import PersistenceError, ValidationError
from apps.api.core.store import SupabaseStore, get_store
from apps.api.domains.categorization.schemas import (
    BatchClassifyRequest,
    BatchClassifyResponse,
    ClassifyRequest,
    ClassifyResponse,
    OverrideRequest,
    SimilarRequest,
    SimilarResponse,
)
from apps.api.domains.categorization import service
from packages.categorization.constants import CATEGORY_LABELS

router = APIRouter(prefix="/categorization", tags=["categorization"])
logger = structlog.get_logger()


@router.get("/categories")
async def list_categories():
    """The closed label set, in display order."""
    return {"categories": CATEGORY_LABELS}


@router.post("/classify", response_model=ClassifyResponse)
async def classify_transaction(
    request: ClassifyRequest,
    user_id: str = Depends(get_current_user_id),
):
    result = service.classify_single(request.description, request.merchant)
    return ClassifyResponse(**result)


@router.post("/classify/batch", response_model=BatchClassifyResponse)
async def classify_batch(
    request: BatchClassifyRequest,
    user_id: str = Depends(get_current_user_id),
):
    """Classify multiple transactions in a single batch."""
    if not request.transactions:
        raise HTTPException(status_code=400, detail="No transactions provided")

    results = service.classify_batch(
        [(t.description, t.merchant) for t in request.transactions]
    )
    return BatchClassifyResponse(predictions=[ClassifyResponse(**r) for r in results])


@router.post("/overrides", status_code=201)
async def add_vendor_override(
    request: OverrideRequest,
    user_id: str = Depends(get_current_user_id),
):
    """Register a vendor override on the shared categorizer."""
    try:
        service.add_override(request.vendor, request.category)
    except ValueError as e:
        raise ValidationError(str(e))

    logger.info("override_registered", vendor=request.vendor, category=request.category, user_id=user_id)
    return {"vendor": request.vendor.strip().lower(), "category": request.category}


@router.post("/similar", response_model=SimilarResponse)
async def find_similar(
    request: SimilarRequest,
    user_id: str = Depends(get_current_user_id),
    store: SupabaseStore = Depends(get_store),
):
    """Stored transactions similar to the target, for batch recategorization."""
    try:
        records = store.list_transactions(user_id)
    except Exception as e:
        logger.error("transactions_fetch_failed", error=str(e), user_id=user_id)
        raise PersistenceError("Failed to load transactions")

    similar = service.similar_transactions(
        request.description, request.merchant, records, request.threshold
    )
    return SimilarResponse(transactions=similar, count=len(similar))
