"""Pydantic schemas for the categorization domain."""

from pydantic import BaseModel, Field
from typing import Any, Optional


class ClassifyRequest(BaseModel):
    """Request to classify a single transaction."""

    description: str
    merchant: Optional[str] = None


class ClassifyResponse(BaseModel):
    """Classification result for a single transaction."""

    category: str
    confidence: int = Field(ge=0, le=100)


class BatchClassifyRequest(BaseModel):
    """Request to classify multiple transactions in batch."""

    transactions: list[ClassifyRequest]


class BatchClassifyResponse(BaseModel):
    predictions: list[ClassifyResponse]


class OverrideRequest(BaseModel):
    """Map a vendor substring onto a category for this process."""

    vendor: str = Field(..., min_length=1)
    category: str


class SimilarRequest(BaseModel):
    description: str
    merchant: Optional[str] = None
    threshold: Optional[float] = Field(default=None, ge=0.0, le=1.0)


class SimilarResponse(BaseModel):
    transactions: list[dict[str, Any]]
    count: int
