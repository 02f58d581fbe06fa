"""Pydantic schemas for the ingestion domain."""

from datetime import date

from pydantic import BaseModel, Field

from packages.categorization.constants import Category


class TransactionOut(BaseModel):
    """A parsed, categorized transaction awaiting confirmation."""

    date: date
    description: str
    amount: int  # minor units, signed
    merchant: str = ""
    category: Category = Category.OTHER
    category_confirmed: bool = False
    confidence: int = Field(default=0, ge=0, le=100)
    date_ambiguous: bool = False


class SkippedRowOut(BaseModel):
    row_number: int
    reason: str


class IngestResponse(BaseModel):
    """Response from CSV ingestion."""

    transactions: list[TransactionOut]
    count: int
    skipped: list[SkippedRowOut] = Field(default_factory=list)


class ConfirmRequest(BaseModel):
    """Previewed transactions the user chose to keep."""

    transactions: list[TransactionOut] = Field(..., min_length=1)


class ConfirmResponse(BaseModel):
    ids: list[str]
    count: int
