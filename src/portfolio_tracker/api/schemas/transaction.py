"""Pydantic schemas for transaction endpoints."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from portfolio_tracker.domain.models.enums import TransactionType


class TransactionCreateRequest(BaseModel):
    """Request schema for creating a transaction."""

    ticker: str = Field(..., min_length=1, max_length=10, description="Stock ticker symbol")
    txn_type: TransactionType = Field(..., alias="type", description="BUY or SELL")
    txn_date: date = Field(..., alias="date", description="Trade date (YYYY-MM-DD)")
    quantity: Decimal = Field(..., gt=0, decimal_places=4, description="Number of shares")
    price_per_share: Decimal = Field(..., gt=0, decimal_places=2, description="Price per share")

    model_config = {"populate_by_name": True}

    @field_validator("ticker")
    @classmethod
    def uppercase_ticker(cls, v: str) -> str:
        return v.strip().upper()


class TransactionUpdateRequest(BaseModel):
    """Request schema for updating a transaction (partial update)."""

    ticker: Optional[str] = Field(default=None, min_length=1, max_length=10)
    txn_type: Optional[TransactionType] = Field(default=None, alias="type")
    txn_date: Optional[date] = Field(default=None, alias="date")
    quantity: Optional[Decimal] = Field(default=None, gt=0, decimal_places=4)
    price_per_share: Optional[Decimal] = Field(default=None, gt=0, decimal_places=2)

    model_config = {"populate_by_name": True}

    @field_validator("ticker")
    @classmethod
    def uppercase_ticker(cls, v: Optional[str]) -> Optional[str]:
        return v.strip().upper() if v else None


class TransactionResponse(BaseModel):
    """Response schema for a single transaction."""

    model_config = {"from_attributes": True, "populate_by_name": True}

    txn_id: int = Field(..., alias="id")
    ticker: str
    txn_type: TransactionType = Field(..., alias="type")
    txn_date: date = Field(..., alias="date")
    quantity: Decimal
    price_per_share: Decimal
    created_at: Optional[datetime] = None


class TransactionListResponse(BaseModel):
    """Response schema for listing transactions."""

    transactions: list[TransactionResponse]
    count: int


class TransactionDeleteResponse(BaseModel):
    """Response schema for a deleted transaction."""

    message: str
    transaction: TransactionResponse
