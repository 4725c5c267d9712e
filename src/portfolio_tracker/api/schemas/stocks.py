"""Pydantic schemas for stock price endpoints."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field


class PriceResponse(BaseModel):
    """Response schema for a current price lookup."""

    ticker: str
    price: Decimal


class BatchPriceRequest(BaseModel):
    """Request schema for a batch price lookup."""

    tickers: list[str] = Field(..., min_length=1, description="Ticker symbols")


class BatchPriceResponse(BaseModel):
    """Response schema for a batch price lookup."""

    prices: dict[str, Decimal]
    errors: dict[str, str]


class HistoricalPriceResponse(BaseModel):
    """Response schema for a historical close lookup."""

    ticker: str
    date: date
    price: Decimal
