"""Pydantic schemas for portfolio endpoints."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class HoldingResponse(BaseModel):
    """Response schema for a single valued holding."""

    ticker: str
    quantity: Decimal
    avg_cost_basis: Decimal
    current_price: Decimal
    market_value: Decimal
    total_cost: Decimal
    gain_loss: Decimal
    gain_loss_percent: Decimal


class PortfolioSummaryResponse(BaseModel):
    """Response schema for the portfolio summary."""

    holdings: list[HoldingResponse]
    total_value: Decimal
    total_cost: Decimal
    total_gain_loss: Decimal
    total_gain_loss_percent: Decimal
    price_errors: dict[str, str]
    as_of: Optional[datetime] = None


class PerformancePointResponse(BaseModel):
    """Response schema for one day of portfolio history."""

    date: date
    value: Decimal
    invested: Decimal


class PerformanceResponse(BaseModel):
    """Response schema for the performance timeline."""

    performance: list[PerformancePointResponse]
    count: int


class AllocationItemResponse(BaseModel):
    """Response schema for a single allocation item."""

    ticker: str
    market_value: Decimal
    quantity: Decimal
    percentage: Decimal


class AllocationResponse(BaseModel):
    """Response schema for allocation breakdown."""

    allocation: list[AllocationItemResponse]
    total_value: Decimal
