"""Pydantic schemas for API request/response."""

from portfolio_tracker.api.schemas.transaction import (
    TransactionCreateRequest,
    TransactionUpdateRequest,
    TransactionResponse,
    TransactionListResponse,
    TransactionDeleteResponse,
)
from portfolio_tracker.api.schemas.portfolio import (
    HoldingResponse,
    PortfolioSummaryResponse,
    PerformancePointResponse,
    PerformanceResponse,
    AllocationItemResponse,
    AllocationResponse,
)
from portfolio_tracker.api.schemas.stocks import (
    PriceResponse,
    BatchPriceRequest,
    BatchPriceResponse,
    HistoricalPriceResponse,
)

__all__ = [
    "TransactionCreateRequest",
    "TransactionUpdateRequest",
    "TransactionResponse",
    "TransactionListResponse",
    "TransactionDeleteResponse",
    "HoldingResponse",
    "PortfolioSummaryResponse",
    "PerformancePointResponse",
    "PerformanceResponse",
    "AllocationItemResponse",
    "AllocationResponse",
    "PriceResponse",
    "BatchPriceRequest",
    "BatchPriceResponse",
    "HistoricalPriceResponse",
]
