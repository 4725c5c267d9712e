"""View models for service outputs."""

from portfolio_tracker.domain.views.portfolio import (
    Holding,
    HoldingSummary,
    PortfolioSummary,
    PerformancePoint,
    AllocationItem,
    BatchPriceResult,
)

__all__ = [
    "Holding",
    "HoldingSummary",
    "PortfolioSummary",
    "PerformancePoint",
    "AllocationItem",
    "BatchPriceResult",
]
