"""Service layer - business logic orchestration."""

from portfolio_tracker.services.ledger_service import LedgerService, TransactionCreate, TransactionUpdate
from portfolio_tracker.services.market_data_service import MarketDataService
from portfolio_tracker.services.portfolio_service import PortfolioService
from portfolio_tracker.services.holdings_calculator import compute_holdings
from portfolio_tracker.services.performance_reconstructor import (
    apply_live_point,
    compute_performance_series,
)
from portfolio_tracker.services.allocation_calculator import compute_allocation

__all__ = [
    "LedgerService",
    "TransactionCreate",
    "TransactionUpdate",
    "MarketDataService",
    "PortfolioService",
    "compute_holdings",
    "compute_performance_series",
    "apply_live_point",
    "compute_allocation",
]
