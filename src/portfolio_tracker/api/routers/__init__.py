"""API routers package."""

from portfolio_tracker.api.routers.transactions import router as transactions_router
from portfolio_tracker.api.routers.portfolio import router as portfolio_router
from portfolio_tracker.api.routers.stocks import router as stocks_router

__all__ = [
    "transactions_router",
    "portfolio_router",
    "stocks_router",
]
