"""Domain models package."""

from portfolio_tracker.domain.models.enums import TransactionType, SortOrder
from portfolio_tracker.domain.models.transaction import Transaction
from portfolio_tracker.domain.models.cache import PriceCacheEntry

__all__ = [
    "TransactionType",
    "SortOrder",
    "Transaction",
    "PriceCacheEntry",
]
