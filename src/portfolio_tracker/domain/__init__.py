"""Domain layer - pure business models with no external dependencies."""

from portfolio_tracker.domain.models import (
    Transaction,
    TransactionType,
    SortOrder,
    PriceCacheEntry,
)

__all__ = [
    "Transaction",
    "TransactionType",
    "SortOrder",
    "PriceCacheEntry",
]
