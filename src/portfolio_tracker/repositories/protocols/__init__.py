"""Repository protocol definitions (interfaces)."""

from portfolio_tracker.repositories.protocols.transaction_repo import TransactionRepository
from portfolio_tracker.repositories.protocols.cache_repo import PriceCacheRepository

__all__ = [
    "TransactionRepository",
    "PriceCacheRepository",
]
