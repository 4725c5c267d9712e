"""Repository layer - data access abstractions and implementations."""

from portfolio_tracker.repositories.protocols import (
    TransactionRepository,
    PriceCacheRepository,
)

__all__ = [
    "TransactionRepository",
    "PriceCacheRepository",
]
