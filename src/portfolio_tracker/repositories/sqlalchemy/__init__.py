"""SQLAlchemy repository implementations."""

from portfolio_tracker.repositories.sqlalchemy.database import (
    get_engine,
    get_db,
    init_db,
    Base,
)
from portfolio_tracker.repositories.sqlalchemy.transaction_repo import SqlAlchemyTransactionRepository
from portfolio_tracker.repositories.sqlalchemy.cache_repo import SqlAlchemyPriceCacheRepository

__all__ = [
    "get_engine",
    "get_db",
    "init_db",
    "Base",
    "SqlAlchemyTransactionRepository",
    "SqlAlchemyPriceCacheRepository",
]
