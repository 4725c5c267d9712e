"""SQLAlchemy ORM model definitions."""

from datetime import datetime

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Integer,
    String,
    Numeric,
    Enum as SqlEnum,
)

from portfolio_tracker.repositories.sqlalchemy.database import Base
from portfolio_tracker.domain.models.enums import TransactionType


class TransactionORM(Base):
    """SQLAlchemy model for Transaction (ledger entry)."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    ticker = Column(String(10), nullable=False, index=True)
    transaction_type = Column(SqlEnum(TransactionType), nullable=False, index=True)
    transaction_date = Column(Date, nullable=False, index=True)
    quantity = Column(Numeric(precision=10, scale=4), nullable=False)
    price_per_share = Column(Numeric(precision=10, scale=2), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)


class PriceCacheORM(Base):
    """SQLAlchemy model for PriceCacheEntry (one row per ticker, upsert-only)."""

    __tablename__ = "price_cache"

    ticker = Column(String(10), primary_key=True)
    current_price = Column(Numeric(precision=18, scale=4), nullable=False)
    # Naive UTC
    last_updated = Column(DateTime, nullable=False, index=True)
