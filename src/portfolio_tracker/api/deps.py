"""Dependency injection for FastAPI."""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from portfolio_tracker.repositories.sqlalchemy.database import get_db
from portfolio_tracker.repositories.sqlalchemy import (
    SqlAlchemyTransactionRepository,
    SqlAlchemyPriceCacheRepository,
)
from portfolio_tracker.providers import PriceProvider, create_price_provider
from portfolio_tracker.services import (
    LedgerService,
    MarketDataService,
    PortfolioService,
)
from portfolio_tracker.config.settings import get_settings


def get_transaction_repo(db: Session = Depends(get_db)) -> SqlAlchemyTransactionRepository:
    """Provide TransactionRepository instance."""
    return SqlAlchemyTransactionRepository(db)


def get_price_cache_repo(db: Session = Depends(get_db)) -> SqlAlchemyPriceCacheRepository:
    """Provide PriceCacheRepository instance."""
    return SqlAlchemyPriceCacheRepository(db)


@lru_cache(maxsize=1)
def get_price_provider() -> PriceProvider:
    """Provide the process-wide upstream provider (one HTTP client, one throttle)."""
    return create_price_provider(get_settings())


def get_market_data_service(
    provider: PriceProvider = Depends(get_price_provider),
    cache_repo: SqlAlchemyPriceCacheRepository = Depends(get_price_cache_repo),
) -> MarketDataService:
    """Provide MarketDataService instance."""
    settings = get_settings()
    return MarketDataService(
        provider=provider,
        cache_repo=cache_repo,
        cache_ttl_seconds=settings.price_cache_ttl_seconds,
        request_delay_seconds=settings.batch_request_delay_seconds,
    )


def get_ledger_service(
    transaction_repo: SqlAlchemyTransactionRepository = Depends(get_transaction_repo),
) -> LedgerService:
    """Provide LedgerService instance."""
    return LedgerService(transaction_repo=transaction_repo)


def get_portfolio_service(
    transaction_repo: SqlAlchemyTransactionRepository = Depends(get_transaction_repo),
    market_data: MarketDataService = Depends(get_market_data_service),
) -> PortfolioService:
    """Provide PortfolioService instance."""
    settings = get_settings()
    return PortfolioService(
        transaction_repo=transaction_repo,
        market_data=market_data,
        history_fetch_workers=settings.history_fetch_workers,
        lookback_days=settings.historical_lookback_days,
        max_history_years=settings.max_history_years,
    )
