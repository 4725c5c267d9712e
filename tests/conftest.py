"""
Pytest configuration and fixtures for portfolio tracker tests.

This module provides:
- In-memory SQLite database fixtures
- Factory helpers for transactions
- Deterministic fake price providers with call counters
- A controllable clock for cache TTL tests
- Service and repository fixtures
"""

import os

# Configure the app before it is imported: offline provider, throwaway database
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["STOCK_API_PROVIDER"] = "stub"
os.environ["BATCH_REQUEST_DELAY_SECONDS"] = "0"

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Callable, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from portfolio_tracker.main import app
from portfolio_tracker.api.deps import get_price_provider
from portfolio_tracker.repositories.sqlalchemy.database import Base, get_db
# Import ORM models to register them with Base before creating tables
from portfolio_tracker.repositories.sqlalchemy import orm_models  # noqa: F401
from portfolio_tracker.repositories.sqlalchemy import (
    SqlAlchemyTransactionRepository,
    SqlAlchemyPriceCacheRepository,
)
from portfolio_tracker.providers import find_close_on_or_before
from portfolio_tracker.services import LedgerService, MarketDataService, PortfolioService
from portfolio_tracker.domain.models import Transaction, TransactionType
from portfolio_tracker.core.exceptions import InvalidTickerError
from portfolio_tracker.core.timezone import EASTERN_TZ
from portfolio_tracker.config.settings import reset_settings


# =============================================================================
# TIME HELPERS
# =============================================================================


def eastern_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in US/Eastern timezone."""
    return EASTERN_TZ.localize(datetime(year, month, day, hour, minute, second))


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


FIXED_TODAY = date(2024, 6, 14)


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'now' timestamp for deterministic tests."""
    return eastern_datetime(2024, 6, 14, 14, 30, 0)


@pytest.fixture
def fake_clock(fixed_now) -> FakeClock:
    return FakeClock(fixed_now)


# =============================================================================
# ASSERTION HELPERS
# =============================================================================


def assert_decimal_equal(actual, expected, places: int = 2) -> None:
    """Compare decimals (or decimal strings) after rounding to `places`."""
    quantum = Decimal(1).scaleb(-places)
    assert Decimal(str(actual)).quantize(quantum) == Decimal(str(expected)).quantize(quantum), (
        f"{actual} != {expected}"
    )


def make_transaction(
    ticker: str,
    txn_type: str,
    txn_date: date,
    quantity: str,
    price: str,
    txn_id: Optional[int] = None,
) -> Transaction:
    """Build an in-memory Transaction from plain values."""
    return Transaction(
        ticker=ticker,
        txn_type=TransactionType(txn_type),
        txn_date=txn_date,
        quantity=Decimal(quantity),
        price_per_share=Decimal(price),
        txn_id=txn_id,
    )


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    # Reset settings for clean state
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def transaction_repo(test_session) -> SqlAlchemyTransactionRepository:
    """Provide test TransactionRepository."""
    return SqlAlchemyTransactionRepository(test_session)


@pytest.fixture
def cache_repo(test_session) -> SqlAlchemyPriceCacheRepository:
    """Provide test PriceCacheRepository."""
    return SqlAlchemyPriceCacheRepository(test_session)


# =============================================================================
# PRICE PROVIDER FIXTURES
# =============================================================================


class FakePriceProvider:
    """
    Deterministic price provider for testing.

    Current prices and daily series are fixed per ticker. Any ticker can be
    made to fail by putting an exception in `failures` (current price) or
    `series_failures` (history). Every call is recorded.
    """

    FIXED_PRICES = {
        "AAPL": Decimal("185.50"),
        "GOOGL": Decimal("142.75"),
        "MSFT": Decimal("378.25"),
        "TSLA": Decimal("248.75"),
        "SPY": Decimal("485.25"),
    }

    def __init__(
        self,
        prices: Optional[dict[str, Decimal]] = None,
        series: Optional[dict[str, dict[date, Decimal]]] = None,
        lookback_days: int = 10,
    ):
        self.prices = dict(self.FIXED_PRICES if prices is None else prices)
        self.series = series or {}
        self.failures: dict[str, Exception] = {}
        self.series_failures: dict[str, Exception] = {}
        self.lookback_days = lookback_days
        self.current_calls: list[str] = []
        self.series_calls: list[tuple[str, date, date]] = []

    @property
    def call_count(self) -> int:
        return len(self.current_calls)

    def fetch_current_price(self, ticker: str) -> Decimal:
        self.current_calls.append(ticker)
        if ticker in self.failures:
            raise self.failures[ticker]
        if ticker not in self.prices:
            raise InvalidTickerError(ticker)
        return self.prices[ticker]

    def fetch_price_series(self, ticker: str, start: date, end: date) -> dict[date, Decimal]:
        self.series_calls.append((ticker, start, end))
        if ticker in self.series_failures:
            raise self.series_failures[ticker]
        closes = self.series.get(ticker, {})
        return {d: p for d, p in closes.items() if start <= d <= end}

    def fetch_historical_price(self, ticker: str, on_date: date) -> Decimal:
        closes = self.fetch_price_series(ticker, on_date - timedelta(days=self.lookback_days), on_date)
        return find_close_on_or_before(ticker, closes, on_date, self.lookback_days)

    def close(self) -> None:
        pass


@pytest.fixture
def fake_provider() -> FakePriceProvider:
    """Provide a fake provider with fixed prices and no history."""
    return FakePriceProvider()


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def market_data_service(fake_provider, cache_repo, fake_clock) -> MarketDataService:
    """Provide MarketDataService with fake provider, fake clock and no delay."""
    return MarketDataService(
        provider=fake_provider,
        cache_repo=cache_repo,
        cache_ttl_seconds=15 * 60,
        request_delay_seconds=0,
        clock=fake_clock,
    )


@pytest.fixture
def ledger_service(transaction_repo) -> LedgerService:
    """Provide test LedgerService."""
    return LedgerService(transaction_repo=transaction_repo)


@pytest.fixture
def portfolio_service(transaction_repo, market_data_service) -> PortfolioService:
    """Provide PortfolioService whose 'today' is FIXED_TODAY."""
    return PortfolioService(
        transaction_repo=transaction_repo,
        market_data=market_data_service,
        history_fetch_workers=2,
        today=lambda: FIXED_TODAY,
    )


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def transaction_factory(transaction_repo) -> Callable[..., Transaction]:
    """Factory for persisting test transactions."""

    def _create_transaction(
        ticker: str,
        txn_type: str,
        txn_date: date,
        quantity: str,
        price: str,
    ) -> Transaction:
        return transaction_repo.create(make_transaction(ticker, txn_type, txn_date, quantity, price))

    return _create_transaction


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(test_engine, fake_provider) -> TestClient:
    """Provide FastAPI test client with test database and fake provider."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_price_provider] = lambda: fake_provider
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
