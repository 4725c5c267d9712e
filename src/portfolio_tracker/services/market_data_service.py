"""Market data service: persisted price cache in front of the upstream provider."""

import logging
import time
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Callable, Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError

from portfolio_tracker.core.exceptions import AppError, PriceError, ValidationError
from portfolio_tracker.core.timezone import now_eastern
from portfolio_tracker.core.validation import normalize_ticker
from portfolio_tracker.domain.models import PriceCacheEntry
from portfolio_tracker.domain.views import BatchPriceResult
from portfolio_tracker.providers.market_data_provider import PriceProvider
from portfolio_tracker.repositories.protocols import PriceCacheRepository

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL_SECONDS = 15 * 60
DEFAULT_REQUEST_DELAY_SECONDS = 0.5


class MarketDataService:
    """
    Service for fetching prices.

    Current prices go through a persisted per-ticker cache:
    - fresh entry (younger than the TTL) is returned without calling upstream
    - otherwise upstream is called and the entry upserted on success
    - on upstream failure any existing entry is returned, however old; the
      error only propagates when the ticker was never cached

    Upstream calls made by one service instance are spaced at least
    request_delay_seconds apart, so batches are fetched sequentially at a
    rate the quote service tolerates.
    """

    def __init__(
        self,
        provider: PriceProvider,
        cache_repo: PriceCacheRepository,
        cache_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS,
        request_delay_seconds: float = DEFAULT_REQUEST_DELAY_SECONDS,
        clock: Callable[[], datetime] = now_eastern,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._provider = provider
        self._cache_repo = cache_repo
        self._cache_ttl = cache_ttl_seconds
        self._request_delay = request_delay_seconds
        self._clock = clock
        self._sleep = sleep
        self._last_upstream_at: Optional[float] = None

    def get_price(self, ticker: str, force_refresh: bool = False) -> Decimal:
        """Return the current price for ticker, from cache when fresh."""
        symbol = normalize_ticker(ticker)
        cached = self._cache_repo.get(symbol)

        if not force_refresh and cached is not None:
            age = cached.age_seconds(self._clock())
            if age < self._cache_ttl:
                logger.debug(f"Cache hit for {symbol} (age: {age / 60:.1f} minutes)")
                return cached.price
            logger.debug(f"Cache expired for {symbol} (age: {age / 60:.1f} minutes)")

        try:
            price = self._fetch_current(symbol)
        except PriceError as exc:
            if cached is not None:
                logger.warning(
                    f"Price fetch failed for {symbol} ({exc.code}); "
                    f"using cached price from {cached.last_updated.isoformat()}"
                )
                return cached.price
            logger.error(f"Price fetch failed for {symbol} ({exc.code}) with nothing cached")
            raise

        self._store(symbol, price, cached)
        return price

    def get_batch_prices(self, tickers: Iterable[str]) -> BatchPriceResult:
        """
        Fetch prices for several tickers one at a time.

        Duplicates are collapsed after normalization. A failing ticker is
        reported in errors and does not stop the rest of the batch.
        """
        result = BatchPriceResult()
        seen: set[str] = set()

        for raw in tickers:
            key = (raw or "").strip().upper()
            if key in seen:
                continue
            seen.add(key)
            try:
                result.prices[normalize_ticker(key)] = self.get_price(key)
            except AppError as exc:
                logger.warning(f"Failed to fetch price for {key or raw!r}: {exc.message}")
                result.errors[key or str(raw)] = exc.message

        return result

    def get_historical_price(self, ticker: str, on_date: date) -> Decimal:
        """Close on on_date, or the nearest earlier trading day (not cached)."""
        symbol = normalize_ticker(ticker)
        if on_date > self._clock().date():
            raise ValidationError(f"Date {on_date.isoformat()} is in the future")
        return self._provider.fetch_historical_price(symbol, on_date)

    def get_price_series(self, ticker: str, start: date, end: date) -> dict[date, Decimal]:
        """Daily closes for [start, end] keyed by trading date (not cached)."""
        symbol = normalize_ticker(ticker)
        if start > end:
            return {}
        return self._provider.fetch_price_series(symbol, start, end)

    def _fetch_current(self, symbol: str) -> Decimal:
        if self._last_upstream_at is not None and self._request_delay > 0:
            wait = self._request_delay - (time.monotonic() - self._last_upstream_at)
            if wait > 0:
                self._sleep(wait)
        try:
            return self._provider.fetch_current_price(symbol)
        finally:
            self._last_upstream_at = time.monotonic()

    def _store(self, symbol: str, price: Decimal, previous: Optional[PriceCacheEntry]) -> None:
        now = self._clock()
        if previous is not None and now <= previous.last_updated:
            now = previous.last_updated + timedelta(microseconds=1)
        try:
            self._cache_repo.upsert(PriceCacheEntry(ticker=symbol, price=price, last_updated=now))
            logger.info(f"Updated cache for {symbol}: ${price}")
        except SQLAlchemyError as exc:
            logger.error(f"Error updating price cache for {symbol}: {exc}")
