"""Shared HTTP plumbing for upstream quote services."""

import logging
import threading
import time
from datetime import date, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

import httpx

from portfolio_tracker.core.exceptions import (
    InvalidTickerError,
    RateLimitedError,
    UpstreamUnavailableError,
)
from portfolio_tracker.providers.market_data_provider import (
    DEFAULT_LOOKBACK_DAYS,
    find_close_on_or_before,
)

logger = logging.getLogger(__name__)


def parse_price(value: Any, ticker: str) -> Decimal:
    """Convert an upstream numeric field to a positive Decimal."""
    try:
        price = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise UpstreamUnavailableError(f"Malformed price for {ticker}: {value!r}")
    if not price.is_finite() or price <= 0:
        raise UpstreamUnavailableError(f"Malformed price for {ticker}: {value!r}")
    return price


class HttpPriceProvider:
    """
    Base class for HTTP quote services.

    Owns one httpx.Client, spaces requests at least min_interval_seconds
    apart (across threads), and maps transport failures onto the price
    error taxonomy. Subclasses implement fetch_current_price and
    fetch_price_series.
    """

    name = "http"
    base_url = ""

    def __init__(
        self,
        api_key: Optional[str],
        timeout_seconds: float = 10.0,
        min_interval_seconds: float = 0.0,
        lookback_days: int = DEFAULT_LOOKBACK_DAYS,
        client: Optional[httpx.Client] = None,
    ):
        self._api_key = api_key
        self._min_interval = min_interval_seconds
        self._lookback_days = lookback_days
        self._client = client or httpx.Client(base_url=self.base_url, timeout=timeout_seconds)
        self._lock = threading.Lock()
        self._last_request_at: Optional[float] = None

    def fetch_historical_price(self, ticker: str, on_date: date) -> Decimal:
        """Return the close on on_date or the nearest prior trading day."""
        start = on_date - timedelta(days=self._lookback_days)
        closes = self.fetch_price_series(ticker, start, on_date)
        return find_close_on_or_before(ticker, closes, on_date, self._lookback_days)

    def close(self) -> None:
        self._client.close()

    def _require_api_key(self, env_name: str) -> str:
        if not self._api_key:
            raise UpstreamUnavailableError(f"{env_name} not configured")
        return self._api_key

    def _get_json(self, ticker: str, path: str, params: dict[str, Any]) -> Any:
        """GET path and return decoded JSON, normalizing every failure."""
        with self._lock:
            self._wait_for_slot()
            try:
                response = self._client.get(path, params=params)
            except httpx.TimeoutException:
                raise UpstreamUnavailableError(f"{self.name} request timed out for {ticker}")
            except httpx.HTTPError as exc:
                raise UpstreamUnavailableError(f"{self.name} request failed for {ticker}: {exc}")
            finally:
                self._last_request_at = time.monotonic()

        if response.status_code == 429:
            raise RateLimitedError()
        if response.status_code == 404:
            raise InvalidTickerError(ticker)
        if response.status_code >= 400:
            logger.warning(f"{self.name} returned HTTP {response.status_code} for {ticker}")
            raise UpstreamUnavailableError(f"{self.name} is unavailable")

        try:
            return response.json()
        except ValueError:
            raise UpstreamUnavailableError(f"{self.name} returned a malformed response for {ticker}")

    def _wait_for_slot(self) -> None:
        if self._min_interval <= 0 or self._last_request_at is None:
            return
        elapsed = time.monotonic() - self._last_request_at
        if elapsed < self._min_interval:
            time.sleep(self._min_interval - elapsed)
