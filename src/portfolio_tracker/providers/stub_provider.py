"""Stub price provider for offline/testing use."""

import random
from datetime import date, timedelta
from decimal import Decimal

from portfolio_tracker.core.exceptions import InvalidTickerError
from portfolio_tracker.core.timezone import today_eastern
from portfolio_tracker.providers.market_data_provider import (
    DEFAULT_LOOKBACK_DAYS,
    find_close_on_or_before,
)


# Deterministic fake prices for common symbols
_STUB_PRICES: dict[str, Decimal] = {
    "AAPL": Decimal("185.50"),
    "GOOGL": Decimal("142.75"),
    "MSFT": Decimal("378.25"),
    "AMZN": Decimal("178.50"),
    "TSLA": Decimal("248.75"),
    "NVDA": Decimal("485.25"),
    "META": Decimal("505.50"),
    "SPY": Decimal("485.25"),
    "QQQ": Decimal("418.75"),
    "VTI": Decimal("252.30"),
}


class StubPriceProvider:
    """
    Stub provider with deterministic fake data for offline operation.

    Uses predefined prices for common symbols and a per-symbol seeded price
    for unknown ones. Daily series only contain weekdays so callers see the
    same weekend gaps as with a real quote service.
    """

    def __init__(self, seed: int = 42, lookback_days: int = DEFAULT_LOOKBACK_DAYS):
        self._seed = seed
        self._lookback_days = lookback_days

    def fetch_current_price(self, ticker: str) -> Decimal:
        return self._base_price(ticker)

    def fetch_historical_price(self, ticker: str, on_date: date) -> Decimal:
        start = on_date - timedelta(days=self._lookback_days)
        closes = self.fetch_price_series(ticker, start, on_date)
        return find_close_on_or_before(ticker, closes, on_date, self._lookback_days)

    def fetch_price_series(self, ticker: str, start: date, end: date) -> dict[date, Decimal]:
        base = self._base_price(ticker)
        today = today_eastern()
        closes: dict[date, Decimal] = {}
        day = start
        while day <= min(end, today):
            if day.weekday() < 5:
                # Small deterministic wobble around the base price
                rng = random.Random(f"{self._seed}:{ticker}:{day.toordinal()}")
                factor = Decimal(str(1 + (rng.random() - 0.5) * 0.04))
                closes[day] = (base * factor).quantize(Decimal("0.01"))
            day += timedelta(days=1)
        return closes

    def close(self) -> None:
        pass

    def _base_price(self, ticker: str) -> Decimal:
        symbol = ticker.upper()
        if not symbol or not symbol.replace(".", "").replace("-", "").isalnum():
            raise InvalidTickerError(ticker)
        if symbol in _STUB_PRICES:
            return _STUB_PRICES[symbol]
        rng = random.Random(f"{self._seed}:{symbol}")
        return Decimal(str(50 + rng.random() * 200)).quantize(Decimal("0.01"))
