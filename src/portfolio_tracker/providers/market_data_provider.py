"""Price provider protocol and shared historical lookup."""

from datetime import date, timedelta
from decimal import Decimal
from typing import Protocol

from portfolio_tracker.core.exceptions import PriceNotFoundError

DEFAULT_LOOKBACK_DAYS = 10


class PriceProvider(Protocol):
    """
    Protocol for upstream quote services.

    Implementations raise only the price error taxonomy from
    portfolio_tracker.core.exceptions (InvalidTickerError, RateLimitedError,
    UpstreamUnavailableError, PriceNotFoundError). No caching happens here.
    """

    def fetch_current_price(self, ticker: str) -> Decimal:
        """Return the latest available price for ticker."""
        ...

    def fetch_historical_price(self, ticker: str, on_date: date) -> Decimal:
        """
        Return the close for on_date.

        Non-trading days resolve to the nearest prior trading day's close
        within the lookback window.
        """
        ...

    def fetch_price_series(self, ticker: str, start: date, end: date) -> dict[date, Decimal]:
        """Return daily closes keyed by trading date for [start, end]."""
        ...

    def close(self) -> None:
        """Release any connections held by the provider."""
        ...


def find_close_on_or_before(
    ticker: str,
    closes: dict[date, Decimal],
    on_date: date,
    lookback_days: int = DEFAULT_LOOKBACK_DAYS,
) -> Decimal:
    """
    Walk backward day by day from on_date looking for a close.

    Raises PriceNotFoundError naming the searched range when nothing is
    found within lookback_days.
    """
    day = on_date
    earliest = on_date - timedelta(days=lookback_days)
    while day >= earliest:
        price = closes.get(day)
        if price is not None:
            return price
        day -= timedelta(days=1)
    raise PriceNotFoundError(ticker, earliest.isoformat(), on_date.isoformat())
