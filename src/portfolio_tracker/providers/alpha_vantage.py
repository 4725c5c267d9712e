"""Alpha Vantage quote service ("daily time series" provider)."""

from datetime import date, timedelta
from decimal import Decimal
from typing import Any

from portfolio_tracker.core.exceptions import (
    InvalidTickerError,
    RateLimitedError,
    UpstreamUnavailableError,
)
from portfolio_tracker.core.timezone import today_eastern
from portfolio_tracker.providers.http_provider import HttpPriceProvider, parse_price

# TIME_SERIES_DAILY "compact" returns the latest 100 data points
_COMPACT_WINDOW_DAYS = 100


class AlphaVantageProvider(HttpPriceProvider):
    """
    Prices from Alpha Vantage.

    Current price: GLOBAL_QUOTE "05. price".
    Series: TIME_SERIES_DAILY "4. close" per trading date.
    """

    name = "alphavantage"
    base_url = "https://www.alphavantage.co"

    def fetch_current_price(self, ticker: str) -> Decimal:
        data = self._query(ticker, {"function": "GLOBAL_QUOTE", "symbol": ticker})

        quote = data.get("Global Quote")
        if not isinstance(quote, dict):
            raise UpstreamUnavailableError(f"alphavantage returned no quote section for {ticker}")
        if not quote or not quote.get("05. price"):
            raise InvalidTickerError(ticker)
        return parse_price(quote["05. price"], ticker)

    def fetch_price_series(self, ticker: str, start: date, end: date) -> dict[date, Decimal]:
        compact = start >= today_eastern() - timedelta(days=_COMPACT_WINDOW_DAYS)
        data = self._query(
            ticker,
            {
                "function": "TIME_SERIES_DAILY",
                "symbol": ticker,
                "outputsize": "compact" if compact else "full",
            },
        )

        series = data.get("Time Series (Daily)")
        if not isinstance(series, dict):
            raise UpstreamUnavailableError(f"alphavantage returned no daily series for {ticker}")

        closes: dict[date, Decimal] = {}
        for day_str, bar in series.items():
            try:
                day = date.fromisoformat(day_str)
            except ValueError:
                continue
            if start <= day <= end and isinstance(bar, dict) and bar.get("4. close"):
                closes[day] = parse_price(bar["4. close"], ticker)
        return closes

    def _query(self, ticker: str, params: dict[str, str]) -> dict[str, Any]:
        api_key = self._require_api_key("ALPHA_VANTAGE_API_KEY")
        data = self._get_json(ticker, "/query", {**params, "apikey": api_key})
        if not isinstance(data, dict):
            raise UpstreamUnavailableError(f"alphavantage returned a malformed response for {ticker}")

        # Alpha Vantage reports errors in the body of a 200 response
        if data.get("Error Message"):
            raise InvalidTickerError(ticker)
        if data.get("Note"):
            raise RateLimitedError()
        info = data.get("Information")
        if info:
            if "rate limit" in str(info).lower():
                raise RateLimitedError()
            raise UpstreamUnavailableError(f"alphavantage: {info}")
        return data
