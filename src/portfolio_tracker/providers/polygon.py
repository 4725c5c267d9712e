"""Polygon.io quote service ("most-recent-close" provider)."""

from datetime import date
from decimal import Decimal
from typing import Any

from portfolio_tracker.core.exceptions import (
    InvalidTickerError,
    RateLimitedError,
    UpstreamUnavailableError,
)
from portfolio_tracker.core.timezone import date_from_epoch_ms
from portfolio_tracker.providers.http_provider import HttpPriceProvider, parse_price


class PolygonProvider(HttpPriceProvider):
    """
    Prices from Polygon.io aggregates.

    Current price: previous trading day's close (/v2/aggs/ticker/{T}/prev).
    Series: daily bars (/v2/aggs/ticker/{T}/range/1/day/{from}/{to}).
    """

    name = "polygon"
    base_url = "https://api.polygon.io"

    def fetch_current_price(self, ticker: str) -> Decimal:
        data = self._query(ticker, f"/v2/aggs/ticker/{ticker}/prev", {"adjusted": "true"})

        results = self._results(data, ticker)
        if not results:
            raise InvalidTickerError(ticker)
        bar = results[0]
        if not isinstance(bar, dict):
            raise UpstreamUnavailableError(f"polygon returned a malformed bar for {ticker}")
        return parse_price(bar.get("c"), ticker)

    def fetch_price_series(self, ticker: str, start: date, end: date) -> dict[date, Decimal]:
        data = self._query(
            ticker,
            f"/v2/aggs/ticker/{ticker}/range/1/day/{start.isoformat()}/{end.isoformat()}",
            {"adjusted": "true", "sort": "asc", "limit": "50000"},
        )

        closes: dict[date, Decimal] = {}
        for bar in self._results(data, ticker):
            if not isinstance(bar, dict) or bar.get("t") is None or bar.get("c") is None:
                continue
            try:
                day = date_from_epoch_ms(int(bar["t"]))
            except (TypeError, ValueError, OverflowError, OSError):
                raise UpstreamUnavailableError(
                    f"polygon returned a malformed bar timestamp for {ticker}: {bar['t']!r}"
                )
            if start <= day <= end:
                closes[day] = parse_price(bar["c"], ticker)
        return closes

    @staticmethod
    def _results(data: dict[str, Any], ticker: str) -> list[Any]:
        results = data.get("results") or []
        if not isinstance(results, list):
            raise UpstreamUnavailableError(f"polygon returned malformed results for {ticker}")
        return results

    def _query(self, ticker: str, path: str, params: dict[str, str]) -> dict[str, Any]:
        api_key = self._require_api_key("POLYGON_API_KEY")
        data = self._get_json(ticker, path, {**params, "apiKey": api_key})
        if not isinstance(data, dict):
            raise UpstreamUnavailableError(f"polygon returned a malformed response for {ticker}")

        status = str(data.get("status", "")).upper()
        if status == "ERROR":
            message = str(data.get("error") or data.get("message") or "")
            if "exceeded" in message.lower() or "rate" in message.lower():
                raise RateLimitedError()
            raise UpstreamUnavailableError(f"polygon error for {ticker}: {message}")
        if status == "NOT_FOUND":
            raise InvalidTickerError(ticker)
        return data
