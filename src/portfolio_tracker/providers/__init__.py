"""Price providers module."""

from portfolio_tracker.config.settings import Settings
from portfolio_tracker.providers.market_data_provider import PriceProvider, find_close_on_or_before
from portfolio_tracker.providers.http_provider import HttpPriceProvider
from portfolio_tracker.providers.alpha_vantage import AlphaVantageProvider
from portfolio_tracker.providers.polygon import PolygonProvider
from portfolio_tracker.providers.stub_provider import StubPriceProvider


def create_price_provider(settings: Settings) -> PriceProvider:
    """Build the single upstream provider selected by configuration."""
    if settings.stock_api_provider == "stub":
        return StubPriceProvider(lookback_days=settings.historical_lookback_days)

    provider_cls = PolygonProvider if settings.stock_api_provider == "polygon" else AlphaVantageProvider
    api_key = (
        settings.polygon_api_key
        if settings.stock_api_provider == "polygon"
        else settings.alpha_vantage_api_key
    )
    return provider_cls(
        api_key=api_key,
        timeout_seconds=settings.upstream_timeout_seconds,
        min_interval_seconds=settings.upstream_min_interval_seconds,
        lookback_days=settings.historical_lookback_days,
    )


__all__ = [
    "PriceProvider",
    "find_close_on_or_before",
    "HttpPriceProvider",
    "AlphaVantageProvider",
    "PolygonProvider",
    "StubPriceProvider",
    "create_price_provider",
]
