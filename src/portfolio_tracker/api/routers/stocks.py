"""Stock price endpoints."""

from fastapi import APIRouter, Depends, Query

from portfolio_tracker.api.deps import get_market_data_service
from portfolio_tracker.api.schemas import (
    PriceResponse,
    BatchPriceRequest,
    BatchPriceResponse,
    HistoricalPriceResponse,
)
from portfolio_tracker.config.settings import get_settings
from portfolio_tracker.core.exceptions import ValidationError
from portfolio_tracker.core.timezone import parse_iso_date
from portfolio_tracker.core.validation import normalize_ticker
from portfolio_tracker.services import MarketDataService

router = APIRouter(prefix="/stocks", tags=["stocks"])


@router.get("/{ticker}/price", response_model=PriceResponse)
def get_price(
    ticker: str,
    refresh: bool = Query(False, description="Bypass the price cache"),
    market: MarketDataService = Depends(get_market_data_service),
) -> PriceResponse:
    """Current price for one ticker (cached)."""
    symbol = normalize_ticker(ticker)
    return PriceResponse(ticker=symbol, price=market.get_price(symbol, force_refresh=refresh))


@router.post("/prices", response_model=BatchPriceResponse)
def get_batch_prices(
    request: BatchPriceRequest,
    market: MarketDataService = Depends(get_market_data_service),
) -> BatchPriceResponse:
    """Current prices for several tickers; failures are reported per ticker."""
    max_tickers = get_settings().max_batch_tickers
    if len(request.tickers) > max_tickers:
        raise ValidationError(f"At most {max_tickers} tickers per request")

    result = market.get_batch_prices(request.tickers)
    return BatchPriceResponse(prices=result.prices, errors=result.errors)


@router.get("/{ticker}/history", response_model=HistoricalPriceResponse)
def get_historical_price(
    ticker: str,
    date: str = Query(..., description="Trading date (YYYY-MM-DD)"),
    market: MarketDataService = Depends(get_market_data_service),
) -> HistoricalPriceResponse:
    """Close on the given date, or the nearest earlier trading day."""
    symbol = normalize_ticker(ticker)
    on_date = parse_iso_date(date)
    return HistoricalPriceResponse(
        ticker=symbol,
        date=on_date,
        price=market.get_historical_price(symbol, on_date),
    )
