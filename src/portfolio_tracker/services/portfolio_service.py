"""Portfolio service: holdings, performance and allocation from the ledger."""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date, timedelta
from decimal import Decimal
from typing import Callable

from dateutil.relativedelta import relativedelta

from portfolio_tracker.core.exceptions import PriceError
from portfolio_tracker.core.timezone import now_eastern, today_eastern
from portfolio_tracker.domain.views import (
    AllocationItem,
    HoldingSummary,
    PerformancePoint,
    PortfolioSummary,
)
from portfolio_tracker.providers.market_data_provider import DEFAULT_LOOKBACK_DAYS
from portfolio_tracker.repositories.protocols import TransactionRepository
from portfolio_tracker.services.allocation_calculator import compute_allocation
from portfolio_tracker.services.holdings_calculator import ZERO, compute_holdings
from portfolio_tracker.services.market_data_service import MarketDataService
from portfolio_tracker.services.performance_reconstructor import (
    apply_live_point,
    compute_performance_series,
)

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def _money(value: Decimal) -> Decimal:
    return value.quantize(CENTS)


def _percent(numerator: Decimal, denominator: Decimal) -> Decimal:
    if denominator == ZERO:
        return ZERO.quantize(CENTS)
    return (numerator / denominator * 100).quantize(CENTS)


class PortfolioService:
    """
    Derives portfolio views from the ledger and current prices.

    Nothing here is persisted: every call folds the full ledger again.
    """

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        market_data: MarketDataService,
        history_fetch_workers: int = 4,
        lookback_days: int = DEFAULT_LOOKBACK_DAYS,
        max_history_years: int = 20,
        today: Callable[[], date] = today_eastern,
    ):
        self._transaction_repo = transaction_repo
        self._market = market_data
        self._workers = max(1, history_fetch_workers)
        self._lookback_days = lookback_days
        self._max_history_years = max_history_years
        self._today = today

    def get_summary(self) -> PortfolioSummary:
        """
        Value current holdings at current prices.

        Holdings whose price could not be resolved are left out of the
        holdings list and totals and reported in price_errors.
        """
        holdings = compute_holdings(self._transaction_repo.list_ledger())
        if not holdings:
            return PortfolioSummary(as_of=now_eastern())

        batch = self._market.get_batch_prices(list(holdings))

        summaries: list[HoldingSummary] = []
        total_value = ZERO
        total_cost = ZERO
        for ticker, holding in holdings.items():
            price = batch.prices.get(ticker)
            if price is None:
                continue
            market_value = holding.quantity * price
            gain_loss = market_value - holding.total_cost
            total_value += market_value
            total_cost += holding.total_cost
            summaries.append(
                HoldingSummary(
                    ticker=ticker,
                    quantity=holding.quantity,
                    avg_cost_basis=_money(holding.avg_cost_basis),
                    current_price=_money(price),
                    market_value=_money(market_value),
                    total_cost=_money(holding.total_cost),
                    gain_loss=_money(gain_loss),
                    gain_loss_percent=_percent(gain_loss, holding.total_cost),
                )
            )

        if batch.errors:
            logger.warning(f"Summary missing prices for: {', '.join(sorted(batch.errors))}")

        total_gain_loss = total_value - total_cost
        return PortfolioSummary(
            holdings=summaries,
            total_value=_money(total_value),
            total_cost=_money(total_cost),
            total_gain_loss=_money(total_gain_loss),
            total_gain_loss_percent=_percent(total_gain_loss, total_cost),
            price_errors=dict(batch.errors),
            as_of=now_eastern(),
        )

    def get_performance(self) -> list[PerformancePoint]:
        """
        Day-by-day portfolio value and invested amount from the first
        transaction through today, with today's point valued at live prices.
        """
        ledger = self._transaction_repo.list_ledger()
        if not ledger:
            return []

        today = self._today()
        max_days = (today - (today - relativedelta(years=self._max_history_years))).days
        start = max(ledger[0].txn_date, today - timedelta(days=max_days))
        fetch_start = start - timedelta(days=self._lookback_days)
        tickers = sorted({txn.ticker for txn in ledger})

        series_by_ticker = self._fetch_series(tickers, fetch_start, today)
        series = compute_performance_series(ledger, series_by_ticker, today, max_days=max_days)

        holdings = compute_holdings(ledger)
        if holdings:
            batch = self._market.get_batch_prices(list(holdings))
            series = apply_live_point(series, holdings, batch.prices, today, series_by_ticker)

        return [
            PerformancePoint(date=p.date, value=_money(p.value), invested=_money(p.invested))
            for p in series
        ]

    def get_allocation(self) -> list[AllocationItem]:
        """Allocation of current market value across priced holdings."""
        holdings = compute_holdings(self._transaction_repo.list_ledger())
        if not holdings:
            return []

        batch = self._market.get_batch_prices(list(holdings))
        items = compute_allocation(holdings, batch.prices)
        for item in items:
            item.market_value = _money(item.market_value)
            item.percentage = item.percentage.quantize(CENTS)
        return items

    def _fetch_series(
        self, tickers: list[str], start: date, end: date
    ) -> dict[str, dict[date, Decimal]]:
        """Fetch daily closes for every ticker concurrently."""

        def fetch(ticker: str) -> tuple[str, dict[date, Decimal]]:
            try:
                return ticker, self._market.get_price_series(ticker, start, end)
            except PriceError as exc:
                logger.warning(f"No price history for {ticker} ({exc.code}): {exc.message}")
                return ticker, {}

        with ThreadPoolExecutor(max_workers=min(self._workers, len(tickers))) as executor:
            return dict(executor.map(fetch, tickers))
