"""Historical performance reconstruction.

Replays the ledger one calendar day at a time and values the running
positions with forward-filled daily closes.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, Mapping, Optional

from portfolio_tracker.domain.models import Transaction
from portfolio_tracker.domain.views import Holding, PerformancePoint
from portfolio_tracker.services.holdings_calculator import ZERO, apply_transaction, sort_ledger

logger = logging.getLogger(__name__)

# 20 years of calendar days
DEFAULT_MAX_DAYS = 20 * 366


def compute_performance_series(
    transactions: Iterable[Transaction],
    price_series_by_ticker: Mapping[str, Mapping[date, Decimal]],
    today: date,
    max_days: int = DEFAULT_MAX_DAYS,
) -> list[PerformancePoint]:
    """
    Build one PerformancePoint per calendar day from the first transaction
    through today (inclusive).

    value is the sum of quantity × last known close over tickers with a
    positive quantity; a ticker never priced so far contributes nothing.
    invested is the running cost basis, using the same average-cost SELL
    rule as the holdings calculator.
    """
    ledger = sort_ledger(transactions)
    if not ledger:
        return []

    first_day = ledger[0].txn_date.toordinal()
    last_day = today.toordinal()
    if first_day > last_day:
        logger.warning(f"All transactions are dated after {today.isoformat()}; no history to build")
        return []
    if last_day - first_day > max_days:
        logger.warning(
            f"Ledger starts {ledger[0].txn_date.isoformat()}, more than {max_days} days ago; "
            "history truncated"
        )
        first_day = last_day - max_days
    if ledger[-1].txn_date > today:
        logger.warning(f"Ignoring transactions dated after {today.isoformat()}")

    positions: dict[str, Holding] = {}
    total_invested = ZERO
    last_price = _seed_prices(price_series_by_ticker, date.fromordinal(first_day))
    cursor = 0
    points: list[PerformancePoint] = []

    for ordinal in range(first_day, last_day + 1):
        day = date.fromordinal(ordinal)

        while cursor < len(ledger) and ledger[cursor].txn_date <= day:
            txn = ledger[cursor]
            holding = positions.get(txn.ticker)
            if holding is None:
                holding = positions[txn.ticker] = Holding(ticker=txn.ticker)
            total_invested += apply_transaction(holding, txn)
            cursor += 1

        for ticker, series in price_series_by_ticker.items():
            price = series.get(day)
            if price is not None:
                last_price[ticker] = price

        value = ZERO
        for ticker, holding in positions.items():
            price = last_price.get(ticker)
            if holding.quantity > ZERO and price is not None:
                value += holding.quantity * price

        points.append(PerformancePoint(date=day, value=value, invested=total_invested))

    return points


def apply_live_point(
    series: list[PerformancePoint],
    holdings: Mapping[str, Holding],
    live_prices: Mapping[str, Decimal],
    today: date,
    price_series_by_ticker: Optional[Mapping[str, Mapping[date, Decimal]]] = None,
) -> list[PerformancePoint]:
    """
    Replace (or append) today's point using live prices and current holdings.

    Tickers without a live price fall back to their latest historical close,
    and contribute nothing when there is none. The series is returned
    unchanged when there are no current holdings.
    """
    if not holdings:
        return series

    fallback = _seed_prices(price_series_by_ticker or {}, today, inclusive=True)
    value = ZERO
    invested = ZERO
    for ticker, holding in holdings.items():
        invested += holding.total_cost
        price = live_prices.get(ticker, fallback.get(ticker))
        if price is not None:
            value += holding.quantity * price

    live = PerformancePoint(date=today, value=value, invested=invested)
    if series and series[-1].date == today:
        return series[:-1] + [live]
    return series + [live]


def _seed_prices(
    price_series_by_ticker: Mapping[str, Mapping[date, Decimal]],
    before: date,
    inclusive: bool = False,
) -> dict[str, Decimal]:
    """Latest close per ticker strictly before (or on, if inclusive) a date."""
    seeded: dict[str, Decimal] = {}
    for ticker, series in price_series_by_ticker.items():
        earlier = [d for d in series if d < before or (inclusive and d == before)]
        if earlier:
            seeded[ticker] = series[max(earlier)]
    return seeded
