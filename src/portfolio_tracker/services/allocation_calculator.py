"""Allocation calculator: percentage of portfolio per holding."""

from decimal import Decimal
from typing import Mapping

from portfolio_tracker.domain.views import AllocationItem, Holding

ZERO = Decimal("0")


def compute_allocation(
    holdings: Mapping[str, Holding],
    current_prices: Mapping[str, Decimal],
) -> list[AllocationItem]:
    """
    Market value and share of the total for each priced holding.

    Holdings without a current price are left out entirely, and the total
    only covers the included tickers. Sorted by market value, largest first.
    """
    items: list[AllocationItem] = []
    total_value = ZERO

    for ticker, holding in holdings.items():
        price = current_prices.get(ticker)
        if price is None:
            continue
        market_value = holding.quantity * price
        total_value += market_value
        items.append(
            AllocationItem(
                ticker=ticker,
                market_value=market_value,
                quantity=holding.quantity,
                percentage=ZERO,  # Will be calculated below
            )
        )

    if total_value != ZERO:
        for item in items:
            item.percentage = item.market_value / total_value * 100

    items.sort(key=lambda x: x.market_value, reverse=True)
    return items
