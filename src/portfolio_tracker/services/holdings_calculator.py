"""Holdings calculator: fold the ledger into current positions.

Accounting policy is average cost basis: each ticker keeps a single running
(quantity, total_cost) pair and a SELL removes cost at the current average,
never from specific lots.
"""

import logging
from decimal import Decimal
from typing import Iterable

from portfolio_tracker.domain.models import Transaction, TransactionType
from portfolio_tracker.domain.views import Holding

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def sort_ledger(transactions: Iterable[Transaction]) -> list[Transaction]:
    """
    Order transactions ascending by date.

    Same-day transactions are ordered by txn_id (insertion order in the
    store). Transactions without an id keep their relative input order.
    """
    indexed = list(enumerate(transactions))
    indexed.sort(
        key=lambda pair: (
            pair[1].txn_date,
            pair[1].txn_id if pair[1].txn_id is not None else -1,
            pair[0],
        )
    )
    return [txn for _, txn in indexed]


def apply_transaction(holding: Holding, txn: Transaction) -> Decimal:
    """
    Apply one BUY/SELL to a running holding.

    Returns the change in invested cost (positive for BUY, negative for SELL).
    avg_cost_basis is not touched here.
    """
    if txn.txn_type == TransactionType.BUY:
        cost = txn.quantity * txn.price_per_share
        holding.total_cost += cost
        holding.quantity += txn.quantity
        return cost

    cost_basis = holding.total_cost / holding.quantity if holding.quantity > ZERO else ZERO
    removed = txn.quantity * cost_basis
    holding.total_cost -= removed
    holding.quantity -= txn.quantity
    return -removed


def compute_holdings(transactions: Iterable[Transaction]) -> dict[str, Holding]:
    """
    Compute current holdings per ticker from the full ledger.

    Tickers whose final quantity is zero or negative are dropped. Negative
    quantities mean more was sold than bought and are logged as a
    data-integrity warning.
    """
    holdings: dict[str, Holding] = {}

    for txn in sort_ledger(transactions):
        holding = holdings.get(txn.ticker)
        if holding is None:
            holding = holdings[txn.ticker] = Holding(ticker=txn.ticker)
        apply_transaction(holding, txn)

    result: dict[str, Holding] = {}
    for ticker, holding in holdings.items():
        if holding.quantity > ZERO:
            holding.avg_cost_basis = holding.total_cost / holding.quantity
            result[ticker] = holding
        elif holding.quantity < ZERO:
            logger.warning(
                f"Oversold position for {ticker}: quantity {holding.quantity} after folding ledger; "
                "excluded from holdings"
            )
        else:
            logger.debug(f"Closed position for {ticker} excluded from holdings")

    return result
