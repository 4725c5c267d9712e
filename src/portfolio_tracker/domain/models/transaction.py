"""Transaction domain model."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from portfolio_tracker.domain.models.enums import TransactionType


@dataclass
class Transaction:
    """
    Ledger transaction entry (source of truth).

    Supports: BUY, SELL.
    - Fractional shares supported via Decimal (up to 4 decimal places)
    - Prices in currency units (2 decimal places)
    - txn_date is a calendar day with no time component
    - SELL quantity is not checked against holdings; oversells are allowed
    """

    ticker: str
    txn_type: TransactionType
    txn_date: date
    quantity: Decimal
    price_per_share: Decimal
    txn_id: Optional[int] = None
    created_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.txn_type, str):
            self.txn_type = TransactionType(self.txn_type)

    @property
    def amount(self) -> Decimal:
        """Gross amount of the trade (quantity × price)."""
        return self.quantity * self.price_per_share
