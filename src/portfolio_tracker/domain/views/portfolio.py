"""View models for portfolio and price outputs."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Holding:
    """Current position in one ticker under average-cost accounting."""

    ticker: str
    quantity: Decimal = field(default_factory=lambda: Decimal("0"))
    total_cost: Decimal = field(default_factory=lambda: Decimal("0"))
    avg_cost_basis: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass
class HoldingSummary:
    """Holding valued at the current market price."""

    ticker: str
    quantity: Decimal
    avg_cost_basis: Decimal
    current_price: Decimal
    market_value: Decimal
    total_cost: Decimal
    gain_loss: Decimal
    gain_loss_percent: Decimal


@dataclass
class PortfolioSummary:
    """Portfolio totals plus per-holding detail."""

    holdings: list[HoldingSummary] = field(default_factory=list)
    total_value: Decimal = field(default_factory=lambda: Decimal("0"))
    total_cost: Decimal = field(default_factory=lambda: Decimal("0"))
    total_gain_loss: Decimal = field(default_factory=lambda: Decimal("0"))
    total_gain_loss_percent: Decimal = field(default_factory=lambda: Decimal("0"))
    price_errors: dict[str, str] = field(default_factory=dict)
    as_of: Optional[datetime] = None


@dataclass
class PerformancePoint:
    """Portfolio value and invested amount on one calendar day."""

    date: date
    value: Decimal
    invested: Decimal


@dataclass
class AllocationItem:
    """Single item in allocation breakdown."""

    ticker: str
    market_value: Decimal
    quantity: Decimal
    percentage: Decimal


@dataclass
class BatchPriceResult:
    """Outcome of a batch price lookup.

    Failures are per ticker; a batch with both prices and errors is a partial
    failure, not a fatal one.
    """

    prices: dict[str, Decimal] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_partial(self) -> bool:
        return bool(self.prices) and bool(self.errors)
