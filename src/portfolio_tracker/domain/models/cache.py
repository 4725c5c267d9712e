"""Persisted price cache model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass
class PriceCacheEntry:
    """
    Last known price for a ticker.

    One entry per ticker. last_updated strictly increases on every
    successful refresh; entries are never deleted by the application.
    """

    ticker: str
    price: Decimal
    last_updated: datetime

    def age_seconds(self, now: datetime) -> float:
        """Seconds elapsed between last_updated and now."""
        return (now - self.last_updated).total_seconds()
