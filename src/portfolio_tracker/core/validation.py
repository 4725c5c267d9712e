"""Input normalization shared by services."""

import re
from decimal import Decimal
from typing import Optional

from portfolio_tracker.core.exceptions import ValidationError

_TICKER_RE = re.compile(r"^[A-Z0-9][A-Z0-9.\-]{0,9}$")


def normalize_ticker(value: Optional[str]) -> str:
    """Strip and uppercase a ticker; reject empty or malformed symbols."""
    ticker = (value or "").strip().upper()
    if not ticker:
        raise ValidationError("Ticker is required")
    if not _TICKER_RE.match(ticker):
        raise ValidationError(f"Invalid ticker symbol: {value}")
    return ticker


def require_positive(name: str, value: Optional[Decimal], max_places: int) -> Decimal:
    """Check value > 0 with at most max_places decimal places."""
    if value is None:
        raise ValidationError(f"{name} is required")
    if not value.is_finite() or value <= 0:
        raise ValidationError(f"{name} must be greater than 0")
    exponent = value.normalize().as_tuple().exponent
    if isinstance(exponent, int) and -exponent > max_places:
        raise ValidationError(f"{name} allows at most {max_places} decimal places")
    return value
