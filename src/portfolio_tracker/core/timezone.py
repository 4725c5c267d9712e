"""Calendar and timezone utilities.

All dates are calendar days in US/Eastern (market time). Date strings are
parsed and produced only at the boundary.
"""

from datetime import date, datetime

import pytz

from portfolio_tracker.core.exceptions import ValidationError

EASTERN_TZ = pytz.timezone("US/Eastern")


def now_eastern() -> datetime:
    """Return current time in US/Eastern timezone."""
    return datetime.now(EASTERN_TZ)


def today_eastern() -> date:
    """Return today's calendar date in US/Eastern."""
    return now_eastern().date()


def to_eastern(dt: datetime) -> datetime:
    """Convert a datetime to US/Eastern timezone."""
    if dt.tzinfo is None:
        # Assume naive datetime is already Eastern
        return EASTERN_TZ.localize(dt)
    return dt.astimezone(EASTERN_TZ)


def to_utc_naive(dt: datetime) -> datetime:
    """Convert an aware datetime to naive UTC for storage."""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(pytz.utc).replace(tzinfo=None)


def from_utc_naive(dt: datetime) -> datetime:
    """Attach UTC to a naive datetime read back from storage."""
    if dt.tzinfo is not None:
        return dt
    return pytz.utc.localize(dt)


def parse_iso_date(value: str) -> date:
    """Parse a strict YYYY-MM-DD string."""
    try:
        return date.fromisoformat(value.strip())
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid date '{value}', expected YYYY-MM-DD")


def date_from_epoch_ms(millis: int) -> date:
    """Return the US/Eastern calendar date of a unix timestamp in milliseconds."""
    return datetime.fromtimestamp(millis / 1000, tz=pytz.utc).astimezone(EASTERN_TZ).date()
