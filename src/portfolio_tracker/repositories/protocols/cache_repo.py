"""Price cache repository protocol."""

from typing import Protocol, Optional

from portfolio_tracker.domain.models import PriceCacheEntry


class PriceCacheRepository(Protocol):
    """Interface for the persisted per-ticker price cache."""

    def get(self, ticker: str) -> Optional[PriceCacheEntry]:
        """Get the cached entry for a ticker, fresh or stale."""
        ...

    def upsert(self, entry: PriceCacheEntry) -> PriceCacheEntry:
        """Insert or replace the entry for entry.ticker (last writer wins)."""
        ...

    def list_all(self) -> list[PriceCacheEntry]:
        """List all cached entries ordered by ticker."""
        ...
