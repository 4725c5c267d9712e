"""SQLAlchemy implementation of PriceCacheRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portfolio_tracker.core.timezone import from_utc_naive, to_utc_naive
from portfolio_tracker.domain.models import PriceCacheEntry
from portfolio_tracker.repositories.sqlalchemy.orm_models import PriceCacheORM


class SqlAlchemyPriceCacheRepository:
    """SQLAlchemy-backed price cache repository."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, ticker: str) -> Optional[PriceCacheEntry]:
        """Get the cached entry for a ticker."""
        orm_entry = (
            self._db.query(PriceCacheORM)
            .filter(PriceCacheORM.ticker == ticker.upper())
            .first()
        )
        return self._to_domain(orm_entry) if orm_entry else None

    def upsert(self, entry: PriceCacheEntry) -> PriceCacheEntry:
        """Insert or update in one statement (INSERT ... ON CONFLICT DO UPDATE)."""
        values = {
            "ticker": entry.ticker.upper(),
            "current_price": entry.price,
            "last_updated": to_utc_naive(entry.last_updated),
        }

        dialect = self._db.get_bind().dialect.name
        insert = postgresql.insert if dialect == "postgresql" else sqlite.insert
        stmt = insert(PriceCacheORM).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[PriceCacheORM.ticker],
            set_={
                "current_price": stmt.excluded.current_price,
                "last_updated": stmt.excluded.last_updated,
            },
        )
        try:
            self._db.execute(stmt)
            self._db.commit()
        except SQLAlchemyError:
            self._db.rollback()
            raise
        return PriceCacheEntry(
            ticker=values["ticker"],
            price=entry.price,
            last_updated=entry.last_updated,
        )

    def list_all(self) -> list[PriceCacheEntry]:
        """List all cached entries."""
        orm_entries = self._db.query(PriceCacheORM).order_by(PriceCacheORM.ticker).all()
        return [self._to_domain(e) for e in orm_entries]

    @staticmethod
    def _to_domain(orm: PriceCacheORM) -> PriceCacheEntry:
        """Convert ORM entry to domain model."""
        return PriceCacheEntry(
            ticker=orm.ticker,
            price=Decimal(str(orm.current_price)),
            last_updated=from_utc_naive(orm.last_updated),
        )
