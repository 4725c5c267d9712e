"""
Integration tests for SQLAlchemy repositories on SQLite.

Tests cover:
- Transaction CRUD round trips
- Ledger ordering
- Price cache upsert semantics and timezone handling
- Rollback after a failed cache write
"""

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest
import pytz
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from portfolio_tracker.domain.models import PriceCacheEntry, SortOrder, TransactionType
from portfolio_tracker.repositories.sqlalchemy import (
    SqlAlchemyPriceCacheRepository,
    SqlAlchemyTransactionRepository,
)

from tests.conftest import eastern_datetime, make_transaction


# =============================================================================
# TRANSACTION REPOSITORY TESTS
# =============================================================================


class TestTransactionRepository:
    """Tests for SqlAlchemyTransactionRepository."""

    def test_create_assigns_increasing_ids(self, transaction_repo: SqlAlchemyTransactionRepository):
        first = transaction_repo.create(make_transaction("AAPL", "BUY", date(2024, 1, 1), "1", "10.00"))
        second = transaction_repo.create(make_transaction("AAPL", "BUY", date(2024, 1, 1), "1", "10.00"))

        assert first.txn_id is not None
        assert second.txn_id > first.txn_id
        assert first.created_at is not None

    def test_decimals_survive_round_trip(self, transaction_repo: SqlAlchemyTransactionRepository):
        created = transaction_repo.create(make_transaction("VTI", "BUY", date(2024, 1, 1), "0.1234", "251.37"))

        loaded = transaction_repo.get_by_id(created.txn_id)

        assert loaded.quantity == Decimal("0.1234")
        assert loaded.price_per_share == Decimal("251.37")
        assert loaded.txn_type == TransactionType.BUY

    def test_update_persists_fields(self, transaction_repo: SqlAlchemyTransactionRepository):
        created = transaction_repo.create(make_transaction("AAPL", "BUY", date(2024, 1, 1), "1", "10.00"))
        created.ticker = "MSFT"
        created.txn_type = TransactionType.SELL

        transaction_repo.update(created)
        loaded = transaction_repo.get_by_id(created.txn_id)

        assert loaded.ticker == "MSFT"
        assert loaded.txn_type == TransactionType.SELL

    def test_delete_returns_removed_record(self, transaction_repo: SqlAlchemyTransactionRepository):
        created = transaction_repo.create(make_transaction("AAPL", "BUY", date(2024, 1, 1), "1", "10.00"))

        deleted = transaction_repo.delete(created.txn_id)

        assert deleted.txn_id == created.txn_id
        assert transaction_repo.get_by_id(created.txn_id) is None
        assert transaction_repo.delete(created.txn_id) is None

    def test_list_ledger_orders_by_date_then_id(self, transaction_repo: SqlAlchemyTransactionRepository):
        late = transaction_repo.create(make_transaction("AAPL", "BUY", date(2024, 1, 5), "1", "10.00"))
        early_a = transaction_repo.create(make_transaction("AAPL", "BUY", date(2024, 1, 1), "1", "10.00"))
        early_b = transaction_repo.create(make_transaction("AAPL", "SELL", date(2024, 1, 1), "1", "10.00"))

        ledger = transaction_repo.list_ledger()

        assert [t.txn_id for t in ledger] == [early_a.txn_id, early_b.txn_id, late.txn_id]

    def test_query_filters_and_sorts(self, transaction_repo: SqlAlchemyTransactionRepository):
        transaction_repo.create(make_transaction("AAPL", "BUY", date(2024, 1, 1), "5", "10.00"))
        transaction_repo.create(make_transaction("AAPL", "BUY", date(2024, 1, 2), "1", "10.00"))
        transaction_repo.create(make_transaction("MSFT", "BUY", date(2024, 1, 3), "3", "10.00"))

        result = transaction_repo.query(ticker="aapl", sort_by="quantity", order=SortOrder.ASC)

        assert [t.quantity for t in result] == [Decimal("1"), Decimal("5")]


# =============================================================================
# PRICE CACHE REPOSITORY TESTS
# =============================================================================


class TestPriceCacheRepository:
    """Tests for SqlAlchemyPriceCacheRepository."""

    def test_missing_ticker_returns_none(self, cache_repo: SqlAlchemyPriceCacheRepository):
        assert cache_repo.get("AAPL") is None

    def test_upsert_inserts_then_updates_single_row(self, cache_repo: SqlAlchemyPriceCacheRepository):
        """
        GIVEN an entry for AAPL
        WHEN a newer entry is upserted
        THEN there is still one row, holding the newer values
        """
        first = eastern_datetime(2024, 6, 14, 10, 0)
        cache_repo.upsert(PriceCacheEntry("AAPL", Decimal("185.50"), first))
        cache_repo.upsert(PriceCacheEntry("AAPL", Decimal("186.00"), first + timedelta(minutes=20)))

        entries = cache_repo.list_all()

        assert len(entries) == 1
        assert entries[0].price == Decimal("186.00")
        assert entries[0].last_updated == first + timedelta(minutes=20)

    def test_timestamps_come_back_timezone_aware(self, cache_repo: SqlAlchemyPriceCacheRepository):
        stamp = eastern_datetime(2024, 6, 14, 15, 45)
        cache_repo.upsert(PriceCacheEntry("msft", Decimal("378.25"), stamp))

        entry = cache_repo.get("MSFT")

        assert entry.last_updated.tzinfo is not None
        assert entry.last_updated == stamp
        assert entry.last_updated.astimezone(pytz.utc).replace(tzinfo=None) == datetime(2024, 6, 14, 19, 45)

    def test_list_all_sorted_by_ticker(self, cache_repo: SqlAlchemyPriceCacheRepository):
        stamp = eastern_datetime(2024, 6, 14)
        cache_repo.upsert(PriceCacheEntry("TSLA", Decimal("1"), stamp))
        cache_repo.upsert(PriceCacheEntry("AAPL", Decimal("2"), stamp))

        assert [e.ticker for e in cache_repo.list_all()] == ["AAPL", "TSLA"]

    def test_failed_upsert_rolls_back_and_session_stays_usable(
        self,
        cache_repo: SqlAlchemyPriceCacheRepository,
        test_session,
        monkeypatch,
    ):
        """
        GIVEN an upsert whose statement fails
        WHEN the error propagates
        THEN the session was rolled back and later reads and writes work
        """
        rollbacks = []
        real_rollback = test_session.rollback

        def failing_execute(*args, **kwargs):
            raise OperationalError("INSERT INTO price_cache", {}, Exception("database is locked"))

        def tracking_rollback():
            rollbacks.append(True)
            real_rollback()

        monkeypatch.setattr(test_session, "execute", failing_execute)
        monkeypatch.setattr(test_session, "rollback", tracking_rollback)
        with pytest.raises(SQLAlchemyError):
            cache_repo.upsert(PriceCacheEntry("AAPL", Decimal("185.50"), eastern_datetime(2024, 6, 14)))
        monkeypatch.undo()

        assert rollbacks == [True]
        assert cache_repo.get("AAPL") is None
        cache_repo.upsert(PriceCacheEntry("AAPL", Decimal("186.00"), eastern_datetime(2024, 6, 14)))
        assert cache_repo.get("AAPL").price == Decimal("186.00")
