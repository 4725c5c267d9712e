"""SQLAlchemy implementation of TransactionRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session
from sqlalchemy import and_

from portfolio_tracker.domain.models import Transaction, TransactionType, SortOrder
from portfolio_tracker.repositories.sqlalchemy.orm_models import TransactionORM

# Public sort keys -> ORM columns
_SORT_COLUMNS = {
    "txn_date": TransactionORM.transaction_date,
    "ticker": TransactionORM.ticker,
    "quantity": TransactionORM.quantity,
    "price_per_share": TransactionORM.price_per_share,
    "created_at": TransactionORM.created_at,
}


class SqlAlchemyTransactionRepository:
    """SQLAlchemy-backed transaction repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction."""
        orm_txn = self._to_orm(transaction)
        self._db.add(orm_txn)
        self._db.commit()
        self._db.refresh(orm_txn)
        return self._to_domain(orm_txn)

    def get_by_id(self, txn_id: int) -> Optional[Transaction]:
        """Retrieve transaction by ID."""
        orm_txn = self._db.query(TransactionORM).filter(
            TransactionORM.id == txn_id
        ).first()
        return self._to_domain(orm_txn) if orm_txn else None

    def update(self, transaction: Transaction) -> Transaction:
        """Update an existing transaction."""
        orm_txn = self._db.query(TransactionORM).filter(
            TransactionORM.id == transaction.txn_id
        ).first()
        if not orm_txn:
            raise ValueError(f"Transaction not found: {transaction.txn_id}")

        orm_txn.ticker = transaction.ticker
        orm_txn.transaction_type = transaction.txn_type
        orm_txn.transaction_date = transaction.txn_date
        orm_txn.quantity = transaction.quantity
        orm_txn.price_per_share = transaction.price_per_share

        self._db.commit()
        self._db.refresh(orm_txn)
        return self._to_domain(orm_txn)

    def delete(self, txn_id: int) -> Optional[Transaction]:
        """Delete a transaction and return what was removed."""
        orm_txn = self._db.query(TransactionORM).filter(
            TransactionORM.id == txn_id
        ).first()
        if not orm_txn:
            return None
        deleted = self._to_domain(orm_txn)
        self._db.delete(orm_txn)
        self._db.commit()
        return deleted

    def query(
        self,
        ticker: Optional[str] = None,
        txn_type: Optional[TransactionType] = None,
        sort_by: str = "txn_date",
        order: SortOrder = SortOrder.DESC,
    ) -> list[Transaction]:
        """Query transactions with filters."""
        query = self._db.query(TransactionORM)

        conditions = []
        if ticker:
            conditions.append(TransactionORM.ticker == ticker.upper())
        if txn_type:
            conditions.append(TransactionORM.transaction_type == txn_type)
        if conditions:
            query = query.filter(and_(*conditions))

        column = _SORT_COLUMNS.get(sort_by, TransactionORM.transaction_date)
        if order == SortOrder.ASC:
            query = query.order_by(column.asc(), TransactionORM.id.asc())
        else:
            query = query.order_by(column.desc(), TransactionORM.id.desc())
        return [self._to_domain(t) for t in query.all()]

    def list_ledger(self) -> list[Transaction]:
        """List every transaction ascending by date, same-day ties by id."""
        query = self._db.query(TransactionORM).order_by(
            TransactionORM.transaction_date, TransactionORM.id
        )
        return [self._to_domain(t) for t in query.all()]

    @staticmethod
    def _to_orm(txn: Transaction) -> TransactionORM:
        """Convert domain model to ORM model."""
        orm_txn = TransactionORM(
            ticker=txn.ticker,
            transaction_type=txn.txn_type,
            transaction_date=txn.txn_date,
            quantity=txn.quantity,
            price_per_share=txn.price_per_share,
        )
        # Leave id and created_at unset so the column defaults apply
        if txn.txn_id is not None:
            orm_txn.id = txn.txn_id
        if txn.created_at is not None:
            orm_txn.created_at = txn.created_at
        return orm_txn

    @staticmethod
    def _to_domain(orm: TransactionORM) -> Transaction:
        """Convert ORM model to domain model."""
        return Transaction(
            txn_id=orm.id,
            ticker=orm.ticker,
            txn_type=orm.transaction_type,
            txn_date=orm.transaction_date,
            quantity=Decimal(str(orm.quantity)),
            price_per_share=Decimal(str(orm.price_per_share)),
            created_at=orm.created_at,
        )
