"""Ledger service for transaction management."""

import logging
from dataclasses import dataclass, fields
from datetime import date
from decimal import Decimal
from typing import Optional, Union

from portfolio_tracker.core.exceptions import ValidationError, NotFoundError
from portfolio_tracker.core.validation import normalize_ticker, require_positive
from portfolio_tracker.domain.models import Transaction, TransactionType, SortOrder
from portfolio_tracker.repositories.protocols import TransactionRepository

logger = logging.getLogger(__name__)

SORT_FIELDS = ("txn_date", "ticker", "quantity", "price_per_share", "created_at")
QUANTITY_PLACES = 4
PRICE_PLACES = 2


@dataclass
class TransactionCreate:
    """Input data for creating a transaction."""

    ticker: str
    txn_type: Union[TransactionType, str]
    txn_date: date
    quantity: Decimal
    price_per_share: Decimal


@dataclass
class TransactionUpdate:
    """Partial update data for editing a transaction."""

    ticker: Optional[str] = None
    txn_type: Optional[Union[TransactionType, str]] = None
    txn_date: Optional[date] = None
    quantity: Optional[Decimal] = None
    price_per_share: Optional[Decimal] = None

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))


class LedgerService:
    """
    Service for managing the transaction ledger.

    The ledger is the source of truth for holdings and performance. SELL
    quantities are not checked against current holdings.
    """

    def __init__(self, transaction_repo: TransactionRepository):
        self._transaction_repo = transaction_repo

    def list_transactions(
        self,
        ticker: Optional[str] = None,
        txn_type: Optional[Union[TransactionType, str]] = None,
        sort_by: str = "txn_date",
        order: str = "desc",
    ) -> list[Transaction]:
        """
        List transactions with optional filters.

        Unknown sort fields fall back to txn_date and unknown orders to
        descending; ties are broken by id in the same direction.
        """
        if sort_by not in SORT_FIELDS:
            logger.debug(f"Unknown sort field {sort_by!r}; using txn_date")
            sort_by = "txn_date"
        direction = SortOrder.ASC if (order or "").lower() == "asc" else SortOrder.DESC

        return self._transaction_repo.query(
            ticker=ticker.strip().upper() if ticker and ticker.strip() else None,
            txn_type=self._parse_type(txn_type) if txn_type else None,
            sort_by=sort_by,
            order=direction,
        )

    def get_transaction(self, txn_id: int) -> Transaction:
        """Get transaction by ID."""
        transaction = self._transaction_repo.get_by_id(txn_id)
        if not transaction:
            raise NotFoundError("Transaction", str(txn_id))
        return transaction

    def add_transaction(self, data: TransactionCreate) -> Transaction:
        """Validate and append a transaction to the ledger."""
        if data.txn_date is None:
            raise ValidationError("Transaction date is required")

        transaction = Transaction(
            ticker=normalize_ticker(data.ticker),
            txn_type=self._parse_type(data.txn_type),
            txn_date=data.txn_date,
            quantity=require_positive("Quantity", data.quantity, QUANTITY_PLACES),
            price_per_share=require_positive("Price per share", data.price_per_share, PRICE_PLACES),
        )
        created = self._transaction_repo.create(transaction)
        logger.info(
            f"Added {created.txn_type.value} #{created.txn_id}: "
            f"{created.quantity} {created.ticker} @ {created.price_per_share} on {created.txn_date}"
        )
        return created

    def update_transaction(self, txn_id: int, patch: TransactionUpdate) -> Transaction:
        """Apply a partial update; only fields present in the patch change."""
        if patch.is_empty():
            raise ValidationError("No fields to update")

        transaction = self.get_transaction(txn_id)

        if patch.ticker is not None:
            transaction.ticker = normalize_ticker(patch.ticker)
        if patch.txn_type is not None:
            transaction.txn_type = self._parse_type(patch.txn_type)
        if patch.txn_date is not None:
            transaction.txn_date = patch.txn_date
        if patch.quantity is not None:
            transaction.quantity = require_positive("Quantity", patch.quantity, QUANTITY_PLACES)
        if patch.price_per_share is not None:
            transaction.price_per_share = require_positive(
                "Price per share", patch.price_per_share, PRICE_PLACES
            )

        updated = self._transaction_repo.update(transaction)
        logger.info(f"Updated transaction #{txn_id}")
        return updated

    def delete_transaction(self, txn_id: int) -> Transaction:
        """Delete a transaction and return the removed record."""
        deleted = self._transaction_repo.delete(txn_id)
        if deleted is None:
            raise NotFoundError("Transaction", str(txn_id))
        logger.info(f"Deleted transaction #{txn_id} ({deleted.ticker})")
        return deleted

    @staticmethod
    def _parse_type(value: Union[TransactionType, str]) -> TransactionType:
        if isinstance(value, TransactionType):
            return value
        try:
            return TransactionType(str(value).strip().upper())
        except ValueError:
            raise ValidationError(f"Transaction type must be BUY or SELL, got {value!r}")
