"""Transaction repository protocol."""

from typing import Protocol, Optional

from portfolio_tracker.domain.models import Transaction, TransactionType, SortOrder


class TransactionRepository(Protocol):
    """Interface for transaction (ledger) data access."""

    def create(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction and return it with its assigned id."""
        ...

    def get_by_id(self, txn_id: int) -> Optional[Transaction]:
        """Retrieve transaction by ID."""
        ...

    def update(self, transaction: Transaction) -> Transaction:
        """Update an existing transaction."""
        ...

    def delete(self, txn_id: int) -> Optional[Transaction]:
        """Delete a transaction; return the deleted record or None if missing."""
        ...

    def query(
        self,
        ticker: Optional[str] = None,
        txn_type: Optional[TransactionType] = None,
        sort_by: str = "txn_date",
        order: SortOrder = SortOrder.DESC,
    ) -> list[Transaction]:
        """List transactions with optional filters and sorting."""
        ...

    def list_ledger(self) -> list[Transaction]:
        """List every transaction ascending by (txn_date, txn_id)."""
        ...
