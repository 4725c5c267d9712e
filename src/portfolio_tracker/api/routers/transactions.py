"""Transaction ledger endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from portfolio_tracker.api.deps import get_ledger_service
from portfolio_tracker.api.schemas import (
    TransactionCreateRequest,
    TransactionUpdateRequest,
    TransactionResponse,
    TransactionListResponse,
    TransactionDeleteResponse,
)
from portfolio_tracker.domain.models import Transaction
from portfolio_tracker.services import LedgerService, TransactionCreate, TransactionUpdate

router = APIRouter(prefix="/transactions", tags=["transactions"])


def _to_response(txn: Transaction) -> TransactionResponse:
    return TransactionResponse(
        txn_id=txn.txn_id,
        ticker=txn.ticker,
        txn_type=txn.txn_type,
        txn_date=txn.txn_date,
        quantity=txn.quantity,
        price_per_share=txn.price_per_share,
        created_at=txn.created_at,
    )


@router.get("", response_model=TransactionListResponse)
def list_transactions(
    ticker: Optional[str] = Query(None, description="Filter by ticker"),
    txn_type: Optional[str] = Query(None, alias="type", description="Filter by BUY or SELL"),
    sort_by: str = Query("txn_date", description="txn_date, ticker, quantity, price_per_share or created_at"),
    order: str = Query("desc", description="asc or desc"),
    ledger: LedgerService = Depends(get_ledger_service),
) -> TransactionListResponse:
    """List transactions with optional filters and sorting."""
    transactions = ledger.list_transactions(
        ticker=ticker,
        txn_type=txn_type,
        sort_by=sort_by,
        order=order,
    )
    return TransactionListResponse(
        transactions=[_to_response(t) for t in transactions],
        count=len(transactions),
    )


@router.get("/{txn_id}", response_model=TransactionResponse)
def get_transaction(
    txn_id: int,
    ledger: LedgerService = Depends(get_ledger_service),
) -> TransactionResponse:
    """Get a single transaction."""
    return _to_response(ledger.get_transaction(txn_id))


@router.post("", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
def create_transaction(
    request: TransactionCreateRequest,
    ledger: LedgerService = Depends(get_ledger_service),
) -> TransactionResponse:
    """Record a BUY or SELL."""
    created = ledger.add_transaction(
        TransactionCreate(
            ticker=request.ticker,
            txn_type=request.txn_type,
            txn_date=request.txn_date,
            quantity=request.quantity,
            price_per_share=request.price_per_share,
        )
    )
    return _to_response(created)


@router.put("/{txn_id}", response_model=TransactionResponse)
def update_transaction(
    txn_id: int,
    request: TransactionUpdateRequest,
    ledger: LedgerService = Depends(get_ledger_service),
) -> TransactionResponse:
    """Partially update a transaction."""
    patch = TransactionUpdate(
        ticker=request.ticker,
        txn_type=request.txn_type,
        txn_date=request.txn_date,
        quantity=request.quantity,
        price_per_share=request.price_per_share,
    )
    return _to_response(ledger.update_transaction(txn_id, patch))


@router.delete("/{txn_id}", response_model=TransactionDeleteResponse)
def delete_transaction(
    txn_id: int,
    ledger: LedgerService = Depends(get_ledger_service),
) -> TransactionDeleteResponse:
    """Delete a transaction and return the removed record."""
    deleted = ledger.delete_transaction(txn_id)
    return TransactionDeleteResponse(
        message="Transaction deleted successfully",
        transaction=_to_response(deleted),
    )
