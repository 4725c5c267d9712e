"""Enumerations for domain models."""

from enum import Enum


class TransactionType(str, Enum):
    """Types of ledger transactions."""

    BUY = "BUY"
    SELL = "SELL"


class SortOrder(str, Enum):
    """Sort direction for ledger listings."""

    ASC = "ASC"
    DESC = "DESC"
