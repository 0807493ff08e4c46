"""Core business logic package for the PocketBudget ledger."""

from .balance import check_expense_allowed, compute_balance, filter_transactions, totals
from .config import Settings
from .exceptions import (
    InsufficientBalanceError,
    InvalidAmountError,
    InvalidKindError,
    MissingFieldError,
    NotFoundError,
    StoreFailure,
    ValidationError,
)
from .models import Transaction, TransactionKind
from .services import LedgerService
from .storage import JSONStorage
from .store import TransactionStore

__all__ = [
    "Transaction",
    "TransactionKind",
    "LedgerService",
    "JSONStorage",
    "TransactionStore",
    "Settings",
    "check_expense_allowed",
    "compute_balance",
    "filter_transactions",
    "totals",
    "ValidationError",
    "MissingFieldError",
    "InvalidAmountError",
    "InvalidKindError",
    "InsufficientBalanceError",
    "NotFoundError",
    "StoreFailure",
]
