"""Framework-agnostic business services for the PocketBudget ledger."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, List, Union

from .balance import check_expense_allowed, compute_balance, totals
from .exceptions import NotFoundError, StoreFailure, ValidationError
from .models import Transaction
from .store import TransactionStore
from .validators import validate_transaction_payload

logger = logging.getLogger(__name__)


class LedgerService:
    """Validates transaction requests and delegates persistence to the store."""

    def __init__(self, store: TransactionStore, *, enforce_balance: bool = False) -> None:
        self._store = store
        self._enforce_balance = enforce_balance

    # Public API -----------------------------------------------------------
    def create(self, payload: object) -> Transaction:
        try:
            data = validate_transaction_payload(payload)
            if self._enforce_balance:
                # Re-derive the balance from the store rather than trusting the caller.
                check_expense_allowed(self.list(), data["kind"], data["amount"])
        except ValidationError as exc:
            logger.warning("Rejected transaction request: %s", exc)
            raise

        try:
            transaction = self._store.insert(data)
        except StoreFailure:
            raise
        except Exception as exc:  # pragma: no cover - defensive guard
            raise StoreFailure("Unexpected error while saving transaction") from exc

        logger.info(
            "Created %s transaction %s for %s",
            transaction.kind.value,
            transaction.id,
            transaction.amount,
        )
        return transaction

    def list(self) -> List[Transaction]:
        """Return all transactions, newest first."""
        return self._store.find_all()

    def delete(self, transaction_id: str) -> Transaction:
        removed = self._store.delete_by_id(transaction_id)
        if removed is None:
            logger.warning("Delete requested for unknown transaction %s", transaction_id)
            raise NotFoundError("Transaction not found")
        logger.info("Deleted transaction %s", transaction_id)
        return removed

    def balance(self) -> Decimal:
        """Compute income minus expense over the stored transactions."""
        return compute_balance(self.list())

    def summary(self) -> Dict[str, Union[Decimal, int]]:
        transactions = self.list()
        income, expense = totals(transactions)
        return {
            "income": income,
            "expense": expense,
            "balance": income - expense,
            "count": len(transactions),
        }
