"""Durable transaction store backed by :class:`JSONStorage`."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, List, Mapping, Optional
from uuid import uuid4

from .exceptions import StoreFailure
from .models import DEFAULT_CATEGORY, Transaction, TransactionKind
from .storage import JSONStorage

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

MIN_STORED_AMOUNT = Decimal("0.01")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TransactionStore:
    """Persistent collection of transactions addressed by generated ids.

    Every operation re-reads the backing file, so a listing is always a fresh
    snapshot of what is on disk. Read-modify-write cycles are serialised by a
    lock held for the whole cycle.
    """

    def __init__(
        self,
        storage: JSONStorage,
        resource: str = "transactions.json",
        *,
        clock: Optional[Clock] = None,
    ) -> None:
        self._storage = storage
        self._resource = resource
        self._clock = clock or _utc_now
        self._lock = threading.Lock()
        self._closed = False

    # Public API -----------------------------------------------------------
    def insert(self, fields: Mapping[str, Any]) -> Transaction:
        """Persist a new transaction and return it with its id and timestamp."""
        description, amount, kind, category = self._enforce_constraints(fields)
        with self._lock:
            self._ensure_open()
            transactions = self._load()
            transaction = Transaction(
                id=str(uuid4()),
                description=description,
                amount=amount,
                kind=kind,
                category=category,
                created_at=self._clock(),
            )
            transactions.append(transaction)
            self._persist(transactions)
        return transaction

    def find_all(self) -> List[Transaction]:
        """Return every transaction, newest first."""
        with self._lock:
            self._ensure_open()
            transactions = self._load()
        # Stable sort over reversed insertion order keeps later inserts first on ties.
        return sorted(reversed(transactions), key=lambda txn: txn.created_at, reverse=True)

    def delete_by_id(self, transaction_id: str) -> Optional[Transaction]:
        """Remove a transaction, returning it, or ``None`` when it does not exist."""
        with self._lock:
            self._ensure_open()
            transactions = self._load()
            for index, transaction in enumerate(transactions):
                if transaction.id == transaction_id:
                    del transactions[index]
                    self._persist(transactions)
                    return transaction
        return None

    def close(self) -> None:
        with self._lock:
            self._closed = True
        logger.debug("Transaction store %s closed", self._resource)

    @property
    def closed(self) -> bool:
        return self._closed

    # Internal helpers -----------------------------------------------------
    def _ensure_open(self) -> None:
        if self._closed:
            raise StoreFailure("Transaction store is closed")

    def _load(self) -> List[Transaction]:
        raw_records = self._storage.load(self._resource)
        try:
            return [Transaction.from_dict(payload) for payload in raw_records]
        except (KeyError, TypeError, ValueError, InvalidOperation) as exc:
            raise StoreFailure(f"Malformed transaction record in {self._resource}") from exc

    def _persist(self, transactions: List[Transaction]) -> None:
        self._storage.save(self._resource, [txn.to_dict() for txn in transactions])

    @staticmethod
    def _enforce_constraints(fields: Mapping[str, Any]):
        description = fields.get("description")
        if not isinstance(description, str) or not description.strip():
            raise StoreFailure("Transaction validation failed: description is required")

        try:
            kind = TransactionKind(fields.get("kind"))
        except ValueError as exc:
            raise StoreFailure("Transaction validation failed: type is not a valid enum value") from exc

        try:
            amount = Decimal(str(fields.get("amount")))
        except (InvalidOperation, TypeError) as exc:
            raise StoreFailure("Transaction validation failed: amount is required") from exc
        if not amount.is_finite() or amount < MIN_STORED_AMOUNT:
            raise StoreFailure(
                f"Transaction validation failed: amount is less than minimum allowed value ({MIN_STORED_AMOUNT})"
            )

        category = fields.get("category")
        if not isinstance(category, str) or not category.strip():
            category = DEFAULT_CATEGORY
        return description.strip(), amount, kind, category
