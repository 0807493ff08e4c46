"""HTTP client for the PocketBudget API holding a local transaction snapshot."""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional, Tuple, Union

import requests

from pocketbudget.balance import check_expense_allowed, compute_balance, filter_transactions, totals
from pocketbudget.exceptions import InvalidAmountError, MissingFieldError
from pocketbudget.models import DEFAULT_CATEGORY, Transaction
from pocketbudget.validators import parse_amount, validate_kind

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:5000/api"
DEFAULT_TIMEOUT = 10


class ClientError(Exception):
    """Raised when the API cannot be reached or answers unreadably."""


class ApiError(ClientError):
    """Raised when the API answers with an error status."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(f"{status}: {message}")
        self.status = status
        self.message = message


class LedgerClient:
    """Form-side view of the ledger.

    The local snapshot only changes after a successful request. A failed
    create never adds a record and a failed delete never removes one.
    """

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._base_url = api_url.rstrip("/")
        self._session = session or requests.Session()
        self._timeout = timeout
        self._transactions: List[Transaction] = []

    @property
    def transactions(self) -> List[Transaction]:
        return list(self._transactions)

    @property
    def balance(self) -> Decimal:
        return compute_balance(self._transactions)

    def totals(self) -> Tuple[Decimal, Decimal]:
        return totals(self._transactions)

    def search(self, query: Optional[str]) -> List[Transaction]:
        return filter_transactions(self._transactions, query)

    def refresh(self) -> List[Transaction]:
        """Reload the snapshot from the API, keeping server order."""
        payload = self._request("GET", "/transactions")
        if not isinstance(payload, list):
            raise self._log_failure(ClientError("Expected a list of transactions"), "fetching transactions")
        self._transactions = [self._hydrate(record) for record in payload]
        return self.transactions

    def add(
        self,
        description: str,
        amount: Union[Decimal, int, float, str],
        kind: str = "income",
        category: str = DEFAULT_CATEGORY,
    ) -> Transaction:
        """Submit a new transaction after the local checks pass.

        Raises ``InsufficientBalanceError`` without contacting the API when an
        expense exceeds the balance of the loaded snapshot.
        """
        description = (description or "").strip()
        if not description:
            raise MissingFieldError("Enter valid values")
        try:
            # Same rounding the server applies, so the pre-check sees the stored amount.
            value = parse_amount(amount)
        except InvalidAmountError as exc:
            raise InvalidAmountError("Enter valid values") from exc
        transaction_kind = validate_kind(kind)
        check_expense_allowed(self._transactions, transaction_kind, value)

        payload = self._request(
            "POST",
            "/transactions",
            json={
                "description": description,
                "amount": f"{value}",
                "type": transaction_kind.value,
                "category": category,
            },
        )
        transaction = self._hydrate(payload)
        self._transactions.insert(0, transaction)
        return transaction

    def delete(self, transaction_id: str) -> None:
        self._request("DELETE", f"/transactions/{transaction_id}")
        self._transactions = [txn for txn in self._transactions if txn.id != transaction_id]

    def summary(self) -> Any:
        return self._request("GET", "/summary")

    # Internal helpers -----------------------------------------------------
    def _hydrate(self, record: Any) -> Transaction:
        try:
            return Transaction.from_dict(record)
        except (KeyError, TypeError, ValueError, InvalidOperation) as exc:
            raise self._log_failure(ClientError("Malformed transaction record"), "reading response") from exc

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self._base_url}{path}"
        try:
            response = self._session.request(method, url, timeout=self._timeout, **kwargs)
        except requests.RequestException as exc:
            raise self._log_failure(ClientError(f"Unable to reach {url}"), f"{method} {path}") from exc

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.status_code >= 400:
            message = body.get("message") if isinstance(body, dict) else None
            raise self._log_failure(
                ApiError(response.status_code, message or "Request failed"), f"{method} {path}"
            )
        if body is None:
            raise self._log_failure(ClientError("Response was not valid JSON"), f"{method} {path}")
        return body

    @staticmethod
    def _log_failure(exc: ClientError, action: str) -> ClientError:
        logger.error("Error %s: %s", action, exc)
        return exc
