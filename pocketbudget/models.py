"""Data models for the PocketBudget ledger."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Dict

__all__ = [
    "DEFAULT_CATEGORY",
    "Transaction",
    "TransactionKind",
    "isoformat_utc",
    "parse_datetime",
]

DEFAULT_CATEGORY = "General"


def isoformat_utc(dt: datetime, timespec: str = "milliseconds") -> str:
    """Return an ISO 8601 string with trailing Z for UTC-aware datetimes."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)
    iso = dt.isoformat(timespec=timespec)
    # datetime.isoformat renders +00:00 for UTC; replace with the shorter Z form.
    return iso.replace("+00:00", "Z")


def parse_datetime(value: str) -> datetime:
    """Parse ISO 8601 datetime strings with optional trailing Z into UTC-aware datetime."""
    value = value.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


class TransactionKind(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


@dataclass(frozen=True)
class Transaction:
    id: str
    description: str
    amount: Decimal
    kind: TransactionKind
    category: str
    created_at: datetime

    @property
    def signed_amount(self) -> Decimal:
        """Amount as it contributes to the balance."""
        if self.kind is TransactionKind.EXPENSE:
            return -self.amount
        return self.amount

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the transaction to the JSON wire record."""
        return {
            "id": self.id,
            "description": self.description,
            "amount": f"{self.amount:.2f}",
            "type": self.kind.value,
            "category": self.category,
            "createdAt": isoformat_utc(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Transaction":
        """Hydrate a Transaction from a wire record."""
        return cls(
            id=str(data["id"]),
            description=data["description"],
            amount=Decimal(str(data["amount"])),
            kind=TransactionKind(data["type"]),
            category=data.get("category") or DEFAULT_CATEGORY,
            created_at=parse_datetime(data["createdAt"]),
        )
