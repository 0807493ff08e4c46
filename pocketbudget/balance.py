"""Balance and search helpers over a set of transactions."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from .exceptions import InsufficientBalanceError
from .models import Transaction, TransactionKind

BALANCE_WARNING = "Expense exceeds available balance!"


def totals(transactions: Iterable[Transaction]) -> Tuple[Decimal, Decimal]:
    """Return ``(income, expense)`` totals."""
    income = Decimal("0.00")
    expense = Decimal("0.00")
    for transaction in transactions:
        if transaction.kind is TransactionKind.INCOME:
            income += transaction.amount
        else:
            expense += transaction.amount
    return income, expense


def compute_balance(transactions: Iterable[Transaction]) -> Decimal:
    """Sum of income amounts minus sum of expense amounts."""
    return sum((txn.signed_amount for txn in transactions), start=Decimal("0.00"))


def filter_transactions(
    transactions: Iterable[Transaction], query: Optional[str]
) -> List[Transaction]:
    """Case-insensitive substring match on description or category."""
    needle = (query or "").strip().lower()
    if not needle:
        return list(transactions)
    return [
        txn
        for txn in transactions
        if needle in txn.description.lower() or needle in txn.category.lower()
    ]


def check_expense_allowed(
    transactions: Iterable[Transaction], kind: TransactionKind, amount: Decimal
) -> None:
    if kind is not TransactionKind.EXPENSE:
        return
    balance = compute_balance(transactions)
    if amount > balance:
        raise InsufficientBalanceError(BALANCE_WARNING)
