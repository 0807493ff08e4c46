"""Console interface for the PocketBudget API."""

from __future__ import annotations

import argparse
import os
import sys
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from pocketbudget.exceptions import InsufficientBalanceError, ValidationError
from pocketbudget.logging_utils import configure_logging
from pocketbudget.models import DEFAULT_CATEGORY, Transaction

from .client import DEFAULT_API_URL, ApiError, ClientError, LedgerClient


def _parse_amount(value: str) -> str:
    try:
        amount = Decimal(value)
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError("Amount must be a numeric value") from exc
    if amount <= 0:
        raise argparse.ArgumentTypeError("Amount must be greater than zero")
    return value


def _format_transaction(transaction: Transaction) -> str:
    data = transaction.to_dict()
    return (
        f"[{data['id']}] {data['createdAt']} {data['description']}\n"
        f"  ${data['amount']} | {data['type']} | {data['category']}\n"
    )


def handle_list(args: argparse.Namespace, client: LedgerClient) -> None:
    client.refresh()
    print(f"Balance: ${client.balance:.2f}")
    transactions = client.search(args.search)
    if not transactions:
        print("No transactions found.")
        return
    for transaction in transactions:
        print(_format_transaction(transaction))


def handle_add(args: argparse.Namespace, client: LedgerClient) -> None:
    client.refresh()
    transaction = client.add(args.description, args.amount, args.type, args.category)
    print("Transaction added:\n" + _format_transaction(transaction))
    print(f"Balance: ${client.balance:.2f}")


def handle_delete(args: argparse.Namespace, client: LedgerClient) -> None:
    client.delete(args.id)
    print(f"Transaction {args.id} deleted.")


def handle_balance(args: argparse.Namespace, client: LedgerClient) -> None:
    client.refresh()
    income, expense = client.totals()
    print(f"Income: ${income:.2f}")
    print(f"Expense: ${expense:.2f}")
    print(f"Balance: ${client.balance:.2f}")


HANDLERS = {
    "list": handle_list,
    "add": handle_add,
    "delete": handle_delete,
    "balance": handle_balance,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="PocketBudget CLI")
    parser.add_argument(
        "--api-url",
        default=os.getenv("POCKETBUDGET_API_URL", DEFAULT_API_URL),
        help=f"Base URL of the PocketBudget API (default: {DEFAULT_API_URL})",
    )
    parser.add_argument("--verbose", action="store_true", help="Log requests and errors")

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List transactions")
    list_parser.add_argument("--search", help="Filter by description or category")

    add_parser = subparsers.add_parser("add", help="Add a new transaction")
    add_parser.add_argument("description")
    add_parser.add_argument("amount", type=_parse_amount)
    add_parser.add_argument("--type", choices=("income", "expense"), default="income")
    add_parser.add_argument("--category", default=DEFAULT_CATEGORY)

    delete_parser = subparsers.add_parser("delete", help="Delete a transaction")
    delete_parser.add_argument("id")

    subparsers.add_parser("balance", help="Show income, expense and balance")

    return parser


def main(argv: Optional[List[str]] = None, client: Optional[LedgerClient] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        configure_logging("DEBUG")
    client = client or LedgerClient(args.api_url)

    try:
        HANDLERS[args.command](args, client)
    except InsufficientBalanceError as exc:
        print(f"Warning: {exc}", file=sys.stderr)
        return 1
    except ValidationError as exc:
        print(f"Validation error: {exc}", file=sys.stderr)
        return 1
    except ApiError as exc:
        print(f"API error ({exc.status}): {exc.message}", file=sys.stderr)
        return 1
    except ClientError as exc:
        print(f"Connection error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
