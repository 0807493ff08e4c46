"""Validation helpers for incoming transaction requests."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, List, Mapping, Optional

from .exceptions import InvalidAmountError, InvalidKindError, MissingFieldError, ValidationError
from .models import DEFAULT_CATEGORY, TransactionKind

MIN_AMOUNT = Decimal("0.01")
MAX_AMOUNT = Decimal("999999999999.99")
DESCRIPTION_MAX_LENGTH = 200
CATEGORY_MAX_LENGTH = 50

TRANSACTION_KINDS = {kind.value for kind in TransactionKind}


def _quantize_two_decimals(amount: Decimal) -> Decimal:
    """Round the amount to two decimal places using HALF_UP rounding."""
    return amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def _is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_amount(raw: object, field: str = "amount") -> Decimal:
    """Convert raw input to a positive Decimal with exactly two fraction digits."""
    if isinstance(raw, bool):
        raise InvalidAmountError(f"{field} must be a numeric value")
    try:
        amount = Decimal(str(raw).strip())
    except (InvalidOperation, TypeError) as exc:
        raise InvalidAmountError(f"{field} must be a numeric value") from exc
    if not amount.is_finite():
        raise InvalidAmountError(f"{field} must be a numeric value")

    if amount <= 0:
        raise InvalidAmountError(f"{field} must be greater than zero")
    # Quantizing past the decimal context precision raises InvalidOperation.
    if amount > MAX_AMOUNT:
        raise InvalidAmountError(f"{field} is too large")

    quantized = _quantize_two_decimals(amount)
    if quantized < MIN_AMOUNT:
        raise InvalidAmountError(f"{field} must be at least {MIN_AMOUNT}")
    return quantized


def validate_required_str(value: object, field: str, max_length: int) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    trimmed = value.strip()
    if not trimmed:
        raise MissingFieldError(f"{field} cannot be empty")
    if len(trimmed) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters")
    return trimmed


def validate_category(value: object) -> str:
    if _is_blank(value):
        return DEFAULT_CATEGORY
    return validate_required_str(value, "category", CATEGORY_MAX_LENGTH)


def validate_kind(value: object, field: str = "type") -> TransactionKind:
    if not isinstance(value, str):
        raise InvalidKindError(f"{field} must be one of: {', '.join(sorted(TRANSACTION_KINDS))}")
    canonical = value.strip().lower()
    if canonical not in TRANSACTION_KINDS:
        raise InvalidKindError(f"{field} must be one of: {', '.join(sorted(TRANSACTION_KINDS))}")
    return TransactionKind(canonical)


def missing_fields(payload: Mapping[str, Any]) -> List[str]:
    """Return the required request fields that are absent or blank."""
    missing = []
    if _is_blank(payload.get("description")):
        missing.append("description")
    if _is_blank(payload.get("amount")):
        missing.append("amount")
    if _is_blank(_kind_value(payload)):
        missing.append("type")
    return missing


def validate_transaction_payload(payload: object) -> Dict[str, Any]:
    """Check a create request against the transaction schema.

    Checks run in a fixed order: missing fields, then amount, then type. The
    returned mapping holds normalised ``description``, ``amount``, ``kind``
    and ``category`` values ready for the store.
    """
    if not isinstance(payload, Mapping):
        raise ValidationError("Request body must be a JSON object")

    missing = missing_fields(payload)
    if missing:
        raise MissingFieldError(f"Missing required fields: {', '.join(missing)}")

    amount = parse_amount(payload.get("amount"))
    kind = validate_kind(_kind_value(payload))
    return {
        "description": validate_required_str(
            payload.get("description"), "description", DESCRIPTION_MAX_LENGTH
        ),
        "amount": amount,
        "kind": kind,
        "category": validate_category(payload.get("category")),
    }


def _kind_value(payload: Mapping[str, Any]) -> Optional[object]:
    # "kind" is accepted as an alias of the wire key "type".
    value = payload.get("type")
    if value is None:
        value = payload.get("kind")
    return value
