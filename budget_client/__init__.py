"""HTTP client and console front end for the PocketBudget API."""

from .client import ApiError, ClientError, LedgerClient

__all__ = ["ApiError", "ClientError", "LedgerClient"]
