"""HTTP surface of the PocketBudget ledger."""

from .app import create_app

__all__ = ["create_app"]
