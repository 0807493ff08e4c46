"""Flask REST API exposing the PocketBudget ledger service."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, List, Optional

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from pocketbudget.config import Settings
from pocketbudget.exceptions import NotFoundError, StoreFailure, ValidationError
from pocketbudget.logging_utils import configure_logging
from pocketbudget.services import LedgerService
from pocketbudget.storage import JSONStorage
from pocketbudget.store import TransactionStore

STORE_EXTENSION = "pocketbudget.store"


def _configure_cors(app: Flask, settings: Settings) -> None:
    if settings.is_development:
        CORS(app, resources={r"/*": {"origins": "*"}}, supports_credentials=True)
    elif settings.allowed_origins:
        CORS(app, resources={r"/*": {"origins": settings.allowed_origins}}, supports_credentials=True)
    else:
        CORS(app)


def create_app(
    settings: Optional[Settings] = None, store: Optional[TransactionStore] = None
) -> Flask:
    app = Flask(__name__)
    settings = settings or Settings.from_env()
    _configure_cors(app, settings)

    if store is None:
        store = TransactionStore(JSONStorage(settings.data_dir))
    app.extensions[STORE_EXTENSION] = store
    ledger = LedgerService(store, enforce_balance=settings.enforce_balance)

    def _success(payload: Any, status: int = 200):
        return jsonify(payload), status

    def _handle_error(exc: Exception, status: int):
        app.logger.error("%s (%d): %s", type(exc).__name__, status, exc)
        return jsonify({"message": str(exc)}), status

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return _handle_error(exc, 400)

    @app.errorhandler(NotFoundError)
    def handle_not_found(exc: NotFoundError):
        return _handle_error(exc, 404)

    @app.errorhandler(StoreFailure)
    def handle_store_failure(exc: StoreFailure):
        return _handle_error(exc, 500)

    @app.errorhandler(HTTPException)
    def handle_http_exception(exc: HTTPException):
        return jsonify({"message": exc.description}), exc.code

    def _json_body() -> Any:
        if not request.is_json:
            raise ValidationError("Request content must be application/json")
        data = request.get_json(silent=True)
        if data is None:
            raise ValidationError("Malformed JSON body")
        return data

    @app.get("/")
    def index():
        return "PocketBudget API is running", 200, {"Content-Type": "text/plain; charset=utf-8"}

    @app.get("/api/transactions")
    def list_transactions():
        return _success([transaction.to_dict() for transaction in ledger.list()])

    @app.post("/api/transactions")
    def create_transaction():
        transaction = ledger.create(_json_body())
        return _success(transaction.to_dict(), 201)

    @app.delete("/api/transactions/<transaction_id>")
    def delete_transaction(transaction_id: str):
        ledger.delete(transaction_id)
        return _success({"message": "Transaction deleted successfully"})

    @app.get("/api/summary")
    def summary():
        figures = ledger.summary()
        return _success({
            "income": f"{figures['income']:.2f}",
            "expense": f"{figures['expense']:.2f}",
            "balance": f"{figures['balance']:.2f}",
            "count": figures["count"],
        })

    return app


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="PocketBudget API server")
    parser.add_argument("--host", help="Interface to bind (default: POCKETBUDGET_HOST or 127.0.0.1)")
    parser.add_argument("--port", type=int, help="Port to listen on (default: PORT or 5000)")
    parser.add_argument("--data-dir", type=Path, help="Directory to store JSON data (default: ./data)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.from_env()
    if args.host:
        settings.host = args.host
    if args.port:
        settings.port = args.port
    if args.data_dir:
        settings.data_dir = args.data_dir
    configure_logging(settings.log_level)

    store = TransactionStore(JSONStorage(settings.data_dir))
    app = create_app(settings, store=store)
    app.logger.info("Server running on port %d", settings.port)
    try:
        app.run(host=settings.host, port=settings.port)
    finally:
        store.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
