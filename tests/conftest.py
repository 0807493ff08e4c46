"""Shared pytest fixtures for all tests."""

import pytest

from api.app import create_app
from budget_client.client import LedgerClient
from pocketbudget.config import Settings
from pocketbudget.services import LedgerService
from pocketbudget.storage import JSONStorage
from pocketbudget.store import TransactionStore
from tests.helpers import FakeClock, FlaskSession


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def storage(tmp_path):
    """JSON storage rooted in a temporary data directory."""
    return JSONStorage(tmp_path / "data")


@pytest.fixture
def store(storage, clock):
    store = TransactionStore(storage, clock=clock)
    yield store
    store.close()


@pytest.fixture
def service(store):
    return LedgerService(store)


@pytest.fixture
def settings(tmp_path):
    return Settings(data_dir=tmp_path / "data", env="dev")


@pytest.fixture
def app(settings, store):
    app = create_app(settings, store=store)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def http(app):
    """Flask test client for the API."""
    return app.test_client()


@pytest.fixture
def session(http):
    return FlaskSession(http)


@pytest.fixture
def ledger_client(session):
    """LedgerClient wired to the in-process API."""
    return LedgerClient("http://testserver/api", session=session)
