import json
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from pocketbudget.exceptions import StoreFailure
from pocketbudget.models import TransactionKind
from pocketbudget.store import TransactionStore
from tests.helpers import FakeClock


def _fields(description="Salary", amount="1000.00", kind=TransactionKind.INCOME, category="General"):
    return {
        "description": description,
        "amount": Decimal(amount),
        "kind": kind,
        "category": category,
    }


class TestTransactionStore:
    """Tests for TransactionStore."""

    def test_insert_assigns_id_and_timestamp(self, store):
        transaction = store.insert(_fields())

        assert transaction.id
        assert transaction.created_at == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert transaction.amount == Decimal("1000.00")
        assert transaction.kind is TransactionKind.INCOME

    def test_insert_generates_unique_ids(self, store):
        first = store.insert(_fields())
        second = store.insert(_fields())

        assert first.id != second.id

    def test_records_are_durable_across_instances(self, storage, store):
        created = store.insert(_fields(description="Rent", amount="400", kind=TransactionKind.EXPENSE))

        reopened = TransactionStore(storage)

        assert reopened.find_all() == [created]

    def test_find_all_orders_newest_first(self, store):
        for name in ("first", "second", "third"):
            store.insert(_fields(description=name))

        transactions = store.find_all()

        assert [txn.description for txn in transactions] == ["third", "second", "first"]
        for newer, older in zip(transactions, transactions[1:]):
            assert newer.created_at >= older.created_at

    def test_equal_timestamps_keep_latest_insert_first(self, storage):
        frozen = datetime(2024, 3, 1, tzinfo=timezone.utc)
        store = TransactionStore(storage, clock=lambda: frozen)
        for name in ("a", "b", "c"):
            store.insert(_fields(description=name))

        assert [txn.description for txn in store.find_all()] == ["c", "b", "a"]

    def test_delete_by_id_removes_only_that_record(self, store):
        keep = store.insert(_fields(description="keep"))
        drop = store.insert(_fields(description="drop"))

        removed = store.delete_by_id(drop.id)

        assert removed == drop
        assert store.find_all() == [keep]

    def test_delete_by_id_returns_none_when_missing(self, store):
        store.insert(_fields())

        assert store.delete_by_id("missing") is None
        assert len(store.find_all()) == 1

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"amount": Decimal("0.001")}, "minimum"),
            ({"amount": None}, "amount is required"),
            ({"description": ""}, "description is required"),
            ({"kind": "transfer"}, "enum"),
        ],
    )
    def test_constraints_are_enforced(self, store, overrides, message):
        fields = {**_fields(), **overrides}

        with pytest.raises(StoreFailure, match=message):
            store.insert(fields)
        assert store.find_all() == []

    def test_missing_category_defaults_to_general(self, store):
        transaction = store.insert(_fields(category=None))

        assert transaction.category == "General"

    def test_closed_store_rejects_operations(self, store):
        store.close()

        with pytest.raises(StoreFailure, match="closed"):
            store.find_all()
        with pytest.raises(StoreFailure, match="closed"):
            store.insert(_fields())

    def test_corrupted_file_raises_store_failure(self, storage):
        (storage.base_path / "transactions.json").write_text("{not json", encoding="utf-8")
        store = TransactionStore(storage, clock=FakeClock())

        with pytest.raises(StoreFailure, match="Corrupted"):
            store.find_all()

    def test_malformed_record_raises_store_failure(self, storage):
        (storage.base_path / "transactions.json").write_text(
            json.dumps([{"id": "1", "description": "x"}]), encoding="utf-8"
        )
        store = TransactionStore(storage)

        with pytest.raises(StoreFailure, match="Malformed"):
            store.find_all()
