from datetime import datetime, timezone

import pytest

from app.errors import DuplicateTransactionError
from app.settings import Settings

NOW = datetime(2025, 7, 8, 12, 0, 0, tzinfo=timezone.utc)


class FakeStore:
    """In-memory store that records which operations were called."""

    def __init__(self, values=()):
        self.rows = {}
        self.calls = []
        self.range_values = list(values)

    def create(self, txn):
        self.calls.append(("create", txn.id))
        if txn.id in self.rows:
            raise DuplicateTransactionError(txn.id)
        self.rows[txn.id] = txn
        return txn

    def find_all(self):
        self.calls.append(("find_all",))
        return list(self.rows.values())

    def find_by_id(self, txn_id):
        self.calls.append(("find_by_id", txn_id))
        return self.rows.get(txn_id)

    def find_in_range(self, field, lower, upper, projection=()):
        self.calls.append(("find_in_range", field, lower, upper, tuple(projection)))
        return [{"value": v} for v in self.range_values]

    def delete_all(self):
        self.calls.append(("delete_all",))
        self.rows.clear()

    def delete_by_id(self, txn_id):
        self.calls.append(("delete_by_id", txn_id))
        del self.rows[txn_id]


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock(now):
    return lambda: now


@pytest.fixture
def fake_store():
    return FakeStore()


@pytest.fixture
def settings(tmp_path):
    return Settings(data_dir=tmp_path, db_path=tmp_path / "t.sqlite")
