import sqlite3

import pytest

from app.db import init_db


def test_init_db_creates_transactions_table(settings):
    init_db(settings)

    conn = sqlite3.connect(str(settings.db_path))
    conn.row_factory = sqlite3.Row
    columns = [
        row["name"] for row in conn.execute("PRAGMA table_info(transactions)").fetchall()
    ]
    assert columns == ["id", "value", "occurred_at", "created_at"]
    indexes = [row["name"] for row in conn.execute("PRAGMA index_list(transactions)").fetchall()]
    assert "idx_transactions_occurred_at" in indexes
    conn.close()


def test_init_db_is_idempotent(settings):
    init_db(settings)
    with sqlite3.connect(str(settings.db_path)) as conn:
        conn.execute(
            "INSERT INTO transactions(id, value, occurred_at) VALUES ('t-1', 1.5, '2025-07-08T12:00:00.000000Z')"
        )
    init_db(settings)

    conn = sqlite3.connect(str(settings.db_path))
    assert conn.execute("SELECT COUNT(*) FROM transactions").fetchone()[0] == 1
    conn.close()


def test_init_db_rejects_non_positive_values(settings):
    init_db(settings)
    conn = sqlite3.connect(str(settings.db_path))
    with pytest.raises(sqlite3.IntegrityError):
        conn.execute(
            "INSERT INTO transactions(id, value, occurred_at) VALUES ('t-1', 0, '2025-07-08T12:00:00.000000Z')"
        )
    conn.close()
