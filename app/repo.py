import sqlite3
from datetime import datetime, timezone

from .db import connect
from .errors import DuplicateTransactionError
from .models import Transaction, as_utc

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"
DUPLICATE_ID = "UNIQUE constraint failed: transactions.id"
COLUMNS = {"id", "value", "occurred_at", "created_at"}
RANGE_FIELDS = {"occurred_at"}


def format_timestamp(moment: datetime) -> str:
    utc = as_utc(moment)
    # strftime does not zero-pad years below 1000 on every platform
    return f"{utc.year:04d}" + utc.strftime("-%m-%dT%H:%M:%S.%fZ")


def parse_timestamp(s: str) -> datetime:
    return datetime.strptime(s, TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)


def _row_to_txn(row) -> Transaction:
    return Transaction(
        id=row["id"],
        value=row["value"],
        occurred_at=parse_timestamp(row["occurred_at"]),
    )


class TransactionRepo:
    """sqlite3-backed transaction store."""

    def __init__(self, db_path):
        self.db_path = db_path

    def create(self, txn: Transaction) -> Transaction:
        with connect(self.db_path) as conn:
            try:
                conn.execute(
                    """
                    INSERT INTO transactions(id, value, occurred_at)
                    VALUES (?, ?, ?)
                    """,
                    (txn.id, txn.value, format_timestamp(txn.occurred_at)),
                )
            except sqlite3.IntegrityError as exc:
                if DUPLICATE_ID not in str(exc):
                    raise
                raise DuplicateTransactionError(txn.id) from exc
        return txn

    def find_all(self) -> list[Transaction]:
        with connect(self.db_path) as conn:
            rows = conn.execute(
                "SELECT id, value, occurred_at FROM transactions"
            ).fetchall()
        return [_row_to_txn(row) for row in rows]

    def find_by_id(self, txn_id: str) -> Transaction | None:
        with connect(self.db_path) as conn:
            row = conn.execute(
                "SELECT id, value, occurred_at FROM transactions WHERE id = ?",
                (txn_id,),
            ).fetchone()
        if row is None:
            return None
        return _row_to_txn(row)

    def find_in_range(
        self,
        field: str,
        lower: datetime,
        upper: datetime,
        projection: tuple[str, ...] = ("id", "value", "occurred_at"),
    ) -> list[dict]:
        """Rows whose `field` lies in [lower, upper], holding only `projection`."""
        if field not in RANGE_FIELDS:
            raise ValueError(f"cannot range over column {field!r}")
        unknown = set(projection) - COLUMNS
        if not projection or unknown:
            raise ValueError(f"invalid projection {sorted(unknown) or projection!r}")
        with connect(self.db_path) as conn:
            rows = conn.execute(
                f"""
                SELECT {", ".join(projection)}
                FROM transactions
                WHERE {field} >= ? AND {field} <= ?
                """,
                (format_timestamp(lower), format_timestamp(upper)),
            ).fetchall()
        return [dict(row) for row in rows]

    def delete_all(self) -> None:
        with connect(self.db_path) as conn:
            conn.execute("DELETE FROM transactions")

    def delete_by_id(self, txn_id: str) -> None:
        with connect(self.db_path) as conn:
            conn.execute("DELETE FROM transactions WHERE id = ?", (txn_id,))
