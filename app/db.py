import logging
import sqlite3
from pathlib import Path

from .settings import Settings

logger = logging.getLogger(__name__)


def connect(db_path: str | Path):
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    return conn


def init_db(settings: Settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    with connect(settings.db_path) as conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS transactions (
              id TEXT PRIMARY KEY,
              value REAL NOT NULL CHECK(value > 0),
              occurred_at TEXT NOT NULL,
              created_at TEXT NOT NULL DEFAULT (datetime('now'))
            );
            """
        )
        conn.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_transactions_occurred_at
            ON transactions(occurred_at)
            """
        )
    logger.debug("database ready at %s", settings.db_path)
