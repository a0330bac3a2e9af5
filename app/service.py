import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from .errors import LedgerError, TransactionNotFoundError
from .logic import summarize_values, validate_transaction
from .models import Statistics, Transaction, TransactionRequest

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TransactionManager:
    """Validates, stores, fetches and deletes transactions through a store."""

    def __init__(self, store, clock: Callable[[], datetime] = utc_now):
        self.store = store
        self.clock = clock

    def create(self, request: TransactionRequest) -> Transaction:
        try:
            txn = validate_transaction(request, self.clock())
        except LedgerError as exc:
            logger.info("rejected transaction %r: %s", request.id, exc.message)
            raise
        created = self.store.create(txn)
        logger.info("created transaction %s", created.id)
        return created

    def list_all(self) -> list[Transaction]:
        return self.store.find_all()

    def get_by_id(self, txn_id: str) -> Transaction:
        txn = self.store.find_by_id(txn_id)
        if txn is None:
            logger.info("transaction %s not found", txn_id)
            raise TransactionNotFoundError(txn_id)
        return txn

    def delete_all(self) -> None:
        self.store.delete_all()
        logger.info("deleted all transactions")

    def delete_by_id(self, txn_id: str) -> None:
        self.get_by_id(txn_id)
        self.store.delete_by_id(txn_id)
        logger.info("deleted transaction %s", txn_id)


class StatisticsAggregator:
    def __init__(
        self,
        store,
        clock: Callable[[], datetime] = utc_now,
        window_seconds: int = 60,
    ):
        self.store = store
        self.clock = clock
        self.window = timedelta(seconds=window_seconds)

    def compute_recent_statistics(self) -> Statistics:
        now = self.clock()
        rows = self.store.find_in_range(
            "occurred_at", now - self.window, now, projection=("value",)
        )
        stats = summarize_values(row["value"] for row in rows)
        logger.debug("statistics over last %s: %s", self.window, stats)
        return stats
