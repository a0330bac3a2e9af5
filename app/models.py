from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal


def as_utc(moment: datetime) -> datetime:
    # naive timestamps are taken to be UTC
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


@dataclass(frozen=True)
class TransactionRequest:
    id: str | None = None
    value: float | None = None
    occurred_at: datetime | None = None


@dataclass(frozen=True)
class Transaction:
    id: str
    value: float
    occurred_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "value": self.value,
            "dateTime": as_utc(self.occurred_at).isoformat(),
        }


@dataclass(frozen=True)
class Statistics:
    count: int
    sum: Decimal
    avg: Decimal
    min: Decimal
    max: Decimal

    @classmethod
    def empty(cls) -> "Statistics":
        zero = Decimal("0")
        return cls(count=0, sum=zero, avg=zero, min=zero, max=zero)

    def to_dict(self) -> dict:
        return {
            "count": self.count,
            "sum": float(self.sum),
            "avg": float(self.avg),
            "min": float(self.min),
            "max": float(self.max),
        }
