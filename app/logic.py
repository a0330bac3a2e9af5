from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP

from .errors import FutureTransactionError, MissingFieldsError, NonPositiveValueError
from .models import Statistics, Transaction, TransactionRequest, as_utc

TWO_PLACES = Decimal("0.01")
THREE_PLACES = Decimal("0.001")


def validate_transaction(request: TransactionRequest, now: datetime) -> Transaction:
    """Check presence, sign and time of a request, in that order.

    A value of 0 counts as missing rather than non-positive.
    """
    if not request.id or not request.value or request.occurred_at is None:
        raise MissingFieldsError()
    if request.value <= 0:
        raise NonPositiveValueError()
    if as_utc(request.occurred_at) > as_utc(now):
        raise FutureTransactionError()
    return Transaction(id=request.id, value=request.value, occurred_at=request.occurred_at)


def round_half_up(d: Decimal, places: Decimal) -> Decimal:
    return d.quantize(places, rounding=ROUND_HALF_UP)


def summarize_values(values) -> Statistics:
    amounts = [Decimal(str(v)) for v in values]
    if not amounts:
        return Statistics.empty()
    count = len(amounts)
    total = sum(amounts, Decimal("0"))
    return Statistics(
        count=count,
        sum=round_half_up(total, TWO_PLACES),
        avg=round_half_up(total / count, THREE_PLACES),
        min=round_half_up(min(amounts), TWO_PLACES),
        max=round_half_up(max(amounts), TWO_PLACES),
    )
