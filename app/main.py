from datetime import datetime
from typing import Annotated

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .db import init_db
from .errors import LedgerError
from .logging_config import configure_logging
from .models import TransactionRequest
from .repo import TransactionRepo
from .service import StatisticsAggregator, TransactionManager, utc_now
from .settings import Settings, get_settings


class TransactionBody(BaseModel):
    # every field is optional here so absent ones reach the validator
    id: str | None = None
    value: Annotated[float, Field(strict=True, allow_inf_nan=False)] | None = None
    dateTime: datetime | None = None


def _manager(request: Request) -> TransactionManager:
    return request.app.state.manager


def _aggregator(request: Request) -> StatisticsAggregator:
    return request.app.state.aggregator


async def _ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def _bad_request_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "message": "malformed request",
            "error": "Bad Request",
            "statusCode": 400,
            "details": _validation_details(exc),
        },
    )


def _validation_details(exc: RequestValidationError) -> list[dict]:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]


def create_app(settings: Settings | None = None, clock=utc_now) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    init_db(settings)

    store = TransactionRepo(settings.db_path)

    app = FastAPI(title="ledger")
    app.state.settings = settings
    app.state.manager = TransactionManager(store, clock=clock)
    app.state.aggregator = StatisticsAggregator(
        store, clock=clock, window_seconds=settings.stats_window_seconds
    )
    app.add_exception_handler(LedgerError, _ledger_error_handler)
    app.add_exception_handler(RequestValidationError, _bad_request_handler)

    @app.post("/transaction", status_code=201)
    def create_transaction(body: TransactionBody, request: Request):
        txn = _manager(request).create(
            TransactionRequest(id=body.id, value=body.value, occurred_at=body.dateTime)
        )
        return txn.to_dict()

    @app.get("/transaction")
    def list_transactions(request: Request):
        return [txn.to_dict() for txn in _manager(request).list_all()]

    @app.get("/transaction/{txn_id}")
    def get_transaction(txn_id: str, request: Request):
        return _manager(request).get_by_id(txn_id).to_dict()

    @app.delete("/transaction")
    def delete_transactions(request: Request):
        _manager(request).delete_all()
        return Response(status_code=200)

    @app.delete("/transaction/{txn_id}")
    def delete_transaction(txn_id: str, request: Request):
        _manager(request).delete_by_id(txn_id)
        return Response(status_code=200)

    @app.get("/statistics")
    def recent_statistics(request: Request):
        return _aggregator(request).compute_recent_statistics().to_dict()

    return app


app = create_app()
