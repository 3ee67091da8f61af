"""Mini README: FastAPI surface for the banking transaction tracker.

Structure:
    * create_application - application factory owning one Ledger and one
      CustomerRefresher for the lifetime of the app.
    * _ledger_payload / _http_error - response helpers.

Every response carries a ``notifications`` list of ``{category, message}``
entries so a browser client can show alerts without knowing the error
types. Confirmation prompts before delete/clear stay on the client.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Dict, List, Optional

from fastapi import FastAPI, Form, HTTPException
from fastapi.responses import JSONResponse

from ..configuration import TrackerSettings, get_settings
from ..customers import CustomerLookup, CustomerRefresher
from ..errors import (
    InsufficientFunds,
    ProfileFetchError,
    TrackerError,
    TransactionNotFound,
)
from ..ledger import Ledger, TransactionKind
from ..logging_utils import get_logger
from ..persistence import JsonFileStore

LOGGER = get_logger(__name__)

Notification = Dict[str, str]


def _http_error(error: TrackerError) -> HTTPException:
    if isinstance(error, TransactionNotFound):
        status_code = 404
    elif isinstance(error, InsufficientFunds):
        status_code = 409
    elif isinstance(error, ProfileFetchError):
        status_code = 502
    else:
        status_code = 400
    return HTTPException(status_code=status_code, detail=error.as_dict())


def _ledger_payload(ledger: Ledger) -> Dict[str, object]:
    return {
        "balance": float(ledger.balance),
        "transactions": [transaction.as_dict() for transaction in ledger.transactions],
        "customer": ledger.customer.as_dict() if ledger.customer else None,
        "statistics": ledger.statistics().as_dict(),
    }


def _storage_notifications(ledger: Ledger) -> List[Notification]:
    if ledger.last_persistence_error is None:
        return []
    return [{"category": "warning", "message": "Failed to save data locally"}]


def create_application(
    ledger: Optional[Ledger] = None,
    refresher: Optional[CustomerRefresher] = None,
    settings: Optional[TrackerSettings] = None,
) -> FastAPI:
    """Create the FastAPI application with routes bound to one ledger."""

    settings = settings or get_settings()
    if ledger is None:
        store = JsonFileStore(settings.data_directory, settings.storage_key)
        ledger = Ledger.hydrate(store, max_amount=settings.max_transaction_amount)
    if refresher is None:
        refresher = CustomerRefresher(
            ledger,
            CustomerLookup(settings.customer_api_url, timeout=settings.customer_api_timeout),
        )
    startup_notifications: List[Notification] = []
    if ledger.last_persistence_error is not None:
        startup_notifications.append({"category": "warning", "message": "Failed to load saved data"})

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        yield
        await refresher.lookup.close()

    app = FastAPI(title="Banking Transaction Tracker", version="0.1.0", lifespan=lifespan)
    app.state.ledger = ledger
    app.state.refresher = refresher

    @app.get("/ledger")
    async def show_ledger() -> JSONResponse:
        """Return balance, transactions (newest first) and the customer."""

        payload = _ledger_payload(ledger)
        payload["notifications"] = list(startup_notifications)
        startup_notifications.clear()
        return JSONResponse(payload)

    @app.get("/statistics")
    async def statistics() -> JSONResponse:
        return JSONResponse(ledger.statistics().as_dict())

    @app.post("/transactions")
    async def add_transaction(
        kind: str = Form(...),
        amount: str = Form(...),
    ) -> JSONResponse:
        """Record a deposit or withdrawal."""

        try:
            transaction = ledger.add(kind, amount)
        except TrackerError as error:
            LOGGER.info("Rejected %s of %s: %s", kind, amount, error)
            raise _http_error(error) from error
        action = "deposited" if transaction.kind is TransactionKind.DEPOSIT else "withdrawn"
        notifications = [
            {"category": "success", "message": f"Successfully {action} {transaction.amount:.2f}"}
        ]
        notifications.extend(_storage_notifications(ledger))
        return JSONResponse(
            {
                "transaction": transaction.as_dict(),
                "balance": float(ledger.balance),
                "notifications": notifications,
            },
            status_code=201,
        )

    @app.delete("/transactions/{transaction_id}")
    async def delete_transaction(transaction_id: str) -> JSONResponse:
        """Remove a transaction; the client is expected to confirm first."""

        try:
            removed = ledger.remove(transaction_id)
        except TrackerError as error:
            raise _http_error(error) from error
        notifications = [{"category": "info", "message": "Transaction deleted successfully"}]
        notifications.extend(_storage_notifications(ledger))
        return JSONResponse(
            {
                "transaction": removed.as_dict(),
                "balance": float(ledger.balance),
                "notifications": notifications,
            }
        )

    @app.post("/clear")
    async def clear_ledger() -> JSONResponse:
        ledger.clear()
        notifications = [{"category": "info", "message": "All data cleared successfully"}]
        notifications.extend(_storage_notifications(ledger))
        payload = _ledger_payload(ledger)
        payload["notifications"] = notifications
        return JSONResponse(payload)

    @app.post("/customer")
    async def load_customer() -> JSONResponse:
        """Fetch a fresh customer profile; only the newest request is applied."""

        outcome = await refresher.refresh()
        if outcome.error is not None and not outcome.stale:
            error = outcome.error
            detail = error.as_dict()
            detail["message"] = "Failed to load customer data. Please try again."
            raise HTTPException(status_code=502, detail=detail) from error
        if outcome.stale:
            notifications = [
                {"category": "info", "message": "A newer customer request superseded this one"}
            ]
        else:
            notifications = [
                {"category": "success", "message": f"Welcome, {outcome.profile.name}!"}
            ]
            notifications.extend(_storage_notifications(ledger))
        return JSONResponse(
            {
                "customer": ledger.customer.as_dict() if ledger.customer else None,
                "applied": outcome.applied,
                "notifications": notifications,
            }
        )

    return app
