"""Mini README: Tests for the FastAPI surface.

Each test builds the app around an explicit in-memory ledger and a mocked
customer lookup, then drives it through ``TestClient``. Assertions focus
on status codes, the error ``kind``/``category`` detail, and the
notifications a browser client would display.
"""

from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient

from bank_tracker.configuration import TrackerSettings
from bank_tracker.customers import CustomerLookup, CustomerRefresher
from bank_tracker.interface import create_application
from bank_tracker.ledger import Ledger
from bank_tracker.persistence import MemoryStore


class FailingStore(MemoryStore):
    def write_blob(self, blob: str) -> None:
        raise OSError("quota exceeded")


def _customer_handler(request: httpx.Request) -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "results": [
                {
                    "name": {"first": "Lea", "last": "Salonga"},
                    "email": "lea@example.test",
                    "picture": {"large": "https://img.example.test/lea.jpg"},
                    "phone": "555-0199",
                    "location": {"city": "Manila", "country": "Philippines"},
                }
            ]
        },
    )


@pytest.fixture()
def settings(tmp_path) -> TrackerSettings:
    return TrackerSettings(data_directory=tmp_path)


def _client(ledger: Ledger, settings: TrackerSettings, handler=_customer_handler) -> TestClient:
    lookup = CustomerLookup("https://directory.example.test/api/", transport=httpx.MockTransport(handler))
    app = create_application(
        ledger=ledger, refresher=CustomerRefresher(ledger, lookup), settings=settings
    )
    return TestClient(app)


def test_add_and_list_transactions(settings) -> None:
    ledger = Ledger(store=MemoryStore())
    with _client(ledger, settings) as client:
        created = client.post("/transactions", data={"kind": "deposit", "amount": "1000"})
        assert created.status_code == 201
        assert created.json()["notifications"] == [
            {"category": "success", "message": "Successfully deposited 1000.00"}
        ]
        client.post("/transactions", data={"kind": "withdrawal", "amount": "300"})

        payload = client.get("/ledger").json()

    assert payload["balance"] == pytest.approx(700.0)
    assert [entry["type"] for entry in payload["transactions"]] == ["withdrawal", "deposit"]
    assert payload["statistics"]["count"] == 2
    assert payload["notifications"] == []


def test_overdraft_is_rejected_with_danger_category(settings) -> None:
    ledger = Ledger()
    ledger.add("deposit", 50)
    with _client(ledger, settings) as client:
        response = client.post("/transactions", data={"kind": "withdrawal", "amount": "80"})

    assert response.status_code == 409
    assert response.json()["detail"]["kind"] == "insufficient_funds"
    assert response.json()["detail"]["category"] == "danger"
    assert len(ledger) == 1


@pytest.mark.parametrize("amount", ["abc", "-1", "0", "nan"])
def test_invalid_amount_is_a_warning(settings, amount: str) -> None:
    ledger = Ledger()
    with _client(ledger, settings) as client:
        response = client.post("/transactions", data={"kind": "deposit", "amount": amount})

    assert response.status_code == 400
    assert response.json()["detail"]["kind"] == "invalid_amount"
    assert response.json()["detail"]["category"] == "warning"
    assert len(ledger) == 0


def test_delete_transaction(settings) -> None:
    ledger = Ledger()
    deposit = ledger.add("deposit", 100)
    ledger.add("withdrawal", 40)
    with _client(ledger, settings) as client:
        response = client.delete(f"/transactions/{deposit.transaction_id}")
        missing = client.delete("/transactions/txn_unknown")

    assert response.status_code == 200
    assert response.json()["balance"] == pytest.approx(-40.0)
    assert response.json()["notifications"][0]["category"] == "info"
    assert missing.status_code == 404
    assert missing.json()["detail"]["kind"] == "not_found"


def test_clear_resets_everything(settings) -> None:
    store = MemoryStore()
    ledger = Ledger(store=store)
    ledger.add("deposit", 10)
    with _client(ledger, settings) as client:
        payload = client.post("/clear").json()

    assert payload["transactions"] == []
    assert payload["balance"] == 0
    assert store.load() is None


def test_statistics_endpoint(settings) -> None:
    ledger = Ledger()
    ledger.add("deposit", 10)
    ledger.add("deposit", 5)
    with _client(ledger, settings) as client:
        stats = client.get("/statistics").json()

    assert stats["deposit_count"] == 2
    assert stats["total_deposits"] == pytest.approx(15.0)


def test_load_customer_success_and_failure(settings) -> None:
    ledger = Ledger()
    with _client(ledger, settings) as client:
        loaded = client.post("/customer")
    assert loaded.status_code == 200
    assert loaded.json()["customer"]["name"] == "Lea Salonga"
    assert loaded.json()["notifications"][0]["message"] == "Welcome, Lea Salonga!"

    with _client(ledger, settings, handler=lambda request: httpx.Response(500)) as client:
        failed = client.post("/customer")
    assert failed.status_code == 502
    assert failed.json()["detail"]["kind"] == "profile_fetch_error"
    assert ledger.customer.name == "Lea Salonga"


def test_failed_save_adds_warning_notification(settings) -> None:
    ledger = Ledger(store=FailingStore())
    with _client(ledger, settings) as client:
        response = client.post("/transactions", data={"kind": "deposit", "amount": "20"})

    assert response.status_code == 201
    categories = [note["category"] for note in response.json()["notifications"]]
    assert categories == ["success", "warning"]
    assert len(ledger) == 1


def test_unreadable_snapshot_is_reported_once(settings) -> None:
    ledger = Ledger.hydrate(MemoryStore(backing={"bankingTransactionData": "garbage"}))
    with _client(ledger, settings) as client:
        first = client.get("/ledger").json()
        second = client.get("/ledger").json()

    assert first["notifications"] == [{"category": "warning", "message": "Failed to load saved data"}]
    assert second["notifications"] == []
    assert first["transactions"] == []
