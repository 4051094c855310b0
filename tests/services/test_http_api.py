"""
Tests for the Flask transport (opsdesk_services/http_api.py).

Uses the Flask test client against a DashboardService wired to the test
engine.  Covers routing, JSON encoding of money and timestamps, and the
400/404 error mapping.
"""

from datetime import datetime

import pytest

from opsdesk_config import OpsDeskSettings
from opsdesk_services.http_api import create_app


@pytest.fixture
def client(dashboard):
    app = create_app(OpsDeskSettings(database_url="sqlite://"), dashboard=dashboard)
    app.config.update(TESTING=True)
    return app.test_client()


class TestHealthcheck:

    def test_ok(self, client, deterministic_clock):
        resp = client.get("/healthcheck")

        assert resp.status_code == 200
        assert resp.get_json() == {
            "status": "ok",
            "timestamp": deterministic_clock.now_utc().isoformat(),
        }


class TestTransactionRoutes:

    def test_create_then_list(self, client):
        resp = client.post(
            "/createTransaction",
            json={"customerName": "Ada", "loanAmount": 1234.567},
        )

        assert resp.status_code == 200
        body = resp.get_json()
        assert body["loanAmount"] == 1234.57
        assert datetime.fromisoformat(body["createdAt"]).tzinfo is not None

        listed = client.get("/getTransactions").get_json()
        assert [row["id"] for row in listed] == [body["id"]]

    def test_update_and_delete(self, client):
        tx = client.post(
            "/createTransaction", json={"customerName": "Ada", "loanAmount": 10}
        ).get_json()

        updated = client.post(
            "/updateTransaction", json={"id": tx["id"], "customerName": "Bea"}
        ).get_json()
        assert updated["customerName"] == "Bea"
        assert updated["loanAmount"] == 10.0

        first = client.post("/deleteTransaction", json={"id": tx["id"]})
        second = client.post("/deleteTransaction", json={"id": tx["id"]})
        assert first.get_json() == {"success": True}
        assert second.status_code == 200
        assert second.get_json() == {"success": False}

    def test_invalid_input_is_400(self, client):
        resp = client.post(
            "/createTransaction", json={"customerName": "Ada", "loanAmount": -5}
        )

        assert resp.status_code == 400
        body = resp.get_json()
        assert body["error"] == "INVALID_INPUT"
        assert body["field"] == "loanAmount"

    def test_missing_body_is_400(self, client):
        resp = client.post("/createTransaction", data="not json")

        assert resp.status_code == 400

    def test_unknown_id_is_404(self, client):
        resp = client.post("/updateTransaction", json={"id": 404, "customerName": "X"})

        assert resp.status_code == 404
        assert resp.get_json()["error"] == "TRANSACTION_NOT_FOUND"

    def test_summary_and_chart(self, client):
        for name, amount in (("A", 100.5), ("B", 50.25), ("A", 10)):
            client.post("/createTransaction", json={"customerName": name, "loanAmount": amount})

        assert client.get("/getTransactionSummary").get_json() == {
            "totalCustomers": 2,
            "totalTransactions": 3,
            "totalLoanAmount": 160.75,
        }
        assert client.get("/getTransactionChartData").get_json() == [
            {"customerName": "A", "loanAmount": 110.5},
            {"customerName": "B", "loanAmount": 50.25},
        ]


class TestInventoryRoutes:

    def test_lifecycle(self, client):
        item = client.post(
            "/createInventoryItem", json={"itemName": "Widget", "quantity": 40}
        ).get_json()

        updated = client.post(
            "/updateInventoryItem", json={"id": item["id"], "quantity": 0}
        ).get_json()
        assert updated["quantity"] == 0

        assert client.get("/getInventorySummary").get_json() == {
            "totalItemTypes": 1,
            "totalStockQuantity": 0,
        }
        assert client.get("/getInventoryChartData").get_json() == [
            {"itemName": "Widget", "quantity": 0},
        ]
        assert len(client.get("/getInventoryItems").get_json()) == 1

        resp = client.post("/deleteInventoryItem", json={"id": item["id"]})
        assert resp.get_json() == {"success": True}

    def test_unknown_item_is_404(self, client):
        resp = client.post("/updateInventoryItem", json={"id": 9, "quantity": 1})

        assert resp.status_code == 404
        assert resp.get_json()["error"] == "INVENTORY_ITEM_NOT_FOUND"

    def test_get_only_routes_reject_post(self, client):
        assert client.post("/getInventoryItems").status_code == 405
