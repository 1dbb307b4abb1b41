"""
Tests for the FastAPI endpoints, run against the seeded in-memory store.
"""

from decimal import Decimal, ROUND_HALF_UP

import pytest
from fastapi.testclient import TestClient

from sales_report.main import app


@pytest.fixture(scope="module")
def client():
    # entering the context runs the lifespan, which seeds the store
    with TestClient(app) as c:
        yield c


def small_payload():
    return {
        "sellers": [
            {"id": "S-001", "first_name": "Anna", "last_name": "Lee"},
            {"id": "S-002", "first_name": "Bo", "last_name": "Chan"},
        ],
        "products": [{"sku": "SKU_001", "purchase_price": 10}],
        "purchase_records": [
            {"receipt_id": "R-1", "seller_id": "S-001",
             "items": [{"sku": "SKU_001", "quantity": 2, "sale_price": 20}]},
            {"receipt_id": "R-2", "seller_id": "S-002",
             "items": [{"sku": "SKU_001", "quantity": 1, "sale_price": 15}]},
            {"receipt_id": "R-3", "seller_id": "S-404",
             "items": [{"sku": "SKU_001", "quantity": 1, "sale_price": 15}]},
        ],
    }


class TestSellers:
    def test_list_sellers(self, client):
        resp = client.get("/api/v1/sellers")
        assert resp.status_code == 200
        assert len(resp.json()["sellers"]) == 5

    def test_unknown_seller_404(self, client):
        resp = client.get("/api/v1/sellers/nobody")
        assert resp.status_code == 404


class TestStoredReport:
    def test_report_sorted_and_bounded(self, client):
        resp = client.get("/api/v1/report")
        assert resp.status_code == 200
        body = resp.json()

        profits = [Decimal(e["profit"]) for e in body["entries"]]
        assert profits == sorted(profits, reverse=True)
        for entry in body["entries"]:
            assert len(entry["top_products"]) <= 10
        assert Decimal(body["entries"][-1]["bonus"]) == 0

    def test_report_lists_skips(self, client):
        body = client.get("/api/v1/report").json()
        assert body["summary"]["records_skipped"] == 2
        assert body["summary"]["items_skipped"] == 2
        assert len(body["skipped"]["records"]) == 2

    def test_amount_mode(self, client):
        body = client.get("/api/v1/report", params={"bonus_mode": "amount"}).json()
        top = body["entries"][0]
        expected = (Decimal(top["profit"]) * Decimal("0.15")).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        assert Decimal(top["bonus"]) == expected

    def test_reseed_is_deterministic(self, client):
        before = client.get("/api/v1/report").json()
        resp = client.post("/api/v1/admin/seed")
        assert resp.status_code == 200
        assert resp.json()["sellers"] == 5
        assert client.get("/api/v1/report").json() == before


class TestPostedReport:
    def test_posted_report(self, client):
        resp = client.post("/api/v1/report", json=small_payload())
        assert resp.status_code == 200
        entries = resp.json()["entries"]

        assert [e["seller_id"] for e in entries] == ["S-001", "S-002"]
        assert Decimal(entries[0]["revenue"]) == Decimal("40")
        assert Decimal(entries[0]["profit"]) == Decimal("20")
        assert Decimal(entries[0]["bonus"]) == Decimal("0.15")
        assert Decimal(entries[1]["bonus"]) == 0
        assert resp.json()["skipped"]["records"] == [
            "receipt R-3 references unknown seller 'S-404'"
        ]

    def test_empty_sellers_422(self, client):
        payload = small_payload()
        payload["sellers"] = []
        resp = client.post("/api/v1/report", json=payload)
        assert resp.status_code == 422
        assert "sellers" in resp.json()["detail"]
