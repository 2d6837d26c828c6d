"""Integration tests for the Orders API via TestClient."""

from uuid import uuid4

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from order_management.app import add_domain_context
from order_management.api import router
from order_management.order.service import OrderService
from order_management.seed import ALICE_JOHNSON, JOHN_DOE, seed_reference_data

DELIVERED_ORDER = "11111111-1111-4111-8111-111111111111"


@pytest.fixture()
def client():
    seed_reference_data()

    app = FastAPI()
    app.state.order_service = OrderService()
    add_domain_context(app)
    app.include_router(router)
    return TestClient(app)


def _create_order(client, customer_id=ALICE_JOHNSON, quantity=1, unit_price="600.00"):
    return client.post(
        "/api/orders",
        json={
            "customer_id": customer_id,
            "items": [{"product_id": str(uuid4()), "quantity": quantity, "unit_price": unit_price}],
        },
    )


class TestCreateOrderEndpoint:
    def test_created(self, client):
        response = _create_order(client)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["errors"] is None
        assert body["data"]["discounted_amount"] == "480.00"
        assert body["message"].endswith("with 20% discount applied")

    def test_validation_failure(self, client):
        response = client.post("/api/orders", json={"customer_id": JOHN_DOE, "items": []})

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "data": None,
            "message": None,
            "errors": ["Order must contain at least one item"],
        }

    def test_price_too_large_to_store(self, client):
        response = _create_order(client, customer_id=JOHN_DOE, unit_price="98765432109876.43")

        assert response.status_code == 400
        assert response.json()["errors"] == ["items[0]: Unit price must be less than 1000000000000"]

    def test_unknown_customer(self, client):
        response = _create_order(client, customer_id=str(uuid4()))

        assert response.status_code == 404
        assert response.json()["message"] == "Customer not found!"


class TestUpdateStatusEndpoint:
    def test_updated(self, client):
        order_id = _create_order(client).json()["data"]["order_id"]

        response = client.put(f"/api/orders/{order_id}/status", json={"new_status": "Processing"})

        assert response.status_code == 200
        assert response.json()["data"] == {"order_id": order_id, "new_status": "Processing"}

    def test_invalid_transition(self, client):
        response = client.put(f"/api/orders/{DELIVERED_ORDER}/status", json={"new_status": "Pending"})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["errors"] == ["Cannot transition from Delivered to Pending"]

    def test_unknown_order(self, client):
        response = client.put(f"/api/orders/{uuid4()}/status", json={"new_status": "Processing"})

        assert response.status_code == 404
        assert response.json()["message"] == "Order not found!"


class TestQueryEndpoints:
    def test_get_order(self, client):
        response = client.get(f"/api/orders/{DELIVERED_ORDER}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "Delivered"
        assert data["fulfilled_at"] is not None
        assert data["valid_next_statuses"] == []
        assert len(data["items"]) == 2

    def test_get_unknown_order(self, client):
        response = client.get(f"/api/orders/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["message"] == "Order not found"

    def test_list_orders(self, client):
        response = client.get("/api/orders", params={"page": 1, "page_size": 2})

        assert response.status_code == 200
        data = response.json()["data"]
        assert len(data["orders"]) == 2
        assert data["total_count"] == 5
        assert data["total_pages"] == 3

    def test_list_orders_with_status(self, client):
        data = client.get("/api/orders", params={"status": "delivered"}).json()["data"]

        assert data["total_count"] == 1
        assert data["orders"][0]["order_id"] == DELIVERED_ORDER

    def test_list_orders_rejects_oversized_page(self, client):
        response = client.get("/api/orders", params={"page_size": 500})

        assert response.status_code == 400
        assert response.json()["errors"] == ["Page size must be between 1 and 100"]

    def test_analytics(self, client):
        response = client.get("/api/orders/analytics")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["total_orders"] == 5
        assert set(data["orders_by_status"]) == {
            "Pending",
            "Processing",
            "Shipped",
            "Delivered",
            "Cancelled",
            "Returned",
        }
        assert data["average_fulfillment_time_hours"] == "72.00"

    def test_status_transitions(self, client):
        response = client.get("/api/orders/statuses/shipped/transitions")

        assert response.status_code == 200
        assert response.json()["data"] == {
            "status": "Shipped",
            "valid_transitions": ["Delivered", "Returned"],
            "terminal": False,
        }

    def test_unknown_status_transitions(self, client):
        assert client.get("/api/orders/statuses/lost/transitions").status_code == 400
