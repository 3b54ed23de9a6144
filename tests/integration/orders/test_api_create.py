"""POST /api/v1/orders/"""

from __future__ import annotations

from uuid import uuid4

import pytest

from modules.orders.models import Order

pytestmark = pytest.mark.integration

URL = "/api/v1/orders/"


class TestCreateOrderApi:
    def test_creates_pending_order(self, api_client, keyboard, monitor, customer):
        payload = {
            "customer_id": str(customer.id),
            "items": [
                {"item_id": str(keyboard.id), "quantity": 2},
                {"item_id": str(monitor.id), "quantity": 1},
            ],
        }

        response = api_client.post(URL, payload, format="json")

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "PENDING"
        assert data["created_at"] == data["updated_at"]
        assert data["customer"] == {
            "id": str(customer.id),
            "name": "Ana Souza",
            "email": "ana@example.com",
        }
        assert [line["item_name"] for line in data["items"]] == ["Keyboard", "Monitor"]
        assert data["items"][0]["subtotal"] == "99.80"
        assert data["total_amount"] == "298.80"
        assert data["history"][0]["new_status"] == "PENDING"

    def test_customer_is_optional(self, api_client, keyboard):
        response = api_client.post(
            URL, {"items": [{"item_id": str(keyboard.id), "quantity": 1}]}, format="json"
        )
        assert response.status_code == 201
        assert response.json()["customer"] is None

    def test_unknown_item_returns_404_and_creates_nothing(self, api_client, keyboard):
        missing = str(uuid4())
        payload = {
            "items": [
                {"item_id": str(keyboard.id), "quantity": 1},
                {"item_id": missing, "quantity": 1},
            ]
        }

        response = api_client.post(URL, payload, format="json")

        assert response.status_code == 404
        assert response.json()["missing_item_ids"] == [missing]
        assert Order.objects.count() == 0

    def test_unknown_customer_returns_404(self, api_client, keyboard):
        missing = str(uuid4())
        payload = {
            "customer_id": missing,
            "items": [{"item_id": str(keyboard.id), "quantity": 1}],
        }

        response = api_client.post(URL, payload, format="json")

        assert response.status_code == 404
        assert response.json()["customer_id"] == missing

    def test_inactive_customer_is_not_found(self, api_client, keyboard, customer):
        customer.is_active = False
        customer.save()
        payload = {
            "customer_id": str(customer.id),
            "items": [{"item_id": str(keyboard.id), "quantity": 1}],
        }

        assert api_client.post(URL, payload, format="json").status_code == 404

    def test_deleted_item_is_not_found(self, api_client, keyboard):
        keyboard.delete()
        payload = {"items": [{"item_id": str(keyboard.id), "quantity": 1}]}

        assert api_client.post(URL, payload, format="json").status_code == 404

    @pytest.mark.parametrize(
        "payload",
        [
            {"items": []},
            {},
            {"items": [{"item_id": "not-a-uuid", "quantity": 1}]},
            {"items": [{"item_id": "0192f1d2-0000-7000-8000-000000000000", "quantity": 0}]},
        ],
    )
    def test_invalid_payload_returns_400(self, api_client, payload):
        response = api_client.post(URL, payload, format="json")
        assert response.status_code == 400
        assert Order.objects.count() == 0
