"""Catalog item endpoints, including batch create/delete."""

from decimal import Decimal
from uuid import uuid4

import pytest

from modules.catalog.models import Item

pytestmark = pytest.mark.integration

URL = "/api/v1/items/"


class TestItemCrud:
    def test_create(self, api_client):
        response = api_client.post(
            URL, {"name": "  Webcam ", "price": "159.90"}, format="json"
        )

        assert response.status_code == 201
        assert response.json()["name"] == "Webcam"
        assert response.json()["price"] == "159.90"

    @pytest.mark.parametrize(
        "payload",
        [{"name": "", "price": "10.00"}, {"name": "Cable", "price": "0"}, {"name": "Cable"}],
    )
    def test_create_rejects_invalid_payload(self, api_client, payload):
        assert api_client.post(URL, payload, format="json").status_code == 400

    def test_retrieve(self, api_client, keyboard):
        response = api_client.get(f"{URL}{keyboard.id}/")
        assert response.status_code == 200
        assert response.json()["price"] == "49.90"

    def test_retrieve_unknown_returns_404(self, api_client):
        assert api_client.get(f"{URL}{uuid4()}/").status_code == 404

    def test_patch_reprices_item(self, api_client, keyboard):
        response = api_client.patch(
            f"{URL}{keyboard.id}/", {"price": "59.90"}, format="json"
        )

        assert response.status_code == 200
        keyboard.refresh_from_db()
        assert keyboard.price == Decimal("59.90")
        assert keyboard.name == "Keyboard"

    def test_delete_is_soft(self, api_client, keyboard):
        response = api_client.delete(f"{URL}{keyboard.id}/")

        assert response.status_code == 204
        assert Item.objects.filter(id=keyboard.id).exists()
        assert api_client.get(f"{URL}{keyboard.id}/").status_code == 404

    def test_delete_unknown_returns_404(self, api_client):
        assert api_client.delete(f"{URL}{uuid4()}/").status_code == 404

    def test_list_hides_deleted_items(self, api_client, keyboard, monitor):
        monitor.delete()

        response = api_client.get(URL)

        assert [i["name"] for i in response.json()["results"]] == ["Keyboard"]


class TestItemBatch:
    def test_batch_create_from_bare_list(self, api_client):
        payload = [
            {"name": "Cable", "price": "9.90"},
            {"name": "Adapter", "price": "19.90"},
        ]

        response = api_client.post(f"{URL}batch/", payload, format="json")

        assert response.status_code == 201
        assert len(response.json()) == 2
        assert Item.objects.alive().count() == 2

    def test_batch_create_is_all_or_nothing(self, api_client):
        payload = {
            "items": [
                {"name": "Cable", "price": "9.90"},
                {"name": "Broken", "price": "-1"},
            ]
        }

        response = api_client.post(f"{URL}batch/", payload, format="json")

        assert response.status_code == 400
        assert Item.objects.count() == 0

    def test_batch_create_rejects_empty_list(self, api_client):
        assert api_client.post(f"{URL}batch/", [], format="json").status_code == 400

    def test_batch_delete(self, api_client, keyboard, monitor):
        response = api_client.delete(
            f"{URL}batch/", {"ids": [str(keyboard.id), str(uuid4())]}, format="json"
        )

        assert response.status_code == 204
        assert list(Item.objects.alive()) == [monitor]

    def test_batch_delete_from_bare_list(self, api_client, keyboard, monitor):
        response = api_client.delete(
            f"{URL}batch/", [str(keyboard.id), str(monitor.id)], format="json"
        )

        assert response.status_code == 204
        assert Item.objects.alive().count() == 0

    def test_batch_delete_requires_ids(self, api_client):
        assert api_client.delete(f"{URL}batch/", {}, format="json").status_code == 400
