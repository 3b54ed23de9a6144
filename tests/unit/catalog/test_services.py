"""Unit tests for ItemService and catalog DTOs."""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from modules.catalog.dtos import CreateItemBatchDTO, CreateItemDTO, UpdateItemDTO
from modules.catalog.exceptions import ItemNotFound
from modules.catalog.models import Item
from modules.catalog.services import ItemService

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo():
    repo = MagicMock()
    repo.save.side_effect = lambda item: item
    repo.save_many.side_effect = lambda items: list(items)
    return repo


@pytest.fixture()
def service(repo):
    return ItemService(repository=repo)


class TestItemDTOs:
    def test_name_is_stripped(self):
        assert CreateItemDTO(name="  Lamp ", price="3.50").name == "Lamp"

    @pytest.mark.parametrize("price", ["0", "-1.00"])
    def test_price_must_be_positive(self, price):
        with pytest.raises(ValidationError):
            CreateItemDTO(name="Lamp", price=price)

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            CreateItemDTO(name="   ", price="1.00")

    def test_batch_must_not_be_empty(self):
        with pytest.raises(ValidationError):
            CreateItemBatchDTO(items=[])

    def test_update_price_must_be_positive(self):
        with pytest.raises(ValidationError):
            UpdateItemDTO(price="0")


class TestItemService:
    def test_create_item(self, service, repo):
        item = service.create_item(CreateItemDTO(name="Lamp", price="3.50"))

        assert isinstance(item, Item)
        assert item.price == Decimal("3.50")
        repo.save.assert_called_once()

    def test_create_items_saves_whole_batch(self, service, repo):
        dto = CreateItemBatchDTO(
            items=[
                CreateItemDTO(name="A", price="1.00"),
                CreateItemDTO(name="B", price="2.00"),
            ]
        )
        items = service.create_items(dto)
        assert [i.name for i in items] == ["A", "B"]

    def test_update_applies_only_supplied_fields(self, service, repo):
        existing = Item(name="Lamp", price=Decimal("3.50"), description="desk")
        repo.get_by_id.return_value = existing

        service.update_item(str(existing.id), UpdateItemDTO(price="4.00"))

        assert existing.price == Decimal("4.00")
        assert existing.name == "Lamp"
        assert existing.description == "desk"

    def test_get_missing_item_raises(self, service, repo):
        repo.get_by_id.return_value = None
        with pytest.raises(ItemNotFound):
            service.get_item("missing")

    def test_delete_missing_item_raises(self, service, repo):
        repo.delete.return_value = False
        with pytest.raises(ItemNotFound):
            service.delete_item("missing")

    def test_delete_items_returns_count(self, service, repo):
        repo.delete_many.return_value = 2
        assert service.delete_items(["a", "b"]) == 2
