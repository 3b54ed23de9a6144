"""Unit tests for the soft-delete base model (exercised through catalog items)."""

from __future__ import annotations

from decimal import Decimal

import pytest
from django.utils import timezone
from freezegun import freeze_time

from modules.catalog.models import Item

pytestmark = pytest.mark.unit


@pytest.fixture()
def item():
    return Item.objects.create(name="Soft Item", price=Decimal("1.00"))


class TestBaseModel:
    def test_primary_key_is_uuid7(self, item):
        assert item.id.version == 7

    def test_update_fields_always_touch_updated_at(self, item):
        before = item.updated_at
        item.name = "Renamed"
        item.save(update_fields=["name"])
        item.refresh_from_db()
        assert item.name == "Renamed"
        assert item.updated_at >= before


class TestSoftDelete:
    def test_delete_sets_deleted_at(self, item):
        item.delete()
        item.refresh_from_db()
        assert item.is_deleted

    def test_deleted_rows_leave_alive_queryset(self, item):
        item.delete()
        assert not Item.objects.alive().filter(id=item.id).exists()
        assert Item.objects.filter(id=item.id, deleted_at__isnull=False).exists()
        assert Item.objects.filter(id=item.id).exists()

    def test_delete_twice_is_noop(self, item):
        item.delete()
        assert item.delete() == (0, {})

    def test_bulk_soft_delete(self):
        Item.objects.create(name="A", price=Decimal("1.00"))
        Item.objects.create(name="B", price=Decimal("2.00"))

        count, _ = Item.objects.all().delete()

        assert count == 2
        assert Item.objects.alive().count() == 0
        assert Item.objects.count() == 2

    @freeze_time("2026-06-15 12:00:00")
    def test_delete_records_exact_timestamp(self, item):
        item.delete()
        item.refresh_from_db()
        assert item.deleted_at == timezone.now()
        assert item.updated_at == timezone.now()
