"""Integration tests for OrderDjangoRepository against the test database."""

from __future__ import annotations

from datetime import datetime, timezone as dt_timezone
from decimal import Decimal
from unittest.mock import patch
from uuid import uuid4

import pytest
from django.db import OperationalError
from freezegun import freeze_time

from modules.core.exceptions import StoreUnavailable
from modules.orders.constants import OrderStatus
from modules.orders.events import OrderCreated, OrderStatusChanged
from modules.orders.exceptions import ConflictingTransition
from modules.orders.models import Order, OrderItem, OrderStatusHistory
from shared.infrastructure.bus import event_bus

pytestmark = pytest.mark.integration


class TestAdd:
    def test_persists_order_lines_and_creation_history(
        self, place_order, keyboard, monitor
    ):
        order = place_order([(keyboard, 2), (monitor, 1)])

        stored = Order.objects.get(id=order.id)
        assert stored.status == OrderStatus.PENDING
        assert stored.version == 1
        assert stored.created_at == stored.updated_at
        lines = list(OrderItem.objects.filter(order=stored))
        assert [(line.item_name, line.quantity) for line in lines] == [
            ("Keyboard", 2),
            ("Monitor", 1),
        ]
        assert stored.total_amount == Decimal("298.80")
        (history,) = OrderStatusHistory.objects.filter(order=stored)
        assert history.old_status is None
        assert history.new_status == OrderStatus.PENDING
        assert history.notes == "Order created"

    def test_publishes_events_after_commit(
        self, place_order, django_capture_on_commit_callbacks
    ):
        with patch.object(event_bus, "publish") as publish:
            with django_capture_on_commit_callbacks(execute=True):
                order = place_order()

        published = [c.args[0] for c in publish.call_args_list]
        assert [type(e) for e in published] == [OrderCreated, OrderStatusChanged]
        assert all(e.aggregate_id == order.id for e in published)

    def test_events_not_published_without_commit(self, place_order):
        with patch.object(event_bus, "publish") as publish:
            place_order()
        publish.assert_not_called()


class TestRead:
    def test_get_by_id_unknown_returns_none(self, order_repo):
        assert order_repo.get_by_id(str(uuid4())) is None

    def test_get_by_id_malformed_returns_none(self, order_repo):
        assert order_repo.get_by_id("not-a-uuid") is None

    def test_scan_by_status_returns_only_matching_orders(self, order_repo, place_order, service):
        first = place_order()
        second = place_order()
        service.cancel_order(str(second.id))

        pending = order_repo.scan_by_status(OrderStatus.PENDING)

        assert [o.id for o in pending] == [first.id]

    def test_list_filters_by_status(self, order_repo, place_order, service):
        keep = place_order()
        cancelled = place_order()
        service.cancel_order(str(cancelled.id))

        assert [o.id for o in order_repo.list({"status": OrderStatus.PENDING})] == [
            keep.id
        ]
        assert len(order_repo.list()) == 2

    def test_store_failure_becomes_store_unavailable(self, order_repo):
        with patch.object(
            Order.objects, "filter", side_effect=OperationalError("gone away")
        ):
            with pytest.raises(StoreUnavailable):
                order_repo.scan_by_status(OrderStatus.PENDING)


class TestPut:
    def test_writes_status_and_bumps_version(self, order_repo, place_order):
        order = order_repo.get_by_id(str(place_order().id))
        order.status = OrderStatus.PROCESSING
        order.add_domain_event(
            OrderStatusChanged(
                aggregate_id=order.id,
                old_status=OrderStatus.PENDING,
                new_status=OrderStatus.PROCESSING,
            )
        )

        order_repo.put(order)

        stored = Order.objects.get(id=order.id)
        assert stored.status == OrderStatus.PROCESSING
        assert stored.version == 2
        assert order.version == 2
        assert order.domain_events == []
        assert list(
            OrderStatusHistory.objects.filter(order=stored).values_list(
                "new_status", flat=True
            )
        ) == [OrderStatus.PENDING, OrderStatus.PROCESSING]

    def test_stale_version_raises_conflict_and_writes_nothing(
        self, order_repo, place_order
    ):
        order_id = str(place_order().id)
        first = order_repo.get_by_id(order_id)
        stale = order_repo.get_by_id(order_id)

        first.status = OrderStatus.PROCESSING
        order_repo.put(first)

        stale.status = OrderStatus.CANCELLED
        stale.add_domain_event(
            OrderStatusChanged(
                aggregate_id=stale.id,
                old_status=OrderStatus.PENDING,
                new_status=OrderStatus.CANCELLED,
            )
        )
        with pytest.raises(ConflictingTransition):
            order_repo.put(stale)

        stored = Order.objects.get(id=order_id)
        assert stored.status == OrderStatus.PROCESSING
        assert stored.version == 2
        assert stale.domain_events == []
        assert not OrderStatusHistory.objects.filter(
            order_id=order_id, new_status=OrderStatus.CANCELLED
        ).exists()


CREATED = datetime(2026, 3, 2, 9, 0, tzinfo=dt_timezone.utc)
SWEPT = datetime(2026, 3, 2, 9, 5, tzinfo=dt_timezone.utc)
SHIPPED = datetime(2026, 3, 3, 14, 0, tzinfo=dt_timezone.utc)


class TestStoredTimestamps:
    """``put`` writes the transition time; ``created_at`` never changes."""

    def test_creation_stores_equal_timestamps(self, place_order):
        with freeze_time(CREATED):
            order = place_order()

        stored = Order.objects.get(id=order.id)
        assert stored.created_at == CREATED
        assert stored.updated_at == CREATED

    def test_cancel_stores_new_updated_at(self, service, place_order):
        with freeze_time(CREATED):
            order = place_order()

        with freeze_time(SWEPT):
            cancelled = service.cancel_order(str(order.id))

        stored = Order.objects.get(id=order.id)
        assert cancelled.updated_at == SWEPT
        assert stored.updated_at == SWEPT
        assert stored.created_at == CREATED

    def test_each_transition_moves_updated_at(self, service, place_order):
        with freeze_time(CREATED):
            order = place_order()

        with freeze_time(SWEPT):
            service.run_sweep()
        assert Order.objects.get(id=order.id).updated_at == SWEPT

        with freeze_time(SHIPPED):
            shipped = service.update_status(str(order.id), OrderStatus.SHIPPED)

        stored = Order.objects.get(id=order.id)
        assert shipped.updated_at == SHIPPED
        assert stored.updated_at == SHIPPED
        assert stored.created_at == CREATED

    def test_lost_write_leaves_updated_at_alone(self, order_repo, place_order):
        with freeze_time(CREATED):
            order = place_order()
        stale = order_repo.get_by_id(str(order.id))
        Order.objects.filter(id=order.id).update(version=2)

        with freeze_time(SWEPT):
            stale.status = OrderStatus.PROCESSING
            stale.updated_at = SWEPT
            with pytest.raises(ConflictingTransition):
                order_repo.put(stale)

        assert Order.objects.get(id=order.id).updated_at == CREATED
