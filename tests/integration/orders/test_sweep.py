"""Reconciliation sweep against the test database."""

from __future__ import annotations

from datetime import datetime, timezone as dt_timezone
from unittest.mock import patch

import pytest
from freezegun import freeze_time

from modules.core.exceptions import StoreUnavailable
from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderStatusHistory
from modules.orders.sweeper import SweepResult

pytestmark = pytest.mark.integration

CREATED = datetime(2026, 3, 2, 9, 0, tzinfo=dt_timezone.utc)
SWEPT = datetime(2026, 3, 2, 9, 5, tzinfo=dt_timezone.utc)


class TestSweep:
    def test_advances_pending_and_ignores_others(self, service, place_order):
        with freeze_time(CREATED):
            pending = [place_order() for _ in range(3)]
            already_processing = place_order()
        Order.objects.filter(id=already_processing.id).update(
            status=OrderStatus.PROCESSING
        )

        with freeze_time(SWEPT):
            assert service.run_sweep() == 3

        for order in pending:
            stored = Order.objects.get(id=order.id)
            assert stored.status == OrderStatus.PROCESSING
            assert stored.updated_at == SWEPT
            assert stored.created_at == CREATED
            assert stored.version == 2
        assert OrderStatusHistory.objects.filter(
            new_status=OrderStatus.PROCESSING
        ).count() == 3

        untouched = Order.objects.get(id=already_processing.id)
        assert untouched.status == OrderStatus.PROCESSING
        assert untouched.version == 1
        assert untouched.updated_at == CREATED
        assert not OrderStatusHistory.objects.filter(
            order_id=already_processing.id, new_status=OrderStatus.PROCESSING
        ).exists()

    def test_second_run_is_a_noop(self, service, place_order):
        place_order()
        place_order()

        assert service.run_sweep() == 2
        assert service.run_sweep() == 0

    def test_empty_store(self, service):
        assert service.sweep() == SweepResult()

    def test_cancelled_orders_are_never_swept(self, service, place_order):
        order = place_order()
        service.cancel_order(str(order.id))

        assert service.run_sweep() == 0
        assert Order.objects.get(id=order.id).status == OrderStatus.CANCELLED

    def test_one_failed_write_does_not_stop_the_batch(
        self, service, order_repo, place_order
    ):
        first, second = place_order(), place_order()
        real_put = order_repo.put

        def fail_first(order):
            if order.id == first.id:
                raise StoreUnavailable("connection reset")
            return real_put(order)

        with patch.object(order_repo, "put", side_effect=fail_first):
            result = service.sweep()

        assert result == SweepResult(advanced=1, failed=1)
        assert Order.objects.get(id=first.id).status == OrderStatus.PENDING
        assert Order.objects.get(id=second.id).status == OrderStatus.PROCESSING
