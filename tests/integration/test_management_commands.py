"""Management commands: seed_data and sweep_pending_orders."""

from io import StringIO

import pytest
from django.core.management import call_command

from modules.catalog.models import Item
from modules.customers.models import Customer
from modules.orders.constants import OrderStatus
from modules.orders.models import Order

pytestmark = pytest.mark.integration


def _run(*args, **kwargs) -> str:
    out = StringIO()
    call_command(*args, stdout=out, **kwargs)
    return out.getvalue()


class TestSeedData:
    def test_seeds_catalog_customers_and_orders(self):
        output = _run("seed_data", orders=5)

        assert "Seed completed" in output
        assert Item.objects.count() == 12
        assert Customer.objects.count() == 5
        assert Order.objects.count() == 5
        assert set(Order.objects.values_list("status", flat=True)) <= {
            OrderStatus.PENDING,
            OrderStatus.CANCELLED,
        }

    def test_is_idempotent(self):
        _run("seed_data", orders=3)
        output = _run("seed_data", orders=3)

        assert "already seeded" in output
        assert Item.objects.count() == 12
        assert Order.objects.count() == 3


class TestSweepCommand:
    def test_reports_counts(self):
        _run("seed_data", orders=4)
        pending = Order.objects.filter(status=OrderStatus.PENDING).count()

        output = _run("sweep_pending_orders")

        assert f"Sweep finished: {pending} advanced, 0 skipped, 0 failed." in output
        assert not Order.objects.filter(status=OrderStatus.PENDING).exists()
