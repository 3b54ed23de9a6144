from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from modules.catalog.models import Item
from modules.customers.models import Customer


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def keyboard():
    return Item.objects.create(name="Keyboard", price=Decimal("49.90"))


@pytest.fixture()
def monitor():
    return Item.objects.create(name="Monitor", price=Decimal("199.00"))


@pytest.fixture()
def customer():
    return Customer.objects.create(name="Ana Souza", email="ana@example.com")
