"""Periodic order tasks (Celery beat)."""

import structlog
from celery import shared_task

from modules.catalog.repositories import ItemDjangoRepository
from modules.customers.repositories import CustomerDjangoRepository
from modules.orders.repositories import OrderDjangoRepository
from modules.orders.services import OrderService

logger = structlog.get_logger(__name__)


def build_order_service() -> OrderService:
    return OrderService(
        order_repository=OrderDjangoRepository(),
        item_repository=ItemDjangoRepository(),
        customer_repository=CustomerDjangoRepository(),
    )


@shared_task(name="orders.sweep_pending_orders")
def sweep_pending_orders() -> dict:
    """Advance every PENDING order to PROCESSING.

    A failing candidate scan propagates so the run shows up as failed in
    the worker; per-order failures are counted in the result.
    """
    result = build_order_service().sweep()
    logger.info("order.sweep_task_finished", **result.as_dict())
    return result.as_dict()
