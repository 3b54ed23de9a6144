"""Django ORM implementation of the Order repository.

Status writes are a compare-and-set on ``Order.version``::

    UPDATE orders SET status=..., updated_at=..., version=version + 1
    WHERE id=... AND version=<loaded version>

Zero affected rows means another writer got there first and raises
``ConflictingTransition``.  No row locks are taken.

History rows are derived from the aggregate's status-change events and
written in the same transaction; the events themselves are handed to the
in-process event bus after commit.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import F, QuerySet

from modules.core.repositories.errors import translate_store_errors
from modules.orders.events import OrderStatusChanged
from modules.orders.exceptions import ConflictingTransition
from modules.orders.models import Order, OrderItem, OrderStatusHistory
from modules.orders.repositories.interfaces import IOrderRepository
from shared.domain.events import DomainEvent
from shared.infrastructure.bus import event_bus

if TYPE_CHECKING:
    from modules.orders.lifecycle import OrderDraft

logger = structlog.get_logger(__name__)


def order_queryset() -> QuerySet[Order]:
    """Orders with customer, lines and history eager-loaded (no N+1)."""
    return Order.objects.select_related("customer").prefetch_related(
        "items", "status_history"
    )


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    @translate_store_errors
    def get_by_id(self, id: str) -> Optional[Order]:
        """Returns ``None`` for non-existent or malformed IDs."""
        try:
            return order_queryset().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    @translate_store_errors
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """Supported filter keys include ``status`` and ``customer_id``."""
        queryset = order_queryset()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    @translate_store_errors
    def scan_by_status(self, status: str) -> List[Order]:
        return list(Order.objects.filter(status=status).order_by("created_at", "id"))

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    @translate_store_errors
    def add(self, draft: OrderDraft) -> Order:
        order = draft.order
        events = order.domain_events
        try:
            with transaction.atomic():
                order.save(force_insert=True)
                OrderItem.objects.bulk_create(draft.lines)
                self._record_history(order, events)
                transaction.on_commit(lambda: _publish(events), robust=True)
        finally:
            order.clear_domain_events()

        logger.info(
            "order.persisted",
            order_id=str(order.id),
            line_count=len(draft.lines),
        )
        return order

    @translate_store_errors
    def put(self, order: Order) -> Order:
        events = order.domain_events
        log = logger.bind(order_id=str(order.id), version=order.version)
        try:
            with transaction.atomic():
                updated = Order.objects.filter(
                    id=order.id, version=order.version
                ).update(
                    status=order.status,
                    updated_at=order.updated_at,
                    version=F("version") + 1,
                )
                if not updated:
                    log.info("order.write_conflict", status=order.status)
                    raise ConflictingTransition(
                        f"Order {order.id} was modified concurrently."
                    )
                self._record_history(order, events)
                transaction.on_commit(lambda: _publish(events), robust=True)
        finally:
            order.clear_domain_events()

        order.version += 1
        log.info("order.status_written", status=order.status)
        return order

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _record_history(order: Order, events: Sequence[DomainEvent]) -> None:
        OrderStatusHistory.objects.bulk_create(
            OrderStatusHistory(
                order_id=order.id,
                old_status=event.old_status,
                new_status=event.new_status,
                notes=event.notes,
            )
            for event in events
            if isinstance(event, OrderStatusChanged)
        )


def _publish(events: Sequence[DomainEvent]) -> None:
    for event in events:
        event_bus.publish(event)
