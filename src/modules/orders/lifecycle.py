"""Order lifecycle engine.

Owns every status change an order can go through:

    (new) -> PENDING -> PROCESSING -> SHIPPED -> DELIVERED
                 \\
                  -> CANCELLED

The engine works on in-memory aggregates only.  It resolves references
through the catalog and customer lookups, mutates the aggregate and records
domain events on it; persisting the result (and detecting concurrent
writers) is the order repository's job.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Tuple
from uuid import UUID

import structlog
from django.utils import timezone

from modules.orders.constants import ORDER_CREATED_NOTE, OrderStatus
from modules.orders.events import OrderCancelled, OrderCreated, OrderStatusChanged
from modules.orders.exceptions import InvalidTransition, ReferenceNotFound
from modules.orders.models import Order, OrderItem

if TYPE_CHECKING:
    from modules.catalog.models import Item
    from modules.catalog.repositories.interfaces import IItemRepository
    from modules.customers.models import Customer
    from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


@dataclass
class OrderDraft:
    """A fully resolved, not yet persisted order with its lines."""

    order: Order
    lines: List[OrderItem] = field(default_factory=list)
    customer: Optional[Customer] = None

    @property
    def total_amount(self) -> Decimal:
        return sum((line.subtotal for line in self.lines), Decimal("0.00"))


class OrderLifecycle:
    """State machine for the Order aggregate."""

    def __init__(
        self,
        item_repository: IItemRepository,
        customer_repository: ICustomerRepository,
    ) -> None:
        self._items = item_repository
        self._customers = customer_repository

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def create(
        self,
        customer_id: Optional[UUID],
        lines: Iterable[Tuple[UUID, int]],
    ) -> OrderDraft:
        """Resolve every reference and build a new PENDING order.

        ``lines`` is an ordered sequence of ``(item_id, quantity)`` pairs.
        Nothing is built until all references resolve; unresolved ones are
        reported together.

        Raises:
            ValueError: no lines, or a quantity below 1.
            ReferenceNotFound: the customer or any item does not resolve.
        """
        lines = list(lines)
        if not lines:
            raise ValueError("An order needs at least one line.")
        if any(quantity < 1 for _, quantity in lines):
            raise ValueError("Quantity must be at least 1.")

        customer = None
        missing_customer = None
        if customer_id is not None:
            customer = self._customers.resolve(customer_id)
            if customer is None:
                missing_customer = customer_id

        resolved: Dict[UUID, Optional[Item]] = {}
        for item_id, _ in lines:
            if item_id not in resolved:
                resolved[item_id] = self._items.resolve(item_id)
        missing_items = [item_id for item_id, item in resolved.items() if item is None]

        if missing_items or missing_customer is not None:
            logger.warning(
                "order.reference_not_found",
                customer_id=str(missing_customer) if missing_customer else None,
                missing_item_ids=[str(i) for i in missing_items],
            )
            raise ReferenceNotFound(missing_items, missing_customer)

        now = timezone.now()
        order = Order(
            customer=customer,
            status=OrderStatus.PENDING,
            created_at=now,
            updated_at=now,
        )
        order_lines = []
        for position, (item_id, quantity) in enumerate(lines):
            item = resolved[item_id]
            order_lines.append(
                OrderItem(
                    order=order,
                    item=item,
                    item_name=item.name,
                    unit_price=item.price,
                    quantity=quantity,
                    position=position,
                )
            )
        order.add_domain_event(OrderCreated(aggregate_id=order.id))
        order.add_domain_event(
            OrderStatusChanged(
                aggregate_id=order.id,
                old_status=None,
                new_status=OrderStatus.PENDING,
                notes=ORDER_CREATED_NOTE,
            )
        )
        return OrderDraft(order=order, lines=order_lines, customer=customer)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def cancel(self, order: Order, notes: str = "") -> Order:
        """PENDING -> CANCELLED.

        Raises:
            InvalidTransition: the order is not PENDING (including an order
                that is already cancelled).
        """
        if order.status != OrderStatus.PENDING:
            raise InvalidTransition(order.status, OrderStatus.CANCELLED)
        return self._apply(order, OrderStatus.CANCELLED, notes, OrderCancelled)

    def advance_pending_to_processing(self, order: Order) -> bool:
        """PENDING -> PROCESSING; ``False`` (order untouched) if not PENDING."""
        if order.status != OrderStatus.PENDING:
            return False
        self._apply(order, OrderStatus.PROCESSING, "", OrderStatusChanged)
        return True

    def transition(self, order: Order, new_status: str, notes: str = "") -> Order:
        """Move *order* along any edge of the transition table.

        Raises:
            InvalidTransition: *new_status* is not reachable from the
                current status.
        """
        if not order.can_transition_to(new_status):
            raise InvalidTransition(order.status, new_status)
        event_class = (
            OrderCancelled if new_status == OrderStatus.CANCELLED else OrderStatusChanged
        )
        return self._apply(order, new_status, notes, event_class)

    def _apply(
        self,
        order: Order,
        new_status: str,
        notes: str,
        event_class: type[OrderStatusChanged],
    ) -> Order:
        old_status = order.status
        order.status = new_status
        order.updated_at = timezone.now()
        order.add_domain_event(
            event_class(
                aggregate_id=order.id,
                old_status=old_status,
                new_status=new_status,
                notes=notes,
            )
        )
        return order
