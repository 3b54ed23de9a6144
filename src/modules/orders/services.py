"""Order service layer (Use Cases).

Orchestrates order creation, cancellation, manual status updates and the
reconciliation sweep.  Business rules live in ``OrderLifecycle``; this
layer loads aggregates, invokes the engine and writes the result through
the injected ``IOrderRepository``.

Cancellation races the sweeper without locks: the repository rejects a
write whose version is stale, and the cancel is retried on a fresh read.
If the fresh read is no longer PENDING the engine raises
``InvalidTransition``; if every attempt loses the race,
``ConflictingTransition`` propagates.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

import structlog
from django.conf import settings

from modules.orders.constants import MANUAL_TARGETS
from modules.orders.exceptions import (
    ConflictingTransition,
    InvalidTransition,
    OrderNotFound,
)
from modules.orders.lifecycle import OrderLifecycle
from modules.orders.sweeper import OrderSweeper, SweepResult

if TYPE_CHECKING:
    from modules.catalog.repositories.interfaces import IItemRepository
    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.orders.dtos import CreateOrderDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives repositories via constructor injection.
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        item_repository: IItemRepository,
        customer_repository: ICustomerRepository,
        max_cancel_attempts: Optional[int] = None,
    ) -> None:
        self._order_repo = order_repository
        self._lifecycle = OrderLifecycle(item_repository, customer_repository)
        self._sweeper = OrderSweeper(order_repository, self._lifecycle)
        self._max_cancel_attempts = max(
            1, max_cancel_attempts or settings.ORDER_CANCEL_MAX_ATTEMPTS
        )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_order(self, dto: CreateOrderDTO) -> Order:
        """Create a PENDING order priced from the current catalog.

        Raises:
            ReferenceNotFound: the customer or any item does not resolve.
        """
        log = logger.bind(
            customer_id=str(dto.customer_id) if dto.customer_id else None,
            line_count=len(dto.items),
        )
        draft = self._lifecycle.create(
            dto.customer_id,
            [(line.item_id, line.quantity) for line in dto.items],
        )
        order = self._order_repo.add(draft)
        log.info(
            "order.created",
            order_id=str(order.id),
            total_amount=str(draft.total_amount),
        )
        return self._order_repo.get_by_id(str(order.id)) or order

    def cancel_order(self, order_id: str, notes: str = "") -> Order:
        """Cancel a PENDING order.

        Raises:
            OrderNotFound: the order does not exist.
            InvalidTransition: the order is not PENDING.
            ConflictingTransition: every attempt lost a concurrent write.
        """
        log = logger.bind(order_id=str(order_id))
        attempt = 0
        while True:
            attempt += 1
            order = self.get_order(order_id)
            try:
                self._lifecycle.cancel(order, notes)
            except InvalidTransition:
                log.warning("order.cancel_rejected", status=order.status)
                raise
            try:
                self._order_repo.put(order)
            except ConflictingTransition:
                log.info("order.cancel_conflict", attempt=attempt)
                if attempt >= self._max_cancel_attempts:
                    log.warning("order.cancel_gave_up", attempts=attempt)
                    raise
                continue
            log.info("order.cancelled", attempt=attempt)
            return self.get_order(order_id)

    def update_status(self, order_id: str, new_status: str, notes: str = "") -> Order:
        """Move an order to SHIPPED or DELIVERED.

        Raises:
            OrderNotFound: the order does not exist.
            InvalidTransition: *new_status* is not a manual target or not
                reachable from the current status.
            ConflictingTransition: the order changed while being updated.
        """
        order = self.get_order(order_id)
        log = logger.bind(
            order_id=str(order_id),
            current_status=order.status,
            new_status=new_status,
        )
        if new_status not in MANUAL_TARGETS:
            log.warning("order.invalid_transition", reason="not_a_manual_target")
            raise InvalidTransition(order.status, new_status)
        if order.is_terminal:
            log.warning("order.invalid_transition", reason="terminal_status")
            raise InvalidTransition(order.status, new_status)
        try:
            self._lifecycle.transition(order, new_status, notes)
        except InvalidTransition:
            log.warning("order.invalid_transition")
            raise
        self._order_repo.put(order)
        log.info("order.status_updated")
        return self.get_order(order_id)

    def sweep(self) -> SweepResult:
        """One reconciliation pass with the full outcome breakdown."""
        return self._sweeper.run()

    def run_sweep(self) -> int:
        """One reconciliation pass; returns how many orders advanced."""
        return self.sweep().advanced

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str) -> Order:
        """Raises ``OrderNotFound`` if the order does not exist."""
        order = self._order_repo.get_by_id(str(order_id))
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def list_orders(self, status: Optional[str] = None) -> List[Order]:
        filters = {"status": status.upper()} if status else None
        return self._order_repo.list(filters)
