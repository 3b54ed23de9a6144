"""Order DTOs for the Service Layer.

Pydantic v2 contracts between the API layer and the Service layer.
DTOs are immutable (``frozen=True``).

- ``CreateOrderItemDTO`` / ``CreateOrderDTO``: order creation input.
- ``OrderOutputDTO``: the response projection of an Order aggregate.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

if TYPE_CHECKING:
    from modules.customers.models import Customer
    from modules.orders.models import Order, OrderItem, OrderStatusHistory


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateOrderItemDTO(BaseModel):
    """One ``(item_id, quantity)`` pair; the price comes from the catalog."""

    model_config = ConfigDict(frozen=True)

    item_id: UUID
    quantity: int

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v


class CreateOrderDTO(BaseModel):
    """Order creation request.

    ``customer_id`` is optional.  The same item may appear on several
    lines; each becomes its own order line.
    """

    model_config = ConfigDict(frozen=True)

    customer_id: Optional[UUID] = None
    items: List[CreateOrderItemDTO]

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(
        cls, v: List[CreateOrderItemDTO]
    ) -> List[CreateOrderItemDTO]:
        if not v:
            raise ValueError("Order must have at least one item.")
        return v


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class CustomerSummaryDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    name: str
    email: str

    @classmethod
    def from_entity(cls, customer: Customer) -> CustomerSummaryDTO:
        return cls(id=customer.id, name=customer.name, email=customer.email)


class OrderLineOutputDTO(BaseModel):
    """One order line, priced from the snapshot taken at creation."""

    model_config = ConfigDict(frozen=True)

    item_id: UUID
    item_name: str
    unit_price: Decimal
    quantity: int
    subtotal: Decimal

    @classmethod
    def from_entity(cls, line: OrderItem) -> OrderLineOutputDTO:
        return cls(
            item_id=line.item_id,
            item_name=line.item_name,
            unit_price=line.unit_price,
            quantity=line.quantity,
            subtotal=line.unit_price * line.quantity,
        )


class StatusHistoryDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    old_status: Optional[str]
    new_status: str
    notes: str
    created_at: datetime

    @classmethod
    def from_entity(cls, history: OrderStatusHistory) -> StatusHistoryDTO:
        return cls(
            old_status=history.old_status,
            new_status=history.new_status,
            notes=history.notes,
            created_at=history.created_at,
        )


class OrderOutputDTO(BaseModel):
    """External representation of an order.

    Built only from values stored on the order and its lines; the catalog
    is never consulted, so re-pricing an item does not change old orders.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    status: str
    created_at: datetime
    updated_at: datetime
    customer: Optional[CustomerSummaryDTO]
    items: List[OrderLineOutputDTO]
    total_amount: Decimal
    history: List[StatusHistoryDTO]

    @classmethod
    def from_entity(cls, order: Order) -> OrderOutputDTO:
        """Assumes ``customer``, ``items`` and ``status_history`` are
        eager-loaded (see ``order_queryset``).
        """
        lines = [OrderLineOutputDTO.from_entity(line) for line in order.items.all()]
        customer = order.customer
        return cls(
            id=order.id,
            status=order.status,
            created_at=order.created_at,
            updated_at=order.updated_at,
            customer=CustomerSummaryDTO.from_entity(customer) if customer else None,
            items=lines,
            total_amount=sum((line.subtotal for line in lines), Decimal("0.00")),
            history=[
                StatusHistoryDTO.from_entity(h) for h in order.status_history.all()
            ],
        )
