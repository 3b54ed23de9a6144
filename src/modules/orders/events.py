"""Domain events for the Orders bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from shared.domain.events import DomainEvent


@dataclass(frozen=True)
class OrderCreated(DomainEvent):
    """Raised when an order is created (status PENDING)."""


@dataclass(frozen=True)
class OrderStatusChanged(DomainEvent):
    """Raised when an order moves from one status to another."""

    old_status: Optional[str] = None
    new_status: str = ""
    notes: str = ""


@dataclass(frozen=True)
class OrderCancelled(OrderStatusChanged):
    """Raised when a pending order is cancelled."""
