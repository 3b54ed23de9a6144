"""Order domain exceptions.

Raised by the lifecycle engine, the repository and the Service Layer.
The API layer (Views) catches these and translates them into HTTP
responses.
"""

from __future__ import annotations

from typing import Iterable, Optional
from uuid import UUID


class ReferenceNotFound(Exception):
    """One or more items, or the customer, referenced by a new order do not
    resolve.

    Every unresolved reference is reported at once.
    """

    def __init__(
        self,
        missing_item_ids: Iterable[UUID] = (),
        customer_id: Optional[UUID] = None,
    ) -> None:
        self.missing_item_ids = list(missing_item_ids)
        self.customer_id = customer_id
        parts = []
        if customer_id is not None:
            parts.append(f"customer {customer_id}")
        if self.missing_item_ids:
            ids = ", ".join(str(i) for i in self.missing_item_ids)
            parts.append(f"items {ids}")
        super().__init__(f"Unknown reference(s): {'; '.join(parts)}.")


class OrderNotFound(Exception):
    """The requested order does not exist."""


class InvalidTransition(Exception):
    """The requested status change is not allowed from the current status."""

    def __init__(self, current: str, requested: str) -> None:
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot transition from {current} to {requested}.")


class ConflictingTransition(Exception):
    """The order changed between load and write; the write was not applied."""
