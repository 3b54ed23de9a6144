"""Customer repository interface.

``resolve`` is the Customer Lookup used when an order is created; the
e-mail look-up backs the unique-email rule.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.customers.models import Customer


class ICustomerRepository(IRepository["Customer"]):
    """Repository contract for customers."""

    @abstractmethod
    def resolve(self, customer_id: UUID | str) -> Optional[Customer]:
        """Return the customer only if it is active and not deleted."""

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[Customer]:
        """Retrieve a customer (deleted or not) by email address."""

    @abstractmethod
    def save(self, entity: Customer) -> Customer:
        """Persist (create or update) a customer."""

    @abstractmethod
    def delete(self, id: str) -> bool:
        """Soft-delete a customer; ``False`` when it does not exist."""
