"""Django ORM implementation of the Customer repository.

Methods return ``None`` for missing entities; the Service Layer decides
how to translate that into an API response.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.core.repositories.errors import translate_store_errors
from modules.customers.models import Customer
from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerDjangoRepository(ICustomerRepository):
    """Concrete Customer repository backed by Django ORM."""

    @translate_store_errors
    def get_by_id(self, id: str) -> Optional[Customer]:
        """Live customer by primary key; ``None`` for unknown or malformed ids."""
        try:
            return Customer.objects.alive().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    @translate_store_errors
    def resolve(self, customer_id: UUID | str) -> Optional[Customer]:
        try:
            return (
                Customer.objects.alive()
                .filter(id=customer_id, is_active=True)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    @translate_store_errors
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Customer]:
        """List live customers with optional Django ORM look-ups, e.g.
        ``{"is_active": True}``.
        """
        queryset = Customer.objects.alive()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    @translate_store_errors
    @transaction.atomic
    def save(self, entity: Customer) -> Customer:
        is_new = entity._state.adding
        entity.save()
        logger.info("customer.saved", customer_id=str(entity.id), is_new=is_new)
        return entity

    @translate_store_errors
    @transaction.atomic
    def delete(self, id: str) -> bool:
        customer = self.get_by_id(id)
        if not customer:
            return False
        customer.delete()
        logger.info("customer.soft_deleted", customer_id=str(id))
        return True

    @translate_store_errors
    def get_by_email(self, email: str) -> Optional[Customer]:
        return Customer.objects.filter(email__iexact=email).first()
