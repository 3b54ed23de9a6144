"""Catalog item model.

Business rules implemented:
- Price must be greater than zero (DB check constraint + ``clean``).
- Soft delete via ``deleted_at`` (inherited from SoftDeleteModel): order
  lines keep their FK to the item after it leaves the catalog.
- Orders never re-read ``price``; they snapshot it on each order line.
"""

from __future__ import annotations

from decimal import Decimal

import structlog
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import SoftDeleteModel

logger = structlog.get_logger(__name__)


class Item(SoftDeleteModel):
    """A sellable catalog entry."""

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )

    class Meta:
        db_table = "catalog_items"
        ordering = ["name"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="catalog_items_price_positive",
            ),
        ]

    def clean(self) -> None:
        super().clean()
        if self.price is not None and self.price <= 0:
            raise ValidationError({"price": "Price must be greater than zero."})

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        super().save(*args, **kwargs)
        if is_new:
            logger.info("catalog.item_created", item_id=str(self.id), name=self.name)

    def __str__(self) -> str:
        return f"{self.name} (${self.price})"
