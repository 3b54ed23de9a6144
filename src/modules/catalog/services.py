"""Catalog service layer.

Maintains the items that orders are priced from.  Changing or removing an
item never touches existing orders: each order line carries its own copy
of the name and unit price taken at creation time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.db import transaction

from modules.catalog.exceptions import ItemNotFound
from modules.catalog.models import Item

if TYPE_CHECKING:
    from modules.catalog.dtos import CreateItemBatchDTO, CreateItemDTO, UpdateItemDTO
    from modules.catalog.repositories.interfaces import IItemRepository

logger = structlog.get_logger(__name__)


class ItemService:
    """Application service for catalog use-cases."""

    def __init__(self, repository: IItemRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_item(self, dto: CreateItemDTO) -> Item:
        item = self._repo.save(
            Item(name=dto.name, price=dto.price, description=dto.description)
        )
        logger.info("catalog.item_registered", item_id=str(item.id))
        return item

    @transaction.atomic
    def create_items(self, dto: CreateItemBatchDTO) -> List[Item]:
        """Create every item in the batch, or none of them."""
        items = self._repo.save_many(
            Item(name=entry.name, price=entry.price, description=entry.description)
            for entry in dto.items
        )
        logger.info("catalog.batch_registered", count=len(items))
        return items

    @transaction.atomic
    def update_item(self, id: str, dto: UpdateItemDTO) -> Item:
        """Apply the supplied fields to an item.

        Raises:
            ItemNotFound: if the item does not exist.
        """
        item = self.get_item(id)
        for field in ("name", "price", "description"):
            value = getattr(dto, field)
            if value is not None:
                setattr(item, field, value)
        item = self._repo.save(item)
        logger.info("catalog.item_updated", item_id=str(id))
        return item

    def delete_item(self, id: str) -> None:
        """Remove an item from the catalog (soft delete).

        Raises:
            ItemNotFound: if the item does not exist.
        """
        if not self._repo.delete(id):
            raise ItemNotFound(f"Item {id} not found.")

    def delete_items(self, ids: List[str]) -> int:
        return self._repo.delete_many(ids)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_items(self, filters: Optional[Dict[str, Any]] = None) -> List[Item]:
        return self._repo.list(filters)

    def get_item(self, id: str) -> Item:
        """Raises ``ItemNotFound`` when the item is missing or deleted."""
        item = self._repo.get_by_id(id)
        if not item:
            raise ItemNotFound(f"Item {id} not found.")
        return item
