"""Django ORM implementation of the catalog repository.

Missing or malformed ids resolve to ``None`` (Null Object pattern); the
service layer decides whether that is an error.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.catalog.models import Item
from modules.catalog.repositories.interfaces import IItemRepository
from modules.core.repositories.errors import translate_store_errors

logger = structlog.get_logger(__name__)


class ItemDjangoRepository(IItemRepository):
    """Concrete catalog repository backed by Django ORM."""

    @translate_store_errors
    def get_by_id(self, id: str) -> Optional[Item]:
        try:
            return Item.objects.alive().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def resolve(self, item_id: UUID | str) -> Optional[Item]:
        return self.get_by_id(str(item_id))

    @translate_store_errors
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Item]:
        queryset = Item.objects.alive()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    @translate_store_errors
    @transaction.atomic
    def save(self, entity: Item) -> Item:
        entity.full_clean()
        entity.save()
        logger.info("catalog.item_saved", item_id=str(entity.id))
        return entity

    @translate_store_errors
    @transaction.atomic
    def save_many(self, entities: Iterable[Item]) -> List[Item]:
        saved = []
        for entity in entities:
            entity.full_clean()
            entity.save()
            saved.append(entity)
        logger.info("catalog.items_saved", count=len(saved))
        return saved

    @translate_store_errors
    @transaction.atomic
    def delete(self, id: str) -> bool:
        item = self.get_by_id(id)
        if not item:
            return False
        item.delete()
        logger.info("catalog.item_soft_deleted", item_id=str(id))
        return True

    @translate_store_errors
    @transaction.atomic
    def delete_many(self, ids: Iterable[str]) -> int:
        valid_ids = []
        for raw in ids:
            try:
                valid_ids.append(UUID(str(raw)))
            except ValueError:
                continue
        count, _ = Item.objects.alive().filter(id__in=valid_ids).delete()
        logger.info("catalog.items_soft_deleted", count=count)
        return count
