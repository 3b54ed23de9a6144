"""Catalog repository interface.

``resolve`` is the Catalog Lookup contract consumed by the order
lifecycle engine: it returns the live catalog record or ``None``.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Iterable, List, Optional
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.catalog.models import Item


class IItemRepository(IRepository["Item"]):
    """Repository contract for catalog items."""

    @abstractmethod
    def resolve(self, item_id: UUID | str) -> Optional[Item]:
        """Return the live (not deleted) item with *item_id*, or ``None``."""

    @abstractmethod
    def save(self, entity: Item) -> Item:
        """Persist (create or update) an item."""

    @abstractmethod
    def save_many(self, entities: Iterable[Item]) -> List[Item]:
        """Persist several items atomically."""

    @abstractmethod
    def delete(self, id: str) -> bool:
        """Soft-delete an item; ``False`` when it does not exist."""

    @abstractmethod
    def delete_many(self, ids: Iterable[str]) -> int:
        """Soft-delete every listed item that exists; returns how many."""
