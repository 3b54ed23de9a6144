"""Catalog repositories package."""

from modules.catalog.repositories.django_repository import ItemDjangoRepository
from modules.catalog.repositories.interfaces import IItemRepository

__all__ = ["IItemRepository", "ItemDjangoRepository"]
