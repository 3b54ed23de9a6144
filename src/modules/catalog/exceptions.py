"""Catalog domain exceptions."""

from __future__ import annotations


class ItemNotFound(Exception):
    """The requested item does not exist or has been removed from the catalog."""
