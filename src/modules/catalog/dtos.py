"""Catalog DTOs for the Service Layer.

Pydantic v2 contracts between the DRF views and ``ItemService``.
DTOs are immutable (``frozen=True``).
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class CreateItemDTO(BaseModel):
    """Input for a single catalog item."""

    model_config = ConfigDict(frozen=True)

    name: str
    price: Decimal
    description: str = ""

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Item name is required.")
        return v.strip()

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Price must be greater than zero.")
        return v


class UpdateItemDTO(BaseModel):
    """Partial update; only supplied fields change."""

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    price: Optional[Decimal] = None
    description: Optional[str] = None

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is not None and v <= 0:
            raise ValueError("Price must be greater than zero.")
        return v


class CreateItemBatchDTO(BaseModel):
    """Several items created in one all-or-nothing request."""

    model_config = ConfigDict(frozen=True)

    items: List[CreateItemDTO]

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(cls, v: List[CreateItemDTO]) -> List[CreateItemDTO]:
        if not v:
            raise ValueError("At least one item is required.")
        return v
