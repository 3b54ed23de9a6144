"""Customer DTOs for the Service Layer.

Pydantic v2 contracts between the API layer and ``CustomerService``.
DTOs are immutable (``frozen=True``).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator


class CreateCustomerDTO(BaseModel):
    """Input for customer creation; ``email`` must be well-formed."""

    model_config = ConfigDict(frozen=True)

    name: str
    email: EmailStr
    phone: str = ""

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Customer name is required.")
        return v.strip()


class UpdateCustomerDTO(BaseModel):
    """Partial update; only supplied fields change."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    email: EmailStr | None = None
    phone: str | None = None
    is_active: bool | None = None
