"""
Postboard Backend — User Schemas
==================================

What:  Request validators and the response model for users.

Validation rules (create and update share them):
    - email: valid address                      → constraint `value_error`
    - name:  at least 2 characters              → `string_too_short`
    - age:   integer >= 18, optional, nullable  → `greater_than_equal` / `int_type`
    - unknown keys                              → `extra_forbidden`
    - update: explicit null on email/name       → `null_not_allowed`
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import EmailStr, Field, field_validator

from postboard.schemas.common import CamelModel, InputModel, reject_null


class UserCreate(InputModel):
    email: EmailStr
    name: str = Field(min_length=2)
    age: Optional[int] = Field(default=None, ge=18, strict=True)


class UserUpdate(InputModel):
    """Partial update: every field optional, same constraints when present."""

    email: Optional[EmailStr] = None
    name: Optional[str] = Field(default=None, min_length=2)
    age: Optional[int] = Field(default=None, ge=18, strict=True)

    @field_validator("email", "name", mode="before")
    @classmethod
    def forbid_null(cls, value: Any) -> Any:
        return reject_null(value)


class UserRead(CamelModel):
    id: int
    email: str
    name: str
    age: Optional[int] = None
    created_at: datetime
    updated_at: datetime
