"""
Postboard Backend — User SQLAlchemy Model
==========================================

What:  ORM model for the `users` table.
Who:   Read and written only through `postboard.gateway.users.UserGateway`.

Table Design:
    - Integer identity primary key (the API exposes numeric ids)
    - email: UNIQUE at the database level; the service never pre-checks it,
      a duplicate surfaces as UniqueViolationError from the gateway
    - age: nullable; the >= 18 rule lives in the request schema
    - created_at DESC index for the newest-first listing
"""

from typing import Optional

from sqlalchemy import Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from postboard.database import Base
from postboard.models._timestamps import TimestampMixin


class User(TimestampMixin, Base):
    """A registered author."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    age: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    __table_args__ = (
        Index("idx_users_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
