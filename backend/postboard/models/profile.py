"""
ORM model for the `profiles` table.

One-to-one with User (unique `user_id`). Part of the schema and the
migrations; no service or route reads or writes it yet.
"""

from typing import Optional

from sqlalchemy import ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from postboard.database import Base
from postboard.models.user import User


class Profile(Base):
    __tablename__ = "profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"), nullable=False, unique=True,
    )

    user: Mapped[User] = relationship(User, lazy="selectin")

    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, user_id={self.user_id})>"
