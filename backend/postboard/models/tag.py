"""ORM model for the `tags` table."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from postboard.database import Base


class Tag(Base):
    """A label attached to posts through the `post_tags` join table."""

    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name='{self.name}')>"
