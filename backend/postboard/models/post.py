"""
Postboard Backend — Post SQLAlchemy Model
==========================================

What:  ORM model for the `posts` table and the `post_tags` join table.
Who:   Read and written only through `postboard.gateway.posts.PostGateway`.

Relationships:
    - author: many-to-one → users.id (FK, required). A post pointing at a
      missing user is rejected by the database and surfaces as
      ForeignKeyViolationError.
    - tags:   many-to-many through post_tags. Assigning `post.tags` replaces
      the whole set; SQLAlchemy diffs the join rows on flush.

Both relationships use lazy="selectin": every load of a Post brings its
author and tags along, so nothing is lazy-loaded later under asyncio.

User has no `posts` back-reference: deleting a user who still owns posts
fails on the FK and is never turned into an UPDATE of `author_id`.
"""

from typing import List, Optional

from sqlalchemy import Boolean, Column, ForeignKey, Index, Integer, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from postboard.database import Base
from postboard.models._timestamps import TimestampMixin
from postboard.models.tag import Tag
from postboard.models.user import User


post_tags = Table(
    "post_tags",
    Base.metadata,
    Column("post_id", ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class Post(TimestampMixin, Base):
    """A post written by a user, optionally tagged."""

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    author_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)

    author: Mapped[User] = relationship(User, lazy="selectin")
    tags: Mapped[List[Tag]] = relationship(
        Tag, secondary=post_tags, lazy="selectin", order_by=Tag.id,
    )

    __table_args__ = (
        Index("idx_posts_created_at", "created_at"),
        Index("idx_posts_author_id", "author_id"),
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, title='{self.title}', author_id={self.author_id})>"
