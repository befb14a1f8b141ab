"""
Postboard Backend — Post Schemas
==================================

What:  Request validators and response models for posts.

Tag semantics carried by `tagIds`:
    - PostCreate: tags to connect; omitted or null means an untagged post
    - PostUpdate: the complete new tag set; [] removes every tag
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import Field, field_validator

from postboard.schemas.common import CamelModel, InputModel, reject_null


class PostCreate(InputModel):
    title: str = Field(min_length=1, max_length=255)
    content: Optional[str] = None
    published: bool = Field(default=False, strict=True)
    author_id: int = Field(strict=True)
    tag_ids: Optional[List[int]] = None


class PostUpdate(InputModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    content: Optional[str] = None
    published: Optional[bool] = Field(default=None, strict=True)
    author_id: Optional[int] = Field(default=None, strict=True)
    tag_ids: Optional[List[int]] = None

    @field_validator("title", "published", "author_id", "tag_ids", mode="before")
    @classmethod
    def forbid_null(cls, value: Any) -> Any:
        return reject_null(value)


class AuthorSummary(CamelModel):
    """Author projection embedded in posts: id, name and email only."""

    id: int
    name: str
    email: str


class TagRead(CamelModel):
    id: int
    name: str


class PostRead(CamelModel):
    id: int
    title: str
    content: Optional[str] = None
    published: bool
    author_id: int
    created_at: datetime
    updated_at: datetime
    author: AuthorSummary
    tags: List[TagRead] = []
