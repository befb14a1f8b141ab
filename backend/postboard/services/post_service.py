"""
Postboard Backend — Post Service
==================================

What:  Post operations, including the author filter and the unpaginated
       tag listing.
Who:   Called by `postboard.routes.posts`; calls `PostGateway`.

Tag handling (delegated to the gateway through the `tag_ids` key):
    create → connect the listed tags; key left out when no tags are given
    update → replace the whole tag set with the listed tags

`author_id` is not pre-checked: a missing author surfaces as the gateway's
ForeignKeyViolationError and is mapped to 400 by the error handlers.
"""

import logging
from typing import Dict, List, Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.database import get_db_session
from postboard.exceptions import ConflictError, NotFoundError
from postboard.gateway import PostGateway, RecordNotFoundError, UniqueViolationError
from postboard.schemas.common import Page
from postboard.schemas.post import PostCreate, PostRead, PostUpdate
from postboard.services.pagination import build_page, resolve_window

logger = logging.getLogger(__name__)


class PostService:
    label = "Post"

    def __init__(self, gateway: PostGateway):
        self.gateway = gateway

    async def create(self, payload: PostCreate) -> PostRead:
        data = payload.model_dump(exclude={"tag_ids"})
        if payload.tag_ids:
            data["tag_ids"] = payload.tag_ids

        try:
            post = await self.gateway.create(data)
        except UniqueViolationError as e:
            raise ConflictError("El post ya existe", context={"meta": e.meta})

        logger.info("Post %d created by user %d", post.id, post.author_id)
        return PostRead.model_validate(post)

    async def _page(self, where: Optional[Dict[str, int]], limit, offset) -> Page:
        limit, offset = resolve_window(limit, offset)
        rows = await self.gateway.find_many(where=where, take=limit, skip=offset)
        total = await self.gateway.count(where=where)
        return build_page(rows, total, limit, offset, PostRead.model_validate)

    async def find_all(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Page:
        return await self._page(None, limit, offset)

    async def find_by_author(
        self,
        author_id: int,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Page:
        """Same page shape as `find_all`, restricted to one author's posts."""
        return await self._page({"author_id": author_id}, limit, offset)

    async def find_with_tags(self) -> List[PostRead]:
        """Every post, newest first, with author and tags. Not paginated."""
        rows = await self.gateway.find_many()
        return [PostRead.model_validate(row) for row in rows]

    async def find_one(self, post_id: int) -> PostRead:
        post = await self.gateway.find_unique(post_id)
        if post is None:
            raise NotFoundError(resource=self.label, resource_id=post_id)
        return PostRead.model_validate(post)

    async def update(self, post_id: int, payload: PostUpdate) -> PostRead:
        """
        Partial update; a provided `tagIds` list replaces the tag set.

        Raises:
            NotFoundError: the post vanished before the write (→ 404)
            RecordNotFoundError: a listed tag does not exist (→ 404, from the mapper)
        """
        try:
            post = await self.gateway.update(post_id, payload.model_dump(exclude_unset=True))
        except RecordNotFoundError as e:
            # Unknown tags keep the gateway kind; only the post itself is reclassified
            if (e.meta or {}).get("model") == "Tag":
                raise
            raise NotFoundError(resource=self.label, resource_id=post_id)
        return PostRead.model_validate(post)

    async def remove(self, post_id: int) -> Dict[str, str]:
        try:
            await self.gateway.delete(post_id)
        except RecordNotFoundError:
            raise NotFoundError(resource=self.label, resource_id=post_id)

        logger.info("Post %d deleted", post_id)
        return {"message": "Post eliminado exitosamente"}


def get_post_service(db: AsyncSession = Depends(get_db_session)) -> PostService:
    """FastAPI dependency: a PostService bound to the request's session."""
    return PostService(PostGateway(db))
