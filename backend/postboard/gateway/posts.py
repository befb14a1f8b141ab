"""
Gateway for the `posts` table.

Besides plain columns, create/update accept a `tag_ids` key:
    - on create it connects the listed tags (omit the key, or pass None,
      to create an untagged post)
    - on update it replaces the post's whole tag set ([] clears it)
Every listed tag must exist; otherwise RecordNotFoundError is raised,
the same kind an update of a missing row produces.
"""

from typing import Any, Iterable, List, Mapping

from sqlalchemy import select

from postboard.gateway.base import Gateway
from postboard.gateway.errors import RecordNotFoundError, translate_errors
from postboard.models.post import Post
from postboard.models.tag import Tag


class PostGateway(Gateway[Post]):
    model = Post

    async def _load_tags(self, tag_ids: Iterable[int]) -> List[Tag]:
        wanted = list(dict.fromkeys(tag_ids))
        if not wanted:
            return []

        with translate_errors():
            result = await self.session.execute(select(Tag).where(Tag.id.in_(wanted)))
        found = {tag.id: tag for tag in result.scalars().all()}

        missing = [tag_id for tag_id in wanted if tag_id not in found]
        if missing:
            raise RecordNotFoundError(
                "Tag to connect not found",
                meta={"model": "Tag", "cause": f"Tag ids {missing} do not exist"},
            )
        return [found[tag_id] for tag_id in wanted]

    async def _assign(self, obj: Post, data: Mapping[str, Any]) -> None:
        values = dict(data)
        tag_ids = values.pop("tag_ids", None)
        await super()._assign(obj, values)
        if tag_ids is not None:
            obj.tags = await self._load_tags(tag_ids)
