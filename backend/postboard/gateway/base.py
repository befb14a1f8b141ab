"""
Postboard Backend — Generic Persistence Gateway
=================================================

What:  Typed CRUD operations over one ORM model, raising only gateway
       error kinds (see `postboard.gateway.errors`).
How:   Thin wrappers around an AsyncSession. Writes are flushed (not
       committed) so constraint violations surface inside the request;
       the commit happens in `get_db_session` once the handler succeeds.
Who:   Subclassed per entity; used by services and existence resolvers.

Operations:
    create(data)                                   → new row, refreshed
    find_many(where, take, skip, order_by)         → list of rows
    count(where)                                   → int
    find_unique(id)                                → row or None
    update(id, data)                               → row, only given keys change
    delete(id)                                     → deleted row

`where` is a mapping of attribute name → required value (equality only).
`order_by` is "created_at_desc" (default) or "created_at_asc".
"""

import logging
from typing import Any, Generic, List, Mapping, Optional, Type, TypeVar

from sqlalchemy import asc, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.database import Base
from postboard.gateway.errors import RecordNotFoundError, translate_errors

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

ORDERINGS = {"created_at_desc", "created_at_asc"}


class Gateway(Generic[ModelT]):
    """CRUD gateway for a single model class (set `model` on the subclass)."""

    model: Type[ModelT]

    def __init__(self, session: AsyncSession):
        self.session = session

    # ── Helpers ───────────────────────────────────────────────────────────

    def _conditions(self, where: Optional[Mapping[str, Any]]) -> list:
        return [getattr(self.model, field) == value for field, value in (where or {}).items()]

    def _ordering(self, order_by: str) -> tuple:
        if order_by not in ORDERINGS:
            raise ValueError(f"Invalid order_by '{order_by}'. Must be one of: {ORDERINGS}")
        direction = desc if order_by == "created_at_desc" else asc
        # id breaks ties between rows created within the same clock tick
        return direction(self.model.created_at), direction(self.model.id)

    async def _assign(self, obj: ModelT, data: Mapping[str, Any]) -> None:
        """Copy payload values onto the row; subclasses handle relationship keys."""
        for field, value in data.items():
            setattr(obj, field, value)

    async def _get_or_raise(self, id: int, action: str) -> ModelT:
        obj = await self.find_unique(id)
        if obj is None:
            raise RecordNotFoundError(
                f"Record to {action} not found",
                meta={"model": self.model.__name__, "cause": f"{self.model.__name__} {id} does not exist"},
            )
        return obj

    async def _flush_and_refresh(self, obj: ModelT) -> ModelT:
        with translate_errors():
            await self.session.flush()
            await self.session.refresh(obj)
        return obj

    # ── Operations ────────────────────────────────────────────────────────

    async def create(self, data: Mapping[str, Any]) -> ModelT:
        obj = self.model()
        await self._assign(obj, data)
        self.session.add(obj)
        await self._flush_and_refresh(obj)
        logger.debug("Created %r", obj)
        return obj

    async def find_many(
        self,
        where: Optional[Mapping[str, Any]] = None,
        take: Optional[int] = None,
        skip: Optional[int] = None,
        order_by: str = "created_at_desc",
    ) -> List[ModelT]:
        query = (
            select(self.model)
            .where(*self._conditions(where))
            .order_by(*self._ordering(order_by))
        )
        if skip:
            query = query.offset(skip)
        if take is not None:
            query = query.limit(take)

        with translate_errors():
            result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count(self, where: Optional[Mapping[str, Any]] = None) -> int:
        query = select(func.count()).select_from(self.model).where(*self._conditions(where))
        with translate_errors():
            result = await self.session.execute(query)
        return result.scalar_one()

    async def find_unique(self, id: int) -> Optional[ModelT]:
        with translate_errors():
            return await self.session.get(self.model, id)

    async def update(self, id: int, data: Mapping[str, Any]) -> ModelT:
        obj = await self._get_or_raise(id, "update")
        await self._assign(obj, data)
        await self._flush_and_refresh(obj)
        logger.debug("Updated %r (fields: %s)", obj, ", ".join(data) or "none")
        return obj

    async def delete(self, id: int) -> ModelT:
        obj = await self._get_or_raise(id, "delete")
        await self.session.delete(obj)
        with translate_errors():
            await self.session.flush()
        logger.debug("Deleted %r", obj)
        return obj
