"""
Postboard Backend — Existence Resolvers
=========================================

What:  FastAPI dependencies that turn a raw path/query id into an integer
       that is known to reference an existing row.
How:   Parse the string as a base-10 integer, then ask the gateway for the
       row. The handler receives the int, never the raw string.
Who:   Declared as parameters on user and post handlers.
When:  After the auth gate and before the service call, once per parameter.

Outcomes:
    "42" and row 42 exists   → 42
    "42" and no row 42       → NotFoundError   (404 "Usuario con ID 42 no encontrado")
    "99999999999999999999"   → NotFoundError, no query issued (wider than 64 bits)
    "abc", "", "1.5", "0x1"  → BadRequestError (400 "ID inválido"), no query issued
"""

import logging
import re
from typing import Optional

from fastapi import Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.database import get_db_session
from postboard.exceptions import BadRequestError, NotFoundError
from postboard.gateway import Gateway, PostGateway, UserGateway

logger = logging.getLogger(__name__)

_INTEGER_RE = re.compile(r"-?[0-9]+")

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def parse_id(raw: Optional[str]) -> int:
    """Parse a base-10 integer id or raise BadRequestError("ID inválido")."""
    if raw is None or not _INTEGER_RE.fullmatch(raw):
        raise BadRequestError("ID inválido", context={"raw": raw})
    return int(raw)


class ExistenceResolver:
    """
    Checks that an id names an existing row of one entity.

    Args:
        gateway: Gateway for the entity (only `find_unique` is used)
        label:   Entity name used in the not-found message ("Usuario", "Post")
    """

    def __init__(self, gateway: Gateway, label: str):
        self.gateway = gateway
        self.label = label

    async def resolve(self, raw: Optional[str]) -> int:
        entity_id = parse_id(raw)
        # Primary keys are signed 64-bit; anything wider cannot name a row
        in_range = INT64_MIN <= entity_id <= INT64_MAX
        if not in_range or await self.gateway.find_unique(entity_id) is None:
            logger.info("%s %d not found", self.label, entity_id)
            raise NotFoundError(resource=self.label, resource_id=entity_id)
        return entity_id


# ── FastAPI Dependencies ──────────────────────────────────────────────────


async def resolve_user_id(
    user_id: str = Path(description="User id"),
    db: AsyncSession = Depends(get_db_session),
) -> int:
    return await ExistenceResolver(UserGateway(db), "Usuario").resolve(user_id)


async def resolve_post_id(
    post_id: str = Path(description="Post id"),
    db: AsyncSession = Depends(get_db_session),
) -> int:
    return await ExistenceResolver(PostGateway(db), "Post").resolve(post_id)


async def resolve_author_filter(
    author_id: Optional[str] = Query(
        default=None, alias="authorId", description="Only posts written by this user",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> Optional[int]:
    """Optional `authorId` filter: absent → None; present → a resolved user id."""
    if author_id is None:
        return None
    return await ExistenceResolver(UserGateway(db), "Usuario").resolve(author_id)
