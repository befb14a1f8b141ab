"""
Postboard Backend — User Service
==================================

What:  User operations: create, list, lookup, partial update, delete.
Who:   Called by `postboard.routes.users`; calls `UserGateway`.

Uniqueness of `email` is enforced by the database; the service never
pre-checks it, it only turns the gateway's UniqueViolationError into a
ConflictError.
"""

import logging
from typing import Dict, Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.database import get_db_session
from postboard.exceptions import ConflictError, NotFoundError
from postboard.gateway import RecordNotFoundError, UniqueViolationError, UserGateway
from postboard.schemas.common import Page
from postboard.schemas.user import UserCreate, UserRead, UserUpdate
from postboard.services.pagination import build_page, resolve_window

logger = logging.getLogger(__name__)


class UserService:
    """
    Business logic for users.

    Args:
        gateway: UserGateway bound to the current request's session
    """

    label = "Usuario"

    def __init__(self, gateway: UserGateway):
        self.gateway = gateway

    async def create(self, payload: UserCreate) -> UserRead:
        """
        Insert a user.

        Raises:
            ConflictError: email already registered (→ 409)
        """
        try:
            user = await self.gateway.create(payload.model_dump())
        except UniqueViolationError as e:
            logger.info("Duplicate email on user create: %s", payload.email)
            raise ConflictError("El email ya está registrado", context={"meta": e.meta})

        logger.info("User %d created", user.id)
        return UserRead.model_validate(user)

    async def find_all(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Page:
        """
        One page of users, newest first.

        Example:
            find_all(2, 0) with 5 users
            → Page(data=[u5, u4], meta={total: 5, limit: 2, offset: 0, hasMore: True})
        """
        limit, offset = resolve_window(limit, offset)
        rows = await self.gateway.find_many(take=limit, skip=offset)
        total = await self.gateway.count()
        return build_page(rows, total, limit, offset, UserRead.model_validate)

    async def find_one(self, user_id: int) -> UserRead:
        user = await self.gateway.find_unique(user_id)
        if user is None:
            raise NotFoundError(resource=self.label, resource_id=user_id)
        return UserRead.model_validate(user)

    async def update(self, user_id: int, payload: UserUpdate) -> UserRead:
        """
        Change only the fields present in the payload.

        Raises:
            NotFoundError: the user vanished before the write (→ 404)
        """
        try:
            user = await self.gateway.update(user_id, payload.model_dump(exclude_unset=True))
        except RecordNotFoundError:
            raise NotFoundError(resource=self.label, resource_id=user_id)
        return UserRead.model_validate(user)

    async def remove(self, user_id: int) -> Dict[str, str]:
        try:
            await self.gateway.delete(user_id)
        except RecordNotFoundError:
            raise NotFoundError(resource=self.label, resource_id=user_id)

        logger.info("User %d deleted", user_id)
        return {"message": "Usuario eliminado exitosamente"}


def get_user_service(db: AsyncSession = Depends(get_db_session)) -> UserService:
    """FastAPI dependency: a UserService bound to the request's session."""
    return UserService(UserGateway(db))
