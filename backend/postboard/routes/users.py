"""
Postboard Backend — User Route Handlers
=========================================

What:  CRUD endpoints for users under /users.
How:   Path ids arrive already resolved (`resolve_user_id`): a handler never
       runs for a malformed or unknown id. Results are returned as-is and
       wrapped in the success envelope by the route pipeline.

Responses:
    POST   /users             201 {success, data: user}
    GET    /users             200 {success, data: [...], meta: {...}}
    GET    /users/{user_id}   200 {success, data: user}
    PATCH  /users/{user_id}   200 {success, data: user}
    DELETE /users/{user_id}   200 {success, data: null, message}
"""

from typing import Dict, Optional

from fastapi import APIRouter, Depends, Query

from postboard.middleware.pipeline import PipelineRoute
from postboard.resolvers import resolve_user_id
from postboard.schemas.common import EnvelopeResponse, ErrorResponse, Page
from postboard.schemas.user import UserCreate, UserRead, UserUpdate
from postboard.services.user_service import UserService, get_user_service

router = APIRouter(prefix="/users", tags=["Users"], route_class=PipelineRoute)

_errors = {
    400: {"description": "Invalid input or id", "model": ErrorResponse},
    401: {"description": "Missing or invalid bearer token", "model": ErrorResponse},
}


@router.post(
    "",
    status_code=201,
    responses={
        201: {"description": "User created", "model": EnvelopeResponse},
        409: {"description": "Email already registered", "model": ErrorResponse},
        **_errors,
    },
    summary="Create a user",
)
async def create_user(
    payload: UserCreate,
    service: UserService = Depends(get_user_service),
) -> UserRead:
    return await service.create(payload)


@router.get(
    "",
    responses={200: {"description": "One page of users", "model": EnvelopeResponse}, **_errors},
    summary="List users, newest first",
)
async def list_users(
    limit: Optional[int] = Query(default=None, ge=1, le=100, description="Page size (default 10)"),
    offset: Optional[int] = Query(default=None, ge=0, description="Rows to skip (default 0)"),
    service: UserService = Depends(get_user_service),
) -> Page:
    return await service.find_all(limit, offset)


@router.get(
    "/{user_id}",
    responses={
        200: {"description": "User", "model": EnvelopeResponse},
        404: {"description": "User not found", "model": ErrorResponse},
        **_errors,
    },
    summary="Get a user by id",
)
async def get_user(
    user_id: int = Depends(resolve_user_id),
    service: UserService = Depends(get_user_service),
) -> UserRead:
    return await service.find_one(user_id)


@router.patch(
    "/{user_id}",
    responses={
        200: {"description": "Updated user", "model": EnvelopeResponse},
        404: {"description": "User not found", "model": ErrorResponse},
        409: {"description": "Email already registered", "model": ErrorResponse},
        **_errors,
    },
    summary="Update some fields of a user",
)
async def update_user(
    payload: UserUpdate,
    user_id: int = Depends(resolve_user_id),
    service: UserService = Depends(get_user_service),
) -> UserRead:
    return await service.update(user_id, payload)


@router.delete(
    "/{user_id}",
    responses={
        200: {"description": "Deletion confirmation", "model": EnvelopeResponse},
        404: {"description": "User not found", "model": ErrorResponse},
        **_errors,
    },
    summary="Delete a user",
)
async def delete_user(
    user_id: int = Depends(resolve_user_id),
    service: UserService = Depends(get_user_service),
) -> Dict[str, str]:
    return await service.remove(user_id)
