"""
Postboard Backend — Post Route Handlers
=========================================

What:  CRUD endpoints for posts under /posts, plus the author filter and
       the unpaginated listing with tags.

Route order matters: `/with-tags` is declared before `/{post_id}` so it is
not captured as an id (which would fail with 400 "ID inválido").
"""

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from postboard.middleware.pipeline import PipelineRoute
from postboard.resolvers import resolve_author_filter, resolve_post_id
from postboard.schemas.common import EnvelopeResponse, ErrorResponse, Page
from postboard.schemas.post import PostCreate, PostRead, PostUpdate
from postboard.services.post_service import PostService, get_post_service

router = APIRouter(prefix="/posts", tags=["Posts"], route_class=PipelineRoute)

_errors = {
    400: {"description": "Invalid input, id or author reference", "model": ErrorResponse},
    401: {"description": "Missing or invalid bearer token", "model": ErrorResponse},
}


@router.post(
    "",
    status_code=201,
    responses={
        201: {"description": "Post created with author and tags", "model": EnvelopeResponse},
        404: {"description": "A listed tag does not exist", "model": ErrorResponse},
        **_errors,
    },
    summary="Create a post",
)
async def create_post(
    payload: PostCreate,
    service: PostService = Depends(get_post_service),
) -> PostRead:
    return await service.create(payload)


@router.get(
    "",
    responses={
        200: {"description": "One page of posts", "model": EnvelopeResponse},
        404: {"description": "authorId names no user", "model": ErrorResponse},
        **_errors,
    },
    summary="List posts, newest first, optionally by author",
)
async def list_posts(
    limit: Optional[int] = Query(default=None, ge=1, le=100, description="Page size (default 10)"),
    offset: Optional[int] = Query(default=None, ge=0, description="Rows to skip (default 0)"),
    author_id: Optional[int] = Depends(resolve_author_filter),
    service: PostService = Depends(get_post_service),
) -> Page:
    if author_id is not None:
        return await service.find_by_author(author_id, limit, offset)
    return await service.find_all(limit, offset)


@router.get(
    "/with-tags",
    responses={200: {"description": "Every post with author and tags", "model": EnvelopeResponse}, **_errors},
    summary="List every post with its tags",
)
async def list_posts_with_tags(
    service: PostService = Depends(get_post_service),
) -> List[PostRead]:
    return await service.find_with_tags()


@router.get(
    "/{post_id}",
    responses={
        200: {"description": "Post with author and tags", "model": EnvelopeResponse},
        404: {"description": "Post not found", "model": ErrorResponse},
        **_errors,
    },
    summary="Get a post by id",
)
async def get_post(
    post_id: int = Depends(resolve_post_id),
    service: PostService = Depends(get_post_service),
) -> PostRead:
    return await service.find_one(post_id)


@router.patch(
    "/{post_id}",
    responses={
        200: {"description": "Updated post", "model": EnvelopeResponse},
        404: {"description": "Post or tag not found", "model": ErrorResponse},
        **_errors,
    },
    summary="Update some fields of a post; tagIds replaces the tag set",
)
async def update_post(
    payload: PostUpdate,
    post_id: int = Depends(resolve_post_id),
    service: PostService = Depends(get_post_service),
) -> PostRead:
    return await service.update(post_id, payload)


@router.delete(
    "/{post_id}",
    responses={
        200: {"description": "Deletion confirmation", "model": EnvelopeResponse},
        404: {"description": "Post not found", "model": ErrorResponse},
        **_errors,
    },
    summary="Delete a post",
)
async def delete_post(
    post_id: int = Depends(resolve_post_id),
    service: PostService = Depends(get_post_service),
) -> Dict[str, str]:
    return await service.remove(post_id)
