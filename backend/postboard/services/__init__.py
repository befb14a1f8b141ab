"""
Postboard Backend — Services Layer
=====================================

What:  Business logic between route handlers (HTTP) and the gateway (persistence).
How:   Each service wraps one gateway. Routes receive a service instance per
       request through FastAPI dependencies (`get_user_service`,
       `get_post_service`), bound to the request's database session.

Service Inventory:
    - UserService: create, paginated list, lookup, partial update, delete
    - PostService: the same plus author filter and unpaginated tag listing

Error policy:
    Services reclassify exactly two gateway errors:
        RecordNotFoundError   → NotFoundError  (update, delete)
        UniqueViolationError  → ConflictError  (create)
    Everything else propagates unchanged to `postboard.error_handlers`.
"""

from postboard.services.pagination import DEFAULT_LIMIT, DEFAULT_OFFSET, build_page
from postboard.services.post_service import PostService, get_post_service
from postboard.services.user_service import UserService, get_user_service

__all__ = [
    "DEFAULT_LIMIT",
    "DEFAULT_OFFSET",
    "PostService",
    "UserService",
    "build_page",
    "get_post_service",
    "get_user_service",
]
