"""
Postboard Backend — Bearer Token Gate
=======================================

What:  Admits a request to a protected route only when it carries
       `Authorization: Bearer <token>` with a configured token.
How:   Runs as the first stage of the route pipeline, before the body is
       parsed and before any resolver touches the database.

Decisions:
    no header / empty header            → "Token de autorización requerido"
    "malformed-token", "Basic x",
    "Bearer", "Bearer a b", unknown     → "Token de autorización inválido"
    "Bearer <configured token>"         → admitted

No identity is attached to the request.
"""

import logging
from typing import Awaitable, Callable, Optional

from starlette.requests import Request
from starlette.responses import Response

from postboard.config import settings
from postboard.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

TOKEN_REQUIRED = "Token de autorización requerido"
TOKEN_INVALID = "Token de autorización inválido"


def extract_bearer_token(header: Optional[str]) -> str:
    """
    Return the token from a `Bearer <token>` header value.

    Raises:
        AuthenticationError: header missing, empty or not of that exact shape
    """
    if not header:
        raise AuthenticationError(TOKEN_REQUIRED)

    parts = header.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise AuthenticationError(TOKEN_INVALID)
    return parts[1]


def verify_token(token: str) -> None:
    if token not in settings.api_token_set:
        raise AuthenticationError(TOKEN_INVALID)


async def authenticate(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Pipeline stage: check the credential, then hand over to the next stage."""
    try:
        verify_token(extract_bearer_token(request.headers.get("authorization")))
    except AuthenticationError as e:
        logger.info("Rejected %s %s: %s", request.method, request.url.path, e.message)
        raise
    return await call_next(request)
