"""
Postboard Backend — Error Mapper
==================================

What:  The single place where an exception becomes an HTTP error response.
How:   `map_exception` is a total function from any exception to
       (status, body); one handler registered for every exception family
       calls it, logs, and writes the JSONResponse.
Who:   Registered on the app by `create_app`.

Mapping (most specific first):
    UniqueViolationError       → 409 "El registro ya existe"
    RecordNotFoundError        → 404 "Registro no encontrado"
    ForeignKeyViolationError   → 400 "Error de referencia externa"
    GatewayValidationError     → 400 "Error de validación en la base de datos"
    other gateway errors       → 400 "Error en la base de datos"
    RequestValidationError     → 400 "Datos de entrada inválidos"
    PostboardError subclasses  → their status_code and message
    Starlette HTTPException    → its status and detail (unknown route, bad method)
    anything else              → 500 "Error interno del servidor"

Body:
    {
        "success": false,
        "message": "El registro ya existe",
        "error": {"code": "unique_violation", "meta": {"target": ["email"]}},
        "timestamp": "2024-01-15T12:00:00.000Z"
    }

Security: the 500 body never carries exception text; the stack trace is
logged server-side only.
"""

import logging
from typing import Any, Dict, Tuple

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from postboard.exceptions import AuthenticationError, PostboardError
from postboard.gateway.errors import (
    ForeignKeyViolationError,
    GatewayError,
    GatewayValidationError,
    RecordNotFoundError,
    UniqueViolationError,
)
from postboard.middleware.response import utc_timestamp

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Error interno del servidor"
VALIDATION_ERROR_MESSAGE = "Datos de entrada inválidos"

# Leading loc entries that name where a value came from, not the field itself
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


def _body(message: str, error: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "success": False,
        "message": message,
        "error": error,
        "timestamp": utc_timestamp(),
    }


def _gateway_error(code: str, meta: Any = None) -> Dict[str, Any]:
    error: Dict[str, Any] = {"code": code}
    if meta:
        error["meta"] = meta
    return error


def validation_fields(exc: RequestValidationError) -> list:
    """
    Flatten pydantic errors into `{field, constraint}` pairs.

    Example:
        loc ("body", "age"), type "greater_than_equal"
        → {"field": "age", "constraint": "greater_than_equal"}
    """
    fields = []
    for error in exc.errors():
        loc = list(error.get("loc", ()))
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        fields.append({
            "field": ".".join(str(part) for part in loc) or "body",
            "constraint": error.get("type", "value_error"),
        })
    return fields


def map_exception(exc: Exception) -> Tuple[int, Dict[str, Any]]:
    """
    Map any exception to (status code, response body). Never raises.

    Example:
        map_exception(NotFoundError("Usuario", 7))
        → (404, {"success": False, "message": "Usuario con ID 7 no encontrado",
                 "error": {"code": "not_found"}, "timestamp": "..."})
    """
    try:
        # ── Gateway errors (client-triggerable, never 500) ────────────────
        if isinstance(exc, UniqueViolationError):
            return 409, _body("El registro ya existe", _gateway_error(exc.code, exc.meta))
        if isinstance(exc, RecordNotFoundError):
            return 404, _body("Registro no encontrado", _gateway_error(exc.code, exc.meta))
        if isinstance(exc, ForeignKeyViolationError):
            return 400, _body("Error de referencia externa", _gateway_error(exc.code))
        if isinstance(exc, GatewayValidationError):
            return 400, _body(
                "Error de validación en la base de datos",
                {"code": exc.code, "message": exc.message},
            )
        if isinstance(exc, GatewayError):
            return 400, _body("Error en la base de datos", _gateway_error(exc.code, exc.meta))

        # ── Request validation ────────────────────────────────────────────
        if isinstance(exc, RequestValidationError):
            return 400, _body(
                VALIDATION_ERROR_MESSAGE,
                {"code": "validation_error", "meta": {"fields": validation_fields(exc)}},
            )

        # ── Domain errors ─────────────────────────────────────────────────
        if isinstance(exc, PostboardError):
            return exc.status_code, _body(exc.message, {"code": exc.code})

        # ── Framework HTTP errors ─────────────────────────────────────────
        if isinstance(exc, StarletteHTTPException):
            return exc.status_code, _body(str(exc.detail), {"code": "http_error"})
    except Exception:
        logger.error("Error mapper failed on %s", type(exc).__name__, exc_info=True)

    return 500, _body(INTERNAL_ERROR_MESSAGE, {"code": "internal_error"})


async def handle_exception(request: Request, exc: Exception) -> JSONResponse:
    """Exception handler shared by every registered exception family."""
    status_code, body = map_exception(exc)

    if status_code >= 500:
        logger.error(
            "Unhandled error on %s %s: %s",
            request.method,
            request.url.path,
            exc,
            exc_info=exc,
        )
    else:
        logger.warning(
            "%s %s → %d %s",
            request.method,
            request.url.path,
            status_code,
            body["message"],
        )

    headers = None
    if isinstance(exc, AuthenticationError):
        headers = {"WWW-Authenticate": "Bearer"}
    elif isinstance(exc, StarletteHTTPException):
        headers = exc.headers

    return JSONResponse(status_code=status_code, content=body, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Route every exception family through `handle_exception`.

    `Exception` is served by Starlette's ServerErrorMiddleware, outside the
    user middleware stack; the access log records those requests as 500
    before the exception reaches it.
    """
    for exc_class in (
        GatewayError,
        PostboardError,
        RequestValidationError,
        StarletteHTTPException,
        Exception,
    ):
        app.add_exception_handler(exc_class, handle_exception)
