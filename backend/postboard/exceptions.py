"""
Postboard Backend — Domain Exception Hierarchy
================================================

What:  Application-level failures raised by resolvers, services and the
       auth gate, independent of any database error code.
How:   Each class carries a user-facing message, a machine-readable `code`,
       the HTTP `status_code` it maps to, and an optional context dict.
       `postboard.error_handlers` is the only place that reads
       `status_code` and writes a response.
Who:   Raised by resolvers, services and the auth gate.

Exception Hierarchy:
    PostboardError (base)
    ├── BadRequestError       → 400 (malformed identifier)
    ├── AuthenticationError   → 401 (missing or invalid bearer token)
    ├── NotFoundError         → 404 (resource does not exist)
    └── ConflictError         → 409 (uniqueness violated)

Persistence failures have their own hierarchy in `postboard.gateway.errors`.
"""

from typing import Any, Dict, Optional


class PostboardError(Exception):
    """
    Base exception for all Postboard domain errors.

    Attributes:
        message:  User-facing error description (safe to return in the API response)
        context:  Additional debug info (logged, NOT returned to the client)
    """

    code = "error"
    status_code = 500

    def __init__(
        self,
        message: str = "Error interno del servidor",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class BadRequestError(PostboardError):
    """
    Raised when a request parameter cannot be interpreted.

    When: A path or query id is empty or not a base-10 integer.
    HTTP: 400 Bad Request
    """

    code = "bad_request"
    status_code = 400

    def __init__(
        self,
        message: str = "Solicitud inválida",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AuthenticationError(PostboardError):
    """
    Raised by the auth gate when a protected route is called without a
    recognized bearer credential.

    HTTP: 401 Unauthorized (with `WWW-Authenticate: Bearer`)
    """

    code = "unauthorized"
    status_code = 401

    def __init__(
        self,
        message: str = "Token de autorización inválido",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(PostboardError):
    """
    Raised when a requested resource does not exist.

    When: Resolver lookup finds no row, `find_one` returns nothing, or the
          gateway reports a missing row on update/delete.
    HTTP: 404 Not Found

    Example:
        NotFoundError(resource="Usuario", resource_id=7)
        → "Usuario con ID 7 no encontrado"
    """

    code = "not_found"
    status_code = 404

    def __init__(
        self,
        resource: str = "Registro",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} no encontrado"
        if resource_id is not None:
            message = f"{resource} con ID {resource_id} no encontrado"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(PostboardError):
    """
    Raised by a service when the gateway reports a uniqueness violation
    on create.

    HTTP: 409 Conflict
    """

    code = "conflict"
    status_code = 409

    def __init__(
        self,
        message: str = "El registro ya existe",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
