"""
Persistence gateway: typed CRUD per entity over async SQLAlchemy.

Services and resolvers depend on these classes, never on the session
directly.
"""

from postboard.gateway.errors import (
    ForeignKeyViolationError,
    GatewayError,
    GatewayValidationError,
    KnownGatewayError,
    RecordNotFoundError,
    UniqueViolationError,
)
from postboard.gateway.base import Gateway
from postboard.gateway.posts import PostGateway
from postboard.gateway.users import UserGateway

__all__ = [
    "ForeignKeyViolationError",
    "Gateway",
    "GatewayError",
    "GatewayValidationError",
    "KnownGatewayError",
    "PostGateway",
    "RecordNotFoundError",
    "UniqueViolationError",
    "UserGateway",
]
