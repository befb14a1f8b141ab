"""
Postboard Backend — Shared Pydantic Schemas
=============================================

What:  Base model configuration and the response shapes shared by every
       entity: pagination page, health, error body.

Wire format:
    Python attributes are snake_case; JSON keys are camelCase
    (`created_at` ↔ `createdAt`, `has_more` ↔ `hasMore`). Input accepts
    either spelling; output is always dumped by alias.
"""

from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for every API schema: camelCase aliases, ORM attribute loading."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class InputModel(CamelModel):
    """
    Base for request bodies.

    Unknown keys are a validation error (`extra_forbidden`), never dropped.
    """

    model_config = ConfigDict(extra="forbid")


def reject_null(value: Any) -> Any:
    """
    `mode="before"` validator body for update fields whose column is NOT NULL.

    Omitted fields never reach validators, so this only fires on an explicit
    `null` in the payload.
    """
    if value is None:
        raise PydanticCustomError("null_not_allowed", "Field may not be null")
    return value


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PageMeta(CamelModel):
    """
    Pagination state returned next to every list page.

    has_more is `offset + limit < total`.
    """

    total: int = Field(description="Rows matching the filter")
    limit: int = Field(description="Page size that was applied")
    offset: int = Field(description="Rows skipped before this page")
    has_more: bool = Field(description="Whether rows remain after this page")


class Page(CamelModel, Generic[T]):
    """Paginated result: `{data: [...], meta: {...}}`."""

    data: List[T]
    meta: PageMeta


class HealthResponse(CamelModel):
    """Health check body (served raw, outside the response envelope)."""

    status: str = Field(description="healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="connected or disconnected")
    uptime_seconds: float = Field(description="Seconds since the process started")


class ErrorResponse(BaseModel):
    """
    Error body produced by the error mapper (documentation only).

    Example:
        {
            "success": false,
            "message": "El registro ya existe",
            "error": {"code": "unique_violation", "meta": {"target": ["email"]}},
            "timestamp": "2024-01-15T12:00:00.000Z"
        }
    """

    success: bool = False
    message: str
    error: Dict[str, Any]
    timestamp: str


class EnvelopeResponse(BaseModel):
    """Success envelope produced by the response normalizer (documentation only)."""

    success: bool = True
    data: Any = None
    meta: Optional[PageMeta] = None
    message: Optional[str] = None
    timestamp: str
