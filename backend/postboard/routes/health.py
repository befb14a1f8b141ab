"""
Postboard Backend — Health and Root Routes
============================================

What:  `GET /health` for load balancer health checks and `GET /` greeting.
How:   Health runs `SELECT 1` on the request's session and reports
       connectivity, version and uptime. Both routes are public; health is
       on the passthrough list and is served without the envelope.

Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from postboard import __version__
from postboard.database import get_db_session
from postboard.middleware.pipeline import PipelineRoute, route_options
from postboard.schemas.common import EnvelopeResponse, HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"], route_class=PipelineRoute)

_start_time = time.time()


@router.get(
    "/",
    responses={200: {"model": EnvelopeResponse}},
    summary="Greeting",
)
@route_options(public=True)
async def root() -> str:
    return "Hello World!"


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Probes the database with SELECT 1. Not wrapped in the response envelope.",
)
@route_options(public=True, envelope=False)
async def health_check(
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
