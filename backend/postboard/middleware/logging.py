"""
Postboard Backend — Access Logging Middleware
===============================================

What:  Two log lines per HTTP request: one on arrival, one once the
       response body has been fully sent.
How:   Starlette BaseHTTPMiddleware wrapping the whole application. The
       completion line is written when the response's body iterator is
       exhausted (or closed), so the elapsed time covers streaming too.
       The start time is a local of `dispatch`, so concurrent requests
       never share timing state.
When:  Outermost user middleware (added last in `create_app`).

Log Format:
    GET /users - 127.0.0.1 - curl/8.4.0 - Request started
    GET /users - 200 - 12ms - Request completed

    A missing User-Agent renders as an empty segment ("- 127.0.0.1 -  - ").
    A request that dies with an unhandled exception still gets its
    completion line, with status 500, before the exception continues to
    the server error handler.
"""

import logging
import time
from typing import AsyncIterator

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("postboard.access")


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Logs request start and completion with status and elapsed milliseconds."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # Why getattr: request.client may be None in testing
        client_ip = getattr(request.client, "host", None) or "unknown"
        user_agent = request.headers.get("user-agent") or ""
        method = request.method
        path = request.url.path

        start_time = time.perf_counter()
        logger.info("%s %s - %s - %s - Request started", method, path, client_ip, user_agent)

        try:
            response = await call_next(request)
        except Exception:
            self._log_completion(method, path, 500, start_time)
            raise

        response.body_iterator = self._log_after_body(
            response.body_iterator, method, path, response.status_code, start_time
        )
        return response

    async def _log_after_body(
        self, body: AsyncIterator[bytes], method: str, path: str, status: int, start_time: float
    ) -> AsyncIterator[bytes]:
        try:
            async for chunk in body:
                yield chunk
        finally:
            self._log_completion(method, path, status, start_time)

    @staticmethod
    def _log_completion(method: str, path: str, status: int, start_time: float) -> None:
        elapsed_ms = int((time.perf_counter() - start_time) * 1000)

        # 5xx → ERROR, 4xx → WARNING, everything else → INFO
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s - %d - %dms - Request completed",
            method,
            path,
            status,
            elapsed_ms,
        )
