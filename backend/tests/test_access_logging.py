"""
Postboard Backend — Access Log Tests
======================================

What we test:
    ✅ Entry line: method, path, client IP, user agent
    ✅ Exit line: status and elapsed milliseconds
    ✅ Exit line is written after the last body chunk, not when headers go out
    ✅ Missing user agent renders as an empty segment
    ✅ Unhandled exceptions still log a 500 completion line
"""

import logging
import re

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from starlette.responses import StreamingResponse

from postboard.error_handlers import register_exception_handlers
from postboard.middleware.logging import AccessLogMiddleware

ACCESS_LOGGER = "postboard.access"


def access_lines(caplog):
    return [r.getMessage() for r in caplog.records if r.name == ACCESS_LOGGER]


class TestAccessLog:

    @pytest.mark.asyncio
    async def test_entry_and_exit_lines(self, test_client, auth_headers, caplog):
        caplog.set_level(logging.INFO, logger=ACCESS_LOGGER)

        await test_client.get("/users", headers={**auth_headers, "User-Agent": "pytest-agent"})

        started, completed = access_lines(caplog)
        assert started == "GET /users - 127.0.0.1 - pytest-agent - Request started"
        assert re.fullmatch(r"GET /users - 200 - \d+ms - Request completed", completed)

    @pytest.mark.asyncio
    async def test_empty_user_agent(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger=ACCESS_LOGGER)
        test_client.headers.pop("user-agent", None)

        await test_client.get("/")

        assert access_lines(caplog)[0] == "GET / - 127.0.0.1 -  - Request started"

    @pytest.mark.asyncio
    async def test_error_status_is_logged(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger=ACCESS_LOGGER)

        await test_client.get("/users")

        assert re.fullmatch(r"GET /users - 401 - \d+ms - Request completed", access_lines(caplog)[1])

    @pytest.mark.asyncio
    async def test_unhandled_exception_logs_500(self, caplog):
        caplog.set_level(logging.INFO, logger=ACCESS_LOGGER)

        app = FastAPI()
        register_exception_handlers(app)
        app.add_middleware(AccessLogMiddleware)

        @app.get("/boom")
        async def boom():
            raise RuntimeError("boom")

        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/boom")

        assert response.status_code == 500
        assert response.json()["message"] == "Error interno del servidor"
        assert re.fullmatch(r"GET /boom - 500 - \d+ms - Request completed", access_lines(caplog)[-1])

    @pytest.mark.asyncio
    async def test_exit_line_follows_last_body_chunk(self, caplog):
        caplog.set_level(logging.INFO)
        stream_logger = logging.getLogger("tests.stream")

        app = FastAPI()
        app.add_middleware(AccessLogMiddleware)

        async def chunks():
            yield b"first,"
            yield b"second,"
            stream_logger.info("sending last chunk")
            yield b"last"

        @app.get("/stream")
        async def stream():
            return StreamingResponse(chunks(), media_type="text/plain")

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/stream")

        assert response.text == "first,second,last"
        names = [r.name for r in caplog.records if r.name in (ACCESS_LOGGER, "tests.stream")]
        assert names == [ACCESS_LOGGER, "tests.stream", ACCESS_LOGGER]
        assert re.fullmatch(r"GET /stream - 200 - \d+ms - Request completed", access_lines(caplog)[-1])
