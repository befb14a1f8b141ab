"""
Postboard Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_gateway:     AsyncMock gateway for service and resolver unit tests
    ├── make_user / make_post: attribute objects shaped like ORM rows
    ├── test_engine:      in-memory SQLite engine with the schema created
    │   ├── db_session:   AsyncSession on that engine (gateway tests)
    │   └── test_client:  HTTPX AsyncClient with get_db_session overridden
    └── auth_headers:     a valid bearer header
"""

import os

# Override settings for testing BEFORE any postboard imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["API_TOKENS"] = "valid-token,second-token"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import postboard.models  # noqa: F401
from postboard.database import Base, enable_sqlite_foreign_keys, get_db_session


# ══════════════════════════════════════════════════════════════════════════
# Unit-test Fixtures (no database)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_gateway():
    """
    Provides a mock gateway with every operation as an AsyncMock.

    Usage:
        async def test_find_one(mock_gateway, make_user):
            mock_gateway.find_unique.return_value = make_user(id=1)
    """
    gateway = AsyncMock()
    gateway.create = AsyncMock()
    gateway.find_many = AsyncMock(return_value=[])
    gateway.count = AsyncMock(return_value=0)
    gateway.find_unique = AsyncMock(return_value=None)
    gateway.update = AsyncMock()
    gateway.delete = AsyncMock()
    return gateway


@pytest.fixture
def make_user():
    """Builds an object with the attributes of a `User` row."""

    def _make(**overrides):
        now = datetime.now(timezone.utc)
        fields = {
            "id": 1,
            "email": "john@example.com",
            "name": "John Doe",
            "age": 30,
            "created_at": now,
            "updated_at": now,
        }
        fields.update(overrides)
        return SimpleNamespace(**fields)

    return _make


@pytest.fixture
def make_post(make_user):
    """Builds an object with the attributes of a `Post` row, author and tags included."""

    def _make(**overrides):
        now = datetime.now(timezone.utc)
        fields = {
            "id": 1,
            "title": "Test Post",
            "content": "Test content",
            "published": False,
            "author_id": 1,
            "created_at": now,
            "updated_at": now,
            "author": make_user(),
            "tags": [],
        }
        fields.update(overrides)
        return SimpleNamespace(**fields)

    return _make


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures (in-memory SQLite)
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_engine():
    """
    Provides an in-memory SQLite engine with every table created.

    StaticPool keeps a single connection, so every session sees the same
    in-memory database. Foreign keys are enforced like in PostgreSQL.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    Provides an async HTTP test client for endpoint testing.

    `get_db_session` is overridden with the same commit/rollback behavior,
    bound to the in-memory test database.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from postboard.main import app

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer valid-token"}
