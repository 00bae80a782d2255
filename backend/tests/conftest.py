"""
Social API: Test Configuration (conftest.py)
============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock AsyncSession for service unit tests
    ├── sample_post_data: Column values of a stored post
    ├── sqlite_engine: In-memory SQLite database with the posts table
    ├── db_session_factory: Patches the app's session factory onto sqlite_engine
    └── test_client: HTTPX AsyncClient talking to the app through ASGITransport
"""

import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DB_SCHEMA"] = ""  # SQLite has no schemas
os.environ["DB_CREATE_TABLES"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from social_api import database


def make_row(**fields):
    """A stand-in for a SQLAlchemy Row: attribute access plus `_mapping`."""
    row = MagicMock()
    row._mapping = dict(fields)
    for name, value in fields.items():
        setattr(row, name, value)
    return row


def make_result(first=None, rows=None, rowcount=None, scalar=None):
    """A stand-in for the Result returned by AsyncSession.execute()."""
    result = MagicMock()
    result.first.return_value = first
    result.all.return_value = rows or []
    result.rowcount = rowcount
    result.scalar_one.return_value = scalar
    return result


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_post(mock_db_session):
            mock_db_session.execute.return_value = make_result(first=row)
            result = await post_service.get_post(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.connection = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    return session


@pytest.fixture
def sample_post_data():
    """Column values of a visible post, as selected by the service."""
    return {
        "id": 7,
        "content": "hello world",
        "likes": 5,
        "created": datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc),
    }


@pytest_asyncio.fixture
async def sqlite_engine():
    """
    In-memory SQLite engine with the posts table created.

    StaticPool keeps the single in-memory connection alive across sessions.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await database.init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def db_session_factory(sqlite_engine, monkeypatch):
    """Points the application's per-request sessions at sqlite_engine."""
    factory = async_sessionmaker(sqlite_engine, class_=AsyncSession, expire_on_commit=False)
    monkeypatch.setattr(database, "async_session_factory", factory)
    return factory


@pytest_asyncio.fixture
async def test_client(db_session_factory):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/posts.get")
            assert response.status_code == 200
    """
    from social_api.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
