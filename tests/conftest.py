"""
TaskHub Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   API tests build a fresh application per test with `create_app()`,
       backed by a throwaway SQLite file (aiosqlite) and its own in-memory
       session store. Service tests use a mocked AsyncSession instead.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock database session (no real DB needed)
    ├── test_settings:   Settings pointing at a temp SQLite database
    ├── test_app:        Application with tables created
    ├── client_factory:  Makes independent HTTPX clients (one cookie jar each)
    └── client:          A single HTTPX client
"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Override settings for testing BEFORE any app imports: importing
# taskhub.main builds the module-level app from the environment.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["BCRYPT_ROUNDS"] = "4"

from taskhub.config import Settings  # noqa: E402
from taskhub.database import Database  # noqa: E402
from taskhub.main import create_app  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Service-level fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = project
        result = await project_service.get_project(mock_db_session, 1, 7)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# API-level fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'taskhub_test.db'}",
        log_level="WARNING",
        bcrypt_rounds=4,
        session_ttl_seconds=3600,
    )


@pytest_asyncio.fixture
async def test_app(test_settings):
    database = Database.from_settings(test_settings)
    await database.create_all()
    app = create_app(settings=test_settings, database=database)
    yield app
    await database.dispose()


@pytest_asyncio.fixture
async def client_factory(test_app):
    """
    Returns a function that opens a new client against the same app.

    Each client keeps its own cookies, so two clients are two browsers:
    use one per user in ownership tests.
    """
    clients = []

    def make_client() -> AsyncClient:
        client = AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test")
        clients.append(client)
        return client

    yield make_client

    for client in clients:
        await client.aclose()


@pytest_asyncio.fixture
async def client(client_factory):
    return client_factory()
