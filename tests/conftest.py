"""Pytest configuration for all tests."""

import os
from typing import AsyncGenerator

# Settings are read when the app module is imported
os.environ.setdefault("CONTENTBASE_ENVIRONMENT", "testing")
os.environ.setdefault("CONTENTBASE_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("CONTENTBASE_LOG_FORMAT", "console")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from contentbase.application.services import CollectionEngine
from contentbase.core.logging import configure_logging
from contentbase.infrastructure.persistence.database import Base
from contentbase.infrastructure.persistence.execution_gateway import ExecutionGateway


@pytest.fixture(scope="session", autouse=True)
def configured_logging() -> None:
    """Apply the application's structlog processor chain."""
    configure_logging()


@pytest_asyncio.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create an in-memory SQLite engine with the system tables.

    StaticPool keeps a single connection so every statement sees the same
    in-memory database.
    """
    # Register models with Base.metadata
    from contentbase.infrastructure.persistence import models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def gateway(async_engine: AsyncEngine) -> ExecutionGateway:
    """Execution gateway over the in-memory engine."""
    return ExecutionGateway(async_engine)


@pytest.fixture
def collection_engine(gateway: ExecutionGateway) -> CollectionEngine:
    """Collection engine over the in-memory engine."""
    return CollectionEngine(gateway)


@pytest_asyncio.fixture
async def client(async_engine: AsyncEngine) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client bound to the in-memory engine."""
    from contentbase.infrastructure.api.app import app
    from contentbase.infrastructure.persistence.database import get_engine

    app.dependency_overrides[get_engine] = lambda: async_engine

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides = {}


@pytest.fixture
def people_schema() -> dict:
    """A schema covering every allow-listed type."""
    return {
        "name": {"type": "text", "constraints": "NOT NULL"},
        "age": {"type": "integer", "constraints": "DEFAULT 18"},
        "active": {"type": "boolean"},
        "joined_at": {"type": "timestamp"},
        "birthday": {"type": "date"},
        "balance": {"type": "numeric"},
        "profile": {"type": "structured-document"},
    }
