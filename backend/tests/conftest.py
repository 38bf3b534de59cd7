"""
CustomerBook Backend — Test Configuration (conftest.py)
=========================================================

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session:    AsyncMock session for service unit tests
    ├── sample_customer:    JSON body of a valid customer
    ├── session_factory:    in-memory SQLite database with the schema created
    ├── db_session:         one AsyncSession on that database
    └── test_client:        HTTPX AsyncClient → FastAPI app, sessions overridden
                            to the in-memory database
"""

import os
from datetime import datetime, timezone
from uuid import uuid4

# Must be set before app.config is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["API_BASE_URL"] = ""

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db_session
from app.models.customer import Customer  # noqa: F401


@pytest.fixture
def mock_db_session():
    """
    A MagicMock that simulates AsyncSession behavior.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = customer
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_customer():
    return {
        "name": "Ada",
        "dateOfBirth": "1990-01-01",
        "memberNumber": 42,
        "interests": "chess, code",
    }


@pytest.fixture
def customer_row():
    """A stand-in for a loaded Customer row."""
    row = MagicMock()
    row.id = uuid4()
    row.name = "Ada"
    row.date_of_birth = datetime(1990, 1, 1).date()
    row.member_number = 42
    row.interests = "chess, code"
    row.created_at = datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
    return row


@pytest_asyncio.fixture
async def session_factory():
    # StaticPool: every session shares the one in-memory connection
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient wired to the FastAPI app over ASGITransport.

    The HTML pages call the JSON API in-process through the same app, so
    they also see the overridden database.
    """
    from app.main import app

    async def override_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
