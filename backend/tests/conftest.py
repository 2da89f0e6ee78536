"""
Noteful Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own in-memory SQLite database (aiosqlite,
       StaticPool so all sessions share the one connection) loaded with the
       seed data. API tests run the real app through httpx's ASGITransport
       with get_db_session overridden to use that database.

Fixture Hierarchy (all function-scoped):
    ├── engine: in-memory database with the schema created
    ├── session_factory: async_sessionmaker bound to engine, seed data committed
    ├── db_session: a session for service-level tests
    ├── mock_db_session: AsyncMock session for failure injection
    ├── seed_data: parsed seed/data.json
    └── test_client: httpx AsyncClient against the FastAPI app
"""

import os

# Must happen before noteful is imported: settings and the module-level
# engine are built at import time.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["API_PREFIX"] = "/api"

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from noteful.database import Base, get_db_session  # noqa: E402
from noteful.seed import load_seed_data, seed_database  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Well-known ids from seed/data.json
# ══════════════════════════════════════════════════════════════════════════

FOLDER_ARCHIVE = "111111111111111111111100"
FOLDER_DRAFTS = "111111111111111111111101"
TAG_BREED = "222222222222222222222200"
TAG_HYBRID = "222222222222222222222201"
TAG_FERAL = "222222222222222222222203"
NOTE_CATS = "000000000000000000000000"      # folder Archive, tags [breed, hybrid]
NOTE_NO_FOLDER = "000000000000000000000006"
MISSING_ID = "DOESNOTEXIST"                  # 12 bytes: well-formed, matches nothing
INVALID_ID = "NOT-A-VALID-ID"


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def seed_data():
    return load_seed_data()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine, seed_data):
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        await seed_database(session, seed_data)
        await session.commit()
    return factory


@pytest_asyncio.fixture
async def db_session(session_factory):
    """A session over the seeded database, for calling services directly."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.side_effect = [MagicMock(rowcount=1), OperationalError(...)]
    """
    session = AsyncMock()
    session.execute = AsyncMock(return_value=MagicMock(rowcount=0))
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient talking to the app, with the seeded test database.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from noteful.main import app

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
