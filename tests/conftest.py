"""Pytest configuration and fixtures for subway tests."""

import os
from collections.abc import AsyncGenerator
from uuid import UUID, uuid4

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

import subway_core.models  # noqa: F401 - registers tables on Base.metadata
from subway_core.database import Base
from subway_core.schemas import StationCreate
from subway_core.services import stations as station_service

# Use SQLite for local tests, PostgreSQL in CI (when TEST_DATABASE_URL is set)
TEST_DATABASE_URL = os.environ.get(
    "TEST_DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)

is_sqlite = TEST_DATABASE_URL.startswith("sqlite")


def _create_test_engine():
    if is_sqlite:
        # SQLite in-memory requires StaticPool to keep connection alive
        return create_async_engine(
            TEST_DATABASE_URL,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    # PostgreSQL settings - use NullPool to avoid event loop issues
    return create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)


@pytest_asyncio.fixture
async def session_factory():
    """A fresh schema per test, torn down afterwards."""
    engine = _create_test_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session for service and repository tests."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def make_station(db_session):
    """Factory creating persisted stations by name."""

    async def _make(name: str) -> UUID:
        station = await station_service.create_station(db_session, StationCreate(name=name))
        return station.id

    return _make


@pytest.fixture
def station_ids() -> dict[str, UUID]:
    """Stable in-memory station ids keyed by letter, for pure topology tests."""
    return {name: uuid4() for name in "ABCDEMXYZ"}
