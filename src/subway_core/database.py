"""Engine and session wiring for the subway row store.

The backend is picked by ``settings.database_url``: asyncpg for PostgreSQL,
aiosqlite for SQLite.
"""

import re

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase


def normalize_database_url(url: str) -> str:
    """Rewrite libpq-style ``sslmode=`` query options into asyncpg's ``ssl=``."""
    return re.sub(r"sslmode=(\w+)", r"ssl=\1", url)


class Base(DeclarativeBase):
    pass


_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        from subway_core.config import settings

        _engine = create_async_engine(
            normalize_database_url(settings.database_url), echo=settings.echo_sql
        )
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Sessions keep loaded rows readable after commit."""
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(get_engine(), expire_on_commit=False)
    return _session_factory


async def init_db() -> None:
    """Create the stations, lines and sections tables if missing."""
    import subway_core.models  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
