from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    create_async_engine,
    AsyncSession,
    async_sessionmaker
)
from sqlalchemy.pool import NullPool

from config.settings import get_settings
from database.models.base import Base

settings = get_settings()

Path(settings.PATH_TO_DB).parent.mkdir(parents=True, exist_ok=True)

SQLITE_DATABASE_URL = f"sqlite+aiosqlite:///{settings.PATH_TO_DB}"
sqlite_engine = create_async_engine(
    SQLITE_DATABASE_URL,
    echo=False,
    poolclass=NullPool
)
AsyncSQLiteSessionLocal = async_sessionmaker(
    sqlite_engine,
    class_=AsyncSession,
    expire_on_commit=False
)


@event.listens_for(sqlite_engine.sync_engine, "connect")
def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite leaves ON DELETE CASCADE inert unless enabled per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


async def get_sqlite_db() -> AsyncGenerator[AsyncSession, None]:
    """Get an async SQLite database session.

    FastAPI dependency yielding one session per request; the session is
    closed when the request finishes.

    Yields:
        AsyncSession: An async database session for SQLite operations.
    """
    async with AsyncSQLiteSessionLocal() as session:
        yield session


@asynccontextmanager
async def get_sqlite_db_contextmanager() -> AsyncGenerator[AsyncSession, None]:
    """Async context manager yielding an SQLite session outside a request."""
    async with AsyncSQLiteSessionLocal() as session:
        yield session


async def create_sqlite_tables() -> None:
    """Create every table that does not exist yet."""
    async with sqlite_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def reset_sqlite_database() -> None:
    """Drop and recreate all tables of the SQLite database."""
    async with sqlite_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
