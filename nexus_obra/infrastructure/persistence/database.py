"""Async SQLAlchemy engine, sessions and the declarative Base.

Alembic owns the schema in deployed environments; with database_auto_create
the tables are created at startup instead (development and tests).

The engine is built on first use, not at import, so settings are only read
once the environment is final. dispose_engine() forgets it again.
"""

import logging
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from nexus_obra.core.config import get_settings

logger = logging.getLogger(__name__)

# Populated by _ensure_engine().
engine: Any = None
AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    """SQLite ignores FK actions (ON DELETE SET NULL) unless enabled per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _ensure_engine() -> None:
    """Create engine and AsyncSessionLocal on first use."""
    global engine, AsyncSessionLocal
    if AsyncSessionLocal is not None:
        return
    settings = get_settings()
    url = settings.database_url
    kwargs: dict[str, Any] = {"echo": settings.database_echo, "pool_pre_ping": True}
    is_sqlite = url.startswith("sqlite")
    if not is_sqlite:
        kwargs["pool_size"] = settings.db_pool_size if settings.db_pool_size is not None else 10
        kwargs["max_overflow"] = (
            settings.db_max_overflow if settings.db_max_overflow is not None else 20
        )
        kwargs["pool_recycle"] = 3600
    engine = create_async_engine(url, **kwargs)
    if is_sqlite:
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    AsyncSessionLocal = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


class Base(DeclarativeBase):
    """Declarative base for app_user, client, obra and their association tables."""


async def init_models() -> None:
    """Create all tables that do not exist yet (development and tests only)."""
    _ensure_engine()
    # Register mappers on Base.metadata before create_all.
    from nexus_obra.infrastructure.persistence import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created (or already exist)")


async def dispose_engine() -> None:
    """Dispose the engine and forget the session factory (next use recreates both)."""
    global engine, AsyncSessionLocal
    if engine is not None:
        await engine.dispose()
        logger.info("Database engine disposed")
    engine = None
    AsyncSessionLocal = None


async def get_db():
    """Session for read-only endpoints. Nothing is committed."""
    _ensure_engine()
    async with AsyncSessionLocal() as session:
        yield session


async def get_db_transactional():
    """Session wrapped in one transaction: committed when the endpoint returns,
    rolled back when it raises. Every mutating endpoint uses this.
    """
    _ensure_engine()
    async with AsyncSessionLocal() as session:
        async with session.begin():
            yield session
