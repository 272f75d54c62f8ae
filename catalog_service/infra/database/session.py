"""Process-wide async engine and session factory.

PostgreSQL is reached through psycopg3; with ``DB_ENABLED=false`` the
engine points at a local SQLite file through aiosqlite instead.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from catalog_service.core.settings import get_app_settings, get_db_settings
from catalog_service.infra.database.instrumentation import instrument_engine
from catalog_service.infra.database.sqlite import configure_sqlite_engine
from catalog_service.utils.retry import retry

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)

db_settings = get_db_settings()

engine = create_async_engine(
    db_settings.get_sqlalchemy_url(),
    **{
        **db_settings.sqlalchemy_engine_kwargs(),
        "echo": db_settings.echo or get_app_settings().debug,
    },
)
configure_sqlite_engine(engine)
instrument_engine(engine)

AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


@asynccontextmanager
async def get_async_session() -> AsyncIterator[AsyncSession]:
    """Session for work outside a request; anything not committed is rolled back."""
    async with AsyncSessionLocal() as session:
        yield session


@retry(
    max_attempts=db_settings.startup_retry_attempts,
    initial_delay=db_settings.startup_retry_delay,
    max_delay=db_settings.startup_retry_max_delay,
    stop_after_delay=db_settings.startup_retry_timeout,
)
async def init_database() -> None:
    """Check connectivity, retrying with backoff.

    On SQLite the schema is created here. PostgreSQL schemas belong to
    Alembic and are never touched.
    """
    url = engine.url.render_as_string(hide_password=True)
    logger.info("Connecting to database", extra={"url": url})

    async with engine.begin() as conn:
        await conn.execute(text("SELECT 1"))
        if db_settings.is_sqlite:
            from catalog_service.core.models import Base

            await conn.run_sync(Base.metadata.create_all)

    logger.info("Database reachable", extra={"url": url, "dialect": engine.dialect.name})


async def close_database() -> None:
    await engine.dispose()
    logger.info("Database connections closed")


__all__ = [
    "AsyncSessionLocal",
    "close_database",
    "engine",
    "get_async_session",
    "init_database",
]
