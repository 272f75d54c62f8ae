"""Database infrastructure: engine, session factory and lifecycle hooks."""

from catalog_service.infra.database.instrumentation import instrument_engine
from catalog_service.infra.database.session import (
    AsyncSessionLocal,
    close_database,
    engine,
    get_async_session,
    init_database,
)
from catalog_service.infra.database.sqlite import configure_sqlite_engine

__all__ = [
    "AsyncSessionLocal",
    "close_database",
    "configure_sqlite_engine",
    "engine",
    "get_async_session",
    "init_database",
    "instrument_engine",
]
