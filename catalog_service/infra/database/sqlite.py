"""Connection hooks that make SQLite behave like the production database.

pysqlite (and aiosqlite on top of it) starts transactions lazily and does
not know about SAVEPOINT, which breaks nested transactions; foreign keys
are off by default, which disables ON DELETE CASCADE. The hooks below
take over BEGIN and enable foreign key enforcement on every connection.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import event

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine


def configure_sqlite_engine(engine: AsyncEngine) -> None:
    """Register SQLite connection hooks on an async engine. No-op for other dialects."""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
        _ = connection_record
        # Disable the driver's own BEGIN handling; "begin" below emits it
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN")
