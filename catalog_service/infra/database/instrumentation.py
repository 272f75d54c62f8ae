"""Statement timing for the database_query_duration_seconds histogram."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

from sqlalchemy import event

from catalog_service.infra.metrics.prometheus import database_query_duration_seconds

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

_KEYWORDS = ("SELECT", "INSERT", "UPDATE", "DELETE", "SAVEPOINT", "RELEASE", "ROLLBACK")


def statement_operation(statement: str) -> str:
    """Histogram label for a SQL statement: its leading keyword, or OTHER."""
    head = statement.lstrip()[:10].upper()
    return next((kw for kw in _KEYWORDS if head.startswith(kw)), "OTHER")


def instrument_engine(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, "before_cursor_execute")
    def _start(conn: Any, cursor: Any, statement: str, params: Any, context: Any, many: Any) -> None:
        context._catalog_started = time.perf_counter()

    @event.listens_for(engine.sync_engine, "after_cursor_execute")
    def _stop(conn: Any, cursor: Any, statement: str, params: Any, context: Any, many: Any) -> None:
        elapsed = time.perf_counter() - context._catalog_started
        database_query_duration_seconds.labels(
            operation=statement_operation(statement)
        ).observe(elapsed)
