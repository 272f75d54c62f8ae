"""Tests for statement timing hooks."""

from __future__ import annotations

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine

from catalog_service.infra.database.instrumentation import instrument_engine, statement_operation
from catalog_service.infra.metrics.prometheus import REGISTRY


@pytest.mark.unit
@pytest.mark.parametrize(
    ("statement", "expected"),
    [
        ("SELECT 1", "SELECT"),
        ("  insert into tags (label) values (?)", "INSERT"),
        ("SAVEPOINT sa_savepoint_1", "SAVEPOINT"),
        ("RELEASE SAVEPOINT sa_savepoint_1", "RELEASE"),
        ("PRAGMA foreign_keys=ON", "OTHER"),
    ],
)
def test_statement_operation(statement: str, expected: str) -> None:
    assert statement_operation(statement) == expected


@pytest.mark.unit
async def test_instrumented_engine_observes_statements() -> None:
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    instrument_engine(engine)
    labels = {"operation": "SELECT"}
    before = REGISTRY.get_sample_value("database_query_duration_seconds_count", labels) or 0.0

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    finally:
        await engine.dispose()

    assert REGISTRY.get_sample_value("database_query_duration_seconds_count", labels) == before + 1
