"""Repository for the tags feature."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite

from catalog_service.core.database.exceptions import RepositoryError
from catalog_service.core.database.repository import BaseRepository
from catalog_service.features.tags.models import Tag

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession

# Dialects whose INSERT supports ON CONFLICT DO NOTHING
_CONFLICT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class TagRepository(BaseRepository[Tag]):
    """Tag lookups and conflict-free bulk insertion by label."""

    def __init__(self) -> None:
        """Initialize with Tag model."""
        super().__init__(Tag)

    async def list_by_labels(
        self,
        session: AsyncSession,
        labels: Sequence[str],
    ) -> Sequence[Tag]:
        """Fetch every tag whose label is in ``labels`` with a single query."""
        if not labels:
            return []
        stmt = select(Tag).where(Tag.label.in_(labels))
        result = await session.execute(stmt)
        tags = result.scalars().all()

        self._lazy.debug(lambda: f"db.list_by_labels({list(labels)!r}) -> {len(tags)} found")
        return tags

    async def insert_missing(
        self,
        session: AsyncSession,
        labels: Sequence[str],
    ) -> int:
        """Insert a tag for each label that does not exist yet.

        Issues one ``INSERT ... ON CONFLICT (label) DO NOTHING`` so that a
        label created concurrently by another transaction is skipped instead
        of failing. Nothing is flushed from the ORM unit of work.

        Returns:
            Number of rows actually inserted

        Raises:
            RepositoryError: If the bound dialect has no conflict-aware insert
        """
        if not labels:
            return 0

        dialect = session.get_bind().dialect.name
        insert = _CONFLICT_INSERTS.get(dialect)
        if insert is None:
            raise RepositoryError(
                "Dialect does not support conflict-free tag insertion",
                details={"dialect": dialect},
            )

        stmt = (
            insert(Tag.__table__)
            .values([{"id": uuid4(), "label": label} for label in labels])
            .on_conflict_do_nothing(index_elements=["label"])
        )
        result = await session.execute(stmt)
        inserted = max(result.rowcount or 0, 0)

        self._lazy.debug(
            lambda: f"db.insert_missing({len(labels)} labels) -> {inserted} inserted"
        )
        return inserted


# Factory function for dependency injection
_tag_repository: TagRepository | None = None


def get_tag_repository() -> TagRepository:
    """Get the shared TagRepository instance."""
    global _tag_repository
    if _tag_repository is None:
        _tag_repository = TagRepository()
    return _tag_repository


__all__ = ["TagRepository", "get_tag_repository"]
