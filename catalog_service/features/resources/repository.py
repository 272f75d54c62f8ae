"""Repository for the resources feature."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from catalog_service.core.database.repository import BaseRepository
from catalog_service.features.resources.models import Resource
from catalog_service.features.tags.models import Tag

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession


class ResourceRepository(BaseRepository[Resource]):
    """Repository for Resource model.

    Inherits get/create/delete from BaseRepository; tags are
    always eager-loaded by the model relationship.
    """

    def __init__(self) -> None:
        """Initialize with Resource model."""
        super().__init__(Resource)

    async def list_newest_first(
        self,
        session: AsyncSession,
        *,
        tag_labels: Sequence[str] | None = None,
    ) -> Sequence[Resource]:
        """List resources ordered by creation time, newest first.

        Args:
            session: Database session
            tag_labels: When non-empty, keep only resources carrying at least
                one of these labels (exact match)

        Returns:
            Sequence of resources; empty when no resource matches
        """
        stmt = select(Resource)
        if tag_labels:
            stmt = stmt.where(Resource.tags.any(Tag.label.in_(tag_labels)))
        stmt = stmt.order_by(Resource.created_at.desc())

        result = await session.execute(stmt)
        resources = result.scalars().all()

        self._lazy.debug(
            lambda: f"db.list_newest_first(tag_labels={tag_labels!r}) -> {len(resources)} items"
        )
        return resources


# Factory function for dependency injection
_resource_repository: ResourceRepository | None = None


def get_resource_repository() -> ResourceRepository:
    """Get the shared ResourceRepository instance."""
    global _resource_repository
    if _resource_repository is None:
        _resource_repository = ResourceRepository()
    return _resource_repository


__all__ = ["ResourceRepository", "get_resource_repository"]
