"""Generic repository over an AsyncSession passed into every call.

Repositories never commit; they add, flush and query inside whatever
transaction the caller opened. Queries a feature needs beyond these
basics live on its own subclass.

Example:
    class TagRepository(BaseRepository[Tag]):
        async def list_by_labels(self, session, labels):
            result = await session.execute(select(Tag).where(Tag.label.in_(labels)))
            return result.scalars().all()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from catalog_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


class BaseRepository[T]:
    """Lookup, insert and delete for one mapped class.

    INFO records go to ``repository.<Model>`` for writes; DEBUG records use
    the lazy logger so they cost nothing when DEBUG is off.
    """

    __slots__ = ("model", "_logger", "_lazy")

    def __init__(self, model: type[T]) -> None:
        self.model = model
        self._logger = logging.getLogger(f"repository.{model.__name__}")
        self._lazy = get_lazy_logger(f"repository.{model.__name__}")

    @property
    def _name(self) -> str:
        return self.model.__name__

    async def get(self, session: AsyncSession, id: Any) -> T | None:  # noqa: A002
        """Return the entity with primary key ``id``, or None."""
        instance = await session.get(self.model, id)
        self._lazy.debug(lambda: f"db.get: {self._name}({id}) -> {instance is not None}")
        return instance

    async def create(self, session: AsyncSession, instance: T) -> T:
        """Add ``instance`` and flush so its row and associations exist in the transaction."""
        session.add(instance)
        await session.flush()
        self._logger.info(
            "Entity created",
            extra={"entity": self._name, "id": str(getattr(instance, "id", None)), "operation": "db.create"},
        )
        return instance

    async def delete(self, session: AsyncSession, instance: T) -> None:
        """Delete ``instance``; association rows go with it, related entities stay."""
        entity_id = getattr(instance, "id", None)
        await session.delete(instance)
        await session.flush()
        self._logger.info(
            "Entity deleted",
            extra={"entity": self._name, "id": str(entity_id), "operation": "db.delete"},
        )


__all__ = ["BaseRepository"]
