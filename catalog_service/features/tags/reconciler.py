"""Resolve tag labels to tag records, creating the ones that are missing."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from catalog_service.core.database.exceptions import RepositoryError
from catalog_service.features.tags.repository import TagRepository, get_tag_repository
from catalog_service.infra.logging import get_lazy_logger
from catalog_service.infra.metrics.tracking import track_tags_created

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy.ext.asyncio import AsyncSession

    from catalog_service.features.tags.models import Tag

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)


class TagReconciler:
    """Get-or-create tags by label.

    Existing labels always resolve to their stored record, so two resources
    naming the same label share one tag. Work happens in the caller's
    transaction and is never committed here.
    """

    def __init__(self, repository: TagRepository | None = None) -> None:
        self._repository = repository or get_tag_repository()

    async def reconcile(self, session: AsyncSession, labels: Iterable[str]) -> list[Tag]:
        """Return one tag per distinct label, in the order the labels were given.

        Labels are matched exactly (case-sensitive). An empty input returns
        an empty list without touching the database.

        Raises:
            RepositoryError: If a label is still missing after insertion
            IntegrityError: If the unique label constraint is violated by a
                concurrent writer in a way the conflict-aware insert could not absorb
        """
        ordered = list(dict.fromkeys(labels))
        if not ordered:
            return []

        inserted = await self._repository.insert_missing(session, ordered)
        tags = await self._repository.list_by_labels(session, ordered)
        by_label = {tag.label: tag for tag in tags}

        missing = [label for label in ordered if label not in by_label]
        if missing:
            raise RepositoryError("Tags missing after reconciliation", details={"labels": missing})

        if inserted:
            track_tags_created(inserted)
            logger.info(
                "Tags created",
                extra={"count": inserted, "operation": "tags.reconcile"},
            )
        lazy_logger.debug(
            lambda: f"tags.reconcile({ordered!r}) -> {len(ordered) - inserted} reused, {inserted} created"
        )
        return [by_label[label] for label in ordered]


_tag_reconciler: TagReconciler | None = None


def get_tag_reconciler() -> TagReconciler:
    """Get the shared TagReconciler instance."""
    global _tag_reconciler
    if _tag_reconciler is None:
        _tag_reconciler = TagReconciler()
    return _tag_reconciler


__all__ = ["TagReconciler", "get_tag_reconciler"]
