"""Command and query handlers for resources."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import uuid4

from sqlalchemy.exc import IntegrityError

from catalog_service.core.database import utcnow
from catalog_service.core.services.base import BaseService
from catalog_service.core.settings import get_catalog_settings
from catalog_service.features.resources.commands import (
    Conflict,
    CreateResource,
    DeleteResource,
    Found,
    GetResource,
    ListResources,
    NotFound,
    Success,
    UpdateResource,
)
from catalog_service.features.resources.mapping import to_response
from catalog_service.features.resources.models import Resource
from catalog_service.features.resources.repository import (
    ResourceRepository,
    get_resource_repository,
)
from catalog_service.features.resources.validation import validated
from catalog_service.features.tags.reconciler import TagReconciler, get_tag_reconciler
from catalog_service.infra.metrics.tracking import track_resource_operation, track_tag_conflict
from catalog_service.utils.retry import RetryError, retry

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession

    from catalog_service.core.settings.catalog import CatalogSettings
    from catalog_service.features.resources.schemas import ResourceResponse
    from catalog_service.features.tags.models import Tag


class ResourceService(BaseService):
    """Create, update, delete, get and list resources within one session.

    Mutating handlers flush but never commit; the caller commits on
    ``Success`` so the resource row, new tags and associations land together.
    """

    def __init__(
        self,
        session: AsyncSession,
        repository: ResourceRepository | None = None,
        reconciler: TagReconciler | None = None,
        limits: CatalogSettings | None = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._repository = repository or get_resource_repository()
        self._reconciler = reconciler or get_tag_reconciler()
        self.limits = limits or get_catalog_settings()

    # ──────────────────────────────────────────────────────────────
    # Commands
    # ──────────────────────────────────────────────────────────────

    @validated
    async def create_resource(
        self, command: CreateResource
    ) -> Success[ResourceResponse] | Conflict:
        """Create a resource; the response never expands tags."""
        tags: list[Tag] = []
        if command.tags:
            reconciled = await self._reconcile_tags(command.tags)
            if isinstance(reconciled, Conflict):
                track_resource_operation("create", "conflict")
                return reconciled
            tags = reconciled

        resource = Resource(
            id=uuid4(),
            name=command.name,
            description=command.description,
            created_at=utcnow(),
            tags=tags,
        )
        created = await self._repository.create(self._session, resource)

        self.logger.info(
            "Resource created",
            extra={
                "resource_id": str(created.id),
                "tag_count": len(tags),
                "operation": "service.create_resource",
            },
        )
        track_resource_operation("create", "success")
        return Success(to_response(created, expand_tags=False))

    @validated
    async def update_resource(
        self, command: UpdateResource
    ) -> Success[ResourceResponse] | NotFound | Conflict:
        """Overwrite name and description and apply the tag-set semantics of the command."""
        resource = await self._repository.get(self._session, command.id)
        if resource is None:
            self._lazy.debug(lambda: f"service.update_resource({command.id}) -> not found")
            track_resource_operation("update", "not_found")
            return NotFound(command.id)

        new_tags: list[Tag] | None = None
        if command.tags is not None:
            new_tags = []
            if command.tags:
                reconciled = await self._reconcile_tags(command.tags)
                if isinstance(reconciled, Conflict):
                    track_resource_operation("update", "conflict")
                    return reconciled
                new_tags = reconciled

        resource.name = command.name
        resource.description = command.description
        if new_tags is not None:
            resource.tags = new_tags
        await self._session.flush()

        self.logger.info(
            "Resource updated",
            extra={
                "resource_id": str(resource.id),
                "tags_replaced": new_tags is not None,
                "operation": "service.update_resource",
            },
        )
        track_resource_operation("update", "success")
        return Success(to_response(resource, expand_tags=False))

    async def delete_resource(self, command: DeleteResource) -> Success[None] | NotFound:
        """Delete a resource and its associations; shared tags are kept."""
        resource = await self._repository.get(self._session, command.id)
        if resource is None:
            self._lazy.debug(lambda: f"service.delete_resource({command.id}) -> not found")
            track_resource_operation("delete", "not_found")
            return NotFound(command.id)

        await self._repository.delete(self._session, resource)
        track_resource_operation("delete", "success")
        return Success(None)

    # ──────────────────────────────────────────────────────────────
    # Queries
    # ──────────────────────────────────────────────────────────────

    async def get_resource(self, query: GetResource) -> Found[ResourceResponse] | NotFound:
        resource = await self._repository.get(self._session, query.id)
        if resource is None:
            self._lazy.debug(lambda: f"service.get_resource({query.id}) -> not found")
            return NotFound(query.id)
        return Found(to_response(resource, expand_tags=query.expand_tags))

    async def list_resources(self, query: ListResources) -> list[ResourceResponse]:
        resources = await self._repository.list_newest_first(
            self._session, tag_labels=query.tag_filters
        )
        self._lazy.debug(
            lambda: f"service.list_resources(expand_tags={query.expand_tags}, "
            f"tag_filters={query.tag_filters!r}) -> {len(resources)} items"
        )
        return [to_response(resource, expand_tags=query.expand_tags) for resource in resources]

    # ──────────────────────────────────────────────────────────────
    # Tag reconciliation with conflict policy
    # ──────────────────────────────────────────────────────────────

    async def _reconcile_tags(self, labels: Sequence[str]) -> list[Tag] | Conflict:
        """Reconcile labels inside a savepoint, retrying on unique-label conflicts.

        A failed attempt rolls back only its savepoint, leaving the rest of
        the transaction intact. When the retry budget is spent the outcome
        is ``Conflict`` and nothing from the attempts remains.
        """
        session = self._session
        reconciler = self._reconciler

        def note_conflict(exc: Exception, attempt: int) -> None:
            track_tag_conflict("retried")
            self.logger.warning(
                "Tag label conflict, retrying reconciliation",
                extra={"attempt": attempt, "error": str(exc), "operation": "service.reconcile_tags"},
            )

        @retry(
            max_attempts=self.limits.tag_conflict_retries + 1,
            initial_delay=0.0,
            jitter=False,
            exceptions=(IntegrityError,),
            on_retry=note_conflict,
        )
        async def reconcile_tags() -> list[Tag]:
            async with session.begin_nested():
                return await reconciler.reconcile(session, labels)

        try:
            return await reconcile_tags()
        except RetryError as exc:
            track_tag_conflict("exhausted")
            self.logger.warning(
                "Tag reconciliation gave up after conflicts",
                extra={
                    "attempts": exc.attempts,
                    "labels": list(labels),
                    "operation": "service.reconcile_tags",
                },
            )
            return Conflict(
                detail="Tag labels were modified concurrently; retry the request.",
                labels=tuple(labels),
            )


def get_resource_service(session: AsyncSession) -> ResourceService:
    """Build a ResourceService bound to ``session``."""
    return ResourceService(session)


__all__ = ["ResourceService", "get_resource_service"]
