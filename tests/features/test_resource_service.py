"""Tests for the resources service layer."""

from __future__ import annotations

from uuid import uuid4

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_service.core.exceptions import CommandValidationException
from catalog_service.core.settings import CatalogSettings
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
from catalog_service.features.resources.models import Resource, resource_tags
from catalog_service.features.resources.service import ResourceService
from catalog_service.features.tags.models import Tag
from catalog_service.features.tags.reconciler import TagReconciler


class FlakyReconciler(TagReconciler):
    """Raise a unique-label violation for the first ``failures`` calls."""

    def __init__(self, failures: int) -> None:
        super().__init__()
        self.failures = failures
        self.calls = 0

    async def reconcile(self, session, labels):  # type: ignore[override]
        self.calls += 1
        if self.calls <= self.failures:
            raise IntegrityError(
                "INSERT INTO tags", {}, Exception("UNIQUE constraint failed: tags.label")
            )
        return await super().reconcile(session, labels)


def _service(session: AsyncSession, **kwargs) -> ResourceService:
    return ResourceService(session, limits=CatalogSettings(tag_conflict_retries=1), **kwargs)


async def _count(session: AsyncSession, table) -> int:
    return (await session.execute(select(func.count()).select_from(table))).scalar_one()


async def _labels(service: ResourceService, resource_id) -> list[str]:
    outcome = await service.get_resource(GetResource(id=resource_id, expand_tags=True))
    assert isinstance(outcome, Found)
    return [tag.label for tag in outcome.value.tags]


@pytest.mark.asyncio
async def test_create_returns_fresh_id_and_unexpanded_tags(db_session: AsyncSession) -> None:
    service = _service(db_session)

    first = await service.create_resource(CreateResource(name="N", tags=("react",)))
    second = await service.create_resource(CreateResource(name="M"))

    assert isinstance(first, Success)
    assert isinstance(second, Success)
    assert first.value.id != second.value.id
    assert "tags" not in first.value.model_fields_set
    assert first.value.tags is None

    fetched = await service.get_resource(GetResource(id=first.value.id))
    assert isinstance(fetched, Found)
    assert fetched.value.name == "N"
    assert fetched.value.created_at == first.value.created_at


@pytest.mark.asyncio
async def test_same_label_reuses_tag_across_resources(db_session: AsyncSession) -> None:
    service = _service(db_session)

    a = await service.create_resource(CreateResource(name="A", tags=("x",)))
    b = await service.create_resource(CreateResource(name="B", tags=("x",)))

    got_a = await service.get_resource(GetResource(id=a.value.id, expand_tags=True))
    got_b = await service.get_resource(GetResource(id=b.value.id, expand_tags=True))

    assert got_a.value.tags[0].id == got_b.value.tags[0].id
    assert await _count(db_session, Tag) == 1


@pytest.mark.asyncio
async def test_create_rejects_invalid_command_before_writing(db_session: AsyncSession) -> None:
    service = _service(db_session)

    with pytest.raises(CommandValidationException) as exc_info:
        await service.create_resource(CreateResource(name=" ", tags=("React", "React")))

    assert exc_info.value.errors == {
        "name": ["'Name' must not be empty."],
        "tags": ["Duplicate tag labels are not allowed."],
    }
    assert await _count(db_session, Resource) == 0
    assert await _count(db_session, Tag) == 0


@pytest.mark.asyncio
async def test_update_without_tags_keeps_associations(db_session: AsyncSession) -> None:
    service = _service(db_session)
    created = await service.create_resource(CreateResource(name="N", tags=("a", "b")))

    outcome = await service.update_resource(
        UpdateResource(id=created.value.id, name="Renamed", description="D")
    )

    assert isinstance(outcome, Success)
    assert outcome.value.name == "Renamed"
    assert outcome.value.description == "D"
    assert "tags" not in outcome.value.model_fields_set
    assert await _labels(service, created.value.id) == ["a", "b"]


@pytest.mark.asyncio
async def test_update_with_empty_tags_clears_associations(db_session: AsyncSession) -> None:
    service = _service(db_session)
    created = await service.create_resource(CreateResource(name="N", tags=("a", "b")))

    outcome = await service.update_resource(UpdateResource(id=created.value.id, name="N", tags=()))

    assert isinstance(outcome, Success)
    assert await _labels(service, created.value.id) == []
    assert await _count(db_session, resource_tags) == 0
    # Tags stay around for reuse
    assert await _count(db_session, Tag) == 2


@pytest.mark.asyncio
async def test_update_with_tags_replaces_set_exactly(db_session: AsyncSession) -> None:
    service = _service(db_session)
    created = await service.create_resource(CreateResource(name="N", tags=("old", "a")))

    await service.update_resource(UpdateResource(id=created.value.id, name="N", tags=("a", "b")))

    assert await _labels(service, created.value.id) == ["a", "b"]
    assert await _count(db_session, resource_tags) == 2


@pytest.mark.asyncio
async def test_update_overwrites_description_with_none(db_session: AsyncSession) -> None:
    service = _service(db_session)
    created = await service.create_resource(CreateResource(name="N", description="text"))

    outcome = await service.update_resource(UpdateResource(id=created.value.id, name="N"))

    assert outcome.value.description is None


@pytest.mark.asyncio
async def test_update_missing_resource_is_not_found(db_session: AsyncSession) -> None:
    service = _service(db_session)
    missing = uuid4()

    outcome = await service.update_resource(UpdateResource(id=missing, name="N", tags=("a",)))

    assert outcome == NotFound(missing)
    assert await _count(db_session, Resource) == 0
    assert await _count(db_session, Tag) == 0


@pytest.mark.asyncio
async def test_delete_removes_resource_but_keeps_tags(db_session: AsyncSession) -> None:
    service = _service(db_session)
    created = await service.create_resource(CreateResource(name="N", tags=("shared",)))

    outcome = await service.delete_resource(DeleteResource(id=created.value.id))

    assert outcome == Success(None)
    assert await service.get_resource(GetResource(id=created.value.id)) == NotFound(
        created.value.id
    )
    assert await _count(db_session, resource_tags) == 0
    assert await _count(db_session, Tag) == 1


@pytest.mark.asyncio
async def test_delete_missing_resource_is_not_found(db_session: AsyncSession) -> None:
    missing = uuid4()

    assert await _service(db_session).delete_resource(DeleteResource(id=missing)) == NotFound(
        missing
    )


@pytest.mark.asyncio
async def test_list_expands_and_filters(db_session: AsyncSession) -> None:
    service = _service(db_session)
    await service.create_resource(CreateResource(name="untagged"))
    await service.create_resource(CreateResource(name="tagged", tags=("a",)))

    expanded = await service.list_resources(ListResources(expand_tags=True))
    filtered = await service.list_resources(ListResources(tag_filters=("a",)))

    assert {r.name: [t.label for t in r.tags] for r in expanded} == {
        "untagged": [],
        "tagged": ["a"],
    }
    assert [r.name for r in filtered] == ["tagged"]
    assert all("tags" not in r.model_fields_set for r in filtered)


@pytest.mark.asyncio
async def test_conflict_is_retried_once_then_succeeds(db_session: AsyncSession) -> None:
    reconciler = FlakyReconciler(failures=1)
    service = _service(db_session, reconciler=reconciler)

    outcome = await service.create_resource(CreateResource(name="N", tags=("a",)))

    assert isinstance(outcome, Success)
    assert reconciler.calls == 2
    assert await _labels(service, outcome.value.id) == ["a"]


@pytest.mark.asyncio
async def test_persistent_conflict_surfaces_without_writes(db_session: AsyncSession) -> None:
    reconciler = FlakyReconciler(failures=2)
    service = _service(db_session, reconciler=reconciler)

    outcome = await service.create_resource(CreateResource(name="N", tags=("a",)))

    assert isinstance(outcome, Conflict)
    assert outcome.labels == ("a",)
    assert reconciler.calls == 2
    assert await _count(db_session, Resource) == 0


@pytest.mark.asyncio
async def test_update_conflict_leaves_resource_untouched(db_session: AsyncSession) -> None:
    created = await _service(db_session).create_resource(CreateResource(name="N", tags=("a",)))
    service = _service(db_session, reconciler=FlakyReconciler(failures=2))

    outcome = await service.update_resource(
        UpdateResource(id=created.value.id, name="Changed", tags=("b",))
    )

    assert isinstance(outcome, Conflict)
    fetched = await service.get_resource(GetResource(id=created.value.id, expand_tags=True))
    assert fetched.value.name == "N"
    assert [t.label for t in fetched.value.tags] == ["a"]
