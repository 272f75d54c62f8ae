"""API router for the resources feature.

Endpoints:
    GET    /resources               - List resources, newest first
    GET    /resources/{resource_id} - Get a single resource
    POST   /resources               - Create a resource
    PUT    /resources/{resource_id} - Replace a resource
    DELETE /resources/{resource_id} - Delete a resource

Query parameters:
    expand: comma-separated, case-insensitive; ``tags`` includes the tag list
    tags:   comma-separated labels; keeps resources with any of them

Without ``expand=tags`` the response has no ``tags`` key at all; with it the
key is always a list, possibly empty.
"""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_service.core.dependencies.database import get_db_session
from catalog_service.core.exceptions import ConflictException, NotFoundException
from catalog_service.core.schemas.error import ProblemDetail, ValidationProblemDetail
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
from catalog_service.features.resources.params import EXPAND_TAGS, parse_csv, parse_expand
from catalog_service.features.resources.schemas import (
    ResourceCreate,
    ResourceResponse,
    ResourceUpdate,
)
from catalog_service.features.resources.service import get_resource_service

router = APIRouter(prefix="/resources", tags=["resources"])

ExpandParam = Annotated[
    str | None,
    Query(description="Comma-separated expansions; 'tags' includes each resource's tags"),
]

_NOT_FOUND = {404: {"model": ProblemDetail, "description": "Resource not found"}}
_INVALID = {400: {"model": ValidationProblemDetail, "description": "Validation failed"}}
_CONFLICT = {409: {"model": ProblemDetail, "description": "Tag labels changed concurrently"}}


def _not_found(request: Request, resource_id: UUID | str) -> NotFoundException:
    return NotFoundException(
        detail=f"Resource with id '{resource_id}' was not found",
        type="resource-not-found",
        instance=request.url.path,
        extra={"resource_id": str(resource_id)},
    )


def parse_resource_id(resource_id: str, request: Request) -> UUID:
    """Path id as a UUID; anything else names no resource and is a 404.

    Runs before the body is validated, so a PUT to a malformed id is a 404
    whatever its payload.
    """
    try:
        return UUID(resource_id)
    except ValueError:
        raise _not_found(request, resource_id) from None


ResourceId = Annotated[UUID, Depends(parse_resource_id)]


def _conflict(request: Request, outcome: Conflict) -> ConflictException:
    return ConflictException(
        detail=outcome.detail,
        type="tag-label-conflict",
        instance=request.url.path,
        extra={"labels": list(outcome.labels)},
    )


def _labels(tags: list[str] | None) -> tuple[str, ...] | None:
    return None if tags is None else tuple(tags)


@router.get(
    "",
    response_model=list[ResourceResponse],
    response_model_exclude_unset=True,
    summary="List resources",
    description="Return all resources, newest first, optionally filtered by tag labels.",
)
async def list_resources(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    expand: ExpandParam = None,
    tags: Annotated[
        str | None,
        Query(description="Comma-separated labels; matches resources having any of them"),
    ] = None,
) -> list[ResourceResponse]:
    """List resources.

    An unknown filter label simply matches nothing.
    """
    query = ListResources(
        expand_tags=EXPAND_TAGS in parse_expand(expand),
        tag_filters=tuple(parse_csv(tags) or ()),
    )
    service = get_resource_service(session)
    return await service.list_resources(query)


@router.get(
    "/{resource_id}",
    response_model=ResourceResponse,
    response_model_exclude_unset=True,
    summary="Get a resource",
    description="Fetch a resource by its identifier.",
    responses=_NOT_FOUND,
)
async def get_resource(
    resource_id: ResourceId,
    request: Request,
    session: Annotated[AsyncSession, Depends(get_db_session)],
    expand: ExpandParam = None,
) -> ResourceResponse:
    service = get_resource_service(session)
    outcome = await service.get_resource(
        GetResource(id=resource_id, expand_tags=EXPAND_TAGS in parse_expand(expand))
    )
    match outcome:
        case Found(value=resource):
            return resource
        case NotFound():
            raise _not_found(request, outcome.id)


@router.post(
    "",
    response_model=ResourceResponse,
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create a resource",
    description="Create a resource; tag labels are reused when they already exist.",
    responses={**_INVALID, **_CONFLICT},
)
async def create_resource(
    payload: ResourceCreate,
    request: Request,
    response: Response,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> ResourceResponse:
    """Create a resource.

    The response carries a Location header pointing at the new resource and
    never expands tags.
    """
    service = get_resource_service(session)
    outcome = await service.create_resource(
        CreateResource(
            name=payload.name,
            description=payload.description,
            tags=_labels(payload.tags),
        )
    )
    match outcome:
        case Success(value=resource):
            await session.commit()
            response.headers["Location"] = str(
                request.url_for("get_resource", resource_id=str(resource.id))
            )
            return resource
        case Conflict():
            raise _conflict(request, outcome)


@router.put(
    "/{resource_id}",
    response_model=ResourceResponse,
    response_model_exclude_unset=True,
    summary="Replace a resource",
    description=(
        "Overwrite name and description. Omit tags to keep them, send [] to clear "
        "them, or send labels to replace them."
    ),
    responses={**_INVALID, **_NOT_FOUND, **_CONFLICT},
)
async def update_resource(
    resource_id: ResourceId,
    payload: ResourceUpdate,
    request: Request,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> ResourceResponse:
    service = get_resource_service(session)
    outcome = await service.update_resource(
        UpdateResource(
            id=resource_id,
            name=payload.name,
            description=payload.description,
            tags=_labels(payload.tags),
        )
    )
    match outcome:
        case Success(value=resource):
            await session.commit()
            return resource
        case NotFound():
            raise _not_found(request, outcome.id)
        case Conflict():
            raise _conflict(request, outcome)


@router.delete(
    "/{resource_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a resource",
    description="Delete a resource and its tag associations. Tags themselves are kept.",
    responses=_NOT_FOUND,
)
async def delete_resource(
    resource_id: ResourceId,
    request: Request,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> None:
    service = get_resource_service(session)
    outcome = await service.delete_resource(DeleteResource(id=resource_id))
    match outcome:
        case Success():
            await session.commit()
        case NotFound():
            raise _not_found(request, outcome.id)
