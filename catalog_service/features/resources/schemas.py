"""Pydantic schemas for the resources feature.

Request bodies only check JSON types; length, emptiness and tag rules are
enforced by the command validation rules so every violation is reported
together in one response.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from catalog_service.features.tags.schemas import TagResponse


class ResourceCreate(BaseModel):
    """Payload used when creating a resource."""

    name: str = Field(description="Resource name (1-200 characters)")
    description: str | None = Field(default=None, description="Optional description (max 2000)")
    tags: list[str] | None = Field(
        default=None,
        description="Tag labels to attach (max 10, each 1-50 characters, no duplicates)",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "FastAPI docs",
                "description": "Official framework documentation",
                "tags": ["python", "web"],
            }
        },
    )


class ResourceUpdate(ResourceCreate):
    """Payload for replacing a resource.

    Name and description are always overwritten. Omitting ``tags`` (or
    sending null) keeps the current tags, ``[]`` removes them all, and a
    non-empty list replaces them.
    """


class ResourceResponse(BaseModel):
    """Representation returned from the API.

    ``tags`` is only set when expansion was requested; endpoints exclude
    unset fields, so an unexpanded resource has no ``tags`` key at all
    while an expanded one always carries a list.
    """

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None
    created_at: datetime
    tags: list[TagResponse] | None = None
