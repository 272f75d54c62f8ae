"""Pydantic schemas for the tags feature."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class TagResponse(BaseModel):
    """Tag as it appears inside an expanded resource."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    label: str = Field(description="Case-sensitive unique label")
