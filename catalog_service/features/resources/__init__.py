"""Resources feature: catalog entries with reusable tags."""

from __future__ import annotations

from .models import Resource, resource_tags
from .repository import ResourceRepository, get_resource_repository
from .schemas import ResourceCreate, ResourceResponse, ResourceUpdate
from .service import ResourceService

__all__ = [
    "Resource",
    "ResourceCreate",
    "ResourceRepository",
    "ResourceResponse",
    "ResourceService",
    "ResourceUpdate",
    "get_resource_repository",
    "resource_tags",
]
