"""Map persisted resources to their API representation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from catalog_service.features.resources.schemas import ResourceResponse
from catalog_service.features.tags.schemas import TagResponse

if TYPE_CHECKING:
    from catalog_service.features.resources.models import Resource


def to_response(resource: Resource, expand_tags: bool = False) -> ResourceResponse:
    """Build the response model for ``resource``.

    Without expansion the ``tags`` field is left unset (not an empty list),
    so callers can tell "not requested" apart from "requested, none found".
    """
    fields = {
        "id": resource.id,
        "name": resource.name,
        "description": resource.description,
        "created_at": resource.created_at,
    }
    if expand_tags:
        fields["tags"] = [TagResponse.model_validate(tag) for tag in resource.tags]
    return ResourceResponse(**fields)


__all__ = ["to_response"]
