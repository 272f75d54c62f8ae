"""Tags feature: reusable labels shared between resources."""

from catalog_service.features.tags.models import Tag
from catalog_service.features.tags.reconciler import TagReconciler, get_tag_reconciler
from catalog_service.features.tags.repository import TagRepository, get_tag_repository
from catalog_service.features.tags.schemas import TagResponse

__all__ = [
    "Tag",
    "TagReconciler",
    "TagRepository",
    "TagResponse",
    "get_tag_reconciler",
    "get_tag_repository",
]
