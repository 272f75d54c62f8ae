"""Import every model so Base.metadata is complete.

Alembic autogenerate and the SQLite bootstrap both rely on this module.
"""

from catalog_service.core.database import Base
from catalog_service.features.resources.models import Resource, resource_tags
from catalog_service.features.tags.models import Tag

__all__ = ["Base", "Resource", "Tag", "resource_tags"]
