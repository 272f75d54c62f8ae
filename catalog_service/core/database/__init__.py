"""ORM base, mixins and the generic repository."""

from __future__ import annotations

from catalog_service.core.database.base import (
    NAMING_CONVENTION,
    Base,
    CreatedAtMixin,
    UTCDateTime,
    UUIDPKMixin,
    utcnow,
)
from catalog_service.core.database.exceptions import RepositoryError
from catalog_service.core.database.repository import BaseRepository

__all__ = [
    "NAMING_CONVENTION",
    "Base",
    "BaseRepository",
    "CreatedAtMixin",
    "RepositoryError",
    "UTCDateTime",
    "UUIDPKMixin",
    "utcnow",
]
