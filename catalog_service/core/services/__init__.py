"""Service layer building blocks."""

from catalog_service.core.services.base import BaseService

__all__ = ["BaseService"]
