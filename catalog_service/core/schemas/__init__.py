"""Shared API schemas."""

from catalog_service.core.schemas.error import (
    ProblemDetail,
    ValidationProblemDetail,
    default_title,
)

__all__ = ["ProblemDetail", "ValidationProblemDetail", "default_title"]
