"""Application exceptions rendered as RFC 7807 problem details.

Subclasses only set class-level defaults; any of them can be overridden
per instance.
"""

from __future__ import annotations

from typing import Any

from catalog_service.core.schemas.error import default_title


class AppException(Exception):
    """Base application exception.

    Attributes:
        status_code: HTTP status code for the error.
        detail: Human-readable error message.
        type: Problem type identifier.
        title: Short summary of the problem type.
        instance: URI reference of this occurrence; the request path if unset.
        extra: Members added to the problem document.

    Example:
        raise NotFoundException(
            "Resource with id 'abc123' was not found",
            type="resource-not-found",
            extra={"resource_id": "abc123"},
        )
    """

    status_code: int = 500
    type: str = "about:blank"
    title: str | None = None

    def __init__(
        self,
        detail: str,
        *,
        status_code: int | None = None,
        type: str | None = None,
        title: str | None = None,
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code or self.status_code
        self.type = type or self.type
        self.title = title or self.title or default_title(self.status_code)
        self.detail = detail
        self.instance = instance
        self.extra = extra or {}
        super().__init__(detail)


class NotFoundException(AppException):
    status_code = 404
    type = "not-found"


class BadRequestException(AppException):
    status_code = 400
    type = "bad-request"


class ConflictException(AppException):
    """A write lost a race with a concurrent request; retrying may succeed."""

    status_code = 409
    type = "conflict"


class CommandValidationException(BadRequestException):
    """A command broke one or more validation rules.

    Carries every violated rule grouped by field name, so a single
    response reports all problems at once.
    """

    type = "validation-error"
    title = "Validation Error"

    def __init__(
        self,
        errors: dict[str, list[str]],
        detail: str | None = None,
        instance: str | None = None,
    ) -> None:
        self.errors = {field: list(messages) for field, messages in errors.items()}
        super().__init__(
            detail or f"Validation failed for {len(self.errors)} field(s)",
            instance=instance,
            extra={"errors": self.errors},
        )


__all__ = [
    "AppException",
    "BadRequestException",
    "CommandValidationException",
    "ConflictException",
    "NotFoundException",
]
