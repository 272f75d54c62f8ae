"""Repository exceptions."""

from __future__ import annotations

from typing import Any


class RepositoryError(Exception):
    """The database returned something the repository cannot work with.

    Surfaces as a 500; it signals a broken invariant rather than bad input.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        rendered = ", ".join(f"{key}={value!r}" for key, value in self.details.items())
        return f"{self.message} ({rendered})"


__all__ = ["RepositoryError"]
