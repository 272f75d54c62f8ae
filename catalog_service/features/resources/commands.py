"""Commands, queries and their tagged outcomes for the resources feature.

Handlers never return ``None`` to mean "missing": every outcome is one of
the result types below and callers match on it explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID


# ──────────────────────────────────────────────────────────────
# Commands and queries
# ──────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class CreateResource:
    name: str
    description: str | None = None
    tags: tuple[str, ...] | None = None


@dataclass(frozen=True, slots=True)
class UpdateResource:
    """Replace name and description; ``tags`` selects how associations change.

    - ``None``: leave existing associations untouched
    - ``()``: remove every association
    - non-empty: replace associations with exactly these labels
    """

    id: UUID
    name: str
    description: str | None = None
    tags: tuple[str, ...] | None = None


@dataclass(frozen=True, slots=True)
class DeleteResource:
    id: UUID


@dataclass(frozen=True, slots=True)
class GetResource:
    id: UUID
    expand_tags: bool = False


@dataclass(frozen=True, slots=True)
class ListResources:
    """List newest first; a resource matches when it has any of ``tag_filters``."""

    expand_tags: bool = False
    tag_filters: tuple[str, ...] = field(default_factory=tuple)


# ──────────────────────────────────────────────────────────────
# Outcomes
# ──────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Found[T]:
    value: T


@dataclass(frozen=True, slots=True)
class Success[T]:
    value: T


@dataclass(frozen=True, slots=True)
class NotFound:
    id: UUID


@dataclass(frozen=True, slots=True)
class Conflict:
    """Tag labels could not be reconciled because of concurrent writers."""

    detail: str
    labels: tuple[str, ...] = ()


__all__ = [
    "Conflict",
    "CreateResource",
    "DeleteResource",
    "Found",
    "GetResource",
    "ListResources",
    "NotFound",
    "Success",
    "UpdateResource",
]
