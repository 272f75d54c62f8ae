"""Validation rules for resource commands.

Rules are plain functions yielding ``(field, message)`` pairs. The
``validated`` decorator runs them before a mutating service method and
raises a single CommandValidationException listing every violation, so the
handler body only ever sees valid input.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Iterator
from functools import wraps
from typing import TYPE_CHECKING, Concatenate, ParamSpec, Protocol, TypeVar

from catalog_service.core.exceptions import CommandValidationException

if TYPE_CHECKING:
    from collections.abc import Awaitable, Sequence

    from catalog_service.core.settings.catalog import CatalogSettings


class ResourceFields(Protocol):
    """Fields shared by the create and update commands."""

    name: str
    description: str | None
    tags: tuple[str, ...] | None


type Violation = tuple[str, str]
type Rule = Callable[[ResourceFields, CatalogSettings], Iterator[Violation]]


def name_rule(command: ResourceFields, limits: CatalogSettings) -> Iterator[Violation]:
    if not command.name or not command.name.strip():
        yield "name", "'Name' must not be empty."
    if command.name and len(command.name) > limits.name_max_length:
        yield (
            "name",
            f"The length of 'Name' must be {limits.name_max_length} characters or fewer.",
        )


def description_rule(command: ResourceFields, limits: CatalogSettings) -> Iterator[Violation]:
    if command.description is not None and len(command.description) > limits.description_max_length:
        yield (
            "description",
            f"The length of 'Description' must be {limits.description_max_length} "
            "characters or fewer.",
        )


def tags_rule(command: ResourceFields, limits: CatalogSettings) -> Iterator[Violation]:
    tags = command.tags
    if tags is None:
        return

    if len(tags) > limits.max_tags:
        yield "tags", f"A resource can have a maximum of {limits.max_tags} tags."

    for index, label in enumerate(tags):
        if not label.strip():
            yield f"tags[{index}]", "Tag label cannot be empty or whitespace."
        if len(label) > limits.tag_label_max_length:
            yield (
                f"tags[{index}]",
                f"Tag label cannot exceed {limits.tag_label_max_length} characters.",
            )

    # Exact match: "React" and "react" are different labels
    if any(count > 1 for count in Counter(tags).values()):
        yield "tags", "Duplicate tag labels are not allowed."


RESOURCE_RULES: tuple[Rule, ...] = (name_rule, description_rule, tags_rule)


def collect_errors(
    command: ResourceFields,
    limits: CatalogSettings,
    rules: Sequence[Rule] = RESOURCE_RULES,
) -> dict[str, list[str]]:
    """Run every rule and group the messages by field, in rule order."""
    errors: dict[str, list[str]] = {}
    for rule in rules:
        for field, message in rule(command, limits):
            errors.setdefault(field, []).append(message)
    return errors


def ensure_valid(
    command: ResourceFields,
    limits: CatalogSettings,
    rules: Sequence[Rule] = RESOURCE_RULES,
) -> None:
    """Raise CommandValidationException if any rule is violated."""
    errors = collect_errors(command, limits, rules)
    if errors:
        raise CommandValidationException(errors)


class _HasLimits(Protocol):
    limits: CatalogSettings


S = TypeVar("S", bound=_HasLimits)
C = TypeVar("C", bound=ResourceFields)
P = ParamSpec("P")
R = TypeVar("R")


def validated(
    method: Callable[Concatenate[S, C, P], Awaitable[R]],
) -> Callable[Concatenate[S, C, P], Awaitable[R]]:
    """Validate the command argument of a service method before it runs.

    The owning service exposes its limits as ``self.limits``.

    Example:
        class ResourceService(BaseService):
            @validated
            async def create(self, command: CreateResource) -> Success[ResourceResponse]:
                ...
    """

    @wraps(method)
    async def wrapper(self: S, command: C, *args: P.args, **kwargs: P.kwargs) -> R:
        ensure_valid(command, self.limits)
        return await method(self, command, *args, **kwargs)

    return wrapper


__all__ = [
    "RESOURCE_RULES",
    "ResourceFields",
    "Rule",
    "collect_errors",
    "description_rule",
    "ensure_valid",
    "name_rule",
    "tags_rule",
    "validated",
]
