"""Unit tests for resource command validation rules."""

from __future__ import annotations

from uuid import uuid4

import pytest

from catalog_service.core.exceptions import CommandValidationException
from catalog_service.core.settings import CatalogSettings
from catalog_service.features.resources.commands import CreateResource, UpdateResource
from catalog_service.features.resources.validation import (
    collect_errors,
    ensure_valid,
    validated,
)

LIMITS = CatalogSettings()


@pytest.mark.unit
class TestResourceRules:
    def test_valid_command_has_no_errors(self):
        command = CreateResource(name="N", description="d" * 2000, tags=("a", "b"))

        assert collect_errors(command, LIMITS) == {}

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_name_is_rejected(self, name):
        errors = collect_errors(CreateResource(name=name), LIMITS)

        assert errors == {"name": ["'Name' must not be empty."]}

    def test_name_longer_than_limit_is_rejected(self):
        assert collect_errors(CreateResource(name="n" * 200), LIMITS) == {}

        errors = collect_errors(CreateResource(name="n" * 201), LIMITS)

        assert errors == {"name": ["The length of 'Name' must be 200 characters or fewer."]}

    def test_description_longer_than_limit_is_rejected(self):
        errors = collect_errors(CreateResource(name="N", description="d" * 2001), LIMITS)

        assert errors == {
            "description": ["The length of 'Description' must be 2000 characters or fewer."]
        }

    def test_more_than_max_tags_is_rejected(self):
        assert collect_errors(CreateResource(name="N", tags=tuple("abcdefghij")), LIMITS) == {}

        errors = collect_errors(CreateResource(name="N", tags=tuple("abcdefghijk")), LIMITS)

        assert errors == {"tags": ["A resource can have a maximum of 10 tags."]}

    def test_blank_and_long_labels_are_reported_per_entry(self):
        command = CreateResource(name="N", tags=("ok", " ", "x" * 51))

        errors = collect_errors(command, LIMITS)

        assert errors == {
            "tags[1]": ["Tag label cannot be empty or whitespace."],
            "tags[2]": ["Tag label cannot exceed 50 characters."],
        }

    def test_duplicate_labels_match_exactly(self):
        assert collect_errors(CreateResource(name="N", tags=("React", "react")), LIMITS) == {}

        errors = collect_errors(CreateResource(name="N", tags=("React", "React")), LIMITS)

        assert errors == {"tags": ["Duplicate tag labels are not allowed."]}

    def test_absent_and_empty_tags_are_valid(self):
        assert collect_errors(UpdateResource(id=uuid4(), name="N", tags=None), LIMITS) == {}
        assert collect_errors(UpdateResource(id=uuid4(), name="N", tags=()), LIMITS) == {}

    def test_all_violations_are_aggregated(self):
        command = CreateResource(name="", description="d" * 2001, tags=("a", "a"))

        errors = collect_errors(command, LIMITS)

        assert set(errors) == {"name", "description", "tags"}

    def test_limits_come_from_settings(self):
        limits = CatalogSettings(max_tags=2)

        errors = collect_errors(CreateResource(name="N", tags=("a", "b", "c")), limits)

        assert errors == {"tags": ["A resource can have a maximum of 2 tags."]}

    def test_ensure_valid_raises_with_errors(self):
        with pytest.raises(CommandValidationException) as exc_info:
            ensure_valid(CreateResource(name=""), LIMITS)

        assert exc_info.value.status_code == 400
        assert exc_info.value.errors == {"name": ["'Name' must not be empty."]}


@pytest.mark.unit
class TestValidatedDecorator:
    @pytest.mark.asyncio
    async def test_handler_is_skipped_when_invalid(self):
        calls = []

        class Handler:
            limits = LIMITS

            @validated
            async def handle(self, command):
                calls.append(command)
                return "done"

        handler = Handler()

        with pytest.raises(CommandValidationException):
            await handler.handle(CreateResource(name=""))
        assert calls == []

        assert await handler.handle(CreateResource(name="ok")) == "done"
        assert len(calls) == 1
