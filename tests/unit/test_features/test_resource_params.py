"""Unit tests for query parameter parsing."""

from __future__ import annotations

import pytest

from catalog_service.features.resources.params import EXPAND_TAGS, parse_csv, parse_expand


@pytest.mark.unit
@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, frozenset()),
        ("", frozenset()),
        ("tags", frozenset({EXPAND_TAGS})),
        ("TAGS", frozenset({EXPAND_TAGS})),
        (" Tags , owner,,", frozenset({EXPAND_TAGS})),
        ("owner,comments", frozenset()),
    ],
)
def test_parse_expand(raw, expected):
    assert parse_expand(raw) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, None),
        ("", None),
        (" , ,", None),
        ("a,b", ["a", "b"]),
        ("React, react ,,x", ["React", "react", "x"]),
    ],
)
def test_parse_csv(raw, expected):
    assert parse_csv(raw) == expected
