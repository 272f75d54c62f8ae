"""Parsing of comma-separated query string parameters."""

from __future__ import annotations

EXPAND_TAGS = "tags"

# Tokens ``expand`` understands; anything else is ignored
EXPANDABLE = frozenset({EXPAND_TAGS})


def _split_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [entry.strip() for entry in value.split(",") if entry.strip()]


def parse_expand(expand: str | None) -> frozenset[str]:
    """Return the recognised expansions named in ``expand``, lower-cased.

    >>> sorted(parse_expand(" Tags ,foo,,"))
    ['tags']
    """
    return frozenset(token.lower() for token in _split_csv(expand)) & EXPANDABLE


def parse_csv(value: str | None) -> list[str] | None:
    """Split a comma-separated list, trimming entries and dropping empty ones.

    Returns ``None`` when nothing remains. Entries keep their case.

    >>> parse_csv("a, b,,")
    ['a', 'b']
    >>> parse_csv(" , ") is None
    True
    """
    entries = _split_csv(value)
    return entries or None


__all__ = ["EXPANDABLE", "EXPAND_TAGS", "parse_csv", "parse_expand"]
