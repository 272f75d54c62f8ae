"""Per-request log context kept in a ContextVar.

Middleware sets fields such as ``request_id``; ContextInjectingFilter,
installed on the root QueueHandler, copies them onto every record. Each
asyncio task sees its own copy.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any

_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})


def set_log_context(**fields: Any) -> None:
    """Add ``fields`` to the context of the current task.

    Example:
        set_log_context(request_id="abc-123")
        logger.info("Processing request")  # record carries request_id
    """
    _log_context.set({**_log_context.get(), **fields})


def get_log_context() -> dict[str, Any]:
    return dict(_log_context.get())


def remove_from_log_context(*keys: str) -> None:
    _log_context.set({k: v for k, v in _log_context.get().items() if k not in keys})


def clear_log_context() -> None:
    _log_context.set({})


class ContextInjectingFilter(logging.Filter):
    """Copy the log context onto records without overwriting their own attributes."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _log_context.get().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


__all__ = [
    "ContextInjectingFilter",
    "clear_log_context",
    "get_log_context",
    "remove_from_log_context",
    "set_log_context",
]
