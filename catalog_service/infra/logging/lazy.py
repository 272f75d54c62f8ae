"""Logger adapter whose message and args may be zero-argument callables.

The callables run only when the level is enabled, so expensive DEBUG
formatting costs nothing in production.
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any


class LazyLoggerAdapter(logging.LoggerAdapter):
    """Resolve callable messages on demand and merge bound context into ``extra``.

    Example:
        logger = get_lazy_logger(__name__)
        logger.debug(lambda: f"Reconciled {len(tags)} tags: {[t.label for t in tags]}")
    """

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        # Explicit extras win over the bound ones
        kwargs["extra"] = {**(self.extra or {}), **kwargs.get("extra", {})}
        return msg, kwargs

    def log(self, level: int, msg: Any, *args: Any, **kwargs: Any) -> None:
        if not self.isEnabledFor(level):
            return
        if callable(msg):
            msg = msg()
        args = tuple(arg() if callable(arg) else arg for arg in args)
        super().log(level, msg, *args, **kwargs)


def get_lazy_logger(name: str, **context: Any) -> LazyLoggerAdapter:
    """Return a lazy adapter for ``logging.getLogger(name)`` with ``context`` bound."""
    return LazyLoggerAdapter(logging.getLogger(name), context)


__all__ = ["LazyLoggerAdapter", "get_lazy_logger"]
