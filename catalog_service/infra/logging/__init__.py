"""Structured logging: JSON records, request context, queue-based output.

Usage:
    logger = logging.getLogger(__name__)
    set_log_context(request_id="abc-123")
    logger.info("Resource created")  # record carries request_id

    get_lazy_logger(__name__).debug(lambda: f"Labels: {sorted(labels)}")
"""

from catalog_service.infra.logging.config import (
    configure_logging,
    setup_logging,
    shutdown,
)
from catalog_service.infra.logging.context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    remove_from_log_context,
    set_log_context,
)
from catalog_service.infra.logging.formatters import JSONFormatter
from catalog_service.infra.logging.lazy import LazyLoggerAdapter, get_lazy_logger

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "LazyLoggerAdapter",
    "clear_log_context",
    "configure_logging",
    "get_lazy_logger",
    "get_log_context",
    "remove_from_log_context",
    "set_log_context",
    "setup_logging",
    "shutdown",
]
