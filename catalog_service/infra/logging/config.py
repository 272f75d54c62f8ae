"""Logging setup: dictConfig for loggers, one QueueHandler on root.

Records from every logger propagate to the root QueueHandler, which adds
the request log context and enqueues them. A QueueListener thread hands
them to the console and rotating file handlers, so request handling never
blocks on I/O.
"""

from __future__ import annotations

import atexit
import logging
import logging.config
from dataclasses import dataclass
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path
from queue import SimpleQueue
from typing import TYPE_CHECKING, Any

from catalog_service.infra.logging.context import ContextInjectingFilter
from catalog_service.infra.logging.formatters import JSONFormatter

if TYPE_CHECKING:
    from catalog_service.core.settings.logs import LoggingSettings

logger = logging.getLogger(__name__)

TEXT_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


@dataclass
class _QueueLogging:
    handler: QueueHandler
    listener: QueueListener

    def stop(self) -> None:
        # stop() drains whatever is still queued before returning
        self.listener.stop()
        logging.getLogger().removeHandler(self.handler)


_active: _QueueLogging | None = None
_configured = False


def shutdown() -> None:
    """Flush queued records and detach the queue handler. Safe to call twice."""
    global _active, _configured
    if _active is not None:
        _active.stop()
        _active = None
    _configured = False


atexit.register(shutdown)


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
    **overrides: Any,
) -> None:
    """Configure logging from settings once per process.

    Args:
        log_settings: Settings to use; loaded with get_logging_settings() if omitted.
        force: Configure again even if already done.
        **overrides: Replace individual configure_logging() arguments.
    """
    if _configured and not force:
        return

    if log_settings is None:
        from catalog_service.core.settings import get_logging_settings

        log_settings = get_logging_settings()

    configure_logging(**{**log_settings.to_logging_kwargs(), **overrides})


def configure_logging(
    log_level: str = "INFO",
    *,
    service_name: str = "catalog-service",
    json_logs: bool = True,
    console_enabled: bool = True,
    console_level: str | None = None,
    file_path: str | Path | None = None,
    file_level: str | None = None,
    file_max_bytes: int = 10 * 1024 * 1024,
    file_backup_count: int = 5,
    include_context: bool = True,
    capture_warnings: bool = True,
    include_process_info: bool = False,
    include_thread_info: bool = False,
    include_uvicorn: bool = True,
) -> None:
    """Replace the current logging configuration.

    ``file_path=None`` disables the file handler. Handler levels default to
    ``log_level``.

    Example:
        configure_logging(**get_logging_settings().to_logging_kwargs())
    """
    global _configured

    shutdown()
    logging.captureWarnings(capture_warnings)

    loggers: dict[str, Any] = {}
    if include_uvicorn:
        loggers = {name: {"handlers": [], "propagate": True} for name in UVICORN_LOGGERS}

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "root": {"level": log_level.upper(), "handlers": []},
            "loggers": loggers,
        }
    )

    if json_logs:
        formatter: logging.Formatter = JSONFormatter(
            static={"service": service_name},
            include_process_info=include_process_info,
            include_thread_info=include_thread_info,
        )
    else:
        formatter = logging.Formatter(TEXT_FORMAT)

    outputs: list[logging.Handler] = []
    if console_enabled:
        outputs.append(_with(logging.StreamHandler(), formatter, console_level or log_level))
    if file_path:
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        rotating = RotatingFileHandler(
            path, maxBytes=file_max_bytes, backupCount=file_backup_count, encoding="utf-8"
        )
        outputs.append(_with(rotating, formatter, file_level or log_level))

    _install_queue(outputs, include_context)
    _configured = True
    logger.debug(
        "Logging configured",
        extra={"json": json_logs, "console": console_enabled, "file": str(file_path or "")},
    )


def _with(handler: logging.Handler, formatter: logging.Formatter, level: str) -> logging.Handler:
    handler.setFormatter(formatter)
    handler.setLevel(level.upper())
    return handler


def _install_queue(outputs: list[logging.Handler], include_context: bool) -> None:
    global _active

    queue: SimpleQueue[logging.LogRecord] = SimpleQueue()
    handler = QueueHandler(queue)
    if include_context:
        # Runs before enqueueing, while the request's contextvars are current
        handler.addFilter(ContextInjectingFilter())

    listener = QueueListener(queue, *outputs, respect_handler_level=True)
    listener.start()
    logging.getLogger().addHandler(handler)
    _active = _QueueLogging(handler=handler, listener=listener)


__all__ = ["configure_logging", "setup_logging", "shutdown"]
