"""Middleware configuration for the FastAPI application."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from catalog_service.app.middleware.metrics import MetricsMiddleware
from catalog_service.app.middleware.request_id import RequestIDMiddleware

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = logging.getLogger(__name__)


def configure_middleware(app: FastAPI) -> None:
    """Register middleware; the last one added runs first.

    RequestIDMiddleware is outermost so that metrics and handlers already
    see the request ID in the logging context.
    """
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)
    logger.info(
        "Middleware configured",
        extra={"middleware": ["RequestIDMiddleware", "MetricsMiddleware"]},
    )


__all__ = ["MetricsMiddleware", "RequestIDMiddleware", "configure_middleware"]
