"""Mounts feature routers: /metrics at the root, the catalog under api_prefix."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from catalog_service.core.settings import get_app_settings
from catalog_service.features.metrics.router import router as metrics_router
from catalog_service.features.resources.router import router as resources_router

if TYPE_CHECKING:
    from fastapi import FastAPI

    from catalog_service.core.settings import AppSettings

logger = logging.getLogger(__name__)


def setup_routers(app: FastAPI, app_settings: AppSettings | None = None) -> None:
    prefix = (app_settings or get_app_settings()).api_prefix
    app.include_router(metrics_router)
    app.include_router(resources_router, prefix=prefix)
    logger.debug("Routers registered", extra={"api_prefix": prefix})
