"""Startup and shutdown of process-wide resources.

Logging comes up first and goes down last, so the database steps in
between are always logged.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from catalog_service.core.settings import get_app_settings, get_catalog_settings
from catalog_service.infra.logging.config import setup_logging
from catalog_service.infra.logging.config import shutdown as shutdown_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # Imported here: the engine is built from settings on first import
    from catalog_service.infra.database.session import close_database, init_database

    settings = get_app_settings()
    setup_logging(force=True)
    logger.info(
        "Starting %s %s",
        settings.service_name,
        settings.version,
        extra={"environment": settings.environment},
    )

    try:
        await init_database()
    except Exception:
        logger.exception("Database unavailable, aborting startup")
        shutdown_logging()
        raise

    catalog = get_catalog_settings()
    logger.info(
        "Serving %s on %s:%s",
        settings.api_prefix or "/",
        settings.host,
        settings.port,
        extra={"max_tags": catalog.max_tags, "tag_conflict_retries": catalog.tag_conflict_retries},
    )
    try:
        yield
    finally:
        logger.info("Shutting down")
        await close_database()
        shutdown_logging()


__all__ = ["lifespan"]
