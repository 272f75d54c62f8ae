"""Application factory and the module-level app uvicorn serves."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import FastAPI

from catalog_service.app.exception_handlers import configure_exception_handlers
from catalog_service.app.lifespan import lifespan
from catalog_service.app.middleware import configure_middleware
from catalog_service.app.router import setup_routers
from catalog_service.core.settings import get_app_settings

if TYPE_CHECKING:
    from catalog_service.core.settings import AppSettings


def create_app(settings: AppSettings | None = None) -> FastAPI:
    """Build the catalog API; ``settings`` defaults to the cached AppSettings."""
    settings = settings or get_app_settings()

    app = FastAPI(
        title=settings.title,
        description=settings.description,
        version=settings.version,
        debug=settings.debug,
        docs_url=settings.get_docs_url(),
        redoc_url=settings.get_redoc_url(),
        openapi_url=settings.get_openapi_url(),
        lifespan=lifespan,
    )
    configure_exception_handlers(app)
    configure_middleware(app)
    setup_routers(app, settings)
    return app


app = create_app()
