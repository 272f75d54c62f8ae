"""Server entry point for catalog-service."""

from __future__ import annotations


def main() -> None:
    """Run the FastAPI application with uvicorn using configured host and port."""
    import uvicorn

    from catalog_service.core.settings import get_app_settings, get_logging_settings

    settings = get_app_settings()
    log_settings = get_logging_settings()

    uvicorn.run(
        "catalog_service.app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        access_log=settings.debug,
        log_level=log_settings.level.lower(),
    )


if __name__ == "__main__":
    main()
