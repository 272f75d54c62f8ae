"""Cached settings loaders.

Each domain is read and validated once per process. Tests that change the
environment call ``clear_all_caches()`` afterwards, or build a settings
object directly (``CatalogSettings(max_tags=3)``).
"""

from __future__ import annotations

from collections.abc import Callable
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field

from .app import AppSettings
from .catalog import CatalogSettings
from .logs import LoggingSettings
from .postgres import PostgresSettings

_loaders: list[Callable[..., object]] = []


def _cached[T](factory: Callable[[], T]) -> Callable[[], T]:
    loader = lru_cache(maxsize=1)(factory)
    _loaders.append(loader)
    return loader


@_cached
def get_app_settings() -> AppSettings:
    return AppSettings()


@_cached
def get_db_settings() -> PostgresSettings:
    return PostgresSettings()


@_cached
def get_logging_settings() -> LoggingSettings:
    return LoggingSettings()


@_cached
def get_catalog_settings() -> CatalogSettings:
    return CatalogSettings()


class Settings(BaseModel):
    """All domains in one object, e.g. ``get_settings().catalog.max_tags``.

    Each domain keeps its own env prefix and source order.
    """

    model_config = ConfigDict(frozen=True)

    app: AppSettings = Field(default_factory=get_app_settings)
    db: PostgresSettings = Field(default_factory=get_db_settings)
    logging: LoggingSettings = Field(default_factory=get_logging_settings)
    catalog: CatalogSettings = Field(default_factory=get_catalog_settings)


@_cached
def get_settings() -> Settings:
    return Settings()


def clear_all_caches() -> None:
    for loader in _loaders:
        loader.cache_clear()  # type: ignore[attr-defined]
