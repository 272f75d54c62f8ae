"""Settings per domain (app, db, logging, catalog), loaded with pydantic-settings.

Sources, highest precedence first: init kwargs, YAML (``conf/<domain>.yaml``
then ``conf/<domain>.d/*.yaml``), environment, ``.env``, secrets directory.
"""

from __future__ import annotations

from .app import AppSettings
from .catalog import CatalogSettings
from .loader import (
    Settings,
    clear_all_caches,
    get_app_settings,
    get_catalog_settings,
    get_db_settings,
    get_logging_settings,
    get_settings,
)
from .logs import LoggingSettings
from .postgres import PostgresSettings

__all__ = [
    "AppSettings",
    "CatalogSettings",
    "LoggingSettings",
    "PostgresSettings",
    "Settings",
    "clear_all_caches",
    "get_app_settings",
    "get_catalog_settings",
    "get_db_settings",
    "get_logging_settings",
    "get_settings",
]
