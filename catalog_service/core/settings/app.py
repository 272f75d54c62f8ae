"""HTTP application settings."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import SettingsConfigDict

from .base import ServiceSettings

Environment = Literal["development", "staging", "production", "test"]


class AppSettings(ServiceSettings):
    """FastAPI and server settings (``APP_`` prefix).

    Example: APP_API_PREFIX=/api/v2, APP_DISABLE_DOCS=true
    """

    config_domain = "app"

    service_name: str = Field(
        default="catalog-service",
        pattern=r"^[a-z0-9]+(-[a-z0-9]+)*$",
        description="Name used in logs and metrics.",
    )
    title: str = "Resource Catalog API"
    description: str = "Create, read, update, delete and list tagged resources"
    version: str = Field(default="1.0.0", pattern=r"^\d+\.\d+\.\d+(-[a-zA-Z0-9]+)?$")
    environment: Environment = "development"
    api_prefix: str = Field(
        default="/api/v1",
        pattern=r"^/.*$",
        description="Mount point of the resources router.",
    )

    debug: bool = False
    docs_url: str = "/docs"
    redoc_url: str = "/redoc"
    openapi_url: str = "/openapi.json"
    disable_docs: bool = Field(default=False, description="Hide Swagger, ReDoc and the schema.")

    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)

    model_config = SettingsConfigDict(env_prefix="APP_")

    @model_validator(mode="after")
    def _no_debug_in_production(self) -> AppSettings:
        if self.environment == "production" and self.debug:
            msg = "Debug mode cannot be enabled in production environment"
            raise ValueError(msg)
        return self

    def _doc_path(self, path: str) -> str | None:
        return None if self.disable_docs else path

    def get_docs_url(self) -> str | None:
        return self._doc_path(self.docs_url)

    def get_redoc_url(self) -> str | None:
        return self._doc_path(self.redoc_url)

    def get_openapi_url(self) -> str | None:
        return self._doc_path(self.openapi_url)
