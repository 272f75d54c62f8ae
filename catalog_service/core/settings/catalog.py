"""Resource catalog rules: field limits and tag conflict handling."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from .base import ServiceSettings


class CatalogSettings(ServiceSettings):
    """Validation limits and conflict policy (``CATALOG_`` prefix).

    The defaults equal the column sizes of the schema, which is also the
    upper bound; raising a limit further needs a migration.
    """

    config_domain = "catalog"

    name_max_length: int = Field(default=200, ge=1, le=200)
    description_max_length: int = Field(default=2000, ge=0, le=2000)
    max_tags: int = Field(default=10, ge=0, le=100, description="Maximum tags per resource.")
    tag_label_max_length: int = Field(default=50, ge=1, le=50)
    tag_conflict_retries: int = Field(
        default=1,
        ge=0,
        le=5,
        description="Extra reconciliation attempts after a unique-label conflict before answering 409.",
    )

    model_config = SettingsConfigDict(env_prefix="CATALOG_")
