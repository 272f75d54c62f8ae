"""Common base for the per-domain settings classes."""

from __future__ import annotations

from typing import ClassVar

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from .yaml_sources import ConfDYamlConfigSettingsSource


class ServiceSettings(BaseSettings):
    """Frozen settings read from init kwargs, YAML, env, ``.env`` and secrets.

    Subclasses set ``env_prefix`` in their ``model_config`` and name their
    YAML domain in ``config_domain``.
    """

    config_domain: ClassVar[str]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """init > yaml > env > dotenv > secrets."""
        return (
            init_settings,
            ConfDYamlConfigSettingsSource(settings_cls, cls.config_domain),
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )
