"""Database settings: PostgreSQL through psycopg3, or a local SQLite file.

``DB_ENABLED=false`` switches the service to ``sqlite+aiosqlite`` so it can
run without a PostgreSQL server. A complete ``DATABASE_URL`` takes
precedence over the individual ``DB_*`` connection fields.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import SettingsConfigDict
from sqlalchemy.engine import URL, make_url

from .base import ServiceSettings


class PostgresSettings(ServiceSettings):
    """Connection, pool and startup settings (``DB_`` prefix)."""

    config_domain = "db"

    enabled: bool = Field(
        default=True,
        description="Use PostgreSQL; when false the SQLite URL below is used.",
    )
    sqlite_url: str = Field(default="sqlite+aiosqlite:///./catalog.db")
    dsn: str | None = Field(
        default=None,
        alias="DATABASE_URL",
        description="Full SQLAlchemy URL; its parts override host, port, user, password and name.",
    )

    host: str = Field(default="localhost", min_length=1)
    port: int = Field(default=5432, ge=1, le=65535)
    user: str = Field(default="postgres", min_length=1)
    password: SecretStr = SecretStr("postgres")
    name: str = Field(default="catalog", min_length=1, description="Database name.")
    driver: str = "psycopg"
    application_name: str = Field(
        default="catalog-service",
        description="Reported to PostgreSQL, visible in pg_stat_activity.",
    )

    pool_size: int = Field(default=10, ge=1, le=100)
    max_overflow: int = Field(default=10, ge=0, le=100)
    pool_timeout: float = Field(default=30.0, gt=0)
    pool_recycle: int = Field(default=1800, ge=0, description="Seconds before a connection is replaced.")
    connect_timeout: int = Field(default=5, ge=1, le=60)
    echo: bool = Field(default=False, description="Log every SQL statement.")

    # Startup connectivity check
    startup_retry_attempts: int = Field(default=3, ge=1, le=20)
    startup_retry_delay: float = Field(default=2.0, ge=0.1, le=60.0)
    startup_retry_max_delay: float = Field(default=10.0, ge=0.1, le=120.0)
    startup_retry_timeout: float = Field(
        default=60.0,
        ge=5.0,
        le=300.0,
        description="Give up on startup after this many seconds of failed attempts.",
    )

    model_config = SettingsConfigDict(env_prefix="DB_", populate_by_name=True)

    @model_validator(mode="after")
    def _apply_dsn(self) -> PostgresSettings:
        # Frozen model: components are filled in with object.__setattr__
        if not self.dsn:
            return self

        url = make_url(self.dsn)
        overrides: dict[str, Any] = {
            "host": url.host,
            "port": url.port,
            "user": url.username,
            "name": url.database,
            "password": SecretStr(url.password) if url.password else None,
            "driver": url.get_driver_name() if "+" in url.drivername else None,
        }
        for field_name, value in overrides.items():
            if value:
                object.__setattr__(self, field_name, value)
        return self

    @property
    def is_sqlite(self) -> bool:
        return not self.enabled

    def postgres_url(self) -> URL:
        return URL.create(
            drivername=f"postgresql+{self.driver}",
            username=self.user,
            password=self.password.get_secret_value(),
            host=self.host,
            port=self.port,
            database=self.name,
            query={"application_name": self.application_name},
        )

    def get_sqlalchemy_url(self) -> str:
        """URL string for create_async_engine and Alembic, password included."""
        if self.is_sqlite:
            return self.sqlite_url
        return self.postgres_url().render_as_string(hide_password=False)

    def sqlalchemy_engine_kwargs(self) -> dict[str, Any]:
        """Engine options; pool sizing only applies to PostgreSQL."""
        if self.is_sqlite:
            return {"echo": self.echo}
        return {
            "echo": self.echo,
            "pool_size": self.pool_size,
            "max_overflow": self.max_overflow,
            "pool_timeout": self.pool_timeout,
            "pool_recycle": self.pool_recycle,
            "pool_pre_ping": True,
            "connect_args": {"connect_timeout": self.connect_timeout},
        }
