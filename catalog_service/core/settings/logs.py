"""Logging settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import SettingsConfigDict

from .base import ServiceSettings

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingSettings(ServiceSettings):
    """Handlers, levels and record content (``LOG_`` prefix).

    Example: LOG_LEVEL=debug, LOG_JSON_LOGS=false, LOG_FILE_ENABLED=true
    """

    config_domain = "logging"

    service_name: str = "catalog-service"
    level: LogLevel = "INFO"
    json_logs: bool = Field(default=True, description="Emit JSON Lines records.")

    console_enabled: bool = True
    console_level: LogLevel | None = Field(default=None, description="Defaults to ``level``.")

    file_enabled: bool = False
    file_path: Path = Path("logs/catalog-service.log.jsonl")
    file_level: LogLevel | None = Field(default=None, description="Defaults to ``level``.")
    file_max_bytes: int = Field(default=10 * 1024 * 1024, ge=1024)
    file_backup_count: int = Field(default=5, ge=0, le=100)

    include_context: bool = Field(
        default=True, description="Add the request log context (request_id) to every record."
    )
    capture_warnings: bool = True
    include_process_info: bool = False
    include_thread_info: bool = False
    include_uvicorn: bool = Field(
        default=True, description="Send uvicorn loggers through the same handlers."
    )

    model_config = SettingsConfigDict(env_prefix="LOG_")

    @field_validator("level", "console_level", "file_level", mode="before")
    @classmethod
    def _upper(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    def to_logging_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``configure_logging``."""
        return {
            "service_name": self.service_name,
            "log_level": self.level,
            "json_logs": self.json_logs,
            "console_enabled": self.console_enabled,
            "console_level": self.console_level or self.level,
            "file_path": str(self.file_path) if self.file_enabled else None,
            "file_level": self.file_level or self.level,
            "file_max_bytes": self.file_max_bytes,
            "file_backup_count": self.file_backup_count,
            "include_context": self.include_context,
            "capture_warnings": self.capture_warnings,
            "include_process_info": self.include_process_info,
            "include_thread_info": self.include_thread_info,
            "include_uvicorn": self.include_uvicorn,
        }
