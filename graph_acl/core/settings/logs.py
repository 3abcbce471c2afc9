"""Logging settings (``LOG_*`` environment, ``conf/logging.yaml``)."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_sources import create_logging_yaml_source

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

MiB = 1024 * 1024


class LoggingSettings(BaseSettings):
    """How the ACL service logs.

    ``LOG_LEVEL=debug LOG_JSON=false LOG_FILE_PATH=logs/acl.log`` gives text
    logs at DEBUG on stderr and in a rotating file.
    """

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    service_name: str = Field(default="graph-acl", description="``service`` field on JSON records")
    level: LogLevel = "INFO"
    json_logs: bool = Field(
        default=True,
        validation_alias=AliasChoices("json_logs", "log_json"),
        description="JSON Lines output; plain text when false",
    )
    capture_warnings: bool = True

    console_enabled: bool = True
    console_level: LogLevel | None = None

    file_path: Path | None = Field(default=None, description="Rotating log file; unset disables file output")
    file_level: LogLevel | None = None
    file_max_bytes: int = Field(default=10 * MiB, ge=1024, le=1024 * MiB)
    file_backup_count: int = Field(default=5, ge=0, le=100)

    @field_validator("level", "console_level", "file_level", mode="before")
    @classmethod
    def _upper(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @property
    def effective_console_level(self) -> LogLevel:
        return self.console_level or self.level

    @property
    def effective_file_level(self) -> LogLevel:
        return self.file_level or self.level

    def to_logging_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``configure_logging``."""
        return {
            "log_level": self.level,
            "console_level": self.effective_console_level,
            "file_level": self.effective_file_level,
            "file_path": str(self.file_path) if self.file_path else None,
            "json_logs": self.json_logs,
            "console_enabled": self.console_enabled,
            "capture_warnings": self.capture_warnings,
            "file_max_bytes": self.file_max_bytes,
            "file_backup_count": self.file_backup_count,
            "service_name": self.service_name,
        }

    @classmethod
    def settings_customise_sources(
        cls, settings_cls, init_settings, env_settings, dotenv_settings, file_secret_settings
    ):
        # YAML sits between explicit arguments and the environment.
        return (
            init_settings,
            create_logging_yaml_source(settings_cls),
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )
