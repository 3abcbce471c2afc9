"""ACL engine and HTTP integration settings."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_sources import create_acl_yaml_source


class AclSettings(BaseSettings):
    """Where the ACL comes from and how requests are mapped onto it.

    Environment variables use ACL_ prefix.
    Example: ACL_DATA_FILE=conf/acl.json, ACL_DEFAULT_ROLE=guest
    """

    # ──────────────────────────────────────────────────────────────
    # Source
    # ──────────────────────────────────────────────────────────────

    data_file: Path | None = Field(
        default=None,
        description="Path to a JSON AclData document. When unset an empty ACL (deny all) is used.",
    )

    # ──────────────────────────────────────────────────────────────
    # Request mapping
    # ──────────────────────────────────────────────────────────────

    role_header: str = Field(
        default="x-user-role",
        min_length=1,
        description="Request header carrying the caller's resolved role",
    )

    resource_header: str = Field(
        default="x-resource",
        min_length=1,
        description="Request header naming the resource being accessed (middleware only)",
    )

    privilege_header: str = Field(
        default="x-privilege",
        min_length=1,
        description="Request header naming the privilege being exercised (middleware only)",
    )

    default_role: str | None = Field(
        default="guest",
        description="Role used when the role header is missing",
    )

    default_resource: str | None = Field(
        default=None,
        description="Resource used when the resource header is missing (None = wildcard slot)",
    )

    default_privilege: str | None = Field(
        default=None,
        description="Privilege used when the privilege header is missing (None = all privileges)",
    )

    exempt_paths: list[str] = Field(
        default_factory=lambda: ["/health"],
        description="Path prefixes the middleware never checks",
    )

    log_decisions: bool = Field(
        default=False,
        description="Log every allow/deny decision at DEBUG level (denials are always logged)",
    )

    @field_validator("role_header", "resource_header", "privilege_header", mode="after")
    @classmethod
    def normalize_header(cls, v: str) -> str:
        """Header lookups are case-insensitive; store lowercase."""
        return v.lower()

    model_config = SettingsConfigDict(
        env_prefix="ACL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @classmethod
    def settings_customise_sources(
        cls, settings_cls, init_settings, env_settings, dotenv_settings, file_secret_settings
    ):
        """Customize settings source precedence: init > yaml > env > dotenv > secrets."""
        return (
            init_settings,
            create_acl_yaml_source(settings_cls),
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )
