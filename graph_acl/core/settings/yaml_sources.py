"""conf.d-aware YAML settings source.

Each settings class named ``<name>`` reads, in order:

- ``conf/<name>.yaml``
- ``conf/<name>.d/*.yaml`` then ``conf/<name>.d/*.yml``, sorted by file name

Later files override earlier ones. ``<NAME>_CONFIG_DIR`` replaces ``conf``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic_settings import YamlConfigSettingsSource

if TYPE_CHECKING:
    from pydantic_settings import BaseSettings

DEFAULT_CONFIG_DIR = "conf"


def discover_yaml_files(name: str, config_dir: str | Path | None = None) -> list[Path]:
    """Return the YAML files configuring ``name``, lowest precedence first.

    Args:
        name: Config name, e.g. "acl" for ``acl.yaml`` and ``acl.d/``.
        config_dir: Directory to search. Defaults to ``$<NAME>_CONFIG_DIR``
            or ``conf``.
    """
    if config_dir is None:
        config_dir = os.getenv(f"{name.upper()}_CONFIG_DIR", DEFAULT_CONFIG_DIR)
    root = Path(config_dir)

    found = [root / f"{name}.yaml"] if (root / f"{name}.yaml").is_file() else []
    overrides = root / f"{name}.d"
    if overrides.is_dir():
        for pattern in ("*.yaml", "*.yml"):
            found.extend(sorted(overrides.glob(pattern)))
    return found


class ConfDYamlConfigSettingsSource(YamlConfigSettingsSource):
    """``YamlConfigSettingsSource`` fed by ``discover_yaml_files``."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        name: str,
        config_dir: str | Path | None = None,
    ) -> None:
        self.config_name = name
        self.yaml_files = discover_yaml_files(name, config_dir)
        super().__init__(
            settings_cls=settings_cls,
            yaml_file=self.yaml_files or None,
            yaml_file_encoding="utf-8",
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.config_name!r}, yaml_files={self.yaml_files!r})"


def create_acl_yaml_source(settings_cls: type[BaseSettings]) -> ConfDYamlConfigSettingsSource:
    """YAML source for AclSettings: ``conf/acl.yaml`` + ``conf/acl.d/``, or ``$ACL_CONFIG_DIR``."""
    return ConfDYamlConfigSettingsSource(settings_cls, "acl")


def create_logging_yaml_source(settings_cls: type[BaseSettings]) -> ConfDYamlConfigSettingsSource:
    """YAML source for LoggingSettings: ``conf/logging.yaml`` + ``conf/logging.d/``, or ``$LOGGING_CONFIG_DIR``."""
    return ConfDYamlConfigSettingsSource(settings_cls, "logging")
