"""Pydantic Settings v2 configuration.

Settings are split by domain (acl/logging), loaded through LRU-cached
getters and frozen after validation.

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. YAML/conf.d files (conf/acl.yaml, conf/logging.yaml)
    3. Environment variables (ACL_*, LOG_*)
    4. .env file
    5. secrets_dir
"""

from __future__ import annotations

from .acl import AclSettings
from .loader import clear_all_caches, get_acl_settings, get_logging_settings
from .logs import LoggingSettings

__all__ = [
    "AclSettings",
    "LoggingSettings",
    "clear_all_caches",
    "get_acl_settings",
    "get_logging_settings",
]
