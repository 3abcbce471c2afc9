"""Settings-driven ACL loading."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from graph_acl.core.acl.acl import Acl

if TYPE_CHECKING:
    from graph_acl.core.settings.acl import AclSettings

__all__ = ["load_acl_from_settings"]

logger = logging.getLogger(__name__)


def load_acl_from_settings(settings: AclSettings | None = None) -> Acl:
    """Build the application ACL from ``AclSettings.data_file``.

    Args:
        settings: Optional settings instance. If omitted, settings are
            loaded via get_acl_settings().

    Returns:
        The ACL described by the data file, or an empty ACL (which denies
        everything) when no file is configured.

    Raises:
        AclDataError: If the file cannot be read or parsed.
        CyclicGraphError: If a hierarchy in the file is cyclic.
    """
    if settings is None:
        from graph_acl.core.settings import get_acl_settings

        settings = get_acl_settings()

    if settings.data_file is None:
        logger.warning("No ACL data file configured; every request will be denied")
        return Acl()

    return Acl.from_file(settings.data_file)
