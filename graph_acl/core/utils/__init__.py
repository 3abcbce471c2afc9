"""Route handler utilities."""

from __future__ import annotations

from .acl import access_denied_detail, require_allowed, require_any_allowed

__all__ = [
    "access_denied_detail",
    "require_allowed",
    "require_any_allowed",
]
