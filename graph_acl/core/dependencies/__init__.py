"""FastAPI dependencies."""

from __future__ import annotations

from .acl import AclDep, RoleDep, get_acl, get_role, require_privilege

__all__ = [
    "AclDep",
    "RoleDep",
    "get_acl",
    "get_role",
    "require_privilege",
]
