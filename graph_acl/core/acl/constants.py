"""ACL engine constants.

Examples:
    >>> WILDCARD
    '*'
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_PRIVILEGE_HEADER",
    "DEFAULT_RESOURCE_HEADER",
    "DEFAULT_ROLE_HEADER",
    "RESOURCES_GRAPH",
    "ROLES_GRAPH",
    "WILDCARD",
]

# Stands for "all roles" / "all resources" in ACL data documents.
WILDCARD = "*"

# Graph names used in cycle diagnostics.
ROLES_GRAPH = "roles"
RESOURCES_GRAPH = "resources"

# Request headers carrying an already-resolved identity and target.
DEFAULT_ROLE_HEADER = "x-user-role"
DEFAULT_RESOURCE_HEADER = "x-resource"
DEFAULT_PRIVILEGE_HEADER = "x-privilege"
