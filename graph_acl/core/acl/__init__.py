"""Hierarchical access control over role and resource graphs.

Roles and resources each form an inheritance DAG. Rules are written at any
specificity: a single role, resource or privilege, "all" of any of them, or
any combination. Queries walk both hierarchies from the most specific
symbol to the wildcard slot and return the first explicit rule found,
denying by default.

Architecture:
    AclBuilder ──build()──► Acl ──is_allowed()──► bool
        ▲                    │
        │                    └── explain() ──► AccessDecision
    AclData (JSON)

Components:
    Construction:
        - AclBuilder: fluent role/resource/rule registration, cycle validation
        - AclData: pydantic load/save record
        - load_acl_from_settings: build the app ACL from AclSettings

    Resolution:
        - Acl: immutable engine (is_allowed, is_allowed_any, explain)
        - AccessDecision: query outcome with the matching slot
        - AclChecker: role-bound convenience wrapper for business logic

    Rule tables:
        - ResourceRoleRules -> RolePrivilegeRules -> PrivilegeRules
        - Rule, RuleContextScope

Example:
    >>> from graph_acl.core.acl import AclBuilder
    >>>
    >>> acl = (
    ...     AclBuilder()
    ...     .add_roles([("guest", None), ("user", ["guest"]), ("admin", ["user"])])
    ...     .add_resources([("index", None), ("blog", ["index"])])
    ...     .allow(["guest"], ["index"])
    ...     .build()
    ... )
    >>> acl.is_allowed("user", "blog", "read")
    True
    >>> acl.is_allowed("guest", "other_resource", "read")
    False
"""

from __future__ import annotations

from .acl import AccessDecision, Acl
from .builder import AclBuilder
from .checker import AclChecker
from .constants import WILDCARD
from .data import AclData
from .loader import load_acl_from_settings
from .privilege_rules import PrivilegeRules
from .resource_role_rules import ResourceRoleRules
from .role_privilege_rules import RolePrivilegeRules
from .rule import Rule, RuleContextScope

__all__ = [
    "WILDCARD",
    "AccessDecision",
    "Acl",
    "AclBuilder",
    "AclChecker",
    "AclData",
    "PrivilegeRules",
    "ResourceRoleRules",
    "Rule",
    "RuleContextScope",
    "RolePrivilegeRules",
    "load_acl_from_settings",
]
