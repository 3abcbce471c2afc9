"""Top-level rule table: one entry per resource plus a catch-all."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from graph_acl.core.acl.role_privilege_rules import RolePrivilegeRules
from graph_acl.core.acl.rule import RuleContextScope

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = ["ResourceRoleRules"]


@dataclass
class ResourceRoleRules:
    """Resource-level rule table.

    ``for_all_resources`` applies to any resource without an entry in
    ``by_resource_id``.
    """

    for_all_resources: RolePrivilegeRules = field(
        default_factory=lambda: RolePrivilegeRules.new(create_child_maps=True)
    )
    by_resource_id: dict[str, RolePrivilegeRules] = field(default_factory=dict)

    def get_role_privilege_rules(self, resource: str | None = None) -> RolePrivilegeRules:
        """Return the rules for ``resource``, falling back to ``for_all_resources``."""
        if resource is not None:
            rules = self.by_resource_id.get(resource)
            if rules is not None:
                return rules
        return self.for_all_resources

    get = get_role_privilege_rules

    def find_role_privilege_rules(self, resource: str) -> RolePrivilegeRules | None:
        """Return the resource-specific entry for ``resource`` without any fallback."""
        return self.by_resource_id.get(resource)

    def get_or_create_role_privilege_rules(self, resource: str | None) -> RolePrivilegeRules:
        if resource is None:
            return self.for_all_resources
        rules = self.by_resource_id.get(resource)
        if rules is None:
            rules = self.by_resource_id[resource] = RolePrivilegeRules.new(create_child_maps=True)
        return rules

    def set_role_privilege_rules(
        self,
        resource_ids: Sequence[str] | None = None,
        role_privilege_rules: RolePrivilegeRules | None = None,
    ) -> RuleContextScope:
        """Write role rules into this table.

        ``None`` resources replace ``for_all_resources`` (``FOR_ALL_SYMBOLS``).
        A list writes a copy of the rules per resource; an empty list
        replaces ``for_all_resources`` but still reports ``PER_SYMBOL``.
        ``None`` rules stand for an empty table.
        """
        rules = role_privilege_rules if role_privilege_rules is not None else RolePrivilegeRules()
        if resource_ids is None:
            self.for_all_resources = rules
            return RuleContextScope.FOR_ALL_SYMBOLS

        if resource_ids:
            for resource_id in resource_ids:
                self.by_resource_id[resource_id] = rules.copy()
        else:
            self.for_all_resources = rules
        return RuleContextScope.PER_SYMBOL

    def copy(self) -> ResourceRoleRules:
        return ResourceRoleRules(
            for_all_resources=self.for_all_resources.copy(),
            by_resource_id={
                resource: rules.copy() for resource, rules in self.by_resource_id.items()
            },
        )
