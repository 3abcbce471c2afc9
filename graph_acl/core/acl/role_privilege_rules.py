"""Rules for one fixed resource, across roles."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from graph_acl.core.acl.privilege_rules import PrivilegeRules
from graph_acl.core.acl.rule import RuleContextScope

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = ["RolePrivilegeRules"]


@dataclass
class RolePrivilegeRules:
    """Role-level rule table.

    ``for_all_roles`` applies to any role without an entry in ``by_role_id``.
    """

    for_all_roles: PrivilegeRules = field(default_factory=PrivilegeRules)
    by_role_id: dict[str, PrivilegeRules] | None = None

    @classmethod
    def new(cls, create_child_maps: bool = False) -> RolePrivilegeRules:
        return cls(
            for_all_roles=PrivilegeRules.new(create_child_maps),
            by_role_id={} if create_child_maps else None,
        )

    def get_privilege_rules(self, role: str | None = None) -> PrivilegeRules:
        """Return the rules for ``role``, falling back to ``for_all_roles``."""
        if role is not None and self.by_role_id:
            rules = self.by_role_id.get(role)
            if rules is not None:
                return rules
        return self.for_all_roles

    def find_privilege_rules(self, role: str) -> PrivilegeRules | None:
        """Return the role-specific entry for ``role`` without any fallback."""
        if self.by_role_id:
            return self.by_role_id.get(role)
        return None

    def set_privilege_rules_for_role_ids(
        self,
        role_ids: Sequence[str],
        privilege_rules: PrivilegeRules,
    ) -> RuleContextScope:
        """Write ``privilege_rules`` for each role; an empty list targets ``for_all_roles``."""
        if not role_ids:
            self.for_all_roles = privilege_rules
            return RuleContextScope.FOR_ALL_SYMBOLS

        if self.by_role_id is None:
            self.by_role_id = {}
        for role_id in role_ids:
            self.by_role_id[role_id] = privilege_rules.copy()
        return RuleContextScope.PER_SYMBOL

    def set_privilege_rules(
        self,
        role_ids: Sequence[str] | None = None,
        privilege_rules: PrivilegeRules | None = None,
    ) -> RuleContextScope:
        """Write privilege rules into this table.

        Four cases:
            - ``(None, None)``: reset ``for_all_roles`` to defaults.
            - ``(None, rules)``: replace ``for_all_roles``.
            - ``([], rules)``: replace ``for_all_roles`` (``None`` rules reset it).
            - ``(role_ids, rules)``: write a copy of ``rules`` (or defaults) per role.

        Returns:
            Which slot was written.
        """
        if role_ids is None:
            self.for_all_roles = privilege_rules if privilege_rules is not None else PrivilegeRules()
            return RuleContextScope.FOR_ALL_SYMBOLS
        return self.set_privilege_rules_for_role_ids(
            role_ids,
            privilege_rules if privilege_rules is not None else PrivilegeRules(),
        )

    def clear_role(self, role_id: str) -> None:
        if self.by_role_id:
            self.by_role_id.pop(role_id, None)

    def copy(self) -> RolePrivilegeRules:
        return RolePrivilegeRules(
            for_all_roles=self.for_all_roles.copy(),
            by_role_id=(
                {role: rules.copy() for role, rules in self.by_role_id.items()}
                if self.by_role_id is not None
                else None
            ),
        )
