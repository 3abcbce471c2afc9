"""Rules for one fixed (resource, role) pair, across privileges."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from graph_acl.core.acl.rule import Rule, RuleContextScope

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = ["PrivilegeRules"]


@dataclass
class PrivilegeRules:
    """Privilege-level rule table.

    Attributes:
        for_all_privileges: Rule applying to every privilege without its own entry.
        by_privilege_id: Per-privilege rules, ``None`` until the first one is written.
        explicit: Whether ``for_all_privileges`` was written by a rule rather
            than left at its default ``Deny``.
    """

    for_all_privileges: Rule = Rule.DENY
    by_privilege_id: dict[str, Rule] | None = None
    explicit: bool = False

    @classmethod
    def new(cls, create_privilege_map: bool = False) -> PrivilegeRules:
        return cls(by_privilege_id={} if create_privilege_map else None)

    def get_rule(self, privilege_id: str | None = None) -> Rule:
        """Return the rule for ``privilege_id``, falling back to ``for_all_privileges``."""
        if privilege_id is not None and self.by_privilege_id:
            rule = self.by_privilege_id.get(privilege_id)
            if rule is not None:
                return rule
        return self.for_all_privileges

    def find_rule(self, privilege_id: str | None = None) -> Rule | None:
        """Return the explicitly configured rule for ``privilege_id``, if any.

        A per-privilege entry wins; otherwise ``for_all_privileges`` is
        returned only when a rule actually wrote it. ``privilege_id=None``
        asks about "all privileges" and only matches the explicit fallback.
        """
        if privilege_id is not None and self.by_privilege_id:
            rule = self.by_privilege_id.get(privilege_id)
            if rule is not None:
                return rule
        return self.for_all_privileges if self.explicit else None

    def set_rule(self, privilege_ids: Sequence[str] | None, rule: Rule) -> RuleContextScope:
        """Write ``rule`` for the given privileges.

        Args:
            privilege_ids: Privileges to write; ``None`` or empty targets the
                "for all privileges" slot.
            rule: Rule to write.

        Returns:
            Which slot was written.
        """
        if not privilege_ids:
            self.for_all_privileges = rule
            self.explicit = True
            return RuleContextScope.FOR_ALL_SYMBOLS

        if self.by_privilege_id is None:
            self.by_privilege_id = {}
        for privilege_id in privilege_ids:
            self.by_privilege_id[privilege_id] = rule
        return RuleContextScope.PER_SYMBOL

    def is_configured(self) -> bool:
        """Return whether any rule was ever written here."""
        return self.explicit or bool(self.by_privilege_id)

    def copy(self) -> PrivilegeRules:
        return PrivilegeRules(
            for_all_privileges=self.for_all_privileges,
            by_privilege_id=dict(self.by_privilege_id) if self.by_privilege_id is not None else None,
            explicit=self.explicit,
        )
