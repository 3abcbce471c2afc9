"""Fluent construction of ``Acl`` instances.

The builder owns a role graph, a resource graph and a rule table in
mutable form. ``allow``/``deny`` write rules with wildcard semantics that
keep broader rules from being shadowed by stale specific ones; ``build``
validates both hierarchies and returns an immutable ``Acl``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from graph_acl.core.acl.constants import WILDCARD
from graph_acl.core.acl.data import AclData, RuleEntries
from graph_acl.core.acl.privilege_rules import PrivilegeRules
from graph_acl.core.acl.resource_role_rules import ResourceRoleRules
from graph_acl.core.acl.rule import Rule
from graph_acl.core.graph import SymbolGraph

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

    from graph_acl.core.acl.acl import Acl
    from graph_acl.core.acl.role_privilege_rules import RolePrivilegeRules

__all__ = ["AclBuilder"]

logger = logging.getLogger(__name__)


class AclBuilder:
    """Builder for constructing ``Acl`` instances with a fluent interface.

    Example:
        >>> acl = (
        ...     AclBuilder()
        ...     .add_role("guest")
        ...     .add_role("user", ["guest"])
        ...     .add_role("admin", ["user"])
        ...     .add_resource("blog")
        ...     .add_resource("admin_panel")
        ...     .allow(["guest"], ["blog"], ["read"])
        ...     .allow(["user"], ["blog"], ["read", "write"])
        ...     .allow(["admin"])
        ...     .build()
        ... )
        >>> acl.is_allowed("admin", "blog", "read")
        True

    Note:
        ``None`` on any axis of ``allow``/``deny`` means "all". Unknown role
        or resource names in a filter list are dropped, so rules for symbols
        must be declared after the symbols are registered.
    """

    def __init__(self, acl: Acl | None = None) -> None:
        """Initialize an empty builder, or one seeded from an existing ``Acl``.

        Args:
            acl: Optional ACL whose graphs and rules are copied into the builder.
                The ACL itself is left untouched.
        """
        if acl is None:
            self._roles = SymbolGraph()
            self._resources = SymbolGraph()
            self._rules = ResourceRoleRules()
        else:
            self._roles = acl.role_graph.copy()
            self._resources = acl.resource_graph.copy()
            self._rules = acl.rules.copy()

    @classmethod
    def from_acl(cls, acl: Acl) -> AclBuilder:
        """Create a builder from an existing ``Acl`` so it can be extended."""
        return cls(acl)

    @classmethod
    def from_data(cls, data: AclData) -> AclBuilder:
        """Create a builder from an ``AclData`` record.

        ``"*"`` as a resource or role name means "all resources"/"all roles".
        A resource entry without a role list allows (or denies) every role
        every privilege on that resource.

        Entries are applied from most general to most specific (wildcard
        resource, then wildcard role, then "all privileges"), allow entries
        ahead of deny entries at equal specificity. This keeps the clearing
        semantics of broad rules from wiping specific rules listed in the
        same document.

        Document order therefore never decides a conflict. Replaying the
        same entries as ``allow`` calls followed by ``deny`` calls can give
        a different answer: allow ``(blog, [(guest, [read])])`` with deny
        ``(blog, null)`` leaves guest/blog/read allowed here, while
        ``.allow("guest", "blog", "read").deny(None, "blog")`` denies it.

        Args:
            data: Parsed ACL data.

        Returns:
            A builder holding the data's roles, resources and rules.
        """
        builder = cls()
        if data.roles:
            builder._roles = SymbolGraph.from_data(data.roles)
        if data.resources:
            builder._resources = SymbolGraph.from_data(data.resources)

        calls: list[tuple[Rule, str, str, list[str] | None]] = []
        for rule, entries in ((Rule.ALLOW, data.allow), (Rule.DENY, data.deny)):
            for resource, role_entries in entries or ():
                if role_entries is None:
                    calls.append((rule, WILDCARD, resource, None))
                    continue
                for role, privileges in role_entries:
                    calls.append((rule, role, resource, privileges))

        calls.sort(key=lambda c: (c[2] != WILDCARD, c[1] != WILDCARD, c[3] is not None))
        for rule, role, resource, privileges in calls:
            builder._add_rule(
                rule,
                None if role == WILDCARD else [role],
                None if resource == WILDCARD else [resource],
                privileges,
            )

        logger.debug(
            "ACL builder loaded from data",
            extra={
                "role_count": builder._roles.vertex_count,
                "resource_count": builder._resources.vertex_count,
                "rule_count": len(calls),
            },
        )
        return builder

    @classmethod
    def from_file(cls, path: str | Path) -> AclBuilder:
        """Create a builder from a JSON ``AclData`` file."""
        return cls.from_data(AclData.from_file(path))

    # ------------------------------------------------------------------
    # Symbols
    # ------------------------------------------------------------------

    @property
    def role_graph(self) -> SymbolGraph:
        return self._roles

    @property
    def resource_graph(self) -> SymbolGraph:
        return self._resources

    @property
    def rules(self) -> ResourceRoleRules:
        return self._rules

    def add_role(self, role: str, parents: Sequence[str] | None = None) -> AclBuilder:
        """Register ``role`` and make it inherit from each of ``parents``.

        Adding an existing role is a no-op apart from any new parent edges.
        """
        self._roles.add_edge(role, _as_list(parents))
        return self

    def add_roles(self, roles: Iterable[tuple[str, Sequence[str] | None]]) -> AclBuilder:
        for role, parents in roles:
            self.add_role(role, parents)
        return self

    def add_resource(self, resource: str, parents: Sequence[str] | None = None) -> AclBuilder:
        """Register ``resource`` and make it inherit from each of ``parents``."""
        self._resources.add_edge(resource, _as_list(parents))
        return self

    def add_resources(self, resources: Iterable[tuple[str, Sequence[str] | None]]) -> AclBuilder:
        for resource, parents in resources:
            self.add_resource(resource, parents)
        return self

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    def allow(
        self,
        roles: str | Sequence[str] | None = None,
        resources: str | Sequence[str] | None = None,
        privileges: str | Sequence[str] | None = None,
    ) -> AclBuilder:
        """Allow ``roles`` the given ``privileges`` on ``resources``.

        Args:
            roles: Roles the rule applies to; ``None`` for all roles.
            resources: Resources the rule applies to; ``None`` for all resources.
            privileges: Privileges the rule applies to; ``None`` for all privileges.

        Returns:
            The builder itself, for chaining.
        """
        self._add_rule(Rule.ALLOW, _as_list(roles), _as_list(resources), _as_list(privileges))
        return self

    def deny(
        self,
        roles: str | Sequence[str] | None = None,
        resources: str | Sequence[str] | None = None,
        privileges: str | Sequence[str] | None = None,
    ) -> AclBuilder:
        """Deny ``roles`` the given ``privileges`` on ``resources``.

        Takes the same arguments as ``allow``.
        """
        self._add_rule(Rule.DENY, _as_list(roles), _as_list(resources), _as_list(privileges))
        return self

    def _add_rule(
        self,
        rule: Rule,
        roles: list[str] | None,
        resources: list[str] | None,
        privileges: list[str] | None,
    ) -> None:
        # Empty lists mean "all", same as None.
        roles = roles or None
        resources = resources or None
        privileges = privileges or None

        if roles is None and resources is None and privileges is None:
            self._rules = ResourceRoleRules()
            self._rules.for_all_resources.for_all_roles.set_rule(None, rule)
            logger.debug("ACL rules reset", extra={"rule": rule.value})
            return

        role_keys = _keys_in_graph(self._roles, roles)
        resource_keys = _keys_in_graph(self._resources, resources)
        if not role_keys or not resource_keys:
            logger.debug(
                "ACL rule ignored, no registered symbols matched",
                extra={"rule": rule.value, "roles": roles, "resources": resources},
            )
            return

        if roles is None and resources is None:
            self._rules.by_resource_id.clear()
            self._rules.for_all_resources.by_role_id = None

        for resource in resource_keys:
            if resources is None:
                for role in role_keys:
                    if role is not None:
                        for role_rules in self._rules.by_resource_id.values():
                            role_rules.clear_role(role)

            for role in role_keys:
                privilege_rules = self._get_privilege_rules(resource, role)
                if privileges is None:
                    privilege_rules.set_rule(None, rule)
                    privilege_rules.by_privilege_id = None
                else:
                    privilege_rules.set_rule(privileges, rule)

            if roles is None and resource is not None:
                resource_rules = self._rules.find_role_privilege_rules(resource)
                if resource_rules is not None:
                    resource_rules.by_role_id = None

        logger.debug(
            "ACL rule written",
            extra={
                "rule": rule.value,
                "roles": roles,
                "resources": resources,
                "privileges": privileges,
            },
        )

    def _get_privilege_rules(self, resource: str | None, role: str | None) -> PrivilegeRules:
        """Get or create the privilege rules at a (resource, role) slot."""
        role_rules: RolePrivilegeRules = self._rules.get_or_create_role_privilege_rules(resource)
        if role is None:
            return role_rules.for_all_roles
        if role_rules.by_role_id is None:
            role_rules.by_role_id = {}
        privilege_rules = role_rules.by_role_id.get(role)
        if privilege_rules is None:
            privilege_rules = role_rules.by_role_id[role] = PrivilegeRules.new(create_privilege_map=True)
        return privilege_rules

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def build(self) -> Acl:
        """Validate the hierarchies and produce an ``Acl``.

        The ACL receives copies of the builder's graphs and rules, so the
        builder can keep being used afterwards.

        Raises:
            CyclicGraphError: If the role or resource graph contains a cycle.
        """
        from graph_acl.core.acl.acl import Acl

        acl = Acl(
            roles=self._roles.copy(),
            resources=self._resources.copy(),
            rules=self._rules.copy(),
        )
        acl.check_for_cycles()
        logger.debug(
            "ACL built",
            extra={"role_count": acl.role_count, "resource_count": acl.resource_count},
        )
        return acl

    def to_data(self) -> AclData:
        """Export roles, resources and every explicitly written rule.

        ``AclBuilder.from_data(builder.to_data()).build()`` answers every
        ``is_allowed`` query the same way ``builder.build()`` does.
        """
        allow: dict[str, list[tuple[str, list[str] | None]]] = {}
        deny: dict[str, list[tuple[str, list[str] | None]]] = {}

        resource_slots = [(WILDCARD, self._rules.for_all_resources)]
        resource_slots.extend(self._rules.by_resource_id.items())
        for resource, role_rules in resource_slots:
            role_slots = [(WILDCARD, role_rules.for_all_roles)]
            role_slots.extend((role_rules.by_role_id or {}).items())
            for role, privilege_rules in role_slots:
                if privilege_rules.explicit:
                    target = allow if privilege_rules.for_all_privileges.is_allow else deny
                    target.setdefault(resource, []).append((role, None))
                by_rule: dict[Rule, list[str]] = {}
                for privilege, privilege_rule in (privilege_rules.by_privilege_id or {}).items():
                    by_rule.setdefault(privilege_rule, []).append(privilege)
                for privilege_rule, privilege_ids in by_rule.items():
                    target = allow if privilege_rule.is_allow else deny
                    target.setdefault(resource, []).append((role, sorted(privilege_ids)))

        return AclData(
            roles=self._roles.to_data() or None,
            resources=self._resources.to_data() or None,
            allow=_entries(allow),
            deny=_entries(deny),
        )


def _as_list(value: str | Iterable[str] | None) -> list[str] | None:
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    return list(value)


def _keys_in_graph(graph: SymbolGraph, keys: list[str] | None) -> list[str | None]:
    """Reduce ``keys`` to registered symbols; ``None`` becomes the wildcard slot."""
    if keys is None:
        return [None]
    return [key for key in keys if graph.contains(key)]


def _entries(rules: dict[str, list[tuple[str, list[str] | None]]]) -> RuleEntries | None:
    if not rules:
        return None
    return [(resource, role_entries) for resource, role_entries in rules.items()]
