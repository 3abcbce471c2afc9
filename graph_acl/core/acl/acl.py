"""Immutable ACL resolution engine.

``Acl.is_allowed`` walks the resource hierarchy (outer loop) and, at every
resource level, the role hierarchy (inner loop), from the most specific
symbol toward the wildcard slot. The first (resource, role) slot holding an
explicit rule for the privilege decides. Nothing matching means deny.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from graph_acl.core.acl.constants import RESOURCES_GRAPH, ROLES_GRAPH
from graph_acl.core.acl.resource_role_rules import ResourceRoleRules
from graph_acl.core.acl.rule import Rule
from graph_acl.core.exceptions import CyclicGraphError
from graph_acl.core.graph import DirectedCycle, SymbolGraph

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from graph_acl.core.acl.data import AclData

__all__ = ["AccessDecision", "Acl"]

logger = logging.getLogger(__name__)

# Search order for unknown or None symbols.
_WILDCARD_ONLY: tuple[None] = (None,)


@dataclass(frozen=True, slots=True)
class AccessDecision:
    """Outcome of an ACL query, with the slot that produced it.

    Attributes:
        role: Requested role.
        resource: Requested resource.
        privilege: Requested privilege.
        rule: The matched rule, or ``None`` when the default deny applied.
        matched_resource: Resource level that matched (``None`` for the wildcard slot).
        matched_role: Role level that matched (``None`` for the wildcard slot).
    """

    role: str | None
    resource: str | None
    privilege: str | None
    rule: Rule | None = None
    matched_resource: str | None = None
    matched_role: str | None = None

    @property
    def allowed(self) -> bool:
        return self.rule is Rule.ALLOW

    @property
    def is_default(self) -> bool:
        return self.rule is None

    def __bool__(self) -> bool:
        return self.allowed


class Acl:
    """Role and resource hierarchies plus the rules that relate them.

    Instances are read-only once built and safe to share between threads.
    Use ``AclBuilder`` to create or extend one.

    Example:
        >>> acl = Acl.from_data(AclData.from_file("acl.json"))
        >>> acl.is_allowed("user", "blog", "read")
        True
    """

    __slots__ = ("_roles", "_resources", "_rules", "_role_chains", "_resource_chains")

    def __init__(
        self,
        roles: SymbolGraph | None = None,
        resources: SymbolGraph | None = None,
        rules: ResourceRoleRules | None = None,
    ) -> None:
        """Assemble an ACL from its parts.

        No validation happens here; ``AclBuilder.build`` runs
        ``check_for_cycles`` before handing the ACL out.

        Args:
            roles: Role inheritance graph.
            resources: Resource inheritance graph.
            rules: Rule table.
        """
        self._roles = roles if roles is not None else SymbolGraph()
        self._resources = resources if resources is not None else SymbolGraph()
        self._rules = rules if rules is not None else ResourceRoleRules()
        self._role_chains = _search_chains(self._roles)
        self._resource_chains = _search_chains(self._resources)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(roles={self.role_count}, "
            f"resources={self.resource_count})"
        )

    @classmethod
    def from_data(cls, data: AclData) -> Acl:
        """Build an ACL from an ``AclData`` record.

        Raises:
            CyclicGraphError: If a hierarchy in the data is cyclic.
        """
        from graph_acl.core.acl.builder import AclBuilder

        return AclBuilder.from_data(data).build()

    @classmethod
    def from_file(cls, path: str | Path) -> Acl:
        """Build an ACL from a JSON ``AclData`` file.

        Raises:
            AclDataError: If the file cannot be read or parsed.
            CyclicGraphError: If a hierarchy in the file is cyclic.
        """
        from graph_acl.core.acl.builder import AclBuilder

        acl = AclBuilder.from_file(path).build()
        logger.info(
            "ACL loaded",
            extra={"path": str(path), "role_count": acl.role_count, "resource_count": acl.resource_count},
        )
        return acl

    # ------------------------------------------------------------------
    # Graph queries
    # ------------------------------------------------------------------

    @property
    def role_graph(self) -> SymbolGraph:
        """A copy of the role graph."""
        return self._roles.copy()

    @property
    def resource_graph(self) -> SymbolGraph:
        """A copy of the resource graph."""
        return self._resources.copy()

    @property
    def rules(self) -> ResourceRoleRules:
        return self._rules

    @property
    def role_count(self) -> int:
        return self._roles.vertex_count

    @property
    def resource_count(self) -> int:
        return self._resources.vertex_count

    @property
    def roles(self) -> list[str]:
        return self._roles.symbols

    @property
    def resources(self) -> list[str]:
        return self._resources.symbols

    def has_role(self, role: str) -> bool:
        return self._roles.contains(role)

    def has_resource(self, resource: str) -> bool:
        return self._resources.contains(resource)

    def inherits_role(self, role: str, inherited: str) -> bool:
        """Return whether ``role`` is ``inherited`` or one of its descendants.

        Unknown roles give ``False``.
        """
        return self._roles.inherits(role, inherited)

    def inherits_resource(self, resource: str, inherited: str) -> bool:
        """Return whether ``resource`` is ``inherited`` or one of its descendants."""
        return self._resources.inherits(resource, inherited)

    def check_roles_for_cycles(self) -> None:
        """Raise ``CyclicGraphError`` if the role graph has a cycle."""
        _check_graph_for_cycles(self._roles, ROLES_GRAPH)

    def check_resources_for_cycles(self) -> None:
        """Raise ``CyclicGraphError`` if the resource graph has a cycle."""
        _check_graph_for_cycles(self._resources, RESOURCES_GRAPH)

    def check_for_cycles(self) -> None:
        self.check_roles_for_cycles()
        self.check_resources_for_cycles()

    # ------------------------------------------------------------------
    # Access queries
    # ------------------------------------------------------------------

    def is_allowed(
        self,
        role: str | None = None,
        resource: str | None = None,
        privilege: str | None = None,
    ) -> bool:
        """Return whether ``role`` may exercise ``privilege`` on ``resource``.

        ``None`` on an axis asks about the wildcard slot only. For the
        privilege axis, ``None`` asks about "all privileges" and is only
        satisfied by a rule written without a privilege list.

        Args:
            role: Role name.
            resource: Resource name.
            privilege: Privilege name.

        Returns:
            ``True`` if the most specific matching rule is ``Allow``;
            ``False`` if it is ``Deny`` or nothing matches.
        """
        return self.explain(role, resource, privilege).allowed

    def explain(
        self,
        role: str | None = None,
        resource: str | None = None,
        privilege: str | None = None,
    ) -> AccessDecision:
        """Resolve a query and report which slot decided it.

        Takes the same arguments as ``is_allowed``.
        """
        role_chain = self._role_chains.get(role, _WILDCARD_ONLY)
        for resource_level in self._resource_chains.get(resource, _WILDCARD_ONLY):
            if resource_level is None:
                role_rules = self._rules.for_all_resources
            else:
                role_rules = self._rules.find_role_privilege_rules(resource_level)
                if role_rules is None:
                    continue

            for role_level in role_chain:
                if role_level is None:
                    privilege_rules = role_rules.for_all_roles
                else:
                    privilege_rules = role_rules.find_privilege_rules(role_level)
                    if privilege_rules is None:
                        continue

                rule = privilege_rules.find_rule(privilege)
                if rule is not None:
                    return AccessDecision(
                        role=role,
                        resource=resource,
                        privilege=privilege,
                        rule=rule,
                        matched_resource=resource_level,
                        matched_role=role_level,
                    )

        return AccessDecision(role=role, resource=resource, privilege=privilege)

    def is_allowed_any(
        self,
        roles: Sequence[str] | None = None,
        resources: Sequence[str] | None = None,
        privileges: Sequence[str] | None = None,
    ) -> bool:
        """Return whether any (role, resource, privilege) combination is allowed.

        ``None`` or an empty list on an axis queries the wildcard slot.
        Unknown roles and resources are skipped; when none of the listed
        ones are known the wildcard slot is queried instead.
        """
        role_keys = _known_or_wildcard(self._roles, roles)
        resource_keys = _known_or_wildcard(self._resources, resources)
        privilege_keys: list[str | None] = list(privileges) if privileges else [None]

        return any(
            self.is_allowed(role, resource, privilege)
            for role in role_keys
            for resource in resource_keys
            for privilege in privilege_keys
        )


def _search_chains(graph: SymbolGraph) -> dict[str, list[str | None]]:
    """Map each symbol to ``[symbol, ancestors..., None]``, the order queries walk."""
    return {symbol: [symbol, *graph.ancestors(symbol), None] for symbol in graph.symbols}


def _check_graph_for_cycles(graph: SymbolGraph, name: str) -> None:
    cycle = DirectedCycle(graph.graph).cycle()
    if cycle is None:
        return
    symbols = [symbol for symbol in graph.names(cycle) if symbol is not None]
    logger.warning("Cycle detected in ACL graph", extra={"graph": name, "cycle": symbols})
    raise CyclicGraphError(graph=name, cycle=symbols)


def _known_or_wildcard(graph: SymbolGraph, symbols: Sequence[str] | None) -> list[str | None]:
    if not symbols:
        return [None]
    known: list[str | None] = [s for s in symbols if graph.contains(s)]
    return known or [None]
