"""Unit tests for Acl resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from graph_acl.core.acl import Acl, AclBuilder, Rule
from graph_acl.core.exceptions import AclDataError, CyclicGraphError
from graph_acl.core.graph import SymbolGraph


@pytest.mark.unit
class TestScenario:
    """The guest/user/admin over index/blog walkthrough."""

    def test_rule_inherited_through_both_hierarchies(self, hierarchy_builder: AclBuilder):
        acl = hierarchy_builder.allow(["guest"], ["index"]).build()

        assert acl.is_allowed("user", "blog", "anything")
        assert acl.is_allowed("admin", "blog", "read")

    def test_unrelated_resource_is_denied(self, hierarchy_builder: AclBuilder):
        acl = hierarchy_builder.allow(["guest"], ["index"]).build()

        assert not acl.is_allowed("guest", "other_resource", "x")


@pytest.mark.unit
class TestResolution:
    """Tests for specificity, inheritance and the default deny."""

    def test_default_deny(self, hierarchy_builder: AclBuilder):
        acl = hierarchy_builder.build()

        for role in ("guest", "user", "admin", None):
            for resource in ("index", "blog", None):
                for privilege in ("read", "write", None):
                    assert not acl.is_allowed(role, resource, privilege)

    def test_empty_acl_denies(self):
        assert not Acl().is_allowed("guest", "blog", "read")
        assert not Acl().is_allowed()

    def test_specific_deny_beats_global_allow(self, hierarchy_builder: AclBuilder):
        acl = hierarchy_builder.allow().deny(["guest"], ["blog"], ["read"]).build()

        assert not acl.is_allowed("guest", "blog", "read")
        assert acl.is_allowed("other", "blog", "read")
        assert acl.is_allowed("guest", "blog", "write")
        assert acl.is_allowed("guest", "index", "read")

    def test_role_inheritance(self, hierarchy_builder: AclBuilder):
        acl = hierarchy_builder.allow(["guest"], ["blog"], ["read"]).build()

        assert acl.is_allowed("admin", "blog", "read")
        assert acl.inherits_role("admin", "guest")
        assert not acl.inherits_role("guest", "admin")

    def test_resource_inheritance(self):
        acl = (
            AclBuilder()
            .add_role("user")
            .add_resource("blog")
            .add_resource("blog_post", ["blog"])
            .allow("user", "blog", "comment")
            .build()
        )

        assert acl.is_allowed("user", "blog_post", "comment")
        assert acl.inherits_resource("blog_post", "blog")

    def test_specific_resource_rule_overrides_inherited(self):
        acl = (
            AclBuilder()
            .add_role("user")
            .add_resource("blog")
            .add_resource("blog_post", ["blog"])
            .allow("user", "blog", "comment")
            .deny("user", "blog_post", "comment")
            .build()
        )

        assert not acl.is_allowed("user", "blog_post", "comment")
        assert acl.is_allowed("user", "blog", "comment")

    def test_nearer_role_wins(self, hierarchy_builder: AclBuilder):
        acl = hierarchy_builder.deny("guest", "blog", "write").allow("user", "blog", "write").build()

        assert acl.is_allowed("admin", "blog", "write")
        assert not acl.is_allowed("guest", "blog", "write")

    def test_resource_level_is_searched_before_role_level(self, hierarchy_builder: AclBuilder):
        # A parent-role rule on the exact resource beats an exact-role rule on an ancestor resource.
        acl = hierarchy_builder.allow("admin", "index", "edit").deny("guest", "blog", "edit").build()

        assert not acl.is_allowed("admin", "blog", "edit")

    def test_all_privileges_query_needs_all_privileges_rule(self, hierarchy_builder: AclBuilder):
        acl = hierarchy_builder.allow("user", "blog", ["read", "write"]).allow("admin", "blog").build()

        assert not acl.is_allowed("user", "blog")
        assert acl.is_allowed("admin", "blog")

    def test_unknown_symbols_use_wildcard_slot(self, hierarchy_builder: AclBuilder):
        acl = hierarchy_builder.allow(None, None, "ping").build()

        assert acl.is_allowed("ghost", "nowhere", "ping")
        assert not acl.is_allowed("ghost", "nowhere", "pong")

    def test_fixture_document(self, fixtures_dir: Path):
        acl = Acl.from_file(fixtures_dir / "acl.json")

        assert acl.is_allowed("guest", "blog_post", "read")
        assert acl.is_allowed("user", "blog_post", "comment")
        assert not acl.is_allowed("guest", "blog", "comment")
        assert acl.is_allowed("editor", "blog_post", "publish")
        assert not acl.is_allowed("editor", "blog_post", "delete")
        assert not acl.is_allowed("editor", "blog", "delete")
        assert acl.is_allowed("admin", "admin_panel", "configure")
        assert not acl.is_allowed("admin", "blog_post", "delete")
        assert not acl.is_allowed("guest", "admin_panel", "read")

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(AclDataError):
            Acl.from_file(tmp_path / "missing.json")


@pytest.mark.unit
class TestExplain:
    """Tests for AccessDecision reporting."""

    def test_reports_matching_slot(self, blog_acl: Acl):
        decision = blog_acl.explain("user", "blog", "read")

        assert decision.allowed
        assert decision.rule is Rule.ALLOW
        assert decision.matched_resource == "index"
        assert decision.matched_role == "guest"

    def test_reports_wildcard_slot(self, blog_acl: Acl):
        decision = blog_acl.explain("user", "blog", "delete")

        assert not decision
        assert decision.rule is Rule.DENY
        assert decision.matched_resource is None
        assert decision.matched_role == "guest"
        assert not decision.is_default

    def test_reports_default_deny(self, blog_acl: Acl):
        decision = blog_acl.explain("guest", "admin_panel", "read")

        assert not decision.allowed
        assert decision.is_default
        assert decision.matched_resource is None
        assert decision.matched_role is None

    def test_agrees_with_is_allowed(self, blog_acl: Acl):
        for role in ("guest", "user", "admin", "ghost"):
            for privilege in ("read", "write", "delete"):
                assert blog_acl.explain(role, "blog", privilege).allowed == blog_acl.is_allowed(
                    role, "blog", privilege
                )


@pytest.mark.unit
class TestIsAllowedAny:
    """Tests for the multi-valued query."""

    def test_any_combination(self, blog_acl: Acl):
        assert blog_acl.is_allowed_any(["guest", "user"], ["blog"], ["write"])
        assert not blog_acl.is_allowed_any(["guest"], ["blog", "index"], ["write", "delete"])

    def test_unknown_entries_are_skipped(self, blog_acl: Acl):
        assert blog_acl.is_allowed_any(["ghost", "user"], ["nowhere", "blog"], ["write"])

    def test_all_unknown_falls_back_to_wildcard(self, hierarchy_builder: AclBuilder):
        acl = hierarchy_builder.allow(None, None, "ping").build()

        assert acl.is_allowed_any(["ghost"], ["nowhere"], ["ping"])
        assert acl.is_allowed_any(None, [], ["ping"])

    def test_empty_privileges_query_all(self, blog_acl: Acl):
        assert blog_acl.is_allowed_any(["admin"], ["blog"], [])
        assert not blog_acl.is_allowed_any(["user"], ["blog"], None)


@pytest.mark.unit
class TestGraphQueries:
    def test_counts_and_membership(self, blog_acl: Acl):
        assert blog_acl.role_count == 3
        assert blog_acl.resource_count == 3
        assert blog_acl.has_role("admin")
        assert not blog_acl.has_role("ghost")
        assert blog_acl.has_resource("admin_panel")
        assert repr(blog_acl) == "Acl(roles=3, resources=3)"

    def test_inheritance_with_unknown_symbols(self, blog_acl: Acl):
        assert not blog_acl.inherits_role("ghost", "guest")
        assert not blog_acl.inherits_resource("blog", "nowhere")

    def test_check_for_cycles_on_hand_built_acl(self):
        roles = SymbolGraph().add_edge("a", ["b"]).add_edge("b", ["a"])
        acl = Acl(roles=roles)

        acl.check_resources_for_cycles()
        with pytest.raises(CyclicGraphError):
            acl.check_roles_for_cycles()

    def test_graph_properties_return_copies(self, blog_acl: Acl):
        roles = blog_acl.role_graph
        roles.add_edge("guest", ["admin"])
        blog_acl.resource_graph.add_edge("index", ["admin_panel"])

        assert not blog_acl.inherits_role("guest", "admin")
        assert not blog_acl.is_allowed("guest", "blog", "write")
        assert not blog_acl.is_allowed("guest", "index", "write")
        assert blog_acl.role_count == 3

    def test_unknown_role_searches_wildcard_only(self, blog_acl: Acl):
        decision = blog_acl.explain("ghost", "blog", "delete")

        assert not decision.allowed
        assert decision.matched_role is None
        assert decision.matched_resource is None
