"""Unit tests for the three-level rule tables."""

from __future__ import annotations

import pytest

from graph_acl.core.acl import (
    PrivilegeRules,
    ResourceRoleRules,
    RolePrivilegeRules,
    Rule,
    RuleContextScope,
)


@pytest.mark.unit
class TestRule:
    def test_values(self):
        assert Rule.ALLOW == "allow"
        assert Rule.DENY == "deny"
        assert Rule.ALLOW.is_allow
        assert not Rule.DENY.is_allow


@pytest.mark.unit
class TestPrivilegeRules:
    """Test suite for PrivilegeRules."""

    def test_defaults(self):
        rules = PrivilegeRules()

        assert rules.for_all_privileges is Rule.DENY
        assert rules.by_privilege_id is None
        assert not rules.is_configured()

    def test_new_with_privilege_map(self):
        assert PrivilegeRules.new(create_privilege_map=True).by_privilege_id == {}

    def test_get_rule_falls_back_to_for_all(self):
        rules = PrivilegeRules()
        rules.set_rule(["read"], Rule.ALLOW)

        assert rules.get_rule("read") is Rule.ALLOW
        assert rules.get_rule("write") is Rule.DENY
        assert rules.get_rule() is Rule.DENY

    def test_find_rule_ignores_default_fallback(self):
        rules = PrivilegeRules()
        rules.set_rule(["read"], Rule.ALLOW)

        assert rules.find_rule("read") is Rule.ALLOW
        assert rules.find_rule("write") is None
        assert rules.find_rule(None) is None

    def test_set_rule_for_all(self):
        rules = PrivilegeRules()

        scope = rules.set_rule(None, Rule.ALLOW)

        assert scope is RuleContextScope.FOR_ALL_SYMBOLS
        assert rules.explicit
        assert rules.find_rule("anything") is Rule.ALLOW
        assert rules.find_rule(None) is Rule.ALLOW

    def test_set_rule_empty_list_targets_for_all(self):
        rules = PrivilegeRules()

        assert rules.set_rule([], Rule.ALLOW) is RuleContextScope.FOR_ALL_SYMBOLS
        assert rules.for_all_privileges is Rule.ALLOW

    def test_set_rule_per_privilege(self):
        rules = PrivilegeRules()

        scope = rules.set_rule(["read", "write"], Rule.DENY)

        assert scope is RuleContextScope.PER_SYMBOL
        assert rules.by_privilege_id == {"read": Rule.DENY, "write": Rule.DENY}
        assert not rules.explicit
        assert rules.is_configured()

    def test_per_privilege_beats_for_all(self):
        rules = PrivilegeRules()
        rules.set_rule(None, Rule.ALLOW)
        rules.set_rule(["delete"], Rule.DENY)

        assert rules.find_rule("delete") is Rule.DENY
        assert rules.find_rule("read") is Rule.ALLOW

    def test_copy_is_independent(self):
        rules = PrivilegeRules()
        rules.set_rule(["read"], Rule.ALLOW)

        clone = rules.copy()
        clone.set_rule(["read"], Rule.DENY)

        assert rules.get_rule("read") is Rule.ALLOW
        assert clone == PrivilegeRules(by_privilege_id={"read": Rule.DENY})


@pytest.mark.unit
class TestRolePrivilegeRules:
    """Test suite for RolePrivilegeRules."""

    def test_new(self):
        assert RolePrivilegeRules().by_role_id is None
        assert RolePrivilegeRules.new(create_child_maps=True).by_role_id == {}

    def test_get_privilege_rules_fallback(self):
        table = RolePrivilegeRules.new(True)
        guest_rules = PrivilegeRules()
        guest_rules.set_rule(["read"], Rule.ALLOW)
        table.set_privilege_rules(["guest"], guest_rules)

        assert table.get_privilege_rules("guest").get_rule("read") is Rule.ALLOW
        assert table.get_privilege_rules("admin") is table.for_all_roles
        assert table.find_privilege_rules("admin") is None

    def test_set_for_all_roles(self):
        table = RolePrivilegeRules()
        rules = PrivilegeRules(for_all_privileges=Rule.ALLOW, explicit=True)

        assert table.set_privilege_rules(None, rules) is RuleContextScope.FOR_ALL_SYMBOLS
        assert table.for_all_roles is rules

    def test_set_for_all_roles_resets_when_rules_missing(self):
        table = RolePrivilegeRules(for_all_roles=PrivilegeRules(for_all_privileges=Rule.ALLOW))

        table.set_privilege_rules(None, None)

        assert table.for_all_roles == PrivilegeRules()

    def test_empty_role_list_targets_for_all_roles(self):
        table = RolePrivilegeRules()
        rules = PrivilegeRules(for_all_privileges=Rule.ALLOW, explicit=True)

        assert table.set_privilege_rules([], rules) is RuleContextScope.FOR_ALL_SYMBOLS
        assert table.for_all_roles is rules

    def test_role_list_stores_copies(self):
        table = RolePrivilegeRules()
        rules = PrivilegeRules()
        rules.set_rule(["read"], Rule.ALLOW)

        scope = table.set_privilege_rules(["guest", "user"], rules)
        table.by_role_id["guest"].set_rule(["read"], Rule.DENY)

        assert scope is RuleContextScope.PER_SYMBOL
        assert table.by_role_id["user"].get_rule("read") is Rule.ALLOW
        assert rules.get_rule("read") is Rule.ALLOW

    def test_clear_role(self):
        table = RolePrivilegeRules()
        table.set_privilege_rules(["guest"], PrivilegeRules())

        table.clear_role("guest")
        table.clear_role("never-added")

        assert table.by_role_id == {}


@pytest.mark.unit
class TestResourceRoleRules:
    """Test suite for ResourceRoleRules."""

    def test_defaults(self):
        table = ResourceRoleRules()

        assert table.by_resource_id == {}
        assert table.for_all_resources.by_role_id == {}

    def test_get_falls_back_to_for_all_resources(self):
        table = ResourceRoleRules()
        table.set_role_privilege_rules(["blog"], RolePrivilegeRules.new(True))

        assert table.get("blog") is table.by_resource_id["blog"]
        assert table.get("wiki") is table.for_all_resources
        assert table.get(None) is table.for_all_resources
        assert table.find_role_privilege_rules("wiki") is None

    def test_get_or_create(self):
        table = ResourceRoleRules()

        created = table.get_or_create_role_privilege_rules("blog")

        assert table.get_or_create_role_privilege_rules("blog") is created
        assert table.get_or_create_role_privilege_rules(None) is table.for_all_resources

    def test_set_for_all_resources(self):
        table = ResourceRoleRules()
        rules = RolePrivilegeRules()

        assert table.set_role_privilege_rules(None, rules) is RuleContextScope.FOR_ALL_SYMBOLS
        assert table.for_all_resources is rules

    def test_empty_resource_list_reports_per_symbol(self):
        table = ResourceRoleRules()
        rules = RolePrivilegeRules()

        assert table.set_role_privilege_rules([], rules) is RuleContextScope.PER_SYMBOL
        assert table.for_all_resources is rules
        assert table.by_resource_id == {}

    def test_resource_list_stores_copies(self):
        table = ResourceRoleRules()
        rules = RolePrivilegeRules.new(True)

        table.set_role_privilege_rules(["blog", "wiki"], rules)

        assert table.by_resource_id["blog"] is not table.by_resource_id["wiki"]
        assert table.by_resource_id["blog"] is not rules

    def test_copy_is_deep(self):
        table = ResourceRoleRules()
        table.get_or_create_role_privilege_rules("blog").set_privilege_rules(
            ["guest"], PrivilegeRules(for_all_privileges=Rule.ALLOW, explicit=True)
        )

        clone = table.copy()
        clone.by_resource_id["blog"].by_role_id["guest"].set_rule(None, Rule.DENY)

        assert table.by_resource_id["blog"].by_role_id["guest"].for_all_privileges is Rule.ALLOW
