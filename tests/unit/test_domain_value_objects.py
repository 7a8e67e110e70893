"""Unit tests for policy value objects.

Tests cover:
- Identifier and domain validation
- PolicyRule matching (exact, wildcard, case-sensitive)
- Permission parsing and PermissionListBuilder ordering
"""

import pytest

from src.domain.value_objects import (
    Permission,
    PermissionListBuilder,
    PolicyRule,
    RoleAssignment,
    RoleHierarchyEdge,
    validate_domain,
)


@pytest.mark.unit
class TestPolicyRule:
    def test_exact_match(self):
        rule = PolicyRule(domain="acme", role="viewer", resource="doc", action="read")

        assert rule.matches(resource="doc", action="read") is True
        assert rule.matches(resource="doc", action="write") is False

    def test_matching_is_case_sensitive(self):
        rule = PolicyRule(domain="acme", role="viewer", resource="doc", action="read")

        assert rule.matches(resource="Doc", action="read") is False

    def test_wildcard_matches_any_resource_and_action(self):
        rule = PolicyRule(domain="acme", role="admin", resource="*", action="*")

        assert rule.matches(resource="invoice", action="delete") is True

    def test_wildcard_action_only(self):
        rule = PolicyRule(domain="acme", role="editor", resource="doc", action="*")

        assert rule.matches(resource="doc", action="publish") is True
        assert rule.matches(resource="invoice", action="publish") is False

    def test_request_wildcard_is_literal(self):
        rule = PolicyRule(domain="acme", role="viewer", resource="doc", action="read")

        assert rule.matches(resource="*", action="read") is False

    @pytest.mark.parametrize("role", ["", " viewer", "view,er"])
    def test_invalid_role_rejected(self, role):
        with pytest.raises(ValueError):
            PolicyRule(domain="acme", role=role, resource="doc", action="read")

    def test_identical_rules_are_equal(self):
        a = PolicyRule(domain="acme", role="viewer", resource="doc", action="read")
        b = PolicyRule(domain="acme", role="viewer", resource="doc", action="read")

        assert a == b
        assert len({a, b}) == 1


@pytest.mark.unit
class TestDomainValidation:
    def test_global_domain_is_valid(self):
        validate_domain("")

    def test_reserved_character_rejected(self):
        with pytest.raises(ValueError, match="reserved"):
            validate_domain("acme,globex")

    def test_assignment_rejects_invalid_domain(self):
        with pytest.raises(ValueError):
            RoleAssignment(domain="acme\n", subject="alice", role="editor")

    def test_edge_rejects_self_inheritance(self):
        with pytest.raises(ValueError, match="itself"):
            RoleHierarchyEdge(domain="acme", child_role="editor", parent_role="editor")


@pytest.mark.unit
class TestPermissionListBuilder:
    def test_preserves_order_and_drops_duplicates(self):
        permissions = (
            PermissionListBuilder()
            .require("doc", "read")
            .require("doc", "write")
            .require("doc", "read")
            .build()
        )

        assert permissions == (
            Permission(resource="doc", action="read"),
            Permission(resource="doc", action="write"),
        )

    def test_require_all_parses_notation(self):
        permissions = PermissionListBuilder().require_all("doc:read", "invoice:approve").build()

        assert [str(p) for p in permissions] == ["doc:read", "invoice:approve"]

    def test_empty_builder_is_public(self):
        assert PermissionListBuilder().build() == ()

    def test_parse_without_separator_fails(self):
        with pytest.raises(ValueError):
            Permission.parse("docread")
