"""Unit tests for role hierarchy helpers and RoleHierarchyResolver.

Tests cover:
- Transitive closure (chains, diamonds, roles without parents)
- Cycle detection (self-loop, two-role and longer cycles)
- Cycle prediction for candidate edges
"""

import pytest

from src.domain.services.role_hierarchy import (
    creates_cycle,
    find_cycle,
    parent_map,
    role_closure,
)
from src.domain.errors.policy_engine_exceptions import (
    ConfigurationError,
    HierarchyCycleError,
)
from src.infrastructure.authorization.role_resolver import RoleHierarchyResolver
from tests.factories import edge


@pytest.mark.unit
class TestRoleClosure:
    def test_chain_is_followed_transitively(self):
        parents = parent_map(
            [edge("acme", "owner", "editor"), edge("acme", "editor", "viewer")]
        )

        assert role_closure(parents, "owner") == {"owner", "editor", "viewer"}
        assert role_closure(parents, "viewer") == {"viewer"}

    def test_diamond_contributes_each_role_once(self):
        parents = parent_map(
            [
                edge("acme", "lead", "writer"),
                edge("acme", "lead", "reviewer"),
                edge("acme", "writer", "reader"),
                edge("acme", "reviewer", "reader"),
            ]
        )

        assert role_closure(parents, "lead") == {"lead", "writer", "reviewer", "reader"}

    def test_unknown_role_resolves_to_itself(self):
        assert role_closure({}, "ghost") == {"ghost"}


@pytest.mark.unit
class TestCycleDetection:
    def test_acyclic_graph_has_no_cycle(self):
        parents = parent_map([edge("acme", "a", "b"), edge("acme", "b", "c")])

        assert find_cycle(parents) is None

    def test_two_role_cycle_is_reported_as_path(self):
        parents = parent_map([edge("acme", "a", "b"), edge("acme", "b", "a")])

        cycle = find_cycle(parents)

        assert cycle is not None
        assert cycle[0] == cycle[-1]
        assert set(cycle) == {"a", "b"}

    def test_three_role_cycle_is_detected(self):
        parents = parent_map(
            [edge("acme", "a", "b"), edge("acme", "b", "c"), edge("acme", "c", "a")]
        )

        assert find_cycle(parents) is not None

    def test_creates_cycle_predicts_back_edge(self):
        parents = parent_map([edge("acme", "editor", "viewer")])

        assert creates_cycle(parents, "viewer", "editor") is True
        assert creates_cycle(parents, "admin", "editor") is False

    def test_self_edge_creates_cycle(self):
        assert creates_cycle({}, "viewer", "viewer") is True


@pytest.mark.unit
class TestRoleHierarchyResolver:
    def test_closure_and_expand(self):
        resolver = RoleHierarchyResolver(
            "acme",
            [edge("acme", "editor", "viewer"), edge("acme", "auditor", "viewer")],
        )

        assert resolver.closure("editor") == {"editor", "viewer"}
        assert resolver.expand(["editor", "auditor"]) == {"editor", "auditor", "viewer"}
        assert resolver.edge_count == 2
        assert resolver.parents_of("editor") == ("viewer",)

    def test_cyclic_edges_raise_configuration_error(self):
        with pytest.raises(HierarchyCycleError) as exc_info:
            RoleHierarchyResolver(
                "acme", [edge("acme", "a", "b"), edge("acme", "b", "a")]
            )

        assert isinstance(exc_info.value, ConfigurationError)
        assert exc_info.value.domain == "acme"

    def test_would_create_cycle(self):
        resolver = RoleHierarchyResolver("acme", [edge("acme", "editor", "viewer")])

        assert resolver.would_create_cycle("viewer", "editor") is True
        assert resolver.would_create_cycle("owner", "editor") is False
