"""Unit tests for DomainSnapshot construction and indexing."""

import pytest

from src.domain.errors.policy_engine_exceptions import (
    HierarchyCycleError,
    MalformedRuleError,
)
from src.infrastructure.authorization.policy_snapshot import DomainSnapshot
from tests.factories import assignment, edge, rule


@pytest.mark.unit
class TestDomainSnapshot:
    def test_indexes_rules_and_assignments(self):
        snapshot = DomainSnapshot.build(
            "acme",
            rules=[
                rule("acme", "viewer", "doc", "read"),
                rule("acme", "viewer", "doc", "read"),
                rule("acme", "editor", "doc", "write"),
            ],
            assignments=[
                assignment("acme", "alice", "editor"),
                assignment("acme", "alice", "viewer"),
            ],
            edges=[],
        )

        assert len(snapshot.rules) == 2
        assert set(snapshot.rules_by_role) == {"viewer", "editor"}
        assert snapshot.roles_for("alice") == {"editor", "viewer"}
        assert snapshot.roles_for("bob") == frozenset()
        assert snapshot.subjects_for("editor") == ["alice"]

    def test_indexes_are_read_only(self):
        snapshot = DomainSnapshot.build(
            "acme", rules=[rule("acme", "viewer", "doc", "read")], assignments=[], edges=[]
        )

        with pytest.raises(TypeError):
            snapshot.rules_by_role["admin"] = ()  # type: ignore[index]

    def test_entry_from_other_domain_is_malformed(self):
        with pytest.raises(MalformedRuleError):
            DomainSnapshot.build(
                "acme",
                rules=[rule("globex", "viewer", "doc", "read")],
                assignments=[],
                edges=[],
            )

    def test_cyclic_hierarchy_is_rejected(self):
        with pytest.raises(HierarchyCycleError):
            DomainSnapshot.build(
                "acme",
                rules=[],
                assignments=[],
                edges=[edge("acme", "a", "b"), edge("acme", "b", "a")],
            )

    def test_empty_snapshot(self):
        snapshot = DomainSnapshot.empty("acme")

        assert snapshot.is_empty is True
        assert snapshot.has_rules is False
