"""Builders for policy tuples used across the test suite."""

from src.domain.value_objects import PolicyRule, RoleAssignment, RoleHierarchyEdge


def rule(domain: str, role: str, resource: str, action: str) -> PolicyRule:
    return PolicyRule(domain=domain, role=role, resource=resource, action=action)


def assignment(domain: str, subject: str, role: str) -> RoleAssignment:
    return RoleAssignment(domain=domain, subject=subject, role=role)


def edge(domain: str, child: str, parent: str) -> RoleHierarchyEdge:
    return RoleHierarchyEdge(domain=domain, child_role=child, parent_role=parent)
