"""Immutable per-domain policy snapshot.

A snapshot is everything the enforcer needs for one domain: its rules
indexed by role, direct role assignments per subject, and the resolved
role hierarchy. Snapshots are never modified after construction; a refresh
builds a new one and the cache republishes it.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from types import MappingProxyType

from src.domain.value_objects import PolicyRule, RoleAssignment, RoleHierarchyEdge
from src.domain.errors.policy_engine_exceptions import MalformedRuleError
from src.infrastructure.authorization.role_resolver import RoleHierarchyResolver


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainSnapshot:
    """Resolved, read-only policy state of one domain.

    Attributes:
        domain: Domain this snapshot describes.
        rules: All rules of the domain, in store order.
        rules_by_role: Rules grouped by role.
        roles_by_subject: Direct roles per subject.
        resolver: Role hierarchy resolver for the domain.
        built_at: Construction time (UTC).
    """

    domain: str
    rules: tuple[PolicyRule, ...]
    rules_by_role: Mapping[str, tuple[PolicyRule, ...]]
    roles_by_subject: Mapping[str, frozenset[str]]
    resolver: RoleHierarchyResolver
    built_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def build(
        cls,
        domain: str,
        *,
        rules: Iterable[PolicyRule],
        assignments: Iterable[RoleAssignment],
        edges: Iterable[RoleHierarchyEdge],
    ) -> "DomainSnapshot":
        """Validate and index one domain's policy.

        Raises:
            MalformedRuleError: If an entry belongs to another domain.
            HierarchyCycleError: If the role hierarchy is cyclic.
        """
        unique_rules = tuple(dict.fromkeys(rules))
        by_role: dict[str, list[PolicyRule]] = {}
        for rule in unique_rules:
            if rule.domain != domain:
                raise MalformedRuleError(domain, f"rule {rule} listed under {domain!r}")
            by_role.setdefault(rule.role, []).append(rule)

        by_subject: dict[str, set[str]] = {}
        for assignment in assignments:
            if assignment.domain != domain:
                raise MalformedRuleError(
                    domain,
                    f"assignment of {assignment.subject!r} listed under {domain!r}",
                )
            by_subject.setdefault(assignment.subject, set()).add(assignment.role)

        edge_list = list(edges)
        for edge in edge_list:
            if edge.domain != domain:
                raise MalformedRuleError(
                    domain,
                    f"edge {edge.child_role!r} -> {edge.parent_role!r} listed under {domain!r}",
                )

        return cls(
            domain=domain,
            rules=unique_rules,
            rules_by_role=MappingProxyType(
                {role: tuple(role_rules) for role, role_rules in by_role.items()}
            ),
            roles_by_subject=MappingProxyType(
                {subject: frozenset(roles) for subject, roles in by_subject.items()}
            ),
            resolver=RoleHierarchyResolver(domain, edge_list),
        )

    @classmethod
    def empty(cls, domain: str) -> "DomainSnapshot":
        """Snapshot with no rules, assignments or edges (deny-all)."""
        return cls.build(domain, rules=(), assignments=(), edges=())

    @property
    def has_rules(self) -> bool:
        return bool(self.rules)

    @property
    def is_empty(self) -> bool:
        return not self.rules and not self.roles_by_subject and not self.resolver.edge_count

    def roles_for(self, subject: str) -> frozenset[str]:
        """Direct roles of subject (empty when unassigned)."""
        return self.roles_by_subject.get(subject, frozenset())

    def subjects_for(self, role: str) -> list[str]:
        """Subjects holding role directly."""
        return sorted(s for s, roles in self.roles_by_subject.items() if role in roles)
