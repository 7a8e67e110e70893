"""In-memory policy store.

Default backend for single-instance deployments and the store used by the
test suite. Each mutation completes without awaiting, so it is atomic with
respect to other coroutines on the event loop.
"""

from collections.abc import Iterable, Sequence

from src.domain.value_objects import PolicyRule, RoleAssignment, RoleHierarchyEdge


class InMemoryPolicyStore:
    """Policy store backed by insertion-ordered dictionaries.

    Example:
        >>> store = InMemoryPolicyStore()
        >>> await store.add_rule(PolicyRule(domain="acme", role="viewer",
        ...                                 resource="doc", action="read"))
        True
    """

    def __init__(
        self,
        *,
        rules: Iterable[PolicyRule] = (),
        assignments: Iterable[RoleAssignment] = (),
        edges: Iterable[RoleHierarchyEdge] = (),
    ) -> None:
        self._rules: dict[PolicyRule, None] = dict.fromkeys(rules)
        self._assignments: dict[RoleAssignment, None] = dict.fromkeys(assignments)
        self._edges: dict[RoleHierarchyEdge, None] = dict.fromkeys(edges)

    async def list_domains(self) -> set[str]:
        domains = {rule.domain for rule in self._rules}
        domains.update(assignment.domain for assignment in self._assignments)
        domains.update(edge.domain for edge in self._edges)
        return domains

    async def list_rules(self, domain: str | None = None) -> list[PolicyRule]:
        if domain is None:
            return list(self._rules)
        return [rule for rule in self._rules if rule.domain == domain]

    async def list_role_assignments(
        self, domain: str, subject: str | None = None
    ) -> list[RoleAssignment]:
        return [
            a
            for a in self._assignments
            if a.domain == domain and (subject is None or a.subject == subject)
        ]

    async def list_roles_for_subject(self, domain: str, subject: str) -> list[str]:
        return [a.role for a in await self.list_role_assignments(domain, subject)]

    async def list_hierarchy(self, domain: str) -> list[RoleHierarchyEdge]:
        return [edge for edge in self._edges if edge.domain == domain]

    async def add_rule(self, rule: PolicyRule) -> bool:
        return _add(self._rules, rule)

    async def remove_rule(self, rule: PolicyRule) -> bool:
        return _remove(self._rules, rule)

    async def add_rules(self, rules: Sequence[PolicyRule]) -> int:
        return sum(_add(self._rules, rule) for rule in rules)

    async def remove_rules(self, rules: Sequence[PolicyRule]) -> int:
        return sum(_remove(self._rules, rule) for rule in rules)

    async def add_role_assignment(self, assignment: RoleAssignment) -> bool:
        return _add(self._assignments, assignment)

    async def remove_role_assignment(self, assignment: RoleAssignment) -> bool:
        return _remove(self._assignments, assignment)

    async def remove_role_assignments_for_subject(
        self, domain: str, subject: str
    ) -> int:
        doomed = await self.list_role_assignments(domain, subject)
        return sum(_remove(self._assignments, a) for a in doomed)

    async def add_hierarchy_edge(self, edge: RoleHierarchyEdge) -> bool:
        return _add(self._edges, edge)

    async def remove_hierarchy_edge(self, edge: RoleHierarchyEdge) -> bool:
        return _remove(self._edges, edge)


def _add[K](entries: dict[K, None], key: K) -> bool:
    if key in entries:
        return False
    entries[key] = None
    return True


def _remove[K](entries: dict[K, None], key: K) -> bool:
    if key not in entries:
        return False
    del entries[key]
    return True
