"""Role hierarchy resolution for one domain.

Expands a role into every role it inherits by following child -> parent
edges. The resolver is built once per domain snapshot: cycle detection and
closure computation both happen at construction, so a cyclic hierarchy
never becomes an active snapshot and lookups never mutate shared state.
"""

from collections.abc import Iterable, Mapping

from src.domain.services.role_hierarchy import (
    creates_cycle,
    find_cycle,
    parent_map,
    role_closure,
)
from src.domain.value_objects import RoleHierarchyEdge
from src.domain.errors.policy_engine_exceptions import HierarchyCycleError


class RoleHierarchyResolver:
    """Transitive role closure over one domain's hierarchy edges.

    Example:
        >>> resolver = RoleHierarchyResolver("acme", edges)
        >>> resolver.closure("editor")
        frozenset({'editor', 'viewer'})

    Raises:
        HierarchyCycleError: If edges contain a cycle (at construction).
    """

    def __init__(self, domain: str, edges: Iterable[RoleHierarchyEdge]) -> None:
        self._domain = domain
        self._parents = parent_map(edges)
        cycle = find_cycle(self._parents)
        if cycle is not None:
            raise HierarchyCycleError(domain, cycle)
        self._closures: Mapping[str, frozenset[str]] = {
            role: role_closure(self._parents, role) for role in self._parents
        }

    @property
    def domain(self) -> str:
        return self._domain

    @property
    def edge_count(self) -> int:
        return sum(len(parents) for parents in self._parents.values())

    def parents_of(self, role: str) -> tuple[str, ...]:
        """Direct parents of role."""
        return self._parents.get(role, ())

    def closure(self, role: str) -> frozenset[str]:
        """Return role plus every role it inherits."""
        closure = self._closures.get(role)
        if closure is None:
            # Roles without parents inherit nothing.
            return frozenset((role,))
        return closure

    def expand(self, roles: Iterable[str]) -> frozenset[str]:
        """Union of the closures of several roles."""
        expanded: set[str] = set()
        for role in roles:
            expanded |= self.closure(role)
        return frozenset(expanded)

    def would_create_cycle(self, child_role: str, parent_role: str) -> bool:
        """Check whether adding child -> parent would close a cycle."""
        return creates_cycle(self._parents, child_role, parent_role)
