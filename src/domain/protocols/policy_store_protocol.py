"""Policy store protocol (port).

The policy store is the single source of truth for rules, role assignments
and role hierarchy edges. Everything the engine holds in memory is derived
from it and can be rebuilt at any time.

Contract:
    - Reads and writes are async (they may perform I/O).
    - Each mutation is atomic and durable before it returns.
    - Mutations are idempotent: adding an existing tuple or removing an
      absent one returns False and changes nothing.
    - Backend outages raise PolicyStoreUnavailableError.
    - Rows that cannot be mapped to a valid tuple raise MalformedRuleError.

Implementations:
    - InMemoryPolicyStore: src/infrastructure/authorization/stores/memory_store.py
    - SqlPolicyStore: src/infrastructure/authorization/stores/sql_store.py
"""

from collections.abc import Sequence
from typing import Protocol

from src.domain.value_objects import PolicyRule, RoleAssignment, RoleHierarchyEdge


class PolicyStoreProtocol(Protocol):
    """Durable set of policy rules, role assignments and hierarchy edges."""

    async def list_domains(self) -> set[str]:
        """Return every domain that has at least one rule, assignment or edge."""
        ...

    async def list_rules(self, domain: str | None = None) -> list[PolicyRule]:
        """List rules, optionally filtered by domain.

        Args:
            domain: Domain filter. None lists rules of every domain;
                "" lists only the global default rules.
        """
        ...

    async def list_role_assignments(
        self, domain: str, subject: str | None = None
    ) -> list[RoleAssignment]:
        """List role assignments of a domain, optionally for one subject."""
        ...

    async def list_roles_for_subject(self, domain: str, subject: str) -> list[str]:
        """Return the roles directly assigned to subject in domain."""
        ...

    async def list_hierarchy(self, domain: str) -> list[RoleHierarchyEdge]:
        """List role hierarchy edges of a domain."""
        ...

    async def add_rule(self, rule: PolicyRule) -> bool:
        """Add a rule. Returns False if it already existed."""
        ...

    async def remove_rule(self, rule: PolicyRule) -> bool:
        """Remove a rule. Returns False if it did not exist."""
        ...

    async def add_rules(self, rules: Sequence[PolicyRule]) -> int:
        """Add several rules in one transaction. Returns the number added."""
        ...

    async def remove_rules(self, rules: Sequence[PolicyRule]) -> int:
        """Remove several rules in one transaction. Returns the number removed."""
        ...

    async def add_role_assignment(self, assignment: RoleAssignment) -> bool:
        """Assign a role. Returns False if already assigned."""
        ...

    async def remove_role_assignment(self, assignment: RoleAssignment) -> bool:
        """Revoke a role. Returns False if it was not assigned."""
        ...

    async def remove_role_assignments_for_subject(
        self, domain: str, subject: str
    ) -> int:
        """Revoke every role of subject in domain. Returns the number removed."""
        ...

    async def add_hierarchy_edge(self, edge: RoleHierarchyEdge) -> bool:
        """Add a hierarchy edge. Returns False if it already existed."""
        ...

    async def remove_hierarchy_edge(self, edge: RoleHierarchyEdge) -> bool:
        """Remove a hierarchy edge. Returns False if it did not exist."""
        ...
