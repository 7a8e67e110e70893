"""Authorization protocol (port) for domain-scoped RBAC decisions.

Following hexagonal architecture:
- Domain defines the PORT (this protocol)
- Infrastructure provides the ADAPTER (Enforcer over the policy cache)
- Application layer (AccessGuard, queries) uses the protocol

Decisions are synchronous and never perform I/O: they read an in-memory
snapshot that refresh operations keep up to date.

Usage:
    allowed = authz.enforce("alice", "acme", "doc", "read")
"""

from typing import Protocol

from src.domain.value_objects import EnforcementResult


class AuthorizationProtocol(Protocol):
    """Decision surface of the authorization engine."""

    def enforce(self, subject: str, domain: str, resource: str, action: str) -> bool:
        """Decide whether subject may perform action on resource in domain.

        Args:
            subject: Caller identity.
            domain: Tenant the request runs in.
            resource: Requested resource.
            action: Requested action.

        Returns:
            bool: True if allowed, False if denied (default-deny).
        """
        ...

    def enforce_ex(
        self, subject: str, domain: str, resource: str, action: str
    ) -> EnforcementResult:
        """Same decision as enforce(), with the granting rule and roles."""
        ...

    def get_roles_for_user(self, subject: str, domain: str) -> list[str]:
        """Return the roles directly assigned to subject in domain."""
        ...

    def get_implicit_roles_for_user(self, subject: str, domain: str) -> list[str]:
        """Return the subject's roles in domain including inherited roles."""
        ...

    def get_implicit_permissions_for_user(
        self, subject: str, domain: str
    ) -> list[tuple[str, str]]:
        """Return (resource, action) pairs granted to subject in domain."""
        ...
