"""Policy queries (CQRS read operations).

Queries represent requests for policy information. They are immutable
dataclasses with question-like names. Queries NEVER change state.

Store-backed queries (rules, assignments, relations) read the source of
truth. Decision queries (subject permissions, access checks) read the
published snapshots, so they answer exactly what enforcement would.
"""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class ListPolicyRules:
    """List rules of a domain ("" lists the global default rules)."""

    domain: str


@dataclass(frozen=True, kw_only=True)
class ListRoleAssignments:
    """List role assignments of a domain, optionally for one subject."""

    domain: str
    subject: str | None = None


@dataclass(frozen=True, kw_only=True)
class ListRoleRelations:
    """List role hierarchy edges of a domain."""

    domain: str


@dataclass(frozen=True, kw_only=True)
class GetSubjectPermissions:
    """Get the effective roles and permissions of a subject.

    Example:
        >>> query = GetSubjectPermissions(domain="acme", subject="alice")
        >>> result = await handler.handle(query)
    """

    domain: str
    subject: str


@dataclass(frozen=True, kw_only=True)
class CheckAccess:
    """Explain one enforcement decision.

    Attributes:
        subject: Subject to evaluate (not necessarily the caller).
        domain: Domain to evaluate in.
        resource: Requested resource.
        action: Requested action.
    """

    subject: str
    domain: str
    resource: str
    action: str
