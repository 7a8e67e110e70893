"""Policy administration commands (CQRS write operations).

Commands are the only way to change authorization state. All commands are
immutable (frozen=True) and keyword-only (kw_only=True).

Pattern:
- Commands are data containers (no logic)
- Handlers validate, write to the policy store, refresh the domain's
  snapshot and publish 3-state events
- Handlers return Result types
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, kw_only=True)
class AddPolicyRule:
    """Grant role an action on a resource in domain.

    Attributes:
        domain: Target domain ("" = global default rules).
        role: Role receiving the grant.
        resource: Resource name or "*".
        action: Action name or "*".
        actor: Identity performing the change (audit).
    """

    domain: str
    role: str
    resource: str
    action: str
    actor: str | None = None


@dataclass(frozen=True, kw_only=True)
class RemovePolicyRule:
    """Remove a grant. Removing an absent rule is a no-op."""

    domain: str
    role: str
    resource: str
    action: str
    actor: str | None = None


@dataclass(frozen=True, kw_only=True)
class RuleSpec:
    """(role, resource, action) inside a batch command."""

    role: str
    resource: str
    action: str


@dataclass(frozen=True, kw_only=True)
class ApplyPolicyBatch:
    """Remove then add several rules of one domain.

    Removals and additions each run in a single store transaction.

    Attributes:
        domain: Target domain.
        add: Rules to add.
        remove: Rules to remove.
        actor: Identity performing the change.
    """

    domain: str
    add: tuple[RuleSpec, ...] = field(default_factory=tuple)
    remove: tuple[RuleSpec, ...] = field(default_factory=tuple)
    actor: str | None = None


@dataclass(frozen=True, kw_only=True)
class AssignRole:
    """Give subject a role in domain."""

    domain: str
    subject: str
    role: str
    actor: str | None = None


@dataclass(frozen=True, kw_only=True)
class RevokeRole:
    """Take a role from subject in domain."""

    domain: str
    subject: str
    role: str
    actor: str | None = None


@dataclass(frozen=True, kw_only=True)
class RemoveSubject:
    """Revoke every role subject holds in domain."""

    domain: str
    subject: str
    actor: str | None = None


@dataclass(frozen=True, kw_only=True)
class AddRoleRelation:
    """Make child_role inherit every permission of parent_role in domain.

    Rejected if it would create a cycle in the domain's hierarchy.
    """

    domain: str
    child_role: str
    parent_role: str
    actor: str | None = None


@dataclass(frozen=True, kw_only=True)
class RemoveRoleRelation:
    """Remove an inheritance edge."""

    domain: str
    child_role: str
    parent_role: str
    actor: str | None = None


@dataclass(frozen=True, kw_only=True)
class RefreshPolicies:
    """Rebuild snapshots from the store.

    Attributes:
        domain: Domain to rebuild. None rebuilds every known domain.
    """

    domain: str | None = None
