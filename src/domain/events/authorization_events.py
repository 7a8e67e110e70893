"""Authorization policy change events.

Pattern: 3 events per administrative mutation (ATTEMPTED -> SUCCEEDED/FAILED)
- PolicyChangeAttempted: before the store is touched
- PolicyChangeSucceeded: after the store write and the local cache refresh
- PolicyChangeFailed: validation or store failure

Handlers:
- log_policy_change: ALL 3 events
- publish_policy_change: SUCCEEDED only (notify other instances)
"""

from dataclasses import dataclass, field

from src.domain.enums import PolicyChangeType
from src.domain.events.base_event import DomainEvent


@dataclass(frozen=True, kw_only=True)
class PolicyChangeAttempted(DomainEvent):
    """Administrative policy change initiated.

    Attributes:
        domain: Domain being changed.
        change_type: Kind of mutation.
        values: Tuple values involved (role/resource/action, subject/role, ...).
        actor: Identity performing the change, when known.
    """

    domain: str
    change_type: PolicyChangeType
    values: tuple[str, ...] = field(default_factory=tuple)
    actor: str | None = None


@dataclass(frozen=True, kw_only=True)
class PolicyChangeSucceeded(DomainEvent):
    """Policy change stored and the domain's snapshot republished.

    Attributes:
        domain: Domain that changed.
        change_type: Kind of mutation.
        values: Tuple values involved.
        actor: Identity performing the change, when known.
        changed: False when the mutation was an idempotent no-op.
    """

    domain: str
    change_type: PolicyChangeType
    values: tuple[str, ...] = field(default_factory=tuple)
    actor: str | None = None
    changed: bool = True


@dataclass(frozen=True, kw_only=True)
class PolicyChangeFailed(DomainEvent):
    """Policy change rejected or not stored.

    Attributes:
        domain: Domain targeted by the change.
        change_type: Kind of mutation.
        values: Tuple values involved.
        actor: Identity performing the change, when known.
        reason: Failure reason (error code or message).
    """

    domain: str
    change_type: PolicyChangeType
    reason: str
    values: tuple[str, ...] = field(default_factory=tuple)
    actor: str | None = None
