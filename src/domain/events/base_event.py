"""Base domain event class.

Domain events record things that happened and are named in past tense
(PolicyChangeSucceeded, not ChangePolicy).

Architecture:
    - Frozen dataclass (immutable after creation)
    - Auto-generated, time-ordered event_id (UUID v7)
    - occurred_at timestamp (UTC)

Usage:
    >>> @dataclass(frozen=True, kw_only=True, slots=True)
    >>> class DomainRefreshed(DomainEvent):
    ...     domain: str
    >>>
    >>> event = DomainRefreshed(domain="acme")
    >>> event.event_id  # auto-generated
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from uuid_extensions import uuid7


@dataclass(frozen=True, kw_only=True, slots=True)
class DomainEvent:
    """Base class for all domain events.

    Attributes:
        event_id: Unique identifier for this event instance (UUID v7, sortable).
        occurred_at: Timestamp when the event occurred (UTC).
    """

    event_id: UUID = field(default_factory=uuid7)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))
