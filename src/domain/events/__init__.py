"""Domain events module.

Usage:
    >>> from src.domain.events import PolicyChangeSucceeded
    >>> await event_bus.publish(PolicyChangeSucceeded(...))
"""

from src.domain.events.authorization_events import (
    PolicyChangeAttempted,
    PolicyChangeFailed,
    PolicyChangeSucceeded,
)
from src.domain.events.base_event import DomainEvent

__all__ = [
    "DomainEvent",
    "PolicyChangeAttempted",
    "PolicyChangeFailed",
    "PolicyChangeSucceeded",
]
