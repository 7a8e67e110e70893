"""Event bus protocol (port) for domain events.

Command handlers publish policy change events; subscribers (logging,
cross-instance notification) react to them.

Requirements for implementations:
    1. Fail-open: one handler failure must NOT prevent other handlers from
       executing and must never reach the publisher.
    2. Async handlers.
    3. Exact type routing: handlers receive only the event type they
       subscribed to.

Implementations:
    - InMemoryEventBus: src/infrastructure/events/in_memory_event_bus.py

Usage:
    >>> event_bus.subscribe(PolicyChangeSucceeded, notify_other_instances)
    >>> await event_bus.publish(PolicyChangeSucceeded(...))
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

from src.domain.events.base_event import DomainEvent

# Type alias for event handler functions
EventHandler = Callable[[DomainEvent], Awaitable[None]]


class EventBusProtocol(Protocol):
    """Protocol for event bus implementations."""

    def subscribe(
        self,
        event_type: type[DomainEvent],
        handler: EventHandler,
    ) -> None:
        """Register an async handler for one event type.

        Args:
            event_type: Event class to handle (no inheritance matching).
            handler: Async callable receiving the event.
        """
        ...

    async def publish(self, event: DomainEvent) -> None:
        """Publish event to all handlers registered for type(event).

        Handlers run concurrently. Handler exceptions are logged, never raised.
        """
        ...
