"""Infrastructure event implementations.

Event Bus:
    - InMemoryEventBus: fail-open, concurrent handler execution

Event Handlers:
    - LoggingEventHandler: structured logs for all policy change events
    - PolicyNotificationHandler: publishes changed domains to other instances
"""

from src.infrastructure.events.in_memory_event_bus import InMemoryEventBus

__all__ = [
    "InMemoryEventBus",
]
