# mypy: disable-error-code="arg-type"
"""Event bus factory.

Wires the policy change events to their handlers:
- LoggingEventHandler: ATTEMPTED, SUCCEEDED, FAILED
- PolicyNotificationHandler: SUCCEEDED only, when a notifier exists

Handlers are looked up by method name (handle_policy_change_<phase>).
"""

from typing import TYPE_CHECKING

from src.domain.events import (
    PolicyChangeAttempted,
    PolicyChangeFailed,
    PolicyChangeSucceeded,
)

if TYPE_CHECKING:
    from src.domain.protocols.event_bus_protocol import EventBusProtocol
    from src.domain.protocols.logger_protocol import LoggerProtocol
    from src.domain.protocols.policy_change_notifier_protocol import (
        PolicyChangeNotifierProtocol,
    )

POLICY_CHANGE_EVENTS = (
    (PolicyChangeAttempted, "attempted"),
    (PolicyChangeSucceeded, "succeeded"),
    (PolicyChangeFailed, "failed"),
)


def build_event_bus(
    logger: "LoggerProtocol",
    notifier: "PolicyChangeNotifierProtocol | None" = None,
) -> "EventBusProtocol":
    """Create an event bus with policy change subscriptions.

    Args:
        logger: Logger for the bus and the logging handler.
        notifier: Cross-instance notifier; None disables publishing.

    Returns:
        Event bus implementing EventBusProtocol.
    """
    from src.infrastructure.events.handlers.logging_event_handler import (
        LoggingEventHandler,
    )
    from src.infrastructure.events.handlers.policy_notification_handler import (
        PolicyNotificationHandler,
    )
    from src.infrastructure.events.in_memory_event_bus import InMemoryEventBus

    event_bus = InMemoryEventBus(logger=logger)
    handlers: list[object] = [LoggingEventHandler(logger=logger)]
    if notifier is not None:
        handlers.append(PolicyNotificationHandler(notifier=notifier))

    for event_class, phase in POLICY_CHANGE_EVENTS:
        method_name = f"handle_policy_change_{phase}"
        for handler in handlers:
            handler_method = getattr(handler, method_name, None)
            if handler_method is not None:
                event_bus.subscribe(event_class, handler_method)

    return event_bus
