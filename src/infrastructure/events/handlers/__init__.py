"""Event handlers subscribed by the container."""

from src.infrastructure.events.handlers.logging_event_handler import LoggingEventHandler
from src.infrastructure.events.handlers.policy_notification_handler import (
    PolicyNotificationHandler,
)

__all__ = ["LoggingEventHandler", "PolicyNotificationHandler"]
