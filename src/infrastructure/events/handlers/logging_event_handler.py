"""Logging event handler for policy change events.

Log Levels:
    - INFO: ATTEMPTED and SUCCEEDED events
    - WARNING: FAILED events

Usage:
    >>> handler = LoggingEventHandler(logger=get_logger())
    >>> event_bus.subscribe(PolicyChangeSucceeded, handler.handle_policy_change_succeeded)
"""

from src.domain.events import (
    PolicyChangeAttempted,
    PolicyChangeFailed,
    PolicyChangeSucceeded,
)
from src.domain.protocols.logger_protocol import LoggerProtocol


class LoggingEventHandler:
    """Structured logging of administrative policy changes."""

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger

    async def handle_policy_change_attempted(self, event: PolicyChangeAttempted) -> None:
        self._logger.info(
            "policy_change_attempted",
            event_id=str(event.event_id),
            domain=event.domain,
            change_type=event.change_type.value,
            values=list(event.values),
            actor=event.actor,
        )

    async def handle_policy_change_succeeded(self, event: PolicyChangeSucceeded) -> None:
        self._logger.info(
            "policy_change_succeeded",
            event_id=str(event.event_id),
            domain=event.domain,
            change_type=event.change_type.value,
            values=list(event.values),
            actor=event.actor,
            changed=event.changed,
        )

    async def handle_policy_change_failed(self, event: PolicyChangeFailed) -> None:
        self._logger.warning(
            "policy_change_failed",
            event_id=str(event.event_id),
            domain=event.domain,
            change_type=event.change_type.value,
            values=list(event.values),
            actor=event.actor,
            reason=event.reason,
        )
