"""Cross-instance notification of successful policy changes."""

from src.domain.events import PolicyChangeSucceeded
from src.domain.protocols.policy_change_notifier_protocol import (
    PolicyChangeNotifierProtocol,
)


class PolicyNotificationHandler:
    """Publishes the changed domain so other instances refresh it.

    No-op changes (idempotent add/remove) are not announced.
    """

    def __init__(self, notifier: PolicyChangeNotifierProtocol) -> None:
        self._notifier = notifier

    async def handle_policy_change_succeeded(self, event: PolicyChangeSucceeded) -> None:
        if event.changed:
            await self._notifier.publish(event.domain)
