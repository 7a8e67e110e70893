"""Policy change notifier protocol (port).

Tells other engine instances that a domain changed so they refresh it.
Notification is best-effort: failures are logged by implementations and
never surface to the caller that made the change.
"""

from typing import Protocol


class PolicyChangeNotifierProtocol(Protocol):
    """Publishes changed domain names to other instances."""

    async def publish(self, domain: str) -> None:
        """Announce that domain's policy changed."""
        ...
