"""Policy cache protocol (port).

What administrative handlers need from the cache: republish a domain after
a successful store write, so the change is visible to the next decision in
this process, and report whether a domain is serving a stale snapshot.
"""

from typing import Protocol


class PolicyCacheProtocol(Protocol):
    """Refreshable per-domain policy cache."""

    async def refresh_domain(self, domain: str) -> bool:
        """Reload domain from the store. False if the old snapshot was kept."""
        ...

    async def refresh_all(self) -> dict[str, bool]:
        """Reload every known domain. Maps domain -> refresh outcome."""
        ...

    def is_stale(self, domain: str) -> bool:
        """True if the last refresh of domain failed."""
        ...
