"""Periodic full refresh of the policy cache.

Backstop for changes made outside this process when no notifier message
arrived (direct database edits, lost pub/sub messages).
"""

import asyncio

from src.domain.protocols.logger_protocol import LoggerProtocol
from src.infrastructure.authorization.policy_cache import PolicyCache


class PolicyRefresher:
    """Background task calling PolicyCache.refresh_all() on an interval.

    Args:
        cache: Cache to refresh.
        logger: Structured logger.
        interval_seconds: Delay between refreshes (must be positive).
    """

    def __init__(
        self, cache: PolicyCache, logger: LoggerProtocol, *, interval_seconds: float
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._cache = cache
        self._logger = logger
        self._interval = interval_seconds
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run(self) -> None:
        """Refresh forever, sleeping interval_seconds between passes."""
        while True:
            await asyncio.sleep(self._interval)
            results = await self._cache.refresh_all()
            failed = sorted(domain for domain, ok in results.items() if not ok)
            self._logger.debug(
                "policy_periodic_refresh",
                domains=len(results),
                failed_domains=failed,
            )

    def start(self) -> None:
        if not self.running:
            self._task = asyncio.create_task(self.run(), name="policy-refresher")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
