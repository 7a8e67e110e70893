"""Authorization engine instance.

Groups the store, cache, enforcer and background propagation tasks under
one explicitly constructed object with a start/stop lifetime. The FastAPI
lifespan owns one instance (app.state.authorization); tests build their
own. There is no process-wide enforcer.
"""

from dataclasses import dataclass

from src.domain.protocols.event_bus_protocol import EventBusProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.policy_store_protocol import PolicyStoreProtocol
from src.infrastructure.authorization.enforcer import Enforcer
from src.infrastructure.authorization.policy_cache import PolicyCache
from src.infrastructure.authorization.policy_refresher import PolicyRefresher
from src.infrastructure.authorization.redis_notifier import RedisPolicyChangeNotifier
from src.infrastructure.persistence.database import Database


@dataclass(kw_only=True)
class AuthorizationEngine:
    """One authorization engine and the resources it owns.

    Attributes:
        store: Source of truth.
        cache: Published per-domain snapshots.
        enforcer: Decision surface over the cache.
        event_bus: Policy change events.
        logger: Structured logger.
        notifier: Cross-instance propagation (None without Redis).
        refresher: Periodic refresh (None when polling is disabled).
        database: Closed on stop() when the store is SQL-backed.
    """

    store: PolicyStoreProtocol
    cache: PolicyCache
    enforcer: Enforcer
    event_bus: EventBusProtocol
    logger: LoggerProtocol
    notifier: RedisPolicyChangeNotifier | None = None
    refresher: PolicyRefresher | None = None
    database: Database | None = None

    async def start(self) -> dict[str, bool]:
        """Build every domain's snapshot, then start background tasks.

        Returns:
            Initial refresh outcome per domain.
        """
        results = await self.cache.refresh_all()
        if self.notifier is not None:
            self.notifier.start(self.cache)
        if self.refresher is not None:
            self.refresher.start()
        self.logger.info(
            "authorization_engine_started",
            domains=len(results),
            failed_domains=sorted(d for d, ok in results.items() if not ok),
            notifier=self.notifier is not None,
            refresher=self.refresher is not None,
        )
        return results

    async def stop(self) -> None:
        if self.refresher is not None:
            await self.refresher.stop()
        if self.notifier is not None:
            await self.notifier.stop()
        if self.database is not None:
            await self.database.close()
        self.logger.info("authorization_engine_stopped")
