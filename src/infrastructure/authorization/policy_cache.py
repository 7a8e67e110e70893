"""Per-domain policy cache with atomic snapshot publication.

The cache holds one immutable DomainSnapshot per domain behind a single
read-only mapping. Readers grab the mapping reference once and never lock.
A refresh loads one domain from the store, builds a new snapshot and
republishes a copied mapping; other domains' snapshots are carried over
untouched.

Failure handling:
    - PolicyStoreUnavailableError: retried with exponential backoff; if it
      persists the domain keeps its last snapshot (stale but available).
    - ConfigurationError (cycle, malformed entry): not retried; the domain
      keeps its last-known-good snapshot.
    Both are logged and counted in the domain's status, never raised to
    enforce() callers.

Usage:
    cache = PolicyCache(store=store, logger=logger)
    await cache.refresh_all()
    snapshot = cache.get("acme")
"""

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable, Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass, field, replace
from datetime import datetime
from types import MappingProxyType

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from src.core.constants import GLOBAL_DOMAIN
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.policy_store_protocol import PolicyStoreProtocol
from src.domain.errors.policy_engine_exceptions import (
    ConfigurationError,
    HierarchyCycleError,
    PolicyStoreUnavailableError,
)
from src.infrastructure.authorization.policy_snapshot import DomainSnapshot

MAX_BACKOFF_SECONDS = 10.0


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainStatus:
    """Operational state of one domain's cache entry.

    Attributes:
        domain: Domain name.
        rule_count: Rules in the published snapshot.
        refreshed_at: Time of the last successful refresh.
        consecutive_failures: Failed refreshes since the last success.
        last_error: Message of the most recent failure.
    """

    domain: str
    rule_count: int = 0
    refreshed_at: datetime | None = None
    consecutive_failures: int = 0
    last_error: str | None = None

    @property
    def is_stale(self) -> bool:
        return self.consecutive_failures > 0


@dataclass(slots=True)
class _DomainLock:
    """Refresh lock of one domain; removed once no caller holds or awaits it."""

    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    users: int = 0


class PolicyCache:
    """Snapshot arena for all domains.

    Args:
        store: Source of truth for policy entries.
        logger: Structured logger.
        max_attempts: Store read attempts per refresh.
        backoff_seconds: Initial exponential backoff between attempts.
    """

    def __init__(
        self,
        store: PolicyStoreProtocol,
        logger: LoggerProtocol,
        *,
        max_attempts: int = 3,
        backoff_seconds: float = 0.5,
    ) -> None:
        self._store = store
        self._logger = logger
        self._max_attempts = max_attempts
        self._backoff_seconds = backoff_seconds
        self._snapshots: Mapping[str, DomainSnapshot] = MappingProxyType({})
        self._status: Mapping[str, DomainStatus] = MappingProxyType({})
        self._locks: dict[str, _DomainLock] = {}

    @property
    def snapshots(self) -> Mapping[str, DomainSnapshot]:
        """Currently published snapshots (read-only, consistent view)."""
        return self._snapshots

    @property
    def domains(self) -> list[str]:
        return sorted(self._snapshots)

    def get(self, domain: str) -> DomainSnapshot | None:
        return self._snapshots.get(domain)

    def status(self) -> dict[str, DomainStatus]:
        """Per-domain refresh status, including domains that never loaded."""
        return dict(self._status)

    def is_stale(self, domain: str) -> bool:
        status = self._status.get(domain)
        return status is not None and status.is_stale

    async def refresh_domain(self, domain: str) -> bool:
        """Reload one domain from the store and republish its snapshot.

        Refreshes of the same domain are serialized; refreshes of different
        domains run independently.

        Returns:
            bool: True if a new snapshot was published (or the domain was
                dropped because the store no longer has it), False if the
                previous snapshot was kept after a failure.
        """
        async with self._domain_lock(domain):
            try:
                snapshot = await self._load_snapshot(domain)
            except ConfigurationError as e:
                self._record_failure(domain, e)
                log_event = (
                    "policy_hierarchy_cycle_detected"
                    if isinstance(e, HierarchyCycleError)
                    else "policy_configuration_invalid"
                )
                self._logger.error(
                    log_event,
                    error=e,
                    domain=domain,
                    kept_snapshot=domain in self._snapshots,
                )
                return False
            except PolicyStoreUnavailableError as e:
                failures = self._record_failure(domain, e)
                log = self._logger.error if failures >= self._max_attempts else self._logger.warning
                log(
                    "policy_refresh_failed",
                    domain=domain,
                    operation=e.operation,
                    error_message=str(e),
                    consecutive_failures=failures,
                    kept_snapshot=domain in self._snapshots,
                )
                return False

            self._publish(domain, snapshot)
            self._logger.info(
                "policy_domain_refreshed",
                domain=domain,
                rule_count=len(snapshot.rules),
                subject_count=len(snapshot.roles_by_subject),
                edge_count=snapshot.resolver.edge_count,
            )
            return True

    async def refresh_all(self) -> dict[str, bool]:
        """Refresh every domain known to the store or the cache.

        Domains missing from the store are dropped. If the domain list itself
        cannot be read, every snapshot is kept and an empty result returned.
        """
        try:
            stored = await self._retrying(self._store.list_domains)
        except PolicyStoreUnavailableError as e:
            self._logger.warning(
                "policy_refresh_all_failed",
                operation=e.operation,
                error_message=str(e),
                kept_domains=len(self._snapshots),
            )
            return {}

        domains = sorted(
            stored | set(self._snapshots) | set(self._status) | {GLOBAL_DOMAIN}
        )
        results = await asyncio.gather(*(self.refresh_domain(d) for d in domains))
        return dict(zip(domains, results, strict=True))

    @asynccontextmanager
    async def _domain_lock(self, domain: str) -> AsyncIterator[None]:
        entry = self._locks.setdefault(domain, _DomainLock())
        entry.users += 1
        try:
            async with entry.lock:
                yield
        finally:
            entry.users -= 1
            if entry.users == 0:
                del self._locks[domain]

    async def _load_snapshot(self, domain: str) -> DomainSnapshot:
        async def load() -> DomainSnapshot:
            rules = await self._store.list_rules(domain)
            assignments = await self._store.list_role_assignments(domain)
            edges = await self._store.list_hierarchy(domain)
            return DomainSnapshot.build(
                domain, rules=rules, assignments=assignments, edges=edges
            )

        return await self._retrying(load)

    async def _retrying[T](self, func: Callable[[], Awaitable[T]]) -> T:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential_jitter(
                initial=self._backoff_seconds,
                max=MAX_BACKOFF_SECONDS,
                jitter=self._backoff_seconds,
            ),
            retry=retry_if_exception_type(PolicyStoreUnavailableError),
            reraise=True,
        )
        return await retrying(func)

    def _publish(self, domain: str, snapshot: DomainSnapshot) -> None:
        snapshots = dict(self._snapshots)
        dropped = snapshot.is_empty and domain != GLOBAL_DOMAIN
        if dropped:
            snapshots.pop(domain, None)
        else:
            snapshots[domain] = snapshot
        # Single reference swap: readers see the old or the new mapping.
        self._snapshots = MappingProxyType(snapshots)
        if dropped:
            statuses = dict(self._status)
            statuses.pop(domain, None)
            self._status = MappingProxyType(statuses)
            return
        self._set_status(
            DomainStatus(
                domain=domain,
                rule_count=len(snapshot.rules),
                refreshed_at=snapshot.built_at,
            )
        )

    def _record_failure(self, domain: str, error: Exception) -> int:
        previous = self._status.get(domain) or DomainStatus(domain=domain)
        status = replace(
            previous,
            consecutive_failures=previous.consecutive_failures + 1,
            last_error=str(error),
        )
        self._set_status(status)
        return status.consecutive_failures

    def _set_status(self, status: DomainStatus) -> None:
        statuses = dict(self._status)
        statuses[status.domain] = status
        self._status = MappingProxyType(statuses)
