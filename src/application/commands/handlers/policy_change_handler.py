"""Shared flow for policy administration handlers.

Flow:
1. Emit PolicyChangeAttempted
2. Build value objects from the command (ValueError -> ValidationError)
3. Run handler-specific checks against the store
4. Write to the policy store
5. Refresh the domain's snapshot (when the store changed or the cache is stale)
6. Emit PolicyChangeSucceeded / PolicyChangeFailed
7. Return Result (POLICY_CHANGE_NOT_APPLIED if the refresh failed)

Architecture:
- Application layer ONLY imports from domain and core layers
- Store, cache and event bus are injected via protocols
"""

from collections.abc import Awaitable, Callable
from typing import ClassVar

from src.core.enums import ErrorCode
from src.core.errors import DomainError, ValidationError
from src.core.result import Failure, Result, Success
from src.domain.enums import PolicyChangeType
from src.domain.errors import PolicyEngineError, PolicyError
from src.domain.events import (
    PolicyChangeAttempted,
    PolicyChangeFailed,
    PolicyChangeSucceeded,
)
from src.domain.protocols.event_bus_protocol import EventBusProtocol
from src.domain.protocols.policy_cache_protocol import PolicyCacheProtocol
from src.domain.protocols.policy_store_protocol import PolicyStoreProtocol


class PolicyChangeHandler:
    """Base class for administrative command handlers.

    Subclasses set change_type and validation_code and call _execute().
    """

    change_type: ClassVar[PolicyChangeType]
    validation_code: ClassVar[ErrorCode] = ErrorCode.VALIDATION_FAILED

    def __init__(
        self,
        store: PolicyStoreProtocol,
        cache: PolicyCacheProtocol,
        event_bus: EventBusProtocol,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            store: Policy store (source of truth).
            cache: Policy cache refreshed after successful writes.
            event_bus: Event bus for policy change events.
        """
        self._store = store
        self._cache = cache
        self._event_bus = event_bus

    async def _execute[E, R](
        self,
        *,
        domain: str,
        values: tuple[str, ...],
        actor: str | None,
        build: Callable[[], E],
        write: Callable[[E], Awaitable[R]],
        check: Callable[[E], Awaitable[DomainError | None]] | None = None,
    ) -> Result[R, DomainError]:
        await self._event_bus.publish(
            PolicyChangeAttempted(
                domain=domain,
                change_type=self.change_type,
                values=values,
                actor=actor,
            )
        )

        try:
            entry = build()
        except ValueError as e:
            return await self._fail(
                domain,
                values,
                actor,
                ValidationError(code=self.validation_code, message=str(e)),
            )

        try:
            if check is not None:
                error = await check(entry)
                if error is not None:
                    return await self._fail(domain, values, actor, error)
            result = await write(entry)
        except PolicyEngineError as e:
            return await self._fail(
                domain, values, actor, PolicyError.from_exception(e, domain=domain)
            )

        changed = bool(result)
        # A retried idempotent write changes nothing but must still go live.
        applied = True
        if changed or self._cache.is_stale(domain):
            applied = await self._cache.refresh_domain(domain)

        await self._event_bus.publish(
            PolicyChangeSucceeded(
                domain=domain,
                change_type=self.change_type,
                values=values,
                actor=actor,
                changed=changed,
            )
        )
        if not applied:
            return Failure(
                error=PolicyError(
                    code=ErrorCode.POLICY_CHANGE_NOT_APPLIED,
                    message=(
                        "Change was stored but the domain's policy could not be "
                        "reloaded; decisions still use the previous policy"
                    ),
                    domain=domain,
                )
            )
        return Success(value=result)

    async def _fail(
        self,
        domain: str,
        values: tuple[str, ...],
        actor: str | None,
        error: DomainError,
    ) -> Failure[DomainError]:
        await self._event_bus.publish(
            PolicyChangeFailed(
                domain=domain,
                change_type=self.change_type,
                values=values,
                actor=actor,
                reason=error.code.value,
            )
        )
        return Failure(error=error)
