"""Redis pub/sub propagation of policy changes between instances.

Each instance publishes the name of a domain it changed; every other
instance listening on the channel refreshes that domain from the store.
Messages carry the publishing instance's id so an instance ignores its
own announcements (it already refreshed synchronously).

Fail-open: Redis errors are logged and never reach the code that changed
the policy. The listener reconnects on its own and refreshes every domain
after resubscribing; periodic refresh is an additional backstop.
"""

import asyncio
import json
from typing import TYPE_CHECKING

from redis.asyncio import Redis
from redis.asyncio.client import PubSub
from redis.exceptions import RedisError
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    wait_exponential_jitter,
)
from uuid_extensions import uuid7str

from src.domain.protocols.logger_protocol import LoggerProtocol

if TYPE_CHECKING:
    from src.infrastructure.authorization.policy_cache import PolicyCache

MAX_RECONNECT_BACKOFF_SECONDS = 30.0


class RedisPolicyChangeNotifier:
    """Redis implementation of PolicyChangeNotifierProtocol.

    Attributes:
        instance_id: Identifier stamped on published messages.
        channel: Pub/sub channel name.
    """

    def __init__(
        self,
        redis_client: "Redis[bytes]",  # type: ignore[type-arg]
        logger: LoggerProtocol,
        *,
        channel: str = "authz:policy-changes",
        instance_id: str | None = None,
        reconnect_backoff_seconds: float = 1.0,
    ) -> None:
        self._redis = redis_client
        self._logger = logger
        self.channel = channel
        self.instance_id = instance_id or uuid7str()
        self._reconnect_backoff_seconds = reconnect_backoff_seconds
        self._subscriptions = 0
        self._task: asyncio.Task[None] | None = None

    async def publish(self, domain: str) -> None:
        """Announce a changed domain. Never raises on Redis failure."""
        message = json.dumps({"domain": domain, "origin": self.instance_id})
        try:
            receivers = await self._redis.publish(self.channel, message)
        except RedisError as e:
            self._logger.warning(
                "policy_change_publish_failed",
                domain=domain,
                channel=self.channel,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return
        self._logger.debug(
            "policy_change_published",
            domain=domain,
            channel=self.channel,
            receivers=receivers,
        )

    async def listen(
        self, cache: "PolicyCache", *, ready: asyncio.Event | None = None
    ) -> None:
        """Refresh domains announced by other instances until cancelled.

        Redis errors end the current subscription, not the listener: it
        resubscribes with exponential backoff and then refreshes every
        domain to cover announcements missed while disconnected.

        Args:
            cache: Cache whose domains are refreshed.
            ready: Set once the first channel subscription is active.
        """
        retrying = AsyncRetrying(
            wait=wait_exponential_jitter(
                initial=self._reconnect_backoff_seconds,
                max=MAX_RECONNECT_BACKOFF_SECONDS,
                jitter=self._reconnect_backoff_seconds,
            ),
            retry=retry_if_exception_type(RedisError),
            before_sleep=self._log_disconnect,
            reraise=True,
        )
        self._subscriptions = 0
        try:
            await retrying(self._listen_once, cache, ready)
        except asyncio.CancelledError:
            self._logger.debug("policy_change_listener_cancelled", channel=self.channel)
            raise

    async def _listen_once(
        self, cache: "PolicyCache", ready: asyncio.Event | None
    ) -> None:
        pubsub: PubSub = self._redis.pubsub()
        try:
            await pubsub.subscribe(self.channel)
            self._subscriptions += 1
            self._logger.info(
                "policy_change_listener_started",
                channel=self.channel,
                instance_id=self.instance_id,
                subscription=self._subscriptions,
            )
            if ready is not None:
                ready.set()
            if self._subscriptions > 1:
                await cache.refresh_all()

            async for message in pubsub.listen():
                if message["type"] != "message":
                    continue
                domain = self._parse(message["data"])
                if domain is not None:
                    await cache.refresh_domain(domain)
        finally:
            try:
                await pubsub.unsubscribe(self.channel)
                await pubsub.aclose()  # type: ignore[no-untyped-call]
            except RedisError as e:
                self._logger.warning(
                    "policy_change_listener_cleanup_failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )

    def _log_disconnect(self, retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        self._logger.error(
            "policy_change_listener_disconnected",
            channel=self.channel,
            attempt=retry_state.attempt_number,
            retry_in_seconds=(
                retry_state.next_action.sleep if retry_state.next_action else None
            ),
            error_type=type(error).__name__,
            error_message=str(error),
        )

    def start(self, cache: "PolicyCache") -> None:
        """Run listen() as a background task."""
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(
                self.listen(cache), name="policy-change-listener"
            )

    async def stop(self) -> None:
        """Cancel the background listener, if running."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    def _parse(self, data: bytes | str) -> str | None:
        try:
            payload = json.loads(data)
            domain = payload["domain"]
            origin = payload.get("origin")
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            self._logger.warning(
                "policy_change_message_invalid",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return None
        if origin == self.instance_id or not isinstance(domain, str):
            return None
        return domain
