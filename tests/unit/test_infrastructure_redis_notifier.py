"""Unit tests for RedisPolicyChangeNotifier (fakeredis).

Tests cover:
- Messages from other instances trigger a domain refresh
- An instance ignores its own announcements
- Malformed messages are skipped
- Publish failures are logged, never raised
- Listener resubscribes after a connection error and catches up
"""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from fakeredis import FakeAsyncRedis
from redis.exceptions import ConnectionError as RedisConnectionError

from src.infrastructure.authorization.redis_notifier import RedisPolicyChangeNotifier

CHANNEL = "authz:test-changes"


@pytest.fixture
def redis_client():
    return FakeAsyncRedis()


async def wait_for(condition, timeout=2.0):
    deadline = asyncio.get_running_loop().time() + timeout
    while not condition():
        if asyncio.get_running_loop().time() > deadline:
            raise AssertionError("condition not met in time")
        await asyncio.sleep(0.01)


@pytest.mark.unit
class TestRedisPolicyChangeNotifier:
    async def test_other_instance_change_refreshes_domain(self, redis_client, mock_logger):
        cache = AsyncMock()
        listener = RedisPolicyChangeNotifier(
            redis_client, mock_logger, channel=CHANNEL, instance_id="listener"
        )
        publisher = RedisPolicyChangeNotifier(
            redis_client, mock_logger, channel=CHANNEL, instance_id="publisher"
        )
        ready = asyncio.Event()
        task = asyncio.create_task(listener.listen(cache, ready=ready))
        try:
            await asyncio.wait_for(ready.wait(), timeout=2)

            await publisher.publish("acme")

            await wait_for(lambda: cache.refresh_domain.await_count == 1)
            cache.refresh_domain.assert_awaited_with("acme")
        finally:
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

    async def test_own_messages_are_ignored(self, redis_client, mock_logger):
        cache = AsyncMock()
        notifier = RedisPolicyChangeNotifier(
            redis_client, mock_logger, channel=CHANNEL, instance_id="self"
        )
        ready = asyncio.Event()
        task = asyncio.create_task(notifier.listen(cache, ready=ready))
        try:
            await asyncio.wait_for(ready.wait(), timeout=2)

            await notifier.publish("acme")
            await redis_client.publish(
                CHANNEL, json.dumps({"domain": "globex", "origin": "other"})
            )

            await wait_for(lambda: cache.refresh_domain.await_count == 1)
            cache.refresh_domain.assert_awaited_once_with("globex")
        finally:
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

    async def test_malformed_message_is_skipped(self, redis_client, mock_logger):
        notifier = RedisPolicyChangeNotifier(redis_client, mock_logger, channel=CHANNEL)

        assert notifier._parse(b"not json") is None
        assert notifier._parse(json.dumps({"origin": "x"})) is None
        assert mock_logger.warning.call_args.args[0] == "policy_change_message_invalid"

    async def test_publish_failure_is_logged(self, mock_logger):
        client = AsyncMock()
        client.publish.side_effect = RedisConnectionError("redis down")
        notifier = RedisPolicyChangeNotifier(client, mock_logger, channel=CHANNEL)

        await notifier.publish("acme")

        assert mock_logger.warning.call_args.args[0] == "policy_change_publish_failed"

    async def test_start_and_stop(self, redis_client, mock_logger):
        notifier = RedisPolicyChangeNotifier(redis_client, mock_logger, channel=CHANNEL)

        notifier.start(AsyncMock())
        await asyncio.sleep(0.05)
        await notifier.stop()

        assert notifier._task is None


def fake_pubsub(*messages, error=None):
    """PubSub double yielding messages, then raising error or idling."""
    pubsub = MagicMock()
    pubsub.subscribe = AsyncMock()
    pubsub.unsubscribe = AsyncMock()
    pubsub.aclose = AsyncMock()

    async def listen():
        for message in messages:
            yield message
        if error is not None:
            raise error
        await asyncio.Event().wait()

    pubsub.listen = listen
    return pubsub


@pytest.mark.unit
class TestRedisPolicyChangeNotifierReconnect:
    async def test_resubscribes_after_connection_error(self, mock_logger):
        broken = fake_pubsub(error=RedisConnectionError("connection reset"))
        healthy = fake_pubsub(
            {"type": "subscribe", "data": 1},
            {
                "type": "message",
                "data": json.dumps({"domain": "acme", "origin": "other"}),
            },
        )
        client = MagicMock()
        client.pubsub.side_effect = [broken, healthy]
        cache = AsyncMock()
        notifier = RedisPolicyChangeNotifier(
            client, mock_logger, channel=CHANNEL, reconnect_backoff_seconds=0
        )

        task = asyncio.create_task(notifier.listen(cache))
        try:
            await wait_for(lambda: cache.refresh_domain.await_count == 1)
        finally:
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        cache.refresh_domain.assert_awaited_once_with("acme")
        cache.refresh_all.assert_awaited_once()
        broken.aclose.assert_awaited_once()
        healthy.subscribe.assert_awaited_once_with(CHANNEL)
        logged = [c.args[0] for c in mock_logger.error.call_args_list]
        assert logged == ["policy_change_listener_disconnected"]

    async def test_first_subscription_does_not_refresh_all(self, mock_logger):
        client = MagicMock()
        client.pubsub.return_value = fake_pubsub()
        cache = AsyncMock()
        notifier = RedisPolicyChangeNotifier(client, mock_logger, channel=CHANNEL)
        ready = asyncio.Event()

        task = asyncio.create_task(notifier.listen(cache, ready=ready))
        try:
            await asyncio.wait_for(ready.wait(), timeout=2)
        finally:
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        cache.refresh_all.assert_not_awaited()
