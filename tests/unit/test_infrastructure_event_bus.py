"""Unit tests for the event bus and policy change event wiring."""

from unittest.mock import AsyncMock

import pytest

from src.core.container.events import build_event_bus
from src.domain.enums import PolicyChangeType
from src.domain.events import (
    PolicyChangeAttempted,
    PolicyChangeFailed,
    PolicyChangeSucceeded,
)
from src.infrastructure.events.in_memory_event_bus import InMemoryEventBus


def succeeded(changed=True):
    return PolicyChangeSucceeded(
        domain="acme",
        change_type=PolicyChangeType.RULE_ADDED,
        values=("viewer", "doc", "read"),
        changed=changed,
    )


@pytest.mark.unit
class TestInMemoryEventBus:
    async def test_dispatches_by_exact_type(self, mock_logger):
        bus = InMemoryEventBus(logger=mock_logger)
        handler = AsyncMock()
        bus.subscribe(PolicyChangeSucceeded, handler)

        event = succeeded()
        await bus.publish(event)
        await bus.publish(
            PolicyChangeAttempted(domain="acme", change_type=PolicyChangeType.RULE_ADDED)
        )

        handler.assert_awaited_once_with(event)

    async def test_failing_handler_does_not_block_others(self, mock_logger):
        bus = InMemoryEventBus(logger=mock_logger)
        failing = AsyncMock(side_effect=RuntimeError("boom"))
        healthy = AsyncMock()
        bus.subscribe(PolicyChangeSucceeded, failing)
        bus.subscribe(PolicyChangeSucceeded, healthy)

        await bus.publish(succeeded())

        healthy.assert_awaited_once()
        assert mock_logger.warning.call_args.args[0] == "event_handler_failed"


@pytest.mark.unit
class TestBuildEventBus:
    async def test_logs_every_phase(self, mock_logger):
        bus = build_event_bus(mock_logger)

        await bus.publish(
            PolicyChangeAttempted(domain="acme", change_type=PolicyChangeType.ROLE_ASSIGNED)
        )
        await bus.publish(succeeded())
        await bus.publish(
            PolicyChangeFailed(
                domain="acme",
                change_type=PolicyChangeType.ROLE_ASSIGNED,
                reason="invalid_role_assignment",
            )
        )

        logged = [
            call.args[0]
            for method in (mock_logger.info, mock_logger.warning)
            for call in method.call_args_list
        ]
        assert "policy_change_attempted" in logged
        assert "policy_change_succeeded" in logged
        assert "policy_change_failed" in logged

    async def test_notifier_receives_changed_domains_only(self, mock_logger):
        notifier = AsyncMock()
        bus = build_event_bus(mock_logger, notifier)

        await bus.publish(succeeded(changed=False))
        await bus.publish(succeeded(changed=True))

        notifier.publish.assert_awaited_once_with("acme")
