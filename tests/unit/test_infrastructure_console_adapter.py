"""Unit tests for ConsoleAdapter (structured console logging).

Tests cover:
- Protocol methods forward message and context to structlog
- error()/critical() flatten an exception into error_type/error_message
- bind() returns a new adapter over the bound logger
"""

from unittest.mock import MagicMock, patch

import pytest

from src.infrastructure.logging.console_adapter import ConsoleAdapter


@pytest.fixture
def structlog_logger():
    with patch("src.infrastructure.logging.console_adapter.structlog") as mock_structlog:
        logger = MagicMock()
        mock_structlog.get_logger.return_value = logger
        yield logger


@pytest.mark.unit
class TestConsoleAdapter:
    @pytest.mark.parametrize("level", ["debug", "info", "warning"])
    def test_forwards_context(self, structlog_logger, level):
        adapter = ConsoleAdapter()

        getattr(adapter, level)("policy_snapshot_published", domain="acme", rules=3)

        getattr(structlog_logger, level).assert_called_once_with(
            "policy_snapshot_published", domain="acme", rules=3
        )

    def test_error_flattens_exception(self, structlog_logger):
        adapter = ConsoleAdapter(use_json=True)

        adapter.error("policy_refresh_failed", error=TimeoutError("store timed out"), domain="acme")

        structlog_logger.error.assert_called_once_with(
            "policy_refresh_failed",
            domain="acme",
            error_type="TimeoutError",
            error_message="store timed out",
        )

    def test_critical_without_exception(self, structlog_logger):
        adapter = ConsoleAdapter()

        adapter.critical("authorization_engine_failed", domain="")

        structlog_logger.critical.assert_called_once_with(
            "authorization_engine_failed", domain=""
        )

    def test_bind_returns_new_adapter(self, structlog_logger):
        bound_logger = MagicMock()
        structlog_logger.bind.return_value = bound_logger
        adapter = ConsoleAdapter()

        bound = adapter.with_context(domain="acme")
        bound.info("policy_change_succeeded")

        assert bound is not adapter
        structlog_logger.bind.assert_called_once_with(domain="acme")
        bound_logger.info.assert_called_once_with("policy_change_succeeded")
        structlog_logger.info.assert_not_called()
