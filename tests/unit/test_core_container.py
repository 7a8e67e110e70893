"""Unit tests for authorization engine assembly and lifetime."""

from pathlib import Path

import pytest
from fakeredis import FakeAsyncRedis

from src.core.config import Settings
from src.core.container import (
    build_authorization_engine,
    build_database,
    build_redis,
    seed_authorization_engine,
)
from src.infrastructure.authorization.stores.memory_store import InMemoryPolicyStore
from src.infrastructure.authorization.stores.sql_store import SqlPolicyStore

SECRET = "container-test-secret-key-32-chars!!"
SEED_FILE = Path(__file__).parent.parent / "data" / "policy.csv"


def make_settings(**overrides):
    return Settings(jwt_secret_key=SECRET, **overrides)


@pytest.mark.unit
class TestBuildAuthorizationEngine:
    def test_memory_defaults(self, mock_logger):
        engine = build_authorization_engine(make_settings(), logger=mock_logger)

        assert isinstance(engine.store, InMemoryPolicyStore)
        assert engine.notifier is None
        assert engine.refresher is None
        assert engine.database is None

    def test_explicit_store_wins(self, acme_store, mock_logger):
        engine = build_authorization_engine(
            make_settings(), store=acme_store, logger=mock_logger
        )

        assert engine.store is acme_store

    def test_sql_backend(self, tmp_path, mock_logger):
        config = make_settings(
            policy_store_backend="sql",
            database_url=f"sqlite+aiosqlite:///{tmp_path / 'authz.db'}",
        )

        engine = build_authorization_engine(config, logger=mock_logger)

        assert isinstance(engine.store, SqlPolicyStore)
        assert engine.database is not None

    def test_refresher_enabled_by_interval(self, mock_logger):
        engine = build_authorization_engine(
            make_settings(policy_refresh_interval_seconds=30), logger=mock_logger
        )

        assert engine.refresher is not None

    def test_notifier_uses_configured_channel(self, mock_logger):
        engine = build_authorization_engine(
            make_settings(policy_change_channel="authz:custom"),
            logger=mock_logger,
            redis_client=FakeAsyncRedis(),
        )

        assert engine.notifier is not None
        assert engine.notifier.channel == "authz:custom"

    def test_build_redis_disabled_without_url(self):
        assert build_redis(make_settings()) is None

    def test_build_database_requires_url(self):
        with pytest.raises(ValueError):
            build_database(make_settings())


@pytest.mark.unit
class TestEngineLifetime:
    async def test_start_builds_snapshots(self, acme_store, mock_logger):
        engine = build_authorization_engine(
            make_settings(), store=acme_store, logger=mock_logger
        )

        results = await engine.start()
        try:
            assert results == {"acme": True}
            assert engine.enforcer.enforce("alice", "acme", "doc", "read") is True
        finally:
            await engine.stop()

    async def test_background_tasks_start_and_stop(self, acme_store, mock_logger):
        engine = build_authorization_engine(
            make_settings(policy_refresh_interval_seconds=60),
            store=acme_store,
            logger=mock_logger,
            redis_client=FakeAsyncRedis(),
        )

        await engine.start()
        assert engine.refresher.running is True

        await engine.stop()
        assert engine.refresher.running is False

    async def test_seed_file_loaded(self, mock_logger):
        config = make_settings(policy_seed_file=str(SEED_FILE))
        engine = build_authorization_engine(config, logger=mock_logger)

        result = await seed_authorization_engine(engine, config)
        await engine.start()
        try:
            assert result.rules_added == 3
            assert engine.enforcer.enforce("alice", "acme", "doc", "read") is True
            assert engine.enforcer.enforce("root", "", "anything", "delete") is True
        finally:
            await engine.stop()

    async def test_no_seed_file(self, mock_logger):
        engine = build_authorization_engine(make_settings(), logger=mock_logger)

        assert await seed_authorization_engine(engine, make_settings()) is None
