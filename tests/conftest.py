"""Pytest configuration shared by unit, integration and API tests.

Environment variables are set before any src import so the module-level
Settings instance validates (JWT secret) and logs as JSON.
"""

import os

os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-with-at-least-32-characters")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402

from src.core.constants import GLOBAL_DOMAIN  # noqa: E402
from src.infrastructure.authorization.enforcer import Enforcer  # noqa: E402
from src.infrastructure.authorization.policy_cache import PolicyCache  # noqa: E402
from src.infrastructure.authorization.stores.memory_store import (  # noqa: E402
    InMemoryPolicyStore,
)
from tests.factories import assignment, edge, rule  # noqa: E402


@pytest.fixture
def mock_logger():
    """Logger double recording structured calls."""
    return MagicMock()


@pytest.fixture
def acme_store():
    """acme: alice is editor, editor inherits viewer, viewer reads doc."""
    return InMemoryPolicyStore(
        rules=[rule("acme", "viewer", "doc", "read")],
        assignments=[assignment("acme", "alice", "editor")],
        edges=[edge("acme", "editor", "viewer")],
    )


@pytest.fixture
def admin_store():
    """Global admin role plus a tenant-scoped operator in acme."""
    return InMemoryPolicyStore(
        rules=[
            rule(GLOBAL_DOMAIN, "admin", "*", "*"),
            rule("acme", "admin", "*", "*"),
            rule("acme", "operator", "policies", "read"),
            rule("acme", "operator", "roles", "read"),
            rule("acme", "viewer", "doc", "read"),
        ],
        assignments=[
            assignment(GLOBAL_DOMAIN, "root", "admin"),
            assignment("acme", "root", "admin"),
            assignment("acme", "olga", "operator"),
            assignment("acme", "alice", "viewer"),
        ],
    )


@pytest.fixture
async def acme_cache(acme_store, mock_logger):
    cache = PolicyCache(acme_store, mock_logger, max_attempts=1, backoff_seconds=0)
    await cache.refresh_all()
    return cache


@pytest.fixture
def acme_enforcer(acme_cache):
    return Enforcer(acme_cache)
