"""API test fixtures.

Each test gets its own engine over the admin_store fixture and a
TestClient whose lifespan starts and stops that engine.

Principals (see admin_store):
    root  - admin in the global domain and in acme
    olga  - operator in acme (policies:read, roles:read)
    alice - viewer in acme (doc:read only)
"""

import pytest
from fastapi.testclient import TestClient

from src.core.container import build_authorization_engine, get_caller_extractor
from src.domain.value_objects import Caller
from src.main import create_app


@pytest.fixture
def engine(admin_store, mock_logger):
    return build_authorization_engine(store=admin_store, logger=mock_logger)


@pytest.fixture
def client(engine):
    with TestClient(create_app(engine)) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    """Build Authorization headers for a subject in an active domain."""

    def _headers(subject: str, domain: str = "acme") -> dict[str, str]:
        token = get_caller_extractor().issue(Caller(subject_id=subject, domain=domain))
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def root_headers(auth_headers):
    return auth_headers("root")
