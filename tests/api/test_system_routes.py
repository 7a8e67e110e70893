"""API tests for non-versioned system routes and request tracing."""

import pytest

from src.core.config import settings

pytestmark = pytest.mark.api


def test_root_endpoint_returns_status_and_version(client) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert response.json() == {
        "message": settings.app_name,
        "status": "operational",
        "version": settings.app_version,
    }


def test_health_endpoint_returns_healthy_status(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_config_endpoint_behavior_depends_on_environment(client) -> None:
    """Config endpoint should be dev-only and return 403 otherwise."""
    response = client.get("/config")

    if settings.is_development:
        assert response.status_code == 200
        assert response.json()["policy_store"]["backend"] == settings.policy_store_backend
    else:
        assert response.status_code == 403


def test_trace_id_is_echoed(client) -> None:
    response = client.get("/health", headers={"X-Trace-Id": "trace-abc"})

    assert response.headers["X-Trace-Id"] == "trace-abc"


def test_trace_id_is_generated_and_reported_in_problems(client) -> None:
    response = client.get("/api/v1/domains/acme/policies")

    assert response.status_code == 401
    trace_id = response.headers["X-Trace-Id"]
    assert trace_id
    assert response.json()["trace_id"] == trace_id
