"""Unit tests for domain error classification and RFC 9457 responses."""

import json

import pytest
from starlette.requests import Request

from src.application.errors import ApplicationError, ApplicationErrorCode
from src.core.enums import ErrorCode
from src.core.errors import (
    AuthenticationError,
    AuthorizationError,
    ValidationError,
)
from src.domain.errors import PolicyError
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder


def make_request(path="/api/v1/domains/acme/policies"):
    return Request(
        {"type": "http", "method": "POST", "path": path, "headers": [], "query_string": b""}
    )


@pytest.mark.unit
class TestApplicationErrorClassification:
    @pytest.mark.parametrize(
        ("error", "expected"),
        [
            (
                ValidationError(code=ErrorCode.INVALID_POLICY_RULE, message="bad", field="role"),
                ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
            ),
            (
                AuthenticationError(code=ErrorCode.TOKEN_EXPIRED, message="expired"),
                ApplicationErrorCode.UNAUTHORIZED,
            ),
            (
                AuthorizationError(code=ErrorCode.PERMISSION_DENIED, message="denied"),
                ApplicationErrorCode.FORBIDDEN,
            ),
            (
                PolicyError(code=ErrorCode.POLICY_STORE_UNAVAILABLE, message="down", domain="acme"),
                ApplicationErrorCode.SERVICE_UNAVAILABLE,
            ),
            (
                PolicyError(code=ErrorCode.POLICY_CONFIGURATION_INVALID, message="bad row"),
                ApplicationErrorCode.COMMAND_EXECUTION_FAILED,
            ),
            (
                PolicyError(
                    code=ErrorCode.POLICY_CHANGE_NOT_APPLIED,
                    message="stored, refresh failed",
                    domain="acme",
                ),
                ApplicationErrorCode.SERVICE_UNAVAILABLE,
            ),
        ],
    )
    def test_classification(self, error, expected):
        app_error = ApplicationError.from_domain_error(error)

        assert app_error.code == expected
        assert app_error.domain_error is error
        assert app_error.message == error.message


@pytest.mark.unit
class TestErrorResponseBuilder:
    def test_unauthorized_carries_bearer_challenge(self):
        response = ErrorResponseBuilder.from_domain_error(
            error=AuthenticationError(code=ErrorCode.AUTHENTICATION_FAILED, message="no token"),
            request=make_request(),
            trace_id="trace-1",
        )

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_forbidden_problem_body(self):
        response = ErrorResponseBuilder.from_domain_error(
            error=AuthorizationError(
                code=ErrorCode.PERMISSION_DENIED,
                message="Permission denied: policies:write",
                required_permission="policies:write",
                domain="acme",
            ),
            request=make_request(),
            trace_id="trace-2",
        )

        body = json.loads(response.body)
        assert response.status_code == 403
        assert "www-authenticate" not in response.headers
        assert body["title"] == "Access Denied"
        assert body["detail"] == "Permission denied: policies:write"
        assert body["instance"] == "/api/v1/domains/acme/policies"
        assert body["trace_id"] == "trace-2"
        assert body["type"].endswith("/errors/forbidden")
        assert "errors" not in body

    def test_validation_error_lists_field(self):
        response = ErrorResponseBuilder.from_domain_error(
            error=ValidationError(
                code=ErrorCode.ROLE_HIERARCHY_CYCLE,
                message="cycle",
                field="parent_role",
            ),
            request=make_request(),
            trace_id="",
        )

        body = json.loads(response.body)
        assert response.status_code == 400
        assert body["errors"] == [
            {"field": "parent_role", "code": "role_hierarchy_cycle", "message": "cycle"}
        ]
        assert "trace_id" not in body

    def test_store_unavailable_is_503(self):
        response = ErrorResponseBuilder.from_domain_error(
            error=PolicyError(code=ErrorCode.POLICY_STORE_UNAVAILABLE, message="down"),
            request=make_request(),
            trace_id="t",
        )

        assert response.status_code == 503
        assert json.loads(response.body)["title"] == "Policy Service Unavailable"
