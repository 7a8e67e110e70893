"""API tests for authentication and permission enforcement on routes.

Tests cover:
- 401 with WWW-Authenticate: Bearer for missing or invalid tokens
- 403 when any required permission is denied
- Public routes pass without identity
- Roles never leak across domains
"""

import pytest

pytestmark = pytest.mark.api

POLICIES = "/api/v1/domains/acme/policies"


class TestAuthentication:
    def test_missing_token(self, client):
        response = client.get(POLICIES)

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.json()["title"] == "Authentication Required"

    def test_invalid_token(self, client):
        response = client.get(POLICIES, headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_public_route_needs_no_token(self, client):
        assert client.get("/api/v1/authorization/status").status_code == 200


class TestPermissions:
    def test_role_without_permission_is_forbidden(self, client, auth_headers):
        response = client.get(POLICIES, headers=auth_headers("alice"))

        assert response.status_code == 403
        body = response.json()
        assert body["title"] == "Access Denied"
        assert body["instance"] == POLICIES
        assert "WWW-Authenticate" not in response.headers

    def test_read_permission_allows_read_only(self, client, auth_headers):
        headers = auth_headers("olga")

        assert client.get(POLICIES, headers=headers).status_code == 200
        response = client.post(
            POLICIES,
            headers=headers,
            json={"role": "viewer", "resource": "doc", "action": "write"},
        )
        assert response.status_code == 403

    def test_unknown_subject_is_forbidden(self, client, auth_headers):
        assert client.get(POLICIES, headers=auth_headers("mallory")).status_code == 403

    def test_roles_do_not_cross_domains(self, client, auth_headers):
        # olga operates acme only; the path domain decides where roles are read
        response = client.get(
            "/api/v1/domains/globex/policies", headers=auth_headers("olga")
        )

        assert response.status_code == 403

    def test_global_admin_holds_no_tenant_roles(self, client, auth_headers):
        # root is admin in '' and acme, not in globex
        response = client.get(
            "/api/v1/domains/globex/policies", headers=auth_headers("root", "globex")
        )

        assert response.status_code == 403

    def test_revoked_role_takes_effect_immediately(self, client, root_headers, auth_headers):
        olga = auth_headers("olga")
        assert client.get(POLICIES, headers=olga).status_code == 200

        client.delete(
            "/api/v1/domains/acme/role-assignments",
            headers=root_headers,
            params={"subject": "olga", "role": "operator"},
        )

        assert client.get(POLICIES, headers=olga).status_code == 403
