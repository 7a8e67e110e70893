"""API tests for decisions, refreshes and engine status.

Tests cover:
- POST /api/v1/authorization/checks (explained decisions, cross-domain rule)
- POST /api/v1/authorization/refreshes (one domain, every domain)
- GET /api/v1/authorization/status (public, per-domain state)
"""

import pytest

from tests.factories import assignment

pytestmark = pytest.mark.api

CHECKS = "/api/v1/authorization/checks"
REFRESHES = "/api/v1/authorization/refreshes"
STATUS = "/api/v1/authorization/status"


def check_body(subject, domain, resource, action):
    return {"subject": subject, "domain": domain, "resource": resource, "action": action}


class TestCheckAccess:
    def test_allowed_decision_is_explained(self, client, auth_headers):
        response = client.post(
            CHECKS, headers=auth_headers("olga"), json=check_body("alice", "acme", "doc", "read")
        )

        assert response.status_code == 200
        assert response.json() == {
            "allowed": True,
            "roles": ["viewer"],
            "matched_rule": {"domain": "acme", "role": "viewer", "resource": "doc", "action": "read"},
            "rule_domain": "acme",
        }

    def test_denied_decision_is_200(self, client, auth_headers):
        response = client.post(
            CHECKS, headers=auth_headers("olga"), json=check_body("alice", "acme", "doc", "write")
        )

        assert response.status_code == 200
        body = response.json()
        assert body["allowed"] is False
        assert body["matched_rule"] is None

    def test_subject_without_role_has_no_rule_domain(self, client, root_headers):
        body = client.post(
            CHECKS, headers=root_headers, json=check_body("nobody", "acme", "doc", "read")
        ).json()

        assert body == {"allowed": False, "roles": [], "matched_rule": None, "rule_domain": None}

    def test_other_domain_requires_permission_there(self, client, auth_headers):
        response = client.post(
            CHECKS, headers=auth_headers("olga"), json=check_body("root", "", "x", "y")
        )

        assert response.status_code == 403

    def test_global_admin_may_check_global_domain(self, client, root_headers):
        body = client.post(
            CHECKS, headers=root_headers, json=check_body("root", "", "anything", "delete")
        ).json()

        assert body["allowed"] is True
        assert body["rule_domain"] == ""


class TestRefreshPolicies:
    async def test_refresh_domain_picks_up_store_changes(
        self, client, root_headers, admin_store
    ):
        await admin_store.add_role_assignment(assignment("acme", "bob", "operator"))
        before = client.post(
            CHECKS, headers=root_headers, json=check_body("bob", "acme", "policies", "read")
        ).json()

        response = client.post(REFRESHES, headers=root_headers, json={"domain": "acme"})
        after = client.post(
            CHECKS, headers=root_headers, json=check_body("bob", "acme", "policies", "read")
        ).json()

        assert before["allowed"] is False
        assert response.status_code == 200
        assert response.json() == {"results": {"acme": True}}
        assert after["allowed"] is True

    def test_refresh_all_requires_global_permission(self, client, auth_headers, root_headers):
        assert client.post(REFRESHES, headers=auth_headers("olga"), json={}).status_code == 403

        response = client.post(REFRESHES, headers=root_headers, json={})

        assert response.status_code == 200
        assert response.json()["results"] == {"": True, "acme": True}

    def test_operator_cannot_refresh_own_domain(self, client, auth_headers):
        response = client.post(REFRESHES, headers=auth_headers("olga"), json={"domain": "acme"})

        assert response.status_code == 403


class TestAuthorizationStatus:
    def test_status_lists_domains(self, client):
        response = client.get(STATUS)

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert [d["domain"] for d in body["domains"]] == ["", "acme"]
        acme = body["domains"][1]
        assert acme["rule_count"] == 4
        assert acme["is_stale"] is False
        assert acme["consecutive_failures"] == 0
