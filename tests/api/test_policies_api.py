"""API tests for policy rule administration.

Tests cover:
- GET/POST/DELETE /api/v1/domains/{domain}/policies
- POST /api/v1/domains/{domain}/policies/batch
- GET /api/v1/domains/{domain}/subjects/{subject}/permissions
- The '_global' path segment
- Changes are visible to the next decision
"""

import pytest

pytestmark = pytest.mark.api

POLICIES = "/api/v1/domains/acme/policies"
CHECKS = "/api/v1/authorization/checks"


def can(client, headers, subject, resource, action, domain="acme"):
    response = client.post(
        CHECKS,
        headers=headers,
        json={"subject": subject, "domain": domain, "resource": resource, "action": action},
    )
    assert response.status_code == 200
    return response.json()["allowed"]


class TestListPolicyRules:
    def test_lists_domain_rules(self, client, root_headers):
        response = client.get(POLICIES, headers=root_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["domain"] == "acme"
        assert body["total_count"] == 4
        assert {"domain": "acme", "role": "viewer", "resource": "doc", "action": "read"} in body["rules"]

    def test_global_segment(self, client, root_headers):
        response = client.get("/api/v1/domains/_global/policies", headers=root_headers)

        assert response.status_code == 200
        assert response.json() == {
            "domain": "",
            "rules": [{"domain": "", "role": "admin", "resource": "*", "action": "*"}],
            "total_count": 1,
        }


class TestAddRemovePolicyRule:
    def test_add_is_idempotent(self, client, root_headers):
        rule = {"role": "viewer", "resource": "doc", "action": "comment"}

        first = client.post(POLICIES, headers=root_headers, json=rule)
        second = client.post(POLICIES, headers=root_headers, json=rule)

        assert first.status_code == 200
        assert first.json() == {"changed": True}
        assert second.json() == {"changed": False}

    def test_added_rule_is_enforced(self, client, root_headers):
        assert can(client, root_headers, "alice", "doc", "comment") is False

        client.post(
            POLICIES,
            headers=root_headers,
            json={"role": "viewer", "resource": "doc", "action": "comment"},
        )

        assert can(client, root_headers, "alice", "doc", "comment") is True

    def test_remove(self, client, root_headers):
        params = {"role": "viewer", "resource": "doc", "action": "read"}

        first = client.delete(POLICIES, headers=root_headers, params=params)
        second = client.delete(POLICIES, headers=root_headers, params=params)

        assert first.json() == {"changed": True}
        assert second.json() == {"changed": False}
        assert can(client, root_headers, "alice", "doc", "read") is False

    def test_invalid_identifier_is_400(self, client, root_headers):
        response = client.post(
            POLICIES,
            headers=root_headers,
            json={"role": "", "resource": "doc", "action": "read"},
        )

        assert response.status_code == 400
        assert response.json()["title"] == "Validation Failed"

    def test_reserved_character_is_400(self, client, root_headers):
        response = client.post(
            POLICIES,
            headers=root_headers,
            json={"role": "viewer", "resource": "doc,secret", "action": "read"},
        )

        assert response.status_code == 400

    def test_missing_field_is_422(self, client, root_headers):
        response = client.post(POLICIES, headers=root_headers, json={"role": "viewer"})

        assert response.status_code == 422
        fields = {error["field"] for error in response.json()["errors"]}
        assert {"resource", "action"} <= fields


class TestApplyPolicyBatch:
    def test_batch_counts_changes(self, client, root_headers):
        response = client.post(
            f"{POLICIES}/batch",
            headers=root_headers,
            json={
                "remove": [
                    {"role": "viewer", "resource": "doc", "action": "read"},
                    {"role": "ghost", "resource": "doc", "action": "read"},
                ],
                "add": [
                    {"role": "viewer", "resource": "doc", "action": "list"},
                    {"role": "operator", "resource": "policies", "action": "read"},
                ],
            },
        )

        assert response.status_code == 200
        assert response.json() == {"added": 1, "removed": 1}
        assert can(client, root_headers, "alice", "doc", "read") is False
        assert can(client, root_headers, "alice", "doc", "list") is True

    def test_invalid_entry_rejects_whole_batch(self, client, root_headers):
        response = client.post(
            f"{POLICIES}/batch",
            headers=root_headers,
            json={
                "add": [
                    {"role": "viewer", "resource": "doc", "action": "list"},
                    {"role": " ", "resource": "doc", "action": "read"},
                ]
            },
        )

        assert response.status_code == 400
        assert can(client, root_headers, "alice", "doc", "list") is False


class TestSubjectPermissions:
    def test_effective_permissions(self, client, root_headers):
        response = client.get(
            "/api/v1/domains/acme/subjects/alice/permissions", headers=root_headers
        )

        assert response.status_code == 200
        assert response.json() == {
            "domain": "acme",
            "subject": "alice",
            "roles": ["viewer"],
            "implicit_roles": ["viewer"],
            "permissions": [{"resource": "doc", "action": "read"}],
        }

    def test_unknown_subject_has_nothing(self, client, root_headers):
        body = client.get(
            "/api/v1/domains/acme/subjects/nobody/permissions", headers=root_headers
        ).json()

        assert body["roles"] == []
        assert body["permissions"] == []
