"""Unit tests for policy query handlers (listings and decisions)."""

from unittest.mock import AsyncMock

import pytest

from src.application.queries import (
    CheckAccess,
    GetSubjectPermissions,
    ListPolicyRules,
    ListRoleAssignments,
    ListRoleRelations,
)
from src.application.queries.handlers import (
    CheckAccessHandler,
    GetSubjectPermissionsHandler,
    ListPolicyRulesHandler,
    ListRoleAssignmentsHandler,
    ListRoleRelationsHandler,
)
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.errors.policy_engine_exceptions import (
    MalformedRuleError,
    PolicyStoreUnavailableError,
)
from tests.factories import assignment, edge, rule


@pytest.mark.unit
class TestListingHandlers:
    async def test_list_rules(self, acme_store):
        result = await ListPolicyRulesHandler(acme_store).handle(
            ListPolicyRules(domain="acme")
        )

        assert result == Success(value=[rule("acme", "viewer", "doc", "read")])

    async def test_list_assignments_filtered_by_subject(self, acme_store):
        await acme_store.add_role_assignment(assignment("acme", "bob", "viewer"))
        handler = ListRoleAssignmentsHandler(acme_store)

        everyone = await handler.handle(ListRoleAssignments(domain="acme"))
        only_bob = await handler.handle(ListRoleAssignments(domain="acme", subject="bob"))

        assert len(everyone.value) == 2
        assert only_bob.value == [assignment("acme", "bob", "viewer")]

    async def test_list_relations(self, acme_store):
        result = await ListRoleRelationsHandler(acme_store).handle(
            ListRoleRelations(domain="acme")
        )

        assert result.value == [edge("acme", "editor", "viewer")]

    async def test_invalid_domain(self, acme_store):
        result = await ListPolicyRulesHandler(acme_store).handle(
            ListPolicyRules(domain=" acme")
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.INVALID_DOMAIN
        assert result.error.field == "domain"

    async def test_store_outage(self):
        store = AsyncMock()
        store.list_rules.side_effect = PolicyStoreUnavailableError("list_rules")

        result = await ListPolicyRulesHandler(store).handle(ListPolicyRules(domain="acme"))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.POLICY_STORE_UNAVAILABLE

    async def test_malformed_row_is_configuration_error(self):
        store = AsyncMock()
        store.list_hierarchy.side_effect = MalformedRuleError(
            "acme", "g2 row without parent"
        )

        result = await ListRoleRelationsHandler(store).handle(
            ListRoleRelations(domain="acme")
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.POLICY_CONFIGURATION_INVALID
        assert result.error.domain == "acme"

    async def test_unexpected_error_propagates(self):
        store = AsyncMock()
        store.list_rules.side_effect = RuntimeError("bug")

        with pytest.raises(RuntimeError, match="bug"):
            await ListPolicyRulesHandler(store).handle(ListPolicyRules(domain="acme"))


@pytest.mark.unit
class TestDecisionHandlers:
    async def test_subject_permissions(self, acme_enforcer):
        result = await GetSubjectPermissionsHandler(acme_enforcer).handle(
            GetSubjectPermissions(domain="acme", subject="alice")
        )

        view = result.value
        assert view.roles == ["editor"]
        assert view.implicit_roles == ["editor", "viewer"]
        assert view.permissions == [("doc", "read")]

    async def test_check_access_allowed_and_denied(self, acme_enforcer):
        handler = CheckAccessHandler(acme_enforcer)

        allowed = await handler.handle(
            CheckAccess(subject="alice", domain="acme", resource="doc", action="read")
        )
        denied = await handler.handle(
            CheckAccess(subject="alice", domain="acme", resource="doc", action="delete")
        )

        assert allowed.value.allowed is True
        assert isinstance(denied, Success)
        assert denied.value.allowed is False

    async def test_check_access_invalid_domain(self, acme_enforcer):
        result = await CheckAccessHandler(acme_enforcer).handle(
            CheckAccess(subject="alice", domain="a,b", resource="doc", action="read")
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.INVALID_DOMAIN
