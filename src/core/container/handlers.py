"""Command and query handler factories (request-scoped).

Each factory binds a handler to the application's AuthorizationEngine.
"""

from typing import TYPE_CHECKING

from fastapi import Depends

from src.application.commands.handlers import (
    AddPolicyRuleHandler,
    AddRoleRelationHandler,
    ApplyPolicyBatchHandler,
    AssignRoleHandler,
    RefreshPoliciesHandler,
    RemovePolicyRuleHandler,
    RemoveRoleRelationHandler,
    RemoveSubjectHandler,
    RevokeRoleHandler,
)
from src.application.queries.handlers import (
    CheckAccessHandler,
    GetSubjectPermissionsHandler,
    ListPolicyRulesHandler,
    ListRoleAssignmentsHandler,
    ListRoleRelationsHandler,
)
from src.core.container.authorization import get_authorization_engine

if TYPE_CHECKING:
    from src.infrastructure.authorization.engine import AuthorizationEngine


# ============================================================================
# Command Handlers
# ============================================================================


def get_add_policy_rule_handler(
    engine: "AuthorizationEngine" = Depends(get_authorization_engine),
) -> AddPolicyRuleHandler:
    return AddPolicyRuleHandler(engine.store, engine.cache, engine.event_bus)


def get_remove_policy_rule_handler(
    engine: "AuthorizationEngine" = Depends(get_authorization_engine),
) -> RemovePolicyRuleHandler:
    return RemovePolicyRuleHandler(engine.store, engine.cache, engine.event_bus)


def get_apply_policy_batch_handler(
    engine: "AuthorizationEngine" = Depends(get_authorization_engine),
) -> ApplyPolicyBatchHandler:
    return ApplyPolicyBatchHandler(engine.store, engine.cache, engine.event_bus)


def get_assign_role_handler(
    engine: "AuthorizationEngine" = Depends(get_authorization_engine),
) -> AssignRoleHandler:
    return AssignRoleHandler(engine.store, engine.cache, engine.event_bus)


def get_revoke_role_handler(
    engine: "AuthorizationEngine" = Depends(get_authorization_engine),
) -> RevokeRoleHandler:
    return RevokeRoleHandler(engine.store, engine.cache, engine.event_bus)


def get_remove_subject_handler(
    engine: "AuthorizationEngine" = Depends(get_authorization_engine),
) -> RemoveSubjectHandler:
    return RemoveSubjectHandler(engine.store, engine.cache, engine.event_bus)


def get_add_role_relation_handler(
    engine: "AuthorizationEngine" = Depends(get_authorization_engine),
) -> AddRoleRelationHandler:
    return AddRoleRelationHandler(engine.store, engine.cache, engine.event_bus)


def get_remove_role_relation_handler(
    engine: "AuthorizationEngine" = Depends(get_authorization_engine),
) -> RemoveRoleRelationHandler:
    return RemoveRoleRelationHandler(engine.store, engine.cache, engine.event_bus)


def get_refresh_policies_handler(
    engine: "AuthorizationEngine" = Depends(get_authorization_engine),
) -> RefreshPoliciesHandler:
    return RefreshPoliciesHandler(engine.cache)


# ============================================================================
# Query Handlers
# ============================================================================


def get_list_policy_rules_handler(
    engine: "AuthorizationEngine" = Depends(get_authorization_engine),
) -> ListPolicyRulesHandler:
    return ListPolicyRulesHandler(engine.store)


def get_list_role_assignments_handler(
    engine: "AuthorizationEngine" = Depends(get_authorization_engine),
) -> ListRoleAssignmentsHandler:
    return ListRoleAssignmentsHandler(engine.store)


def get_list_role_relations_handler(
    engine: "AuthorizationEngine" = Depends(get_authorization_engine),
) -> ListRoleRelationsHandler:
    return ListRoleRelationsHandler(engine.store)


def get_subject_permissions_handler(
    engine: "AuthorizationEngine" = Depends(get_authorization_engine),
) -> GetSubjectPermissionsHandler:
    return GetSubjectPermissionsHandler(engine.enforcer)


def get_check_access_handler(
    engine: "AuthorizationEngine" = Depends(get_authorization_engine),
) -> CheckAccessHandler:
    return CheckAccessHandler(engine.enforcer)
