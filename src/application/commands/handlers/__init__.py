"""Command handlers."""

from src.application.commands.handlers.policy_rule_handlers import (
    AddPolicyRuleHandler,
    ApplyPolicyBatchHandler,
    PolicyBatchResult,
    RemovePolicyRuleHandler,
)
from src.application.commands.handlers.refresh_policies_handler import (
    RefreshPoliciesHandler,
)
from src.application.commands.handlers.role_assignment_handlers import (
    AssignRoleHandler,
    RemoveSubjectHandler,
    RevokeRoleHandler,
)
from src.application.commands.handlers.role_relation_handlers import (
    AddRoleRelationHandler,
    RemoveRoleRelationHandler,
)

__all__ = [
    "AddPolicyRuleHandler",
    "AddRoleRelationHandler",
    "ApplyPolicyBatchHandler",
    "AssignRoleHandler",
    "PolicyBatchResult",
    "RefreshPoliciesHandler",
    "RemovePolicyRuleHandler",
    "RemoveRoleRelationHandler",
    "RemoveSubjectHandler",
    "RevokeRoleHandler",
]
