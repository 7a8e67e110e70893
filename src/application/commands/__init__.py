"""Application commands (CQRS write side)."""

from src.application.commands.policy_commands import (
    AddPolicyRule,
    AddRoleRelation,
    ApplyPolicyBatch,
    AssignRole,
    RemovePolicyRule,
    RemoveRoleRelation,
    RefreshPolicies,
    RemoveSubject,
    RevokeRole,
    RuleSpec,
)

__all__ = [
    "AddPolicyRule",
    "AddRoleRelation",
    "ApplyPolicyBatch",
    "AssignRole",
    "RemovePolicyRule",
    "RemoveRoleRelation",
    "RefreshPolicies",
    "RemoveSubject",
    "RevokeRole",
    "RuleSpec",
]
