"""Application queries (CQRS read side)."""

from src.application.queries.policy_queries import (
    CheckAccess,
    GetSubjectPermissions,
    ListPolicyRules,
    ListRoleAssignments,
    ListRoleRelations,
)

__all__ = [
    "CheckAccess",
    "GetSubjectPermissions",
    "ListPolicyRules",
    "ListRoleAssignments",
    "ListRoleRelations",
]
