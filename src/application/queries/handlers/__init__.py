"""Query handlers."""

from src.application.queries.handlers.decision_query_handlers import (
    CheckAccessHandler,
    GetSubjectPermissionsHandler,
    SubjectPermissionsResult,
)
from src.application.queries.handlers.policy_listing_handlers import (
    ListPolicyRulesHandler,
    ListRoleAssignmentsHandler,
    ListRoleRelationsHandler,
)

__all__ = [
    "CheckAccessHandler",
    "GetSubjectPermissionsHandler",
    "ListPolicyRulesHandler",
    "ListRoleAssignmentsHandler",
    "ListRoleRelationsHandler",
    "SubjectPermissionsResult",
]
