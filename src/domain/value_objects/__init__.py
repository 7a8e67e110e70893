"""Domain value objects with validation.

Immutable value objects that enforce policy tuple constraints.
"""

from src.domain.value_objects.caller import Caller
from src.domain.value_objects.enforcement import EnforcementRequest, EnforcementResult
from src.domain.value_objects.permission import Permission, PermissionListBuilder
from src.domain.value_objects.policy_rule import (
    PolicyRule,
    validate_domain,
    validate_identifier,
)
from src.domain.value_objects.role_assignment import RoleAssignment, RoleHierarchyEdge

__all__ = [
    "Caller",
    "EnforcementRequest",
    "EnforcementResult",
    "Permission",
    "PermissionListBuilder",
    "PolicyRule",
    "RoleAssignment",
    "RoleHierarchyEdge",
    "validate_domain",
    "validate_identifier",
]
