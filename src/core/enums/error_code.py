"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.

Categories:
- Validation errors (INVALID_*, VALIDATION_*)
- Hierarchy errors (*_CYCLE)
- Authentication errors (TOKEN_*, AUTHENTICATION_*)
- Authorization errors (PERMISSION_*)
- Policy store errors (POLICY_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable).

    Error codes follow ENTITY_ACTION_REASON naming convention.
    """

    # Validation errors
    VALIDATION_FAILED = "validation_failed"
    INVALID_DOMAIN = "invalid_domain"
    INVALID_POLICY_RULE = "invalid_policy_rule"
    INVALID_ROLE_ASSIGNMENT = "invalid_role_assignment"
    INVALID_ROLE_RELATION = "invalid_role_relation"

    # Hierarchy errors
    ROLE_HIERARCHY_CYCLE = "role_hierarchy_cycle"

    # Authentication errors
    TOKEN_INVALID = "token_invalid"
    TOKEN_EXPIRED = "token_expired"
    AUTHENTICATION_FAILED = "authentication_failed"

    # Authorization errors
    PERMISSION_DENIED = "permission_denied"

    # Policy store errors
    POLICY_STORE_UNAVAILABLE = "policy_store_unavailable"
    POLICY_CONFIGURATION_INVALID = "policy_configuration_invalid"
    POLICY_CHANGE_NOT_APPLIED = "policy_change_not_applied"
