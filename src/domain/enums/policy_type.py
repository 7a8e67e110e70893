"""Policy row types.

Values mirror Casbin's ptype column so rows stay readable by Casbin tooling.
"""

from enum import Enum


class PolicyType(str, Enum):
    """Kind of policy row held by a policy store.

    Members:
        RULE: Role grant (p, role, domain, resource, action).
        ASSIGNMENT: Subject to role (g, subject, role, domain).
        HIERARCHY: Role inheritance (g2, child, parent, domain).
    """

    RULE = "p"
    ASSIGNMENT = "g"
    HIERARCHY = "g2"


class PolicyChangeType(str, Enum):
    """Administrative mutation recorded in policy change events."""

    RULE_ADDED = "rule_added"
    RULE_REMOVED = "rule_removed"
    RULES_BATCH = "rules_batch"
    ROLE_ASSIGNED = "role_assigned"
    ROLE_REVOKED = "role_revoked"
    SUBJECT_REMOVED = "subject_removed"
    RELATION_ADDED = "relation_added"
    RELATION_REMOVED = "relation_removed"
