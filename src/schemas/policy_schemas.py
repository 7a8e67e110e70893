"""Policy administration request/response schemas.

Pydantic models for the domain-scoped administration endpoints. Kept
separate from domain value objects - these are HTTP-layer concerns.
Identifier rules (non-empty, no separators) are enforced by the command
handlers, so violations come back as RFC 9457 validation problems.

RESTful Endpoints:
    /api/v1/domains/{domain}/policies          - Policy rules
    /api/v1/domains/{domain}/policies/batch    - Atomic rule batches
    /api/v1/domains/{domain}/role-assignments  - Subject -> role
    /api/v1/domains/{domain}/role-relations    - Child role -> parent role
    /api/v1/domains/{domain}/subjects/{subject}/permissions
"""

from pydantic import BaseModel, ConfigDict, Field

from src.domain.value_objects import PolicyRule, RoleAssignment, RoleHierarchyEdge


# =============================================================================
# Policy Rules
# =============================================================================


class PolicyRuleRequest(BaseModel):
    """Rule to add or remove ("*" matches any resource or action)."""

    role: str = Field(..., description="Role granted by the rule")
    resource: str = Field(..., description="Resource name or '*'")
    action: str = Field(..., description="Action name or '*'")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"role": "viewer", "resource": "doc", "action": "read"}
        }
    )


class PolicyRuleResponse(BaseModel):
    """A stored rule."""

    domain: str = Field(..., description="Owning domain ('' is global)")
    role: str
    resource: str
    action: str

    @classmethod
    def from_rule(cls, rule: PolicyRule) -> "PolicyRuleResponse":
        return cls(
            domain=rule.domain,
            role=rule.role,
            resource=rule.resource,
            action=rule.action,
        )


class PolicyRuleListResponse(BaseModel):
    """Rules of one domain."""

    domain: str
    rules: list[PolicyRuleResponse]
    total_count: int


class PolicyBatchRequest(BaseModel):
    """Rules to remove and add in one transaction (removals first)."""

    add: list[PolicyRuleRequest] = Field(default_factory=list)
    remove: list[PolicyRuleRequest] = Field(default_factory=list)


class PolicyBatchResponse(BaseModel):
    """Number of rules actually changed."""

    added: int
    removed: int


class PolicyChangeResponse(BaseModel):
    """Outcome of a single idempotent mutation."""

    changed: bool = Field(
        ..., description="False when the store already had the requested state"
    )


# =============================================================================
# Role Assignments
# =============================================================================


class RoleAssignmentRequest(BaseModel):
    """Subject -> role assignment."""

    subject: str = Field(..., description="Subject identifier")
    role: str = Field(..., description="Role name")


class RoleAssignmentResponse(BaseModel):
    domain: str
    subject: str
    role: str

    @classmethod
    def from_assignment(cls, assignment: RoleAssignment) -> "RoleAssignmentResponse":
        return cls(
            domain=assignment.domain,
            subject=assignment.subject,
            role=assignment.role,
        )


class RoleAssignmentListResponse(BaseModel):
    domain: str
    assignments: list[RoleAssignmentResponse]
    total_count: int


class SubjectRemovalResponse(BaseModel):
    """Number of roles revoked from a subject."""

    removed: int


# =============================================================================
# Role Relations
# =============================================================================


class RoleRelationRequest(BaseModel):
    """child_role inherits every permission of parent_role."""

    child_role: str = Field(..., description="Inheriting role")
    parent_role: str = Field(..., description="Inherited role")

    model_config = ConfigDict(
        json_schema_extra={"example": {"child_role": "editor", "parent_role": "viewer"}}
    )


class RoleRelationResponse(BaseModel):
    domain: str
    child_role: str
    parent_role: str

    @classmethod
    def from_edge(cls, edge: RoleHierarchyEdge) -> "RoleRelationResponse":
        return cls(
            domain=edge.domain,
            child_role=edge.child_role,
            parent_role=edge.parent_role,
        )


class RoleRelationListResponse(BaseModel):
    domain: str
    relations: list[RoleRelationResponse]
    total_count: int


# =============================================================================
# Subject Permissions
# =============================================================================


class PermissionResponse(BaseModel):
    resource: str
    action: str


class SubjectPermissionsResponse(BaseModel):
    """Effective access of a subject in a domain."""

    domain: str
    subject: str
    roles: list[str] = Field(..., description="Directly assigned roles")
    implicit_roles: list[str] = Field(..., description="Roles including inherited")
    permissions: list[PermissionResponse]
