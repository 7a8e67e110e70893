"""Role assignment and role hierarchy value objects."""

from dataclasses import dataclass

from src.domain.value_objects.policy_rule import validate_domain, validate_identifier


@dataclass(frozen=True, slots=True, kw_only=True)
class RoleAssignment:
    """Grants a subject a role inside one domain.

    The same subject may hold different roles in different domains.

    Attributes:
        domain: Tenant the assignment belongs to.
        subject: Caller identity (user identifier).
        role: Role identifier.
    """

    domain: str
    subject: str
    role: str

    def __post_init__(self) -> None:
        validate_domain(self.domain)
        validate_identifier("subject", self.subject)
        validate_identifier("role", self.role)


@dataclass(frozen=True, slots=True, kw_only=True)
class RoleHierarchyEdge:
    """Declares that child_role inherits every permission of parent_role.

    Edges in one domain must form a DAG. Self-edges are rejected here;
    longer cycles are detected when the domain's hierarchy is resolved.

    Attributes:
        domain: Tenant the edge belongs to.
        child_role: Inheriting role.
        parent_role: Inherited role.
    """

    domain: str
    child_role: str
    parent_role: str

    def __post_init__(self) -> None:
        validate_domain(self.domain)
        validate_identifier("child_role", self.child_role)
        validate_identifier("parent_role", self.parent_role)
        if self.child_role == self.parent_role:
            raise ValueError(f"role {self.child_role!r} cannot inherit from itself")
