"""API Route Registry - Single Source of Truth for all routes.

ROUTE_REGISTRY is the authoritative list of API endpoints. It drives route
generation, per-operation permission metadata for the AccessGuard, and
OpenAPI documentation.

Registry structure:
    - Each entry is a RouteMetadata instance with complete specification
    - Handlers reference actual functions from router modules
    - Required permissions are declared with PermissionListBuilder; ALL
      must pass in the caller's active domain. No permissions = public.

Usage:
    from src.presentation.routers.api.v1.routes.registry import ROUTE_REGISTRY
    from src.presentation.routers.api.v1.routes.generator import register_routes_from_registry

    router = APIRouter(prefix="/api/v1")
    register_routes_from_registry(router, ROUTE_REGISTRY)
"""

from src.domain.value_objects import PermissionListBuilder
from src.presentation.routers.api.v1.authorization import (
    check_access,
    get_authorization_status,
    refresh_policies,
)
from src.presentation.routers.api.v1.policies import (
    add_policy_rule,
    apply_policy_batch,
    get_subject_permissions,
    list_policy_rules,
    remove_policy_rule,
)
from src.presentation.routers.api.v1.role_assignments import (
    assign_role,
    list_role_assignments,
    revoke_role,
)
from src.presentation.routers.api.v1.role_relations import (
    add_role_relation,
    list_role_relations,
    remove_role_relation,
)
from src.presentation.routers.api.v1.routes.metadata import (
    ErrorSpec,
    HTTPMethod,
    IdempotencyLevel,
    RouteMetadata,
)
from src.schemas.authorization_schemas import (
    AccessCheckResponse,
    EngineStatusResponse,
    PolicyRefreshResponse,
)
from src.schemas.policy_schemas import (
    PolicyBatchResponse,
    PolicyChangeResponse,
    PolicyRuleListResponse,
    RoleAssignmentListResponse,
    RoleRelationListResponse,
    SubjectPermissionsResponse,
    SubjectRemovalResponse,
)

POLICIES_READ = PermissionListBuilder().require("policies", "read").build()
POLICIES_WRITE = PermissionListBuilder().require("policies", "write").build()
ROLES_READ = PermissionListBuilder().require("roles", "read").build()
ROLES_WRITE = PermissionListBuilder().require("roles", "write").build()

_INVALID_INPUT = ErrorSpec(status=400, description="Invalid domain or identifier")
_STORE_UNAVAILABLE = ErrorSpec(
    status=503, description="Policy store unavailable or change not yet applied"
)

# =============================================================================
# ROUTE_REGISTRY - Single Source of Truth
# =============================================================================

ROUTE_REGISTRY: list[RouteMetadata] = [
    # =========================================================================
    # Policies Resource (5 endpoints)
    # =========================================================================
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/domains/{domain}/policies",
        handler=list_policy_rules,
        resource="policies",
        tags=["Policies"],
        summary="List policy rules",
        description="Rules stored for the domain (use '_global' for the global domain).",
        operation_id="list_policy_rules",
        response_model=PolicyRuleListResponse,
        status_code=200,
        errors=[_INVALID_INPUT, _STORE_UNAVAILABLE],
        idempotency=IdempotencyLevel.SAFE,
        permissions=POLICIES_READ,
    ),
    RouteMetadata(
        method=HTTPMethod.POST,
        path="/domains/{domain}/policies",
        handler=add_policy_rule,
        resource="policies",
        tags=["Policies"],
        summary="Add policy rule",
        description="Grant a role an action on a resource. Existing rules are a no-op.",
        operation_id="add_policy_rule",
        response_model=PolicyChangeResponse,
        status_code=200,
        errors=[_INVALID_INPUT, _STORE_UNAVAILABLE],
        idempotency=IdempotencyLevel.IDEMPOTENT,
        permissions=POLICIES_WRITE,
    ),
    RouteMetadata(
        method=HTTPMethod.DELETE,
        path="/domains/{domain}/policies",
        handler=remove_policy_rule,
        resource="policies",
        tags=["Policies"],
        summary="Remove policy rule",
        description="Remove a rule identified by role, resource and action.",
        operation_id="remove_policy_rule",
        response_model=PolicyChangeResponse,
        status_code=200,
        errors=[_INVALID_INPUT, _STORE_UNAVAILABLE],
        idempotency=IdempotencyLevel.IDEMPOTENT,
        permissions=POLICIES_WRITE,
    ),
    RouteMetadata(
        method=HTTPMethod.POST,
        path="/domains/{domain}/policies/batch",
        handler=apply_policy_batch,
        resource="policies",
        tags=["Policies"],
        summary="Apply policy batch",
        description="Remove then add several rules; each half runs in one transaction.",
        operation_id="apply_policy_batch",
        response_model=PolicyBatchResponse,
        status_code=200,
        errors=[_INVALID_INPUT, _STORE_UNAVAILABLE],
        idempotency=IdempotencyLevel.IDEMPOTENT,
        permissions=POLICIES_WRITE,
    ),
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/domains/{domain}/subjects/{subject}/permissions",
        handler=get_subject_permissions,
        resource="policies",
        tags=["Policies"],
        summary="Get subject permissions",
        description="Direct roles, inherited roles and effective permissions of a subject.",
        operation_id="get_subject_permissions",
        response_model=SubjectPermissionsResponse,
        status_code=200,
        errors=[_INVALID_INPUT],
        idempotency=IdempotencyLevel.SAFE,
        permissions=POLICIES_READ,
    ),
    # =========================================================================
    # Role Assignments Resource (3 endpoints)
    # =========================================================================
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/domains/{domain}/role-assignments",
        handler=list_role_assignments,
        resource="role_assignments",
        tags=["Roles"],
        summary="List role assignments",
        description="Subject-role assignments of the domain, optionally for one subject.",
        operation_id="list_role_assignments",
        response_model=RoleAssignmentListResponse,
        status_code=200,
        errors=[_INVALID_INPUT, _STORE_UNAVAILABLE],
        idempotency=IdempotencyLevel.SAFE,
        permissions=ROLES_READ,
    ),
    RouteMetadata(
        method=HTTPMethod.POST,
        path="/domains/{domain}/role-assignments",
        handler=assign_role,
        resource="role_assignments",
        tags=["Roles"],
        summary="Assign role",
        description="Assign a role to a subject within the domain.",
        operation_id="assign_role",
        response_model=PolicyChangeResponse,
        status_code=200,
        errors=[_INVALID_INPUT, _STORE_UNAVAILABLE],
        idempotency=IdempotencyLevel.IDEMPOTENT,
        permissions=ROLES_WRITE,
    ),
    RouteMetadata(
        method=HTTPMethod.DELETE,
        path="/domains/{domain}/role-assignments",
        handler=revoke_role,
        resource="role_assignments",
        tags=["Roles"],
        summary="Revoke role",
        description="Revoke one role of a subject, or all of them when role is omitted.",
        operation_id="revoke_role",
        response_model=SubjectRemovalResponse,
        status_code=200,
        errors=[_INVALID_INPUT, _STORE_UNAVAILABLE],
        idempotency=IdempotencyLevel.IDEMPOTENT,
        permissions=ROLES_WRITE,
    ),
    # =========================================================================
    # Role Relations Resource (3 endpoints)
    # =========================================================================
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/domains/{domain}/role-relations",
        handler=list_role_relations,
        resource="role_relations",
        tags=["Roles"],
        summary="List role relations",
        description="Role hierarchy edges (child inherits parent) of the domain.",
        operation_id="list_role_relations",
        response_model=RoleRelationListResponse,
        status_code=200,
        errors=[_INVALID_INPUT, _STORE_UNAVAILABLE],
        idempotency=IdempotencyLevel.SAFE,
        permissions=ROLES_READ,
    ),
    RouteMetadata(
        method=HTTPMethod.POST,
        path="/domains/{domain}/role-relations",
        handler=add_role_relation,
        resource="role_relations",
        tags=["Roles"],
        summary="Add role relation",
        description="Make child_role inherit parent_role. Edges closing a cycle are rejected.",
        operation_id="add_role_relation",
        response_model=PolicyChangeResponse,
        status_code=200,
        errors=[_INVALID_INPUT, _STORE_UNAVAILABLE],
        idempotency=IdempotencyLevel.IDEMPOTENT,
        permissions=ROLES_WRITE,
    ),
    RouteMetadata(
        method=HTTPMethod.DELETE,
        path="/domains/{domain}/role-relations",
        handler=remove_role_relation,
        resource="role_relations",
        tags=["Roles"],
        summary="Remove role relation",
        description="Remove a role hierarchy edge.",
        operation_id="remove_role_relation",
        response_model=PolicyChangeResponse,
        status_code=200,
        errors=[_INVALID_INPUT, _STORE_UNAVAILABLE],
        idempotency=IdempotencyLevel.IDEMPOTENT,
        permissions=ROLES_WRITE,
    ),
    # =========================================================================
    # Authorization Resource (3 endpoints)
    # =========================================================================
    RouteMetadata(
        method=HTTPMethod.POST,
        path="/authorization/checks",
        handler=check_access,
        resource="authorization",
        tags=["Authorization"],
        summary="Check access",
        description="Evaluate a (subject, domain, resource, action) request.",
        operation_id="check_access",
        response_model=AccessCheckResponse,
        status_code=200,
        errors=[_INVALID_INPUT],
        idempotency=IdempotencyLevel.SAFE,
        permissions=POLICIES_READ,
    ),
    RouteMetadata(
        method=HTTPMethod.POST,
        path="/authorization/refreshes",
        handler=refresh_policies,
        resource="authorization",
        tags=["Authorization"],
        summary="Refresh policies",
        description="Rebuild one domain's snapshot, or every snapshot when domain is omitted.",
        operation_id="refresh_policies",
        response_model=PolicyRefreshResponse,
        status_code=200,
        errors=[_INVALID_INPUT],
        idempotency=IdempotencyLevel.IDEMPOTENT,
        permissions=POLICIES_WRITE,
    ),
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/authorization/status",
        handler=get_authorization_status,
        resource="authorization",
        tags=["Authorization"],
        summary="Authorization engine status",
        description="Snapshot state per domain; stale domains serve last-known-good.",
        operation_id="get_authorization_status",
        response_model=EngineStatusResponse,
        status_code=200,
        idempotency=IdempotencyLevel.SAFE,
    ),
]
