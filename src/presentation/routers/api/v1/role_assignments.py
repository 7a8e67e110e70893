"""Role assignments resource router.

Endpoints:
    GET    /api/v1/domains/{domain}/role-assignments  - List assignments
    POST   /api/v1/domains/{domain}/role-assignments  - Assign role
    DELETE /api/v1/domains/{domain}/role-assignments  - Revoke role(s)
"""

from typing import Annotated

from fastapi import Depends, Query, Request
from fastapi.responses import JSONResponse

from src.application.commands import AssignRole, RemoveSubject, RevokeRole
from src.application.commands.handlers import (
    AssignRoleHandler,
    RemoveSubjectHandler,
    RevokeRoleHandler,
)
from src.application.queries import ListRoleAssignments
from src.application.queries.handlers import ListRoleAssignmentsHandler
from src.core.container.handlers import (
    get_assign_role_handler,
    get_list_role_assignments_handler,
    get_remove_subject_handler,
    get_revoke_role_handler,
)
from src.core.result import Failure
from src.presentation.routers.api.middleware.authorization_dependencies import (
    CurrentCaller,
)
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.domain_params import DomainPath, resolve_domain
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder
from src.schemas.policy_schemas import (
    PolicyChangeResponse,
    RoleAssignmentListResponse,
    RoleAssignmentRequest,
    RoleAssignmentResponse,
    SubjectRemovalResponse,
)


async def list_role_assignments(
    request: Request,
    domain: DomainPath,
    subject: Annotated[str | None, Query(description="Filter by subject")] = None,
    handler: ListRoleAssignmentsHandler = Depends(get_list_role_assignments_handler),
) -> RoleAssignmentListResponse | JSONResponse:
    """List subject-role assignments of a domain.

    GET /api/v1/domains/{domain}/role-assignments → 200 OK
    """
    domain = resolve_domain(domain)
    result = await handler.handle(ListRoleAssignments(domain=domain, subject=subject))

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_domain_error(
            error=result.error, request=request, trace_id=get_trace_id() or ""
        )

    return RoleAssignmentListResponse(
        domain=domain,
        assignments=[RoleAssignmentResponse.from_assignment(a) for a in result.value],
        total_count=len(result.value),
    )


async def assign_role(
    request: Request,
    domain: DomainPath,
    data: RoleAssignmentRequest,
    caller: CurrentCaller,
    handler: AssignRoleHandler = Depends(get_assign_role_handler),
) -> PolicyChangeResponse | JSONResponse:
    """Assign a role to a subject within the domain.

    POST /api/v1/domains/{domain}/role-assignments → 200 OK
    """
    result = await handler.handle(
        AssignRole(
            domain=resolve_domain(domain),
            subject=data.subject,
            role=data.role,
            actor=caller.subject_id if caller else None,
        )
    )

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_domain_error(
            error=result.error, request=request, trace_id=get_trace_id() or ""
        )

    return PolicyChangeResponse(changed=result.value)


async def revoke_role(
    request: Request,
    domain: DomainPath,
    caller: CurrentCaller,
    subject: Annotated[str, Query(description="Subject identifier")],
    role: Annotated[
        str | None, Query(description="Role to revoke; omit to revoke every role")
    ] = None,
    revoke_one: RevokeRoleHandler = Depends(get_revoke_role_handler),
    revoke_all: RemoveSubjectHandler = Depends(get_remove_subject_handler),
) -> SubjectRemovalResponse | JSONResponse:
    """Revoke one role, or every role, of a subject within the domain.

    DELETE /api/v1/domains/{domain}/role-assignments?subject=&role= → 200 OK
    """
    domain = resolve_domain(domain)
    actor = caller.subject_id if caller else None

    if role is None:
        result = await revoke_all.handle(
            RemoveSubject(domain=domain, subject=subject, actor=actor)
        )
    else:
        result = await revoke_one.handle(
            RevokeRole(domain=domain, subject=subject, role=role, actor=actor)
        )

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_domain_error(
            error=result.error, request=request, trace_id=get_trace_id() or ""
        )

    return SubjectRemovalResponse(removed=int(result.value))
