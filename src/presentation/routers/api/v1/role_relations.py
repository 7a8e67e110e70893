"""Role hierarchy resource router.

Endpoints:
    GET    /api/v1/domains/{domain}/role-relations  - List edges
    POST   /api/v1/domains/{domain}/role-relations  - Add edge (child inherits parent)
    DELETE /api/v1/domains/{domain}/role-relations  - Remove edge
"""

from typing import Annotated

from fastapi import Depends, Query, Request
from fastapi.responses import JSONResponse

from src.application.commands import AddRoleRelation, RemoveRoleRelation
from src.application.commands.handlers import (
    AddRoleRelationHandler,
    RemoveRoleRelationHandler,
)
from src.application.queries import ListRoleRelations
from src.application.queries.handlers import ListRoleRelationsHandler
from src.core.container.handlers import (
    get_add_role_relation_handler,
    get_list_role_relations_handler,
    get_remove_role_relation_handler,
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
    RoleRelationListResponse,
    RoleRelationRequest,
    RoleRelationResponse,
)


async def list_role_relations(
    request: Request,
    domain: DomainPath,
    handler: ListRoleRelationsHandler = Depends(get_list_role_relations_handler),
) -> RoleRelationListResponse | JSONResponse:
    """List role hierarchy edges of a domain.

    GET /api/v1/domains/{domain}/role-relations → 200 OK
    """
    domain = resolve_domain(domain)
    result = await handler.handle(ListRoleRelations(domain=domain))

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_domain_error(
            error=result.error, request=request, trace_id=get_trace_id() or ""
        )

    return RoleRelationListResponse(
        domain=domain,
        relations=[RoleRelationResponse.from_edge(edge) for edge in result.value],
        total_count=len(result.value),
    )


async def add_role_relation(
    request: Request,
    domain: DomainPath,
    data: RoleRelationRequest,
    caller: CurrentCaller,
    handler: AddRoleRelationHandler = Depends(get_add_role_relation_handler),
) -> PolicyChangeResponse | JSONResponse:
    """Make child_role inherit parent_role. Cycles are rejected.

    POST /api/v1/domains/{domain}/role-relations → 200 OK
    """
    result = await handler.handle(
        AddRoleRelation(
            domain=resolve_domain(domain),
            child_role=data.child_role,
            parent_role=data.parent_role,
            actor=caller.subject_id if caller else None,
        )
    )

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_domain_error(
            error=result.error, request=request, trace_id=get_trace_id() or ""
        )

    return PolicyChangeResponse(changed=result.value)


async def remove_role_relation(
    request: Request,
    domain: DomainPath,
    caller: CurrentCaller,
    child_role: Annotated[str, Query(description="Inheriting role")],
    parent_role: Annotated[str, Query(description="Inherited role")],
    handler: RemoveRoleRelationHandler = Depends(get_remove_role_relation_handler),
) -> PolicyChangeResponse | JSONResponse:
    """Remove a hierarchy edge.

    DELETE /api/v1/domains/{domain}/role-relations?child_role=&parent_role= → 200 OK
    """
    result = await handler.handle(
        RemoveRoleRelation(
            domain=resolve_domain(domain),
            child_role=child_role,
            parent_role=parent_role,
            actor=caller.subject_id if caller else None,
        )
    )

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_domain_error(
            error=result.error, request=request, trace_id=get_trace_id() or ""
        )

    return PolicyChangeResponse(changed=result.value)
