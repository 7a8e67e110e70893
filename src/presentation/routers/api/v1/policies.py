"""Policy rules resource router.

Endpoints:
    GET    /api/v1/domains/{domain}/policies                        - List rules
    POST   /api/v1/domains/{domain}/policies                        - Add rule
    DELETE /api/v1/domains/{domain}/policies                        - Remove rule
    POST   /api/v1/domains/{domain}/policies/batch                  - Apply batch
    GET    /api/v1/domains/{domain}/subjects/{subject}/permissions  - Effective access

Routes are registered from the route registry; permissions are enforced
by the dependency the generator attaches.
"""

from typing import Annotated

from fastapi import Depends, Path, Query, Request
from fastapi.responses import JSONResponse

from src.application.commands import (
    AddPolicyRule,
    ApplyPolicyBatch,
    RemovePolicyRule,
    RuleSpec,
)
from src.application.commands.handlers import (
    AddPolicyRuleHandler,
    ApplyPolicyBatchHandler,
    RemovePolicyRuleHandler,
)
from src.application.queries import GetSubjectPermissions, ListPolicyRules
from src.application.queries.handlers import (
    GetSubjectPermissionsHandler,
    ListPolicyRulesHandler,
)
from src.core.container.handlers import (
    get_add_policy_rule_handler,
    get_apply_policy_batch_handler,
    get_list_policy_rules_handler,
    get_remove_policy_rule_handler,
    get_subject_permissions_handler,
)
from src.core.result import Failure
from src.presentation.routers.api.middleware.authorization_dependencies import (
    CurrentCaller,
)
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.domain_params import DomainPath, resolve_domain
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder
from src.schemas.policy_schemas import (
    PermissionResponse,
    PolicyBatchRequest,
    PolicyBatchResponse,
    PolicyChangeResponse,
    PolicyRuleListResponse,
    PolicyRuleRequest,
    PolicyRuleResponse,
    SubjectPermissionsResponse,
)


async def list_policy_rules(
    request: Request,
    domain: DomainPath,
    handler: ListPolicyRulesHandler = Depends(get_list_policy_rules_handler),
) -> PolicyRuleListResponse | JSONResponse:
    """List the rules stored for a domain.

    GET /api/v1/domains/{domain}/policies → 200 OK
    """
    domain = resolve_domain(domain)
    result = await handler.handle(ListPolicyRules(domain=domain))

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_domain_error(
            error=result.error, request=request, trace_id=get_trace_id() or ""
        )

    return PolicyRuleListResponse(
        domain=domain,
        rules=[PolicyRuleResponse.from_rule(rule) for rule in result.value],
        total_count=len(result.value),
    )


async def add_policy_rule(
    request: Request,
    domain: DomainPath,
    data: PolicyRuleRequest,
    caller: CurrentCaller,
    handler: AddPolicyRuleHandler = Depends(get_add_policy_rule_handler),
) -> PolicyChangeResponse | JSONResponse:
    """Add a rule. Adding an existing rule is a no-op (changed=false).

    POST /api/v1/domains/{domain}/policies → 200 OK
    """
    result = await handler.handle(
        AddPolicyRule(
            domain=resolve_domain(domain),
            role=data.role,
            resource=data.resource,
            action=data.action,
            actor=caller.subject_id if caller else None,
        )
    )

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_domain_error(
            error=result.error, request=request, trace_id=get_trace_id() or ""
        )

    return PolicyChangeResponse(changed=result.value)


async def remove_policy_rule(
    request: Request,
    domain: DomainPath,
    caller: CurrentCaller,
    role: Annotated[str, Query(description="Role of the rule")],
    resource: Annotated[str, Query(description="Resource of the rule")],
    action: Annotated[str, Query(description="Action of the rule")],
    handler: RemovePolicyRuleHandler = Depends(get_remove_policy_rule_handler),
) -> PolicyChangeResponse | JSONResponse:
    """Remove a rule. Removing an absent rule is a no-op (changed=false).

    DELETE /api/v1/domains/{domain}/policies?role=&resource=&action= → 200 OK
    """
    result = await handler.handle(
        RemovePolicyRule(
            domain=resolve_domain(domain),
            role=role,
            resource=resource,
            action=action,
            actor=caller.subject_id if caller else None,
        )
    )

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_domain_error(
            error=result.error, request=request, trace_id=get_trace_id() or ""
        )

    return PolicyChangeResponse(changed=result.value)


async def apply_policy_batch(
    request: Request,
    domain: DomainPath,
    data: PolicyBatchRequest,
    caller: CurrentCaller,
    handler: ApplyPolicyBatchHandler = Depends(get_apply_policy_batch_handler),
) -> PolicyBatchResponse | JSONResponse:
    """Remove then add rules in one store transaction.

    POST /api/v1/domains/{domain}/policies/batch → 200 OK
    """
    result = await handler.handle(
        ApplyPolicyBatch(
            domain=resolve_domain(domain),
            add=tuple(RuleSpec(**rule.model_dump()) for rule in data.add),
            remove=tuple(RuleSpec(**rule.model_dump()) for rule in data.remove),
            actor=caller.subject_id if caller else None,
        )
    )

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_domain_error(
            error=result.error, request=request, trace_id=get_trace_id() or ""
        )

    return PolicyBatchResponse(added=result.value.added, removed=result.value.removed)


async def get_subject_permissions(
    request: Request,
    domain: DomainPath,
    subject: Annotated[str, Path(description="Subject identifier")],
    handler: GetSubjectPermissionsHandler = Depends(get_subject_permissions_handler),
) -> SubjectPermissionsResponse | JSONResponse:
    """Effective roles and permissions of a subject, as enforcement sees them.

    GET /api/v1/domains/{domain}/subjects/{subject}/permissions → 200 OK
    """
    result = await handler.handle(
        GetSubjectPermissions(domain=resolve_domain(domain), subject=subject)
    )

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_domain_error(
            error=result.error, request=request, trace_id=get_trace_id() or ""
        )

    view = result.value
    return SubjectPermissionsResponse(
        domain=view.domain,
        subject=view.subject,
        roles=view.roles,
        implicit_roles=view.implicit_roles,
        permissions=[
            PermissionResponse(resource=resource, action=action)
            for resource, action in view.permissions
        ],
    )
