"""Authorization decision and engine operations router.

Endpoints:
    POST /api/v1/authorization/checks     - Evaluate one access request
    POST /api/v1/authorization/refreshes  - Rebuild cached snapshots
    GET  /api/v1/authorization/status     - Snapshot health per domain

Checks and refreshes that target a domain other than the caller's active
domain additionally require the same permission in the target domain.
"""

from fastapi import Depends, Request
from fastapi.responses import JSONResponse

from src.application.commands import RefreshPolicies
from src.application.commands.handlers import RefreshPoliciesHandler
from src.application.queries import CheckAccess
from src.application.queries.handlers import CheckAccessHandler
from src.application.services.access_guard import AccessGuard
from src.core.constants import GLOBAL_DOMAIN
from src.core.container import get_access_guard, get_authorization_engine
from src.core.container.handlers import (
    get_check_access_handler,
    get_refresh_policies_handler,
)
from src.core.result import Failure
from src.domain.value_objects import Caller, Permission
from src.infrastructure.authorization import AuthorizationEngine
from src.presentation.routers.api.middleware.authorization_dependencies import (
    CurrentCaller,
)
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder
from src.schemas.authorization_schemas import (
    AccessCheckRequest,
    AccessCheckResponse,
    DomainStatusResponse,
    EngineStatusResponse,
    PolicyRefreshRequest,
    PolicyRefreshResponse,
)
from src.schemas.policy_schemas import PolicyRuleResponse


def _authorize_target(
    request: Request,
    guard: AccessGuard,
    caller: Caller | None,
    target_domain: str,
    permission: Permission,
) -> JSONResponse | None:
    """Require permission in target_domain when it is not the active domain."""
    if caller is None or caller.domain == target_domain:
        return None

    result = guard.check_permissions(
        Caller(subject_id=caller.subject_id, domain=target_domain), (permission,)
    )
    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_domain_error(
            error=result.error, request=request, trace_id=get_trace_id() or ""
        )
    return None


async def check_access(
    request: Request,
    data: AccessCheckRequest,
    caller: CurrentCaller,
    guard: AccessGuard = Depends(get_access_guard),
    handler: CheckAccessHandler = Depends(get_check_access_handler),
) -> AccessCheckResponse | JSONResponse:
    """Evaluate (subject, domain, resource, action) against the published policy.

    POST /api/v1/authorization/checks → 200 OK (allowed true or false)
    """
    denied = _authorize_target(
        request, guard, caller, data.domain, Permission(resource="policies", action="read")
    )
    if denied is not None:
        return denied

    result = await handler.handle(
        CheckAccess(
            subject=data.subject,
            domain=data.domain,
            resource=data.resource,
            action=data.action,
        )
    )

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_domain_error(
            error=result.error, request=request, trace_id=get_trace_id() or ""
        )

    decision = result.value
    return AccessCheckResponse(
        allowed=decision.allowed,
        roles=sorted(decision.roles),
        matched_rule=(
            PolicyRuleResponse.from_rule(decision.matched_rule)
            if decision.matched_rule
            else None
        ),
        rule_domain=decision.rule_domain,
    )


async def refresh_policies(
    request: Request,
    data: PolicyRefreshRequest,
    caller: CurrentCaller,
    guard: AccessGuard = Depends(get_access_guard),
    handler: RefreshPoliciesHandler = Depends(get_refresh_policies_handler),
) -> PolicyRefreshResponse | JSONResponse:
    """Rebuild one domain's snapshot, or all of them when domain is omitted.

    Refreshing every domain requires policies:write in the global domain.

    POST /api/v1/authorization/refreshes → 200 OK
    """
    target = GLOBAL_DOMAIN if data.domain is None else data.domain
    denied = _authorize_target(
        request, guard, caller, target, Permission(resource="policies", action="write")
    )
    if denied is not None:
        return denied

    result = await handler.handle(RefreshPolicies(domain=data.domain))

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_domain_error(
            error=result.error, request=request, trace_id=get_trace_id() or ""
        )

    return PolicyRefreshResponse(results=result.value)


async def get_authorization_status(
    engine: AuthorizationEngine = Depends(get_authorization_engine),
) -> EngineStatusResponse:
    """Per-domain snapshot state. A domain serving last-known-good is stale.

    GET /api/v1/authorization/status → 200 OK
    """
    domains = [
        DomainStatusResponse(
            domain=entry.domain,
            rule_count=entry.rule_count,
            refreshed_at=entry.refreshed_at,
            consecutive_failures=entry.consecutive_failures,
            last_error=entry.last_error,
            is_stale=entry.is_stale,
        )
        for entry in sorted(engine.cache.status().values(), key=lambda s: s.domain)
    ]
    degraded = any(entry.is_stale for entry in domains)
    return EngineStatusResponse(
        status="degraded" if degraded else "healthy", domains=domains
    )
