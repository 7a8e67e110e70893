"""Route metadata types for the API Route Registry.

The registry is the single source of truth for all API routes: it
generates the FastAPI routes, their permission dependencies and the
permission metadata the access guard reads.

Core types:
    RouteMetadata: Complete route specification (method, path, handler, permissions)
    HTTPMethod: HTTP method enum
    ErrorSpec: Error response specification for OpenAPI
    IdempotencyLevel: HTTP idempotency classification

Usage:
    from src.domain.value_objects import PermissionListBuilder

    RouteMetadata(
        method=HTTPMethod.GET,
        path="/domains/{domain}/policies",
        handler=list_policy_rules,
        resource="policies",
        tags=["Policies"],
        summary="List policy rules",
        operation_id="list_policy_rules",
        response_model=PolicyRuleListResponse,
        idempotency=IdempotencyLevel.SAFE,
        permissions=PermissionListBuilder().require("policies", "read").build(),
    )
"""

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel

from src.domain.value_objects import Permission


class HTTPMethod(str, Enum):
    """HTTP methods for API routes."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class IdempotencyLevel(str, Enum):
    """HTTP idempotency classification.

    Attributes:
        SAFE: No side effects (GET) - cacheable
        IDEMPOTENT: Side effects, but repeatable - safe to retry
        NON_IDEMPOTENT: Side effects, not repeatable - do not retry

    Note:
        Policy mutations are idempotent even on POST: adding an existing
        rule is a no-op.
    """

    SAFE = "safe"
    IDEMPOTENT = "idempotent"
    NON_IDEMPOTENT = "non_idempotent"


@dataclass(frozen=True, kw_only=True)
class ErrorSpec:
    """Error response specification for OpenAPI documentation.

    Examples:
        >>> ErrorSpec(status=403, description="Permission denied")
    """

    status: int
    description: str
    model: type[BaseModel] | None = None


@dataclass(frozen=True, kw_only=True)
class RouteMetadata:
    """Complete specification for an API route (Single Source of Truth).

    Identity fields:
        method: HTTP method
        path: URL path relative to the v1 prefix
        handler: Async endpoint function

    Grouping fields:
        resource: Resource category (e.g., "policies")
        tags: OpenAPI tags

    OpenAPI documentation:
        summary, description, operation_id

    Request/Response:
        response_model, status_code, errors

    Authorization:
        permissions: Required permissions, ALL of which must pass in the
            caller's active domain. Empty tuple = public route.
    """

    # Identity
    method: HTTPMethod
    path: str
    handler: Callable[..., Awaitable[Any]]

    # Grouping
    resource: str
    tags: Sequence[str]

    # OpenAPI documentation
    summary: str
    description: str | None = None
    operation_id: str

    # Request/Response
    response_model: type[BaseModel] | None = None
    status_code: int = 200
    errors: list[ErrorSpec] | None = None

    # Behavior
    idempotency: IdempotencyLevel
    permissions: tuple[Permission, ...] = ()

    @property
    def is_public(self) -> bool:
        return not self.permissions
