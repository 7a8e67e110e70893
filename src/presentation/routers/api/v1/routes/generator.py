"""Route generator for the API Route Registry.

register_routes_from_registry() converts RouteMetadata entries into
FastAPI routes at application startup. Every route gets a
require_permissions(operation_id) dependency; the access guard resolves
the operation's permissions from the registry, so public routes pass
without identity.

Usage:
    v1_router = APIRouter(prefix="/api/v1")
    register_routes_from_registry(v1_router, ROUTE_REGISTRY)
"""

from typing import Any

from fastapi import APIRouter, Depends

from src.presentation.routers.api.middleware.authorization_dependencies import (
    require_permissions,
)
from src.presentation.routers.api.v1.routes.metadata import ErrorSpec, RouteMetadata

_AUTH_ERRORS = (
    ErrorSpec(status=401, description="Missing or invalid bearer token"),
    ErrorSpec(status=403, description="Permission denied"),
)


def register_routes_from_registry(
    router: APIRouter,
    registry: list[RouteMetadata],
) -> None:
    """Generate FastAPI routes from registry metadata.

    Args:
        router: FastAPI APIRouter to register routes on
        registry: List of RouteMetadata entries to convert into routes

    Raises:
        ValueError: If two entries share an operation_id.
    """
    seen: set[str] = set()
    for metadata in registry:
        if metadata.operation_id in seen:
            raise ValueError(f"Duplicate operation_id: {metadata.operation_id}")
        seen.add(metadata.operation_id)

        errors = list(metadata.errors or [])
        if not metadata.is_public:
            errors.extend(_AUTH_ERRORS)

        router.add_api_route(
            path=metadata.path,
            endpoint=metadata.handler,
            methods=[metadata.method.value],
            response_model=metadata.response_model,
            status_code=metadata.status_code,
            tags=list(metadata.tags),
            summary=metadata.summary,
            description=metadata.description,
            operation_id=metadata.operation_id,
            responses=_build_responses(errors) if errors else None,
            dependencies=[Depends(require_permissions(metadata.operation_id))],
        )


def _build_responses(errors: list[ErrorSpec]) -> dict[int | str, dict[str, Any]]:
    """Build OpenAPI responses dict from error specifications.

    Example:
        >>> _build_responses([ErrorSpec(status=404, description="Not found")])
        {404: {'description': 'Not found'}}
    """
    return {error.status: {"description": error.description} for error in errors}
