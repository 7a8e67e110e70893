"""API v1 routers.

All routes are generated from the Route Metadata Registry at startup.
ROUTE_REGISTRY (routes/registry.py) is the single source of truth.

Resources:
    /api/v1/domains/{domain}/policies          - Policy rules
    /api/v1/domains/{domain}/role-assignments  - Subject role assignments
    /api/v1/domains/{domain}/role-relations    - Role hierarchy
    /api/v1/domains/{domain}/subjects/{subject}/permissions
    /api/v1/authorization/checks               - Access decisions
    /api/v1/authorization/refreshes            - Snapshot rebuilds
    /api/v1/authorization/status               - Snapshot health (public)
"""

from fastapi import APIRouter

from src.core.config import settings
from src.presentation.routers.api.v1.routes.generator import (
    register_routes_from_registry,
)
from src.presentation.routers.api.v1.routes.registry import ROUTE_REGISTRY

v1_router = APIRouter(prefix=settings.api_v1_prefix)
register_routes_from_registry(v1_router, ROUTE_REGISTRY)

__all__ = [
    "v1_router",
]
