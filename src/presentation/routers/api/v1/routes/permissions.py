"""Permission metadata provider backed by the route registry.

Built once from ROUTE_REGISTRY (no request-time reflection) and handed to
the AccessGuard as its PermissionMetadataProtocol.
"""

from collections.abc import Iterable
from functools import lru_cache
from types import MappingProxyType

from src.domain.value_objects import Permission
from src.presentation.routers.api.v1.routes.metadata import RouteMetadata


class RegistryPermissionMetadata:
    """operation_id -> required permissions.

    Example:
        >>> metadata = RegistryPermissionMetadata.from_routes(ROUTE_REGISTRY)
        >>> metadata.required_permissions("list_policy_rules")
        (Permission(resource='policies', action='read'),)
    """

    def __init__(self, permissions: dict[str, tuple[Permission, ...]]) -> None:
        self._permissions = MappingProxyType(dict(permissions))

    @classmethod
    def from_routes(cls, routes: Iterable[RouteMetadata]) -> "RegistryPermissionMetadata":
        return cls({route.operation_id: route.permissions for route in routes})

    def required_permissions(self, operation_id: str) -> tuple[Permission, ...]:
        return self._permissions[operation_id]

    def operations(self) -> list[str]:
        return sorted(self._permissions)


@lru_cache()
def get_permission_metadata() -> RegistryPermissionMetadata:
    """Registry-derived metadata singleton (app-scoped)."""
    from src.presentation.routers.api.v1.routes.registry import ROUTE_REGISTRY

    return RegistryPermissionMetadata.from_routes(ROUTE_REGISTRY)
