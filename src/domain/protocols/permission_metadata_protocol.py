"""Permission metadata protocol (port).

Supplies the permissions an operation requires. Permissions are attached
when operations are registered, not discovered at request time.
"""

from typing import Protocol

from src.domain.value_objects import Permission


class PermissionMetadataProtocol(Protocol):
    """Maps an operation handle to its required permissions."""

    def required_permissions(self, operation_id: str) -> tuple[Permission, ...]:
        """Return required permissions. An empty tuple means public.

        Raises:
            KeyError: If the operation was never registered.
        """
        ...
