"""Permission value object.

A permission is the unit an operation requires. It carries no subject or
domain: both come from the caller context at enforcement time.

Usage:
    from src.domain.value_objects import Permission

    READ_POLICIES = Permission(resource="policies", action="read")
    str(READ_POLICIES)  # "policies:read"
"""

from dataclasses import dataclass

from src.domain.value_objects.policy_rule import validate_identifier


@dataclass(frozen=True, slots=True, kw_only=True)
class Permission:
    """Required (resource, action) pair.

    Attributes:
        resource: Resource name.
        action: Action name.
    """

    resource: str
    action: str

    def __post_init__(self) -> None:
        validate_identifier("resource", self.resource)
        validate_identifier("action", self.action)

    @classmethod
    def parse(cls, value: str) -> "Permission":
        """Build a permission from "resource:action" notation.

        Raises:
            ValueError: If value has no ":" separator.
        """
        resource, sep, action = value.rpartition(":")
        if not sep:
            raise ValueError(f"permission must look like 'resource:action', got {value!r}")
        return cls(resource=resource, action=action)

    def __str__(self) -> str:
        return f"{self.resource}:{self.action}"


class PermissionListBuilder:
    """Builds the required-permission tuple attached to an operation.

    Order is preserved and duplicates are dropped. An empty build() marks
    the operation as public.

    Example:
        >>> (
        ...     PermissionListBuilder()
        ...     .require("doc", "read")
        ...     .require("doc", "write")
        ...     .build()
        ... )
        (Permission(resource='doc', action='read'), Permission(resource='doc', action='write'))
    """

    def __init__(self) -> None:
        self._permissions: dict[Permission, None] = {}

    def require(self, resource: str, action: str) -> "PermissionListBuilder":
        self._permissions[Permission(resource=resource, action=action)] = None
        return self

    def require_all(self, *permissions: str) -> "PermissionListBuilder":
        """Add permissions written as "resource:action"."""
        for value in permissions:
            self._permissions[Permission.parse(value)] = None
        return self

    def build(self) -> tuple[Permission, ...]:
        return tuple(self._permissions)
