"""Policy rule value objects.

A policy rule grants a role an action on a resource inside one domain.
Rules are immutable; changing a rule means removing it and adding the new one.

Usage:
    from src.domain.value_objects import PolicyRule

    rule = PolicyRule(domain="acme", role="viewer", resource="doc", action="read")
    rule.matches(resource="doc", action="read")  # True
"""

from dataclasses import dataclass

from src.core.constants import RESERVED_DOMAIN_CHARACTERS, WILDCARD


def validate_identifier(name: str, value: str) -> None:
    """Validate a role, subject, resource or action identifier.

    Args:
        name: Field name (used in the error message).
        value: Identifier value.

    Raises:
        ValueError: If value is empty, padded or contains reserved characters.
    """
    if not isinstance(value, str) or not value:
        raise ValueError(f"{name} must be a non-empty string")
    if value != value.strip():
        raise ValueError(f"{name} must not have leading or trailing whitespace")
    if any(char in value for char in RESERVED_DOMAIN_CHARACTERS):
        raise ValueError(f"{name} contains a reserved character")


def validate_domain(value: str) -> None:
    """Validate a domain identifier.

    The empty string is the global domain and is accepted.

    Raises:
        ValueError: If domain is not a string or contains reserved characters.
    """
    if not isinstance(value, str):
        raise ValueError("domain must be a string")
    if value != value.strip():
        raise ValueError("domain must not have leading or trailing whitespace")
    if any(char in value for char in RESERVED_DOMAIN_CHARACTERS):
        raise ValueError("domain contains a reserved character")


@dataclass(frozen=True, slots=True, kw_only=True)
class PolicyRule:
    """Domain-scoped grant (value object).

    Identified by its full tuple: adding an identical rule twice is a no-op.

    Attributes:
        domain: Tenant the rule belongs to ("" = global default set).
        role: Role identifier, never a raw subject.
        resource: Resource name or WILDCARD.
        action: Action name or WILDCARD.

    Raises:
        ValueError: If any component is malformed.
    """

    domain: str
    role: str
    resource: str
    action: str

    def __post_init__(self) -> None:
        validate_domain(self.domain)
        validate_identifier("role", self.role)
        validate_identifier("resource", self.resource)
        validate_identifier("action", self.action)

    def matches(self, *, resource: str, action: str) -> bool:
        """Check whether this rule covers a concrete resource/action.

        Matching is exact and case-sensitive. WILDCARD on the rule side
        matches any value; it is a literal marker, not a pattern.

        Args:
            resource: Requested resource.
            action: Requested action.

        Returns:
            bool: True if both components match.
        """
        return (self.resource == WILDCARD or self.resource == resource) and (
            self.action == WILDCARD or self.action == action
        )

    def __str__(self) -> str:
        return f"{self.domain or '*global*'}/{self.role}:{self.resource}:{self.action}"
