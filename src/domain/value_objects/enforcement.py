"""Enforcement request and explained decision."""

from dataclasses import dataclass

from src.domain.value_objects.policy_rule import PolicyRule


@dataclass(frozen=True, slots=True, kw_only=True)
class EnforcementRequest:
    """One (subject, domain, resource, action) decision request."""

    subject: str
    domain: str
    resource: str
    action: str


@dataclass(frozen=True, slots=True, kw_only=True)
class EnforcementResult:
    """Decision with explanation.

    Attributes:
        allowed: Decision.
        matched_rule: First rule that granted access, if any.
        roles: Expanded roles of the subject in the domain.
        rule_domain: Domain whose rule set was consulted ("" on fallback),
            None when the subject holds no role.
    """

    allowed: bool
    matched_rule: PolicyRule | None = None
    roles: frozenset[str] = frozenset()
    rule_domain: str | None = None
