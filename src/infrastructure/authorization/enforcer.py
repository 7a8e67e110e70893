"""Domain-scoped RBAC enforcer.

Implements AuthorizationProtocol over the policy cache. Every decision
reads the cache's published snapshot mapping exactly once, so a decision
never mixes state from before and after a concurrent refresh. No I/O, no
locks, no logging on the decision path.

Decision algorithm:
    1. Direct roles of the subject in the domain; none -> deny.
    2. Expand roles through the domain's hierarchy closure.
    3. Applicable rule set: the domain's own rules, or the global domain's
       rules if the domain has none.
    4. Allow if any rule of an expanded role matches resource and action
       (exact or WILDCARD); otherwise deny.
"""

from collections.abc import Iterable, Mapping

from src.core.constants import GLOBAL_DOMAIN
from src.domain.value_objects import EnforcementRequest, EnforcementResult, PolicyRule
from src.infrastructure.authorization.policy_cache import PolicyCache
from src.infrastructure.authorization.policy_snapshot import DomainSnapshot


class Enforcer:
    """Pure decision function over PolicyCache snapshots.

    Example:
        >>> enforcer = Enforcer(cache)
        >>> enforcer.enforce("alice", "acme", "doc", "read")
        True
    """

    def __init__(self, cache: PolicyCache) -> None:
        self._cache = cache

    def enforce(self, subject: str, domain: str, resource: str, action: str) -> bool:
        return self._decide(self._cache.snapshots, subject, domain, resource, action).allowed

    def enforce_ex(
        self, subject: str, domain: str, resource: str, action: str
    ) -> EnforcementResult:
        """Decide and report which rule (if any) granted access."""
        return self._decide(self._cache.snapshots, subject, domain, resource, action)

    def batch_enforce(self, requests: Iterable[EnforcementRequest]) -> list[bool]:
        """Decide several requests against one consistent snapshot view."""
        snapshots = self._cache.snapshots
        return [
            self._decide(
                snapshots, r.subject, r.domain, r.resource, r.action
            ).allowed
            for r in requests
        ]

    def get_roles_for_user(self, subject: str, domain: str) -> list[str]:
        """Directly assigned roles."""
        return sorted(_snapshot(self._cache.snapshots, domain).roles_for(subject))

    def get_implicit_roles_for_user(self, subject: str, domain: str) -> list[str]:
        """Assigned roles plus every inherited role."""
        snapshot = _snapshot(self._cache.snapshots, domain)
        return sorted(snapshot.resolver.expand(snapshot.roles_for(subject)))

    def has_role_for_user(self, subject: str, role: str, domain: str) -> bool:
        """Check role membership, inherited roles included."""
        return role in self.get_implicit_roles_for_user(subject, domain)

    def get_users_for_role(self, role: str, domain: str) -> list[str]:
        """Subjects holding role directly."""
        return _snapshot(self._cache.snapshots, domain).subjects_for(role)

    def get_implicit_permissions_for_user(
        self, subject: str, domain: str
    ) -> list[tuple[str, str]]:
        """(resource, action) pairs granted through the applicable rule set."""
        snapshots = self._cache.snapshots
        snapshot = _snapshot(snapshots, domain)
        assigned = snapshot.roles_for(subject)
        if not assigned:
            return []
        roles = snapshot.resolver.expand(assigned)
        _, rules_by_role = _applicable_rules(snapshots, snapshot)
        return sorted(
            {
                (rule.resource, rule.action)
                for role in roles
                for rule in rules_by_role.get(role, ())
            }
        )

    def _decide(
        self,
        snapshots: Mapping[str, DomainSnapshot],
        subject: str,
        domain: str,
        resource: str,
        action: str,
    ) -> EnforcementResult:
        snapshot = _snapshot(snapshots, domain)
        assigned = snapshot.roles_for(subject)
        if not assigned:
            return EnforcementResult(allowed=False)

        roles = snapshot.resolver.expand(assigned)
        rule_domain, rules_by_role = _applicable_rules(snapshots, snapshot)
        for role in sorted(roles):
            for rule in rules_by_role.get(role, ()):
                if rule.matches(resource=resource, action=action):
                    return EnforcementResult(
                        allowed=True,
                        matched_rule=rule,
                        roles=roles,
                        rule_domain=rule_domain,
                    )
        return EnforcementResult(allowed=False, roles=roles, rule_domain=rule_domain)


def _snapshot(snapshots: Mapping[str, DomainSnapshot], domain: str) -> DomainSnapshot:
    snapshot = snapshots.get(domain)
    if snapshot is None:
        # Unknown domain: no assignments, so every decision denies.
        return DomainSnapshot.empty(domain)
    return snapshot


def _applicable_rules(
    snapshots: Mapping[str, DomainSnapshot], snapshot: DomainSnapshot
) -> tuple[str, Mapping[str, tuple[PolicyRule, ...]]]:
    # A domain with any rule of its own fully shadows the global set.
    if snapshot.has_rules or snapshot.domain == GLOBAL_DOMAIN:
        return snapshot.domain, snapshot.rules_by_role
    fallback = snapshots.get(GLOBAL_DOMAIN)
    if fallback is None:
        return GLOBAL_DOMAIN, {}
    return GLOBAL_DOMAIN, fallback.rules_by_role
