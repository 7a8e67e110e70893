"""Authorization infrastructure package.

Multi-tenant RBAC engine:
- stores/: PolicyStoreProtocol adapters (memory, SQL) and Casbin CSV seeding
- role_resolver.py: per-domain hierarchy closure with cycle detection
- policy_snapshot.py / policy_cache.py: immutable per-domain snapshots
- enforcer.py: pure, synchronous decisions (AuthorizationProtocol)
- redis_notifier.py / policy_refresher.py: change propagation
- engine.py: AuthorizationEngine lifetime owner
"""

from src.infrastructure.authorization.enforcer import Enforcer
from src.infrastructure.authorization.engine import AuthorizationEngine
from src.domain.errors.policy_engine_exceptions import (
    ConfigurationError,
    HierarchyCycleError,
    MalformedRuleError,
    PolicyEngineError,
    PolicyStoreUnavailableError,
)
from src.infrastructure.authorization.policy_cache import DomainStatus, PolicyCache
from src.infrastructure.authorization.policy_snapshot import DomainSnapshot
from src.infrastructure.authorization.role_resolver import RoleHierarchyResolver

__all__ = [
    "AuthorizationEngine",
    "ConfigurationError",
    "DomainSnapshot",
    "DomainStatus",
    "Enforcer",
    "HierarchyCycleError",
    "MalformedRuleError",
    "PolicyCache",
    "PolicyEngineError",
    "PolicyStoreUnavailableError",
    "RoleHierarchyResolver",
]
