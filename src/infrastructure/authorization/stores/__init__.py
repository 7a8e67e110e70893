"""Policy store adapters (PolicyStoreProtocol implementations)."""

from src.infrastructure.authorization.stores.casbin_seed import (
    PolicySeed,
    SeedResult,
    load_casbin_policy_csv,
    seed_policy_store,
)
from src.infrastructure.authorization.stores.memory_store import InMemoryPolicyStore
from src.infrastructure.authorization.stores.sql_store import SqlPolicyStore

__all__ = [
    "InMemoryPolicyStore",
    "PolicySeed",
    "SeedResult",
    "SqlPolicyStore",
    "load_casbin_policy_csv",
    "seed_policy_store",
]
