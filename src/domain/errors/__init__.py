"""Domain errors package.

Usage:
    from src.domain.errors import PolicyError, PolicyStoreUnavailableError
"""

from src.domain.errors.policy_engine_exceptions import (
    ConfigurationError,
    HierarchyCycleError,
    MalformedRuleError,
    PolicyEngineError,
    PolicyStoreUnavailableError,
)
from src.domain.errors.policy_error import PolicyError

__all__ = [
    "ConfigurationError",
    "HierarchyCycleError",
    "MalformedRuleError",
    "PolicyEngineError",
    "PolicyError",
    "PolicyStoreUnavailableError",
]
