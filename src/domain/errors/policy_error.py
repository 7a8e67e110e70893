"""Policy administration error type.

Returned (not raised) by administrative command and query handlers when the
policy store rejects, cannot complete or cannot serve a request.

Usage:
    try:
        await store.add_rule(rule)
    except PolicyEngineError as e:
        return Failure(error=PolicyError.from_exception(e, domain="acme"))
"""

from dataclasses import dataclass

from src.core.enums import ErrorCode
from src.core.errors import DomainError
from src.domain.errors.policy_engine_exceptions import (
    ConfigurationError,
    PolicyEngineError,
)


@dataclass(frozen=True, slots=True, kw_only=True)
class PolicyError(DomainError):
    """Policy change failure.

    Attributes:
        code: ErrorCode enum (POLICY_STORE_UNAVAILABLE,
            POLICY_CONFIGURATION_INVALID, POLICY_CHANGE_NOT_APPLIED).
        message: Human-readable message.
        domain: Domain the change targeted.
        details: Additional context.
    """

    domain: str | None = None

    @classmethod
    def from_exception(cls, error: PolicyEngineError, *, domain: str) -> "PolicyError":
        """Classify a store or snapshot exception raised for domain."""
        code = (
            ErrorCode.POLICY_CONFIGURATION_INVALID
            if isinstance(error, ConfigurationError)
            else ErrorCode.POLICY_STORE_UNAVAILABLE
        )
        return cls(code=code, message=str(error), domain=domain)
