"""Application layer error types.

Wraps domain errors with the outcome category the presentation layer maps
to an HTTP status.

Exports:
    ApplicationErrorCode: Application-level error code enum
    ApplicationError: Application layer error dataclass
"""

from dataclasses import dataclass
from enum import Enum

from src.core.enums import ErrorCode
from src.core.errors import (
    AuthenticationError,
    AuthorizationError,
    ValidationError,
)
from src.core.errors.domain_error import DomainError

_UNAVAILABLE_CODES = frozenset(
    {ErrorCode.POLICY_STORE_UNAVAILABLE, ErrorCode.POLICY_CHANGE_NOT_APPLIED}
)


class ApplicationErrorCode(Enum):
    """Application-level error codes.

    Examples:
        >>> error = ApplicationError(
        ...     code=ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
        ...     message="role must not be empty",
        ... )
    """

    COMMAND_VALIDATION_FAILED = "command_validation_failed"
    COMMAND_EXECUTION_FAILED = "command_execution_failed"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    SERVICE_UNAVAILABLE = "service_unavailable"


@dataclass(frozen=True, slots=True, kw_only=True)
class ApplicationError:
    """Application layer error.

    Attributes:
        code: Application error code (from ApplicationErrorCode enum)
        message: Human-readable error message
        domain_error: Original domain error (if error originated from domain layer)
        details: Additional context as key-value pairs
    """

    code: ApplicationErrorCode
    message: str
    domain_error: DomainError | None = None
    details: dict[str, str] | None = None

    @classmethod
    def from_domain_error(cls, error: DomainError) -> "ApplicationError":
        """Classify a handler or guard failure."""
        match error:
            case ValidationError():
                code = ApplicationErrorCode.COMMAND_VALIDATION_FAILED
            case AuthenticationError():
                code = ApplicationErrorCode.UNAUTHORIZED
            case AuthorizationError():
                code = ApplicationErrorCode.FORBIDDEN
            case _ if error.code in _UNAVAILABLE_CODES:
                code = ApplicationErrorCode.SERVICE_UNAVAILABLE
            case _:
                code = ApplicationErrorCode.COMMAND_EXECUTION_FAILED
        return cls(code=code, message=error.message, domain_error=error)
