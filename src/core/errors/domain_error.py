"""Base error value for Result-returning code.

DomainError is not an Exception. Command handlers, query handlers and the
access guard return it inside Failure(error=...); the presentation layer
classifies it (ApplicationError) and renders RFC 9457 problems.

Exceptions are reserved for the authorization engine internals (store
outages, malformed policy), which the policy cache absorbs.

Usage:
    @dataclass(frozen=True, slots=True, kw_only=True)
    class PolicyError(DomainError):
        domain: str | None = None
"""

from dataclasses import dataclass

from src.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Base error value.

    Attributes:
        code: Machine-readable error code.
        message: Human-readable message, safe to return to API callers.
        details: Optional string context.
    """

    code: ErrorCode
    message: str
    details: dict[str, str] | None = None

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"
