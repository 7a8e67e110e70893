"""Core errors package.

Error values returned (never raised) inside Result types by handlers and
the access guard.

Usage:
    from src.core.errors import AuthorizationError, ValidationError
"""

from src.core.errors.common_errors import (
    AuthenticationError,
    AuthorizationError,
    ValidationError,
)
from src.core.errors.domain_error import DomainError

__all__ = [
    "AuthenticationError",
    "AuthorizationError",
    "DomainError",
    "ValidationError",
]
