"""Caller extractor protocol (port).

Turns an inbound request context into the caller identity the access guard
checks. Absence of identity is an authentication failure, reported before
any authorization decision is made.
"""

from typing import Any, Protocol

from src.core.errors import AuthenticationError
from src.core.result import Result
from src.domain.value_objects import Caller


class CallerExtractorProtocol(Protocol):
    """Extracts subject and active domain from a request context."""

    def extract_caller(self, request_context: Any) -> Result[Caller, AuthenticationError]:
        """Return the caller, or AuthenticationError if no identity is present."""
        ...
