"""JWT caller extractor (adapter).

Implements CallerExtractorProtocol by reading a Bearer token from the
request's Authorization header and validating it with PyJWT.

Claims:
    - sub: Subject identifier (required)
    - <domain claim>: Active domain, claim name configurable
    - exp: Expiration (validated when present)

Active domain: a request that targets a domain in its path (the "domain"
path parameter) runs in that domain; otherwise the token's domain claim
applies. Roles are always looked up in the active domain, so a token for
one tenant grants nothing in another.

Any missing, malformed, expired or wrongly signed token is an
authentication failure. The extractor never consults policy state.
"""

from collections.abc import Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from src.core.constants import BEARER_PREFIX, GLOBAL_DOMAIN, GLOBAL_DOMAIN_SEGMENT
from src.core.enums import ErrorCode
from src.core.errors import AuthenticationError
from src.core.result import Failure, Result, Success
from src.domain.value_objects import Caller, validate_domain


class JWTCallerExtractor:
    """Bearer token -> Caller.

    Usage:
        extractor = JWTCallerExtractor(secret_key=settings.jwt_secret_key)
        result = extractor.extract_caller(request)

        token = extractor.issue(Caller(subject_id="alice", domain="acme"))
    """

    def __init__(
        self,
        secret_key: str,
        *,
        algorithm: str = "HS256",
        domain_claim: str = "domain",
    ) -> None:
        """Initialize extractor.

        Args:
            secret_key: HMAC secret. MUST be at least 32 bytes.
            algorithm: JWT algorithm (default: HS256).
            domain_claim: Claim holding the caller's active domain.

        Raises:
            ValueError: If secret_key is too short.
        """
        if len(secret_key) < 32:
            raise ValueError("JWT secret key must be at least 32 bytes (256 bits)")

        self._secret_key = secret_key
        self._algorithm = algorithm
        self._domain_claim = domain_claim

    def extract_caller(self, request_context: Any) -> Result[Caller, AuthenticationError]:
        """Extract caller from anything exposing a headers mapping."""
        headers: Mapping[str, str] = getattr(request_context, "headers", {})
        authorization = headers.get("authorization") or headers.get("Authorization")
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            return _failure(ErrorCode.AUTHENTICATION_FAILED, "Missing bearer token")

        token = authorization[len(BEARER_PREFIX) :].strip()
        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": ["sub"]},
            )
        except ExpiredSignatureError:
            return _failure(ErrorCode.TOKEN_EXPIRED, "Token has expired")
        except InvalidTokenError:
            return _failure(ErrorCode.TOKEN_INVALID, "Invalid token")

        subject = payload.get("sub")
        domain = self._target_domain(request_context, payload)
        if not isinstance(subject, str) or not subject:
            return _failure(ErrorCode.TOKEN_INVALID, "Token has no subject")
        if not isinstance(domain, str):
            return _failure(
                ErrorCode.TOKEN_INVALID, f"Token has no '{self._domain_claim}' claim"
            )
        try:
            validate_domain(domain)
        except ValueError:
            return _failure(ErrorCode.TOKEN_INVALID, "Active domain is invalid")

        return Success(value=Caller(subject_id=subject, domain=domain))

    def _target_domain(self, request_context: Any, payload: Mapping[str, Any]) -> Any:
        path_params: Mapping[str, str] = getattr(request_context, "path_params", None) or {}
        segment = path_params.get("domain")
        if segment is None:
            return payload.get(self._domain_claim)
        return GLOBAL_DOMAIN if segment == GLOBAL_DOMAIN_SEGMENT else segment

    def issue(self, caller: Caller, *, expires_minutes: int = 15) -> str:
        """Sign a caller token (admin tooling and tests)."""
        now = datetime.now(UTC)
        payload = {
            "sub": caller.subject_id,
            self._domain_claim: caller.domain,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(minutes=expires_minutes)).timestamp()),
        }
        token: str = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        return token


def _failure(code: ErrorCode, message: str) -> Failure[AuthenticationError]:
    return Failure(error=AuthenticationError(code=code, message=message))
