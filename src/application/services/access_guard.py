"""Access guard: per-operation authorization check.

Wraps the decision surface for inbound operations:

1. Look up the operation's required permissions (metadata provider)
2. Empty list -> permitted, no identity needed
3. Extract caller identity; absent -> AuthenticationError (no enforcement)
4. Enforce EVERY permission in the caller's domain (logical AND)
5. First failing permission -> AuthorizationError

Authentication and authorization failures are distinct Result errors so
the presentation layer can answer 401 and 403 respectively.

Usage:
    guard = AccessGuard(extractor, metadata, enforcer, logger)
    result = guard.check_operation(request, "list_policy_rules")
    match result:
        case Success(value=caller):
            ...
        case Failure(error=AuthenticationError()):
            ...
"""

from collections.abc import Sequence
from typing import Any

from src.core.enums import ErrorCode
from src.core.errors import AuthenticationError, AuthorizationError
from src.core.result import Failure, Result, Success
from src.domain.protocols.authorization_protocol import AuthorizationProtocol
from src.domain.protocols.caller_extractor_protocol import CallerExtractorProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.permission_metadata_protocol import (
    PermissionMetadataProtocol,
)
from src.domain.value_objects import Caller, Permission


class AccessGuard:
    """Decides whether a caller may invoke a registered operation.

    Synchronous like the enforcer it wraps: no I/O on this path.

    Dependencies (injected via constructor):
        - CallerExtractorProtocol: Identity and active domain
        - PermissionMetadataProtocol: Required permissions per operation
        - AuthorizationProtocol: enforce()
        - LoggerProtocol: Denial logging
    """

    def __init__(
        self,
        extractor: CallerExtractorProtocol,
        metadata: PermissionMetadataProtocol,
        authz: AuthorizationProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._extractor = extractor
        self._metadata = metadata
        self._authz = authz
        self._logger = logger

    def check_operation(
        self, request_context: Any, operation_id: str
    ) -> Result[Caller | None, AuthenticationError | AuthorizationError]:
        """Check a request against an operation's required permissions.

        Args:
            request_context: Whatever the extractor reads identity from.
            operation_id: Registered operation handle.

        Returns:
            Success(Caller) when permitted, Success(None) for public
            operations, Failure(AuthenticationError) when no identity is
            present, Failure(AuthorizationError) on denial.

        Raises:
            KeyError: If operation_id was never registered.
        """
        permissions = self._metadata.required_permissions(operation_id)
        if not permissions:
            return Success(value=None)

        match self._extractor.extract_caller(request_context):
            case Failure(error=error):
                self._logger.info(
                    "access_unauthenticated",
                    operation_id=operation_id,
                    reason=error.code.value,
                )
                return Failure(error=error)
            case Success(value=caller):
                pass

        result = self.check_permissions(caller, permissions)
        if isinstance(result, Failure):
            self._logger.info(
                "access_denied",
                operation_id=operation_id,
                subject=caller.subject_id,
                domain=caller.domain,
                permission=result.error.required_permission,
            )
        return result

    def check_permissions(
        self, caller: Caller, permissions: Sequence[Permission]
    ) -> Result[Caller, AuthorizationError]:
        """Enforce all permissions for an already-identified caller."""
        for permission in permissions:
            if not self._authz.enforce(
                caller.subject_id,
                caller.domain,
                permission.resource,
                permission.action,
            ):
                return Failure(
                    error=AuthorizationError(
                        code=ErrorCode.PERMISSION_DENIED,
                        message=f"Permission denied: {permission}",
                        required_permission=str(permission),
                        domain=caller.domain,
                    )
                )
        return Success(value=caller)
