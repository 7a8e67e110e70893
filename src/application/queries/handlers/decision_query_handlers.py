"""Decision query handlers.

Read the published snapshots through AuthorizationProtocol. Pure and
synchronous underneath; handle() stays async for a uniform handler API.
"""

from dataclasses import dataclass

from src.application.queries.policy_queries import CheckAccess, GetSubjectPermissions
from src.core.enums import ErrorCode
from src.core.errors import DomainError, ValidationError
from src.core.result import Failure, Result, Success
from src.domain.protocols.authorization_protocol import AuthorizationProtocol
from src.domain.value_objects import EnforcementResult, validate_domain


@dataclass
class SubjectPermissionsResult:
    """Effective permissions of a subject in a domain."""

    subject: str
    domain: str
    roles: list[str]
    implicit_roles: list[str]
    permissions: list[tuple[str, str]]


class GetSubjectPermissionsHandler:
    """Handler for GetSubjectPermissions."""

    def __init__(self, authz: AuthorizationProtocol) -> None:
        """Initialize handler with dependencies.

        Args:
            authz: Decision surface (Enforcer).
        """
        self._authz = authz

    async def handle(
        self, query: GetSubjectPermissions
    ) -> Result[SubjectPermissionsResult, DomainError]:
        if error := _invalid_domain(query.domain):
            return Failure(error=error)

        return Success(
            value=SubjectPermissionsResult(
                subject=query.subject,
                domain=query.domain,
                roles=self._authz.get_roles_for_user(query.subject, query.domain),
                implicit_roles=self._authz.get_implicit_roles_for_user(
                    query.subject, query.domain
                ),
                permissions=self._authz.get_implicit_permissions_for_user(
                    query.subject, query.domain
                ),
            )
        )


class CheckAccessHandler:
    """Handler for CheckAccess.

    Returns:
        Success(EnforcementResult) for allowed and denied decisions alike.
        A denial is an answer here, not an error.
    """

    def __init__(self, authz: AuthorizationProtocol) -> None:
        self._authz = authz

    async def handle(self, query: CheckAccess) -> Result[EnforcementResult, DomainError]:
        if error := _invalid_domain(query.domain):
            return Failure(error=error)
        return Success(
            value=self._authz.enforce_ex(
                query.subject, query.domain, query.resource, query.action
            )
        )


def _invalid_domain(domain: str) -> ValidationError | None:
    try:
        validate_domain(domain)
    except ValueError as e:
        return ValidationError(
            code=ErrorCode.INVALID_DOMAIN, message=str(e), field="domain"
        )
    return None
