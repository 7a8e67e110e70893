"""Store-backed listing query handlers.

Fetches from the policy store (no cache for list operations), so
administrators see what is stored even while a domain's snapshot is stale.
"""

from collections.abc import Awaitable, Callable

from src.application.queries.policy_queries import (
    ListPolicyRules,
    ListRoleAssignments,
    ListRoleRelations,
)
from src.core.enums import ErrorCode
from src.core.errors import DomainError, ValidationError
from src.core.result import Failure, Result, Success
from src.domain.errors import PolicyEngineError, PolicyError
from src.domain.protocols.policy_store_protocol import PolicyStoreProtocol
from src.domain.value_objects import (
    PolicyRule,
    RoleAssignment,
    RoleHierarchyEdge,
    validate_domain,
)


class ListPolicyRulesHandler:
    """Handler for ListPolicyRules."""

    def __init__(self, store: PolicyStoreProtocol) -> None:
        self._store = store

    async def handle(
        self, query: ListPolicyRules
    ) -> Result[list[PolicyRule], DomainError]:
        return await _read(query.domain, lambda: self._store.list_rules(query.domain))


class ListRoleAssignmentsHandler:
    """Handler for ListRoleAssignments."""

    def __init__(self, store: PolicyStoreProtocol) -> None:
        self._store = store

    async def handle(
        self, query: ListRoleAssignments
    ) -> Result[list[RoleAssignment], DomainError]:
        return await _read(
            query.domain,
            lambda: self._store.list_role_assignments(query.domain, query.subject),
        )


class ListRoleRelationsHandler:
    """Handler for ListRoleRelations."""

    def __init__(self, store: PolicyStoreProtocol) -> None:
        self._store = store

    async def handle(
        self, query: ListRoleRelations
    ) -> Result[list[RoleHierarchyEdge], DomainError]:
        return await _read(
            query.domain, lambda: self._store.list_hierarchy(query.domain)
        )


async def _read[T](
    domain: str, fetch: Callable[[], Awaitable[list[T]]]
) -> Result[list[T], DomainError]:
    try:
        validate_domain(domain)
    except ValueError as e:
        return Failure(
            error=ValidationError(
                code=ErrorCode.INVALID_DOMAIN, message=str(e), field="domain"
            )
        )

    try:
        items = await fetch()
    except PolicyEngineError as e:
        return Failure(error=PolicyError.from_exception(e, domain=domain))
    return Success(value=items)
