"""Role hierarchy command handlers.

AddRoleRelationHandler checks the domain's stored hierarchy before writing
so an edge that would close a cycle never reaches the store.
"""

from src.application.commands.handlers.policy_change_handler import PolicyChangeHandler
from src.application.commands.policy_commands import AddRoleRelation, RemoveRoleRelation
from src.core.enums import ErrorCode
from src.core.errors import DomainError, ValidationError
from src.core.result import Result
from src.domain.enums import PolicyChangeType
from src.domain.services import creates_cycle, parent_map
from src.domain.value_objects import RoleHierarchyEdge


class AddRoleRelationHandler(PolicyChangeHandler):
    """Handler for AddRoleRelation.

    Returns:
        Success(True) when added, Success(False) when the edge existed,
        Failure(ValidationError) when it would create a cycle.
    """

    change_type = PolicyChangeType.RELATION_ADDED
    validation_code = ErrorCode.INVALID_ROLE_RELATION

    async def handle(self, cmd: AddRoleRelation) -> Result[bool, DomainError]:
        return await self._execute(
            domain=cmd.domain,
            values=(cmd.child_role, cmd.parent_role),
            actor=cmd.actor,
            build=lambda: RoleHierarchyEdge(
                domain=cmd.domain,
                child_role=cmd.child_role,
                parent_role=cmd.parent_role,
            ),
            write=self._store.add_hierarchy_edge,
            check=self._reject_cycle,
        )

    async def _reject_cycle(self, edge: RoleHierarchyEdge) -> DomainError | None:
        parents = parent_map(await self._store.list_hierarchy(edge.domain))
        if not creates_cycle(parents, edge.child_role, edge.parent_role):
            return None
        return ValidationError(
            code=ErrorCode.ROLE_HIERARCHY_CYCLE,
            message=(
                f"{edge.parent_role!r} already inherits from {edge.child_role!r} "
                f"in domain {edge.domain!r}"
            ),
            field="parent_role",
        )


class RemoveRoleRelationHandler(PolicyChangeHandler):
    """Handler for RemoveRoleRelation. Success(False) if the edge did not exist."""

    change_type = PolicyChangeType.RELATION_REMOVED
    validation_code = ErrorCode.INVALID_ROLE_RELATION

    async def handle(self, cmd: RemoveRoleRelation) -> Result[bool, DomainError]:
        return await self._execute(
            domain=cmd.domain,
            values=(cmd.child_role, cmd.parent_role),
            actor=cmd.actor,
            build=lambda: RoleHierarchyEdge(
                domain=cmd.domain,
                child_role=cmd.child_role,
                parent_role=cmd.parent_role,
            ),
            write=self._store.remove_hierarchy_edge,
        )
