"""Role assignment command handlers (assign, revoke, remove subject)."""

from src.application.commands.handlers.policy_change_handler import PolicyChangeHandler
from src.application.commands.policy_commands import AssignRole, RemoveSubject, RevokeRole
from src.core.enums import ErrorCode
from src.core.errors import DomainError
from src.core.result import Result
from src.domain.enums import PolicyChangeType
from src.domain.value_objects import RoleAssignment, validate_domain, validate_identifier


class AssignRoleHandler(PolicyChangeHandler):
    """Handler for AssignRole. Success(False) if already assigned."""

    change_type = PolicyChangeType.ROLE_ASSIGNED
    validation_code = ErrorCode.INVALID_ROLE_ASSIGNMENT

    async def handle(self, cmd: AssignRole) -> Result[bool, DomainError]:
        return await self._execute(
            domain=cmd.domain,
            values=(cmd.subject, cmd.role),
            actor=cmd.actor,
            build=lambda: RoleAssignment(
                domain=cmd.domain, subject=cmd.subject, role=cmd.role
            ),
            write=self._store.add_role_assignment,
        )


class RevokeRoleHandler(PolicyChangeHandler):
    """Handler for RevokeRole. Success(False) if it was not assigned."""

    change_type = PolicyChangeType.ROLE_REVOKED
    validation_code = ErrorCode.INVALID_ROLE_ASSIGNMENT

    async def handle(self, cmd: RevokeRole) -> Result[bool, DomainError]:
        return await self._execute(
            domain=cmd.domain,
            values=(cmd.subject, cmd.role),
            actor=cmd.actor,
            build=lambda: RoleAssignment(
                domain=cmd.domain, subject=cmd.subject, role=cmd.role
            ),
            write=self._store.remove_role_assignment,
        )


class RemoveSubjectHandler(PolicyChangeHandler):
    """Handler for RemoveSubject.

    Returns:
        Success(count) with the number of roles revoked.
    """

    change_type = PolicyChangeType.SUBJECT_REMOVED
    validation_code = ErrorCode.INVALID_ROLE_ASSIGNMENT

    async def handle(self, cmd: RemoveSubject) -> Result[int, DomainError]:
        def build() -> str:
            validate_domain(cmd.domain)
            validate_identifier("subject", cmd.subject)
            return cmd.subject

        async def write(subject: str) -> int:
            return await self._store.remove_role_assignments_for_subject(
                cmd.domain, subject
            )

        return await self._execute(
            domain=cmd.domain,
            values=(cmd.subject,),
            actor=cmd.actor,
            build=build,
            write=write,
        )
