"""Policy rule command handlers (add, remove, batch)."""

from dataclasses import dataclass

from src.application.commands.handlers.policy_change_handler import PolicyChangeHandler
from src.application.commands.policy_commands import (
    AddPolicyRule,
    ApplyPolicyBatch,
    RemovePolicyRule,
    RuleSpec,
)
from src.core.enums import ErrorCode
from src.core.errors import DomainError
from src.core.result import Result
from src.domain.enums import PolicyChangeType
from src.domain.value_objects import PolicyRule


class AddPolicyRuleHandler(PolicyChangeHandler):
    """Handler for AddPolicyRule.

    Returns:
        Success(True) when the rule was added, Success(False) when it
        already existed.
    """

    change_type = PolicyChangeType.RULE_ADDED
    validation_code = ErrorCode.INVALID_POLICY_RULE

    async def handle(self, cmd: AddPolicyRule) -> Result[bool, DomainError]:
        return await self._execute(
            domain=cmd.domain,
            values=(cmd.role, cmd.resource, cmd.action),
            actor=cmd.actor,
            build=lambda: PolicyRule(
                domain=cmd.domain,
                role=cmd.role,
                resource=cmd.resource,
                action=cmd.action,
            ),
            write=self._store.add_rule,
        )


class RemovePolicyRuleHandler(PolicyChangeHandler):
    """Handler for RemovePolicyRule.

    Returns:
        Success(True) when the rule was removed, Success(False) when it
        did not exist.
    """

    change_type = PolicyChangeType.RULE_REMOVED
    validation_code = ErrorCode.INVALID_POLICY_RULE

    async def handle(self, cmd: RemovePolicyRule) -> Result[bool, DomainError]:
        return await self._execute(
            domain=cmd.domain,
            values=(cmd.role, cmd.resource, cmd.action),
            actor=cmd.actor,
            build=lambda: PolicyRule(
                domain=cmd.domain,
                role=cmd.role,
                resource=cmd.resource,
                action=cmd.action,
            ),
            write=self._store.remove_rule,
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class PolicyBatchResult:
    """Counts of rules actually changed by a batch."""

    added: int = 0
    removed: int = 0

    def __bool__(self) -> bool:
        return bool(self.added or self.removed)


@dataclass(frozen=True, slots=True, kw_only=True)
class _Batch:
    add: list[PolicyRule]
    remove: list[PolicyRule]


class ApplyPolicyBatchHandler(PolicyChangeHandler):
    """Handler for ApplyPolicyBatch (removals first, then additions)."""

    change_type = PolicyChangeType.RULES_BATCH
    validation_code = ErrorCode.INVALID_POLICY_RULE

    async def handle(
        self, cmd: ApplyPolicyBatch
    ) -> Result[PolicyBatchResult, DomainError]:
        def build() -> _Batch:
            if not cmd.add and not cmd.remove:
                raise ValueError("batch must add or remove at least one rule")
            return _Batch(
                add=[_to_rule(cmd.domain, spec) for spec in cmd.add],
                remove=[_to_rule(cmd.domain, spec) for spec in cmd.remove],
            )

        async def write(batch: _Batch) -> PolicyBatchResult:
            removed = await self._store.remove_rules(batch.remove) if batch.remove else 0
            added = await self._store.add_rules(batch.add) if batch.add else 0
            return PolicyBatchResult(added=added, removed=removed)

        return await self._execute(
            domain=cmd.domain,
            values=(f"add={len(cmd.add)}", f"remove={len(cmd.remove)}"),
            actor=cmd.actor,
            build=build,
            write=write,
        )


def _to_rule(domain: str, spec: RuleSpec) -> PolicyRule:
    return PolicyRule(
        domain=domain, role=spec.role, resource=spec.resource, action=spec.action
    )
