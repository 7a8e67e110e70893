"""SQLAlchemy policy store over the casbin_rule table.

Adapter for hexagonal architecture. Maps between domain policy tuples and
Casbin-shaped rows (see CasbinRule for the column layout).

Errors:
    - SQLAlchemy/OS errors -> PolicyStoreUnavailableError
    - Rows that do not form a valid tuple -> MalformedRuleError
"""

from collections.abc import Iterable, Sequence
from typing import Any

from sqlalchemy import ColumnElement, CompoundSelect, Select, and_, delete, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from src.domain.enums import PolicyType
from src.domain.value_objects import PolicyRule, RoleAssignment, RoleHierarchyEdge
from src.domain.errors.policy_engine_exceptions import (
    MalformedRuleError,
    PolicyStoreUnavailableError,
)
from src.infrastructure.persistence.database import Database
from src.infrastructure.persistence.models.casbin_rule import CasbinRule

# (ptype, v0, v1, v2, v3)
type RowKey = tuple[str, str, str, str, str]


class SqlPolicyStore:
    """SQLAlchemy implementation of PolicyStoreProtocol.

    Each mutation runs in its own transaction. Duplicate inserts are
    detected with a lookup and, for concurrent writers, by the unique
    index on (ptype, v0..v3).

    Example:
        >>> store = SqlPolicyStore(Database(settings.database_url))
        >>> await store.list_rules("acme")
    """

    def __init__(self, database: Database) -> None:
        self._database = database

    async def list_domains(self) -> set[str]:
        rule_domains = select(CasbinRule.v3).where(
            CasbinRule.ptype == PolicyType.RULE.value
        )
        role_domains = select(CasbinRule.v2).where(
            CasbinRule.ptype.in_((PolicyType.ASSIGNMENT.value, PolicyType.HIERARCHY.value))
        )
        rows = await self._fetch("list_domains", rule_domains.union(role_domains))
        return {domain or "" for (domain,) in rows}

    async def list_rules(self, domain: str | None = None) -> list[PolicyRule]:
        stmt = select(CasbinRule).where(CasbinRule.ptype == PolicyType.RULE.value)
        if domain is not None:
            stmt = stmt.where(_domain_is(CasbinRule.v3, domain))
        rows = await self._fetch_models("list_rules", stmt.order_by(CasbinRule.id))
        return [self._to_rule(row) for row in rows]

    async def list_role_assignments(
        self, domain: str, subject: str | None = None
    ) -> list[RoleAssignment]:
        stmt = select(CasbinRule).where(
            CasbinRule.ptype == PolicyType.ASSIGNMENT.value,
            _domain_is(CasbinRule.v2, domain),
        )
        if subject is not None:
            stmt = stmt.where(CasbinRule.v0 == subject)
        rows = await self._fetch_models(
            "list_role_assignments", stmt.order_by(CasbinRule.id)
        )
        return [self._to_assignment(row) for row in rows]

    async def list_roles_for_subject(self, domain: str, subject: str) -> list[str]:
        return [a.role for a in await self.list_role_assignments(domain, subject)]

    async def list_hierarchy(self, domain: str) -> list[RoleHierarchyEdge]:
        stmt = select(CasbinRule).where(
            CasbinRule.ptype == PolicyType.HIERARCHY.value,
            _domain_is(CasbinRule.v2, domain),
        )
        rows = await self._fetch_models("list_hierarchy", stmt.order_by(CasbinRule.id))
        return [self._to_edge(row) for row in rows]

    async def add_rule(self, rule: PolicyRule) -> bool:
        return await self._insert("add_rule", [_rule_key(rule)]) == 1

    async def remove_rule(self, rule: PolicyRule) -> bool:
        return await self._delete("remove_rule", [_rule_key(rule)]) == 1

    async def add_rules(self, rules: Sequence[PolicyRule]) -> int:
        return await self._insert("add_rules", [_rule_key(r) for r in rules])

    async def remove_rules(self, rules: Sequence[PolicyRule]) -> int:
        return await self._delete("remove_rules", [_rule_key(r) for r in rules])

    async def add_role_assignment(self, assignment: RoleAssignment) -> bool:
        return await self._insert("add_role_assignment", [_assignment_key(assignment)]) == 1

    async def remove_role_assignment(self, assignment: RoleAssignment) -> bool:
        return await self._delete("remove_role_assignment", [_assignment_key(assignment)]) == 1

    async def remove_role_assignments_for_subject(
        self, domain: str, subject: str
    ) -> int:
        stmt = delete(CasbinRule).where(
            CasbinRule.ptype == PolicyType.ASSIGNMENT.value,
            CasbinRule.v0 == subject,
            _domain_is(CasbinRule.v2, domain),
        )
        try:
            async with self._database.get_session() as session:
                result = await session.execute(stmt)
                return int(result.rowcount or 0)
        except (SQLAlchemyError, OSError) as e:
            raise PolicyStoreUnavailableError("remove_role_assignments_for_subject", e) from e

    async def add_hierarchy_edge(self, edge: RoleHierarchyEdge) -> bool:
        return await self._insert("add_hierarchy_edge", [_edge_key(edge)]) == 1

    async def remove_hierarchy_edge(self, edge: RoleHierarchyEdge) -> bool:
        return await self._delete("remove_hierarchy_edge", [_edge_key(edge)]) == 1

    async def _fetch(
        self, operation: str, stmt: Select[Any] | CompoundSelect
    ) -> list[tuple[Any, ...]]:
        try:
            async with self._database.get_session() as session:
                result = await session.execute(stmt)
                return [tuple(row) for row in result.all()]
        except (SQLAlchemyError, OSError) as e:
            raise PolicyStoreUnavailableError(operation, e) from e

    async def _fetch_models(
        self, operation: str, stmt: Select[tuple[CasbinRule]]
    ) -> list[CasbinRule]:
        try:
            async with self._database.get_session() as session:
                result = await session.execute(stmt)
                return list(result.scalars().all())
        except (SQLAlchemyError, OSError) as e:
            raise PolicyStoreUnavailableError(operation, e) from e

    async def _insert(self, operation: str, keys: Iterable[RowKey]) -> int:
        unique_keys = list(dict.fromkeys(keys))
        # A concurrent writer may insert the same tuple between our lookup
        # and commit; the second pass skips it.
        for _ in range(2):
            try:
                async with self._database.get_session() as session:
                    added = 0
                    for key in unique_keys:
                        if await _exists(session, key):
                            continue
                        session.add(_to_model(key))
                        added += 1
                    await session.flush()
                return added
            except IntegrityError:
                continue
            except (SQLAlchemyError, OSError) as e:
                raise PolicyStoreUnavailableError(operation, e) from e
        return 0

    async def _delete(self, operation: str, keys: Iterable[RowKey]) -> int:
        unique_keys = list(dict.fromkeys(keys))
        if not unique_keys:
            return 0
        stmt = delete(CasbinRule).where(or_(*(_matches(key) for key in unique_keys)))
        try:
            async with self._database.get_session() as session:
                result = await session.execute(stmt)
                return int(result.rowcount or 0)
        except (SQLAlchemyError, OSError) as e:
            raise PolicyStoreUnavailableError(operation, e) from e

    def _to_rule(self, row: CasbinRule) -> PolicyRule:
        domain = row.v3 or ""
        try:
            return PolicyRule(
                domain=domain,
                role=row.v0 or "",
                resource=row.v1 or "",
                action=row.v2 or "",
            )
        except ValueError as e:
            raise MalformedRuleError(domain, f"casbin_rule id={row.id}: {e}") from e

    def _to_assignment(self, row: CasbinRule) -> RoleAssignment:
        domain = row.v2 or ""
        try:
            return RoleAssignment(domain=domain, subject=row.v0 or "", role=row.v1 or "")
        except ValueError as e:
            raise MalformedRuleError(domain, f"casbin_rule id={row.id}: {e}") from e

    def _to_edge(self, row: CasbinRule) -> RoleHierarchyEdge:
        domain = row.v2 or ""
        try:
            return RoleHierarchyEdge(
                domain=domain, child_role=row.v0 or "", parent_role=row.v1 or ""
            )
        except ValueError as e:
            raise MalformedRuleError(domain, f"casbin_rule id={row.id}: {e}") from e


def _rule_key(rule: PolicyRule) -> RowKey:
    return (PolicyType.RULE.value, rule.role, rule.resource, rule.action, rule.domain)


def _assignment_key(assignment: RoleAssignment) -> RowKey:
    return (
        PolicyType.ASSIGNMENT.value,
        assignment.subject,
        assignment.role,
        assignment.domain,
        "",
    )


def _edge_key(edge: RoleHierarchyEdge) -> RowKey:
    return (PolicyType.HIERARCHY.value, edge.child_role, edge.parent_role, edge.domain, "")


def _to_model(key: RowKey) -> CasbinRule:
    ptype, v0, v1, v2, v3 = key
    return CasbinRule(ptype=ptype, v0=v0, v1=v1, v2=v2, v3=v3, v4="", v5="")


def _matches(key: RowKey) -> ColumnElement[bool]:
    ptype, v0, v1, v2, v3 = key
    # v2 is the domain of g/g2 rows and a non-empty action of p rows.
    return and_(
        CasbinRule.ptype == ptype,
        CasbinRule.v0 == v0,
        CasbinRule.v1 == v1,
        _domain_is(CasbinRule.v2, v2),
        _domain_is(CasbinRule.v3, v3),
    )


def _domain_is(column: InstrumentedAttribute[str | None], value: str) -> ColumnElement[bool]:
    # Rows written by other Casbin tooling may leave empty columns NULL.
    if value == "":
        return or_(column == "", column.is_(None))
    return column == value


async def _exists(session: AsyncSession, key: RowKey) -> bool:
    result = await session.execute(select(CasbinRule.id).where(_matches(key)).limit(1))
    return result.scalar_one_or_none() is not None
