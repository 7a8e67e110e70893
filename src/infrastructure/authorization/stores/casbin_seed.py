"""Casbin policy CSV seed loader.

Reads a standard Casbin domain-RBAC policy file with pycasbin and turns it
into policy tuples that can be written to any policy store:

    p, viewer, acme, doc, read        # role, domain, resource, action
    g, alice, editor, acme            # subject, role, domain
    g2, editor, viewer, acme          # child role, parent role, domain

An empty domain field is the global domain. Seeding is idempotent.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from casbin.model import Model
from casbin.persist.adapters import FileAdapter

from src.domain.protocols.policy_store_protocol import PolicyStoreProtocol
from src.domain.value_objects import PolicyRule, RoleAssignment, RoleHierarchyEdge
from src.domain.errors.policy_engine_exceptions import MalformedRuleError

DOMAIN_RBAC_MODEL = """
[request_definition]
r = sub, dom, obj, act

[policy_definition]
p = sub, dom, obj, act

[role_definition]
g = _, _, _
g2 = _, _, _

[policy_effect]
e = some(where (p.eft == allow))

[matchers]
m = g(r.sub, p.sub, r.dom) && r.dom == p.dom && (p.obj == "*" || r.obj == p.obj) && (p.act == "*" || r.act == p.act)
"""


@dataclass(frozen=True, slots=True, kw_only=True)
class PolicySeed:
    """Policy tuples parsed from a seed file."""

    rules: list[PolicyRule] = field(default_factory=list)
    assignments: list[RoleAssignment] = field(default_factory=list)
    edges: list[RoleHierarchyEdge] = field(default_factory=list)


@dataclass(frozen=True, slots=True, kw_only=True)
class SeedResult:
    """Number of entries actually added by a seeding run."""

    rules_added: int = 0
    assignments_added: int = 0
    edges_added: int = 0


def build_domain_rbac_model() -> Model:
    model = Model()
    model.load_model_from_text(DOMAIN_RBAC_MODEL)
    return model


def load_casbin_policy_csv(path: str | Path) -> PolicySeed:
    """Parse a Casbin policy CSV.

    Args:
        path: Policy file path.

    Returns:
        PolicySeed: Parsed tuples, in file order.

    Raises:
        FileNotFoundError: If path does not exist.
        MalformedRuleError: If a line has the wrong arity or invalid values.
    """
    policy_path = Path(path)
    if not policy_path.is_file():
        raise FileNotFoundError(f"policy seed file not found: {policy_path}")

    model = build_domain_rbac_model()
    FileAdapter(str(policy_path)).load_policy(model)

    seed = PolicySeed()
    for values in model.get_policy("p", "p"):
        role, domain, resource, action = _unpack(values, 4, "p")
        seed.rules.append(
            _build(domain, lambda: PolicyRule(
                domain=domain, role=role, resource=resource, action=action
            ))
        )
    for values in model.get_policy("g", "g"):
        subject, role, domain = _unpack(values, 3, "g")
        seed.assignments.append(
            _build(domain, lambda: RoleAssignment(domain=domain, subject=subject, role=role))
        )
    for values in model.get_policy("g", "g2"):
        child, parent, domain = _unpack(values, 3, "g2")
        seed.edges.append(
            _build(domain, lambda: RoleHierarchyEdge(
                domain=domain, child_role=child, parent_role=parent
            ))
        )
    return seed


async def seed_policy_store(store: PolicyStoreProtocol, seed: PolicySeed) -> SeedResult:
    """Write seed tuples into a store, skipping ones already present."""
    rules_added = await store.add_rules(seed.rules) if seed.rules else 0
    assignments_added = 0
    for assignment in seed.assignments:
        assignments_added += await store.add_role_assignment(assignment)
    edges_added = 0
    for edge in seed.edges:
        edges_added += await store.add_hierarchy_edge(edge)
    return SeedResult(
        rules_added=rules_added,
        assignments_added=assignments_added,
        edges_added=edges_added,
    )


def _unpack(values: list[str], arity: int, ptype: str) -> list[str]:
    cleaned = [value.strip() for value in values]
    if len(cleaned) != arity:
        domain = cleaned[-1] if cleaned else ""
        raise MalformedRuleError(
            domain, f"{ptype} line needs {arity} values, got {', '.join(cleaned)!r}"
        )
    return cleaned


def _build[T](domain: str, factory: Callable[[], T]) -> T:
    try:
        return factory()
    except ValueError as e:
        raise MalformedRuleError(domain, str(e)) from e
