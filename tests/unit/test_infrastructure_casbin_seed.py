"""Unit tests for the Casbin policy CSV seed loader."""

from pathlib import Path

import pytest

from src.core.constants import GLOBAL_DOMAIN
from src.domain.errors.policy_engine_exceptions import MalformedRuleError
from src.infrastructure.authorization.stores.casbin_seed import (
    load_casbin_policy_csv,
    seed_policy_store,
)
from src.infrastructure.authorization.stores.memory_store import InMemoryPolicyStore
from tests.factories import assignment, edge, rule

SEED_FILE = Path(__file__).parent.parent / "data" / "policy.csv"


@pytest.mark.unit
class TestLoadCasbinPolicyCsv:
    def test_parses_rules_assignments_and_edges(self):
        seed = load_casbin_policy_csv(SEED_FILE)

        assert seed.rules == [
            rule(GLOBAL_DOMAIN, "admin", "*", "*"),
            rule("acme", "viewer", "doc", "read"),
            rule("acme", "editor", "doc", "write"),
        ]
        assert seed.assignments == [
            assignment(GLOBAL_DOMAIN, "root", "admin"),
            assignment("acme", "alice", "editor"),
        ]
        assert seed.edges == [edge("acme", "editor", "viewer")]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_casbin_policy_csv(tmp_path / "absent.csv")

    def test_wrong_arity_is_malformed(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("p, viewer, acme, doc\n")

        with pytest.raises(MalformedRuleError):
            load_casbin_policy_csv(path)


@pytest.mark.unit
class TestSeedPolicyStore:
    async def test_seeding_is_idempotent(self):
        store = InMemoryPolicyStore()
        seed = load_casbin_policy_csv(SEED_FILE)

        first = await seed_policy_store(store, seed)
        second = await seed_policy_store(store, seed)

        assert (first.rules_added, first.assignments_added, first.edges_added) == (3, 2, 1)
        assert (second.rules_added, second.assignments_added, second.edges_added) == (0, 0, 0)
