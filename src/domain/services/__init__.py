"""Pure domain services."""

from src.domain.services.role_hierarchy import (
    creates_cycle,
    find_cycle,
    parent_map,
    role_closure,
)

__all__ = ["creates_cycle", "find_cycle", "parent_map", "role_closure"]
