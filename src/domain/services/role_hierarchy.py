"""Role hierarchy graph helpers.

Pure functions over child -> parent edges, shared by the snapshot resolver
and by administrative checks that must reject cycle-creating edges before
they reach the store.
"""

from collections import deque
from collections.abc import Iterable, Mapping, Sequence

from src.domain.value_objects import RoleHierarchyEdge


def parent_map(edges: Iterable[RoleHierarchyEdge]) -> dict[str, tuple[str, ...]]:
    """Group edges into child -> sorted parents."""
    parents: dict[str, set[str]] = {}
    for edge in edges:
        parents.setdefault(edge.child_role, set()).add(edge.parent_role)
    return {child: tuple(sorted(roles)) for child, roles in parents.items()}


def role_closure(parents: Mapping[str, Sequence[str]], role: str) -> frozenset[str]:
    """Return role plus every role reachable through parent edges.

    Breadth-first with a visited set: diamonds contribute each role once and
    the traversal terminates even on a cyclic graph.
    """
    visited = {role}
    queue = deque([role])
    while queue:
        current = queue.popleft()
        for parent in parents.get(current, ()):
            if parent not in visited:
                visited.add(parent)
                queue.append(parent)
    return frozenset(visited)


def find_cycle(parents: Mapping[str, Sequence[str]]) -> list[str] | None:
    """Return one cycle as a role path (first role repeated last), or None.

    Iterative three-color depth-first search; reaching a role that is still
    on the current path is a back edge.
    """
    white, gray, black = 0, 1, 2
    color: dict[str, int] = {}

    for start in sorted(parents):
        if color.get(start, white) != white:
            continue
        color[start] = gray
        path = [start]
        stack = [iter(parents[start])]
        while stack:
            parent = next(stack[-1], None)
            if parent is None:
                color[path.pop()] = black
                stack.pop()
                continue
            state = color.get(parent, white)
            if state == gray:
                return path[path.index(parent) :] + [parent]
            if state == white:
                color[parent] = gray
                path.append(parent)
                stack.append(iter(parents.get(parent, ())))
    return None


def creates_cycle(
    parents: Mapping[str, Sequence[str]], child_role: str, parent_role: str
) -> bool:
    """Check whether adding child -> parent would close a cycle."""
    return child_role == parent_role or child_role in role_closure(parents, parent_role)
