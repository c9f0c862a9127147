"""Spawn-to-goal connectivity checks.

The placement gate only needs to know that *some* route from the spawn strip
into the goal pocket survives, so the main check is a single breadth-first
search seeded from every goal cell at once. The graph is undirected on
traversable cells, so searching goal -> spawn answers the spawn -> goal
question.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Deque, FrozenSet, Set

from .coordinates import GridCoordinate

if TYPE_CHECKING:  # pragma: no cover
    from .grid import WalkabilityGrid


def _reverse_bfs(grid: "WalkabilityGrid", stop_at_first_spawn: bool) -> Set[GridCoordinate]:
    """Collect spawn cells reachable from the goal pocket.

    With ``stop_at_first_spawn`` the search returns as soon as one spawn cell is
    dequeued (that is all the placement gate needs).
    """
    visited: Set[GridCoordinate] = set(grid.goal_positions)
    queue: Deque[GridCoordinate] = deque(grid.goal_positions)
    found: Set[GridCoordinate] = set()

    while queue:
        current = queue.popleft()
        if grid.is_spawn(current):
            found.add(current)
            if stop_at_first_spawn:
                return found
        for neighbor in grid.neighbors(current):
            if neighbor in visited or not grid.is_traversable(neighbor):
                continue
            visited.add(neighbor)
            queue.append(neighbor)
    return found


def all_spawns_reach_goal(grid: "WalkabilityGrid") -> bool:
    """Return True if at least one spawn cell is connected to the goal pocket.

    Bounded by width x height expansions. Does not require every spawn cell to
    be connected individually; use ``reachable_spawns`` for that.
    """
    return bool(_reverse_bfs(grid, stop_at_first_spawn=True))


def reachable_spawns(grid: "WalkabilityGrid") -> FrozenSet[GridCoordinate]:
    """Every spawn cell that still has a route into the goal pocket."""
    return frozenset(_reverse_bfs(grid, stop_at_first_spawn=False))


def spawn_reaches_goal(grid: "WalkabilityGrid", spawn: GridCoordinate) -> bool:
    """Per-spawn variant for callers that need a specific entry point connected."""
    if not grid.is_spawn(spawn):
        return False
    return spawn in reachable_spawns(grid)
