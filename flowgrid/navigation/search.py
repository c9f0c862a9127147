"""Point-to-point search on the walkability grid.

Used for diagnostics and validation; agents themselves follow the flow field.
Movement is 4-connected with unit step cost, so Manhattan distance is an
admissible heuristic and A* returns shortest paths.
"""

from __future__ import annotations

import heapq
import itertools
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Deque, Dict, List, Optional, Set, Tuple

from . import coordinates
from .coordinates import GridCoordinate

if TYPE_CHECKING:  # pragma: no cover
    from .grid import WalkabilityGrid


@dataclass(frozen=True)
class SearchNode:
    """One entry of the A* open set; lives for a single search call."""

    coordinate: GridCoordinate
    g_cost: int  # cost from start
    h_cost: int  # heuristic cost to target
    parent: Optional[GridCoordinate] = None

    @property
    def f_cost(self) -> int:
        return self.g_cost + self.h_cost


def _reconstruct(nodes: Dict[GridCoordinate, SearchNode], end: GridCoordinate) -> List[GridCoordinate]:
    path: List[GridCoordinate] = []
    current: Optional[GridCoordinate] = end
    while current is not None:
        path.append(current)
        current = nodes[current].parent
    path.reverse()
    return path


def _astar(
    grid: "WalkabilityGrid",
    start: GridCoordinate,
    heuristic: Callable[[GridCoordinate], int],
    is_target: Callable[[GridCoordinate], bool],
) -> Optional[List[GridCoordinate]]:
    # Heap entries: (f, h, coordinate, seq, node). Lower f first, then the lower
    # heuristic remainder, then the smaller coordinate; seq keeps entries with
    # identical keys from ever comparing SearchNode objects.
    counter = itertools.count()
    start_node = SearchNode(start, 0, heuristic(start))
    open_heap: List[Tuple[int, int, GridCoordinate, int, SearchNode]] = [
        (start_node.f_cost, start_node.h_cost, start, next(counter), start_node)
    ]
    nodes: Dict[GridCoordinate, SearchNode] = {start: start_node}
    closed: Set[GridCoordinate] = set()

    while open_heap:
        _, _, current, _, node = heapq.heappop(open_heap)
        if current in closed or nodes[current] is not node:
            continue  # stale entry superseded by a cheaper one

        if is_target(current):
            return _reconstruct(nodes, current)
        closed.add(current)

        for neighbor in grid.neighbors(current):
            if neighbor in closed or not grid.is_traversable(neighbor):
                continue
            tentative = node.g_cost + 1
            existing = nodes.get(neighbor)
            if existing is not None and tentative >= existing.g_cost:
                continue
            h_cost = existing.h_cost if existing is not None else heuristic(neighbor)
            new_node = SearchNode(neighbor, tentative, h_cost, current)
            nodes[neighbor] = new_node
            heapq.heappush(open_heap, (new_node.f_cost, h_cost, neighbor, next(counter), new_node))

    return None


def find_path(
    grid: "WalkabilityGrid",
    start: GridCoordinate,
    end: GridCoordinate,
    allow_nearby_goal: bool = False,
) -> Optional[List[GridCoordinate]]:
    """Return the shortest start-to-end path, or None when no path exists.

    With ``allow_nearby_goal`` the search also succeeds on reaching any goal
    cell, which answers "path to the exit region" without naming a single
    canonical exit. ``find_path(grid, a, a)`` returns ``[a]``: found, zero steps.
    """
    if not (grid.is_valid_position(start) and grid.is_valid_position(end)):
        return None

    def is_target(coord: GridCoordinate) -> bool:
        return coord == end or (allow_nearby_goal and grid.is_goal(coord))

    return _astar(grid, start, end.manhattan, is_target)


def find_path_to_goal(grid: "WalkabilityGrid", start: GridCoordinate) -> Optional[List[GridCoordinate]]:
    """Shortest path from ``start`` into the goal pocket.

    The heuristic is the Manhattan distance to the goal rectangle, which stays
    admissible for "any goal cell" targets, so the path length equals the flow
    field distance of ``start``.
    """
    if not grid.is_valid_position(start):
        return None
    config = grid.config
    return _astar(
        grid,
        start,
        lambda coord: coordinates.distance_to_goal_zone(coord, config),
        grid.is_goal,
    )


def path_exists(grid: "WalkabilityGrid", start: GridCoordinate, end: GridCoordinate) -> bool:
    """Reachability only, via plain BFS (no heuristic, no path bookkeeping).

    Any goal cell counts as reaching ``end`` when ``end`` itself is a goal cell.
    """
    if not (grid.is_valid_position(start) and grid.is_valid_position(end)):
        return False

    end_is_goal = grid.is_goal(end)
    visited: Set[GridCoordinate] = {start}
    queue: Deque[GridCoordinate] = deque([start])

    while queue:
        current = queue.popleft()
        if current == end or (end_is_goal and grid.is_goal(current)):
            return True
        for neighbor in grid.neighbors(current):
            if neighbor not in visited and grid.is_traversable(neighbor):
                visited.add(neighbor)
                queue.append(neighbor)
    return False


def path_length(path: List[GridCoordinate]) -> int:
    """Number of steps in a path (a single-cell path has length 0)."""
    return max(len(path) - 1, 0)
