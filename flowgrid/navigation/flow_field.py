"""Flow field for many-to-one navigation.

Every ground agent heads for the same goal pocket, so instead of one search
per agent the grid builds a single field: the hop distance from each cell to
the nearest goal cell, and the unit direction that descends it. The field is
rebuilt wholesale whenever an obstacle is placed or removed and is immutable
afterwards, so any number of agents may read it in the same tick.

Direction tie-break rule: neighbours are scanned in the fixed order
E, W, N, S, NE, SE, NW, SW. A diagonal is only eligible when both cardinal
cells flanking it are walkable (no cutting through a blocked corner). The
neighbour with the strictly smallest distance wins; on equal distances the
earlier one in the scan order is kept, so cardinals beat diagonals.
"""

from __future__ import annotations

import math
from collections import deque
from typing import TYPE_CHECKING, Deque, FrozenSet, List, Optional, Tuple

from ..schemas import FlowFieldSnapshot
from . import coordinates
from .coordinates import (
    ALL_OFFSETS,
    ARRIVAL_DIRECTION,
    DEFAULT_HEADING,
    GridCoordinate,
    Vector,
    unit_offset,
)

if TYPE_CHECKING:  # pragma: no cover
    from .grid import WalkabilityGrid


# Distance reported for cells with no route to the goal (and for invalid cells).
UNREACHABLE = 1 << 30

# Below this total bilinear weight the blend is not trusted.
_MIN_BLEND_WEIGHT = 0.1
_MIN_BLEND_LENGTH = 0.01


class FlowField:
    """Distance and direction tables derived from one grid state.

    Build it through ``WalkabilityGrid.get_flow_field()``; constructing one by
    hand bypasses the grid's cache and lock.
    """

    def __init__(self, grid: "WalkabilityGrid"):
        self.config = grid.config
        self.width = grid.width
        self.height = grid.height
        self.obstacles: FrozenSet[GridCoordinate] = grid.obstacles
        self.spawn_positions = grid.spawn_positions
        self.goal_positions = grid.goal_positions

        self._distance: List[List[int]] = [[UNREACHABLE] * self.height for _ in range(self.width)]
        self._step: List[List[Optional[Tuple[int, int]]]] = [[None] * self.height for _ in range(self.width)]
        self._direction: List[List[Optional[Vector]]] = [[None] * self.height for _ in range(self.width)]

        self._calculate_distance_field(grid)
        self._calculate_direction_field(grid)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def _calculate_distance_field(self, grid: "WalkabilityGrid") -> None:
        queue: Deque[GridCoordinate] = deque()
        for goal in self.goal_positions:
            self._distance[goal.x][goal.y] = 0
            queue.append(goal)

        while queue:
            current = queue.popleft()
            next_distance = self._distance[current.x][current.y] + 1
            for neighbor in grid.neighbors(current):
                if not grid.is_traversable(neighbor):
                    continue
                if next_distance < self._distance[neighbor.x][neighbor.y]:
                    self._distance[neighbor.x][neighbor.y] = next_distance
                    queue.append(neighbor)

    def _calculate_direction_field(self, grid: "WalkabilityGrid") -> None:
        for x in range(self.width):
            for y in range(self.height):
                pos = GridCoordinate(x, y)
                if grid.is_goal(pos):
                    self._direction[x][y] = ARRIVAL_DIRECTION
                    continue

                current = self._distance[x][y]
                if current >= UNREACHABLE:
                    continue

                best: Optional[Tuple[int, int]] = None
                best_distance = current
                for dx, dy in ALL_OFFSETS:
                    nx, ny = x + dx, y + dy
                    if not (0 <= nx < self.width and 0 <= ny < self.height):
                        continue
                    if dx and dy:
                        if not (
                            grid.is_traversable(GridCoordinate(nx, y))
                            and grid.is_traversable(GridCoordinate(x, ny))
                        ):
                            continue
                    if self._distance[nx][ny] < best_distance:
                        best_distance = self._distance[nx][ny]
                        best = (dx, dy)

                # A reachable non-goal cell always has its BFS parent as a
                # strictly closer cardinal neighbour, so best is never None here.
                if best is not None:
                    self._step[x][y] = best
                    self._direction[x][y] = unit_offset(*best)

    # ------------------------------------------------------------------
    # Grid-resolution queries
    # ------------------------------------------------------------------

    def _in_bounds(self, coord: GridCoordinate) -> bool:
        return 0 <= coord.x < self.width and 0 <= coord.y < self.height

    def direction(self, coord: GridCoordinate) -> Optional[Vector]:
        """Unit movement vector for a cell; None when unreachable or out of bounds."""
        if not self._in_bounds(coord):
            return None
        return self._direction[coord.x][coord.y]

    def step(self, coord: GridCoordinate) -> Optional[GridCoordinate]:
        """The neighbour a cell's direction points at (None for goal/unreachable cells)."""
        if not self._in_bounds(coord):
            return None
        offset = self._step[coord.x][coord.y]
        if offset is None:
            return None
        return coord.offset(*offset)

    def distance(self, coord: GridCoordinate) -> int:
        """Hops to the nearest goal cell, ``UNREACHABLE`` when there is no route."""
        if not self._in_bounds(coord):
            return UNREACHABLE
        return self._distance[coord.x][coord.y]

    def is_reachable(self, coord: GridCoordinate) -> bool:
        return self.distance(coord) < UNREACHABLE

    def is_at_goal(self, coord: GridCoordinate) -> bool:
        return coordinates.is_goal(coord, self.config)

    # ------------------------------------------------------------------
    # Continuous queries
    # ------------------------------------------------------------------

    def interpolated_direction(self, x: float, y: float) -> Optional[Vector]:
        """Smoothed movement vector for a continuous world position.

        Bilinearly blends the directions of the enclosing cell and its +x, +y
        and +x+y neighbours by area overlap, skipping cells without a
        direction, and re-normalizes. An agent whose own cell has no direction
        (it was just walled in, or stands on an obstacle) gets an escape vector
        toward the closest reachable neighbour; None only if there is none.
        NaN or infinite coordinates get the default heading.
        """
        if not (math.isfinite(x) and math.isfinite(y)):
            return DEFAULT_HEADING

        cell, local_x, local_y = coordinates.world_to_cell(x, y, self.config)
        if not self._in_bounds(cell):
            return coordinates.heading_to_goal(x, y, self.config)

        home = self.direction(cell)
        if home is None:
            return self._escape_direction(cell)

        local_x = max(0.0, min(1.0, local_x))
        local_y = max(0.0, min(1.0, local_y))
        if local_x == 0.0 and local_y == 0.0:
            # All weight on the home cell.
            return home

        corners = (
            ((0, 0), (1 - local_x) * (1 - local_y)),
            ((1, 0), local_x * (1 - local_y)),
            ((0, 1), (1 - local_x) * local_y),
            ((1, 1), local_x * local_y),
        )
        total_dx = 0.0
        total_dy = 0.0
        total_weight = 0.0
        for (ox, oy), weight in corners:
            corner_dir = self.direction(cell.offset(ox, oy))
            if corner_dir is None:
                continue
            total_dx += corner_dir.dx * weight
            total_dy += corner_dir.dy * weight
            total_weight += weight

        if total_weight <= _MIN_BLEND_WEIGHT:
            return home

        blended = Vector(total_dx / total_weight, total_dy / total_weight)
        if blended.length() < _MIN_BLEND_LENGTH:
            return home
        return blended.normalized()

    def _escape_direction(self, cell: GridCoordinate) -> Optional[Vector]:
        best: Optional[Tuple[int, int]] = None
        best_distance = UNREACHABLE
        for dx, dy in ALL_OFFSETS:
            neighbor_distance = self.distance(cell.offset(dx, dy))
            if neighbor_distance < best_distance:
                best_distance = neighbor_distance
                best = (dx, dy)
        if best is None:
            return None
        return unit_offset(*best)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export(self) -> FlowFieldSnapshot:
        """Row-major, JSON-friendly copy of both tables for debug renderers."""
        distances: List[List[Optional[int]]] = []
        directions: List[List[Optional[Tuple[float, float]]]] = []
        for y in range(self.height):
            distance_row: List[Optional[int]] = []
            direction_row: List[Optional[Tuple[float, float]]] = []
            for x in range(self.width):
                d = self._distance[x][y]
                distance_row.append(d if d < UNREACHABLE else None)
                vec = self._direction[x][y]
                direction_row.append(vec.as_tuple() if vec is not None else None)
            distances.append(distance_row)
            directions.append(direction_row)

        return FlowFieldSnapshot(
            width=self.width,
            height=self.height,
            distances=distances,
            directions=directions,
            obstacles=sorted(c.as_tuple() for c in self.obstacles),
            spawn_cells=[c.as_tuple() for c in self.spawn_positions],
            goal_cells=[c.as_tuple() for c in self.goal_positions],
        )
