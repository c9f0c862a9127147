"""Walkability grid.

Owns the occupancy table for one level, the fixed spawn/goal cell lists and
the cached flow field. Ground agents must route around occupied cells; the
goal pocket and spawn strip can never be occupied.
"""

from __future__ import annotations

import threading
from typing import FrozenSet, Iterator, List, Optional, Set, Tuple

from ..schemas import GridConfig
from . import coordinates
from .connectivity import all_spawns_reach_goal
from .coordinates import GridCoordinate, ZoneKind
from .flow_field import FlowField


class WalkabilityGrid:
    """2D occupancy grid with a lazily rebuilt flow field.

    Two representations of occupancy are kept in lockstep: the dense
    ``_walkable[x][y]`` table (fast traversal) and the ``_obstacles`` set
    (fast existence checks and enumeration). A cell is occupied iff it is in the
    set iff its table entry is False.

    Every mutation, every speculative ``test_placement`` and every flow-field
    rebuild runs under ``_lock`` so that no caller can observe a half-applied
    change. A built FlowField is immutable and may be read without the lock.
    """

    def __init__(self, config: Optional[GridConfig] = None):
        self.config = config or GridConfig()
        self.width = self.config.width
        self.height = self.config.height

        self._walkable: List[List[bool]] = [[True] * self.height for _ in range(self.width)]
        self._obstacles: Set[GridCoordinate] = set()

        self.spawn_positions: Tuple[GridCoordinate, ...] = coordinates.spawn_cells(self.config)
        self.goal_positions: Tuple[GridCoordinate, ...] = coordinates.goal_cells(self.config)

        self._lock = threading.RLock()
        self._cached_flow_field: Optional[FlowField] = None
        self._flow_field_dirty = True
        # Incremented on every rebuild; lets callers verify cache reuse.
        self.flow_field_builds = 0

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_valid_position(self, coord: GridCoordinate) -> bool:
        return 0 <= coord.x < self.width and 0 <= coord.y < self.height

    def is_walkable(self, coord: GridCoordinate) -> bool:
        if not self.is_valid_position(coord):
            return False
        return self._walkable[coord.x][coord.y]

    def is_traversable(self, coord: GridCoordinate) -> bool:
        """Walkable, or part of the goal pocket (always enterable)."""
        return self.is_walkable(coord) or self.is_goal(coord)

    def has_obstacle_at(self, coord: GridCoordinate) -> bool:
        return coord in self._obstacles

    def zone_of(self, coord: GridCoordinate) -> ZoneKind:
        return coordinates.classify(coord, self.config)

    def is_spawn(self, coord: GridCoordinate) -> bool:
        return coordinates.is_spawn(coord, self.config)

    def is_goal(self, coord: GridCoordinate) -> bool:
        return coordinates.is_goal(coord, self.config)

    def neighbors(self, coord: GridCoordinate) -> Iterator[GridCoordinate]:
        """In-bounds 4-connected neighbours (E, W, N, S)."""
        return coordinates.neighbors4(coord, self.width, self.height)

    def diagonal_neighbors(self, coord: GridCoordinate) -> Iterator[GridCoordinate]:
        """In-bounds 8-connected neighbours (cardinals first)."""
        return coordinates.neighbors8(coord, self.width, self.height)

    @property
    def obstacles(self) -> FrozenSet[GridCoordinate]:
        return frozenset(self._obstacles)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def place_obstacle(self, coord: GridCoordinate) -> bool:
        """Mark a cell occupied. Does NOT check connectivity.

        Returns False (and changes nothing) when the coordinate is out of
        bounds, already occupied, or inside the spawn strip / goal pocket.
        Untrusted callers should go through ``NavigationEngine`` instead.
        """
        with self._lock:
            if not self.is_valid_position(coord) or coord in self._obstacles:
                return False
            if self.zone_of(coord) is not ZoneKind.INTERIOR:
                return False
            self._walkable[coord.x][coord.y] = False
            self._obstacles.add(coord)
            self.invalidate_flow_field()
            return True

    def remove_obstacle(self, coord: GridCoordinate) -> bool:
        """Clear an occupied cell. Returns False when nothing was there."""
        with self._lock:
            if coord not in self._obstacles:
                return False
            self._walkable[coord.x][coord.y] = True
            self._obstacles.discard(coord)
            self.invalidate_flow_field()
            return True

    def clear_obstacles(self) -> int:
        """Remove every obstacle (level reset). Returns how many were removed."""
        with self._lock:
            removed = len(self._obstacles)
            for coord in self._obstacles:
                self._walkable[coord.x][coord.y] = True
            self._obstacles.clear()
            if removed:
                self.invalidate_flow_field()
            return removed

    def test_placement(self, coord: GridCoordinate) -> bool:
        """Return True if occupying ``coord`` would keep some spawn-to-goal path.

        The cell is occupied temporarily (both representations), the
        connectivity check runs, and the previous occupancy is restored before
        the lock is released. The cached flow field stays valid because the
        observable state is unchanged afterwards.
        """
        if not self.is_valid_position(coord):
            return False
        if self.zone_of(coord) is not ZoneKind.INTERIOR:
            return False

        with self._lock:
            was_occupied = coord in self._obstacles
            self._walkable[coord.x][coord.y] = False
            self._obstacles.add(coord)
            try:
                return all_spawns_reach_goal(self)
            finally:
                if not was_occupied:
                    self._walkable[coord.x][coord.y] = True
                    self._obstacles.discard(coord)

    # ------------------------------------------------------------------
    # Flow field cache
    # ------------------------------------------------------------------

    def get_flow_field(self) -> FlowField:
        """Return the cached flow field, rebuilding it if the grid changed."""
        with self._lock:
            if self._flow_field_dirty or self._cached_flow_field is None:
                field = FlowField(self)
                # Swap in only after both build phases have completed.
                self._cached_flow_field = field
                self._flow_field_dirty = False
                self.flow_field_builds += 1
            return self._cached_flow_field

    def invalidate_flow_field(self) -> None:
        with self._lock:
            self._flow_field_dirty = True

    @property
    def flow_field_dirty(self) -> bool:
        return self._flow_field_dirty

    @property
    def lock(self) -> "threading.RLock":
        """Re-entrant lock guarding mutations; hold it to make check-then-act atomic."""
        return self._lock
