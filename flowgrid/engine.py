"""
NavigationEngine: the surface the simulation loop talks to.

The engine wraps one WalkabilityGrid per level and exposes exactly what the
outside world needs each tick:

1. Validated obstacle placement/removal (the only untrusted mutation path)
2. Per-agent movement queries against the cached flow field
3. Diagnostics: reachability, explicit paths, and a read-only field export

Tick model: at most one mutation per tick, followed by any number of read-only
queries. A mutation only marks the field dirty; the first query afterwards
pays for the rebuild and every later query in the tick reuses it.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from .config import Config
from .logging_utils import log_deterministic, log_error, log_info, log_success
from .navigation import search
from .navigation.coordinates import GridCoordinate, MovementMode, Vector, heading_to_goal
from .navigation.flow_field import FlowField
from .navigation.grid import WalkabilityGrid
from .navigation.placement import PlacementResult, PlacementValidator
from .schemas import FlowFieldSnapshot, GridConfig, LevelLayout


class NavigationEngine:
    """Validated mutation and per-agent query facade over a WalkabilityGrid."""

    def __init__(self, config: Optional[GridConfig] = None, *, verbose: Optional[bool] = None):
        """Create an engine for one level.

        Args:
            config: Grid geometry. Defaults to the environment-driven
                ``Config.grid_config()``.
            verbose: Log rebuilds and placement decisions. Defaults to
                ``Config.VERBOSE`` (``FLOWGRID_VERBOSE``).
        """
        self._grid = WalkabilityGrid(config or Config.grid_config())
        self._validator = PlacementValidator(self._grid)
        self.verbose = Config.VERBOSE if verbose is None else verbose
        # Obstacles from a level layout that failed validation when loaded.
        self.rejected_obstacles: List[Tuple[GridCoordinate, str]] = []

    @classmethod
    def from_layout(cls, layout: LevelLayout, *, verbose: Optional[bool] = None) -> "NavigationEngine":
        """Build an engine for a level and place its obstacles through the validated path.

        Obstacles that would be rejected at runtime are skipped and recorded in
        ``rejected_obstacles`` so a broken layout is visible instead of silently
        sealing the goal off.
        """
        engine = cls(layout.grid, verbose=verbose)
        if engine.verbose:
            log_info(f"[Level] Loading '{layout.name}' with {len(layout.obstacles)} obstacles")
        for x, y in layout.obstacles:
            coord = GridCoordinate(x, y)
            result = engine.validate_placement(coord)
            if result.is_valid:
                engine._grid.place_obstacle(coord)
            else:
                engine.rejected_obstacles.append((coord, result.reason or ""))
        return engine

    @property
    def grid(self) -> WalkabilityGrid:
        """Underlying grid, for trusted internal callers only."""
        return self._grid

    @property
    def config(self) -> GridConfig:
        return self._grid.config

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def validate_placement(self, coord: GridCoordinate) -> PlacementResult:
        """Run every placement check without changing the grid."""
        return self._validator.validate(coord)

    def request_obstacle_placement(self, coord: GridCoordinate) -> bool:
        """Place an obstacle if, and only if, some spawn-to-goal route survives.

        On rejection the grid is left exactly as it was.
        """
        # Hold the grid lock across check and placement so no other mutation
        # can slip in between them.
        with self._grid.lock:
            result = self._validator.validate(coord)
            if not result.is_valid:
                if self.verbose:
                    log_error(f"[Placement] Rejected ({coord.x}, {coord.y}): {result.reason}")
                return False
            placed = self._grid.place_obstacle(coord)

        if self.verbose and placed:
            log_success(f"[Placement] Obstacle placed at ({coord.x}, {coord.y})")
        return placed

    def request_obstacle_removal(self, coord: GridCoordinate) -> bool:
        """Remove an obstacle; succeeds iff the cell is currently occupied."""
        removed = self._grid.remove_obstacle(coord)
        if self.verbose and removed:
            log_success(f"[Placement] Obstacle removed at ({coord.x}, {coord.y})")
        return removed

    def valid_placements(self) -> List[GridCoordinate]:
        """Cells that would currently accept an obstacle."""
        return self._validator.valid_positions()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def flow_field(self) -> FlowField:
        """Current flow field, rebuilt on first access after a mutation."""
        rebuilding = self.verbose and self._grid.flow_field_dirty
        field = self._grid.get_flow_field()
        if rebuilding:
            log_deterministic(
                f"[Flow Field] Rebuilt {self._grid.width}x{self._grid.height} field "
                f"(build #{self._grid.flow_field_builds}, {len(field.obstacles)} obstacles)"
            )
        return field

    def query_direction(
        self,
        position: Tuple[float, float],
        mode: MovementMode = MovementMode.GROUND,
    ) -> Optional[Vector]:
        """Movement vector for an agent at a continuous world position.

        Ground agents follow the interpolated flow field; flying agents ignore
        obstacles and head straight for the goal pocket.
        """
        x, y = position
        if mode is MovementMode.FLIGHT:
            return heading_to_goal(x, y, self.config)
        return self.flow_field().interpolated_direction(x, y)

    def query_grid_direction(self, coord: GridCoordinate) -> Optional[Vector]:
        return self.flow_field().direction(coord)

    def query_distance(self, coord: GridCoordinate) -> int:
        return self.flow_field().distance(coord)

    def query_reachable(self, coord: GridCoordinate) -> bool:
        return self.flow_field().is_reachable(coord)

    def query_path(
        self,
        start: GridCoordinate,
        end: Optional[GridCoordinate] = None,
    ) -> Optional[List[GridCoordinate]]:
        """Explicit shortest path for diagnostics (into the goal pocket when ``end`` is omitted)."""
        if end is None:
            return search.find_path_to_goal(self._grid, start)
        return search.find_path(self._grid, start, end)

    def export_debug(self) -> FlowFieldSnapshot:
        """Read-only dump of the distance and direction tables."""
        return self.flow_field().export()
