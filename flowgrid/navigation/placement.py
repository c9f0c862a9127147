"""Obstacle placement validation.

Answers "may an obstacle go here?" with a reason attached, so a build UI can
explain a refusal. The final check is the connectivity gate: a placement that
would cut every spawn-to-goal route is never allowed.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from .coordinates import GridCoordinate, ZoneKind

if TYPE_CHECKING:  # pragma: no cover
    from .grid import WalkabilityGrid


REASON_OUTSIDE = "Outside play area"
REASON_SPAWN_ZONE = "Cannot place in spawn zone"
REASON_GOAL_ZONE = "Cannot place in goal zone"
REASON_OCCUPIED = "Cell already occupied"
REASON_BLOCKS_PATH = "Would block all paths"


def _clamp_cell(value: float, size: int) -> int:
    # Clamp before flooring: math.floor raises on infinities.
    if math.isnan(value):
        return 0
    return int(math.floor(max(0.0, min(size - 1.0, value))))


@dataclass(frozen=True)
class PlacementResult:
    """Outcome of a placement check."""

    is_valid: bool
    coordinate: GridCoordinate
    reason: Optional[str] = None

    @classmethod
    def valid(cls, coordinate: GridCoordinate) -> "PlacementResult":
        return cls(True, coordinate, None)

    @classmethod
    def invalid(cls, coordinate: GridCoordinate, reason: str) -> "PlacementResult":
        return cls(False, coordinate, reason)


class PlacementValidator:
    """Runs the ordered placement checks against one grid."""

    def __init__(self, grid: "WalkabilityGrid"):
        self.grid = grid

    def validate(self, coord: GridCoordinate) -> PlacementResult:
        """Check bounds, zones, occupancy, then connectivity (the expensive one last)."""
        grid = self.grid
        if not grid.is_valid_position(coord):
            return PlacementResult.invalid(coord, REASON_OUTSIDE)

        zone = grid.zone_of(coord)
        if zone is ZoneKind.SPAWN:
            return PlacementResult.invalid(coord, REASON_SPAWN_ZONE)
        if zone is ZoneKind.GOAL:
            return PlacementResult.invalid(coord, REASON_GOAL_ZONE)

        if grid.has_obstacle_at(coord):
            return PlacementResult.invalid(coord, REASON_OCCUPIED)

        if not grid.test_placement(coord):
            return PlacementResult.invalid(coord, REASON_BLOCKS_PATH)

        return PlacementResult.valid(coord)

    def valid_positions(self) -> List[GridCoordinate]:
        """Every interior cell that would currently accept an obstacle (UI highlighting)."""
        grid = self.grid
        positions: List[GridCoordinate] = []
        for x in range(grid.width):
            for y in range(grid.height):
                pos = GridCoordinate(x, y)
                if grid.zone_of(pos) is ZoneKind.INTERIOR and self.validate(pos).is_valid:
                    positions.append(pos)
        return positions

    def snap_to_grid(self, x: float, y: float) -> GridCoordinate:
        """Nearest in-bounds cell for a world position (clamped at the edges).

        Infinite coordinates clamp to the matching edge; NaN snaps to 0.
        """
        config = self.grid.config
        grid_x = _clamp_cell((x - config.origin_x) / config.cell_size, self.grid.width)
        grid_y = _clamp_cell((y - config.origin_y) / config.cell_size, self.grid.height)
        return GridCoordinate(grid_x, grid_y)

    def is_in_play_area(self, x: float, y: float) -> bool:
        """True if a world position lies on the grid (edges inclusive)."""
        config = self.grid.config
        max_x = config.origin_x + self.grid.width * config.cell_size
        max_y = config.origin_y + self.grid.height * config.cell_size
        return config.origin_x <= x <= max_x and config.origin_y <= y <= max_y
