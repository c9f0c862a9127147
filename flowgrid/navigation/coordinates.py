"""Grid coordinate model.

Integer lattice addresses, zone classification and neighbour enumeration.
Everything here is a pure function of a coordinate and a ``GridConfig``; no
module-level state is kept so grids of any size can coexist in one process.

Conventions:
- ``GridCoordinate(x, y)`` is (column, row); row 0 is the bottom row
- Spawn zone = leftmost ``spawn_zone_width`` columns, every row
- Goal zone = rightmost ``goal_zone_width`` columns intersected with the bottom
  ``goal_zone_height`` rows (a corner pocket, not the whole right edge)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Tuple

from ..schemas import GridConfig


# Fixed scan orders. Everything that enumerates neighbours uses these tuples so
# that searches and field builds are reproducible cell for cell.
CARDINAL_OFFSETS: Tuple[Tuple[int, int], ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))  # E, W, N, S
DIAGONAL_OFFSETS: Tuple[Tuple[int, int], ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))  # NE, SE, NW, SW
ALL_OFFSETS: Tuple[Tuple[int, int], ...] = CARDINAL_OFFSETS + DIAGONAL_OFFSETS


@dataclass(frozen=True, order=True)
class GridCoordinate:
    """Immutable (column, row) address into the lattice."""

    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "GridCoordinate":
        return GridCoordinate(self.x + dx, self.y + dy)

    def manhattan(self, other: "GridCoordinate") -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Vector:
    """2D float vector used for movement directions."""

    dx: float
    dy: float

    def length(self) -> float:
        return math.hypot(self.dx, self.dy)

    def normalized(self) -> "Vector":
        """Return the unit vector; a zero vector becomes the default heading (1, 0)."""
        length = self.length()
        if length <= 0:
            return DEFAULT_HEADING
        return Vector(self.dx / length, self.dy / length)

    def __add__(self, other: "Vector") -> "Vector":
        return Vector(self.dx + other.dx, self.dy + other.dy)

    def __mul__(self, scalar: float) -> "Vector":
        return Vector(self.dx * scalar, self.dy * scalar)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.dx, self.dy)


DEFAULT_HEADING = Vector(1.0, 0.0)
# Direction reported for cells already inside the goal pocket (toward the
# bottom-right corner of the arena).
ARRIVAL_DIRECTION = Vector(1.0 / math.sqrt(2.0), -1.0 / math.sqrt(2.0))


def unit_offset(dx: int, dy: int) -> Vector:
    """Unit vector pointing along an integer neighbour offset."""
    return Vector(float(dx), float(dy)).normalized()


class ZoneKind(Enum):
    """Classification of a lattice cell."""

    SPAWN = "spawn"
    GOAL = "goal"
    INTERIOR = "interior"


class MovementMode(Enum):
    """Movement capability of an agent querying the engine."""

    GROUND = "ground"  # follows the flow field, blocked by obstacles
    FLIGHT = "flight"  # ignores obstacles, heads straight for the goal pocket


# ----------------------------------------------------------------------------
# Classification
# ----------------------------------------------------------------------------


def in_bounds(coord: GridCoordinate, width: int, height: int) -> bool:
    return 0 <= coord.x < width and 0 <= coord.y < height


def is_spawn(coord: GridCoordinate, config: GridConfig) -> bool:
    return in_bounds(coord, config.width, config.height) and coord.x < config.spawn_zone_width


def is_goal(coord: GridCoordinate, config: GridConfig) -> bool:
    return (
        in_bounds(coord, config.width, config.height)
        and coord.x >= config.width - config.goal_zone_width
        and coord.y < config.goal_zone_height
    )


def classify(coord: GridCoordinate, config: GridConfig) -> ZoneKind:
    """Return the zone a coordinate belongs to. Spawn wins if zones ever overlap."""
    if is_spawn(coord, config):
        return ZoneKind.SPAWN
    if is_goal(coord, config):
        return ZoneKind.GOAL
    return ZoneKind.INTERIOR


def spawn_cells(config: GridConfig) -> Tuple[GridCoordinate, ...]:
    return tuple(
        GridCoordinate(x, y)
        for y in range(config.height)
        for x in range(config.spawn_zone_width)
    )


def goal_cells(config: GridConfig) -> Tuple[GridCoordinate, ...]:
    return tuple(
        GridCoordinate(x, y)
        for y in range(config.goal_zone_height)
        for x in range(config.width - config.goal_zone_width, config.width)
    )


def distance_to_goal_zone(coord: GridCoordinate, config: GridConfig) -> int:
    """Manhattan distance from a coordinate to the goal rectangle (0 inside it)."""
    left = config.width - config.goal_zone_width
    top = config.goal_zone_height - 1
    dx = max(left - coord.x, 0, coord.x - (config.width - 1))
    dy = max(coord.y - top, 0, -coord.y)
    return dx + dy


# ----------------------------------------------------------------------------
# Neighbours
# ----------------------------------------------------------------------------


def neighbors4(coord: GridCoordinate, width: int, height: int) -> Iterator[GridCoordinate]:
    """In-bounds 4-connected neighbours in E, W, N, S order."""
    for dx, dy in CARDINAL_OFFSETS:
        nb = coord.offset(dx, dy)
        if in_bounds(nb, width, height):
            yield nb


def neighbors8(coord: GridCoordinate, width: int, height: int) -> Iterator[GridCoordinate]:
    """In-bounds 8-connected neighbours: cardinals first, then diagonals."""
    for dx, dy in ALL_OFFSETS:
        nb = coord.offset(dx, dy)
        if in_bounds(nb, width, height):
            yield nb


# ----------------------------------------------------------------------------
# World <-> grid
# ----------------------------------------------------------------------------


def world_to_cell(x: float, y: float, config: GridConfig) -> Tuple[GridCoordinate, float, float]:
    """Map a continuous world position to its enclosing cell and fractional offset.

    The offset is in [0, 1) per axis; positions exactly on a grid line get an
    offset of 0 and belong to the cell whose lower-left corner they touch.
    """
    cell_x = (x - config.origin_x) / config.cell_size
    cell_y = (y - config.origin_y) / config.cell_size
    base_x = math.floor(cell_x)
    base_y = math.floor(cell_y)
    return GridCoordinate(int(base_x), int(base_y)), cell_x - base_x, cell_y - base_y


def cell_center(coord: GridCoordinate, config: GridConfig) -> Tuple[float, float]:
    """World position of a cell's centre."""
    return (
        config.origin_x + (coord.x + 0.5) * config.cell_size,
        config.origin_y + (coord.y + 0.5) * config.cell_size,
    )


def goal_zone_center(config: GridConfig) -> Tuple[float, float]:
    """World position of the goal pocket's centre."""
    return (
        config.origin_x + (config.width - config.goal_zone_width / 2.0) * config.cell_size,
        config.origin_y + (config.goal_zone_height / 2.0) * config.cell_size,
    )


def heading_to_goal(x: float, y: float, config: GridConfig) -> Vector:
    """Straight-line unit vector from a world position toward the goal pocket.

    Non-finite positions get the default heading.
    """
    if not (math.isfinite(x) and math.isfinite(y)):
        return DEFAULT_HEADING
    gx, gy = goal_zone_center(config)
    return Vector(gx - x, gy - y).normalized()
