"""ASCII debug views of a grid and its flow field.

Read-only consumers: nothing here feeds back into the grid. Handy in tests,
REPL sessions and the demo script when an arrow map explains a routing bug
faster than a table dump.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Optional

from ..schemas import FlowFieldSnapshot
from .coordinates import GridCoordinate, ZoneKind

if TYPE_CHECKING:  # pragma: no cover
    from .grid import WalkabilityGrid


_DEFAULT_CELL_SYMBOLS: Dict[str, str] = {
    "spawn": "S",
    "goal": "G",
    "obstacle": "#",
    "free": ".",
}

# Arrow per unit step; diagonals included.
_ARROWS: Dict[tuple, str] = {
    (1, 0): "→",
    (-1, 0): "←",
    (0, 1): "↑",
    (0, -1): "↓",
    (1, 1): "↗",
    (1, -1): "↘",
    (-1, 1): "↖",
    (-1, -1): "↙",
}


def render_grid_ascii(grid: "WalkabilityGrid", *, symbols: Optional[Dict[str, str]] = None) -> str:
    """Render the occupancy map, top row first.

    Unknown keys in ``symbols`` are ignored; missing ones fall back to
    S (spawn), G (goal), # (obstacle) and . (free).
    """

    mapping = {**_DEFAULT_CELL_SYMBOLS}
    if symbols:
        mapping.update(symbols)

    lines: List[str] = []
    for y in range(grid.height - 1, -1, -1):
        row_chars: List[str] = []
        for x in range(grid.width):
            pos = GridCoordinate(x, y)
            zone = grid.zone_of(pos)
            if zone is ZoneKind.SPAWN:
                row_chars.append(mapping["spawn"])
            elif zone is ZoneKind.GOAL:
                row_chars.append(mapping["goal"])
            elif grid.has_obstacle_at(pos):
                row_chars.append(mapping["obstacle"])
            else:
                row_chars.append(mapping["free"])
        lines.append("".join(row_chars))

    return "\n".join(lines)


def _arrow_for(direction) -> str:
    dx, dy = direction
    key = (round(dx) if abs(dx) > 0.38 else 0, round(dy) if abs(dy) > 0.38 else 0)
    return _ARROWS.get(key, "?")


def render_flow_ascii(snapshot: FlowFieldSnapshot) -> str:
    """Render a flow-field snapshot as arrows, top row first.

    Obstacles are ``#``, goal cells ``G`` and unreachable free cells ``x``.
    """

    obstacles = {tuple(c) for c in snapshot.obstacles}
    goals = {tuple(c) for c in snapshot.goal_cells}

    lines: List[str] = []
    for y in range(snapshot.height - 1, -1, -1):
        row_chars: List[str] = []
        for x in range(snapshot.width):
            if (x, y) in goals:
                row_chars.append("G")
            elif (x, y) in obstacles:
                row_chars.append("#")
            else:
                direction = snapshot.directions[y][x]
                row_chars.append("x" if direction is None else _arrow_for(direction))
        lines.append("".join(row_chars))

    return "\n".join(lines)


def render_distance_ascii(snapshot: FlowFieldSnapshot, *, cell_width: int = 3) -> str:
    """Render the distance table right-aligned, ``--`` for unreachable cells."""

    lines: List[str] = []
    for y in range(snapshot.height - 1, -1, -1):
        cells = []
        for x in range(snapshot.width):
            d = snapshot.distances[y][x]
            cells.append(("--" if d is None else str(d)).rjust(cell_width))
        lines.append("".join(cells))
    return "\n".join(lines)
