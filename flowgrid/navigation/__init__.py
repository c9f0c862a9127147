"""Navigation core: walkability grid, flow field, search and placement gate."""

from .coordinates import (
    ARRIVAL_DIRECTION,
    DEFAULT_HEADING,
    GridCoordinate,
    MovementMode,
    Vector,
    ZoneKind,
    classify,
    neighbors4,
    neighbors8,
    world_to_cell,
)
from .grid import WalkabilityGrid
from .connectivity import all_spawns_reach_goal, reachable_spawns, spawn_reaches_goal
from .flow_field import UNREACHABLE, FlowField
from .search import SearchNode, find_path, find_path_to_goal, path_exists, path_length
from .placement import PlacementResult, PlacementValidator
from .helpers import render_distance_ascii, render_flow_ascii, render_grid_ascii

__all__ = [
    "ARRIVAL_DIRECTION",
    "DEFAULT_HEADING",
    "GridCoordinate",
    "MovementMode",
    "Vector",
    "ZoneKind",
    "classify",
    "neighbors4",
    "neighbors8",
    "world_to_cell",
    "WalkabilityGrid",
    "all_spawns_reach_goal",
    "reachable_spawns",
    "spawn_reaches_goal",
    "UNREACHABLE",
    "FlowField",
    "SearchNode",
    "find_path",
    "find_path_to_goal",
    "path_exists",
    "path_length",
    "PlacementResult",
    "PlacementValidator",
    "render_distance_ascii",
    "render_flow_ascii",
    "render_grid_ascii",
]
