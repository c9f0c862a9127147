"""
flowgrid - obstacle-aware flow-field navigation for grid simulations.

Many agents, one goal pocket, and a mutable set of obstacles placed and
removed by an external actor. The engine keeps a walkability grid, a lazily
rebuilt flow field, an A* search for diagnostics, and a connectivity gate that
refuses any obstacle which would cut every spawn-to-goal route.

No global state: every grid is built from an explicit GridConfig.
"""

__version__ = "0.1.0"

# Main facade
from .engine import NavigationEngine

# Navigation core
from .navigation import (
    UNREACHABLE,
    FlowField,
    GridCoordinate,
    MovementMode,
    PlacementResult,
    PlacementValidator,
    SearchNode,
    Vector,
    WalkabilityGrid,
    ZoneKind,
    all_spawns_reach_goal,
    find_path,
    find_path_to_goal,
    path_exists,
    render_flow_ascii,
    render_grid_ascii,
)

# Schemas
from .schemas import FlowFieldSnapshot, GridConfig, LevelLayout

# Level helpers
from .level import LevelLoader, load_level

__all__ = [
    # Main class
    "NavigationEngine",
    # Core
    "UNREACHABLE",
    "FlowField",
    "GridCoordinate",
    "MovementMode",
    "PlacementResult",
    "PlacementValidator",
    "SearchNode",
    "Vector",
    "WalkabilityGrid",
    "ZoneKind",
    "all_spawns_reach_goal",
    "find_path",
    "find_path_to_goal",
    "path_exists",
    "render_flow_ascii",
    "render_grid_ascii",
    # Schemas
    "FlowFieldSnapshot",
    "GridConfig",
    "LevelLayout",
    # Level helpers
    "LevelLoader",
    "load_level",
]
