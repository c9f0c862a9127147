"""
Pydantic schemas for the flowgrid navigation engine.

The navigation core works on plain dataclasses and lists for speed; the models
here are the validated, serializable edges of the system:

- GridConfig: level geometry handed to the grid constructor (no global constants)
- LevelLayout: a whole level as loaded from JSON (geometry + pre-placed obstacles)
- FlowFieldSnapshot: read-only debug export of a built flow field

Design Philosophy:
- Geometry is validated once, at construction, so the core never has to re-check it
- Snapshots are JSON-compatible (None instead of sentinels, lists instead of tuples)
- Metadata fields allow level-specific extensions without schema changes
"""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ============================================================================
# Geometry
# ============================================================================


class GridConfig(BaseModel):
    """Fixed geometry of one navigation grid.

    Defaults mirror the shipped tower-defense arena: a 26x14 lattice with a
    two-column spawn strip on the left and a 2x4 goal pocket in the bottom-right
    corner. ``cell_size`` and the origin map continuous world positions onto
    cells; with the defaults, world units and cell units coincide.
    """

    model_config = ConfigDict(frozen=True)

    width: int = Field(26, gt=0, description="Number of columns")
    height: int = Field(14, gt=0, description="Number of rows (row 0 is the bottom)")
    spawn_zone_width: int = Field(2, gt=0, description="Leftmost columns where agents enter")
    goal_zone_width: int = Field(2, gt=0, description="Rightmost columns of the goal pocket")
    goal_zone_height: int = Field(4, gt=0, description="Bottom rows of the goal pocket")
    cell_size: float = Field(1.0, gt=0, description="World units per cell edge")
    origin_x: float = Field(0.0, description="World x of the grid's lower-left corner")
    origin_y: float = Field(0.0, description="World y of the grid's lower-left corner")

    @model_validator(mode="after")
    def _check_zones_fit(self) -> "GridConfig":
        # Spawn strip and goal pocket must both fit and must not share columns,
        # otherwise a cell could be both an entry and an exit.
        if self.spawn_zone_width + self.goal_zone_width > self.width:
            raise ValueError(
                f"spawn_zone_width ({self.spawn_zone_width}) + goal_zone_width "
                f"({self.goal_zone_width}) exceeds grid width ({self.width})"
            )
        if self.goal_zone_height > self.height:
            raise ValueError(
                f"goal_zone_height ({self.goal_zone_height}) exceeds grid height ({self.height})"
            )
        return self


class LevelLayout(BaseModel):
    """A level definition: geometry plus the obstacles present at level start."""

    name: str = Field(..., description="Level identifier")
    description: str = Field("", description="Human-friendly summary")
    grid: GridConfig = Field(default_factory=GridConfig, description="Grid geometry")
    # Obstacles go through the validated placement path when the engine is built,
    # so a layout that would seal the goal off is reported rather than applied.
    obstacles: List[Tuple[int, int]] = Field(
        default_factory=list,
        description="(x, y) cells blocked at level start",
    )
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Level-defined metadata")


# ============================================================================
# Debug export
# ============================================================================


class FlowFieldSnapshot(BaseModel):
    """Read-only dump of a flow field for external renderers.

    Tables are row-major (``distances[y][x]``). Unreachable cells are ``None``
    in both tables so the snapshot serializes cleanly to JSON.
    """

    width: int
    height: int
    distances: List[List[Optional[int]]] = Field(
        default_factory=list,
        description="Hops to the nearest goal cell, None when unreachable",
    )
    directions: List[List[Optional[Tuple[float, float]]]] = Field(
        default_factory=list,
        description="Unit (dx, dy) movement vectors, None when unreachable",
    )
    obstacles: List[Tuple[int, int]] = Field(default_factory=list, description="Occupied (x, y) cells")
    spawn_cells: List[Tuple[int, int]] = Field(default_factory=list)
    goal_cells: List[Tuple[int, int]] = Field(default_factory=list)

    def distance_at(self, x: int, y: int) -> Optional[int]:
        """Return the exported distance for a cell, None when out of range or unreachable."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            return None
        return self.distances[y][x]
