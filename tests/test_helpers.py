"""Tests for the ASCII debug renderers."""

from flowgrid.navigation.coordinates import GridCoordinate
from flowgrid.navigation.grid import WalkabilityGrid
from flowgrid.navigation.helpers import (
    render_distance_ascii,
    render_flow_ascii,
    render_grid_ascii,
)
from flowgrid.schemas import FlowFieldSnapshot, GridConfig


def small_grid() -> WalkabilityGrid:
    # Spawn column x=0, goal column x=4
    return WalkabilityGrid(
        GridConfig(width=5, height=3, spawn_zone_width=1, goal_zone_width=1, goal_zone_height=3)
    )


def test_render_grid_ascii_top_row_first():
    grid = small_grid()
    grid.place_obstacle(GridCoordinate(2, 1))
    assert render_grid_ascii(grid) == "S...G\nS.#.G\nS...G"


def test_render_grid_ascii_symbol_overrides():
    grid = small_grid()
    grid.place_obstacle(GridCoordinate(2, 0))
    rendered = render_grid_ascii(grid, symbols={"obstacle": "X", "free": " ", "unused": "?"})
    assert rendered.splitlines()[-1] == "S X G"


def test_render_flow_ascii_arrows():
    grid = small_grid()
    assert render_flow_ascii(grid.get_flow_field().export()) == "→→→→G\n→→→→G\n→→→→G"

    grid.place_obstacle(GridCoordinate(2, 1))
    rows = render_flow_ascii(grid.get_flow_field().export()).splitlines()
    assert rows[1] == "↗↑#→G"


def test_render_flow_ascii_marks_unreachable_cells():
    snapshot = FlowFieldSnapshot(
        width=3,
        height=1,
        distances=[[None, None, 0]],
        directions=[[None, None, (0.7071, -0.7071)]],
        obstacles=[(1, 0)],
        goal_cells=[(2, 0)],
    )
    assert render_flow_ascii(snapshot) == "x#G"


def test_render_distance_ascii():
    grid = small_grid()
    snapshot = grid.get_flow_field().export()
    assert render_distance_ascii(snapshot, cell_width=2).splitlines()[0] == " 4 3 2 1 0"

    sealed = FlowFieldSnapshot(width=2, height=1, distances=[[None, 0]], directions=[[None, None]])
    assert render_distance_ascii(sealed) == " --  0"
