"""Tests for the spawn-to-goal connectivity validator."""

from flowgrid.navigation.connectivity import (
    all_spawns_reach_goal,
    reachable_spawns,
    spawn_reaches_goal,
)
from flowgrid.navigation.coordinates import GridCoordinate
from flowgrid.navigation.grid import WalkabilityGrid
from flowgrid.schemas import GridConfig


def make_grid() -> WalkabilityGrid:
    return WalkabilityGrid(GridConfig(width=10, height=6))


def build_wall(grid: WalkabilityGrid, column: int, rows) -> None:
    for y in rows:
        assert grid.place_obstacle(GridCoordinate(column, y))


def test_open_grid_is_connected():
    grid = make_grid()
    assert all_spawns_reach_goal(grid) is True
    assert reachable_spawns(grid) == frozenset(grid.spawn_positions)


def test_wall_with_gap_stays_connected():
    grid = make_grid()
    build_wall(grid, 5, range(5))
    assert all_spawns_reach_goal(grid) is True
    assert spawn_reaches_goal(grid, GridCoordinate(0, 0)) is True


def test_full_wall_severs_every_spawn():
    grid = make_grid()
    build_wall(grid, 5, range(6))
    assert all_spawns_reach_goal(grid) is False
    assert reachable_spawns(grid) == frozenset()
    assert spawn_reaches_goal(grid, GridCoordinate(1, 5)) is False


def test_wall_sealing_goal_pocket_severs():
    grid = make_grid()
    # Close off the pocket from above and from the left
    for x in (8, 9):
        assert grid.place_obstacle(GridCoordinate(x, 4))
    build_wall(grid, 7, range(5))
    assert all_spawns_reach_goal(grid) is False


def test_spawn_reaches_goal_ignores_non_spawn_cells():
    grid = make_grid()
    assert spawn_reaches_goal(grid, GridCoordinate(4, 4)) is False
