"""Tests for the grid coordinate model."""

import math

from flowgrid.navigation.coordinates import (
    DEFAULT_HEADING,
    GridCoordinate,
    Vector,
    ZoneKind,
    cell_center,
    classify,
    distance_to_goal_zone,
    goal_cells,
    heading_to_goal,
    neighbors4,
    neighbors8,
    spawn_cells,
    world_to_cell,
)
from flowgrid.schemas import GridConfig


def test_coordinates_compare_and_hash_by_value():
    a = GridCoordinate(3, 4)
    b = GridCoordinate(3, 4)
    assert a == b
    assert hash(a) == hash(b)
    assert {a, b} == {a}
    assert GridCoordinate(1, 9) < GridCoordinate(2, 0)
    assert a.manhattan(GridCoordinate(0, 0)) == 7
    assert a.offset(1, -1) == GridCoordinate(4, 3)


def test_classification_uses_corner_goal_pocket():
    config = GridConfig()  # 26x14, spawn 2, goal 2x4

    assert classify(GridCoordinate(0, 0), config) is ZoneKind.SPAWN
    assert classify(GridCoordinate(1, 13), config) is ZoneKind.SPAWN
    assert classify(GridCoordinate(24, 0), config) is ZoneKind.GOAL
    assert classify(GridCoordinate(25, 3), config) is ZoneKind.GOAL
    # Right edge above the pocket is ordinary interior, not goal
    assert classify(GridCoordinate(25, 4), config) is ZoneKind.INTERIOR
    assert classify(GridCoordinate(23, 0), config) is ZoneKind.INTERIOR
    assert classify(GridCoordinate(10, 5), config) is ZoneKind.INTERIOR


def test_zone_cell_lists():
    config = GridConfig()
    assert len(spawn_cells(config)) == 2 * 14
    goals = goal_cells(config)
    assert len(goals) == 2 * 4
    assert GridCoordinate(24, 0) in goals
    assert GridCoordinate(25, 4) not in goals


def test_neighbor_enumeration_order_and_bounds():
    assert list(neighbors4(GridCoordinate(0, 0), 3, 3)) == [GridCoordinate(1, 0), GridCoordinate(0, 1)]

    around_center = list(neighbors8(GridCoordinate(1, 1), 3, 3))
    assert len(around_center) == 8
    # Cardinals (E, W, N, S) come before diagonals
    assert around_center[:4] == [
        GridCoordinate(2, 1),
        GridCoordinate(0, 1),
        GridCoordinate(1, 2),
        GridCoordinate(1, 0),
    ]


def test_distance_to_goal_zone_is_zero_inside():
    config = GridConfig()
    assert distance_to_goal_zone(GridCoordinate(24, 0), config) == 0
    assert distance_to_goal_zone(GridCoordinate(0, 13), config) == 24 + 10
    assert distance_to_goal_zone(GridCoordinate(25, 6), config) == 3


def test_world_to_cell_returns_fractional_offset():
    config = GridConfig(cell_size=48.0, origin_x=100.0, origin_y=50.0)

    cell, fx, fy = world_to_cell(100 + 48 * 2 + 12, 50 + 48 * 3, config)
    assert cell == GridCoordinate(2, 3)
    assert fx == 0.25
    assert fy == 0.0

    cell, _, _ = world_to_cell(99.0, 49.0, config)
    assert cell == GridCoordinate(-1, -1)

    assert cell_center(GridCoordinate(0, 0), config) == (124.0, 74.0)


def test_vector_normalization():
    v = Vector(3.0, 4.0).normalized()
    assert math.isclose(v.dx, 0.6)
    assert math.isclose(v.dy, 0.8)
    assert Vector(0.0, 0.0).normalized() == DEFAULT_HEADING
    assert Vector(1.0, 2.0) + Vector(1.0, -1.0) == Vector(2.0, 1.0)


def test_heading_to_goal_points_at_pocket():
    config = GridConfig(width=10, height=6)
    heading = heading_to_goal(0.5, 5.5, config)
    assert heading.dx > 0
    assert heading.dy < 0
    assert math.isclose(heading.length(), 1.0)


def test_heading_to_goal_falls_back_for_non_finite_positions():
    config = GridConfig(width=10, height=6)
    assert heading_to_goal(float("nan"), 2.0, config) == DEFAULT_HEADING
    assert heading_to_goal(2.0, float("inf"), config) == DEFAULT_HEADING
    assert heading_to_goal(float("-inf"), float("-inf"), config) == DEFAULT_HEADING
