"""Tests for the NavigationEngine facade."""

import json
import math

import pytest

from flowgrid.config import Config
from flowgrid.engine import NavigationEngine
from flowgrid.navigation.coordinates import DEFAULT_HEADING, GridCoordinate, MovementMode
from flowgrid.navigation.placement import REASON_BLOCKS_PATH, REASON_SPAWN_ZONE
from flowgrid.navigation.search import path_length
from flowgrid.schemas import GridConfig, LevelLayout


@pytest.fixture
def engine():
    return NavigationEngine(GridConfig(width=10, height=6), verbose=False)


@pytest.fixture
def plain_output(monkeypatch):
    monkeypatch.setenv("FLOWGRID_NO_COLOR", "1")


def test_default_config_comes_from_environment_config():
    engine = NavigationEngine(verbose=False)
    assert engine.config == Config.grid_config()


def test_placement_and_removal_round_trip(engine):
    cell = GridCoordinate(4, 2)
    assert engine.request_obstacle_placement(cell) is True
    assert engine.request_obstacle_placement(cell) is False
    assert engine.query_reachable(cell) is False

    assert engine.request_obstacle_removal(cell) is True
    assert engine.request_obstacle_removal(cell) is False
    assert engine.query_reachable(cell) is True


def test_queries_reuse_one_build_per_mutation(engine):
    engine.query_direction((3.5, 3.5))
    engine.query_distance(GridCoordinate(0, 0))
    engine.query_grid_direction(GridCoordinate(2, 2))
    assert engine.grid.flow_field_builds == 1

    engine.request_obstacle_placement(GridCoordinate(4, 2))
    # Mutation alone does not rebuild
    assert engine.grid.flow_field_builds == 1
    engine.query_reachable(GridCoordinate(0, 0))
    engine.query_reachable(GridCoordinate(1, 1))
    assert engine.grid.flow_field_builds == 2


def test_flight_mode_ignores_obstacles(engine):
    for y in range(5):
        engine.request_obstacle_placement(GridCoordinate(5, y))

    position = (4.5, 2.5)
    ground = engine.query_direction(position)
    flight = engine.query_direction(position, MovementMode.FLIGHT)

    # The ground route has to climb to the gap; flight heads at the pocket centre (9, 2)
    assert ground.dy > 0
    assert flight.dx > 0.99
    assert -0.12 < flight.dy < -0.1
    assert math.isclose(flight.length(), 1.0)


@pytest.mark.parametrize("mode", [MovementMode.GROUND, MovementMode.FLIGHT])
@pytest.mark.parametrize(
    "position",
    [(float("nan"), 2.0), (2.0, float("nan")), (float("inf"), 2.0), (2.0, float("-inf"))],
)
def test_non_finite_positions_get_default_heading(engine, mode, position):
    assert engine.query_direction(position, mode) == DEFAULT_HEADING


def test_query_path_agrees_with_query_distance(engine):
    for y in range(5):
        engine.request_obstacle_placement(GridCoordinate(5, y))

    start = GridCoordinate(0, 0)
    path = engine.query_path(start)
    assert path is not None
    assert path_length(path) == engine.query_distance(start)

    explicit = engine.query_path(start, GridCoordinate(7, 0))
    assert explicit[-1] == GridCoordinate(7, 0)
    assert engine.query_path(start, GridCoordinate(5, 0)) is None


def test_export_debug_is_json_serializable(engine):
    engine.request_obstacle_placement(GridCoordinate(4, 2))
    snapshot = engine.export_debug()

    data = json.loads(snapshot.model_dump_json())
    assert data["width"] == 10
    assert data["distances"][5][0] == 10
    assert data["distances"][2][4] is None
    assert [4, 2] in data["obstacles"]


def test_validate_placement_does_not_mutate(engine):
    result = engine.validate_placement(GridCoordinate(3, 3))
    assert result.is_valid
    assert not engine.grid.has_obstacle_at(GridCoordinate(3, 3))
    assert GridCoordinate(3, 3) in engine.valid_placements()


def test_from_layout_records_rejected_obstacles():
    layout = LevelLayout(
        name="sealed",
        grid=GridConfig(width=10, height=6),
        obstacles=[(5, y) for y in range(6)] + [(0, 0)],
    )
    engine = NavigationEngine.from_layout(layout, verbose=False)

    assert engine.grid.obstacles == frozenset(GridCoordinate(5, y) for y in range(5))
    assert engine.rejected_obstacles == [
        (GridCoordinate(5, 5), REASON_BLOCKS_PATH),
        (GridCoordinate(0, 0), REASON_SPAWN_ZONE),
    ]
    assert engine.query_reachable(GridCoordinate(0, 0))


def test_verbose_engine_logs_decisions(capsys, plain_output):
    engine = NavigationEngine(GridConfig(width=10, height=6), verbose=True)
    engine.request_obstacle_placement(GridCoordinate(4, 2))
    engine.request_obstacle_placement(GridCoordinate(0, 0))
    engine.query_distance(GridCoordinate(0, 0))
    engine.request_obstacle_removal(GridCoordinate(4, 2))

    out = capsys.readouterr().out
    assert "[✓] [Placement] Obstacle placed at (4, 2)" in out
    assert f"[!] [Placement] Rejected (0, 0): {REASON_SPAWN_ZONE}" in out
    assert "[•] [Flow Field] Rebuilt 10x6 field (build #1, 1 obstacles)" in out
    assert "[✓] [Placement] Obstacle removed at (4, 2)" in out
    # No ANSI escapes when color is disabled
    assert "\033[" not in out


def test_quiet_engine_prints_nothing(capsys, engine):
    engine.request_obstacle_placement(GridCoordinate(4, 2))
    engine.query_distance(GridCoordinate(0, 0))
    assert capsys.readouterr().out == ""
