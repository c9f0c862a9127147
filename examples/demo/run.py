"""
Flow field demo

Loads a level, optionally drops extra obstacles through the validated
placement path, and prints the occupancy map, distance table and arrow field.

Run: uv run python examples/demo/run.py --level corridor --place 8,5 --place 8,4
"""

import argparse
from pathlib import Path

from flowgrid import GridCoordinate, LevelLoader, NavigationEngine
from flowgrid.config import Config
from flowgrid.navigation.helpers import (
    render_distance_ascii,
    render_flow_ascii,
    render_grid_ascii,
)


def _parse_cell(raw: str) -> GridCoordinate:
    x, y = raw.split(",")
    return GridCoordinate(int(x), int(y))


def main() -> None:
    parser = argparse.ArgumentParser(description="Print a flow field for a level")
    parser.add_argument("--level", default="corridor", help="Level name (without .json)")
    parser.add_argument("--levels-dir", type=Path, default=None, help="Directory with level files")
    parser.add_argument(
        "--place",
        action="append",
        default=[],
        metavar="X,Y",
        help="Extra obstacle to request (repeatable)",
    )
    parser.add_argument("--verbose", action="store_true", help="Log placement decisions")
    args = parser.parse_args()

    if args.verbose:
        print(Config.display())
        print()

    layout = LevelLoader(args.levels_dir).load(args.level)
    engine = NavigationEngine.from_layout(layout, verbose=args.verbose)
    for coord, reason in engine.rejected_obstacles:
        print(f"Layout obstacle ({coord.x}, {coord.y}) skipped: {reason}")

    for raw in args.place:
        coord = _parse_cell(raw)
        accepted = engine.request_obstacle_placement(coord)
        print(f"Place ({coord.x}, {coord.y}): {'accepted' if accepted else 'rejected'}")

    snapshot = engine.export_debug()
    print(f"\n=== {layout.name} ===")
    print(render_grid_ascii(engine.grid))
    print("\nDistances:")
    print(render_distance_ascii(snapshot))
    print("\nDirections:")
    print(render_flow_ascii(snapshot))

    path = engine.query_path(GridCoordinate(0, layout.grid.height - 1))
    if path is None:
        print("\nNo path from the top-left spawn cell")
    else:
        print(f"\nTop-left spawn cell reaches the goal in {len(path) - 1} steps")


if __name__ == "__main__":
    main()
