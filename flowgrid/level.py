"""
Level loading for JSON-defined arenas.

This module provides LevelLoader for converting JSON level files into
LevelLayout objects. A level defines the initial conditions of a navigation
grid:
- Grid geometry (dimensions, spawn strip width, goal pocket size, cell size)
- Obstacles present when the level starts
- Optional metadata for the surrounding simulation

Level file structure:
```json
{
  "name": "corridor",
  "description": "...",
  "grid": {"width": 12, "height": 6, "spawn_zone_width": 2,
           "goal_zone_width": 2, "goal_zone_height": 4},
  "obstacles": [[4, 0], [4, 1], [4, 2]],
  "metadata": {}
}
```

Obstacles may be written as ``[x, y]`` pairs or ``{"x": .., "y": ..}`` objects.

Usage:
    loader = LevelLoader()
    layout = loader.load("corridor")
    engine = NavigationEngine.from_layout(layout)
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from .config import Config
from .schemas import GridConfig, LevelLayout


class LevelLoader:
    """Load and validate level layouts from JSON files.

    Directory structure:
    - Default: ``Config.LEVELS_DIR`` ({PROJECT_ROOT}/examples/levels/ unless overridden)
    - Override via constructor: LevelLoader(Path("/custom/levels"))
    - Level files: {level_name}.json

    Validation:
    - Required fields: name, grid
    - Grid geometry validated by GridConfig (zones must fit)
    - Raises ValueError if validation fails
    """

    def __init__(self, levels_dir: Optional[Path] = None):
        """Initialize level loader.

        Args:
            levels_dir: Directory containing level files. Defaults to Config.LEVELS_DIR
        """
        self.levels_dir = levels_dir or Config.LEVELS_DIR

    def load(self, level_name: str) -> LevelLayout:
        """Load a level by name from ``{levels_dir}/{level_name}.json``.

        Raises:
            FileNotFoundError: If the level file doesn't exist in levels_dir
            ValueError: If the JSON is missing required fields or malformed
            json.JSONDecodeError: If the file contains invalid JSON
        """
        level_path = self.levels_dir / f"{level_name}.json"

        if not level_path.exists():
            raise FileNotFoundError(f"Level '{level_name}' not found at {level_path}")

        return self.parse(json.loads(level_path.read_text()))

    def parse(self, data: Dict[str, Any]) -> LevelLayout:
        """Build a LevelLayout from already-decoded level data."""
        self._validate_level(data)

        try:
            grid = GridConfig(**data["grid"])
        except ValidationError as exc:
            raise ValueError(f"Level '{data['name']}' has invalid grid geometry: {exc}") from exc

        return LevelLayout(
            name=data["name"],
            description=data.get("description", ""),
            grid=grid,
            obstacles=self._parse_obstacles(data.get("obstacles", [])),
            metadata=data.get("metadata", {}),
        )

    def _validate_level(self, data: Dict) -> None:
        """Validate level data has required fields.

        Raises:
            ValueError: If required fields are missing
        """
        if not isinstance(data, dict):
            raise ValueError("Level file must contain a JSON object")

        required = ["name", "grid"]
        missing = [field for field in required if field not in data]

        if missing:
            raise ValueError(f"Level missing required fields: {missing}")

        if not isinstance(data["grid"], dict):
            raise ValueError("Level 'grid' must be an object")

    def _parse_obstacles(self, raw: List[Any]) -> List[Tuple[int, int]]:
        """Normalize obstacle entries to (x, y) tuples.

        Accepts both ``[x, y]`` pairs and ``{"x": x, "y": y}`` objects.
        """
        obstacles: List[Tuple[int, int]] = []
        for entry in raw:
            if isinstance(entry, dict) and "x" in entry and "y" in entry:
                obstacles.append((int(entry["x"]), int(entry["y"])))
            elif isinstance(entry, (list, tuple)) and len(entry) == 2:
                obstacles.append((int(entry[0]), int(entry[1])))
            else:
                raise ValueError(f"Invalid obstacle entry: {entry!r}")
        return obstacles


def load_level(path: Path) -> LevelLayout:
    """Load a single level file by path."""
    path = Path(path)
    return LevelLoader(path.parent).load(path.stem)
