"""
flowgrid Configuration

Loads configuration from environment variables with sensible defaults.
The navigation core never reads this module; only the engine facade and the
demo scripts turn it into an explicit GridConfig.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

from .schemas import GridConfig

# Load .env file if it exists
load_dotenv()


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Config:
    """Application configuration loaded from environment variables."""

    # Grid geometry (defaults match the shipped arena)
    GRID_WIDTH: int = int(os.getenv("FLOWGRID_GRID_WIDTH", "26"))
    GRID_HEIGHT: int = int(os.getenv("FLOWGRID_GRID_HEIGHT", "14"))
    SPAWN_ZONE_WIDTH: int = int(os.getenv("FLOWGRID_SPAWN_ZONE_WIDTH", "2"))
    GOAL_ZONE_WIDTH: int = int(os.getenv("FLOWGRID_GOAL_ZONE_WIDTH", "2"))
    GOAL_ZONE_HEIGHT: int = int(os.getenv("FLOWGRID_GOAL_ZONE_HEIGHT", "4"))
    CELL_SIZE: float = float(os.getenv("FLOWGRID_CELL_SIZE", "1.0"))

    # Logging
    VERBOSE: bool = _env_flag("FLOWGRID_VERBOSE")

    # Project Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent
    LEVELS_DIR: Path = Path(os.getenv("LEVELS_DIR", str(PROJECT_ROOT / "examples" / "levels")))

    @classmethod
    def grid_config(cls) -> GridConfig:
        """Build a validated GridConfig from the environment.

        Raises:
            pydantic.ValidationError: If the configured zones do not fit the grid
        """
        return GridConfig(
            width=cls.GRID_WIDTH,
            height=cls.GRID_HEIGHT,
            spawn_zone_width=cls.SPAWN_ZONE_WIDTH,
            goal_zone_width=cls.GOAL_ZONE_WIDTH,
            goal_zone_height=cls.GOAL_ZONE_HEIGHT,
            cell_size=cls.CELL_SIZE,
        )

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "flowgrid Configuration:",
            f"  Grid: {cls.GRID_WIDTH}x{cls.GRID_HEIGHT} (cell size {cls.CELL_SIZE})",
            f"  Spawn zone width: {cls.SPAWN_ZONE_WIDTH}",
            f"  Goal zone: {cls.GOAL_ZONE_WIDTH}x{cls.GOAL_ZONE_HEIGHT}",
            f"  Levels dir: {cls.LEVELS_DIR}",
            f"  Verbose: {cls.VERBOSE}",
        ]
        return "\n".join(lines)
