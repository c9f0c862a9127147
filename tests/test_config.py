"""Tests for environment-driven configuration."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from flowgrid.config import Config, _env_flag


def test_grid_config_reflects_class_attributes():
    config = Config.grid_config()
    assert config.width == Config.GRID_WIDTH
    assert config.height == Config.GRID_HEIGHT
    assert config.spawn_zone_width == Config.SPAWN_ZONE_WIDTH
    assert config.cell_size == Config.CELL_SIZE


def test_grid_config_validates_overrides(monkeypatch):
    monkeypatch.setattr(Config, "GRID_WIDTH", 3)
    with pytest.raises(ValidationError):
        Config.grid_config()


@pytest.mark.parametrize(
    "value, expected",
    [("1", True), ("true", True), (" Yes ", True), ("on", True), ("0", False), ("", False), ("no", False)],
)
def test_env_flag(monkeypatch, value, expected):
    monkeypatch.setenv("FLOWGRID_TEST_FLAG", value)
    assert _env_flag("FLOWGRID_TEST_FLAG") is expected


def test_env_flag_default(monkeypatch):
    monkeypatch.delenv("FLOWGRID_TEST_FLAG", raising=False)
    assert _env_flag("FLOWGRID_TEST_FLAG") is False
    assert _env_flag("FLOWGRID_TEST_FLAG", "1") is True


def test_display_lists_settings():
    text = Config.display()
    assert text.startswith("flowgrid Configuration:")
    assert f"{Config.GRID_WIDTH}x{Config.GRID_HEIGHT}" in text
    assert str(Config.LEVELS_DIR) in text


def test_levels_dir_is_a_path():
    assert isinstance(Config.LEVELS_DIR, Path)
