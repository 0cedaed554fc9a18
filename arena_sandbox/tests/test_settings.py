"""Tests for layout configuration loading."""
from __future__ import annotations

import json
import math
import shutil

import pytest

from arena_sandbox.settings import _default_config_directory, load_layout_settings


def _copy_config(tmp_path):
    target = tmp_path / "config"
    shutil.copytree(_default_config_directory(), target)
    return target


def _patch(directory, name, **changes):
    path = directory / name
    payload = json.loads(path.read_text(encoding="utf-8"))
    payload.update(changes)
    path.write_text(json.dumps(payload), encoding="utf-8")


# //1.- Ensure the bundled JSON files parse into usable settings.
def test_load_layout_settings_uses_defaults(settings):
    assert settings.boundary.radius_x > 0
    assert settings.boundary.radius_y > 0
    assert settings.boundary.ring_samples == 200
    assert settings.tiles.tile_width > 0 and settings.tiles.tile_height > 0
    assert settings.noise.road_threshold == pytest.approx(0.05)
    assert settings.noise.secondary_offset == (10752.0, 10752.0)
    assert settings.roads.root_min_thickness <= settings.roads.root_max_thickness


# //2.- Angular fields are stored in radians.
def test_angles_are_converted_to_radians(settings):
    assert settings.walls.compass_interval == pytest.approx(math.tau / 16)
    assert settings.walls.curviness == pytest.approx(0.1 * math.pi)
    assert settings.roads.max_heading_offset == pytest.approx(math.pi / 4.0)
    assert settings.roads.scout_max_deviation == pytest.approx(0.4 * math.pi)


# //3.- A copied configuration directory loads the same values.
def test_load_from_explicit_directory(tmp_path, settings):
    directory = _copy_config(tmp_path)
    assert load_layout_settings(str(directory)) == settings


# //4.- Invalid values are rejected while loading.
def test_non_positive_radius_rejected(tmp_path):
    directory = _copy_config(tmp_path)
    _patch(directory, "boundary.json", radius_x=0.0)
    with pytest.raises(ValueError):
        load_layout_settings(str(directory))


def test_zero_compass_divisions_rejected(tmp_path):
    directory = _copy_config(tmp_path)
    _patch(directory, "walls.json", compass_divisions=0)
    with pytest.raises(ValueError):
        load_layout_settings(str(directory))


def test_inverted_root_thickness_rejected(tmp_path):
    directory = _copy_config(tmp_path)
    _patch(directory, "roads.json", root_min_thickness=900.0, root_max_thickness=100.0)
    with pytest.raises(ValueError):
        load_layout_settings(str(directory))


def test_missing_file_raises(tmp_path):
    directory = _copy_config(tmp_path)
    (directory / "terrain.json").unlink()
    with pytest.raises(FileNotFoundError):
        load_layout_settings(str(directory))
