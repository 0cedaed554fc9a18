"""Structured loader for arena layout settings."""
from __future__ import annotations

import json
import math
import os
from dataclasses import dataclass
from typing import Sequence, Tuple

from .vector import Point


# //1.- Describe the boundary ellipse every anchor is placed relative to.
@dataclass(frozen=True)
class BoundarySettings:
    radius_x: float
    radius_y: float
    ring_samples: int


# //2.- Capture tile dimensions plus the signed grid extent in tiles.
@dataclass(frozen=True)
class TileSettings:
    tile_width: int
    tile_height: int
    grid_half_width: int
    grid_half_height: int


# //3.- Record the noise frequency and road classification thresholds.
@dataclass(frozen=True)
class NoiseSettings:
    detail: float
    y_correction: float
    road_threshold: float
    min_scale: float
    scale_numerator: float
    secondary_offset: Point


# //4.- Bundle the knobs for dividing wall growth, thickening and connectors.
@dataclass(frozen=True)
class WallSettings:
    length_min: float
    length_range: float
    inward_offset_max: float
    step_min: float
    step_range: float
    curviness: float
    convergence: float
    compass_interval: float
    curve_noise_offset: Point
    angle_jitter: float
    start_thickness: float
    end_thickness: float
    min_thickness: float
    thickness_noise_offsets: Tuple[Point, Point]
    thickness_noise_scale: float
    thickness_gain: float
    thickness_bias: float
    avoid_clearance_start: float
    avoid_clearance_step: float
    back_wall_tangent_scale: float
    gate_tangent_scale: float
    connector_density_exponent: float
    connector_density_divisor: float
    index_node_capacity: int


# //5.- Bundle the knobs for the branching road network.
@dataclass(frozen=True)
class RoadSettings:
    step_min: float
    step_range: float
    compass_interval: float
    curviness: float
    convergence: float
    curve_noise_offset: Point
    fork_sqrt_offset: float
    fork_divisor: float
    fork_threshold: float
    child_spread_min: float
    child_spread_range: float
    child_thickness_divisor: float
    lateral_offset_divisor: float
    min_thickness: float
    thickness_noise_offsets: Tuple[Point, Point]
    thickness_noise_scale: float
    thickness_gain: float
    thickness_bias: float
    thickness_damping: float
    scout_directions: int
    scout_max_deviation: float
    scout_tile_multiple: float
    max_heading_offset: float
    root_spread: float
    root_min_thickness: float
    root_max_thickness: float
    length_base: float
    length_range: float
    opening_gap_scale: float
    max_nodes_per_tree: int


# //6.- Aggregate complete layout settings for downstream modules.
@dataclass(frozen=True)
class LayoutSettings:
    boundary: BoundarySettings
    tiles: TileSettings
    noise: NoiseSettings
    walls: WallSettings
    roads: RoadSettings


# //7.- Resolve the bundled configuration directory next to this module.
def _default_config_directory() -> str:
    return os.path.join(os.path.dirname(__file__), "config")


# //8.- Load a single JSON configuration file and coerce to dictionary.
def _read_json_config(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as handle:
        return json.load(handle)


def _point(values: Sequence[float]) -> Point:
    x, y = values
    return (float(x), float(y))


def _point_pair(values: Sequence[Sequence[float]]) -> Tuple[Point, Point]:
    first, second = values
    return (_point(first), _point(second))


def _compass_interval(divisions: int) -> float:
    if int(divisions) <= 0:
        raise ValueError("compass_divisions must be positive")
    return math.tau / int(divisions)


# //9.- Parse boundary settings and reject degenerate ellipses.
def _load_boundary_settings(config_dir: str) -> BoundarySettings:
    payload = _read_json_config(os.path.join(config_dir, "boundary.json"))
    radius_x = float(payload["radius_x"])
    radius_y = float(payload["radius_y"])
    if radius_x <= 0 or radius_y <= 0:
        raise ValueError("Boundary radii must be positive")
    ring_samples = int(payload.get("ring_samples", 200))
    if ring_samples < 3:
        raise ValueError("ring_samples must be at least 3")
    return BoundarySettings(radius_x=radius_x, radius_y=radius_y, ring_samples=ring_samples)


# //10.- Split terrain.json into tile geometry and noise classification settings.
def _load_terrain_settings(config_dir: str) -> Tuple[TileSettings, NoiseSettings]:
    payload = _read_json_config(os.path.join(config_dir, "terrain.json"))
    tiles = TileSettings(
        tile_width=int(payload["tile_width"]),
        tile_height=int(payload["tile_height"]),
        grid_half_width=int(payload["grid_half_width"]),
        grid_half_height=int(payload["grid_half_height"]),
    )
    if tiles.tile_width <= 0 or tiles.tile_height <= 0:
        raise ValueError("Tile dimensions must be positive")
    if tiles.grid_half_width < 0 or tiles.grid_half_height < 0:
        raise ValueError("Grid extent must not be negative")
    noise = NoiseSettings(
        detail=float(payload["noise_base_frequency"]) / float(payload["noise_frequency_divisor"]),
        y_correction=float(payload["noise_y_correction"]),
        road_threshold=float(payload["road_threshold"]),
        min_scale=float(payload["min_scale"]),
        scale_numerator=float(payload["scale_numerator"]),
        secondary_offset=_point(payload["secondary_offset"]),
    )
    if noise.min_scale <= 0:
        raise ValueError("min_scale must be positive")
    return tiles, noise


# //11.- Construct wall settings converting pi multiples to radians.
def _load_wall_settings(config_dir: str) -> WallSettings:
    payload = _read_json_config(os.path.join(config_dir, "walls.json"))
    settings = WallSettings(
        length_min=float(payload["length_min"]),
        length_range=float(payload["length_range"]),
        inward_offset_max=float(payload["inward_offset_max"]),
        step_min=float(payload["step_min"]),
        step_range=float(payload["step_range"]),
        curviness=float(payload["curviness_pi"]) * math.pi,
        convergence=float(payload["convergence"]),
        compass_interval=_compass_interval(payload["compass_divisions"]),
        curve_noise_offset=_point(payload["curve_noise_offset"]),
        angle_jitter=float(payload["angle_jitter_pi"]) * math.pi,
        start_thickness=float(payload["start_thickness"]),
        end_thickness=float(payload["end_thickness"]),
        min_thickness=float(payload["min_thickness"]),
        thickness_noise_offsets=_point_pair(payload["thickness_noise_offsets"]),
        thickness_noise_scale=float(payload["thickness_noise_scale"]),
        thickness_gain=float(payload["thickness_gain"]),
        thickness_bias=float(payload["thickness_bias"]),
        avoid_clearance_start=float(payload["avoid_clearance_start"]),
        avoid_clearance_step=float(payload["avoid_clearance_step"]),
        back_wall_tangent_scale=float(payload["back_wall_tangent_scale"]),
        gate_tangent_scale=float(payload["gate_tangent_scale"]),
        connector_density_exponent=float(payload["connector_density_exponent"]),
        connector_density_divisor=float(payload["connector_density_divisor"]),
        index_node_capacity=int(payload["index_node_capacity"]),
    )
    if settings.step_min <= 0:
        raise ValueError("Wall step_min must be positive")
    if settings.min_thickness <= 0:
        raise ValueError("Wall min_thickness must be positive")
    if settings.index_node_capacity < 2:
        raise ValueError("index_node_capacity must be at least 2")
    return settings


# //12.- Construct road settings converting angular fields to radians.
def _load_road_settings(config_dir: str) -> RoadSettings:
    payload = _read_json_config(os.path.join(config_dir, "roads.json"))
    settings = RoadSettings(
        step_min=float(payload["step_min"]),
        step_range=float(payload["step_range"]),
        compass_interval=_compass_interval(payload["compass_divisions"]),
        curviness=float(payload["curviness_pi"]) * math.pi,
        convergence=float(payload["convergence"]),
        curve_noise_offset=_point(payload["curve_noise_offset"]),
        fork_sqrt_offset=float(payload["fork_sqrt_offset"]),
        fork_divisor=float(payload["fork_divisor"]),
        fork_threshold=float(payload["fork_threshold"]),
        child_spread_min=float(payload["child_spread_min"]),
        child_spread_range=float(payload["child_spread_range"]),
        child_thickness_divisor=float(payload["child_thickness_divisor"]),
        lateral_offset_divisor=float(payload["lateral_offset_divisor"]),
        min_thickness=float(payload["min_thickness"]),
        thickness_noise_offsets=_point_pair(payload["thickness_noise_offsets"]),
        thickness_noise_scale=float(payload["thickness_noise_scale"]),
        thickness_gain=float(payload["thickness_gain"]),
        thickness_bias=float(payload["thickness_bias"]),
        thickness_damping=float(payload["thickness_damping"]),
        scout_directions=int(payload["scout_directions"]),
        scout_max_deviation=float(payload["scout_max_deviation_pi"]) * math.pi,
        scout_tile_multiple=float(payload["scout_tile_multiple"]),
        max_heading_offset=math.radians(float(payload["max_heading_offset_deg"])),
        root_spread=float(payload["root_spread_pi"]) * math.pi,
        root_min_thickness=float(payload["root_min_thickness"]),
        root_max_thickness=float(payload["root_max_thickness"]),
        length_base=float(payload["length_base"]),
        length_range=float(payload["length_range"]),
        opening_gap_scale=float(payload["opening_gap_scale"]),
        max_nodes_per_tree=int(payload["max_nodes_per_tree"]),
    )
    if settings.step_min <= 0:
        raise ValueError("Road step_min must be positive")
    if settings.min_thickness <= 0:
        raise ValueError("Road min_thickness must be positive")
    if settings.root_min_thickness > settings.root_max_thickness:
        raise ValueError("root_min_thickness must not exceed root_max_thickness")
    if settings.scout_directions <= 0:
        raise ValueError("scout_directions must be positive")
    if settings.child_thickness_divisor <= 1.0:
        raise ValueError("child_thickness_divisor must be greater than one")
    return settings


# //13.- Public helper assembling the full layout settings bundle.
def load_layout_settings(config_dir: str | None = None) -> LayoutSettings:
    directory = config_dir or _default_config_directory()
    boundary = _load_boundary_settings(directory)
    tiles, noise = _load_terrain_settings(directory)
    walls = _load_wall_settings(directory)
    roads = _load_road_settings(directory)
    return LayoutSettings(boundary=boundary, tiles=tiles, noise=noise, walls=walls, roads=roads)
