"""Noise-modulated variable-width thickening of centre paths."""
from __future__ import annotations

import math
from typing import List, Tuple

from .context import GeneratorContext
from .errors import DegenerateGeometryError
from .path import Path
from .vector import Point, angle_difference, from_angle, heading


def _edge_heading(a: Point, b: Point) -> float:
    if a == b:
        raise DegenerateGeometryError(f"Zero-length edge at {a}")
    return heading(a, b)


# //1.- Normal angle at each vertex, bisecting the turn at interior vertices.
def vertex_normals(points: List[Point]) -> List[float]:
    count = len(points)
    if count < 2:
        raise DegenerateGeometryError("Thickening needs at least one edge")
    normals: List[float] = []
    for index in range(count):
        if index == 0:
            direction = _edge_heading(points[0], points[1])
        elif index == count - 1:
            direction = _edge_heading(points[index - 1], points[index])
        else:
            incoming = _edge_heading(points[index - 1], points[index])
            outgoing = _edge_heading(points[index], points[index + 1])
            direction = incoming + angle_difference(incoming, outgoing) / 2.0
        normals.append(direction + math.pi / 2.0)
    return normals


# //2.- Remap two noise channels into a multiplicative width modulation.
def _modulation(ctx: GeneratorContext, point: Point) -> float:
    walls = ctx.settings.walls
    (ax, ay), (bx, by) = walls.thickness_noise_offsets
    scale = walls.thickness_noise_scale
    first = (ctx.sample_noise(point[0] + ax, point[1] + ay, scale) + 1.0) / 2.0
    second = (ctx.sample_noise(point[0] + bx, point[1] + by, scale) + 1.0) / 2.0
    return first * second * walls.thickness_gain + walls.thickness_bias


def thicken(
    ctx: GeneratorContext, path: Path, start_thickness: float, end_thickness: float
) -> Tuple[Path, Path]:
    """Offset ``path`` to both sides and return ``(left, right)``.

    ``left`` lies along the normal (a quarter turn counter-clockwise of the
    travel direction). The half width ramps linearly from
    ``start_thickness`` to ``end_thickness``, is scaled by the noise
    modulation and never drops below the configured minimum.
    """

    points = path.points
    normals = vertex_normals(points)
    floor_width = ctx.settings.walls.min_thickness
    last = len(points) - 1

    left_points: List[Point] = []
    right_points: List[Point] = []
    widths: List[float] = []
    for index, (point, normal) in enumerate(zip(points, normals)):
        ramp = start_thickness + (end_thickness - start_thickness) * (index / last)
        width = max(floor_width, ramp * _modulation(ctx, point))
        offset = from_angle(normal, width)
        left_points.append((point[0] + offset[0], point[1] + offset[1]))
        right_points.append((point[0] - offset[0], point[1] - offset[1]))
        widths.append(width)
    return Path(left_points, widths), Path(right_points, list(widths))
