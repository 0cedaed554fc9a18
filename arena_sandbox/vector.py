"""Lightweight 2D vector and angle helpers.

Points are plain ``(x, y)`` float tuples so every deterministic step of the
layout generation stays easy to audit. Angles are radians; whenever two
angles are compared or blended the shortest signed difference is used so
nothing misbehaves across the +/- pi seam.
"""
from __future__ import annotations

import math
from typing import Iterable, Optional, Tuple

Point = Tuple[float, float]

TAU = math.tau


def to_point(components: Iterable[float]) -> Point:
    values = tuple(float(component) for component in components)
    if len(values) != 2:
        raise ValueError("Point requires exactly two components")
    return values  # type: ignore[return-value]


def add(a: Point, b: Point) -> Point:
    return (a[0] + b[0], a[1] + b[1])


def subtract(a: Point, b: Point) -> Point:
    return (a[0] - b[0], a[1] - b[1])


def scale(vector: Point, scalar: float) -> Point:
    return (vector[0] * scalar, vector[1] * scalar)


def dot(a: Point, b: Point) -> float:
    return a[0] * b[0] + a[1] * b[1]


def cross(a: Point, b: Point) -> float:
    """Z component of the 3D cross product of two planar vectors."""

    return a[0] * b[1] - a[1] * b[0]


def length(vector: Point) -> float:
    return math.hypot(vector[0], vector[1])


def distance(a: Point, b: Point) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


def normalize(vector: Point, fallback: Point = (0.0, 0.0)) -> Point:
    magnitude = math.hypot(vector[0], vector[1])
    if magnitude == 0.0:
        return fallback
    return (vector[0] / magnitude, vector[1] / magnitude)


def lerp(a: Point, b: Point, t: float) -> Point:
    return (a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)


def from_angle(angle: float, magnitude: float = 1.0) -> Point:
    return (math.cos(angle) * magnitude, math.sin(angle) * magnitude)


def heading(a: Point, b: Point) -> float:
    """Angle of the direction travelling from ``a`` to ``b``."""

    return math.atan2(b[1] - a[1], b[0] - a[0])


def perpendicular(vector: Point) -> Point:
    """Rotate ``vector`` a quarter turn counter-clockwise."""

    return (-vector[1], vector[0])


# -- Angles ---------------------------------------------------------------

def angle_difference(from_angle_rad: float, to_angle_rad: float) -> float:
    """Return the shortest signed rotation taking ``from`` onto ``to``.

    The result lies in ``(-pi, pi]``. Every place in the package that blends
    or compares headings goes through this helper.
    """

    diff = (to_angle_rad - from_angle_rad) % TAU
    if diff > math.pi:
        diff -= TAU
    return diff


def _round_half_away(value: float) -> float:
    if value < 0.0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def round_to_interval(angle: float, interval: float) -> float:
    """Snap ``angle`` to the nearest multiple of ``interval``."""

    return _round_half_away(angle / interval) * interval


def floor_to_interval(angle: float, interval: float) -> float:
    return math.floor(angle / interval) * interval


def ceil_to_interval(angle: float, interval: float) -> float:
    return math.ceil(angle / interval) * interval


# -- Intersections --------------------------------------------------------

def line_intersection_params(a: Point, b: Point, c: Point, d: Point) -> Optional[Tuple[float, float]]:
    """Parameters ``(s, t)`` where ``a + s(b - a) == c + t(d - c)``.

    Returns ``None`` for parallel or degenerate lines. The caller decides
    which parameter ranges count as a hit.
    """

    rx = b[0] - a[0]
    ry = b[1] - a[1]
    qx = d[0] - c[0]
    qy = d[1] - c[1]
    denom = rx * qy - ry * qx
    if denom == 0.0:
        return None
    acx = c[0] - a[0]
    acy = c[1] - a[1]
    s = (acx * qy - acy * qx) / denom
    t = (acx * ry - acy * rx) / denom
    return s, t


def ray_intersection(
    origin_a: Point, direction_a: Point, origin_b: Point, direction_b: Point, eps: float = 1e-9
) -> Optional[Point]:
    """Meeting point of two rays given as origin plus direction.

    Both rays must be hit strictly ahead of their origins; parallel rays
    and hits on either origin return ``None``.
    """

    params = line_intersection_params(
        origin_a,
        add(origin_a, direction_a),
        origin_b,
        add(origin_b, direction_b),
    )
    if params is None:
        return None
    s, u = params
    if s <= eps or u <= eps:
        return None
    return (origin_a[0] + direction_a[0] * s, origin_a[1] + direction_a[1] * s)
