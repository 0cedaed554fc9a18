"""Random-walk path growth and spline connectors."""
from __future__ import annotations

import math
from typing import List, Optional

from .context import GeneratorContext
from .errors import DegenerateGeometryError
from .path import Path
from .vector import (
    Point,
    add,
    angle_difference,
    distance,
    from_angle,
    lerp,
    normalize,
    round_to_interval,
    scale,
    subtract,
)


# //1.- Draw the next heading from noise, then pull it toward the desired angle.
def wander_heading(
    ctx: GeneratorContext,
    point: Point,
    current: float,
    desired: float,
    strength: float,
    curviness: float,
    noise_offset: Point,
) -> float:
    wobble = ctx.sample_noise(point[0] + noise_offset[0], point[1] + noise_offset[1], 1.0)
    current += wobble * curviness
    current += angle_difference(current, desired) * strength
    return current


# //2.- Push a point directly away from a path it came too close to.
def _push_clear(point: Point, avoid_path: Path, clearance: float, heading: float) -> Point:
    nearest, gap, _ = avoid_path.nearest_point(point)
    if gap >= clearance:
        return point
    away = normalize(subtract(point, nearest), fallback=from_angle(heading + math.pi / 2.0))
    return add(point, scale(away, clearance - gap))


def grow_path(
    ctx: GeneratorContext,
    length: float,
    start_angle: float,
    desired_angle: float,
    desired_angle_strength: float,
    avoid_path: Optional[Path] = None,
) -> Path:
    """Grow a wandering polyline outward from the boundary ellipse.

    Each step spends exactly one noise sample and one PRNG draw, in that
    order. Step directions are snapped to the compass so the walls read as
    hand-built straight runs.
    """

    walls = ctx.settings.walls

    # //3.- Start on the ellipse and pull the anchor inward by a random amount.
    anchor = ctx.ellipse.point_at(start_angle)
    inward = ctx.next() * walls.inward_offset_max
    point = subtract(anchor, from_angle(start_angle, inward))
    path = Path([point])

    traveled = 0.0
    current = start_angle
    clearance = walls.avoid_clearance_start

    # //4.- Step until the requested length is spent.
    while traveled < length:
        current = wander_heading(
            ctx,
            point,
            current,
            desired_angle,
            desired_angle_strength,
            walls.curviness,
            walls.curve_noise_offset,
        )
        snapped = round_to_interval(current, walls.compass_interval)
        step = walls.step_min + walls.step_range * ctx.next()
        point = add(point, from_angle(snapped, step))
        traveled += step

        if avoid_path is not None:
            point = _push_clear(point, avoid_path, clearance, current)
            clearance += walls.avoid_clearance_step

        path.append(point)
    return path


def _segment_count(a: Point, b: Point, exponent: float, divisor: float) -> int:
    chord = distance(a, b)
    if chord == 0.0:
        raise DegenerateGeometryError(f"Connector anchors coincide at {a}")
    return max(1, int(math.ceil(chord ** exponent / divisor)))


def connect(
    a: Point,
    tangent_a: Point,
    b: Point,
    tangent_b: Point,
    density_exponent: float = 0.65,
    density_divisor: float = 15.0,
) -> Path:
    """Cubic Hermite connector from ``a`` to ``b``.

    The derivative is ``tangent_a`` at ``a`` and ``-tangent_b`` at ``b``, so
    two equal outward tangents bow the curve outward at both ends.
    """

    segments = _segment_count(a, b, density_exponent, density_divisor)
    end_tangent = scale(tangent_b, -1.0)
    points: List[Point] = [a]
    for index in range(1, segments):
        t = index / segments
        t2 = t * t
        t3 = t2 * t
        h00 = 2.0 * t3 - 3.0 * t2 + 1.0
        h10 = t3 - 2.0 * t2 + t
        h01 = -2.0 * t3 + 3.0 * t2
        h11 = t3 - t2
        points.append(
            (
                h00 * a[0] + h10 * tangent_a[0] + h01 * b[0] + h11 * end_tangent[0],
                h00 * a[1] + h10 * tangent_a[1] + h01 * b[1] + h11 * end_tangent[1],
            )
        )
    points.append(b)
    return Path(points)


def connect_linear(
    a: Point,
    b: Point,
    density_exponent: float = 0.65,
    density_divisor: float = 15.0,
) -> Path:
    """Straight connector sampled with the same density as :func:`connect`."""

    segments = _segment_count(a, b, density_exponent, density_divisor)
    points = [a] + [lerp(a, b, index / segments) for index in range(1, segments)] + [b]
    return Path(points)
