"""Boundary ellipse helpers shared by every anchor placement."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from .vector import Point, normalize


@dataclass(frozen=True)
class BoundaryEllipse:
    """Axis aligned ellipse centred at the origin.

    Points on the boundary use the parametric form
    ``(cos(a) * radius_x, sin(a) * radius_y)``.
    """

    radius_x: float
    radius_y: float

    def point_at(self, angle: float) -> Point:
        return (math.cos(angle) * self.radius_x, math.sin(angle) * self.radius_y)

    def parametric_angle(self, point: Point) -> float:
        return math.atan2(point[1] / self.radius_y, point[0] / self.radius_x)

    def contains(self, point: Point) -> bool:
        dx = point[0] / self.radius_x
        dy = point[1] / self.radius_y
        return dx * dx + dy * dy <= 1.0

    def outward_normal(self, point: Point) -> Point:
        """Unit gradient of the implicit equation at ``point``."""

        return normalize(
            (point[0] / (self.radius_x * self.radius_x), point[1] / (self.radius_y * self.radius_y)),
            fallback=(1.0, 0.0),
        )

    def tangent_at(self, angle: float) -> Point:
        """Unit counter-clockwise tangent at parametric ``angle``."""

        return normalize(
            (-math.sin(angle) * self.radius_x, math.cos(angle) * self.radius_y),
            fallback=(0.0, 1.0),
        )

    def perimeter(self) -> float:
        """Ramanujan's second approximation."""

        a = self.radius_x
        b = self.radius_y
        h = ((a - b) / (a + b)) ** 2
        return math.pi * (a + b) * (1.0 + 3.0 * h / (10.0 + math.sqrt(4.0 - 3.0 * h)))

    def project(self, point: Point, iterations: int = 3) -> Tuple[Point, float]:
        """Return the closest boundary point to ``point`` and its distance.

        Works in the positive quadrant with the evolute based iteration and
        mirrors the result back; three iterations are plenty at map scale.
        """

        px = abs(point[0])
        py = abs(point[1])
        a = self.radius_x
        b = self.radius_y
        tx = 0.707
        ty = 0.707

        for _ in range(iterations):
            x = a * tx
            y = b * ty
            ex = (a * a - b * b) * tx ** 3 / a
            ey = (b * b - a * a) * ty ** 3 / b
            rx = x - ex
            ry = y - ey
            qx = px - ex
            qy = py - ey
            r = math.hypot(rx, ry)
            q = math.hypot(qx, qy)
            if q == 0.0:
                break
            tx = min(1.0, max(0.0, (qx * r / q + ex) / a))
            ty = min(1.0, max(0.0, (qy * r / q + ey) / b))
            t = math.hypot(tx, ty)
            if t == 0.0:
                tx, ty = 0.707, 0.707
                break
            tx /= t
            ty /= t

        edge = (
            math.copysign(a * tx, point[0]),
            math.copysign(b * ty, point[1]),
        )
        return edge, math.hypot(point[0] - edge[0], point[1] - edge[1])
