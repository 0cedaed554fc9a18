"""Compass snapping and self-intersection removal for wall loops."""
from __future__ import annotations

import math
from bisect import bisect_left, bisect_right
from typing import List, Optional, Tuple

from shapely.geometry import LineString
from shapely.geometry import Point as ShapelyPoint

from .errors import DegenerateGeometryError
from .path import Path
from .spatial_index import DEFAULT_NODE_CAPACITY, SegmentIndex
from .vector import (
    Point,
    angle_difference,
    ceil_to_interval,
    cross,
    distance,
    floor_to_interval,
    from_angle,
    heading,
    length,
    ray_intersection,
    subtract,
)

EPSILON = 1e-9
SNAP_TOLERANCE = 1e-6


def _collinear(a: Point, b: Point, c: Point) -> bool:
    first = subtract(b, a)
    second = subtract(c, b)
    return abs(cross(first, second)) <= EPSILON * length(first) * length(second)


def _reverses(previous_angle: Optional[float], angle: float) -> bool:
    if previous_angle is None:
        return False
    return abs(abs(angle_difference(previous_angle, angle)) - math.pi) <= EPSILON


def _snap_vertex(
    previous: Point,
    current: Point,
    following: Point,
    interval: float,
    previous_angle: Optional[float],
) -> Tuple[Point, float]:
    angle = heading(previous, current)
    back = subtract(current, following)
    low = floor_to_interval(angle, interval)
    high = ceil_to_interval(angle, interval)
    for candidates in ((low, high), (low - interval, high + interval)):
        hits = []
        for candidate in candidates:
            if _reverses(previous_angle, candidate):
                continue
            hit = ray_intersection(previous, from_angle(candidate), following, back, EPSILON)
            if hit is not None:
                hits.append((distance(hit, current), hit, candidate))
        if hits:
            _, hit, candidate = min(hits, key=lambda item: item[0])
            return hit, candidate
    raise DegenerateGeometryError(f"Cannot snap vertex {current} to a multiple of {interval} rad")


def round_to_angle(path: Path, interval: float) -> Path:
    """Move interior vertices so every edge but the last follows the compass.

    Each vertex slides along the ray of its following edge to where a
    snapped ray from the already snapped previous vertex meets it, which
    keeps the direction of that following edge intact. Interior vertices
    collinear with their neighbours carry no shape and are dropped first;
    a snapped edge never doubles straight back over the one before it.
    """

    points = path.points
    widths = path.widths
    if len(points) < 3:
        return path.copy()

    kept = [0]
    for index in range(1, len(points) - 1):
        anchor = points[kept[-1]]
        following = points[index + 1]
        if anchor != following and _collinear(anchor, points[index], following):
            continue
        kept.append(index)
    kept.append(len(points) - 1)

    snapped: List[Point] = [points[0]]
    previous_angle: Optional[float] = None
    for position in range(1, len(kept) - 1):
        vertex, previous_angle = _snap_vertex(
            snapped[-1],
            points[kept[position]],
            points[kept[position + 1]],
            interval,
            previous_angle,
        )
        snapped.append(vertex)
    snapped.append(points[-1])
    return Path(snapped, None if widths is None else [widths[index] for index in kept])


def _contact_points(contact) -> List[Point]:
    if contact.is_empty:
        return []
    if contact.geom_type == "Point":
        return [(contact.x, contact.y)]
    if contact.geom_type == "LineString":
        coords = list(contact.coords)
        return [coords[0], coords[-1]]
    found: List[Point] = []
    for part in contact.geoms:
        found.extend(_contact_points(part))
    return found


def _settle(point: Point, anchors: Tuple[Point, ...]) -> Point:
    for anchor in anchors:
        if distance(point, anchor) <= SNAP_TOLERANCE:
            return anchor
    return point


def _first_contact(
    index: SegmentIndex,
    out: List[Point],
    sources: List[int],
    start: Point,
    end: Point,
    closed: bool,
) -> Optional[Tuple[int, Point]]:
    current = LineString([start, end])
    span = current.length
    adjacent = len(out) - 2
    best: Optional[Tuple[float, int, Point]] = None
    for source in index.query(start, end):
        for key in range(bisect_left(sources, source), bisect_right(sources, source)):
            a = out[key]
            b = out[key + 1]
            contact = LineString([a, b]).intersection(current)
            # The adjacent edge always meets the current one at its start.
            if key == adjacent and contact.geom_type == "Point":
                continue
            for raw in _contact_points(contact):
                along = current.project(ShapelyPoint(raw))
                if key == adjacent and along <= SNAP_TOLERANCE:
                    continue
                if along >= span - SNAP_TOLERANCE:
                    along = span
                    point = end
                else:
                    point = _settle(raw, (a, b, start))
                if closed and key == 0 and point == out[0] and end == out[0]:
                    continue
                if best is None or along < best[0] or (along == best[0] and key < best[1]):
                    best = (along, key, point)
    if best is None:
        return None
    return best[1], best[2]


def remove_loops(path: Path, node_capacity: int = DEFAULT_NODE_CAPACITY) -> Path:
    """Cut out every loop formed by the path touching itself.

    Edges are swept in order. When the current edge crosses, touches or
    runs along an accepted edge, everything after that edge is dropped and
    the first contact point becomes the new vertex; the remainder of the
    current edge is tested again. Accepted edges are always pieces of input
    edges, so candidates come from one tree over the input. Widths are not
    carried through.
    """

    points = path.points
    closed = path.is_closed
    index = SegmentIndex(list(path.edges()), node_capacity)
    out: List[Point] = [points[0]]
    # Input edge each accepted edge was cut from; never decreasing.
    sources: List[int] = []

    for source, target in enumerate(points[1:]):
        while True:
            start = out[-1]
            contact = _first_contact(index, out, sources, start, target, closed)
            if contact is None:
                out.append(target)
                sources.append(source)
                break
            key, point = contact
            kept_source = sources[key]
            out = out[: key + 1]
            sources = sources[:key]
            if point != out[-1]:
                out.append(point)
                sources.append(kept_source)
            if point == target:
                break

    if closed and (len(out) < 4 or out[-1] != out[0]):
        raise DegenerateGeometryError(f"Closed loop collapsed to {len(out)} points")
    if len(out) < 2:
        raise DegenerateGeometryError("Path collapsed to a single point")
    return Path(out)


def find_self_intersections(path: Path) -> List[Tuple[int, int, Point]]:
    """List ``(edge i, edge j, point)`` contacts that break simplicity.

    Adjacent edges only count when they overlap beyond their shared
    vertex, and the closing pair of a closed loop is not compared.
    """

    edges = list(path.edges())
    edge_count = len(edges)
    closed = path.is_closed
    index = SegmentIndex(edges)
    found: List[Tuple[int, int, Point]] = []
    for i in range(edge_count):
        line = index.line(i)
        for j in index.query(*edges[i]):
            if j <= i:
                continue
            contact = line.intersection(index.line(j))
            if contact.is_empty:
                continue
            if j == i + 1 or (closed and i == 0 and j == edge_count - 1):
                if contact.geom_type == "Point":
                    continue
            spot = contact.representative_point()
            found.append((i, j, (spot.x, spot.y)))
    return found


def is_simple(path: Path) -> bool:
    if len(path) < 2:
        return True
    return LineString(path.points).is_simple
