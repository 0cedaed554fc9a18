"""Polyline algebra shared by walls, connectors and roads."""
from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Tuple

from shapely.geometry import LineString
from shapely.geometry import Point as ShapelyPoint

from .errors import DegenerateGeometryError
from .vector import Point, distance, lerp


def _lerp_scalar(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


class Path:
    """Ordered polyline with optional per-vertex widths.

    No two consecutive points may be equal; a closed loop repeats its first
    point at the end. ``widths`` (when present) is aligned with ``points``.
    A path under construction may briefly hold a single point.
    """

    def __init__(self, points: Sequence[Point], widths: Optional[Sequence[float]] = None) -> None:
        if not points:
            raise DegenerateGeometryError("Path requires at least one point")
        if widths is not None and len(widths) != len(points):
            raise ValueError("widths must align with points")
        self._points: List[Point] = []
        self._widths: Optional[List[float]] = [] if widths is not None else None
        for index, point in enumerate(points):
            self.append(point, None if widths is None else widths[index])

    # -- Construction -----------------------------------------------------

    def append(self, point: Point, width: Optional[float] = None) -> None:
        point = (float(point[0]), float(point[1]))
        if self._points and self._points[-1] == point:
            raise DegenerateGeometryError(f"Consecutive duplicate point {point}")
        if self._widths is not None:
            if width is None:
                raise ValueError("Path carries widths; append requires a width")
            self._widths.append(float(width))
        self._points.append(point)

    def copy(self) -> "Path":
        return Path(self._points, self._widths)

    def reversed(self) -> "Path":
        widths = None if self._widths is None else self._widths[::-1]
        return Path(self._points[::-1], widths)

    # -- Accessors --------------------------------------------------------

    @property
    def points(self) -> List[Point]:
        return list(self._points)

    @property
    def widths(self) -> Optional[List[float]]:
        return None if self._widths is None else list(self._widths)

    @property
    def first(self) -> Point:
        return self._points[0]

    @property
    def last(self) -> Point:
        return self._points[-1]

    @property
    def is_closed(self) -> bool:
        return len(self._points) > 2 and self._points[0] == self._points[-1]

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    def __getitem__(self, index: int) -> Point:
        return self._points[index]

    def edges(self) -> Iterator[Tuple[Point, Point]]:
        for index in range(len(self._points) - 1):
            yield self._points[index], self._points[index + 1]

    # -- Arc length -------------------------------------------------------

    def get_length(self) -> float:
        return sum(distance(a, b) for a, b in self.edges())

    def get_point_at_length(self, length: float) -> Point:
        """Point at arc length ``length``, clamped to the ends of the path."""

        if length <= 0.0:
            return self._points[0]
        traveled = 0.0
        for a, b in self.edges():
            segment = distance(a, b)
            if traveled + segment >= length:
                return lerp(a, b, (length - traveled) / segment)
            traveled += segment
        return self._points[-1]

    def get_width_at_length(self, length: float) -> float:
        if self._widths is None:
            raise ValueError("Path carries no widths")
        if length <= 0.0:
            return self._widths[0]
        traveled = 0.0
        for index, (a, b) in enumerate(self.edges()):
            segment = distance(a, b)
            if traveled + segment >= length:
                return _lerp_scalar(self._widths[index], self._widths[index + 1], (length - traveled) / segment)
            traveled += segment
        return self._widths[-1]

    def _locate(self, length: float) -> Tuple[int, float]:
        """Return ``(edge index, t)`` for an arc length inside the path."""

        traveled = 0.0
        last_index = len(self._points) - 2
        for index, (a, b) in enumerate(self.edges()):
            segment = distance(a, b)
            if traveled + segment >= length or index == last_index:
                return index, min(1.0, max(0.0, (length - traveled) / segment))
            traveled += segment
        raise DegenerateGeometryError("Path has no edges")

    def delete_after_length(self, length: float) -> None:
        """Truncate in place so the path ends exactly at ``length``."""

        if length <= 0.0:
            raise DegenerateGeometryError("Truncating at a non-positive length leaves no edge")
        if len(self._points) < 2 or length >= self.get_length():
            return
        index, t = self._locate(length)
        if t == 0.0:
            keep = index + 1
            self._points = self._points[:keep]
            if self._widths is not None:
                self._widths = self._widths[:keep]
            return
        end = lerp(self._points[index], self._points[index + 1], t)
        self._points = self._points[: index + 1]
        if self._widths is not None:
            width = _lerp_scalar(self._widths[index], self._widths[index + 1], t)
            self._widths = self._widths[: index + 1] + [width]
        if end != self._points[-1]:
            self._points.append(end)
        elif self._widths is not None:
            self._widths.pop()

    def delete_before_length(self, length: float) -> None:
        """Trim in place so the path starts exactly at ``length``."""

        if len(self._points) < 2 or length <= 0.0:
            return
        if length >= self.get_length():
            raise DegenerateGeometryError("Trimming past the end leaves no edge")
        index, t = self._locate(length)
        if t == 1.0:
            self._points = self._points[index + 1 :]
            if self._widths is not None:
                self._widths = self._widths[index + 1 :]
            return
        start = lerp(self._points[index], self._points[index + 1], t)
        self._points = [start] + self._points[index + 1 :]
        if self._widths is not None:
            width = _lerp_scalar(self._widths[index], self._widths[index + 1], t)
            self._widths = [width] + self._widths[index + 1 :]
        if self._points[0] == self._points[1]:
            self._points.pop(0)
            if self._widths is not None:
                self._widths.pop(0)

    def as_line(self) -> LineString:
        if len(self._points) < 2:
            raise DegenerateGeometryError("A single point has no line geometry")
        return LineString(self._points)

    def nearest_point(self, point: Point) -> Tuple[Point, float, float]:
        """Return ``(closest point, distance, arc length)`` on the path."""

        if len(self._points) == 1:
            only = self._points[0]
            return only, distance(point, only), 0.0
        line = self.as_line()
        query = ShapelyPoint(point)
        arc = line.project(query)
        closest = line.interpolate(arc)
        return (closest.x, closest.y), line.distance(query), arc


def _merge_widths(
    first: Optional[List[float]], second: Optional[List[float]]
) -> Optional[List[float]]:
    if first is None or second is None:
        return None
    return first + second[1:]


def join_wall(a: Path, b: Path) -> Path:
    """Concatenate two wall pieces that share an endpoint.

    The shared point is kept once and ``b`` is reversed when needed. Pieces
    are matched on exact coordinates, so both must come from the same
    anchors.
    """

    if a.last == b.first:
        head, tail = a, b
    elif a.last == b.last:
        head, tail = a, b.reversed()
    elif a.first == b.last:
        head, tail = b, a
    elif a.first == b.first:
        head, tail = b.reversed(), a
    else:
        raise DegenerateGeometryError(
            f"Wall pieces share no endpoint: {a.first}->{a.last} and {b.first}->{b.last}"
        )
    points = head.points + tail.points[1:]
    return Path(points, _merge_widths(head.widths, tail.widths))


def split_for_path(path: Path, at_length: float, gap_width: float) -> Tuple[Optional[Path], Optional[Path]]:
    """Cut a ``gap_width`` wide opening centred at arc length ``at_length``."""

    total = path.get_length()
    cut_start = at_length - gap_width / 2.0
    cut_end = at_length + gap_width / 2.0

    before: Optional[Path] = None
    if cut_start > 0.0:
        before = path.copy()
        before.delete_after_length(cut_start)

    after: Optional[Path] = None
    if cut_end < total:
        after = path.copy()
        after.delete_before_length(cut_end)
    return before, after
