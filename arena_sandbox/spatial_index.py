"""STR-tree index over the edges of a polyline."""
from __future__ import annotations

from typing import List, Sequence, Tuple

from shapely.geometry import LineString
from shapely.strtree import STRtree

from .vector import Point

DEFAULT_NODE_CAPACITY = 10


class SegmentIndex:
    """Static bulk-loaded tree over a fixed list of segments.

    Keys are positions in the segment list. Queries return the keys whose
    bounding boxes overlap the query segment; exact contact tests are left
    to the caller.
    """

    def __init__(self, segments: Sequence[Tuple[Point, Point]], node_capacity: int = DEFAULT_NODE_CAPACITY) -> None:
        if node_capacity < 2:
            raise ValueError("node_capacity must be at least 2")
        self._lines = [LineString([a, b]) for a, b in segments]
        self._tree = STRtree(self._lines, node_capacity=node_capacity)

    def __len__(self) -> int:
        return len(self._lines)

    def line(self, key: int) -> LineString:
        return self._lines[key]

    def query(self, a: Point, b: Point) -> List[int]:
        return sorted(int(key) for key in self._tree.query(LineString([a, b])))
