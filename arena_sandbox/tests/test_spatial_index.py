"""Tests for the segment tree index."""
from __future__ import annotations

import pytest

from arena_sandbox.spatial_index import SegmentIndex

SEGMENTS = [
    ((0.0, 5.0), (5.0, 40.0)),
    ((0.0, 0.0), (25.0, 0.0)),
    ((100.0, 100.0), (120.0, 90.0)),
]


@pytest.mark.parametrize("node_capacity", [2, 10])
def test_query_returns_overlapping_keys_sorted(node_capacity):
    index = SegmentIndex(SEGMENTS, node_capacity)
    assert len(index) == 3
    assert index.query((2.0, -3.0), (3.0, 8.0)) == [0, 1]
    assert index.query((110.0, 80.0), (111.0, 120.0)) == [2]
    assert index.query((60.0, 60.0), (61.0, 61.0)) == []


def test_line_keeps_segment_coordinates():
    index = SegmentIndex(SEGMENTS)
    assert list(index.line(2).coords) == [(100.0, 100.0), (120.0, 90.0)]


def test_empty_index():
    assert SegmentIndex([]).query((0.0, 0.0), (1.0, 1.0)) == []


def test_rejects_tiny_node_capacity():
    with pytest.raises(ValueError):
        SegmentIndex(SEGMENTS, node_capacity=1)
