"""Tests for polyline algebra."""
from __future__ import annotations

import pytest

from arena_sandbox.errors import DegenerateGeometryError
from arena_sandbox.path import Path, join_wall, split_for_path


def _l_path() -> Path:
    return Path([(0.0, 0.0), (10.0, 0.0), (10.0, 10.0)], [1.0, 2.0, 3.0])


# //1.- Consecutive duplicates are rejected at construction and on append.
def test_duplicate_points_rejected():
    with pytest.raises(DegenerateGeometryError):
        Path([(0.0, 0.0), (0.0, 0.0)])
    path = Path([(0.0, 0.0), (1.0, 0.0)])
    with pytest.raises(DegenerateGeometryError):
        path.append((1.0, 0.0))


# //2.- Arc length queries clamp to the ends of the path.
def test_point_at_length():
    path = _l_path()
    assert path.get_length() == pytest.approx(20.0)
    assert path.get_point_at_length(-5.0) == (0.0, 0.0)
    assert path.get_point_at_length(5.0) == (5.0, 0.0)
    assert path.get_point_at_length(15.0) == (10.0, 5.0)
    assert path.get_point_at_length(99.0) == (10.0, 10.0)
    assert path.get_width_at_length(5.0) == pytest.approx(1.5)


# //3.- Truncation inserts an interpolated end and keeps widths aligned.
def test_delete_after_length():
    path = _l_path()
    path.delete_after_length(15.0)
    assert path.points == [(0.0, 0.0), (10.0, 0.0), (10.0, 5.0)]
    assert path.widths == pytest.approx([1.0, 2.0, 2.5])
    assert path.get_length() == pytest.approx(15.0)


# //4.- Trimming the start keeps the remainder measured from the new start.
def test_delete_before_length():
    path = _l_path()
    path.delete_before_length(5.0)
    assert path.points == [(5.0, 0.0), (10.0, 0.0), (10.0, 10.0)]
    assert path.widths == pytest.approx([1.5, 2.0, 3.0])
    path.delete_before_length(5.0)
    assert path.points == [(10.0, 0.0), (10.0, 10.0)]


# //5.- Nearest point reports distance and arc length.
def test_nearest_point():
    point, gap, arc = _l_path().nearest_point((12.0, 4.0))
    assert point == pytest.approx((10.0, 4.0))
    assert gap == pytest.approx(2.0)
    assert arc == pytest.approx(14.0)


# //6.- Joining checks every endpoint pairing and keeps the shared point once.
@pytest.mark.parametrize(
    "second",
    [
        [(10.0, 10.0), (0.0, 10.0)],
        [(0.0, 10.0), (10.0, 10.0)],
    ],
)
def test_join_wall_arithmetic(second):
    first = Path([(0.0, 0.0), (10.0, 0.0), (10.0, 10.0)])
    other = Path(second)
    joined = join_wall(first, other)
    assert len(joined) == len(first) + len(other) - 1
    assert joined.get_length() == pytest.approx(first.get_length() + other.get_length())
    assert joined.first == (0.0, 0.0)
    assert joined.last == (0.0, 10.0)


def test_join_wall_at_first_point():
    first = Path([(0.0, 0.0), (10.0, 0.0)])
    before = Path([(-5.0, 0.0), (0.0, 0.0)])
    joined = join_wall(first, before)
    assert joined.points == [(-5.0, 0.0), (0.0, 0.0), (10.0, 0.0)]
    reverse_start = Path([(0.0, 0.0), (0.0, -5.0)])
    joined = join_wall(first, reverse_start)
    assert joined.points == [(0.0, -5.0), (0.0, 0.0), (10.0, 0.0)]


def test_join_wall_closes_loop():
    first = Path([(0.0, 0.0), (10.0, 0.0), (10.0, 10.0)])
    back = Path([(0.0, 0.0), (0.0, 10.0), (10.0, 10.0)])
    loop = join_wall(first, back)
    assert loop.is_closed
    assert len(loop) == 5


def test_join_wall_without_shared_endpoint():
    with pytest.raises(DegenerateGeometryError):
        join_wall(Path([(0.0, 0.0), (1.0, 0.0)]), Path([(5.0, 5.0), (6.0, 5.0)]))


# //7.- Splitting cuts a centred gap and drops empty pieces.
def test_split_for_path():
    path = Path([(0.0, 0.0), (100.0, 0.0)])
    before, after = split_for_path(path, 50.0, 20.0)
    assert before is not None and after is not None
    assert before.last == (40.0, 0.0)
    assert after.first == (60.0, 0.0)
    assert after.last == (100.0, 0.0)

    before, after = split_for_path(path, 5.0, 20.0)
    assert before is None
    assert after is not None and after.first == (15.0, 0.0)

    before, after = split_for_path(path, 95.0, 20.0)
    assert after is None
    assert before is not None and before.last == (85.0, 0.0)
