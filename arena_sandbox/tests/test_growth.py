"""Tests for random-walk growth and spline connectors."""
from __future__ import annotations

import math

import pytest

from arena_sandbox.context import GeneratorContext
from arena_sandbox.errors import DegenerateGeometryError
from arena_sandbox.growth import connect, connect_linear, grow_path
from arena_sandbox.path import Path
from arena_sandbox.vector import angle_difference, heading


# //1.- Without avoidance the grown length overshoots by less than one step.
@pytest.mark.parametrize("length", [1000.0, 5000.0, 30000.0])
def test_grow_path_length_bounds(ctx, length):
    walls = ctx.settings.walls
    path = grow_path(ctx, length, 0.7, 0.7, walls.convergence)
    total = path.get_length()
    assert total >= length - 1e-6
    assert total < length + walls.step_min + walls.step_range


# //2.- Every step runs along a compass direction.
def test_grow_path_steps_are_snapped(ctx):
    walls = ctx.settings.walls
    path = grow_path(ctx, 8000.0, 2.0, 2.0, walls.convergence)
    for a, b in path.edges():
        ratio = heading(a, b) / walls.compass_interval
        assert ratio == pytest.approx(round(ratio), abs=1e-6)


# //3.- Growth starts just inside the boundary ellipse.
def test_grow_path_starts_inside_boundary(ctx):
    walls = ctx.settings.walls
    angle = 1.1
    path = grow_path(ctx, 2000.0, angle, angle, walls.convergence)
    edge = ctx.ellipse.point_at(angle)
    assert math.dist(path.first, edge) <= walls.inward_offset_max + 1e-6
    assert ctx.ellipse.contains(path.first)


# //4.- The same seed reproduces the same path.
def test_grow_path_is_deterministic(settings):
    paths = []
    for _ in range(2):
        context = GeneratorContext(99, settings)
        context.reseed_noise()
        paths.append(grow_path(context, 6000.0, 3.0, 3.0, settings.walls.convergence).points)
    assert paths[0] == paths[1]


# //5.- Avoidance keeps the new path away from the old one.
def test_grow_path_avoidance_pushes_away(ctx):
    walls = ctx.settings.walls
    fence = Path([(-1000.0, -100.0), (80000.0, -100.0)])
    grown = grow_path(ctx, 6000.0, 0.0, 0.0, walls.convergence, avoid_path=fence)
    for point in grown.points[1:]:
        _, gap, _ = fence.nearest_point(point)
        assert gap >= walls.avoid_clearance_start - 1e-6


# //6.- Connector endpoints are exact and the density law holds.
def test_connect_endpoints_exact():
    a = (123.456, -789.012)
    b = (4567.891, 2345.678)
    chord = math.dist(a, b)
    path = connect(a, (chord, 0.0), b, (0.0, chord))
    assert path.first == a
    assert path.last == b
    assert len(path) == max(1, math.ceil(chord ** 0.65 / 15.0)) + 1


def test_connect_tangent_directions():
    a = (0.0, 0.0)
    b = (1000.0, 0.0)
    path = connect(a, (0.0, 1000.0), b, (0.0, 1000.0))
    # Leaves upward from a and arrives downward into b.
    assert path[1][1] > 0.0
    assert path[-2][1] > 0.0
    assert abs(angle_difference(heading(path[-2], path[-1]), -math.pi / 2.0)) < math.pi / 2.0


def test_connect_linear_is_straight():
    path = connect_linear((0.0, 0.0), (3000.0, 4000.0))
    for point in path.points:
        assert point[0] * 4000.0 == pytest.approx(point[1] * 3000.0)
    assert path.get_length() == pytest.approx(5000.0)


def test_connect_coincident_anchors():
    with pytest.raises(DegenerateGeometryError):
        connect((1.0, 1.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0))
