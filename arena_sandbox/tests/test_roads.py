"""Tests for the branching road network."""
from __future__ import annotations

import math

import pytest

from arena_sandbox.roads import RoadNetworkGrower
from arena_sandbox.terrain import TerrainClassifier
from arena_sandbox.vector import angle_difference


def _grower(ctx) -> RoadNetworkGrower:
    classifier = TerrainClassifier(ctx.noise, ctx.settings.noise, ctx.settings.tiles)
    return RoadNetworkGrower(ctx, classifier)


def _outward_range(ctx, angle: float, spread: float):
    point = ctx.ellipse.point_at(angle)
    normal = ctx.ellipse.outward_normal(point)
    centre = math.atan2(normal[1], normal[0])
    return point, centre, (centre - spread / 2.0, centre + spread / 2.0)


# //1.- Created nodes keep their heading inside the allowed fan.
@pytest.mark.parametrize("angle", [0.0, 1.3, 2.9, 4.4, 5.8])
def test_create_clamps_heading(ctx, angle):
    roads = ctx.settings.roads
    point, centre, heading_range = _outward_range(ctx, angle, roads.root_spread)
    node = _grower(ctx).create(point, heading_range, 200.0)
    assert node.start == point
    assert node.parent is None
    assert node.spread == pytest.approx(roads.root_spread)
    assert abs(angle_difference(centre, node.heading)) <= roads.max_heading_offset + 1e-9


# //2.- Without a fork the road ends exactly at the requested length.
def test_extend_without_fork_reaches_target(ctx):
    grower = _grower(ctx)
    point, _, heading_range = _outward_range(ctx, 0.8, ctx.settings.roads.root_spread)
    node = grower.create(point, heading_range, 100.0)
    children = grower.extend(node, 9000.0, allow_fork=False)
    assert children == []
    assert node.path.get_length() == pytest.approx(9000.0)
    assert node.path.first == point
    assert len(node.path.widths) == len(node.path)
    assert min(node.path.widths) >= ctx.settings.roads.min_thickness


# //3.- Thin roads never accumulate enough to fork.
def test_thin_roads_do_not_fork(ctx):
    grower = _grower(ctx)
    point, _, heading_range = _outward_range(ctx, 2.2, ctx.settings.roads.root_spread)
    root = grower.create(point, heading_range, 20.0)
    tree = grower.grow(root, 4000.0)
    assert len(tree) == 1
    assert tree.root.path.get_length() == pytest.approx(4000.0)


# //4.- Thick roads branch into a flat tree visited in depth-first order.
def test_grow_builds_depth_first_arena(ctx):
    roads = ctx.settings.roads
    grower = _grower(ctx)
    point, _, heading_range = _outward_range(ctx, 3.7, roads.root_spread)
    root = grower.create(point, heading_range, roads.root_max_thickness)
    target = 24000.0
    tree = grower.grow(root, target)

    assert len(tree) > 1
    assert len(tree) % 2 == 1
    assert len(tree) <= roads.max_nodes_per_tree
    for index, node in enumerate(tree.nodes):
        assert node.index == index
        if node.parent is None:
            assert index == 0
            continue
        parent = tree.nodes[node.parent]
        assert node.parent < index
        assert node.depth == parent.depth + 1
        assert node.thickness == pytest.approx(parent.path.widths[-1] / roads.child_thickness_divisor)
    for node in tree.nodes:
        children = tree.children_of(node.index)
        assert len(children) in (0, 2)
        if children:
            assert children[0].index == node.index + 1


# //5.- Every leaf spends exactly the remaining budget of the root.
def test_leaves_spend_root_budget(ctx):
    roads = ctx.settings.roads
    grower = _grower(ctx)
    point, _, heading_range = _outward_range(ctx, 5.1, roads.root_spread)
    tree = grower.grow(grower.create(point, heading_range, 400.0), 20000.0)
    for leaf in tree.leaves():
        assert leaf.traveled + leaf.path.get_length() == pytest.approx(20000.0)
