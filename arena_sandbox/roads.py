"""Stochastic branching road trees growing out of the safe zone."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from .context import GeneratorContext
from .growth import wander_heading
from .path import Path
from .terrain import TerrainClassifier
from .vector import (
    Point,
    add,
    angle_difference,
    from_angle,
    round_to_interval,
    subtract,
)

LOGGER = logging.getLogger(__name__)


# //1.- One road segment in the flat node arena of a tree.
@dataclass
class RoadNode:
    """A road segment; children refer to their parent by arena index."""

    start: Point
    heading: float
    spread: float
    thickness: float
    parent: Optional[int] = None
    index: int = -1
    depth: int = 0
    traveled: float = 0.0
    budget: float = 0.0
    path: Optional[Path] = None

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def length(self) -> float:
        return 0.0 if self.path is None else self.path.get_length()


# //2.- Flat arena of nodes in depth-first order.
@dataclass
class RoadTree:
    nodes: List[RoadNode] = field(default_factory=list)

    @property
    def root(self) -> RoadNode:
        return self.nodes[0]

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[RoadNode]:
        return iter(self.nodes)

    def children_of(self, index: int) -> List[RoadNode]:
        return [node for node in self.nodes if node.parent == index]

    def leaves(self) -> List[RoadNode]:
        parents = {node.parent for node in self.nodes if node.parent is not None}
        return [node for node in self.nodes if node.index not in parents]

    def depth(self) -> int:
        return max(node.depth for node in self.nodes)

    def total_length(self) -> float:
        return sum(node.length() for node in self.nodes)

    def paths(self) -> List[Path]:
        return [node.path for node in self.nodes if node.path is not None and len(node.path) > 1]


class RoadNetworkGrower:
    """Grows road trees using the shared noise field and PRNG stream.

    Headings are chosen by probing the terrain classifier around the
    boundary ellipse, so roads leave the safe zone along existing gravel.
    """

    def __init__(self, ctx: GeneratorContext, classifier: TerrainClassifier) -> None:
        self._ctx = ctx
        self._classifier = classifier
        self._settings = ctx.settings.roads

    # //3.- Scout the terrain around the boundary to pick an initial heading.
    def _scout_heading(self, edge: Point, thickness: float) -> Optional[float]:
        settings = self._settings
        tiles = self._ctx.settings.tiles
        ellipse = self._ctx.ellipse
        outward = ellipse.outward_normal(edge)
        outward_angle = math.atan2(outward[1], outward[0])
        reach_x = thickness + tiles.tile_width * settings.scout_tile_multiple
        reach_y = thickness + tiles.tile_height * settings.scout_tile_multiple

        sum_x = 0.0
        sum_y = 0.0
        hits = 0
        for step in range(settings.scout_directions):
            angle = math.tau * step / settings.scout_directions
            if abs(angle_difference(angle, outward_angle)) > settings.scout_max_deviation:
                continue
            cos_a = math.cos(angle)
            sin_a = math.sin(angle)
            near = (edge[0] + cos_a * thickness, edge[1] + sin_a * thickness)
            if ellipse.contains(near):
                continue
            far = (edge[0] + cos_a * reach_x, edge[1] + sin_a * reach_y)
            if self._classifier.is_road(near) or self._classifier.is_road(far):
                sum_x += cos_a
                sum_y += sin_a
                hits += 1
        if hits == 0 or (sum_x == 0.0 and sum_y == 0.0):
            return None
        return math.atan2(sum_y / hits, sum_x / hits)

    def create(
        self,
        approx_point: Point,
        heading_range: Tuple[float, float],
        thickness: float,
        parent: Optional[RoadNode] = None,
    ) -> RoadNode:
        """Create an unextended node starting at ``approx_point``."""

        range_start, range_end = heading_range
        spread = angle_difference(range_start, range_end)
        centre = range_start + spread / 2.0

        edge, _ = self._ctx.ellipse.project(approx_point)
        scouted = self._scout_heading(edge, thickness)
        heading = centre if scouted is None else scouted

        # //4.- Keep the scouted heading within the allowed fan around the centre.
        offset = angle_difference(centre, heading)
        limit = self._settings.max_heading_offset
        if abs(offset) > limit:
            heading = centre + math.copysign(limit, offset)

        return RoadNode(
            start=approx_point,
            heading=heading,
            spread=spread,
            thickness=thickness,
            parent=None if parent is None else parent.index,
            depth=0 if parent is None else parent.depth + 1,
            traveled=0.0 if parent is None else parent.traveled,
        )

    # //5.- Spawn two children either side of the fork point.
    def _fork(
        self,
        node: RoadNode,
        point: Point,
        heading: float,
        thickness: float,
        distance: float,
        target_length: float,
    ) -> List[RoadNode]:
        settings = self._settings
        perpendicular = from_angle(heading + math.pi / 2.0, thickness / settings.lateral_offset_divisor)
        first_point = subtract(point, perpendicular)
        second_point = add(point, perpendicular)
        first_range = (
            heading - node.spread * (settings.child_spread_min + self._ctx.next() * settings.child_spread_range),
            heading,
        )
        second_range = (
            heading,
            heading + node.spread * (settings.child_spread_min + self._ctx.next() * settings.child_spread_range),
        )
        child_thickness = thickness / settings.child_thickness_divisor
        children = [
            self.create(first_point, first_range, child_thickness, parent=node),
            self.create(second_point, second_range, child_thickness, parent=node),
        ]
        for child in children:
            child.traveled = node.traveled + distance
            child.budget = target_length - distance
        return children

    def extend(self, node: RoadNode, target_length: float, allow_fork: bool = True) -> List[RoadNode]:
        """Grow ``node.path`` and return the children created at a fork.

        The path ends exactly at ``target_length`` unless a fork stops the
        parent early; children are returned unextended.
        """

        ctx = self._ctx
        settings = self._settings
        point = node.start
        heading = node.heading
        thickness = node.thickness
        distance = 0.0
        accumulator = 0.0
        node.budget = target_length
        node.path = Path([point], [thickness])

        while distance < target_length:
            step = settings.step_min + settings.step_range * ctx.next()
            snapped = round_to_interval(heading, settings.compass_interval)
            previous = point
            point = add(point, from_angle(snapped, step))
            distance += step

            # //6.- Close the road at exactly the requested length.
            if distance >= target_length:
                remaining = step - (distance - target_length)
                end = add(previous, from_angle(snapped, remaining))
                if end != node.path.last:
                    node.path.append(end, thickness)
                break

            node.path.append(point, thickness)

            accumulator += max(math.sqrt(thickness) - settings.fork_sqrt_offset, 0.0) / settings.fork_divisor * ctx.next()
            if accumulator > settings.fork_threshold and allow_fork:
                return self._fork(node, point, heading, thickness, distance, target_length)

            heading = wander_heading(
                ctx,
                point,
                heading,
                node.heading,
                settings.convergence,
                settings.curviness,
                settings.curve_noise_offset,
            )
            thickness = self._next_thickness(node, point, thickness)
        return []

    def _next_thickness(self, node: RoadNode, point: Point, thickness: float) -> float:
        settings = self._settings
        (ax, ay), (bx, by) = settings.thickness_noise_offsets
        scale = settings.thickness_noise_scale
        first = (self._ctx.sample_noise(point[0] + ax, point[1] + ay, scale) + 1.0) / 2.0
        second = (self._ctx.sample_noise(point[0] + bx, point[1] + by, scale) + 1.0) / 2.0
        thickness *= first * second * settings.thickness_gain + settings.thickness_bias
        thickness = max(thickness, settings.min_thickness)
        thickness += (node.thickness - thickness) * settings.thickness_damping * self._ctx.next()
        return thickness

    def grow(self, root: RoadNode, target_length: float) -> RoadTree:
        """Extend ``root`` and every descendant into one flat tree.

        The worklist is LIFO with the second child pushed first, which
        visits nodes in the same order as depth-first recursion.
        """

        tree = RoadTree()
        root.budget = target_length
        stack: List[RoadNode] = [root]
        while stack:
            node = stack.pop()
            node.index = len(tree.nodes)
            tree.nodes.append(node)
            allocated = len(tree.nodes) + len(stack)
            allow_fork = allocated + 2 <= self._settings.max_nodes_per_tree
            children = self.extend(node, node.budget, allow_fork=allow_fork)
            stack.extend(reversed(children))
        LOGGER.debug(
            "Grew road tree with %d nodes, depth %d, length %.1f",
            len(tree.nodes),
            tree.depth(),
            tree.total_length(),
        )
        return tree
