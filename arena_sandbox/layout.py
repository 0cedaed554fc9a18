"""High-level arena generation orchestrating walls, gates and roads."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from functools import reduce
from typing import List, Optional, Sequence, Tuple

from .context import GeneratorContext
from .errors import GenerationError
from .geometry import EllipseOverlay, RoadRun, ZoneLayout
from .growth import connect, connect_linear, grow_path
from .offset import thicken
from .path import Path, join_wall, split_for_path
from .roads import RoadNetworkGrower, RoadTree
from .settings import LayoutSettings, load_layout_settings
from .shaping import remove_loops, round_to_angle
from .terrain import TerrainClassifier
from .vector import TAU, angle_difference, distance, scale

LOGGER = logging.getLogger(__name__)


# //1.- A grown divider with its two thickened sides.
@dataclass(frozen=True)
class Divider:
    angle: float
    centre: Path
    left: Path
    right: Path


# //2.- Describe an opening cut into a gate wall.
@dataclass(frozen=True)
class GateOpening:
    at_length: float
    gap_width: float


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _ccw_offset(angle: float, origin: float) -> float:
    return (angle - origin) % TAU


def cut_openings(gate: Path, openings: Sequence[GateOpening]) -> List[Path]:
    """Split ``gate`` at every opening, returning the remaining pieces in order.

    Openings are cut from the far end backwards so every arc length stays
    measured from the start of the untouched gate.
    """

    remaining: Optional[Path] = gate.copy()
    tails: List[Path] = []
    for opening in sorted(openings, key=lambda item: item.at_length, reverse=True):
        if remaining is None:
            break
        before, after = split_for_path(remaining, opening.at_length, opening.gap_width)
        if after is not None:
            tails.insert(0, after)
        remaining = before
    pieces = [] if remaining is None else [remaining]
    return pieces + tails


class ZoneLayoutGenerator:
    """Sequence one full generation run from a seed.

    The PRNG draw order is fixed: noise reseed, divider angles, one length
    draw before each divider grows, then one length draw before each road
    tree grows. Terrain and ring scans never draw.
    """

    def __init__(self, settings: Optional[LayoutSettings] = None) -> None:
        self._settings = settings or load_layout_settings()

    @property
    def settings(self) -> LayoutSettings:
        return self._settings

    def generate(self, seed: int) -> ZoneLayout:
        ctx = GeneratorContext(seed, self._settings)
        try:
            layout = self._generate(ctx)
        except GenerationError:
            LOGGER.error("Layout generation failed for seed %d", seed)
            raise
        LOGGER.info(
            "Generated layout for seed %d: %d road runs, %d road nodes",
            seed,
            len(layout.road_runs),
            layout.road_node_count(),
        )
        return layout

    # //3.- Run every phase in draw order.
    def _generate(self, ctx: GeneratorContext) -> ZoneLayout:
        settings = ctx.settings
        ctx.reseed_noise()

        classifier = TerrainClassifier(ctx.noise, settings.noise, settings.tiles)
        terrain = classifier.classify_grid()
        LOGGER.debug("Classified %d tiles, %.3f road", terrain.roads.size, terrain.road_fraction())

        dividers = self._grow_dividers(ctx)
        LOGGER.debug("Grew dividers at angles %s", [round(divider.angle, 3) for divider in dividers])

        back_walls, caps, gate_walls = self._connect_zones(ctx, dividers)

        road_runs = self.scan_ring(ctx, classifier)
        LOGGER.debug("Found %d road runs on the boundary ring", len(road_runs))

        gates = self._open_gates(ctx, dividers, gate_walls, road_runs)

        outer_pieces = [piece for pair in zip(caps, back_walls) for piece in pair]
        outer_loop = self._clean_loop(ctx, reduce(join_wall, outer_pieces))
        zone_loops = []
        for index, divider in enumerate(dividers):
            following = dividers[(index + 1) % len(dividers)]
            loop = reduce(join_wall, [divider.left, back_walls[index], following.right, gate_walls[index]])
            zone_loops.append(self._clean_loop(ctx, loop))
        LOGGER.debug("Cleaned outer loop and %d zone loops", len(zone_loops))

        road_trees = self._grow_roads(ctx, classifier, road_runs)

        return ZoneLayout(
            seed=ctx.seed,
            settings=settings,
            terrain=terrain,
            overlay=EllipseOverlay(radius_x=settings.boundary.radius_x, radius_y=settings.boundary.radius_y),
            divider_angles=[divider.angle for divider in dividers],
            dividers=[divider.centre for divider in dividers],
            walls=[(divider.left, divider.right) for divider in dividers],
            back_walls=back_walls,
            caps=caps,
            gate_walls=gate_walls,
            gates=gates,
            outer_loop=outer_loop,
            zone_loops=zone_loops,
            road_runs=road_runs,
            road_trees=road_trees,
        )

    # //4.- Pick the three divider angles and grow them in draw order.
    def _grow_dividers(self, ctx: GeneratorContext) -> List[Divider]:
        walls = ctx.settings.walls
        jitter = walls.angle_jitter
        start = ctx.next() * TAU
        end = start + math.pi + ctx.next() * jitter - jitter / 2.0
        middle = start + angle_difference(start, end) / 2.0 + math.pi + ctx.next() * jitter - jitter / 2.0

        grown: List[Divider] = []
        for angle in (start, end, middle):
            length = walls.length_min + walls.length_range * ctx.next()
            avoid = self._avoid_target(angle, grown)
            centre = grow_path(ctx, length, angle, angle, walls.convergence, avoid)
            left, right = thicken(ctx, centre, walls.start_thickness, walls.end_thickness)
            grown.append(Divider(angle=angle, centre=centre, left=left, right=right))
        return sorted(grown, key=lambda divider: _ccw_offset(divider.angle, start))

    @staticmethod
    def _avoid_target(angle: float, grown: Sequence[Divider]) -> Optional[Path]:
        if not grown:
            return None
        nearest = grown[0]
        for candidate in grown[1:]:
            if abs(angle_difference(angle, candidate.angle)) < abs(angle_difference(angle, nearest.angle)):
                nearest = candidate
        return nearest.centre

    # //5.- Derive back walls, tip caps and gate walls between neighbouring dividers.
    def _connect_zones(
        self, ctx: GeneratorContext, dividers: Sequence[Divider]
    ) -> Tuple[List[Path], List[Path], List[Path]]:
        walls = ctx.settings.walls
        ellipse = ctx.ellipse
        density = (walls.connector_density_exponent, walls.connector_density_divisor)
        back_walls: List[Path] = []
        caps: List[Path] = []
        gates: List[Path] = []
        for index, divider in enumerate(dividers):
            following = dividers[(index + 1) % len(dividers)]

            tip_a = divider.left.last
            tip_b = following.right.last
            reach = distance(tip_a, tip_b) * walls.back_wall_tangent_scale
            back_walls.append(
                connect(
                    tip_a,
                    scale(ellipse.outward_normal(tip_a), reach),
                    tip_b,
                    scale(ellipse.outward_normal(tip_b), reach),
                    *density,
                )
            )

            caps.append(connect_linear(divider.right.last, divider.left.last, *density))

            base_a = divider.left.first
            base_b = following.right.first
            reach = distance(base_a, base_b) * walls.gate_tangent_scale
            gates.append(
                connect(
                    base_a,
                    scale(ellipse.tangent_at(ellipse.parametric_angle(base_a)), reach),
                    base_b,
                    scale(ellipse.tangent_at(ellipse.parametric_angle(base_b)), -reach),
                    *density,
                )
            )
        return back_walls, caps, gates

    # //6.- Scan the boundary ring for contiguous runs of road samples.
    def scan_ring(self, ctx: GeneratorContext, classifier: TerrainClassifier) -> List[RoadRun]:
        ellipse = ctx.ellipse
        count = ctx.settings.boundary.ring_samples
        step = TAU / count
        angles = [index * step for index in range(count)]
        roads = [classifier.is_road(ellipse.point_at(angle)) for angle in angles]

        if all(roads):
            return [self._make_run(ctx, 0, count, step)]
        first_grass = roads.index(False)

        runs: List[RoadRun] = []
        run_start: Optional[int] = None
        for offset in range(count + 1):
            index = first_grass + offset
            is_road = roads[index % count]
            if is_road and run_start is None:
                run_start = index
            elif not is_road and run_start is not None:
                runs.append(self._make_run(ctx, run_start % count, index - run_start, step))
                run_start = None
        return runs

    @staticmethod
    def _make_run(ctx: GeneratorContext, start_index: int, sample_count: int, step: float) -> RoadRun:
        ellipse = ctx.ellipse
        start_angle = start_index * step
        end_angle = start_angle + (sample_count - 1) * step
        mouth_angle = (start_angle + end_angle) / 2.0
        return RoadRun(
            start_index=start_index,
            sample_count=sample_count,
            start_angle=start_angle,
            end_angle=end_angle,
            mouth=ellipse.point_at(mouth_angle),
            mouth_angle=mouth_angle,
            chord=distance(ellipse.point_at(start_angle), ellipse.point_at(end_angle)),
        )

    def _root_thickness(self, run: RoadRun) -> float:
        roads = self._settings.roads
        return _clamp(run.chord, roads.root_min_thickness, roads.root_max_thickness)

    # //7.- Cut an opening into the gate of whichever zone each run mouth faces.
    def _open_gates(
        self,
        ctx: GeneratorContext,
        dividers: Sequence[Divider],
        gate_walls: Sequence[Path],
        road_runs: Sequence[RoadRun],
    ) -> List[List[Path]]:
        ellipse = ctx.ellipse
        gap_scale = ctx.settings.roads.opening_gap_scale
        pieces: List[List[Path]] = []
        for index, gate in enumerate(gate_walls):
            start = ellipse.parametric_angle(dividers[index].left.first)
            end = ellipse.parametric_angle(dividers[(index + 1) % len(dividers)].right.first)
            span = _ccw_offset(end, start)
            openings = [
                GateOpening(
                    at_length=gate.nearest_point(run.mouth)[2],
                    gap_width=self._root_thickness(run) * gap_scale,
                )
                for run in road_runs
                if _ccw_offset(run.mouth_angle, start) < span
            ]
            pieces.append(cut_openings(gate, openings))
        return pieces

    # //8.- Snap a closed loop to the compass and remove its self-intersections.
    @staticmethod
    def _clean_loop(ctx: GeneratorContext, loop: Path) -> Path:
        walls = ctx.settings.walls
        return remove_loops(round_to_angle(loop, walls.compass_interval), walls.index_node_capacity)

    # //9.- Grow one road tree per run in scan order.
    def _grow_roads(
        self, ctx: GeneratorContext, classifier: TerrainClassifier, road_runs: Sequence[RoadRun]
    ) -> List[RoadTree]:
        roads = ctx.settings.roads
        grower = RoadNetworkGrower(ctx, classifier)
        trees: List[RoadTree] = []
        for run in road_runs:
            length = roads.length_base + roads.length_range * ctx.next()
            normal = ctx.ellipse.outward_normal(run.mouth)
            centre = math.atan2(normal[1], normal[0])
            heading_range = (centre - roads.root_spread / 2.0, centre + roads.root_spread / 2.0)
            root = grower.create(run.mouth, heading_range, self._root_thickness(run))
            trees.append(grower.grow(root, length))
        return trees


def generate_layout(seed: int, settings: Optional[LayoutSettings] = None) -> ZoneLayout:
    return ZoneLayoutGenerator(settings).generate(seed)


def generate_layout_with_retries(
    seed: int, attempts: int = 5, settings: Optional[LayoutSettings] = None
) -> ZoneLayout:
    """Generate with ``seed``, falling back to ``seed + 1``, ``seed + 2`` and so on."""

    if attempts <= 0:
        raise ValueError("attempts must be positive")
    generator = ZoneLayoutGenerator(settings)
    last_error: Optional[GenerationError] = None
    for attempt in range(attempts):
        try:
            return generator.generate(seed + attempt)
        except GenerationError as exc:
            LOGGER.warning("Seed %d failed (%s), retrying", seed + attempt, exc)
            last_error = exc
    raise GenerationError(
        f"No usable layout for seeds {seed}..{seed + attempts - 1}: {last_error}"
    ) from last_error
