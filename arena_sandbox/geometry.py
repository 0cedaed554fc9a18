"""Data structures describing the generated arena layout."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .path import Path
from .roads import RoadTree
from .settings import LayoutSettings
from .terrain import TerrainGrid
from .vector import Point

WALL_COLOR = 0xFF0000
GATE_COLOR = 0xFF8800
ROAD_COLOR = 0xFFFFBB
SAFE_ZONE_COLOR = 0x39A8E7


@dataclass(frozen=True)
class TaggedPolyline:
    """A polyline handed to the rasterizer with its styling."""

    kind: str
    points: Tuple[Point, ...]
    color: int
    alpha: float = 1.0
    widths: Optional[Tuple[float, ...]] = None

    @classmethod
    def from_path(
        cls, kind: str, path: Path, color: int, alpha: float = 1.0, with_widths: bool = False
    ) -> "TaggedPolyline":
        widths = path.widths if with_widths else None
        return cls(
            kind=kind,
            points=tuple(path.points),
            color=color,
            alpha=alpha,
            widths=None if widths is None else tuple(widths),
        )


@dataclass(frozen=True)
class EllipseOverlay:
    """Translucent safe zone drawn over the terrain."""

    radius_x: float
    radius_y: float
    color: int = SAFE_ZONE_COLOR
    alpha: float = 0.5


@dataclass(frozen=True)
class RoadRun:
    """Contiguous road samples on the boundary ring.

    ``start_angle`` and ``end_angle`` are the parametric angles of the first
    and last road sample of the run, ``mouth`` the boundary point halfway
    between them and ``chord`` the straight distance across the run.
    """

    start_index: int
    sample_count: int
    start_angle: float
    end_angle: float
    mouth: Point
    mouth_angle: float
    chord: float


@dataclass
class ZoneLayout:
    seed: int
    settings: LayoutSettings
    terrain: TerrainGrid
    overlay: EllipseOverlay
    divider_angles: List[float] = field(default_factory=list)
    dividers: List[Path] = field(default_factory=list)
    walls: List[Tuple[Path, Path]] = field(default_factory=list)
    back_walls: List[Path] = field(default_factory=list)
    caps: List[Path] = field(default_factory=list)
    gate_walls: List[Path] = field(default_factory=list)
    gates: List[List[Path]] = field(default_factory=list)
    outer_loop: Optional[Path] = None
    zone_loops: List[Path] = field(default_factory=list)
    road_runs: List[RoadRun] = field(default_factory=list)
    road_trees: List[RoadTree] = field(default_factory=list)

    def polylines(self) -> List[TaggedPolyline]:
        """Every drawable polyline in draw order."""

        lines: List[TaggedPolyline] = []
        for left, right in self.walls:
            lines.append(TaggedPolyline.from_path("wall", left, WALL_COLOR))
            lines.append(TaggedPolyline.from_path("wall", right, WALL_COLOR))
        for cap in self.caps:
            lines.append(TaggedPolyline.from_path("cap", cap, WALL_COLOR))
        for back in self.back_walls:
            lines.append(TaggedPolyline.from_path("back_wall", back, WALL_COLOR))
        for pieces in self.gates:
            for piece in pieces:
                lines.append(TaggedPolyline.from_path("gate", piece, GATE_COLOR))
        for tree in self.road_trees:
            for path in tree.paths():
                lines.append(TaggedPolyline.from_path("road", path, ROAD_COLOR, with_widths=True))
        return lines

    def road_node_count(self) -> int:
        return sum(len(tree) for tree in self.road_trees)

    def summary(self) -> str:
        lines: Sequence[str] = (
            f"seed: {self.seed}",
            f"terrain: {self.terrain.shape[0]}x{self.terrain.shape[1]} tiles, "
            f"{self.terrain.road_fraction() * 100.0:.1f}% road",
            f"dividers: {len(self.dividers)} "
            f"({', '.join(f'{divider.get_length():.0f}' for divider in self.dividers)})",
            f"zone loops: {', '.join(str(len(loop)) for loop in self.zone_loops)} points",
            f"outer loop: {0 if self.outer_loop is None else len(self.outer_loop)} points",
            f"gate pieces: {sum(len(pieces) for pieces in self.gates)}",
            f"road runs: {len(self.road_runs)}",
            f"road trees: {len(self.road_trees)} ({self.road_node_count()} nodes)",
        )
        return "\n".join(lines)
