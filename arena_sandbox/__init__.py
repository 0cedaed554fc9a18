"""Arena sandbox package.

Procedural generation of an elliptical arena map from a single seed: the
gravel and grass terrain grid, three dividing walls with their back walls,
tip caps and gates, and the road network leaving the safe zone.
"""

from .config import resolve_seed
from .context import GeneratorContext
from .errors import DegenerateGeometryError, GenerationError
from .geometry import EllipseOverlay, RoadRun, TaggedPolyline, ZoneLayout
from .layout import ZoneLayoutGenerator, generate_layout, generate_layout_with_retries
from .noise import NoiseConfig, NoiseField
from .path import Path, join_wall, split_for_path
from .prng import LinearCongruentialRandom
from .roads import RoadNetworkGrower, RoadNode, RoadTree
from .settings import LayoutSettings, load_layout_settings
from .terrain import TerrainClassifier, TerrainGrid, TerrainSample

__all__ = [
    "resolve_seed",
    "GeneratorContext",
    "DegenerateGeometryError",
    "GenerationError",
    "EllipseOverlay",
    "RoadRun",
    "TaggedPolyline",
    "ZoneLayout",
    "ZoneLayoutGenerator",
    "generate_layout",
    "generate_layout_with_retries",
    "NoiseConfig",
    "NoiseField",
    "Path",
    "join_wall",
    "split_for_path",
    "LinearCongruentialRandom",
    "RoadNetworkGrower",
    "RoadNode",
    "RoadTree",
    "LayoutSettings",
    "load_layout_settings",
    "TerrainClassifier",
    "TerrainGrid",
    "TerrainSample",
]
