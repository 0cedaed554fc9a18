"""Gravel road versus grass classification of the arena ground."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Tuple

import numpy as np

from .noise import NoiseField
from .settings import NoiseSettings, TileSettings
from .vector import Point

ROAD_COLOR = 0xFFFFFF
GRASS_COLOR = 0x43711D


# //1.- Describe a single classification result.
@dataclass(frozen=True)
class TerrainSample:
    is_road: bool
    confidence: float


# //2.- Signed-coordinate boolean grid backed by a numpy array.
class TerrainGrid:
    """Tile grid addressed with signed ``(i, j)`` indices around the origin."""

    def __init__(self, roads: np.ndarray, tiles: TileSettings) -> None:
        expected = (2 * tiles.grid_half_width + 1, 2 * tiles.grid_half_height + 1)
        if roads.shape != expected:
            raise ValueError(f"Grid shape {roads.shape} does not match tile extent {expected}")
        self._roads = roads.astype(bool, copy=False)
        self._tiles = tiles

    @property
    def roads(self) -> np.ndarray:
        return self._roads

    @property
    def tiles(self) -> TileSettings:
        return self._tiles

    @property
    def bounds(self) -> Tuple[int, int, int, int]:
        """``(min_i, max_i, min_j, max_j)`` inclusive."""

        hw = self._tiles.grid_half_width
        hh = self._tiles.grid_half_height
        return (-hw, hw, -hh, hh)

    @property
    def shape(self) -> Tuple[int, int]:
        return self._roads.shape

    def __getitem__(self, index: Tuple[int, int]) -> bool:
        i, j = index
        min_i, max_i, min_j, max_j = self.bounds
        if not (min_i <= i <= max_i and min_j <= j <= max_j):
            raise IndexError(f"Tile {(i, j)} outside grid bounds {self.bounds}")
        return bool(self._roads[i - min_i, j - min_j])

    def cell_center(self, i: int, j: int) -> Point:
        tw = self._tiles.tile_width
        th = self._tiles.tile_height
        return (float(i * tw + tw // 2), float(j * th + th // 2))

    def cells(self) -> Iterator[Tuple[int, int, bool]]:
        min_i, max_i, min_j, max_j = self.bounds
        for i in range(min_i, max_i + 1):
            for j in range(min_j, max_j + 1):
                yield i, j, bool(self._roads[i - min_i, j - min_j])

    def road_fraction(self) -> float:
        return float(np.count_nonzero(self._roads)) / float(self._roads.size)

    def colors(self) -> np.ndarray:
        """Per-tile RGB colours in the same layout as :attr:`roads`."""

        return np.where(self._roads, ROAD_COLOR, GRASS_COLOR).astype(np.uint32)


class TerrainClassifier:
    """Two-channel noise classifier; thin zero crossings become roads.

    The noise scale shrinks with the distance from the origin so roads are
    dense and twisty in the middle of the map and smooth far away.
    """

    def __init__(self, noise: NoiseField, noise_settings: NoiseSettings, tiles: TileSettings) -> None:
        self._noise = noise
        self._settings = noise_settings
        self._tiles = tiles

    def _scale(self, x: float, y: float) -> float:
        distance_sq = x * x + y * y
        if distance_sq == 0.0:
            return math.inf
        return max(self._settings.min_scale, self._settings.scale_numerator / distance_sq)

    # //3.- Classify a single world position.
    def classify(self, x: float, y: float) -> TerrainSample:
        x = float(x)
        y = float(y)
        scale = self._scale(x, y)
        offset_x, offset_y = self._settings.secondary_offset
        first = abs(self._noise.sample(x, y, scale))
        second = abs(self._noise.sample(x + offset_x, y + offset_y, scale))
        threshold = self._settings.road_threshold
        return TerrainSample(is_road=first < threshold or second < threshold, confidence=min(first, second))

    def is_road(self, point: Point) -> bool:
        return self.classify(point[0], point[1]).is_road

    # //4.- Classify many positions at once with the vectorised sampler.
    def classify_many(self, xs: np.ndarray, ys: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)
        distance_sq = xs * xs + ys * ys
        with np.errstate(divide="ignore"):
            scales = np.where(
                distance_sq == 0.0,
                np.inf,
                np.maximum(self._settings.min_scale, self._settings.scale_numerator / distance_sq),
            )
        offset_x, offset_y = self._settings.secondary_offset
        first = np.abs(self._noise.sample_many(xs, ys, scales))
        second = np.abs(self._noise.sample_many(xs + offset_x, ys + offset_y, scales))
        threshold = self._settings.road_threshold
        return (first < threshold) | (second < threshold), np.minimum(first, second)

    # //5.- Classify every tile centre of the configured grid.
    def classify_grid(self) -> TerrainGrid:
        tiles = self._tiles
        tw = tiles.tile_width
        th = tiles.tile_height
        i = np.arange(-tiles.grid_half_width, tiles.grid_half_width + 1)
        j = np.arange(-tiles.grid_half_height, tiles.grid_half_height + 1)
        xs = (i * tw + tw // 2).astype(np.float64)
        ys = (j * th + th // 2).astype(np.float64)
        grid_x, grid_y = np.meshgrid(xs, ys, indexing="ij")
        roads, _ = self.classify_many(grid_x, grid_y)
        return TerrainGrid(roads, tiles)
