"""Seeded 2D gradient noise used for every organic wiggle in the layout."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List

import numpy as np

# Ken Perlin's reference permutation.
_PERMUTATION = np.array(
    [
        151, 160, 137, 91, 90, 15, 131, 13, 201, 95, 96, 53, 194, 233, 7, 225,
        140, 36, 103, 30, 69, 142, 8, 99, 37, 240, 21, 10, 23, 190, 6, 148,
        247, 120, 234, 75, 0, 26, 197, 62, 94, 252, 219, 203, 117, 35, 11, 32,
        57, 177, 33, 88, 237, 149, 56, 87, 174, 20, 125, 136, 171, 168, 68, 175,
        74, 165, 71, 134, 139, 48, 27, 166, 77, 146, 158, 231, 83, 111, 229, 122,
        60, 211, 133, 230, 220, 105, 92, 41, 55, 46, 245, 40, 244, 102, 143, 54,
        65, 25, 63, 161, 1, 216, 80, 73, 209, 76, 132, 187, 208, 89, 18, 169,
        200, 196, 135, 130, 116, 188, 159, 86, 164, 100, 109, 198, 173, 186, 3, 64,
        52, 217, 226, 250, 124, 123, 5, 202, 38, 147, 118, 126, 255, 82, 85, 212,
        207, 206, 59, 227, 47, 16, 58, 17, 182, 189, 28, 42, 223, 183, 170, 213,
        119, 248, 152, 2, 44, 154, 163, 70, 221, 153, 101, 155, 167, 43, 172, 9,
        129, 22, 39, 253, 19, 98, 108, 110, 79, 113, 224, 232, 178, 185, 112, 104,
        218, 246, 97, 228, 251, 34, 242, 193, 238, 210, 144, 12, 191, 179, 162, 241,
        81, 51, 145, 235, 249, 14, 239, 107, 49, 192, 214, 31, 181, 199, 106, 157,
        184, 84, 204, 176, 115, 121, 50, 45, 127, 4, 150, 254, 138, 236, 205, 93,
        222, 114, 67, 29, 24, 72, 243, 141, 128, 195, 78, 66, 215, 61, 156, 180,
    ],
    dtype=np.int64,
)

# The 12 classic 3D gradients; only the planar components are used.
_GRADIENTS = np.array(
    [
        (1.0, 1.0), (-1.0, 1.0), (1.0, -1.0), (-1.0, -1.0),
        (1.0, 0.0), (-1.0, 0.0), (1.0, 0.0), (-1.0, 0.0),
        (0.0, 1.0), (0.0, -1.0), (0.0, 1.0), (0.0, -1.0),
    ],
    dtype=np.float64,
)


@dataclass(frozen=True)
class NoiseConfig:
    detail: float
    y_correction: float


def _fade(t: float) -> float:
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _lerp(a: float, b: float, t: float) -> float:
    return (1.0 - t) * a + t * b


def _fade_array(t: np.ndarray) -> np.ndarray:
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _lerp_array(a: np.ndarray, b: np.ndarray, t: np.ndarray) -> np.ndarray:
    return (1.0 - t) * a + t * b


class NoiseField:
    """Classic Perlin gradient noise driven by a permutation table.

    The tables are rebuilt by :meth:`seed` and never touched while sampling,
    so every sample is a pure function of the seed and the coordinates.
    Scalar and vectorised samplers perform the same floating point
    operations in the same order and therefore agree bit for bit.
    """

    def __init__(self, config: NoiseConfig) -> None:
        self._config = config
        self._perm = np.zeros(512, dtype=np.int64)
        self._grad = np.zeros((512, 2), dtype=np.float64)
        self._perm_list: List[int] = [0] * 512
        self._grad_x: List[float] = [0.0] * 512
        self._grad_y: List[float] = [0.0] * 512
        self._seed_int(0)

    @property
    def config(self) -> NoiseConfig:
        return self._config

    def seed(self, value: float) -> None:
        """Rebuild the tables from a float, usually a fresh PRNG draw."""

        self._seed_int(int(value * 65536.0))

    def _seed_int(self, seed: int) -> None:
        if seed < 256:
            seed |= seed << 8
        index = np.arange(256)
        low = seed & 255
        high = (seed >> 8) & 255
        values = np.where(index & 1 == 1, _PERMUTATION ^ low, _PERMUTATION ^ high)
        self._perm = np.concatenate([values, values])
        self._grad = _GRADIENTS[self._perm % 12]
        self._perm_list = [int(v) for v in self._perm]
        self._grad_x = [float(v) for v in self._grad[:, 0]]
        self._grad_y = [float(v) for v in self._grad[:, 1]]

    def perlin2(self, x: float, y: float) -> float:
        x_floor = math.floor(x)
        y_floor = math.floor(y)
        x = x - x_floor
        y = y - y_floor
        xi = int(x_floor) & 255
        yi = int(y_floor) & 255

        perm = self._perm_list
        gx = self._grad_x
        gy = self._grad_y
        i00 = xi + perm[yi]
        i01 = xi + perm[yi + 1]
        i10 = xi + 1 + perm[yi]
        i11 = xi + 1 + perm[yi + 1]

        n00 = gx[i00] * x + gy[i00] * y
        n01 = gx[i01] * x + gy[i01] * (y - 1.0)
        n10 = gx[i10] * (x - 1.0) + gy[i10] * y
        n11 = gx[i11] * (x - 1.0) + gy[i11] * (y - 1.0)

        u = _fade(x)
        return _lerp(_lerp(n00, n10, u), _lerp(n01, n11, u), _fade(y))

    def sample(self, x: float, y: float, scale: float) -> float:
        """Sample in world units; larger ``scale`` means smoother noise."""

        factor = self._config.detail / scale
        return self.perlin2(x * factor, y * factor / self._config.y_correction)

    def perlin2_many(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        x_floor = np.floor(x)
        y_floor = np.floor(y)
        x = x - x_floor
        y = y - y_floor
        xi = x_floor.astype(np.int64) & 255
        yi = y_floor.astype(np.int64) & 255

        perm = self._perm
        grad = self._grad
        g00 = grad[xi + perm[yi]]
        g01 = grad[xi + perm[yi + 1]]
        g10 = grad[xi + 1 + perm[yi]]
        g11 = grad[xi + 1 + perm[yi + 1]]

        n00 = g00[..., 0] * x + g00[..., 1] * y
        n01 = g01[..., 0] * x + g01[..., 1] * (y - 1.0)
        n10 = g10[..., 0] * (x - 1.0) + g10[..., 1] * y
        n11 = g11[..., 0] * (x - 1.0) + g11[..., 1] * (y - 1.0)

        u = _fade_array(x)
        return _lerp_array(_lerp_array(n00, n10, u), _lerp_array(n01, n11, u), _fade_array(y))

    def sample_many(self, xs: np.ndarray, ys: np.ndarray, scales: np.ndarray) -> np.ndarray:
        """Vectorised :meth:`sample` over equally shaped arrays."""

        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)
        factor = self._config.detail / np.asarray(scales, dtype=np.float64)
        return self.perlin2_many(xs * factor, ys * factor / self._config.y_correction)
