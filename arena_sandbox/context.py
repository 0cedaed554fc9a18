"""Explicit generation context threaded through every layout component."""
from __future__ import annotations

from .ellipse import BoundaryEllipse
from .noise import NoiseConfig, NoiseField
from .prng import LinearCongruentialRandom
from .settings import LayoutSettings


class GeneratorContext:
    """Owns the PRNG stream, the noise field and the settings of one run.

    Components receive the context explicitly; the order in which they call
    :meth:`next` is part of the output contract, so nothing else may draw.
    """

    def __init__(self, seed: int, settings: LayoutSettings) -> None:
        self.seed = int(seed)
        self.settings = settings
        self.random = LinearCongruentialRandom(self.seed)
        self.noise = NoiseField(
            NoiseConfig(detail=settings.noise.detail, y_correction=settings.noise.y_correction)
        )
        self.ellipse = BoundaryEllipse(settings.boundary.radius_x, settings.boundary.radius_y)

    def next(self) -> float:
        return self.random.next()

    def reseed_noise(self) -> None:
        self.noise.seed(self.random.next())

    def sample_noise(self, x: float, y: float, scale: float) -> float:
        return self.noise.sample(x, y, scale)
