"""Render configuration.

The defaults render a 1024x1024 image at 256 samples per pixel.  A configuration is
frozen once built; use :meth:`RenderConfig.replace` to derive variants::

    cfg = RenderConfig(width=256, height=256, samples=64, seed=1)
    preview = cfg.replace(samples=8)
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Optional

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
WIDTH = 1024
HEIGHT = 1024
N = 256             # sampled directions per pixel
MAX_DEPTH = 5
MAX_STEP = 64
MAX_DISTANCE = 5.0
EPSILON = 1e-6      # surface threshold and gradient step
BIAS = 1e-4         # origin offset of reflected/refracted rays


@dataclass(frozen=True)
class RenderConfig:
    """Constants consumed by the tracer and the image host.

    Attributes:
        width: Image width in pixels (host only).
        height: Image height in pixels (host only).
        samples: Stratified directions traced per pixel.
        max_depth: Maximum number of reflection/refraction bounces.
        max_step: Maximum marching steps per ray.
        max_distance: Distance after which a ray counts as escaped.
        epsilon: Hit threshold and finite-difference step of the gradient.
        bias: Offset of secondary ray origins off the surface.
        seed: Seed of the random source; ``None`` draws fresh entropy.
    """

    width: int = WIDTH
    height: int = HEIGHT
    samples: int = N
    max_depth: int = MAX_DEPTH
    max_step: int = MAX_STEP
    max_distance: float = MAX_DISTANCE
    epsilon: float = EPSILON
    bias: float = BIAS
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        for name in ("width", "height", "samples", "max_step"):
            value = getattr(self, name)
            if int(value) != value or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        if int(self.max_depth) != self.max_depth or self.max_depth < 0:
            raise ValueError(f"max_depth must be a non-negative integer, got {self.max_depth!r}")
        for name in ("max_distance", "epsilon", "bias"):
            value = getattr(self, name)
            if not value > 0.0:
                raise ValueError(f"{name} must be > 0, got {value!r}")
        if self.seed is not None and self.seed < 0:
            raise ValueError(f"seed must be >= 0, got {self.seed!r}")

    def replace(self, **changes) -> RenderConfig:
        """Return a copy with *changes* applied (validated again)."""
        return dataclasses.replace(self, **changes)
