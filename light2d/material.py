"""Surface materials attached to the leaves of a scene tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence, Union

import numpy as np
import numpy.typing as npt

_Array = npt.NDArray[np.floating]
ColorLike = Union[float, Sequence[float], _Array]

BLACK = np.zeros(3)


def as_color(value: ColorLike, name: str = "color") -> _Array:
    """Coerce a scalar grey or an RGB triple to a ``(3,)`` float array."""
    arr = np.asarray(value, dtype=float)
    if arr.ndim == 0:
        arr = np.full(3, float(arr))
    if arr.shape != (3,):
        raise ValueError(f"{name} must be a scalar or an RGB triple, got shape {arr.shape}")
    if (arr < 0.0).any() or not np.isfinite(arr).all():
        raise ValueError(f"{name} channels must be finite and >= 0, got {tuple(arr)}")
    return arr


@dataclass(frozen=True, eq=False)
class Material:
    """Optical properties of a region of the scene.

    Attributes:
        emissive: Radiance emitted by the surface (RGB, >= 0).
        reflectivity: Specular weight in ``[0, 1]``.  For refractive
            materials it is replaced by the Fresnel reflectance whenever
            refraction succeeds.
        refractive_index: 0 for opaque materials, otherwise the index of
            refraction of the medium.
        absorption: Beer-Lambert coefficient per unit length (RGB, >= 0).
    """

    emissive: _Array = field(default_factory=lambda: BLACK.copy())
    reflectivity: float = 0.0
    refractive_index: float = 0.0
    absorption: _Array = field(default_factory=lambda: BLACK.copy())

    def __post_init__(self) -> None:
        object.__setattr__(self, "emissive", as_color(self.emissive, "emissive"))
        object.__setattr__(self, "absorption", as_color(self.absorption, "absorption"))
        if not 0.0 <= self.reflectivity <= 1.0:
            raise ValueError(f"reflectivity must be in [0, 1], got {self.reflectivity}")
        if not self.refractive_index >= 0.0:
            raise ValueError(f"refractive_index must be >= 0, got {self.refractive_index}")
        object.__setattr__(self, "reflectivity", float(self.reflectivity))
        object.__setattr__(self, "refractive_index", float(self.refractive_index))

    @property
    def is_emissive(self) -> bool:
        return bool((self.emissive > 0.0).any())

    @property
    def scatters(self) -> bool:
        """Whether a hit on this material spawns secondary rays."""
        return self.reflectivity > 0.0 or self.refractive_index > 0.0

    @classmethod
    def light(cls, emissive: ColorLike) -> Material:
        """Pure emitter: no reflection, refraction or absorption."""
        return cls(emissive=emissive)

    @classmethod
    def glass(
        cls,
        refractive_index: float = 1.5,
        reflectivity: float = 0.2,
        absorption: ColorLike = 0.0,
    ) -> Material:
        """Refractive dielectric, optionally tinted by *absorption*."""
        return cls(
            reflectivity=reflectivity,
            refractive_index=refractive_index,
            absorption=absorption,
        )

    @classmethod
    def mirror(cls, reflectivity: float = 1.0) -> Material:
        """Opaque specular reflector."""
        return cls(reflectivity=reflectivity)

    def __repr__(self) -> str:
        return (
            f"Material(emissive={tuple(self.emissive)}, reflectivity={self.reflectivity}, "
            f"refractive_index={self.refractive_index}, absorption={tuple(self.absorption)})"
        )


OPAQUE = Material()
