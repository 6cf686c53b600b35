"""Optical operators applied at ray/surface interactions.

All functions broadcast over leading batch dimensions: directions and
normals have shape ``(..., 2)``, cosines and indices ``(...)``, colours
``(..., 3)``.

Key physics:
    - Mirror reflection about the surface normal
    - Snell's law for refraction, with total internal reflection when
      ``1 - eta² (1 - cos²θi) < 0``
    - Unpolarised Fresnel reflectance (mean of s and p terms)
    - Beer-Lambert transmittance ``exp(-absorption * distance)``
"""

from __future__ import annotations

from typing import Tuple

import numpy as np
import numpy.typing as npt

from ._common import dot, safe_div

_Array = npt.NDArray[np.floating]


def reflect(incident: _Array, normal: _Array) -> _Array:
    """Reflect *incident* about *normal*: ``d - 2 (d·n) n``."""
    incident = np.asarray(incident, dtype=float)
    normal = np.asarray(normal, dtype=float)
    return incident - 2.0 * np.asarray(dot(incident, normal))[..., None] * normal


def refract(incident: _Array, normal: _Array, eta: float | _Array) -> Tuple[_Array, _Array]:
    """Refract *incident* through a surface with relative index *eta*.

    Args:
        incident: Incoming direction (unit length).
        normal: Surface normal on the side of the incoming ray, i.e.
            ``dot(incident, normal) <= 0``.
        eta: Ratio ``n_from / n_to`` of the refractive indices.

    Returns:
        ``(ok, refracted)``.  ``ok`` is false where total internal reflection
        occurs; ``refracted`` is zero there.
    """
    incident = np.asarray(incident, dtype=float)
    normal = np.asarray(normal, dtype=float)
    eta = np.asarray(eta, dtype=float)
    idotn = np.asarray(dot(incident, normal))
    k = 1.0 - eta * eta * (1.0 - idotn * idotn)
    ok = k >= 0.0
    a = eta * idotn + np.sqrt(np.where(ok, k, 0.0))
    refracted = eta[..., None] * incident - a[..., None] * normal
    refracted = np.where(ok[..., None], refracted, 0.0)
    return ok, refracted


def fresnel(
    cos_i: _Array,
    cos_t: _Array,
    eta_i: float | _Array,
    eta_t: float | _Array,
) -> _Array:
    """Unpolarised Fresnel reflectance at a boundary.

    Args:
        cos_i: Cosine between the incident ray and the normal.
        cos_t: Cosine between the transmitted ray and the normal.
        eta_i: Refractive index of the medium the ray comes from.
        eta_t: Refractive index of the medium the ray enters.

    Returns:
        Reflectance in ``[0, 1]``, the mean of the squared s- and
        p-polarised amplitude coefficients.
    """
    cos_i = np.asarray(cos_i, dtype=float)
    cos_t = np.asarray(cos_t, dtype=float)
    rs = safe_div(eta_i * cos_i - eta_t * cos_t, eta_i * cos_i + eta_t * cos_t)
    rp = safe_div(eta_t * cos_i - eta_i * cos_t, eta_t * cos_i + eta_i * cos_t)
    return np.clip(0.5 * (rs * rs + rp * rp), 0.0, 1.0)


def beer_lambert(absorption: _Array, distance: float | _Array) -> _Array:
    """Per-channel transmittance after *distance* through an absorbing medium."""
    absorption = np.asarray(absorption, dtype=float)
    distance = np.asarray(distance, dtype=float)
    return np.exp(-absorption * distance[..., None])
