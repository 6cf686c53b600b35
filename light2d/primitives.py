"""2-D SDF math primitives for the light2d package.

Re-exports all shared helpers from :mod:`light2d._common`, then adds the
primitive SDFs used to build scenes and the 2-D point-transform operators.

All functions accept and return ``numpy.ndarray`` objects and support
broadcasting over arbitrary leading batch dimensions.  A "point array" *p*
has shape ``(..., 2)``; scalar SDF results have shape ``(...,)``.
Negative distances lie inside a shape.
"""

from __future__ import annotations

from typing import Callable

import numpy as np

from ._common import *  # noqa: F401, F403  — re-export shared helpers
from ._common import _F, clamp, dot, dot2, length, safe_div, vec2

_SDFFunc = Callable[[_F], _F]


# ===========================================================================
# 2-D primitive SDFs
# ===========================================================================

def sdCircle(p: _F, center: _F, r: float) -> _F:
    """Circle of radius *r* centred at *center*."""
    return length(p - center) - r


def sdBox2D(p: _F, center: _F, theta: float, b: _F) -> _F:
    """Box centred at *center*, rotated by *theta*, half-extents *b* ``(sx, sy)``.

    The query offset is rotated into box-local axes.  Exact inside and
    along the face normals, an approximation near the outer corners.
    """
    c = np.cos(theta)
    s = np.sin(theta)
    q = p - center
    dx = np.abs(q[..., 0] * c + q[..., 1] * s) - b[0]
    dy = np.abs(q[..., 1] * c - q[..., 0] * s) - b[1]
    outside = length(vec2(np.maximum(dx, 0.0), np.maximum(dy, 0.0)))
    return np.minimum(np.maximum(dx, dy), 0.0) + outside


def sdSegment2D(p: _F, a: _F, b: _F) -> _F:
    """Line segment from *a* to *b* (zero-width).

    A zero-length segment degenerates to the distance from point *a*.
    """
    pa = p - a
    ba = b - a
    h = np.asarray(clamp(safe_div(dot(pa, ba), dot2(ba)), 0.0, 1.0))
    return length(pa - ba * h[..., None])


def sdCapsule2D(p: _F, a: _F, b: _F, r: float) -> _F:
    """Segment from *a* to *b* thickened by radius *r*."""
    return sdSegment2D(p, a, b) - r


def sdTriangle2D(p: _F, p0: _F, p1: _F, p2: _F) -> _F:
    """Triangle from three vertices, either winding.

    Magnitude is the distance to the nearest edge; the sign is negative
    when the three edge cross products agree.
    """
    d = np.minimum(
        np.minimum(sdSegment2D(p, p0, p1), sdSegment2D(p, p1, p2)),
        sdSegment2D(p, p2, p0),
    )
    c0 = _edge_cross(p, p0, p1)
    c1 = _edge_cross(p, p1, p2)
    c2 = _edge_cross(p, p2, p0)
    inside = ((c0 > 0.0) & (c1 > 0.0) & (c2 > 0.0)) | (
        (c0 < 0.0) & (c1 < 0.0) & (c2 < 0.0)
    )
    return np.where(inside, -d, d)


def _edge_cross(p: _F, a: _F, b: _F) -> _F:
    # z-component of (b - a) x (p - a)
    return (b[0] - a[0]) * (p[..., 1] - a[1]) - (b[1] - a[1]) * (p[..., 0] - a[0])


def sdPlane2D(p: _F, point: _F, normal: _F) -> _F:
    """Half-plane bounded by the line through *point*; *normal* points outside."""
    return dot(p - point, normal)


# ===========================================================================
# 2-D transform operators
# ===========================================================================

def opTx2D(p: _F, mat: _F, trans: _F, sdf_func: _SDFFunc) -> _F:
    """Apply 2-D rotation *mat* and translation *trans* to *sdf_func*."""
    p_transformed = np.dot(p, mat.T) - trans
    return sdf_func(p_transformed)


def opMirror2D(p: _F, center: _F) -> _F:
    """Fold *p* into the quadrant ``x >= cx, y >= cy`` around *center*."""
    return np.abs(p - center) + center
