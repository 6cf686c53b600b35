"""2D geometry primitives and boolean operations for signed distance functions."""

from __future__ import annotations

from typing import Callable, Sequence

import numpy as np
import numpy.typing as npt

from . import primitives as sdf

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------
_Array = npt.NDArray[np.floating]
_SDFFunc = Callable[[_Array], _Array]
_PointMap = Callable[[_Array], _Array]


# ===========================================================================
# Base class
# ===========================================================================

class Geometry2D:
    """Base class for 2D signed-distance-function geometries.

    A ``Geometry2D`` wraps a callable ``func(p) -> distances`` where *p* is
    a ``(..., 2)`` array of 2D points and the return value is a ``(...)``
    array of signed distances.

    Subclasses override ``__init__`` to pass the appropriate primitive SDF to
    ``super().__init__(func)``.

    Implements:
    - Boolean operations: :meth:`union`, :meth:`subtract`, :meth:`intersect`
    - Transforms:         :meth:`translate`, :meth:`rotate`, :meth:`warp`,
                          :meth:`mirror`
    """

    def __init__(self, func: _SDFFunc) -> None:
        self._func = func

    def sdf(self, p: _Array) -> _Array:
        """Evaluate signed distance at *p* (shape ``(..., 2)``)."""
        return self._func(np.asarray(p, dtype=float))

    def __call__(self, p: _Array) -> _Array:
        return self.sdf(p)

    # ------------------------------------------------------------------
    # Boolean operations
    # ------------------------------------------------------------------

    def union(self, other: Geometry2D) -> Geometry2D:
        """Return the union (min) of this shape and *other*."""
        return Geometry2D(lambda p: sdf.opUnion(self.sdf(p), other.sdf(p)))

    def subtract(self, other: Geometry2D) -> Geometry2D:
        """Subtract *other* from this shape."""
        return Geometry2D(lambda p: sdf.opSubtraction(other.sdf(p), self.sdf(p)))

    def intersect(self, other: Geometry2D) -> Geometry2D:
        """Return the intersection (max) of this shape and *other*."""
        return Geometry2D(lambda p: sdf.opIntersection(self.sdf(p), other.sdf(p)))

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------

    def warp(self, point_map: _PointMap) -> Geometry2D:
        """Evaluate this shape at ``point_map(p)`` instead of *p*.

        *point_map* must map ``(..., 2)`` arrays to ``(..., 2)`` arrays.
        It should not stretch space, or distances stop being exact.
        """
        return Geometry2D(lambda p: self.sdf(point_map(p)))

    def translate(self, tx: float, ty: float) -> Geometry2D:
        """Translate by ``(tx, ty)``."""
        t = np.array([tx, ty])
        return self.warp(lambda p: p - t)

    def rotate(self, angle_rad: float, center: Sequence[float] = (0.0, 0.0)) -> Geometry2D:
        """Rotate by *angle_rad* radians (counter-clockwise) about *center*."""
        c = np.cos(angle_rad)
        s = np.sin(angle_rad)
        inv_rot = np.array([[c, s], [-s, c]])
        o = np.array(center, dtype=float)
        return Geometry2D(lambda p: sdf.opTx2D(p - o, inv_rot, -o, self.sdf))

    def mirror(self, cx: float, cy: float) -> Geometry2D:
        """Fold the plane around ``(cx, cy)`` before evaluating.

        The shape's part in the quadrant ``x >= cx, y >= cy`` is repeated
        in the other three quadrants.
        """
        c = np.array([cx, cy])
        return self.warp(lambda p: sdf.opMirror2D(p, c))


# ===========================================================================
# Primitive shapes
# ===========================================================================

def _point(value: Sequence[float], name: str) -> _Array:
    arr = np.array(value, dtype=float)
    if arr.shape != (2,):
        raise ValueError(f"{name} must be a 2-D point, got shape {arr.shape}")
    return arr


class Circle2D(Geometry2D):
    """Circle with given *radius* centred at *center*."""

    def __init__(self, radius: float, center: Sequence[float] = (0.0, 0.0)) -> None:
        if radius < 0.0:
            raise ValueError(f"Circle2D radius must be >= 0, got {radius}")
        c = _point(center, "center")
        self.radius = float(radius)
        self.center = c
        super().__init__(lambda p: sdf.sdCircle(p, c, radius))


class Box2D(Geometry2D):
    """Rectangle with *half_size* ``(hx, hy)`` centred at *center*, rotated by *theta*."""

    def __init__(
        self,
        half_size: Sequence[float],
        center: Sequence[float] = (0.0, 0.0),
        theta: float = 0.0,
    ) -> None:
        b = _point(half_size, "half_size")
        if (b < 0.0).any():
            raise ValueError(f"Box2D half_size must be >= 0, got {tuple(b)}")
        c = _point(center, "center")
        self.half_size = b
        self.center = c
        self.theta = float(theta)
        super().__init__(lambda p: sdf.sdBox2D(p, c, theta, b))


class Segment2D(Geometry2D):
    """Line segment from *point_a* to *point_b* (zero-width)."""

    def __init__(
        self, point_a: Sequence[float], point_b: Sequence[float]
    ) -> None:
        a = _point(point_a, "point_a")
        b = _point(point_b, "point_b")
        super().__init__(lambda p: sdf.sdSegment2D(p, a, b))


class Capsule2D(Geometry2D):
    """Segment from *point_a* to *point_b* with rounded thickness *radius*."""

    def __init__(
        self, point_a: Sequence[float], point_b: Sequence[float], radius: float
    ) -> None:
        if radius < 0.0:
            raise ValueError(f"Capsule2D radius must be >= 0, got {radius}")
        a = _point(point_a, "point_a")
        b = _point(point_b, "point_b")
        super().__init__(lambda p: sdf.sdCapsule2D(p, a, b, radius))


class Triangle2D(Geometry2D):
    """Arbitrary triangle from three 2-D vertices."""

    def __init__(
        self,
        p0: Sequence[float],
        p1: Sequence[float],
        p2: Sequence[float],
    ) -> None:
        v0 = _point(p0, "p0")
        v1 = _point(p1, "p1")
        v2 = _point(p2, "p2")
        super().__init__(lambda p: sdf.sdTriangle2D(p, v0, v1, v2))


class Plane2D(Geometry2D):
    """Half-plane through *point*; *normal* points away from the solid side."""

    def __init__(self, point: Sequence[float], normal: Sequence[float]) -> None:
        o = _point(point, "point")
        n = _point(normal, "normal")
        norm = float(np.linalg.norm(n))
        if norm == 0.0:
            raise ValueError("Plane2D normal must be non-zero")
        n = n / norm
        super().__init__(lambda p: sdf.sdPlane2D(p, o, n))


# ===========================================================================
# Boolean operation classes
# ===========================================================================

class Union2D(Geometry2D):
    """Union of two or more 2-D geometries (minimum SDF)."""

    def __init__(self, *geoms: Geometry2D) -> None:
        if not geoms:
            raise ValueError("Union2D needs at least one geometry")

        def _sdf(p: _Array) -> _Array:
            d = geoms[0].sdf(p)
            for g in geoms[1:]:
                d = sdf.opUnion(d, g.sdf(p))
            return d

        super().__init__(_sdf)


class Intersection2D(Geometry2D):
    """Intersection of two or more 2-D geometries (maximum SDF)."""

    def __init__(self, *geoms: Geometry2D) -> None:
        if not geoms:
            raise ValueError("Intersection2D needs at least one geometry")

        def _sdf(p: _Array) -> _Array:
            d = geoms[0].sdf(p)
            for g in geoms[1:]:
                d = sdf.opIntersection(d, g.sdf(p))
            return d

        super().__init__(_sdf)


class Subtraction2D(Geometry2D):
    """Subtract *cutter* from *base*."""

    def __init__(self, base: Geometry2D, cutter: Geometry2D) -> None:
        super().__init__(
            lambda p: sdf.opSubtraction(cutter.sdf(p), base.sdf(p))
        )
