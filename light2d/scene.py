"""Scene trees: geometry plus materials, composed with boolean operators.

A scene is a small tagged-variant tree.  Leaves pair a :class:`Geometry2D`
with a :class:`Material`; inner nodes combine children with union,
subtraction or intersection, or pre-transform the query point (``Warp``).
Every node answers two queries on ``(..., 2)`` point arrays:

* :meth:`SceneNode.distance`: signed distance only, used by the ray
  marcher and the gradient, where it is called many times per ray;
* :meth:`SceneNode.evaluate`: a :class:`SurfaceSample` carrying the
  material that is active at each point.

Example::

    from light2d import Circle2D, Box2D, Leaf, Material

    glass = Leaf(Box2D((0.1, 0.2), center=(0.5, 0.5)), Material.glass())
    lamp  = Leaf(Circle2D(0.05, center=(0.2, 0.2)), Material.light(4.0))
    scene = glass | lamp
    scene.evaluate([[0.5, 0.5]]).signed_distance   # -> array([-0.1])
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np
import numpy.typing as npt

from . import primitives as sdf
from .config import EPSILON
from .geometry import Geometry2D
from .material import Material

_Array = npt.NDArray[np.floating]
_PointMap = Callable[[_Array], _Array]


# ===========================================================================
# Surface samples
# ===========================================================================

@dataclass(frozen=True, eq=False)
class SurfaceSample:
    """Scene query result for an array of points.

    For ``M`` query points of shape ``(..., 2)`` the scalar fields have shape
    ``(...)`` and the colour fields ``(..., 3)``.
    """

    signed_distance: _Array
    emissive: _Array
    reflectivity: _Array
    refractive_index: _Array
    absorption: _Array

    @classmethod
    def from_material(cls, signed_distance: _Array, material: Material) -> SurfaceSample:
        """Broadcast a single *material* over every point of *signed_distance*."""
        sd = np.asarray(signed_distance, dtype=float)
        shape = sd.shape
        return cls(
            signed_distance=sd,
            emissive=np.broadcast_to(material.emissive, shape + (3,)),
            reflectivity=np.full(shape, material.reflectivity),
            refractive_index=np.full(shape, material.refractive_index),
            absorption=np.broadcast_to(material.absorption, shape + (3,)),
        )

    def select(self, mask: _Array, other: SurfaceSample) -> SurfaceSample:
        """Take this sample where *mask* is true, *other* elsewhere."""
        m3 = np.asarray(mask)[..., None]
        return SurfaceSample(
            signed_distance=np.where(mask, self.signed_distance, other.signed_distance),
            emissive=np.where(m3, self.emissive, other.emissive),
            reflectivity=np.where(mask, self.reflectivity, other.reflectivity),
            refractive_index=np.where(mask, self.refractive_index, other.refractive_index),
            absorption=np.where(m3, self.absorption, other.absorption),
        )

    def with_distance(self, signed_distance: _Array) -> SurfaceSample:
        """Same materials, new distances."""
        return SurfaceSample(
            signed_distance=signed_distance,
            emissive=self.emissive,
            reflectivity=self.reflectivity,
            refractive_index=self.refractive_index,
            absorption=self.absorption,
        )


# ===========================================================================
# Scene nodes
# ===========================================================================

class SceneNode:
    """Base class of scene trees.

    Subclasses implement :meth:`distance` and :meth:`evaluate`; both must be
    pure functions of the query points.
    """

    def distance(self, p: _Array) -> _Array:
        """Signed distance at *p* (shape ``(..., 2)``)."""
        raise NotImplementedError

    def evaluate(self, p: _Array) -> SurfaceSample:
        """Signed distance and active material at *p*."""
        raise NotImplementedError

    def __call__(self, p: _Array) -> SurfaceSample:
        return self.evaluate(p)

    # ------------------------------------------------------------------
    # Tree builders
    # ------------------------------------------------------------------

    def union(self, other: SceneNode) -> Union:
        return Union(self, other)

    def subtract(self, other: SceneNode) -> Subtract:
        return Subtract(self, other)

    def intersect(self, other: SceneNode) -> Intersection:
        return Intersection(self, other)

    def warp(self, point_map: _PointMap) -> Warp:
        return Warp(self, point_map)

    def mirror(self, cx: float, cy: float) -> Warp:
        """Fold the query point into the quadrant ``x >= cx, y >= cy``."""
        c = np.array([cx, cy], dtype=float)
        return Warp(self, lambda p: sdf.opMirror2D(p, c))

    __or__ = union
    __sub__ = subtract
    __and__ = intersect


class Leaf(SceneNode):
    """A geometry filled with one material."""

    def __init__(self, geometry: Geometry2D, material: Material) -> None:
        self.geometry = geometry
        self.material = material

    def distance(self, p: _Array) -> _Array:
        return self.geometry.sdf(p)

    def evaluate(self, p: _Array) -> SurfaceSample:
        return SurfaceSample.from_material(self.geometry.sdf(p), self.material)

    def __repr__(self) -> str:
        return f"Leaf({type(self.geometry).__name__}, {self.material!r})"


class Union(SceneNode):
    """Nearest surface wins; ties go to *right*."""

    def __init__(self, left: SceneNode, right: SceneNode) -> None:
        self.left = left
        self.right = right

    def distance(self, p: _Array) -> _Array:
        return sdf.opUnion(self.left.distance(p), self.right.distance(p))

    def evaluate(self, p: _Array) -> SurfaceSample:
        a = self.left.evaluate(p)
        b = self.right.evaluate(p)
        return a.select(a.signed_distance < b.signed_distance, b)

    def __repr__(self) -> str:
        return f"Union({self.left!r}, {self.right!r})"


class Subtract(SceneNode):
    """Carve *right* out of *left*; the material stays that of *left*."""

    def __init__(self, left: SceneNode, right: SceneNode) -> None:
        self.left = left
        self.right = right

    def distance(self, p: _Array) -> _Array:
        return sdf.opSubtraction(self.right.distance(p), self.left.distance(p))

    def evaluate(self, p: _Array) -> SurfaceSample:
        a = self.left.evaluate(p)
        return a.with_distance(
            sdf.opSubtraction(self.right.distance(p), a.signed_distance)
        )

    def __repr__(self) -> str:
        return f"Subtract({self.left!r}, {self.right!r})"


class Intersection(SceneNode):
    """Overlap of both children.

    The distance is the larger one; the material is taken from the child
    with the smaller distance.
    """

    def __init__(self, left: SceneNode, right: SceneNode) -> None:
        self.left = left
        self.right = right

    def distance(self, p: _Array) -> _Array:
        return sdf.opIntersection(self.left.distance(p), self.right.distance(p))

    def evaluate(self, p: _Array) -> SurfaceSample:
        a = self.left.evaluate(p)
        b = self.right.evaluate(p)
        picked = b.select(a.signed_distance > b.signed_distance, a)
        return picked.with_distance(
            sdf.opIntersection(a.signed_distance, b.signed_distance)
        )

    def __repr__(self) -> str:
        return f"Intersection({self.left!r}, {self.right!r})"


class Warp(SceneNode):
    """Evaluate *child* at ``point_map(p)``."""

    def __init__(self, child: SceneNode, point_map: _PointMap) -> None:
        self.child = child
        self.point_map = point_map

    def distance(self, p: _Array) -> _Array:
        return self.child.distance(self.point_map(np.asarray(p, dtype=float)))

    def evaluate(self, p: _Array) -> SurfaceSample:
        return self.child.evaluate(self.point_map(np.asarray(p, dtype=float)))

    def __repr__(self) -> str:
        return f"Warp({self.child!r})"


# ===========================================================================
# Normal estimation
# ===========================================================================

def gradient(scene: SceneNode, p: _Array, epsilon: float = EPSILON) -> _Array:
    """Central-difference gradient of the scene's signed distance at *p*.

    The result is not normalised.  Its length is close to 1 for exact SDFs
    and only approximately so near the corners of rotated boxes; the tracer
    uses it as the surface normal as is.
    """
    p = np.asarray(p, dtype=float)
    dx = np.array([epsilon, 0.0])
    dy = np.array([0.0, epsilon])
    gx = (scene.distance(p + dx) - scene.distance(p - dx)) * (0.5 / epsilon)
    gy = (scene.distance(p + dy) - scene.distance(p - dy)) * (0.5 / epsilon)
    return sdf.vec2(gx, gy)
