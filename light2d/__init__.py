"""
light2d — 2D signed-distance ray marching with Monte Carlo light transport
==========================================================================

Renders 2D scenes described by signed distance functions.  Every pixel
averages the radiance arriving from stratified random directions; rays are
sphere-marched through the scene and recursively reflected and refracted
with Fresnel weighting, Snell's law and Beer-Lambert absorption.

Implemented features
--------------------
- Primitive shapes: Circle, Box (rotated), Segment, Capsule, Triangle, Plane
- Geometry operations: union, intersection, subtraction, translate, rotate,
  warp, mirror fold
- Scene trees with materials: :class:`Leaf`, :class:`Union`,
  :class:`Subtract`, :class:`Intersection`, :class:`Warp`
- Optics: reflect, refract, Fresnel, Beer-Lambert
- :class:`Tracer` with ``trace`` and the stratified ``sample`` estimator
- Threaded image rendering, 8-bit quantisation and PNG output

Quick start
-----------
::

    from light2d import RenderConfig, get_scene
    from light2d.image import render_image, save_png

    cfg = RenderConfig(width=256, height=256, samples=64, seed=0)
    img = render_image(get_scene("glass"), cfg)
    save_png("out.png", img)
"""

from .config import RenderConfig
from .geometry import (
    # Base class
    Geometry2D,

    # Primitive shapes
    Circle2D,
    Box2D,
    Segment2D,
    Capsule2D,
    Triangle2D,
    Plane2D,

    # Boolean operations
    Union2D,
    Intersection2D,
    Subtraction2D,
)
from .material import Material, as_color
from .scene import (
    SceneNode,
    SurfaceSample,
    Leaf,
    Union,
    Subtract,
    Intersection,
    Warp,
    gradient,
)
from .optics import reflect, refract, fresnel, beer_lambert
from .tracer import Tracer
from .scenes import SCENES, get_scene
from .grid import pixel_grid, sample_levelset_2d, save_npy

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "RenderConfig",

    # Geometry
    "Geometry2D",
    "Circle2D",
    "Box2D",
    "Segment2D",
    "Capsule2D",
    "Triangle2D",
    "Plane2D",
    "Union2D",
    "Intersection2D",
    "Subtraction2D",

    # Materials and scenes
    "Material",
    "as_color",
    "SceneNode",
    "SurfaceSample",
    "Leaf",
    "Union",
    "Subtract",
    "Intersection",
    "Warp",
    "gradient",
    "SCENES",
    "get_scene",

    # Optics and tracing
    "reflect",
    "refract",
    "fresnel",
    "beer_lambert",
    "Tracer",

    # Grid utilities
    "pixel_grid",
    "sample_levelset_2d",
    "save_npy",
]
