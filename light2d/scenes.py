"""Ready-made scenes on the unit square ``[0, 1] x [0, 1]``.

``glass``
    The reference scene: tinted glass bars and a glass prism with two
    notches cut out, lit by four corner lamps produced by folding one
    light around the image centre.
``light``
    A single circular lamp in empty space.
``lens``
    A biconvex glass lens (intersection of two discs) between a lamp and
    a mirror floor, plus a small mirrored capsule.
"""

from __future__ import annotations

from typing import Callable, Dict

import numpy as np

from .geometry import Box2D, Capsule2D, Circle2D, Plane2D, Triangle2D
from .material import Material
from .scene import Leaf, SceneNode

LIGHT_EMISSIVE = 6.0


def glass_scene() -> SceneNode:
    """Glass bars, a prism, two notches and four folded corner lamps."""
    horizontal = Leaf(
        Box2D((0.05, 0.25), center=(0.4, 0.25), theta=2.0 * np.pi / 4.0),
        Material.glass(absorption=(4.0, 4.0, 1.0)),
    )
    slanted = Leaf(
        Box2D((0.05, 0.35), center=(0.46, 0.6), theta=2.0 * np.pi / 20.0),
        Material.glass(absorption=(1.0, 4.0, 4.0)),
    )
    prism = Leaf(
        Triangle2D((0.55, 0.13), (0.5, 0.3), (0.9, 0.3)),
        Material.glass(absorption=(4.0, 1.0, 4.0)),
    )
    top_left_notch = Leaf(
        Box2D((0.05, 0.36), center=(0.1, 0.3), theta=2.0 * np.pi / 20.0),
        Material.glass(),
    )
    bottom_notch = Leaf(
        Box2D((0.05, 0.25), center=(0.4, 0.9), theta=2.0 * np.pi / 4.0),
        Material.glass(),
    )
    lamp = Leaf(
        Circle2D(0.05, center=(1.05, 1.05)),
        Material.light(LIGHT_EMISSIVE),
    ).mirror(0.5, 0.5)

    solids = (slanted | prism | horizontal) - top_left_notch - bottom_notch
    return solids | lamp


def single_light_scene() -> SceneNode:
    """One lamp of radius 0.1 at the centre of the image."""
    return Leaf(Circle2D(0.1, center=(0.5, 0.5)), Material.light(2.0))


def lens_scene() -> SceneNode:
    """A biconvex lens focusing a lamp above a mirror floor."""
    lamp = Leaf(Circle2D(0.06, center=(0.15, 0.5)), Material.light((5.0, 4.5, 3.5)))
    lens = Leaf(Circle2D(0.35, center=(0.25, 0.5)), Material.glass(absorption=0.5)) & Leaf(
        Circle2D(0.35, center=(0.75, 0.5)), Material.glass(absorption=0.5)
    )
    floor = Leaf(Plane2D((0.0, 0.92), (0.0, -1.0)), Material.mirror(0.9))
    rod = Leaf(Capsule2D((0.75, 0.2), (0.85, 0.3), 0.02), Material.mirror(0.8))
    return lamp | lens | floor | rod


SCENES: Dict[str, Callable[[], SceneNode]] = {
    "glass": glass_scene,
    "light": single_light_scene,
    "lens": lens_scene,
}


def get_scene(name: str) -> SceneNode:
    """Build the scene registered under *name*."""
    try:
        factory = SCENES[name]
    except KeyError:
        known = ", ".join(sorted(SCENES))
        raise ValueError(f"unknown scene {name!r}; choose one of: {known}") from None
    return factory()
