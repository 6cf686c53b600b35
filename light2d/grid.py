"""Grid sampling utilities for 2D signed distance functions and images."""

from __future__ import annotations

import os
from typing import Tuple, Union

import numpy as np
import numpy.typing as npt

from .geometry import Geometry2D
from .scene import SceneNode

_Array = npt.NDArray[np.floating]
_Bounds2D = Tuple[Tuple[float, float], Tuple[float, float]]
_Resolution2D = Tuple[int, int]


def pixel_grid(width: int, height: int) -> _Array:
    """Normalised sample position of every pixel.

    Pixel ``(i, j)`` (column *i*, row *j*) maps to ``(i / width, j / height)``,
    so row 0 is ``y = 0`` and y grows downwards in the image.

    Returns
    -------
    numpy.ndarray
        Shape ``(height, width, 2)``.
    """
    xs = np.arange(width, dtype=float) / width
    ys = np.arange(height, dtype=float) / height
    Y, X = np.meshgrid(ys, xs, indexing="ij")
    return np.stack([X, Y], axis=-1)


def sample_levelset_2d(
    shape: Union[Geometry2D, SceneNode],
    bounds: _Bounds2D,
    resolution: _Resolution2D,
) -> _Array:
    """Sample the signed distance of *shape* on a uniform cell-centred grid.

    Parameters
    ----------
    shape:
        A :class:`Geometry2D` or a scene tree.
    bounds:
        ``((x0, x1), (y0, y1))`` physical extents of the domain.
    resolution:
        ``(nx, ny)`` number of cells along each axis.

    Returns
    -------
    numpy.ndarray
        Shape ``(ny, nx)`` array of signed distances, row-major (y first).
    """
    (x0, x1), (y0, y1) = bounds
    nx, ny = resolution

    xs = np.linspace(x0, x1, nx, endpoint=False) + (x1 - x0) / (2.0 * nx)
    ys = np.linspace(y0, y1, ny, endpoint=False) + (y1 - y0) / (2.0 * ny)

    Y, X = np.meshgrid(ys, xs, indexing="ij")
    p = np.stack([X, Y], axis=-1)
    if isinstance(shape, SceneNode):
        return shape.distance(p)
    return shape.sdf(p)


def save_npy(path: str, phi: _Array) -> None:
    """Save *phi* array to *path* (creates parent directories if needed)."""
    out_dir = os.path.dirname(path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    np.save(path, phi)
