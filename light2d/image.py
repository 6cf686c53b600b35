"""Image assembly: render every pixel, quantise, save.

The image is split into horizontal bands that are rendered concurrently on
a thread pool.  Each band owns a disjoint slice of the output buffer and a
random generator spawned from one :class:`numpy.random.SeedSequence`, so a
seeded render is identical for any number of workers.

Example:
    >>> from light2d import RenderConfig, get_scene
    >>> from light2d.image import render_image, save_png
    >>> cfg = RenderConfig(width=128, height=128, samples=32, seed=0)
    >>> img = render_image(get_scene("glass"), cfg)
    >>> save_png("out.png", img)
"""

from __future__ import annotations

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Optional, Tuple

import numpy as np
import numpy.typing as npt
from tqdm import tqdm

from .config import RenderConfig
from .grid import pixel_grid
from .scene import SceneNode
from .tracer import Tracer

logger = logging.getLogger(__name__)

_Array = npt.NDArray[np.floating]

# Rays traced by one band.  Fixes the band layout, and with it the random
# streams, independently of the thread count.
BAND_RAYS = 1 << 17
# Rays in flight across all threads; caps the number of concurrent bands.
RAY_BUDGET = 1 << 20


def _band_height(config: RenderConfig) -> int:
    return max(1, min(config.height, BAND_RAYS // (config.width * config.samples)))


def _worker_count(config: RenderConfig, workers: Optional[int] = None) -> int:
    """Threads to use so that at most ``RAY_BUDGET`` rays are traced at once.

    A single band wider than the budget still runs, on one thread.
    """
    if workers is not None and workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers!r}")
    requested = workers if workers is not None else min(32, (os.cpu_count() or 1) + 4)
    band_rays = _band_height(config) * config.width * config.samples
    return max(1, min(requested, RAY_BUDGET // band_rays))


def render_image(
    scene: SceneNode,
    config: Optional[RenderConfig] = None,
    *,
    workers: Optional[int] = None,
    progress: bool = True,
) -> _Array:
    """Estimate the radiance of every pixel.

    Args:
        scene: Scene to render.
        config: Image size, sampling and marching constants.
        workers: Upper bound on the thread count; ``None`` picks one from
            the CPU count.  Fewer threads are used when the bands in flight
            would exceed ``RAY_BUDGET`` rays.
        progress: Show a progress bar over the bands.

    Returns:
        Linear float64 image of shape ``(height, width, 3)``.
    """
    config = config if config is not None else RenderConfig()
    width, height = config.width, config.height
    points = pixel_grid(width, height)
    image = np.zeros((height, width, 3))

    rows = _band_height(config)
    bands = [(start, min(start + rows, height)) for start in range(0, height, rows)]
    seeds = np.random.SeedSequence(config.seed).spawn(len(bands))
    threads = _worker_count(config, workers)

    def _render_band(band: Tuple[int, int], seed: np.random.SeedSequence):
        start, stop = band
        tracer = Tracer(scene, config, rng=np.random.default_rng(seed))
        return start, stop, tracer.sample_points(points[start:stop])

    logger.info(
        "Rendering %dx%d, %d samples/pixel, depth %d, %d bands on %d threads",
        width, height, config.samples, config.max_depth, len(bands), threads,
    )
    t0 = time.perf_counter()
    with ThreadPoolExecutor(max_workers=threads) as pool:
        futures = [pool.submit(_render_band, band, seed) for band, seed in zip(bands, seeds)]
        for future in tqdm(
            as_completed(futures),
            total=len(futures),
            desc="Rendering",
            unit="band",
            disable=not progress,
        ):
            start, stop, block = future.result()
            image[start:stop] = block
            logger.debug("Band rows %d-%d done", start, stop)

    logger.info("Rendered in %.2fs", time.perf_counter() - t0)
    return image


# ===========================================================================
# Quantisation and output
# ===========================================================================

def _check_image(image: _Array) -> _Array:
    image = np.asarray(image, dtype=float)
    if image.ndim == 3 and image.shape[-1] == 3:
        return image
    if image.ndim == 2:
        return image
    raise ValueError(f"expected an (H, W) or (H, W, 3) image, got shape {image.shape}")


def to_grayscale(image: _Array) -> _Array:
    """Mean of the RGB channels, shape ``(H, W)``."""
    image = _check_image(image)
    if image.ndim == 2:
        return image
    return image.mean(axis=-1)


def to_uint8(image: _Array) -> npt.NDArray[np.uint8]:
    """Quantise radiance with ``min(v * 255, 255)``, truncated to 8 bits."""
    image = _check_image(image)
    scaled = np.minimum(np.maximum(image, 0.0) * 255.0, 255.0)
    return scaled.astype(np.uint8)


def save_png(path: str, image: _Array, grayscale: bool = False) -> None:
    """Quantise *image* and write it as a PNG (creates parent directories)."""
    import matplotlib.pyplot as plt

    pixels = to_uint8(to_grayscale(image) if grayscale else image)
    out_dir = os.path.dirname(path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    if pixels.ndim == 2:
        plt.imsave(path, pixels, cmap="gray", vmin=0, vmax=255)
    else:
        plt.imsave(path, pixels)
    logger.info("Saved %s", path)
