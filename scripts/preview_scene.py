"""Plot the signed distance field of every light2d scene on one page.

Emissive regions are outlined in yellow, all other surfaces in white.
Cheap to run: no rays are traced.

Usage::

    python scripts/preview_scene.py                    # saves scenes.png
    python scripts/preview_scene.py --scene glass --out glass_sdf.png

Requirements: numpy, matplotlib
"""
from __future__ import annotations

import argparse
import os
import sys

# Ensure the repo root (parent of scripts/) is importable regardless of cwd
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import matplotlib.pyplot as plt
import numpy as np

from light2d import SCENES, get_scene, sample_levelset_2d

_BOUNDS = ((0.0, 1.0), (0.0, 1.0))
_EXTENT = [0, 1, 1, 0]


def _emission_mask(scene, res: int) -> np.ndarray:
    """1.0 where the active material at a cell centre emits light."""
    cells = (np.arange(res) + 0.5) / res
    Y, X = np.meshgrid(cells, cells, indexing="ij")
    surface = scene.evaluate(np.stack([X, Y], axis=-1))
    return (surface.emissive.max(axis=-1) > 0.0).astype(float)


def render_preview(names: list[str], out_path: str, res: int = 400) -> None:
    fig, axes = plt.subplots(1, len(names), figsize=(len(names) * 4.0, 4.2), facecolor="#111111")
    axes = np.atleast_1d(axes)

    for ax, name in zip(axes, names):
        scene = get_scene(name)
        phi = sample_levelset_2d(scene, _BOUNDS, (res, res))
        lit = _emission_mask(scene, res) * (phi < 0.0)

        lim = max(np.nanmax(np.abs(phi)), 1e-6)
        ax.imshow(phi, extent=_EXTENT, cmap="seismic", vmin=-lim, vmax=lim, interpolation="bilinear")
        cells = (np.arange(res) + 0.5) / res
        ax.contour(cells, cells, phi, levels=[0.0], colors="white", linewidths=1.0)
        if lit.any():
            ax.contour(cells, cells, lit, levels=[0.5], colors="yellow", linewidths=1.2)
        ax.set_xlim(0.0, 1.0)
        ax.set_ylim(1.0, 0.0)   # image rows grow downwards

        ax.set_facecolor("#111111")
        ax.set_xticks([])
        ax.set_yticks([])
        ax.set_title(name, color="white", fontsize=10, pad=4)

    fig.suptitle("light2d scenes: signed distance", color="white", fontsize=12)
    plt.tight_layout(pad=0.4)
    fig.savefig(out_path, dpi=150, bbox_inches="tight", facecolor=fig.get_facecolor())
    plt.close(fig)
    print(f"Saved: {out_path}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Plot light2d scene SDFs to a PNG.")
    parser.add_argument("--scene", default=None, choices=sorted(SCENES), help="Only this scene")
    parser.add_argument("--res", type=int, default=400, help="Grid cells per axis (default 400)")
    parser.add_argument("--out", default="scenes.png", help="Output PNG path")
    args = parser.parse_args()

    names = [args.scene] if args.scene else sorted(SCENES)
    render_preview(names, args.out, res=args.res)


if __name__ == "__main__":
    main()
