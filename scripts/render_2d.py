"""Render a light2d scene to a PNG image.

Usage::

    python scripts/render_2d.py                          # glass scene, saves out.png
    python scripts/render_2d.py --scene lens --width 256 --height 256 --samples 64
    python scripts/render_2d.py --seed 0 --npy out.npy   # reproducible, keep float radiance
    python scripts/render_2d.py --gray --out gray.png    # single-channel output

Requirements: numpy, matplotlib, tqdm
"""
from __future__ import annotations

import argparse
import logging
import os
import sys

# Ensure the repo root (parent of scripts/) is importable regardless of cwd
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from light2d import RenderConfig, SCENES, get_scene, save_npy
from light2d.config import HEIGHT, MAX_DEPTH, N, WIDTH
from light2d.image import render_image, save_png


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render a 2D SDF scene with Monte Carlo ray marching.")
    parser.add_argument("--scene", default="glass", choices=sorted(SCENES), help="Scene to render")
    parser.add_argument("--width", type=int, default=WIDTH, help=f"Image width (default {WIDTH})")
    parser.add_argument("--height", type=int, default=HEIGHT, help=f"Image height (default {HEIGHT})")
    parser.add_argument("--samples", type=int, default=N, help=f"Directions per pixel (default {N})")
    parser.add_argument("--max-depth", type=int, default=MAX_DEPTH,
                        help=f"Reflection/refraction bounces (default {MAX_DEPTH})")
    parser.add_argument("--seed", type=int, default=None, help="Random seed (default: fresh entropy)")
    parser.add_argument("--workers", type=int, default=None, help="Upper bound on render threads")
    parser.add_argument("--out", default="out.png", help="Output PNG path")
    parser.add_argument("--npy", default=None, help="Also save the float image as .npy")
    parser.add_argument("--gray", action="store_true", help="Write a grayscale PNG")
    parser.add_argument("--quiet", action="store_true", help="Hide the progress bar")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        config = RenderConfig(
            width=args.width,
            height=args.height,
            samples=args.samples,
            max_depth=args.max_depth,
            seed=args.seed,
        )
    except ValueError as exc:
        sys.exit(f"error: {exc}")

    image = render_image(get_scene(args.scene), config, workers=args.workers, progress=not args.quiet)
    save_png(args.out, image, grayscale=args.gray)
    if args.npy:
        save_npy(args.npy, image)

    print(f"Saved: {args.out}  ({config.width}x{config.height}, {config.samples} samples, "
          f"mean radiance {image.mean():.4f})")


if __name__ == "__main__":
    main()
