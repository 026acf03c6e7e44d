#!/usr/bin/env python3
"""Render the demo scene with both drivers and compare them.

This script builds the demo scene of three spheres over a floor, renders it
with the Taichi kernel and with the pure-Python reference driver, reports the
largest per-channel difference and saves the parallel result.

The reference driver visits every pixel in Python, so keep the image small.

Usage:
    python -m examples.render_demo_scene [options]

Options:
    --width WIDTH       Image width in pixels (default: 160)
    --height HEIGHT     Image height in pixels (default: 120)
    --output OUTPUT     Output file path (default: demo_scene.png)
    --gpu               Use the GPU backend for the parallel driver

Example:
    python -m examples.render_demo_scene --width 320 --height 240
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

import numpy as np


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the demo scene with both drivers and compare them.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=160,
        help="Image width in pixels (default: 160)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=120,
        help="Image height in pixels (default: 120)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="demo_scene.png",
        help="Output file path (default: demo_scene.png)",
    )
    parser.add_argument(
        "--gpu",
        action="store_true",
        help="Use the GPU backend for the parallel driver",
    )
    return parser.parse_args()


def main() -> int:
    """Main entry point."""
    args = parse_args()

    from src.lamplight.config import init_taichi
    from src.lamplight.core.render import render_parallel, render_sequential
    from src.lamplight.preview.export import save_png
    from src.lamplight.scene.builder import create_default_scene

    try:
        scene = create_default_scene(width=args.width, height=args.height)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    init_taichi("gpu" if args.gpu else "cpu")

    start = time.perf_counter()
    parallel = render_parallel(scene)
    parallel_time = time.perf_counter() - start
    print(f"Parallel render: {parallel_time:.3f}s")

    start = time.perf_counter()
    sequential = render_sequential(scene)
    sequential_time = time.perf_counter() - start
    print(f"Sequential render: {sequential_time:.3f}s")

    max_diff = float(np.abs(parallel - sequential).max())
    print(f"Largest channel difference: {max_diff:.3g}")

    output_file = Path(args.output)
    save_png(parallel, output_file)
    print(f"Saved to: {output_file.absolute()}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
