"""Command-line entry point: render a scene to a PNG.

Usage:
    lamplight [options]
    python -m src.lamplight.cli [options]

Options:
    --scene PATH        JSON scene file (default: built-in demo scene)
    --width WIDTH       Override image width in pixels
    --height HEIGHT     Override image height in pixels
    --fov DEGREES       Override field of view in degrees
    --output OUTPUT     Output file path (default: test.png)
    --sequential        Use the pure-Python reference renderer
    --arch {cpu,gpu}    Taichi backend for the parallel renderer (default: cpu)
    --show              Open a preview window after rendering
    --dump-scene PATH   Also write the rendered scene as JSON
    -v, --verbose       Debug logging
    -q, --quiet         Only log warnings and errors

Example:
    lamplight --width 400 --height 300 --output demo.png
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from src.lamplight.config import DEFAULT_OUTPUT, RenderConfig, init_taichi
from src.lamplight.core.render import render
from src.lamplight.preview.export import save_png
from src.lamplight.scene.builder import create_default_scene, load_scene, save_scene

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="lamplight",
        description="Render a scene of spheres and planes to a PNG.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scene",
        type=Path,
        default=None,
        help="JSON scene file (default: built-in demo scene)",
    )
    parser.add_argument("--width", type=int, default=None, help="Override image width in pixels")
    parser.add_argument("--height", type=int, default=None, help="Override image height in pixels")
    parser.add_argument("--fov", type=float, default=None, help="Override field of view in degrees")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path(DEFAULT_OUTPUT),
        help=f"Output file path (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "--sequential",
        action="store_true",
        help="Use the pure-Python reference renderer",
    )
    parser.add_argument(
        "--arch",
        choices=["cpu", "gpu"],
        default="cpu",
        help="Taichi backend for the parallel renderer (default: cpu)",
    )
    parser.add_argument("--show", action="store_true", help="Open a preview window after rendering")
    parser.add_argument(
        "--dump-scene",
        type=Path,
        default=None,
        help="Also write the rendered scene as JSON",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors")
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> RenderConfig:
    """Build a RenderConfig from parsed arguments."""
    return RenderConfig(
        scene_path=args.scene,
        width=args.width,
        height=args.height,
        fov=args.fov,
        output_path=args.output,
        parallel=not args.sequential,
        arch=args.arch,
        show=args.show,
        dump_scene_path=args.dump_scene,
    )


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Set up root logging for command-line use."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def run(config: RenderConfig) -> Path:
    """Load or build the scene, render it and save the image.

    Args:
        config: The render options.

    Returns:
        Path to the saved image file.

    Raises:
        OSError: If a file cannot be read or written.
        ValueError: If the scene is invalid.
    """
    if config.scene_path is None:
        scene = create_default_scene()
    else:
        scene = load_scene(config.scene_path)

    overrides = {
        name: value
        for name, value in (("width", config.width), ("height", config.height), ("fov", config.fov))
        if value is not None
    }
    if overrides:
        scene = dataclasses.replace(scene, **overrides)

    if config.dump_scene_path is not None:
        save_scene(scene, config.dump_scene_path)

    if config.parallel:
        init_taichi(config.arch)

    image = render(scene, parallel=config.parallel)
    save_png(image, config.output_path)

    if config.show:
        from src.lamplight.preview.display import show_preview

        show_preview(image, title=str(config.output_path))

    return config.output_path


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        output_file = run(config_from_args(args))
    except (OSError, ValueError) as e:
        logger.error("Render failed: %s", e)
        return 1

    logger.info("Saved to: %s", output_file.absolute())
    return 0


if __name__ == "__main__":
    sys.exit(main())
