"""Render configuration and Taichi backend setup.

RenderConfig gathers everything a render run needs besides the scene itself;
the CLI builds one from its arguments. init_taichi() starts the Taichi
runtime with the floating-point settings the parallel renderer relies on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

import taichi as ti

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600
DEFAULT_FOV = 90.0
DEFAULT_OUTPUT = "test.png"

Arch = Literal["cpu", "gpu"]


@dataclass
class RenderConfig:
    """Options for a single render run.

    Attributes:
        scene_path: JSON scene file to load. None renders the built-in
            demo scene.
        width: Override for the scene width in pixels.
        height: Override for the scene height in pixels.
        fov: Override for the scene field of view in degrees.
        output_path: Where to write the PNG.
        parallel: Render with the Taichi kernel instead of the sequential
            reference driver.
        arch: Taichi backend to initialize when rendering in parallel.
        show: Open a matplotlib preview after rendering.
        dump_scene_path: If set, also write the rendered scene as JSON.
    """

    scene_path: Path | None = None
    width: int | None = None
    height: int | None = None
    fov: float | None = None
    output_path: Path = Path(DEFAULT_OUTPUT)
    parallel: bool = True
    arch: Arch = "cpu"
    show: bool = False
    dump_scene_path: Path | None = None


def init_taichi(arch: Arch = "cpu") -> None:
    """Initialize Taichi for float64 rendering.

    Kernel literals default to float64 and fast math is disabled so that the
    parallel renderer performs the same IEEE operations as the reference
    renderer.

    Args:
        arch: "cpu" or "gpu". The GPU backend must support float64.

    Raises:
        ValueError: If arch is not recognized.
    """
    if arch == "cpu":
        ti_arch = ti.cpu
    elif arch == "gpu":
        ti_arch = ti.gpu
    else:
        raise ValueError(f"Unknown Taichi arch: {arch}")

    logger.debug("Initializing Taichi (arch=%s, float64)", arch)
    ti.init(arch=ti_arch, default_fp=ti.f64, fast_math=False)
