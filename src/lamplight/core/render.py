"""Render drivers: per-pixel primary rays, nearest hit, shading.

Two drivers produce the same image:

- render_sequential() walks every pixel in Python using the host-side value
  types. It is the reference implementation.
- render() uploads the scene into Taichi fields and runs one kernel over all
  pixels in parallel. Pixels share no state; each writes only its own cell.

Both return a (height, width, 3) float32 NumPy array indexed as grid[y, x],
with every channel in [0, 1]. Rays that miss every surface produce black.

Both drivers trace rays in float64 and compute colours in float32. The Taichi
driver needs Taichi initialized with default_fp=ti.f64 and fast_math disabled
(see src.lamplight.config.init_taichi) for its results to track the reference
driver.

Example:
    >>> from src.lamplight.config import init_taichi
    >>> from src.lamplight.core.render import render
    >>> from src.lamplight.scene.builder import create_default_scene
    >>> init_taichi("cpu")
    >>> image = render(create_default_scene())
    >>> image.shape
    (600, 800, 3)
"""

import logging
import time

import numpy as np
import numpy.typing as npt
import taichi as ti

from src.lamplight.camera.pinhole import camera_parameters, prime_ray, prime_ray_direction
from src.lamplight.core.ray import vec3
from src.lamplight.core.shading import get_colour, rgb, shade
from src.lamplight.scene.intersection import SceneBuffers, trace, trace_scene
from src.lamplight.scene.model import BLACK, Colour, Scene

logger = logging.getLogger(__name__)

# Colour of rays that hit nothing
BACKGROUND_COLOR = BLACK


def trace_pixel(scene: Scene, x: int, y: int) -> Colour:
    """Render a single pixel with the reference driver."""
    ray = prime_ray(x, y, camera_parameters(scene))
    intersection = trace(scene, ray)
    if intersection is None:
        return BACKGROUND_COLOR
    return get_colour(scene, ray, intersection)


def render_sequential(scene: Scene) -> npt.NDArray[np.float32]:
    """Render a scene pixel by pixel in Python.

    Args:
        scene: The scene to render.

    Returns:
        Array of shape (height, width, 3) with dtype float32.
    """
    logger.info(
        "Rendering %dx%d sequentially (%d surfaces, %d lights)",
        scene.width,
        scene.height,
        len(scene.surfaces),
        len(scene.lights),
    )
    start_time = time.perf_counter()

    camera = camera_parameters(scene)
    grid = np.zeros((scene.height, scene.width, 3), dtype=np.float32)

    for y in range(scene.height):
        for x in range(scene.width):
            ray = prime_ray(x, y, camera)
            intersection = trace(scene, ray)
            if intersection is None:
                colour = BACKGROUND_COLOR
            else:
                colour = get_colour(scene, ray, intersection)
            grid[y, x] = colour.to_tuple()

    logger.debug("Sequential render finished in %.3fs", time.perf_counter() - start_time)
    return grid


@ti.kernel
def _render_kernel(
    buffers: ti.template(),
    image: ti.template(),
    width: ti.i32,
    height: ti.i32,
    aspect_ratio: ti.f64,
    fov_adjustment: ti.f64,
    shadow_bias: ti.f64,
):
    """Shade every pixel of the image in parallel.

    Args:
        buffers: The SceneBuffers holding the uploaded scene.
        image: float32 vector field of shape (height, width) to write into.
        width: Image width in pixels.
        height: Image height in pixels.
        aspect_ratio: width / height.
        fov_adjustment: tan(fov / 2).
        shadow_bias: Shadow-ray origin offset along the normal.
    """
    for y, x in ti.ndrange(height, width):
        origin = vec3(0.0, 0.0, 0.0)
        direction = prime_ray_direction(x, y, width, height, aspect_ratio, fov_adjustment)

        colour = rgb(0.0, 0.0, 0.0)
        found, distance, surface_index = trace_scene(buffers, origin, direction)
        if found == 1:
            colour = shade(buffers, origin, direction, distance, surface_index, shadow_bias)

        image[y, x] = colour


def render_parallel(scene: Scene) -> npt.NDArray[np.float32]:
    """Render a scene with the Taichi kernel.

    Taichi must be initialized before calling this function.

    Args:
        scene: The scene to render.

    Returns:
        Array of shape (height, width, 3) with dtype float32.
    """
    logger.info(
        "Rendering %dx%d in parallel (%d surfaces, %d lights)",
        scene.width,
        scene.height,
        len(scene.surfaces),
        len(scene.lights),
    )
    start_time = time.perf_counter()

    camera = camera_parameters(scene)
    buffers = SceneBuffers(scene)
    image = ti.Vector.field(3, dtype=ti.f32, shape=(scene.height, scene.width))

    _render_kernel(
        buffers,
        image,
        camera.width,
        camera.height,
        camera.aspect_ratio,
        camera.fov_adjustment,
        scene.shadow_bias,
    )
    grid = image.to_numpy()

    logger.debug("Parallel render finished in %.3fs", time.perf_counter() - start_time)
    return grid.astype(np.float32)


def render(scene: Scene, *, parallel: bool = True) -> npt.NDArray[np.float32]:
    """Render a scene to a grid of colours.

    Args:
        scene: The scene to render.
        parallel: Use the Taichi kernel (default). If False, use the
            sequential reference driver, which needs no Taichi runtime.

    Returns:
        Array of shape (height, width, 3) with dtype float32, channels in [0, 1].
    """
    if parallel:
        return render_parallel(scene)
    return render_sequential(scene)
