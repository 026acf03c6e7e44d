"""Pinhole camera at the origin looking down the negative z axis.

Each pixel's primary ray passes through the center of that pixel on a virtual
sensor one unit in front of the camera. The sensor spans tan(fov / 2) in each
direction from its center, scaled horizontally by the aspect ratio:

    sensor_x = ((((x + 0.5) / width) * 2 - 1) * aspect_ratio) * fov_adjustment
    sensor_y = (1 - ((y + 0.5) / height) * 2) * fov_adjustment

Pixel (0, 0) is the top-left corner of the image; y grows downward.

The per-scene constants are computed once on the host by camera_parameters()
and shared by the host and kernel ray generators, so both produce the same
directions.

Example:
    >>> from src.lamplight.camera.pinhole import create_prime_ray
    >>> ray = create_prime_ray(400, 300, scene)  # Ray through the image center
"""

import math
from dataclasses import dataclass

import taichi as ti

from src.lamplight.core.ray import Ray, normalize, vec3
from src.lamplight.core.vector import Point, Vector3
from src.lamplight.scene.model import Scene


@dataclass(frozen=True, slots=True)
class CameraParameters:
    """Per-scene constants for primary-ray generation.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        aspect_ratio: width / height.
        fov_adjustment: tan(fov / 2) with fov in radians.
    """

    width: int
    height: int
    aspect_ratio: float
    fov_adjustment: float


def camera_parameters(scene: Scene) -> CameraParameters:
    """Compute the primary-ray constants for a scene.

    Raises:
        ValueError: If the scene is not wider than it is tall.
    """
    if scene.width <= scene.height:
        raise ValueError(f"Scene width must exceed height, got {scene.width}x{scene.height}")
    return CameraParameters(
        width=scene.width,
        height=scene.height,
        aspect_ratio=scene.width / scene.height,
        fov_adjustment=math.tan(math.radians(scene.fov) / 2.0),
    )


def prime_ray(x: int, y: int, camera: CameraParameters) -> Ray:
    """Primary ray through the center of pixel (x, y)."""
    sensor_x = ((((x + 0.5) / camera.width) * 2.0 - 1.0) * camera.aspect_ratio) * (
        camera.fov_adjustment
    )
    sensor_y = (1.0 - ((y + 0.5) / camera.height) * 2.0) * camera.fov_adjustment

    return Ray(
        origin=Point.zero(),
        direction=Vector3(sensor_x, sensor_y, -1.0).normalize(),
    )


def create_prime_ray(x: int, y: int, scene: Scene) -> Ray:
    """Primary ray through the center of pixel (x, y) of a scene.

    Convenience wrapper around prime_ray() for one-off queries. Renderers
    should compute camera_parameters() once and call prime_ray() per pixel.
    """
    return prime_ray(x, y, camera_parameters(scene))


@ti.func
def prime_ray_direction(
    x: ti.i32,
    y: ti.i32,
    width: ti.i32,
    height: ti.i32,
    aspect_ratio: ti.f64,
    fov_adjustment: ti.f64,
) -> vec3:
    """Kernel version of prime_ray(); returns only the direction.

    The ray origin is always the camera position at the world origin.
    """
    sensor_x = (
        (((ti.cast(x, ti.f64) + 0.5) / ti.cast(width, ti.f64)) * 2.0 - 1.0) * aspect_ratio
    ) * fov_adjustment
    sensor_y = (1.0 - ((ti.cast(y, ti.f64) + 0.5) / ti.cast(height, ti.f64)) * 2.0) * fov_adjustment
    return normalize(vec3(sensor_x, sensor_y, -1.0))
