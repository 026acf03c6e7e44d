"""Camera module for primary-ray generation.

Components:
    pinhole: Pinhole camera at the origin looking down -z

Ray generation maps pixel centers onto a virtual sensor one unit in front
of the camera, scaled by the field of view and the aspect ratio.
"""

from .pinhole import (
    CameraParameters,
    camera_parameters,
    create_prime_ray,
    prime_ray,
    prime_ray_direction,
)

__all__ = [
    "CameraParameters",
    "camera_parameters",
    "create_prime_ray",
    "prime_ray",
    "prime_ray_direction",
]
