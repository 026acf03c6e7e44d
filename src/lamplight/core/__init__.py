"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    vector: Vector3 and Point value types
    ray: Ray data structure and kernel-side vector helpers
    shading: Light queries and Lambertian direct lighting with hard shadows
    render: Sequential and Taichi-parallel render drivers

Every pixel is independent: a primary ray, a nearest-hit query against the
scene, and shading with one shadow ray per light.
"""

from .ray import Ray, length_squared, normalize, vec3
from .vector import Point, Vector3

# Note: shading and render are NOT imported here to avoid circular imports.
# Import directly from src.lamplight.core.shading or src.lamplight.core.render.

__all__ = [
    "Vector3",
    "Point",
    "Ray",
    "vec3",
    "length_squared",
    "normalize",
]
