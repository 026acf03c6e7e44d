"""One-sided infinite plane intersection.

A plane is only hit by rays travelling along its stored normal, i.e. when
normal . direction exceeds a small threshold. Rays parallel to the plane or
arriving from the side the normal points toward miss.

The shading normal is always the negated stored normal, regardless of which
side the ray came from.
"""

import taichi as ti
import taichi.math as tm

from src.lamplight.core.ray import Ray, vec3
from src.lamplight.core.vector import Point, Vector3

# Minimum normal . direction for a ray to count as facing the plane
PARALLEL_EPSILON = 1e-6


def intersect_plane(origin: Point, normal: Vector3, ray: Ray) -> float | None:
    """Test a ray against a one-sided plane.

    Args:
        origin: Any point on the plane.
        normal: The stored plane normal (unit length).
        ray: The ray to test.

    Returns:
        The non-negative hit distance, or None on a miss.
    """
    denom = normal.dot_prod(ray.direction)
    if denom > PARALLEL_EPSILON:
        v = origin - ray.origin
        distance = v.dot_prod(normal) / denom
        if distance >= 0.0:
            return distance
    return None


def plane_normal(normal: Vector3) -> Vector3:
    """Shading normal of a plane: the negated stored normal."""
    return -normal


@ti.func
def hit_plane(origin: vec3, direction: vec3, plane_origin: vec3, normal: vec3):
    """Kernel version of intersect_plane().

    Returns:
        A tuple (hit, distance) where hit is 1 on a hit and 0 on a miss.
    """
    denom = tm.dot(normal, direction)

    did_hit = 0
    distance = ti.cast(0.0, ti.f64)

    if denom > PARALLEL_EPSILON:
        v = plane_origin - origin
        d = tm.dot(v, normal) / denom
        if d >= 0.0:
            did_hit = 1
            distance = d

    return did_hit, distance
