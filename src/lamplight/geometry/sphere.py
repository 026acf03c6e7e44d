"""Sphere intersection using the geometric method.

The ray/sphere test projects the center-to-origin vector onto the ray
direction, compares the squared perpendicular distance against the squared
radius, and returns the nearer root of the two crossings.

When the ray origin lies inside the sphere the nearer root is negative and it
is still returned as the hit distance. Callers treat it like any other hit;
the renderer does not switch to the exit point.

Both a host-side version (for Sphere dataclasses and Ray) and a Taichi version
(for kernels over float64 vectors) are provided. They perform the same
operations in the same order.

Example:
    >>> from src.lamplight.core.ray import Ray
    >>> from src.lamplight.core.vector import Point, Vector3
    >>> from src.lamplight.geometry.sphere import intersect_sphere
    >>> ray = Ray(Point.zero(), Vector3(0.0, 0.0, -1.0))
    >>> intersect_sphere(Point(0.0, 0.0, -5.0), 1.0, ray)
    4.0
"""

import math

import taichi as ti
import taichi.math as tm

from src.lamplight.core.ray import Ray, normalize, vec3
from src.lamplight.core.vector import Point, Vector3


def intersect_sphere(center: Point, radius: float, ray: Ray) -> float | None:
    """Test a ray against a sphere.

    Args:
        center: The center of the sphere.
        radius: The radius of the sphere.
        ray: The ray to test. The direction should be unit length.

    Returns:
        min(t0, t1) of the two crossings, or None if the ray misses or the
        sphere lies entirely behind the ray origin.
    """
    l = center - ray.origin
    adj = l.dot_prod(ray.direction)
    d2 = l.dot_prod(l) - (adj * adj)
    radius2 = radius * radius
    if d2 > radius2:
        return None

    thc = math.sqrt(radius2 - d2)
    t0 = adj - thc
    t1 = adj + thc

    if t0 < 0.0 and t1 < 0.0:
        return None

    return t0 if t0 < t1 else t1


def sphere_normal(center: Point, hit_point: Point) -> Vector3:
    """Outward unit normal of a sphere at a point on its surface."""
    return (hit_point - center).normalize()


# =============================================================================
# Kernel-side intersection
# =============================================================================


@ti.func
def hit_sphere(origin: vec3, direction: vec3, center: vec3, radius: ti.f64):
    """Kernel version of intersect_sphere().

    Args:
        origin: The ray origin.
        direction: The ray direction (unit length).
        center: The sphere center.
        radius: The sphere radius.

    Returns:
        A tuple (hit, distance) where hit is 1 on a hit and 0 on a miss.
        distance is only meaningful when hit is 1.
    """
    l = center - origin
    adj = tm.dot(l, direction)
    d2 = tm.dot(l, l) - (adj * adj)
    radius2 = radius * radius

    did_hit = 0
    distance = ti.cast(0.0, ti.f64)

    if d2 <= radius2:
        thc = ti.sqrt(radius2 - d2)
        t0 = adj - thc
        t1 = adj + thc
        if t0 >= 0.0 or t1 >= 0.0:
            did_hit = 1
            distance = t1
            if t0 < t1:
                distance = t0

    return did_hit, distance


@ti.func
def hit_sphere_normal(center: vec3, hit_point: vec3) -> vec3:
    """Kernel version of sphere_normal()."""
    return normalize(hit_point - center)
