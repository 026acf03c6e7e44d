"""Ray data structure and Taichi vector helpers.

The host-side Ray pairs a Point origin with a Vector3 direction. The Taichi
helpers below operate on float64 vectors inside kernels; they spell out the
arithmetic (rather than calling taichi.math.normalize) so that kernel results
match the host-side value types operation for operation.

Example:
    >>> from src.lamplight.core.ray import Ray
    >>> from src.lamplight.core.vector import Point, Vector3
    >>> ray = Ray(origin=Point.zero(), direction=Vector3(0.0, 0.0, -1.0))
    >>> ray.at(5.0)
    Point(x=0.0, y=0.0, z=-5.0)
"""

from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from src.lamplight.core.vector import Point, Vector3

# Float64 3-vector used by every kernel in the package
vec3 = ti.types.vector(3, ti.f64)


@dataclass(frozen=True, slots=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of the ray. Primary and shadow rays are
            built with unit-length directions, but this is not enforced.
    """

    origin: Point
    direction: Vector3

    def at(self, distance: float) -> Point:
        """Return the point origin + direction * distance."""
        return self.origin + self.direction * distance


# =============================================================================
# Kernel-side vector helpers
# =============================================================================


@ti.func
def length_squared(v: vec3) -> ti.f64:
    """Squared length of a kernel vector."""
    return tm.dot(v, v)


@ti.func
def normalize(v: vec3) -> vec3:
    """Unit vector in the direction of v. v must be non-zero."""
    return v / ti.sqrt(length_squared(v))
