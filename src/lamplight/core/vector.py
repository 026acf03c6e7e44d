"""Vector and point value types for host-side ray tracing.

Positions and directions are kept as separate types so that the two cannot be
confused: a Point can be offset by a Vector3, and the difference of two Points
is a Vector3, but two Points cannot be added.

All components are float64 and both types are immutable.

Example:
    >>> from src.lamplight.core.vector import Point, Vector3
    >>> p = Point(0.0, 0.0, -5.0)
    >>> d = Vector3(0.0, 0.0, -1.0)
    >>> p + d * 2.0
    Point(x=0.0, y=0.0, z=-7.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Vector3:
    """A direction or displacement in 3D space.

    Attributes:
        x: X component.
        y: Y component.
        z: Z component.
    """

    x: float
    y: float
    z: float

    @classmethod
    def zero(cls) -> Vector3:
        """Return the zero vector."""
        return cls.from_one(0.0)

    @classmethod
    def from_one(cls, v: float) -> Vector3:
        """Return a vector with all three components set to v."""
        return cls(v, v, v)

    def norm(self) -> float:
        """Squared length of the vector. Never negative."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        """Euclidean length of the vector."""
        return math.sqrt(self.norm())

    def normalize(self) -> Vector3:
        """Return the unit vector pointing in the same direction.

        The vector must be non-zero; a zero vector divides by zero.
        """
        l = self.length()
        return Vector3(self.x / l, self.y / l, self.z / l)

    def dot_prod(self, other: Vector3) -> float:
        """Dot product with another vector."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross_prod(self, other: Vector3) -> Vector3:
        """Right-handed cross product with another vector."""
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def __add__(self, other: object) -> Vector3 | Point:
        if isinstance(other, Vector3):
            return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)
        if isinstance(other, Point):
            return other + self
        return NotImplemented

    def __sub__(self, other: object) -> Vector3:
        if isinstance(other, Vector3):
            return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def __mul__(self, other: object) -> Vector3:
        # Vector3 * Vector3 is component-wise, Vector3 * number scales
        if isinstance(other, Vector3):
            return Vector3(self.x * other.x, self.y * other.y, self.z * other.z)
        if isinstance(other, (int, float)):
            return Vector3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __rmul__(self, other: object) -> Vector3:
        if isinstance(other, (int, float)):
            return Vector3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)


@dataclass(frozen=True, slots=True)
class Point:
    """A position in 3D space.

    Attributes:
        x: X coordinate.
        y: Y coordinate.
        z: Z coordinate.
    """

    x: float
    y: float
    z: float

    @classmethod
    def zero(cls) -> Point:
        """Return the origin."""
        return cls.from_one(0.0)

    @classmethod
    def from_one(cls, v: float) -> Point:
        """Return a point with all three coordinates set to v."""
        return cls(v, v, v)

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def __add__(self, other: object) -> Point:
        if isinstance(other, Vector3):
            return Point(self.x + other.x, self.y + other.y, self.z + other.z)
        return NotImplemented

    def __sub__(self, other: object) -> Vector3 | Point:
        if isinstance(other, Point):
            return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)
        if isinstance(other, Vector3):
            return Point(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented
