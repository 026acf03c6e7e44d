"""Scene data model: colours, surfaces, lights and the scene aggregate.

Surfaces and lights are closed unions of frozen dataclasses. Operations that
depend on the variant (intersection, surface normals, light queries) dispatch
on the concrete type with ``match`` in the modules that implement them.

The scene is constructed once, validated on construction, and then read-only
for the duration of a render.

Example:
    >>> from src.lamplight.core.vector import Point
    >>> from src.lamplight.scene.model import Colour, Scene, Sphere
    >>> sphere = Sphere(Point(0.0, 0.0, -5.0), 1.0, Colour(0.0, 0.0, 1.0), 0.18)
    >>> scene = Scene(width=800, height=600, fov=90.0, surfaces=(sphere,), lights=())
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TypeAlias

import numpy as np

from src.lamplight.core.vector import Point, Vector3

DEFAULT_SHADOW_BIAS = 1e-4

_SCALARS = (int, float, np.floating)


@dataclass(frozen=True, slots=True)
class Colour:
    """An RGB colour with 32-bit float channels.

    Channels are stored as ``np.float32`` and all colour arithmetic stays in
    float32. Channels are not clamped while light is being accumulated; use
    clamp() to bring a final colour into the displayable range.

    Attributes:
        red: Red channel.
        green: Green channel.
        blue: Blue channel.
    """

    red: float
    green: float
    blue: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "red", np.float32(self.red))
        object.__setattr__(self, "green", np.float32(self.green))
        object.__setattr__(self, "blue", np.float32(self.blue))

    def clamp(self) -> Colour:
        """Clamp each channel to at most 1.0."""
        one = np.float32(1.0)
        return Colour(min(self.red, one), min(self.green, one), min(self.blue, one))

    def to_tuple(self) -> tuple[float, float, float]:
        return (float(self.red), float(self.green), float(self.blue))

    def __add__(self, other: object) -> Colour:
        if isinstance(other, Colour):
            return Colour(
                self.red + other.red,
                self.green + other.green,
                self.blue + other.blue,
            )
        return NotImplemented

    def __mul__(self, other: object) -> Colour:
        if isinstance(other, Colour):
            return Colour(
                self.red * other.red,
                self.green * other.green,
                self.blue * other.blue,
            )
        if isinstance(other, _SCALARS):
            scale = np.float32(other)
            return Colour(self.red * scale, self.green * scale, self.blue * scale)
        return NotImplemented

    def __rmul__(self, other: object) -> Colour:
        return self.__mul__(other) if isinstance(other, _SCALARS) else NotImplemented


BLACK = Colour(0.0, 0.0, 0.0)


def _set_float32(obj: object, name: str) -> None:
    object.__setattr__(obj, name, np.float32(getattr(obj, name)))


def _check_albedo(albedo: float) -> None:
    if not 0.0 < albedo <= 1.0:
        raise ValueError(f"Albedo must be in (0, 1], got {albedo}")


# =============================================================================
# Surfaces
# =============================================================================


@dataclass(frozen=True, slots=True)
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center of the sphere.
        radius: The radius of the sphere (positive).
        colour: The flat surface colour.
        albedo: Fraction of incident light reflected diffusely, in (0, 1],
            stored as float32.
    """

    center: Point
    radius: float
    colour: Colour
    albedo: float

    def __post_init__(self) -> None:
        if not self.radius > 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")
        _check_albedo(self.albedo)
        _set_float32(self, "albedo")


@dataclass(frozen=True, slots=True)
class Plane:
    """An infinite plane, hit only by rays travelling along its normal.

    Attributes:
        origin: Any point on the plane.
        normal: The plane normal. Expected to be unit length; it is used as
            given and never renormalized.
        colour: The flat surface colour.
        albedo: Fraction of incident light reflected diffusely, in (0, 1],
            stored as float32.
    """

    origin: Point
    normal: Vector3
    colour: Colour
    albedo: float

    def __post_init__(self) -> None:
        _check_albedo(self.albedo)
        _set_float32(self, "albedo")


Surface: TypeAlias = Sphere | Plane


# =============================================================================
# Lights
# =============================================================================


@dataclass(frozen=True, slots=True)
class DirectionalLight:
    """A light infinitely far away, shining along a fixed direction.

    Attributes:
        direction: The direction the light travels (not the direction toward
            the light).
        colour: The light colour.
        intensity: Constant intensity at every point (float32).
    """

    direction: Vector3
    colour: Colour
    intensity: float

    def __post_init__(self) -> None:
        _set_float32(self, "intensity")


@dataclass(frozen=True, slots=True)
class SphericalLight:
    """A point light radiating equally in all directions.

    Attributes:
        position: The light position.
        colour: The light colour.
        intensity: Total radiant power, attenuated by inverse-square falloff
            (float32).
    """

    position: Point
    colour: Colour
    intensity: float

    def __post_init__(self) -> None:
        _set_float32(self, "intensity")


Light: TypeAlias = DirectionalLight | SphericalLight


# =============================================================================
# Scene
# =============================================================================


@dataclass(frozen=True)
class Scene:
    """The complete input of a render.

    Attributes:
        width: Image width in pixels. Must exceed height.
        height: Image height in pixels.
        fov: Horizontal-scaled field of view in degrees.
        surfaces: Surfaces in scan order; ties in hit distance resolve to the
            earliest surface.
        lights: Lights in accumulation order.
        shadow_bias: Offset along the surface normal applied to shadow-ray
            origins to avoid self-intersection.
    """

    width: int
    height: int
    fov: float
    surfaces: Sequence[Surface] = field(default_factory=tuple)
    lights: Sequence[Light] = field(default_factory=tuple)
    shadow_bias: float = DEFAULT_SHADOW_BIAS

    def __post_init__(self) -> None:
        if self.height <= 0:
            raise ValueError(f"Scene dimensions must be positive, got {self.width}x{self.height}")
        if self.width <= self.height:
            raise ValueError(
                f"Scene width must exceed height, got {self.width}x{self.height}"
            )
        if not math.isfinite(self.fov) or not 0.0 < self.fov < 180.0:
            raise ValueError(f"Field of view must be in (0, 180) degrees, got {self.fov}")
        # Freeze the sequences so the scene cannot change under a render
        object.__setattr__(self, "surfaces", tuple(self.surfaces))
        object.__setattr__(self, "lights", tuple(self.lights))
