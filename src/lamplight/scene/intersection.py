"""Scene-level nearest-hit queries.

This module dispatches intersection and surface-normal queries over the
closed set of surface variants, and scans a scene's surfaces linearly for the
nearest hit. There is no acceleration structure; every ray is tested against
every surface.

Hits are reported as an Intersection holding the hit distance and the index
of the surface in Scene.surfaces, so results never hold references into the
scene's storage.

For the parallel renderer the scene is uploaded into SceneBuffers, a
structure-of-arrays layout in Taichi fields, and trace_scene() performs the
same scan inside kernels.

Example:
    >>> from src.lamplight.camera.pinhole import create_prime_ray
    >>> from src.lamplight.scene.intersection import trace
    >>> hit = trace(scene, create_prime_ray(400, 300, scene))
    >>> if hit is not None:
    ...     surface = scene.surfaces[hit.surface_index]
"""

import math
from dataclasses import dataclass

import numpy as np
import taichi as ti

from src.lamplight.core.ray import Ray, vec3
from src.lamplight.core.vector import Point, Vector3
from src.lamplight.geometry.plane import hit_plane, intersect_plane, plane_normal
from src.lamplight.geometry.sphere import (
    hit_sphere,
    hit_sphere_normal,
    intersect_sphere,
    sphere_normal,
)
from src.lamplight.scene.model import (
    DirectionalLight,
    Plane,
    Scene,
    Sphere,
    SphericalLight,
    Surface,
)

# Variant tags used in the field layout
SURFACE_SPHERE = 0
SURFACE_PLANE = 1
LIGHT_DIRECTIONAL = 0
LIGHT_SPHERICAL = 1


@dataclass(frozen=True, slots=True)
class Intersection:
    """A ray hit on one of the scene's surfaces.

    Attributes:
        distance: Distance along the ray to the hit. Always finite.
        surface_index: Index of the hit surface in Scene.surfaces.

    Raises:
        ValueError: If distance is not finite. A non-finite distance means
            the intersection math is broken, not that the ray missed.
    """

    distance: float
    surface_index: int

    def __post_init__(self) -> None:
        if not math.isfinite(self.distance):
            raise ValueError(f"Intersection must have a finite distance, got {self.distance}")


def intersect(surface: Surface, ray: Ray) -> float | None:
    """Hit distance of a ray against any surface variant, or None."""
    match surface:
        case Sphere(center=center, radius=radius):
            return intersect_sphere(center, radius, ray)
        case Plane(origin=origin, normal=normal):
            return intersect_plane(origin, normal, ray)
        case _:
            raise TypeError(f"Unknown surface type: {type(surface).__name__}")


def surface_normal(surface: Surface, hit_point: Point) -> Vector3:
    """Shading normal of any surface variant at a hit point."""
    match surface:
        case Sphere(center=center):
            return sphere_normal(center, hit_point)
        case Plane(normal=normal):
            return plane_normal(normal)
        case _:
            raise TypeError(f"Unknown surface type: {type(surface).__name__}")


def trace(scene: Scene, ray: Ray) -> Intersection | None:
    """Find the nearest surface hit by a ray.

    Tests every surface in order and keeps the smallest hit distance. When
    two surfaces report the same distance the earlier one wins.

    Args:
        scene: The scene to query.
        ray: The ray to trace.

    Returns:
        The nearest Intersection, or None if no surface is hit.
    """
    nearest: Intersection | None = None
    for index, surface in enumerate(scene.surfaces):
        distance = intersect(surface, ray)
        if distance is None:
            continue
        candidate = Intersection(distance, index)
        if nearest is None or candidate.distance < nearest.distance:
            nearest = candidate
    return nearest


# =============================================================================
# Kernel-side scene storage
# =============================================================================


@ti.data_oriented
class SceneBuffers:
    """A scene uploaded into Taichi fields for kernel-side queries.

    Fields are allocated on construction, so Taichi must already be
    initialized. Both surfaces and lights keep their scene order, which the
    nearest-hit tie-breaking and colour accumulation depend on.

    Attributes:
        num_surfaces: Number of surfaces in the scene.
        num_lights: Number of lights in the scene.
        surface_kinds: SURFACE_SPHERE or SURFACE_PLANE per surface.
        surface_points: Sphere center or plane origin.
        surface_radii: Sphere radius (unused for planes).
        surface_normals: Stored plane normal (unused for spheres).
        surface_colours: Flat surface colour (float32).
        surface_albedos: Diffuse albedo (float32).
        light_kinds: LIGHT_DIRECTIONAL or LIGHT_SPHERICAL per light.
        light_vectors: Travel direction or light position.
        light_colours: Light colour (float32).
        light_intensities: Light intensity (float32).
    """

    def __init__(self, scene: Scene) -> None:
        self.num_surfaces = len(scene.surfaces)
        self.num_lights = len(scene.lights)

        # Taichi fields cannot be empty
        surface_capacity = max(self.num_surfaces, 1)
        light_capacity = max(self.num_lights, 1)

        self.surface_kinds = ti.field(dtype=ti.i32, shape=surface_capacity)
        self.surface_points = ti.Vector.field(3, dtype=ti.f64, shape=surface_capacity)
        self.surface_radii = ti.field(dtype=ti.f64, shape=surface_capacity)
        self.surface_normals = ti.Vector.field(3, dtype=ti.f64, shape=surface_capacity)
        self.surface_colours = ti.Vector.field(3, dtype=ti.f32, shape=surface_capacity)
        self.surface_albedos = ti.field(dtype=ti.f32, shape=surface_capacity)

        self.light_kinds = ti.field(dtype=ti.i32, shape=light_capacity)
        self.light_vectors = ti.Vector.field(3, dtype=ti.f64, shape=light_capacity)
        self.light_colours = ti.Vector.field(3, dtype=ti.f32, shape=light_capacity)
        self.light_intensities = ti.field(dtype=ti.f32, shape=light_capacity)

        self._upload(scene)

    def _upload(self, scene: Scene) -> None:
        """Copy the scene into the fields via NumPy staging arrays."""
        surface_capacity = self.surface_kinds.shape[0]
        kinds = np.zeros(surface_capacity, dtype=np.int32)
        points = np.zeros((surface_capacity, 3), dtype=np.float64)
        radii = np.zeros(surface_capacity, dtype=np.float64)
        normals = np.zeros((surface_capacity, 3), dtype=np.float64)
        colours = np.zeros((surface_capacity, 3), dtype=np.float32)
        albedos = np.zeros(surface_capacity, dtype=np.float32)

        for i, surface in enumerate(scene.surfaces):
            match surface:
                case Sphere(center=center, radius=radius):
                    kinds[i] = SURFACE_SPHERE
                    points[i] = center.to_tuple()
                    radii[i] = radius
                case Plane(origin=origin, normal=normal):
                    kinds[i] = SURFACE_PLANE
                    points[i] = origin.to_tuple()
                    normals[i] = normal.to_tuple()
                case _:
                    raise TypeError(f"Unknown surface type: {type(surface).__name__}")
            colours[i] = surface.colour.to_tuple()
            albedos[i] = surface.albedo

        self.surface_kinds.from_numpy(kinds)
        self.surface_points.from_numpy(points)
        self.surface_radii.from_numpy(radii)
        self.surface_normals.from_numpy(normals)
        self.surface_colours.from_numpy(colours)
        self.surface_albedos.from_numpy(albedos)

        light_capacity = self.light_kinds.shape[0]
        light_kinds = np.zeros(light_capacity, dtype=np.int32)
        light_vectors = np.zeros((light_capacity, 3), dtype=np.float64)
        light_colours = np.zeros((light_capacity, 3), dtype=np.float32)
        intensities = np.zeros(light_capacity, dtype=np.float32)

        for i, light in enumerate(scene.lights):
            match light:
                case DirectionalLight(direction=direction):
                    light_kinds[i] = LIGHT_DIRECTIONAL
                    light_vectors[i] = direction.to_tuple()
                case SphericalLight(position=position):
                    light_kinds[i] = LIGHT_SPHERICAL
                    light_vectors[i] = position.to_tuple()
                case _:
                    raise TypeError(f"Unknown light type: {type(light).__name__}")
            light_colours[i] = light.colour.to_tuple()
            intensities[i] = light.intensity

        self.light_kinds.from_numpy(light_kinds)
        self.light_vectors.from_numpy(light_vectors)
        self.light_colours.from_numpy(light_colours)
        self.light_intensities.from_numpy(intensities)


@ti.func
def trace_scene(buffers: ti.template(), origin: vec3, direction: vec3):
    """Kernel version of trace().

    Args:
        buffers: The SceneBuffers holding the uploaded scene.
        origin: The ray origin.
        direction: The ray direction.

    Returns:
        A tuple (hit, distance, surface_index). hit is 1 if any surface was
        hit; distance and surface_index are only meaningful when hit is 1.
    """
    found = 0
    nearest = ti.cast(0.0, ti.f64)
    nearest_index = -1

    for i in range(buffers.num_surfaces):
        hit = 0
        distance = ti.cast(0.0, ti.f64)
        if buffers.surface_kinds[i] == SURFACE_SPHERE:
            hit, distance = hit_sphere(
                origin, direction, buffers.surface_points[i], buffers.surface_radii[i]
            )
        else:
            hit, distance = hit_plane(
                origin, direction, buffers.surface_points[i], buffers.surface_normals[i]
            )

        # Strict comparison keeps the earliest surface on ties
        if hit == 1:
            if found == 0 or distance < nearest:
                found = 1
                nearest = distance
                nearest_index = i

    return found, nearest, nearest_index


@ti.func
def surface_normal_at(buffers: ti.template(), surface_index: ti.i32, hit_point: vec3) -> vec3:
    """Kernel version of surface_normal()."""
    normal = -buffers.surface_normals[surface_index]
    if buffers.surface_kinds[surface_index] == SURFACE_SPHERE:
        normal = hit_sphere_normal(buffers.surface_points[surface_index], hit_point)
    return normal
