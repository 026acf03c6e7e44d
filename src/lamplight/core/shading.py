"""Direct-lighting shading with hard shadows.

For a hit point, every light in the scene contributes Lambertian diffuse
light if a shadow ray toward it is unobstructed:

    colour += surface_colour * light_colour * max(0, n . l) * intensity * albedo / pi

Shadow rays start slightly above the surface (hit_point + normal *
shadow_bias) to avoid re-hitting the surface they leave. A shadow-ray hit
only blocks the light if it is closer than the light itself; directional
lights are infinitely far away, so any hit blocks them.

The accumulated colour is clamped to at most 1.0 per channel. Every term is
non-negative, so no lower clamp is needed.

The lighting model is the Lambertian BRDF:
    f_r = albedo / pi
"""

import math

import numpy as np
import taichi as ti
import taichi.math as tm

from src.lamplight.core.ray import Ray, length_squared, normalize, vec3
from src.lamplight.core.vector import Point, Vector3
from src.lamplight.scene.intersection import (
    LIGHT_SPHERICAL,
    Intersection,
    surface_normal,
    surface_normal_at,
    trace,
    trace_scene,
)
from src.lamplight.scene.model import (
    BLACK,
    Colour,
    DirectionalLight,
    Light,
    Scene,
    SphericalLight,
)

# Colour, albedo and intensity arithmetic is float32; geometry stays float64
PI_F32 = np.float32(math.pi)

rgb = ti.types.vector(3, ti.f32)

# =============================================================================
# Light queries
# =============================================================================


def direction_from(light: Light, hit_point: Point) -> Vector3:
    """Direction from a hit point toward a light.

    For a directional light this is the negated travel direction, used as
    given.
    """
    match light:
        case DirectionalLight(direction=direction):
            return -direction
        case SphericalLight(position=position):
            return (position - hit_point).normalize()
        case _:
            raise TypeError(f"Unknown light type: {type(light).__name__}")


def intensity_at(light: Light, hit_point: Point) -> np.float32:
    """Light intensity arriving at a hit point, as float32.

    Directional lights are constant; spherical lights fall off with the
    inverse square of the distance, spread over the sphere of that radius.
    """
    match light:
        case DirectionalLight(intensity=intensity):
            return intensity
        case SphericalLight(position=position, intensity=intensity):
            r2 = np.float32((position - hit_point).norm())
            return intensity / (np.float32(4.0) * PI_F32 * r2)
        case _:
            raise TypeError(f"Unknown light type: {type(light).__name__}")


def distance_to(light: Light, hit_point: Point) -> float:
    """Distance from a hit point to a light; infinite for directional lights."""
    match light:
        case DirectionalLight():
            return math.inf
        case SphericalLight(position=position):
            return (position - hit_point).length()
        case _:
            raise TypeError(f"Unknown light type: {type(light).__name__}")


# =============================================================================
# Host-side shading
# =============================================================================


def get_colour(scene: Scene, ray: Ray, intersection: Intersection) -> Colour:
    """Shade the nearest hit of a ray.

    Args:
        scene: The scene being rendered.
        ray: The ray that produced the intersection.
        intersection: The nearest hit of the ray, from trace().

    Returns:
        The clamped colour seen along the ray.
    """
    surface = scene.surfaces[intersection.surface_index]
    hit_point = ray.origin + (ray.direction * intersection.distance)
    normal = surface_normal(surface, hit_point)

    colour = BLACK
    for light in scene.lights:
        direction_to_light = direction_from(light, hit_point)
        shadow_ray = Ray(
            origin=hit_point + (normal * scene.shadow_bias),
            direction=direction_to_light,
        )
        shadow_intersection = trace(scene, shadow_ray)
        in_light = (
            shadow_intersection is None
            or shadow_intersection.distance > distance_to(light, hit_point)
        )
        light_intensity = intensity_at(light, hit_point) if in_light else np.float32(0.0)

        light_power = np.float32(max(normal.dot_prod(direction_to_light), 0.0)) * light_intensity
        light_reflected = surface.albedo / PI_F32

        light_colour = light.colour * light_power * light_reflected
        colour = colour + (surface.colour * light_colour)

    return colour.clamp()


# =============================================================================
# Kernel-side shading
# =============================================================================


@ti.func
def light_direction_from(buffers: ti.template(), light_index: ti.i32, hit_point: vec3) -> vec3:
    """Kernel version of direction_from()."""
    to_light = -buffers.light_vectors[light_index]
    if buffers.light_kinds[light_index] == LIGHT_SPHERICAL:
        to_light = normalize(buffers.light_vectors[light_index] - hit_point)
    return to_light


@ti.func
def shade(
    buffers: ti.template(),
    origin: vec3,
    direction: vec3,
    distance: ti.f64,
    surface_index: ti.i32,
    shadow_bias: ti.f64,
) -> rgb:
    """Kernel version of get_colour(), computing colour in float32.

    Args:
        buffers: The SceneBuffers holding the uploaded scene.
        origin: Origin of the ray that produced the hit.
        direction: Direction of the ray that produced the hit.
        distance: Hit distance along the ray.
        surface_index: Index of the hit surface.
        shadow_bias: Shadow-ray origin offset along the normal.

    Returns:
        The clamped colour seen along the ray.
    """
    hit_point = origin + (direction * distance)
    normal = surface_normal_at(buffers, surface_index, hit_point)
    surface_colour = buffers.surface_colours[surface_index]
    albedo = buffers.surface_albedos[surface_index]
    zero = ti.cast(0.0, ti.f32)
    pi = ti.cast(math.pi, ti.f32)

    colour = rgb(0.0, 0.0, 0.0)
    for j in range(buffers.num_lights):
        direction_to_light = light_direction_from(buffers, j, hit_point)
        shadow_origin = hit_point + (normal * shadow_bias)
        shadow_hit, shadow_distance, _ = trace_scene(buffers, shadow_origin, direction_to_light)

        is_spherical = buffers.light_kinds[j] == LIGHT_SPHERICAL
        in_light = 1
        if shadow_hit == 1:
            # Directional lights are infinitely far, so any occluder blocks them
            in_light = 0
            if is_spherical:
                to_light = buffers.light_vectors[j] - hit_point
                if shadow_distance > ti.sqrt(length_squared(to_light)):
                    in_light = 1

        light_intensity = zero
        if in_light == 1:
            light_intensity = buffers.light_intensities[j]
            if is_spherical:
                r2 = ti.cast(length_squared(buffers.light_vectors[j] - hit_point), ti.f32)
                light_intensity = buffers.light_intensities[j] / (ti.cast(4.0, ti.f32) * pi * r2)

        n_dot_l = ti.cast(tm.dot(normal, direction_to_light), ti.f32)
        light_power = ti.max(n_dot_l, zero) * light_intensity
        light_reflected = albedo / pi

        light_colour = buffers.light_colours[j] * light_power * light_reflected
        colour = colour + (surface_colour * light_colour)

    return ti.min(colour, ti.cast(1.0, ti.f32))
