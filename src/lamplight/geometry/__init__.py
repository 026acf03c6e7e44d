"""Geometry module for surface primitives.

Components:
    sphere: Sphere intersection (geometric method) and normals
    plane: One-sided infinite plane intersection and normals

Each primitive has a host-side function working on the Point/Vector3 value
types and a Taichi function working on float64 kernel vectors:
    hit, t = hit_shape(ray_origin, ray_direction, shape_data...)
"""

from .plane import PARALLEL_EPSILON, hit_plane, intersect_plane, plane_normal
from .sphere import hit_sphere, hit_sphere_normal, intersect_sphere, sphere_normal

__all__ = [
    "intersect_sphere",
    "sphere_normal",
    "hit_sphere",
    "hit_sphere_normal",
    "intersect_plane",
    "plane_normal",
    "hit_plane",
    "PARALLEL_EPSILON",
]
