"""Scene module: data model, nearest-hit queries and scene construction.

Components:
    model: Colours, surfaces, lights and the Scene aggregate
    intersection: Intersection results, variant dispatch, linear-scan trace
        and the Taichi structure-of-arrays scene upload
    builder: Scene construction, dict/JSON conversion and the demo scene
"""

from .builder import (
    build_scene,
    create_default_scene,
    load_scene,
    save_scene,
    scene_from_dict,
    scene_to_dict,
)
from .intersection import (
    Intersection,
    SceneBuffers,
    intersect,
    surface_normal,
    trace,
    trace_scene,
)
from .model import (
    BLACK,
    DEFAULT_SHADOW_BIAS,
    Colour,
    DirectionalLight,
    Light,
    Plane,
    Scene,
    Sphere,
    SphericalLight,
    Surface,
)

__all__ = [
    # Model
    "Colour",
    "BLACK",
    "Sphere",
    "Plane",
    "Surface",
    "DirectionalLight",
    "SphericalLight",
    "Light",
    "Scene",
    "DEFAULT_SHADOW_BIAS",
    # Intersection
    "Intersection",
    "intersect",
    "surface_normal",
    "trace",
    "SceneBuffers",
    "trace_scene",
    # Builder
    "build_scene",
    "create_default_scene",
    "scene_from_dict",
    "scene_to_dict",
    "load_scene",
    "save_scene",
]
