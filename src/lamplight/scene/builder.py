"""Scene construction and serialization.

Scenes are built explicitly from structured parameters with build_scene(),
loaded from plain dictionaries or JSON files, or taken from the built-in demo
scene. Every path ends in the validating Scene constructor.

The dictionary format tags each surface and light with a "type":

    {
        "width": 800, "height": 600, "fov": 90.0, "shadow_bias": 0.0001,
        "surfaces": [
            {"type": "sphere", "center": [0, 0, -5], "radius": 1.0,
             "colour": [0, 0, 1], "albedo": 0.18},
            {"type": "plane", "origin": [0, -2, 0], "normal": [0, -1, 0],
             "colour": [0.2, 0.2, 0.2], "albedo": 0.18}
        ],
        "lights": [
            {"type": "directional", "direction": [0.25, 0, -2],
             "colour": [1, 1, 1], "intensity": 20.0},
            {"type": "spherical", "position": [-2, 10, -3],
             "colour": [3, 0.8, 0.3], "intensity": 40000.0}
        ]
    }

Example:
    >>> from src.lamplight.scene.builder import create_default_scene, save_scene
    >>> scene = create_default_scene()
    >>> save_scene(scene, "scene.json")
"""

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from src.lamplight.config import DEFAULT_FOV, DEFAULT_HEIGHT, DEFAULT_WIDTH
from src.lamplight.core.vector import Point, Vector3
from src.lamplight.scene.model import (
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

logger = logging.getLogger(__name__)

# Albedo of every surface in the demo scene
DEMO_ALBEDO = 0.18


def build_scene(
    *,
    width: int,
    height: int,
    fov: float,
    surfaces: Iterable[Surface] = (),
    lights: Iterable[Light] = (),
    shadow_bias: float = DEFAULT_SHADOW_BIAS,
) -> Scene:
    """Build a validated scene.

    Args:
        width: Image width in pixels (must exceed height).
        height: Image height in pixels.
        fov: Field of view in degrees.
        surfaces: Surfaces in scan order.
        lights: Lights in accumulation order.
        shadow_bias: Shadow-ray origin offset.

    Returns:
        The constructed Scene.

    Raises:
        ValueError: If any scene invariant is violated.
    """
    return Scene(
        width=width,
        height=height,
        fov=fov,
        surfaces=tuple(surfaces),
        lights=tuple(lights),
        shadow_bias=shadow_bias,
    )


def create_default_scene(
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    fov: float = DEFAULT_FOV,
) -> Scene:
    """Create the demo scene: three spheres over a floor, a sky backdrop.

    The scene contains a blue, a red and a green sphere, a grey floor plane
    at y = -2, a pale blue back plane at z = -20, a white directional light
    and an orange spherical light above the spheres.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        fov: Field of view in degrees.

    Returns:
        The demo Scene.
    """
    surfaces: list[Surface] = [
        Sphere(Point(0.0, 0.0, -5.0), 1.0, Colour(0.0, 0.0, 1.0), DEMO_ALBEDO),
        Sphere(Point(-3.0, 1.0, -6.0), 2.0, Colour(1.0, 0.0, 0.0), DEMO_ALBEDO),
        Sphere(Point(2.0, 2.0, -4.0), 2.25, Colour(0.0, 1.0, 0.0), DEMO_ALBEDO),
        Plane(Point(0.0, -2.0, 0.0), Vector3(0.0, -1.0, 0.0), Colour(0.2, 0.2, 0.2), DEMO_ALBEDO),
        Plane(Point(0.0, 0.0, -20.0), Vector3(0.0, 0.0, -1.0), Colour(0.6, 0.8, 1.0), DEMO_ALBEDO),
    ]
    lights: list[Light] = [
        DirectionalLight(Vector3(0.25, 0.0, -2.0), Colour(1.0, 1.0, 1.0), 20.0),
        SphericalLight(Point(-2.0, 10.0, -3.0), Colour(3.0, 0.8, 0.3), 40000.0),
    ]
    return build_scene(
        width=width,
        height=height,
        fov=fov,
        surfaces=surfaces,
        lights=lights,
        shadow_bias=DEFAULT_SHADOW_BIAS,
    )


# =============================================================================
# Dictionary conversion
# =============================================================================


def _require(data: Mapping[str, Any], key: str, context: str) -> Any:
    if key not in data:
        raise ValueError(f"Missing '{key}' in {context}")
    return data[key]


def _mapping(data: Any, context: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"Expected {context} to be an object, got {data!r}")
    return data


def _entries(data: Mapping[str, Any], key: str) -> list[Any]:
    value = data.get(key, [])
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"'{key}' must be a list, got {value!r}")
    return list(value)


def _number(value: Any, key: str) -> float:
    # JSON true/false would otherwise pass as 1.0/0.0
    if isinstance(value, bool):
        raise ValueError(f"'{key}' must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"'{key}' must be a number, got {value!r}") from e


def _dimension(value: Any, key: str) -> int:
    number = _number(value, key)
    if not number.is_integer():
        raise ValueError(f"'{key}' must be a whole number of pixels, got {value!r}")
    return int(number)


def _triple(value: Any, key: str) -> tuple[float, float, float]:
    if isinstance(value, str):
        raise ValueError(f"'{key}' must be a list of three numbers, got {value!r}")
    try:
        x, y, z = value
        return (_number(x, key), _number(y, key), _number(z, key))
    except (TypeError, ValueError) as e:
        raise ValueError(f"'{key}' must be a list of three numbers, got {value!r}") from e


def _colour(data: Mapping[str, Any], context: str) -> Colour:
    return Colour(*_triple(_require(data, "colour", context), "colour"))


def surface_from_dict(data: Mapping[str, Any]) -> Surface:
    """Build a surface from its tagged dictionary form.

    Raises:
        ValueError: If the data is not a mapping, the type is unknown, or a
            required key is missing or of the wrong type.
    """
    data = _mapping(data, "surface")
    surface_type = str(data.get("type", "")).lower()
    if surface_type == "sphere":
        return Sphere(
            center=Point(*_triple(_require(data, "center", "sphere"), "center")),
            radius=_number(_require(data, "radius", "sphere"), "radius"),
            colour=_colour(data, "sphere"),
            albedo=_number(_require(data, "albedo", "sphere"), "albedo"),
        )
    if surface_type == "plane":
        return Plane(
            origin=Point(*_triple(_require(data, "origin", "plane"), "origin")),
            normal=Vector3(*_triple(_require(data, "normal", "plane"), "normal")),
            colour=_colour(data, "plane"),
            albedo=_number(_require(data, "albedo", "plane"), "albedo"),
        )
    raise ValueError(f"Unknown surface type: {surface_type}")


def light_from_dict(data: Mapping[str, Any]) -> Light:
    """Build a light from its tagged dictionary form.

    Raises:
        ValueError: If the data is not a mapping, the type is unknown, or a
            required key is missing or of the wrong type.
    """
    data = _mapping(data, "light")
    light_type = str(data.get("type", "")).lower()
    if light_type == "directional":
        return DirectionalLight(
            direction=Vector3(*_triple(_require(data, "direction", "directional light"), "direction")),
            colour=_colour(data, "directional light"),
            intensity=_number(_require(data, "intensity", "directional light"), "intensity"),
        )
    if light_type == "spherical":
        return SphericalLight(
            position=Point(*_triple(_require(data, "position", "spherical light"), "position")),
            colour=_colour(data, "spherical light"),
            intensity=_number(_require(data, "intensity", "spherical light"), "intensity"),
        )
    raise ValueError(f"Unknown light type: {light_type}")


def surface_to_dict(surface: Surface) -> dict[str, Any]:
    """Tagged dictionary form of a surface."""
    match surface:
        case Sphere():
            return {
                "type": "sphere",
                "center": list(surface.center.to_tuple()),
                "radius": surface.radius,
                "colour": list(surface.colour.to_tuple()),
                "albedo": float(surface.albedo),
            }
        case Plane():
            return {
                "type": "plane",
                "origin": list(surface.origin.to_tuple()),
                "normal": list(surface.normal.to_tuple()),
                "colour": list(surface.colour.to_tuple()),
                "albedo": float(surface.albedo),
            }
        case _:
            raise TypeError(f"Unknown surface type: {type(surface).__name__}")


def light_to_dict(light: Light) -> dict[str, Any]:
    """Tagged dictionary form of a light."""
    match light:
        case DirectionalLight():
            return {
                "type": "directional",
                "direction": list(light.direction.to_tuple()),
                "colour": list(light.colour.to_tuple()),
                "intensity": float(light.intensity),
            }
        case SphericalLight():
            return {
                "type": "spherical",
                "position": list(light.position.to_tuple()),
                "colour": list(light.colour.to_tuple()),
                "intensity": float(light.intensity),
            }
        case _:
            raise TypeError(f"Unknown light type: {type(light).__name__}")


def scene_from_dict(data: Mapping[str, Any]) -> Scene:
    """Build a scene from its dictionary form.

    Args:
        data: Dictionary with 'width', 'height', 'fov' and optional
            'surfaces', 'lights' and 'shadow_bias' keys.

    Returns:
        The constructed Scene.

    Raises:
        ValueError: If the data is malformed or violates a scene invariant.
    """
    data = _mapping(data, "scene")
    return build_scene(
        width=_dimension(_require(data, "width", "scene"), "width"),
        height=_dimension(_require(data, "height", "scene"), "height"),
        fov=_number(_require(data, "fov", "scene"), "fov"),
        surfaces=[surface_from_dict(s) for s in _entries(data, "surfaces")],
        lights=[light_from_dict(l) for l in _entries(data, "lights")],
        shadow_bias=_number(data.get("shadow_bias", DEFAULT_SHADOW_BIAS), "shadow_bias"),
    )


def scene_to_dict(scene: Scene) -> dict[str, Any]:
    """Export a scene to a dictionary (for JSON serialization)."""
    return {
        "width": scene.width,
        "height": scene.height,
        "fov": scene.fov,
        "shadow_bias": scene.shadow_bias,
        "surfaces": [surface_to_dict(s) for s in scene.surfaces],
        "lights": [light_to_dict(l) for l in scene.lights],
    }


# =============================================================================
# JSON files
# =============================================================================


def load_scene(path: str | Path) -> Scene:
    """Load a scene from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not valid JSON or not a valid scene.
    """
    path = Path(path)
    logger.debug("Loading scene from %s", path)
    with path.open(encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid scene file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Invalid scene file {path}: expected a JSON object")
    scene = scene_from_dict(data)
    logger.info(
        "Loaded scene %s (%d surfaces, %d lights)", path, len(scene.surfaces), len(scene.lights)
    )
    return scene


def save_scene(scene: Scene, path: str | Path) -> None:
    """Write a scene to a JSON file."""
    path = Path(path)
    with path.open("w", encoding="utf-8") as f:
        json.dump(scene_to_dict(scene), f, indent=2)
    logger.debug("Saved scene to %s", path)
