"""Pytest configuration for lamplight tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls, which would
    invalidate fields allocated by earlier tests.
    """
    from src.lamplight.config import init_taichi

    init_taichi("cpu")
    yield


@pytest.fixture
def single_sphere_scene():
    """A small scene with one sphere on the camera axis and one head-on light.

    The directional light travels along -z, away from the camera, so the
    direction to the light from the front of the sphere matches the sphere
    normal at the center pixel.
    """
    from src.lamplight.core.vector import Point, Vector3
    from src.lamplight.scene.builder import build_scene
    from src.lamplight.scene.model import Colour, DirectionalLight, Sphere

    return build_scene(
        width=40,
        height=30,
        fov=90.0,
        surfaces=[Sphere(Point(0.0, 0.0, -5.0), 1.0, Colour(1.0, 1.0, 1.0), 0.5)],
        lights=[DirectionalLight(Vector3(0.0, 0.0, -1.0), Colour(1.0, 1.0, 1.0), 2.0)],
    )


@pytest.fixture
def small_default_scene():
    """The demo scene at a resolution small enough for the Python renderer."""
    from src.lamplight.scene.builder import create_default_scene

    return create_default_scene(width=48, height=36)
