"""Tests for the render drivers.

Tests cover:
- Output shape, dtype and value range of both drivers
- Scenes without lights render black
- A camera sitting on a sphere surface
- Center of a lit sphere is brighter than its silhouette
- The Taichi driver matches the sequential driver
- Single-pixel tracing
"""

import numpy as np


class TestRenderSequential:
    """Tests for the pure-Python reference driver."""

    def test_shape_and_dtype(self, single_sphere_scene):
        """Test the grid is (height, width, 3) float32."""
        from src.lamplight.core.render import render_sequential

        image = render_sequential(single_sphere_scene)
        assert image.shape == (30, 40, 3)
        assert image.dtype == np.float32

    def test_values_in_unit_range(self, small_default_scene):
        """Test every channel of the demo scene lies in [0, 1]."""
        from src.lamplight.core.render import render_sequential

        image = render_sequential(small_default_scene)
        assert image.min() >= 0.0
        assert image.max() <= 1.0

    def test_center_brighter_than_silhouette(self, single_sphere_scene):
        """Test a head-on light makes the sphere center brightest."""
        from src.lamplight.core.render import render_sequential

        image = render_sequential(single_sphere_scene)
        center = image[15, 20]
        # Near the right-hand rim of the sphere on the same row
        edge = image[15, 22]
        assert edge[0] > 0.0
        assert center[0] > edge[0]

    def test_background_is_black(self, single_sphere_scene):
        """Test pixels that miss every surface are black."""
        from src.lamplight.core.render import render_sequential

        image = render_sequential(single_sphere_scene)
        assert np.all(image[0, 0] == 0.0)
        assert np.all(image[29, 39] == 0.0)


class TestRenderParallel:
    """Tests for the Taichi driver."""

    def test_no_lights_all_black(self):
        """Test a full-size scene with no lights renders entirely black."""
        from src.lamplight.core.render import render
        from src.lamplight.core.vector import Point
        from src.lamplight.scene.builder import build_scene
        from src.lamplight.scene.model import Colour, Sphere

        scene = build_scene(
            width=800,
            height=600,
            fov=90.0,
            surfaces=[Sphere(Point(0.0, 0.0, -5.0), 1.0, Colour(0.0, 0.0, 1.0), 0.18)],
        )
        image = render(scene)
        assert image.shape == (600, 800, 3)
        assert image.dtype == np.float32
        assert not image.any()

    def test_empty_scene(self):
        """Test a scene with nothing in it renders black."""
        from src.lamplight.core.render import render_parallel
        from src.lamplight.scene.builder import build_scene

        image = render_parallel(build_scene(width=16, height=9, fov=60.0))
        assert image.shape == (9, 16, 3)
        assert not image.any()

    def test_matches_sequential_single_sphere(self, single_sphere_scene):
        """Test both drivers agree on a simple scene."""
        from src.lamplight.core.render import render_parallel, render_sequential

        expected = render_sequential(single_sphere_scene)
        actual = render_parallel(single_sphere_scene)
        assert np.allclose(actual, expected, atol=1e-6)

    def test_matches_sequential_default_scene(self, small_default_scene):
        """Test both drivers agree on the demo scene with shadows and both light kinds."""
        from src.lamplight.core.render import render_parallel, render_sequential

        expected = render_sequential(small_default_scene)
        actual = render_parallel(small_default_scene)
        # Allow a stray pixel on a shadow boundary where compiled float rounding flips the test
        matching = np.all(np.isclose(actual, expected, atol=1e-6), axis=2)
        assert (~matching).sum() <= 3

    def test_render_dispatch(self, single_sphere_scene):
        """Test render() selects the driver from the parallel flag."""
        from src.lamplight.core.render import render

        a = render(single_sphere_scene, parallel=True)
        b = render(single_sphere_scene, parallel=False)
        assert a.shape == b.shape


class TestCameraOnSphereSurface:
    """A green sphere of radius 5 centered at (0, 0, -5) passes through the camera."""

    def _scene(self, width, height):
        from src.lamplight.core.vector import Point
        from src.lamplight.scene.builder import build_scene
        from src.lamplight.scene.model import Colour, Sphere

        return build_scene(
            width=width,
            height=height,
            fov=90.0,
            surfaces=[Sphere(Point(0.0, 0.0, -5.0), 5.0, Colour(0.0, 1.0, 0.0), 0.18)],
        )

    def test_center_ray_hits_at_zero(self):
        """Test the forward ray starts on the surface, so the nearest hit is at t = 0."""
        from src.lamplight.core.ray import Ray
        from src.lamplight.core.vector import Point, Vector3
        from src.lamplight.scene.intersection import trace

        hit = trace(self._scene(80, 60), Ray(Point.zero(), Vector3(0.0, 0.0, -1.0)))
        assert hit is not None
        assert hit.surface_index == 0
        assert hit.distance == 0.0

    def test_parallel_full_size_is_black(self):
        """Test the Taichi driver renders the unlit 800x600 scene entirely black."""
        from src.lamplight.core.render import render_parallel

        image = render_parallel(self._scene(800, 600))
        assert image.shape == (600, 800, 3)
        assert image.dtype == np.float32
        assert not image.any()

    def test_sequential_is_black(self):
        """Test the reference driver renders the unlit scene entirely black."""
        from src.lamplight.core.render import render_sequential

        image = render_sequential(self._scene(80, 60))
        assert image.shape == (60, 80, 3)
        assert image.dtype == np.float32
        assert not image.any()


class TestTracePixel:
    """Tests for single-pixel tracing."""

    def test_matches_grid(self, small_default_scene):
        """Test trace_pixel agrees with the full sequential render."""
        from src.lamplight.core.render import render_sequential, trace_pixel

        image = render_sequential(small_default_scene)
        for x, y in [(0, 0), (24, 18), (47, 35), (10, 30)]:
            colour = trace_pixel(small_default_scene, x, y)
            assert np.array_equal(image[y, x], np.array(colour.to_tuple(), dtype=np.float32))

    def test_miss_returns_background(self, single_sphere_scene):
        """Test a ray that hits nothing returns the background colour."""
        from src.lamplight.core.render import BACKGROUND_COLOR, trace_pixel

        assert trace_pixel(single_sphere_scene, 0, 0) == BACKGROUND_COLOR
