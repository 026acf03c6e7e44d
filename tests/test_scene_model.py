"""Unit tests for the scene data model.

Tests cover:
- Colour arithmetic and clamping
- 32-bit storage of colour channels, albedo and light intensity
- Surface and light construction and validation
- Scene validation (dimensions, field of view)
- Scene immutability
"""

import math

import numpy as np
import pytest


class TestColour:
    """Tests for the Colour value type."""

    def test_add(self):
        """Test channel-wise addition."""
        from src.lamplight.scene.model import Colour

        total = Colour(0.1, 0.2, 0.3) + Colour(0.1, 0.1, 0.1)
        assert total.to_tuple() == pytest.approx((0.2, 0.3, 0.4))

    def test_multiply_by_colour(self):
        """Test channel-wise colour product."""
        from src.lamplight.scene.model import Colour

        product = Colour(0.5, 1.0, 0.25) * Colour(0.5, 0.5, 4.0)
        assert product.to_tuple() == (0.25, 0.5, 1.0)

    def test_multiply_by_scalar(self):
        """Test scaling a colour by a number on either side."""
        from src.lamplight.scene.model import Colour

        c = Colour(0.1, 0.2, 0.4)
        assert (c * 2.0).to_tuple() == pytest.approx((0.2, 0.4, 0.8))
        assert (2 * c) == (c * 2)

    def test_clamp_caps_at_one(self):
        """Test that clamp limits each channel to 1.0."""
        from src.lamplight.scene.model import Colour

        assert Colour(3.0, 0.5, 1.0).clamp() == Colour(1.0, 0.5, 1.0)

    def test_clamp_has_no_lower_bound(self):
        """Test that clamp leaves values below zero untouched."""
        from src.lamplight.scene.model import Colour

        assert Colour(-0.5, 0.0, 0.2).clamp() == Colour(-0.5, 0.0, 0.2)

    def test_black(self):
        """Test the BLACK constant."""
        from src.lamplight.scene.model import BLACK

        assert BLACK.to_tuple() == (0.0, 0.0, 0.0)

    def test_channels_are_float32(self):
        """Test channels are stored as 32-bit floats."""
        from src.lamplight.scene.model import Colour

        c = Colour(0.1, 0.2, 0.3)
        assert isinstance(c.red, np.float32)
        assert c.red == np.float32(0.1)
        assert c.to_tuple()[0] != 0.1

    def test_arithmetic_stays_float32(self):
        """Test sums and products round like float32 arithmetic."""
        from src.lamplight.scene.model import Colour

        a = Colour(0.1, 0.7, 1.3)
        b = Colour(0.2, 0.3, 0.9)
        scale = 0.123456789
        expected = (np.float32(0.1) + np.float32(0.2)) * np.float32(scale)
        result = (a + b) * scale
        assert isinstance(result.red, np.float32)
        assert result.red == expected
        assert (a * b).blue == np.float32(1.3) * np.float32(0.9)
        assert isinstance((scale * a).green, np.float32)

    def test_to_tuple_is_json_friendly(self):
        """Test to_tuple returns plain Python floats."""
        from src.lamplight.scene.model import Colour

        assert all(type(v) is float for v in Colour(0.1, 0.2, 0.3).to_tuple())


class TestSurfaces:
    """Tests for Sphere and Plane construction."""

    def test_sphere_fields(self):
        """Test sphere stores its parameters."""
        from src.lamplight.core.vector import Point
        from src.lamplight.scene.model import Colour, Sphere

        sphere = Sphere(Point(0.0, 0.0, -5.0), 1.0, Colour(0.0, 0.0, 1.0), 0.18)
        assert sphere.center == Point(0.0, 0.0, -5.0)
        assert sphere.radius == 1.0
        assert sphere.albedo == np.float32(0.18)

    @pytest.mark.parametrize("radius", [0.0, -1.0])
    def test_sphere_rejects_non_positive_radius(self, radius):
        """Test that a sphere radius must be positive."""
        from src.lamplight.core.vector import Point
        from src.lamplight.scene.model import Colour, Sphere

        with pytest.raises(ValueError, match="radius"):
            Sphere(Point.zero(), radius, Colour(1.0, 1.0, 1.0), 0.5)

    @pytest.mark.parametrize("albedo", [0.0, -0.1, 1.5])
    def test_albedo_out_of_range(self, albedo):
        """Test that albedo must lie in (0, 1] for both surface kinds."""
        from src.lamplight.core.vector import Point, Vector3
        from src.lamplight.scene.model import Colour, Plane, Sphere

        white = Colour(1.0, 1.0, 1.0)
        with pytest.raises(ValueError, match="Albedo"):
            Sphere(Point.zero(), 1.0, white, albedo)
        with pytest.raises(ValueError, match="Albedo"):
            Plane(Point.zero(), Vector3(0.0, -1.0, 0.0), white, albedo)

    def test_albedo_of_one_allowed(self):
        """Test the upper albedo bound is inclusive."""
        from src.lamplight.core.vector import Point, Vector3
        from src.lamplight.scene.model import Colour, Plane

        plane = Plane(Point.zero(), Vector3(0.0, -1.0, 0.0), Colour(1.0, 1.0, 1.0), 1.0)
        assert plane.albedo == 1.0

    def test_light_intensity_is_float32(self):
        """Test both light kinds store their intensity as a 32-bit float."""
        from src.lamplight.core.vector import Point, Vector3
        from src.lamplight.scene.model import Colour, DirectionalLight, SphericalLight

        white = Colour(1.0, 1.0, 1.0)
        directional = DirectionalLight(Vector3(0.0, 0.0, -1.0), white, 0.1)
        spherical = SphericalLight(Point.zero(), white, 40000.0)
        assert isinstance(directional.intensity, np.float32)
        assert directional.intensity == np.float32(0.1)
        assert spherical.intensity == 40000.0


class TestScene:
    """Tests for Scene validation."""

    def _sphere(self):
        from src.lamplight.core.vector import Point
        from src.lamplight.scene.model import Colour, Sphere

        return Sphere(Point(0.0, 0.0, -5.0), 1.0, Colour(0.0, 0.0, 1.0), 0.18)

    def test_valid_scene(self):
        """Test constructing a valid scene."""
        from src.lamplight.scene.model import DEFAULT_SHADOW_BIAS, Scene

        scene = Scene(width=800, height=600, fov=90.0, surfaces=[self._sphere()])
        assert scene.width == 800
        assert scene.height == 600
        assert len(scene.surfaces) == 1
        assert scene.lights == ()
        assert scene.shadow_bias == DEFAULT_SHADOW_BIAS

    def test_sequences_become_tuples(self):
        """Test that lists passed in are frozen into tuples."""
        from src.lamplight.scene.model import Scene

        surfaces = [self._sphere()]
        scene = Scene(width=4, height=3, fov=90.0, surfaces=surfaces)
        surfaces.append(self._sphere())
        assert isinstance(scene.surfaces, tuple)
        assert len(scene.surfaces) == 1

    @pytest.mark.parametrize("width,height", [(600, 600), (600, 800), (0, 0), (10, 0), (10, -2)])
    def test_rejects_bad_dimensions(self, width, height):
        """Test that width must exceed a positive height."""
        from src.lamplight.scene.model import Scene

        with pytest.raises(ValueError):
            Scene(width=width, height=height, fov=90.0)

    @pytest.mark.parametrize("fov", [0.0, -10.0, 180.0, 270.0, math.inf, math.nan])
    def test_rejects_bad_fov(self, fov):
        """Test that the field of view must be finite and in (0, 180)."""
        from src.lamplight.scene.model import Scene

        with pytest.raises(ValueError, match="Field of view"):
            Scene(width=800, height=600, fov=fov)

    def test_scene_is_immutable(self):
        """Test that scene attributes cannot be reassigned."""
        from dataclasses import FrozenInstanceError

        from src.lamplight.scene.model import Scene

        scene = Scene(width=800, height=600, fov=90.0)
        with pytest.raises(FrozenInstanceError):
            scene.width = 1024
