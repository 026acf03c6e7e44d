"""Integration tests for the full render pipeline.

Tests cover:
- Rendering the full-size demo scene with the Taichi driver
- Expected colours in recognizable regions of the demo image
- Scene file to PNG through the command-line entry point
"""

import numpy as np
from PIL import Image as PILImage


class TestDemoScene:
    """End-to-end checks on the built-in demo scene."""

    def test_full_size_render(self):
        """Test the 800x600 demo scene renders to a valid image."""
        from src.lamplight.core.render import render
        from src.lamplight.scene.builder import create_default_scene

        image = render(create_default_scene())
        assert image.shape == (600, 800, 3)
        assert image.dtype == np.float32
        assert image.min() >= 0.0
        assert image.max() <= 1.0
        # The back plane fills the image wherever nothing else is in front
        assert (image.reshape(-1, 3).sum(axis=1) > 0.0).mean() > 0.5

    def test_blue_sphere_is_blue(self):
        """Test the center of the image shows only the blue sphere's colour."""
        from src.lamplight.core.render import trace_pixel
        from src.lamplight.scene.builder import create_default_scene

        colour = trace_pixel(create_default_scene(), 400, 300)
        assert colour.red == 0.0
        assert colour.green == 0.0
        assert colour.blue > 0.0

    def test_floor_is_grey(self):
        """Test the bottom center of the image shows the grey floor."""
        from src.lamplight.core.render import trace_pixel
        from src.lamplight.scene.builder import create_default_scene

        colour = trace_pixel(create_default_scene(), 400, 595)
        assert colour.red > 0.0
        assert colour.green > 0.0
        assert colour.blue > 0.0
        assert isinstance(colour.red, np.float32)


class TestScenePipeline:
    """Scene file to PNG through the command-line entry point."""

    def test_scene_file_to_png(self, tmp_path):
        """Test a hand-written scene file renders through main()."""
        import json

        from src.lamplight.cli import main

        scene_path = tmp_path / "one_sphere.json"
        scene_path.write_text(
            json.dumps(
                {
                    "width": 64,
                    "height": 48,
                    "fov": 90.0,
                    "surfaces": [
                        {
                            "type": "sphere",
                            "center": [0, 0, -5],
                            "radius": 1,
                            "colour": [1, 0, 0],
                            "albedo": 0.5,
                        }
                    ],
                    "lights": [
                        {
                            "type": "directional",
                            "direction": [0, 0, -1],
                            "colour": [1, 1, 1],
                            "intensity": 2.0,
                        }
                    ],
                }
            )
        )
        output = tmp_path / "one_sphere.png"

        code = main(["--scene", str(scene_path), "--sequential", "-q", "--output", str(output)])

        assert code == 0
        pixels = np.asarray(PILImage.open(output))
        assert pixels.shape == (48, 64, 4)
        # Center is lit red; corners miss the sphere and stay black
        assert pixels[24, 32, 0] > 0
        assert pixels[24, 32, 1] == 0
        assert tuple(pixels[0, 0]) == (0, 0, 0, 255)
