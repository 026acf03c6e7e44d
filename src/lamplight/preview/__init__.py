"""Preview module for output and visualization.

Components:
    export: 8-bit RGBA conversion and PNG export
    display: Matplotlib-based preview window

Example:
    >>> from src.lamplight.preview import save_png, show_preview
    >>> save_png(image, "output.png")
    >>> show_preview(image)
"""

from src.lamplight.preview.display import show_preview
from src.lamplight.preview.export import image_to_rgba8, save_png

__all__ = [
    "show_preview",
    "image_to_rgba8",
    "save_png",
]
