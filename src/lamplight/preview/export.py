"""Image export utilities for rendered colour grids.

Rendered grids hold float channels in [0, 1]. Export maps each channel to an
8-bit value with round(value * 255) and adds a fully opaque alpha channel.

Supported formats:
    - PNG (8-bit RGBA via Pillow)

Example:
    >>> from src.lamplight.core.render import render
    >>> from src.lamplight.preview.export import save_png
    >>> save_png(render(scene), "output.png")
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

logger = logging.getLogger(__name__)


def image_to_rgba8(image: npt.NDArray[np.float32]) -> npt.NDArray[np.uint8]:
    """Convert a colour grid to 8-bit RGBA.

    Args:
        image: Array of shape (H, W, 3) with channels in [0, 1]. Values
            outside that range are clipped.

    Returns:
        Array of shape (H, W, 4) with dtype uint8 and alpha 255.

    Raises:
        ValueError: If the array is not of shape (H, W, 3).
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an image of shape (H, W, 3), got {image.shape}")

    rgb = np.rint(np.clip(image, 0.0, 1.0) * 255.0).astype(np.uint8)
    alpha = np.full(image.shape[:2] + (1,), 255, dtype=np.uint8)
    return np.concatenate([rgb, alpha], axis=2)


def save_png(image: npt.NDArray[np.float32], filepath: str | Path) -> None:
    """Save a colour grid as an opaque RGBA PNG.

    Args:
        image: Array of shape (H, W, 3) with channels in [0, 1].
        filepath: Output file path (should end in .png).
    """
    image_rgba8 = image_to_rgba8(image)

    # Save using Pillow
    pil_image = PILImage.fromarray(image_rgba8)
    pil_image.save(filepath)
    logger.info("Saved %dx%d image to %s", image.shape[1], image.shape[0], filepath)
