"""Matplotlib-based preview display for rendered images.

Example:
    >>> from src.lamplight.preview.display import show_preview
    >>> show_preview(image, title="Demo scene")
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt


def show_preview(
    image: npt.NDArray[np.float32],
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 6),
    block: bool = True,
) -> None:
    """Display a rendered colour grid as a Matplotlib figure.

    Args:
        image: Array of shape (H, W, 3) with channels in [0, 1].
        title: Custom title (default shows the image size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(1, 1, figsize=figsize)

    ax.imshow(np.clip(image, 0.0, 1.0))
    ax.axis("off")

    if title is None:
        height, width = image.shape[:2]
        title = f"Render Preview - {width}x{height}"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
