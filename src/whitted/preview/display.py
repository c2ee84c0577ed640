"""Showing renders on screen with Matplotlib.

Rendered images hold unclamped colors: an intersection sums several light
terms and can easily exceed 1.0. Before display every channel goes through
the same conversion as ``Color.to_drawing_color``: capped at 1.0 and
scaled to 0-255. Negative channels survive that conversion; the
[0, 1] arrays handed to Matplotlib and GGUI clip them to zero.

Example:
    >>> from src.whitted.core.engine import Engine
    >>> from src.whitted.preview.display import show_preview
    >>> from src.whitted.scene.presets import create_demo_world
    >>>
    >>> image = Engine(create_demo_world(width=320, height=240)).generate()
    >>> show_preview(image, title="Demo scene")
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from src.whitted.core.image import Image


def image_to_drawing_array(image: Image) -> npt.NDArray[np.float64]:
    """Convert an image to drawing colors in the 0-255 range.

    Vectorized ``Color.to_drawing_color`` over every pixel: channels are
    capped at 1.0 and negative values pass through unchanged.

    Args:
        image: The rendered image.

    Returns:
        Array of shape (height, width, 3), values at most 255.
    """
    data = image.to_numpy()
    return 255.0 * np.minimum(data, 1.0)


def image_to_display_array(image: Image) -> npt.NDArray[np.float32]:
    """Convert an image to the [0, 1] float32 array Matplotlib and GGUI expect."""
    return np.clip(image_to_drawing_array(image) / 255.0, 0.0, 1.0).astype(np.float32)


def show_preview(
    image: Image,
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 6),
    block: bool = True,
) -> None:
    """Display a rendered image as a Matplotlib figure.

    Args:
        image: The rendered image.
        title: Custom title (default shows the resolution).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until the figure is closed.
    """
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(1, 1, figsize=figsize)

    ax.imshow(image_to_display_array(image))
    ax.axis("off")

    if title is None:
        title = f"Render Preview - {image.width}x{image.height}"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)


def show_comparison(
    image_a: Image,
    image_b: Image,
    *,
    labels: tuple[str, str] = ("A", "B"),
    diff_scale: float = 10.0,
    figsize: tuple[float, float] = (16, 6),
    block: bool = True,
) -> float:
    """Show two renders next to their per-pixel difference.

    Handy for seeing what a deeper recursion budget adds to a scene.

    Args:
        image_a: Left image.
        image_b: Middle image, the same size as ``image_a``.
        labels: Titles of the two renders.
        diff_scale: Gain applied to the absolute difference in the right panel.
        figsize: Figure size in inches.
        block: Whether ``plt.show`` blocks.

    Returns:
        The RMSE between the two images in display space.

    Raises:
        ValueError: If the images differ in size.
    """
    import matplotlib.pyplot as plt

    from src.whitted.preview.export import compute_rmse

    left = image_to_display_array(image_a)
    middle = image_to_display_array(image_b)
    rmse = compute_rmse(left, middle)
    right = np.clip(np.abs(left - middle) * diff_scale, 0.0, 1.0)

    panels = (
        (left, labels[0]),
        (middle, labels[1]),
        (right, f"|{labels[0]} - {labels[1]}| x{diff_scale:g}, RMSE {rmse:.6f}"),
    )
    fig, axes = plt.subplots(1, len(panels), figsize=figsize)
    for ax, (data, label) in zip(axes, panels):
        ax.imshow(data)
        ax.set_title(label)
        ax.axis("off")

    fig.tight_layout()
    plt.show(block=block)
    return rmse
