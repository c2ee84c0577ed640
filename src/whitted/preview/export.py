"""Writing renders to disk.

Images are stored as 8-bit RGB PNG through Pillow. Drawing colors are
clipped to [0, 255] right before the 8-bit cast, which is where the
negative channels that ``to_drawing_color`` lets through get bounded.

Example:
    >>> from src.whitted.core.engine import Engine
    >>> from src.whitted.preview.export import save_png
    >>> from src.whitted.scene.presets import create_demo_world
    >>>
    >>> image = Engine(create_demo_world(width=320, height=240)).generate()
    >>> save_png(image, "demo.png")
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from src.whitted.core.image import Image
from src.whitted.preview.display import image_to_drawing_array

logger = logging.getLogger(__name__)


def image_to_uint8(image: Image) -> npt.NDArray[np.uint8]:
    """Convert a rendered image to 8-bit RGB.

    Args:
        image: The rendered image.

    Returns:
        Array of shape (height, width, 3) with dtype uint8.
    """
    return np.clip(image_to_drawing_array(image), 0.0, 255.0).astype(np.uint8)


def save_png(image: Image, filepath: str | Path) -> None:
    """Save a rendered image as an 8-bit RGB PNG file.

    Args:
        image: The rendered image.
        filepath: Destination path.
    """
    pil_image = PILImage.fromarray(image_to_uint8(image))
    pil_image.save(filepath)
    logger.info("Saved %dx%d image to %s", image.width, image.height, filepath)


def compute_rmse(reference: npt.NDArray[np.floating], candidate: npt.NDArray[np.floating]) -> float:
    """Root mean squared difference between two arrays of equal shape.

    Raises:
        ValueError: If the shapes differ.
    """
    if reference.shape != candidate.shape:
        raise ValueError(f"Image shapes must match: {reference.shape} vs {candidate.shape}")
    error = np.subtract(reference, candidate, dtype=np.float64)
    return float(np.sqrt(np.mean(np.square(error))))
