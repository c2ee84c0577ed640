"""Preview module for output and visualization.

Components:
    display: Matplotlib-based preview display
    export: PNG export utilities
    interactive: Taichi GGUI-based progressive preview window

Example:
    >>> from src.whitted.preview import show_preview, save_png
    >>> show_preview(image)
    >>> save_png(image, "output.png")
"""

from src.whitted.preview.display import (
    image_to_display_array,
    image_to_drawing_array,
    show_comparison,
    show_preview,
)
from src.whitted.preview.export import compute_rmse, image_to_uint8, save_png
from src.whitted.preview.interactive import InteractivePreview

__all__ = [
    "InteractivePreview",
    "show_preview",
    "show_comparison",
    "image_to_drawing_array",
    "image_to_display_array",
    "save_png",
    "image_to_uint8",
    "compute_rmse",
]
