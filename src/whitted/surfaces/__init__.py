"""Surface shading model and color sources."""

from .sources import (
    COLOR_SOURCE_TYPES,
    Checkerboard,
    ColorSource,
    ConstantColor,
    color_source_from_dict,
    register_color_source,
)
from .surface import Surface

__all__ = [
    "Surface",
    "ColorSource",
    "ConstantColor",
    "Checkerboard",
    "COLOR_SOURCE_TYPES",
    "register_color_source",
    "color_source_from_dict",
]
