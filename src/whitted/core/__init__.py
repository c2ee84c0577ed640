"""Core rendering module.

Components:
    vector: Generic 2D/3D vectors
    color: RGB colors with unbounded float channels
    ray: Ray data structure with reflection and refraction helpers
    image: Dense color buffer backed by NumPy
    parsing: Helpers for reading scene documents
    engine: The recursive Whitted shading engine
"""

from .color import BLACK, WHITE, Color
from .image import Image
from .parsing import SceneLoadError
from .ray import Ray, reflect, refract
from .vector import DivideByZeroError, Vector2, Vector3

# Note: engine is NOT imported here to avoid circular imports.
# Import directly from src.whitted.core.engine when needed.

__all__ = [
    "Vector2",
    "Vector3",
    "DivideByZeroError",
    "Color",
    "BLACK",
    "WHITE",
    "Ray",
    "reflect",
    "refract",
    "Image",
    "SceneLoadError",
]
