"""Camera models for primary ray generation."""

from .pinhole import Camera, compute_image_size

__all__ = ["Camera", "compute_image_size"]
