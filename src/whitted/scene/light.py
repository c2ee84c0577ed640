"""Point light sources."""

from __future__ import annotations

from dataclasses import dataclass

from src.whitted.core.color import Color
from src.whitted.core.vector import Vector3


@dataclass(frozen=True)
class Light:
    """A point light.

    Attributes:
        position: Location of the light in world space.
        color: Emitted color; channels may exceed 1.0 for bright lights.
    """

    position: Vector3[float]
    color: Color
