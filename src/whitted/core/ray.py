"""Ray data structure and the reflection/refraction direction helpers.

A ray always carries a unit direction: the constructor normalizes whatever
direction it is given and fails loudly on a zero vector instead of
producing a degenerate ray.

Example:
    >>> from src.whitted.core.ray import Ray
    >>> from src.whitted.core.vector import Vector3
    >>> ray = Ray(Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, -2.0))
    >>> ray.direction
    Vector3(x=0.0, y=0.0, z=-1.0)
    >>> ray.at(5.0)
    Vector3(x=0.0, y=0.0, z=-5.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from src.whitted.core.vector import Vector3


@dataclass(frozen=True, init=False)
class Ray:
    """A half-line with a start point and a unit direction.

    Attributes:
        start: The origin of the ray.
        direction: The normalized direction of the ray.
    """

    start: Vector3[float]
    direction: Vector3[float]

    def __init__(self, start: Vector3[float], direction: Vector3[float]) -> None:
        """Create a ray, normalizing its direction.

        Args:
            start: The origin of the ray.
            direction: Any non-zero direction vector.

        Raises:
            DivideByZeroError: If ``direction`` has zero magnitude.
        """
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "direction", direction.normalize())

    def at(self, t: float) -> Vector3[float]:
        """Compute the point ``start + t * direction``."""
        return self.start + self.direction * t


def reflect(incident: Vector3[float], normal: Vector3[float]) -> Vector3[float]:
    """Reflect an incident vector about a normal.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal (should be normalized).

    Returns:
        ``incident - normal * 2 dot(incident, normal)``.
    """
    return incident - normal * (2.0 * incident.dot(normal))


def refract(
    incident: Vector3[float], normal: Vector3[float], ratio: float
) -> Vector3[float]:
    """Refract an incident vector through a surface using Snell's law.

    The normal must face the incoming ray (``dot(incident, normal) <= 0``),
    which is how intersections orient it.

    When total internal reflection occurs (the discriminant
    ``1 - ratio^2 (1 - c^2)`` is negative) no transmitted ray exists and the
    mirror reflection is returned instead, so the caller always gets a real
    direction.

    Args:
        incident: The incoming unit direction.
        normal: The unit surface normal, facing the incoming ray.
        ratio: Ratio of refractive indices, incident side over transmitted
            side.

    Returns:
        The refracted direction, or the reflected one under total internal
        reflection.
    """
    c = -normal.dot(incident)
    discriminant = 1.0 - ratio * ratio * (1.0 - c * c)
    if discriminant < 0.0:
        return reflect(incident, normal)
    return incident * ratio + normal * (ratio * c - math.sqrt(discriminant))
