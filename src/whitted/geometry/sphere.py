"""Sphere primitive with geometric ray-sphere intersection.

The intersection uses the geometric construction rather than the quadratic
formula. With ``l = center - ray.start``:

    adj = dot(l, dir)              # distance along the ray to the closest approach
    d2  = dot(l, l) - adj^2        # squared distance from center to the ray's line
    miss if d2 > radius^2
    thc = sqrt(radius^2 - d2)      # half chord length
    t0, t1 = adj - thc, adj + thc

Both points are reported even when they lie behind the ray start; the scene
search discards those. A tangent ray yields the same point twice.

Example:
    >>> from src.whitted.core.ray import Ray
    >>> from src.whitted.core.vector import Vector3
    >>> from src.whitted.geometry.sphere import Sphere
    >>> from src.whitted.surfaces.surface import Surface
    >>> sphere = Sphere(Vector3(0.0, 0.0, 0.0), 1.0, Surface())
    >>> sphere.intersect(Ray(Vector3(-5.0, 0.0, 0.0), Vector3(1.0, 0.0, 0.0)))
    [Vector3(x=-1.0, y=0.0, z=0.0), Vector3(x=1.0, y=0.0, z=0.0)]
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from src.whitted.core.parsing import (
    parse_float,
    parse_vector3,
    require,
    vector3_to_list,
)
from src.whitted.core.ray import Ray
from src.whitted.core.vector import Vector2, Vector3
from src.whitted.geometry.thing import Thing, register_thing
from src.whitted.surfaces.surface import Surface


@register_thing("sphere")
@dataclass(frozen=True)
class Sphere(Thing):
    """A sphere defined by center point and radius.

    Attributes:
        position: The center of the sphere.
        radius: The radius of the sphere (positive).
        surface: The surface shading the sphere.
    """

    position: Vector3[float]
    radius: float
    surface: Surface

    def __post_init__(self) -> None:
        if self.radius <= 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")

    def intersect(self, ray: Ray) -> list[Vector3[float]]:
        l = self.position - ray.start  # noqa: E741
        adj = l.dot(ray.direction)
        d2 = l.dot(l) - adj * adj
        radius2 = self.radius * self.radius
        if d2 > radius2:
            return []
        thc = math.sqrt(radius2 - d2)
        return [ray.at(adj - thc), ray.at(adj + thc)]

    def normal(self, point: Vector3[float]) -> Vector3[float]:
        return (point - self.position).normalize()

    def get_uv_mapping(self, point: Vector3[float]) -> Vector2[float]:
        """Spherical coordinates of ``point``, both in ``[0, 1]``.

        ``u`` is the longitude around the z axis and ``v`` the latitude,
        with ``v = 0`` at the bottom pole and ``v = 1`` at the top pole.
        """
        d = self.normal(point)
        u = 0.5 + math.atan2(d.y, d.x) / (2.0 * math.pi)
        v = 0.5 + math.asin(max(-1.0, min(1.0, d.z))) / math.pi
        return Vector2(u, v)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], path: str) -> Sphere:
        return cls(
            position=parse_vector3(require(data, "position", path), f"{path}.position"),
            radius=parse_float(require(data, "radius", path), f"{path}.radius"),
            surface=Surface.from_dict(require(data, "surface", path), f"{path}.surface"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.tag,
            "position": vector3_to_list(self.position),
            "radius": self.radius,
            "surface": self.surface.to_dict(),
        }
