"""Parallelogram (quad) primitive.

A quad is defined by a corner point Q and two edge vectors u and v; its
vertices are Q, Q+u, Q+v and Q+u+v. Any point of the supporting plane can be
written P = Q + alpha*u + beta*v, and P lies on the quad iff both
coordinates are in [0, 1]. Those coordinates double as the UV mapping.

The front face is the side the normal ``u x v`` points to.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from functools import cached_property
from typing import Any

from src.whitted.core.parsing import parse_vector3, require, vector3_to_list
from src.whitted.core.ray import Ray
from src.whitted.core.vector import Vector2, Vector3
from src.whitted.geometry.thing import Thing, register_thing
from src.whitted.surfaces.surface import Surface

# Rays whose direction is this close to the plane are treated as parallel.
PARALLEL_EPSILON = 1e-8


@register_thing("quad")
@dataclass(frozen=True)
class Quad(Thing):
    """A parallelogram.

    Attributes:
        corner: The corner point Q.
        edge_u: Edge vector from Q to the first adjacent corner.
        edge_v: Edge vector from Q to the second adjacent corner.
        surface: The surface shading the quad.
    """

    corner: Vector3[float]
    edge_u: Vector3[float]
    edge_v: Vector3[float]
    surface: Surface

    def __post_init__(self) -> None:
        if self._n.dot(self._n) == 0.0:
            raise ValueError("Quad edges must not be parallel or zero-length")

    @cached_property
    def _n(self) -> Vector3[float]:
        return self.edge_u.cross(self.edge_v)

    @cached_property
    def _unit_normal(self) -> Vector3[float]:
        return self._n.normalize()

    @cached_property
    def _w(self) -> tuple[Vector3[float], Vector3[float]]:
        # w_u = v x n / |n|^2 and w_v = n x u / |n|^2 satisfy
        # dot(w_u, u) = 1, dot(w_u, v) = 0, dot(w_v, u) = 0, dot(w_v, v) = 1
        n_dot_n = self._n.dot(self._n)
        return (
            self.edge_v.cross(self._n) / n_dot_n,
            self._n.cross(self.edge_u) / n_dot_n,
        )

    def _local(self, point: Vector3[float]) -> tuple[float, float]:
        w_u, w_v = self._w
        offset = point - self.corner
        return w_u.dot(offset), w_v.dot(offset)

    def intersect(self, ray: Ray) -> list[Vector3[float]]:
        normal = self._unit_normal
        denom = normal.dot(ray.direction)
        if abs(denom) <= PARALLEL_EPSILON:
            return []
        t = normal.dot(self.corner - ray.start) / denom
        point = ray.at(t)
        alpha, beta = self._local(point)
        if 0.0 <= alpha <= 1.0 and 0.0 <= beta <= 1.0:
            return [point]
        return []

    def normal(self, point: Vector3[float]) -> Vector3[float]:
        return self._unit_normal

    def get_uv_mapping(self, point: Vector3[float]) -> Vector2[float]:
        alpha, beta = self._local(point)
        return Vector2(alpha, beta)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], path: str) -> Quad:
        return cls(
            corner=parse_vector3(require(data, "corner", path), f"{path}.corner"),
            edge_u=parse_vector3(require(data, "edge_u", path), f"{path}.edge_u"),
            edge_v=parse_vector3(require(data, "edge_v", path), f"{path}.edge_v"),
            surface=Surface.from_dict(require(data, "surface", path), f"{path}.surface"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.tag,
            "corner": vector3_to_list(self.corner),
            "edge_u": vector3_to_list(self.edge_u),
            "edge_v": vector3_to_list(self.edge_v),
            "surface": self.surface.to_dict(),
        }
