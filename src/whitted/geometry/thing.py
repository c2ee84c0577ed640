"""Abstract geometric primitive ("thing") and the primitive registry.

Every primitive answers four questions for the engine:

    intersect(ray)         -> candidate hit positions (any number, unsorted)
    normal(point)          -> unit outward normal at a point on the surface
    get_uv_mapping(point)  -> 2D surface coordinate of a point on the surface
    surface                -> the Surface shading the primitive

Candidates are raw: they may lie behind the ray start or coincide with it.
Filtering and nearest-hit selection happen in ``scene.intersection``.

Shading lookups (``ambient``, ``diffuse``, ...) have default
implementations that map the point to UV and delegate to the surface, so a
new primitive only needs the geometry.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from typing import Any, ClassVar, TypeVar

from src.whitted.core.color import Color
from src.whitted.core.parsing import SceneLoadError, require
from src.whitted.core.ray import Ray
from src.whitted.core.vector import Vector2, Vector3
from src.whitted.surfaces.surface import Surface

ThingT = TypeVar("ThingT", bound="type[Thing]")

# Registry of primitive variants, keyed by their document tag.
THING_TYPES: dict[str, type[Thing]] = {}


class Thing(ABC):
    """A renderable primitive bound to exactly one surface."""

    tag: ClassVar[str]
    surface: Surface

    @abstractmethod
    def intersect(self, ray: Ray) -> list[Vector3[float]]:
        """Return every point where ``ray``'s supporting line meets the shape."""

    @abstractmethod
    def normal(self, point: Vector3[float]) -> Vector3[float]:
        """Return the unit outward normal at ``point``.

        ``point`` must lie on the surface; the result is unspecified otherwise.
        """

    @abstractmethod
    def get_uv_mapping(self, point: Vector3[float]) -> Vector2[float]:
        """Map a point on the surface to its 2D surface coordinate."""

    @classmethod
    @abstractmethod
    def from_dict(cls, data: Mapping[str, Any], path: str) -> Thing:
        """Build the primitive from its document form."""

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """Return the document form, including the ``type`` tag."""

    def ambient(self, point: Vector3[float]) -> Color:
        return self.surface.ambient(self.get_uv_mapping(point))

    def diffuse(self, point: Vector3[float]) -> Color:
        return self.surface.diffuse(self.get_uv_mapping(point))

    def specular(self, point: Vector3[float]) -> Color:
        return self.surface.specular(self.get_uv_mapping(point))

    def refraction(self, point: Vector3[float]) -> Color:
        return self.surface.refraction(self.get_uv_mapping(point))

    def refraction_ratio(self) -> float:
        return self.surface.refraction_ratio


def register_thing(tag: str) -> Callable[[ThingT], ThingT]:
    """Class decorator adding a primitive variant to the registry.

    Raises:
        ValueError: If ``tag`` is already registered.
    """

    def decorator(cls: ThingT) -> ThingT:
        if tag in THING_TYPES:
            raise ValueError(f"Thing type '{tag}' is already registered")
        cls.tag = tag
        THING_TYPES[tag] = cls
        return cls

    return decorator


def thing_from_dict(data: Any, path: str) -> Thing:
    """Resolve a tagged primitive document to its variant.

    Raises:
        SceneLoadError: If the tag is missing or unknown, or the variant
            rejects its parameters.
    """
    tag = require(data, "type", path)
    cls = THING_TYPES.get(tag)
    if cls is None:
        known = ", ".join(sorted(THING_TYPES))
        raise SceneLoadError(f"{path}: unknown thing type '{tag}' (known: {known})")
    try:
        return cls.from_dict(data, path)
    except SceneLoadError:
        raise
    except ValueError as e:
        raise SceneLoadError(f"{path}: {e}") from e
