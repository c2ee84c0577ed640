"""Color sources: pluggable functions from a surface coordinate to a color.

A ``Surface`` holds one color source per shading term. Sources are an open
set of variants keyed by a ``type`` tag, so scene documents can name them
and new procedural patterns can be added without touching primitives or
the engine:

    @register_color_source("stripes")
    @dataclass(frozen=True)
    class Stripes(ColorSource):
        ...

Built-in variants:
    const_color: A single color regardless of the coordinate.
    checkerboard: Alternating squares of two colors in UV space.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, TypeVar

from src.whitted.core.color import BLACK, Color
from src.whitted.core.parsing import (
    SceneLoadError,
    color_to_list,
    parse_color,
    parse_float,
    require,
)
from src.whitted.core.vector import Vector2

SourceT = TypeVar("SourceT", bound="type[ColorSource]")

# Registry of color source variants, keyed by their document tag.
COLOR_SOURCE_TYPES: dict[str, type[ColorSource]] = {}


class ColorSource(ABC):
    """Capability: given a 2D surface coordinate, produce a color."""

    tag: ClassVar[str]

    @abstractmethod
    def color(self, uv: Vector2[float]) -> Color:
        """Return the color at surface coordinate ``uv``."""

    @classmethod
    @abstractmethod
    def from_dict(cls, data: Mapping[str, Any], path: str) -> ColorSource:
        """Build the source from its document form (without the ``type`` key)."""

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """Return the document form, including the ``type`` tag."""


def register_color_source(tag: str) -> Callable[[SourceT], SourceT]:
    """Class decorator adding a color source variant to the registry.

    Raises:
        ValueError: If ``tag`` is already registered.
    """

    def decorator(cls: SourceT) -> SourceT:
        if tag in COLOR_SOURCE_TYPES:
            raise ValueError(f"Color source type '{tag}' is already registered")
        cls.tag = tag
        COLOR_SOURCE_TYPES[tag] = cls
        return cls

    return decorator


def color_source_from_dict(data: Any, path: str) -> ColorSource:
    """Resolve a tagged color source document to its variant.

    Raises:
        SceneLoadError: If the tag is missing or unknown, or the variant
            rejects its parameters.
    """
    tag = require(data, "type", path)
    cls = COLOR_SOURCE_TYPES.get(tag)
    if cls is None:
        known = ", ".join(sorted(COLOR_SOURCE_TYPES))
        raise SceneLoadError(f"{path}: unknown color source type '{tag}' (known: {known})")
    try:
        return cls.from_dict(data, path)
    except SceneLoadError:
        raise
    except ValueError as e:
        raise SceneLoadError(f"{path}: {e}") from e


@register_color_source("const_color")
@dataclass(frozen=True)
class ConstantColor(ColorSource):
    """A color source that ignores the coordinate."""

    value: Color = BLACK

    def color(self, uv: Vector2[float]) -> Color:
        return self.value

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], path: str) -> ConstantColor:
        return cls(parse_color(require(data, "color", path), f"{path}.color"))

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.tag, "color": color_to_list(self.value)}


@register_color_source("checkerboard")
@dataclass(frozen=True)
class Checkerboard(ColorSource):
    """Alternating squares of two colors over the UV plane.

    Attributes:
        color_a: Color of squares where ``floor(u/scale) + floor(v/scale)``
            is even.
        color_b: Color of the other squares.
        scale: Side length of one square in UV units (must be positive).
    """

    color_a: Color
    color_b: Color
    scale: float = 1.0

    def __post_init__(self) -> None:
        if self.scale <= 0.0:
            raise ValueError(f"Checkerboard scale must be positive, got {self.scale}")

    def color(self, uv: Vector2[float]) -> Color:
        cell = math.floor(uv.x / self.scale) + math.floor(uv.y / self.scale)
        return self.color_a if cell % 2 == 0 else self.color_b

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], path: str) -> Checkerboard:
        scale = data.get("scale", 1.0)
        return cls(
            color_a=parse_color(require(data, "color_a", path), f"{path}.color_a"),
            color_b=parse_color(require(data, "color_b", path), f"{path}.color_b"),
            scale=parse_float(scale, f"{path}.scale"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.tag,
            "color_a": color_to_list(self.color_a),
            "color_b": color_to_list(self.color_b),
            "scale": self.scale,
        }
