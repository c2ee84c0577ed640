"""Surface shading model.

A ``Surface`` maps a surface coordinate to the four colors the engine needs
(ambient, diffuse, specular, refraction) plus the refraction ratio. Each
color comes from its own ``ColorSource`` so any term can be textured
independently.

Example:
    >>> from src.whitted.core.color import Color
    >>> from src.whitted.surfaces.surface import Surface
    >>> from src.whitted.surfaces.sources import ConstantColor
    >>> red = Surface.matte(Color(1.0, 0.0, 0.0))
    >>> mirror = Surface(specular_source=ConstantColor(Color(0.9, 0.9, 0.9)))
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from src.whitted.core.color import Color
from src.whitted.core.parsing import SceneLoadError, parse_float
from src.whitted.core.vector import Vector2
from src.whitted.surfaces.sources import (
    ColorSource,
    ConstantColor,
    color_source_from_dict,
)


@dataclass(frozen=True)
class Surface:
    """Material description of a primitive.

    Attributes:
        ambient_source: Source of the color reflected under ambient light.
        diffuse_source: Source of the Lambertian color lit by point lights.
        specular_source: Source of the mirror-reflection filter. Black disables
            reflection rays.
        refraction_source: Source of the transmission filter. Black disables
            refraction rays.
        refraction_ratio: Ratio of refractive indices for a ray entering
            through the front face (outside over inside). Its reciprocal is
            used when the ray leaves. Must be positive.
    """

    ambient_source: ColorSource = field(default_factory=ConstantColor)
    diffuse_source: ColorSource = field(default_factory=ConstantColor)
    specular_source: ColorSource = field(default_factory=ConstantColor)
    refraction_source: ColorSource = field(default_factory=ConstantColor)
    refraction_ratio: float = 1.0

    def __post_init__(self) -> None:
        if self.refraction_ratio <= 0.0:
            raise ValueError(
                f"Refraction ratio must be positive, got {self.refraction_ratio}"
            )

    @classmethod
    def matte(cls, color: Color) -> Surface:
        """A surface whose ambient and diffuse colors are both ``color``."""
        source = ConstantColor(color)
        return cls(ambient_source=source, diffuse_source=source)

    def ambient(self, uv: Vector2[float]) -> Color:
        return self.ambient_source.color(uv)

    def diffuse(self, uv: Vector2[float]) -> Color:
        return self.diffuse_source.color(uv)

    def specular(self, uv: Vector2[float]) -> Color:
        return self.specular_source.color(uv)

    def refraction(self, uv: Vector2[float]) -> Color:
        return self.refraction_source.color(uv)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], path: str) -> Surface:
        """Build a surface from its document form.

        ``ambient`` and ``diffuse`` are required (``ambiant`` is accepted as a
        legacy spelling of ``ambient``); ``specular`` and ``refraction``
        default to black and ``refraction_ratio`` to 1.0.

        Raises:
            SceneLoadError: If a key is missing or a value is invalid.
        """
        if not isinstance(data, Mapping):
            raise SceneLoadError(f"{path}: expected a mapping, got {type(data).__name__}")

        def source(key: str, *aliases: str, optional: bool = False) -> ColorSource:
            for name in (key, *aliases):
                if name in data:
                    return color_source_from_dict(data[name], f"{path}.{name}")
            if optional:
                return ConstantColor()
            raise SceneLoadError(f"{path}: missing required key '{key}'")

        ratio = parse_float(data.get("refraction_ratio", 1.0), f"{path}.refraction_ratio")
        try:
            return cls(
                ambient_source=source("ambient", "ambiant"),
                diffuse_source=source("diffuse"),
                specular_source=source("specular", optional=True),
                refraction_source=source("refraction", optional=True),
                refraction_ratio=ratio,
            )
        except SceneLoadError:
            raise
        except ValueError as e:
            raise SceneLoadError(f"{path}: {e}") from e

    def to_dict(self) -> dict[str, Any]:
        return {
            "ambient": self.ambient_source.to_dict(),
            "diffuse": self.diffuse_source.to_dict(),
            "specular": self.specular_source.to_dict(),
            "refraction": self.refraction_source.to_dict(),
            "refraction_ratio": self.refraction_ratio,
        }
