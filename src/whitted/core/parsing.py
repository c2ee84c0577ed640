"""Helpers for reading scene documents into core value types.

Scene documents are plain dicts/lists as produced by ``yaml.safe_load`` or
``json.load``. Every helper takes a ``path`` string naming where in the
document the value came from (e.g. ``"things[2].surface.diffuse"``) so that
``SceneLoadError`` messages point at the offending key.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from src.whitted.core.color import Color
from src.whitted.core.vector import Vector3


class SceneLoadError(ValueError):
    """Raised when a scene document is malformed."""


def require(data: Mapping[str, Any], key: str, path: str) -> Any:
    """Fetch a mandatory key from a mapping.

    Raises:
        SceneLoadError: If ``data`` is not a mapping or lacks ``key``.
    """
    if not isinstance(data, Mapping):
        raise SceneLoadError(f"{path}: expected a mapping, got {type(data).__name__}")
    if key not in data:
        raise SceneLoadError(f"{path}: missing required key '{key}'")
    return data[key]


def parse_float(value: Any, path: str) -> float:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SceneLoadError(f"{path}: expected a number, got {value!r}")
    return float(value)


def _parse_triple(value: Any, keys: tuple[str, str, str], path: str) -> list[float]:
    if isinstance(value, Mapping):
        return [parse_float(require(value, k, path), f"{path}.{k}") for k in keys]
    if isinstance(value, (list, tuple)):
        if len(value) != 3:
            raise SceneLoadError(f"{path}: expected 3 components, got {len(value)}")
        return [parse_float(v, f"{path}[{i}]") for i, v in enumerate(value)]
    raise SceneLoadError(f"{path}: expected a list or mapping, got {value!r}")


def parse_vector3(value: Any, path: str) -> Vector3[float]:
    """Parse ``[x, y, z]`` or ``{x:, y:, z:}`` into a float vector."""
    x, y, z = _parse_triple(value, ("x", "y", "z"), path)
    return Vector3(x, y, z)


def parse_color(value: Any, path: str) -> Color:
    """Parse ``[r, g, b]`` or ``{r:, g:, b:}`` into a color."""
    r, g, b = _parse_triple(value, ("r", "g", "b"), path)
    return Color(r, g, b)


def vector3_to_list(v: Vector3[float]) -> list[float]:
    return [v.x, v.y, v.z]


def color_to_list(c: Color) -> list[float]:
    return [c.r, c.g, c.b]
