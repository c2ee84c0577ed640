"""Scene documents: loading and saving a ``World`` as YAML or JSON.

A scene document is a mapping with the following keys::

    camera:                      # optional, defaults to Camera()
      position: [0, 0, 0]
      direction: [1, 0, 0]
      up: [0, 0, 1]
      right: [0, -1, 0]
      focal_dist: 2.0
      image_pixels_width: 640
      image_pixels_height: 480
      pixel_per_unit: 320        # image_len_* derived from this when absent
    ambient_light: [0.1, 0.1, 0.1]
    max_recursions: 5
    lights:
      - {position: [0, 0, 10], color: [1, 1, 1]}
    things:
      - type: sphere
        position: [5, 0, 0]
        radius: 1
        surface:
          ambient: {type: const_color, color: [1, 0, 0]}
          diffuse: {type: const_color, color: [1, 0, 0]}

Vectors and colors may also be written as mappings (``{x:, y:, z:}`` and
``{r:, g:, b:}``). Every error names the offending key path.

Example:
    >>> from src.whitted.scene.loader import load_world
    >>> world = load_world("examples/scenes/three_spheres.yaml")
    >>> len(world.things)
    4
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

# Importing the packages registers the built-in thing and color source types
import src.whitted.geometry  # noqa: F401
import src.whitted.surfaces  # noqa: F401
from src.whitted.camera.pinhole import (
    DEFAULT_FOCAL_DIST,
    DEFAULT_PIXEL_PER_UNIT,
    DEFAULT_PIXELS_HEIGHT,
    DEFAULT_PIXELS_WIDTH,
    Camera,
    compute_image_size,
)
from src.whitted.core.color import BLACK
from src.whitted.core.parsing import (
    SceneLoadError,
    color_to_list,
    parse_color,
    parse_float,
    parse_vector3,
    require,
    vector3_to_list,
)
from src.whitted.core.vector import DivideByZeroError, Vector3
from src.whitted.geometry.thing import thing_from_dict
from src.whitted.scene.light import Light
from src.whitted.scene.world import DEFAULT_MAX_RECURSIONS, World

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")
JSON_SUFFIXES = (".json",)


# =============================================================================
# Document Parsing
# =============================================================================


def _parse_int(value: Any, path: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise SceneLoadError(f"{path}: expected an integer, got {value!r}")
    return value


def _parse_list(value: Any, path: str) -> list[Any]:
    if not isinstance(value, list):
        raise SceneLoadError(f"{path}: expected a list, got {type(value).__name__}")
    return value


def camera_from_dict(data: Mapping[str, Any], path: str = "camera") -> Camera:
    """Build a camera from its document form.

    Missing keys take the ``Camera`` defaults. ``image_len_width`` and
    ``image_len_height`` are computed from ``pixel_per_unit`` unless given.

    Raises:
        SceneLoadError: If a value is invalid, including a zero direction.
    """
    if not isinstance(data, Mapping):
        raise SceneLoadError(f"{path}: expected a mapping, got {type(data).__name__}")

    def vector(key: str, default: Vector3[float]) -> Vector3[float]:
        if key not in data:
            return default
        return parse_vector3(data[key], f"{path}.{key}")

    def number(key: str, default: float) -> float:
        return parse_float(data.get(key, default), f"{path}.{key}")

    width = _parse_int(
        data.get("image_pixels_width", DEFAULT_PIXELS_WIDTH), f"{path}.image_pixels_width"
    )
    height = _parse_int(
        data.get("image_pixels_height", DEFAULT_PIXELS_HEIGHT), f"{path}.image_pixels_height"
    )
    pixel_per_unit = number("pixel_per_unit", DEFAULT_PIXEL_PER_UNIT)
    if pixel_per_unit <= 0.0:
        raise SceneLoadError(f"{path}.pixel_per_unit: must be positive, got {pixel_per_unit}")

    params = {
        "direction": vector("direction", Vector3.x_axis()),
        "up": vector("up", Vector3.z_axis()),
        "right": vector("right", -Vector3.y_axis()),
        "position": vector("position", Vector3.zero()),
        "focal_dist": number("focal_dist", DEFAULT_FOCAL_DIST),
        "image_len_width": number(
            "image_len_width", compute_image_size(width, pixel_per_unit)
        ),
        "image_len_height": number(
            "image_len_height", compute_image_size(height, pixel_per_unit)
        ),
    }

    try:
        return Camera(
            image_pixels_width=width,
            image_pixels_height=height,
            pixel_per_unit=pixel_per_unit,
            **params,
        )
    except DivideByZeroError as e:
        raise SceneLoadError(f"{path}.direction: must not be the zero vector") from e
    except ValueError as e:
        raise SceneLoadError(f"{path}: {e}") from e


def light_from_dict(data: Mapping[str, Any], path: str) -> Light:
    return Light(
        position=parse_vector3(require(data, "position", path), f"{path}.position"),
        color=parse_color(require(data, "color", path), f"{path}.color"),
    )


def world_from_dict(data: Mapping[str, Any]) -> World:
    """Build a ``World`` from a parsed scene document.

    Args:
        data: The document, as returned by ``yaml.safe_load``/``json.load``.

    Returns:
        The assembled world.

    Raises:
        SceneLoadError: If the document is malformed.
    """
    if not isinstance(data, Mapping):
        raise SceneLoadError(f"scene: expected a mapping, got {type(data).__name__}")

    camera = camera_from_dict(data.get("camera", {}))
    things = [
        thing_from_dict(item, f"things[{i}]")
        for i, item in enumerate(_parse_list(data.get("things", []), "things"))
    ]
    lights = [
        light_from_dict(item, f"lights[{i}]")
        for i, item in enumerate(_parse_list(data.get("lights", []), "lights"))
    ]
    ambient_light = (
        parse_color(data["ambient_light"], "ambient_light")
        if "ambient_light" in data
        else BLACK
    )
    max_recursions = _parse_int(
        data.get("max_recursions", DEFAULT_MAX_RECURSIONS), "max_recursions"
    )
    if max_recursions < 0:
        raise SceneLoadError(f"max_recursions: must be non-negative, got {max_recursions}")

    logger.debug(
        "Parsed scene with %d things and %d lights", len(things), len(lights)
    )
    return World(
        camera=camera,
        things=things,
        lights=lights,
        ambient_light=ambient_light,
        max_recursions=max_recursions,
    )


# =============================================================================
# Document Serialization
# =============================================================================


def camera_to_dict(camera: Camera) -> dict[str, Any]:
    return {
        "position": vector3_to_list(camera.position),
        "direction": vector3_to_list(camera.direction),
        "up": vector3_to_list(camera.up),
        "right": vector3_to_list(camera.right),
        "focal_dist": camera.focal_dist,
        "image_pixels_width": camera.image_pixels_width,
        "image_pixels_height": camera.image_pixels_height,
        "pixel_per_unit": camera.pixel_per_unit,
        "image_len_width": camera.image_len_width,
        "image_len_height": camera.image_len_height,
    }


def world_to_dict(world: World) -> dict[str, Any]:
    """Convert a ``World`` to a plain document that ``world_from_dict`` reads back."""
    return {
        "camera": camera_to_dict(world.camera),
        "ambient_light": color_to_list(world.ambient_light),
        "max_recursions": world.max_recursions,
        "lights": [
            {"position": vector3_to_list(light.position), "color": color_to_list(light.color)}
            for light in world.lights
        ],
        "things": [thing.to_dict() for thing in world.things],
    }


# =============================================================================
# File I/O
# =============================================================================


def load_world(path: str | Path) -> World:
    """Load a scene file.

    The format is chosen by suffix: ``.yaml``/``.yml`` or ``.json``.

    Args:
        path: Path to the scene file.

    Returns:
        The assembled world.

    Raises:
        FileNotFoundError: If the file does not exist.
        SceneLoadError: If the suffix is unsupported or the document is
            malformed or unparseable.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in YAML_SUFFIXES + JSON_SUFFIXES:
        raise SceneLoadError(
            f"{path}: unsupported scene format '{suffix}' (use .yaml, .yml or .json)"
        )

    logger.debug("Loading scene from %s", path)
    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) if suffix in YAML_SUFFIXES else json.load(f)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise SceneLoadError(f"{path}: could not parse scene file: {e}") from e

    if data is None:
        raise SceneLoadError(f"{path}: scene file is empty")
    world = world_from_dict(data)
    logger.info(
        "Loaded scene %s (%d things, %d lights)", path.name, len(world.things), len(world.lights)
    )
    return world


def save_world(world: World, path: str | Path) -> None:
    """Write a scene file, choosing YAML or JSON by suffix.

    Raises:
        SceneLoadError: If the suffix is unsupported.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    data = world_to_dict(world)
    if suffix in YAML_SUFFIXES:
        text = yaml.safe_dump(data, sort_keys=False)
    elif suffix in JSON_SUFFIXES:
        text = json.dumps(data, indent=2)
    else:
        raise SceneLoadError(
            f"{path}: unsupported scene format '{suffix}' (use .yaml, .yml or .json)"
        )
    path.write_text(text, encoding="utf-8")
    logger.debug("Saved scene to %s", path)
