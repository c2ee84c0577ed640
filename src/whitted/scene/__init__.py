"""Scene module: world container, lights, hit search and scene files.

Components:
    light: Point lights
    world: The immutable scene handed to the engine
    intersection: Nearest valid hit of a ray among the primitives
    loader: YAML/JSON scene documents
    presets: Built-in demo scene
"""

from .intersection import EPSILON, Intersection, find_intersection
from .light import Light
from .loader import (
    load_world,
    save_world,
    world_from_dict,
    world_to_dict,
)
from .presets import DemoSceneParams, create_demo_world
from .world import DEFAULT_MAX_RECURSIONS, World

__all__ = [
    "Light",
    "World",
    "DEFAULT_MAX_RECURSIONS",
    "Intersection",
    "find_intersection",
    "EPSILON",
    "load_world",
    "save_world",
    "world_from_dict",
    "world_to_dict",
    "create_demo_world",
    "DemoSceneParams",
]
