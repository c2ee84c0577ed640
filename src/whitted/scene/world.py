"""The immutable scene handed to the engine.

A ``World`` is assembled once, before rendering, and never mutated while an
image is generated. Primitives are referenced by their index in ``things``;
``Intersection.thing_index`` points into that tuple.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.whitted.camera.pinhole import Camera
from src.whitted.core.color import BLACK, Color
from src.whitted.geometry.thing import Thing
from src.whitted.scene.light import Light

DEFAULT_MAX_RECURSIONS = 5


@dataclass(frozen=True)
class World:
    """Camera, primitives, lights and global lighting settings.

    Attributes:
        camera: The camera primary rays are generated from.
        things: The primitives, in a fixed order.
        lights: The point lights.
        ambient_light: Global ambient light color.
        max_recursions: Reflection/refraction depth budget (>= 0). Zero
            disables secondary rays entirely.
    """

    camera: Camera = field(default_factory=Camera)
    things: tuple[Thing, ...] = ()
    lights: tuple[Light, ...] = ()
    ambient_light: Color = BLACK
    max_recursions: int = DEFAULT_MAX_RECURSIONS

    def __post_init__(self) -> None:
        # Accept any iterable but store tuples so the scene stays read-only.
        object.__setattr__(self, "things", tuple(self.things))
        object.__setattr__(self, "lights", tuple(self.lights))
        if self.max_recursions < 0:
            raise ValueError(
                f"max_recursions must be non-negative, got {self.max_recursions}"
            )

    def thing(self, index: int) -> Thing:
        return self.things[index]
