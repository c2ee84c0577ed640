"""Built-in demo scene.

The demo scene shows every shading term at once:

- A checkerboard floor quad (diffuse, textured through its UV mapping)
- A red matte sphere (ambient + diffuse)
- A mirror sphere (specular reflection)
- A glass sphere (refraction, with total internal reflection at grazing
  angles inside it)
- Two point lights, one warm and one cool, plus a dim ambient light

The scene uses the default camera frame: the camera looks down +x, z is up
and +y is to the left. Objects sit between x = 5 and x = 9, resting on the
floor at z = -1.

Example:
    >>> from src.whitted.core.engine import Engine
    >>> from src.whitted.scene.presets import create_demo_world
    >>> world = create_demo_world(width=320, height=240)
    >>> image = Engine(world).generate()
"""

from __future__ import annotations

from dataclasses import dataclass

from src.whitted.camera.pinhole import Camera
from src.whitted.core.color import Color
from src.whitted.core.vector import Vector3
from src.whitted.geometry.quad import Quad
from src.whitted.geometry.sphere import Sphere
from src.whitted.scene.light import Light
from src.whitted.scene.world import World
from src.whitted.surfaces.sources import Checkerboard, ConstantColor
from src.whitted.surfaces.surface import Surface

# =============================================================================
# Demo Scene Constants
# =============================================================================

FLOOR_HEIGHT = -1.0

RED_MATTE = Color(0.8, 0.1, 0.1)
FLOOR_LIGHT = Color(0.9, 0.9, 0.9)
FLOOR_DARK = Color(0.15, 0.15, 0.15)
MIRROR_TINT = Color(0.85, 0.85, 0.85)
GLASS_TINT = Color(0.9, 0.95, 0.9)

# Air to glass (n = 1.5): outside over inside
GLASS_REFRACTION_RATIO = 1.0 / 1.5

WARM_LIGHT = Color(0.9, 0.8, 0.7)
COOL_LIGHT = Color(0.3, 0.35, 0.45)
AMBIENT_LIGHT = Color(0.1, 0.1, 0.1)


@dataclass
class DemoSceneParams:
    """Parameters for the demo scene.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        max_recursions: Reflection/refraction depth budget.
        checker_squares: Number of checkerboard squares along each floor edge.
    """

    width: int = 640
    height: int = 480
    max_recursions: int = 5
    checker_squares: int = 8


def create_demo_world(
    width: int = 640,
    height: int = 480,
    params: DemoSceneParams | None = None,
) -> World:
    """Create the demo scene.

    Args:
        width: Image width in pixels (ignored if ``params`` is given).
        height: Image height in pixels (ignored if ``params`` is given).
        params: Optional full set of scene parameters.

    Returns:
        A ready-to-render ``World``.
    """
    if params is None:
        params = DemoSceneParams(width=width, height=height)

    # Keep the image plane 2 units wide whatever the resolution
    camera = Camera.from_pixels(
        position=Vector3(0.0, 0.0, 0.0),
        focal_dist=2.0,
        image_pixels_width=params.width,
        image_pixels_height=params.height,
        pixel_per_unit=params.width / 2.0,
    )

    floor = Quad(
        corner=Vector3(-2.0, -6.0, FLOOR_HEIGHT),
        edge_u=Vector3(16.0, 0.0, 0.0),
        edge_v=Vector3(0.0, 12.0, 0.0),
        surface=Surface(
            ambient_source=Checkerboard(FLOOR_LIGHT, FLOOR_DARK, 1.0 / params.checker_squares),
            diffuse_source=Checkerboard(FLOOR_LIGHT, FLOOR_DARK, 1.0 / params.checker_squares),
        ),
    )
    matte = Sphere(
        position=Vector3(7.0, 1.6, -0.2),
        radius=0.8,
        surface=Surface.matte(RED_MATTE),
    )
    mirror = Sphere(
        position=Vector3(8.5, -1.2, 0.2),
        radius=1.2,
        surface=Surface(
            ambient_source=ConstantColor(Color(0.05, 0.05, 0.05)),
            diffuse_source=ConstantColor(Color(0.05, 0.05, 0.05)),
            specular_source=ConstantColor(MIRROR_TINT),
        ),
    )
    glass = Sphere(
        position=Vector3(5.0, 0.2, -0.4),
        radius=0.6,
        surface=Surface(
            refraction_source=ConstantColor(GLASS_TINT),
            specular_source=ConstantColor(Color(0.1, 0.1, 0.1)),
            refraction_ratio=GLASS_REFRACTION_RATIO,
        ),
    )

    lights = (
        Light(position=Vector3(2.0, 4.0, 6.0), color=WARM_LIGHT),
        Light(position=Vector3(4.0, -5.0, 3.0), color=COOL_LIGHT),
    )

    return World(
        camera=camera,
        things=(floor, matte, mirror, glass),
        lights=lights,
        ambient_light=AMBIENT_LIGHT,
        max_recursions=params.max_recursions,
    )
