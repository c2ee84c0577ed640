"""Pytest configuration for ray tracer tests.

This module provides shared fixtures for all test modules: Taichi
initialization (needed by the GGUI preview) and small reference scenes whose
shading can be worked out by hand.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture
def unit_sphere_surface():
    """White matte surface: diffuse white, every other term black."""
    from src.whitted.core.color import WHITE
    from src.whitted.surfaces.sources import ConstantColor
    from src.whitted.surfaces.surface import Surface

    return Surface(diffuse_source=ConstantColor(WHITE))


@pytest.fixture
def small_camera():
    """20x20 camera 5 units behind the origin, looking down +x.

    The image plane is 2x2 world units centered at (-5, 0, 0) and the eye
    sits at (-7, 0, 0). Pixel (10, 10) looks straight down the x axis.
    """
    from src.whitted.camera.pinhole import Camera
    from src.whitted.core.vector import Vector3

    return Camera.from_pixels(
        position=Vector3(-5.0, 0.0, 0.0),
        focal_dist=2.0,
        image_pixels_width=20,
        image_pixels_height=20,
        pixel_per_unit=10.0,
    )


@pytest.fixture
def lit_sphere_world(small_camera, unit_sphere_surface):
    """A unit sphere at the origin lit by one white light above the camera."""
    from src.whitted.core.color import WHITE
    from src.whitted.core.vector import Vector3
    from src.whitted.geometry.sphere import Sphere
    from src.whitted.scene.light import Light
    from src.whitted.scene.world import World

    return World(
        camera=small_camera,
        things=[Sphere(Vector3(0.0, 0.0, 0.0), 1.0, unit_sphere_surface)],
        lights=[Light(Vector3(-5.0, 0.0, 5.0), WHITE)],
    )


@pytest.fixture
def scene_dict():
    """A minimal valid scene document."""
    return {
        "camera": {
            "position": [-5, 0, 0],
            "direction": [1, 0, 0],
            "up": [0, 0, 1],
            "right": [0, -1, 0],
            "focal_dist": 2.0,
            "image_pixels_width": 20,
            "image_pixels_height": 20,
            "pixel_per_unit": 10,
        },
        "ambient_light": [0.1, 0.1, 0.1],
        "max_recursions": 3,
        "lights": [{"position": [-5, 0, 5], "color": [1, 1, 1]}],
        "things": [
            {
                "type": "sphere",
                "position": [0, 0, 0],
                "radius": 1,
                "surface": {
                    "ambient": {"type": "const_color", "color": [1, 0, 0]},
                    "diffuse": {"type": "const_color", "color": [1, 0, 0]},
                },
            },
            {
                "type": "quad",
                "corner": [-2, -2, -1],
                "edge_u": [4, 0, 0],
                "edge_v": [0, 4, 0],
                "surface": {
                    "ambient": {
                        "type": "checkerboard",
                        "color_a": [1, 1, 1],
                        "color_b": [0, 0, 0],
                        "scale": 0.25,
                    },
                    "diffuse": {"type": "const_color", "color": [0.5, 0.5, 0.5]},
                    "specular": {"type": "const_color", "color": [0.2, 0.2, 0.2]},
                },
            },
        ],
    }
