"""Whitted-style recursive ray tracing engine.

For every pixel the engine casts a primary ray from the camera, finds the
nearest intersection and shades it as the sum of four terms:

    ambient     surface ambient color * world ambient light
    diffuse     sum over unoccluded lights of light * surface diffuse * cos(theta)
    specular    surface specular color * color seen along the mirror reflection
    refraction  surface refraction color * color seen along the refracted ray

The specular and refraction terms recurse with ``depth - 1``. At depth 0,
or when the matching surface color is black, they contribute black, so
recursion always terminates. Terms are summed without normalization and
may exceed 1.0.

The world is only read, never written, while rendering; each pixel is
independent of all others.

Example:
    >>> from src.whitted.core.engine import Engine
    >>> from src.whitted.scene.presets import create_demo_world
    >>> engine = Engine(create_demo_world(width=64, height=48))
    >>> image = engine.generate()
    >>> image.get_color(32, 24)
"""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Callable, Iterator

from src.whitted.core.color import BLACK, WHITE, Color
from src.whitted.core.image import Image
from src.whitted.core.ray import Ray, reflect, refract
from src.whitted.scene.intersection import Intersection, find_intersection
from src.whitted.scene.light import Light
from src.whitted.scene.world import World

logger = logging.getLogger(__name__)

# =============================================================================
# Rendering Constants
# =============================================================================

# Color returned for rays that hit nothing
BACKGROUND_COLOR = BLACK

# Diffusion coefficients at or below this are treated as zero
DIFFUSION_EPSILON = sys.float_info.epsilon

# Type alias for progress callback
# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]


class Engine:
    """Renders a ``World`` to an ``Image``.

    Attributes:
        world: The scene being rendered.
    """

    def __init__(self, world: World) -> None:
        self._world = world

    @property
    def world(self) -> World:
        return self._world

    # =========================================================================
    # Image Generation
    # =========================================================================

    def generate(self, callback: ProgressCallback | None = None) -> Image:
        """Render every pixel of the camera's image.

        Args:
            callback: Optional function called after each row with
                ``(rows_done, total_rows)``.

        Returns:
            A width x height image of unclamped colors.

        Raises:
            DivideByZeroError: If the scene contains degenerate geometry,
                such as a light placed exactly on a hit point.
        """
        width, height = self._world.camera.get_pixel_size()
        image = Image(width, height, WHITE)

        logger.info(
            "Rendering %dx%d image (%d things, %d lights, max depth %d)",
            width,
            height,
            len(self._world.things),
            len(self._world.lights),
            self._world.max_recursions,
        )
        start = time.perf_counter()

        for y, row in self.render_rows():
            image.set_row(y, row)
            if callback is not None:
                callback(y + 1, height)

        logger.info("Rendered in %.3fs", time.perf_counter() - start)
        return image

    def render_rows(self) -> Iterator[tuple[int, list[Color]]]:
        """Render the image row by row, top to bottom.

        This is a generator-based alternative to ``generate`` for callers
        that want to display partial results.

        Yields:
            Tuples of ``(y, colors)`` where ``colors`` holds one color per
            column.
        """
        width, height = self._world.camera.get_pixel_size()
        for y in range(height):
            yield y, [self.get_pixel_at(x, y) for x in range(width)]

    def get_pixel_at(self, x: int, y: int) -> Color:
        ray = self._world.camera.get_ray(x, y)
        return self.launch_ray(ray, self._world.max_recursions)

    # =========================================================================
    # Recursive Shading
    # =========================================================================

    def launch_ray(self, ray: Ray, depth: int) -> Color:
        """Compute the color seen along ``ray``.

        Args:
            ray: The ray to trace.
            depth: Remaining reflection/refraction budget.

        Returns:
            The background color on a miss, otherwise the sum of the
            ambient, diffuse, specular and refraction terms at the hit.
        """
        intersection = self.find_intersection(ray)
        if intersection is None:
            return BACKGROUND_COLOR
        return (
            self.ambient_component(intersection)
            + self.diffuse_component(intersection)
            + self.specular_component(ray, intersection, depth)
            + self.refraction_component(ray, intersection, depth)
        )

    def find_intersection(self, ray: Ray) -> Intersection | None:
        return find_intersection(self._world.things, ray)

    def ambient_component(self, intersection: Intersection) -> Color:
        thing = self._world.thing(intersection.thing_index)
        return thing.ambient(intersection.position) * self._world.ambient_light

    def diffuse_component(self, intersection: Intersection) -> Color:
        """Sum the Lambertian contributions of all lights visible from the hit."""
        contributions = (
            self._diffuse_from_light(intersection, light) for light in self._world.lights
        )
        return sum((c for c in contributions if c is not None), BLACK)

    def _diffuse_from_light(
        self, intersection: Intersection, light: Light
    ) -> Color | None:
        to_light = light.position - intersection.position
        distance_to_light = to_light.magnitude()
        ray_to_light = Ray(intersection.position, to_light)

        coefficient = ray_to_light.direction.dot(intersection.normal)
        if coefficient <= DIFFUSION_EPSILON:
            return None

        obstruction = self.find_intersection(ray_to_light)
        if obstruction is not None and obstruction.distance < distance_to_light:
            return None

        thing = self._world.thing(intersection.thing_index)
        return (light.color * thing.diffuse(intersection.position)).scale(coefficient)

    def specular_component(
        self, ray: Ray, intersection: Intersection, depth: int
    ) -> Color:
        """Mirror reflection, filtered by the surface's specular color."""
        if depth == 0:
            return BLACK
        thing = self._world.thing(intersection.thing_index)
        specular = thing.specular(intersection.position)
        if specular.is_black():
            return BLACK

        reflected = reflect(ray.direction, intersection.normal)
        seen = self.launch_ray(Ray(intersection.position, reflected), depth - 1)
        return seen * specular

    def refraction_component(
        self, ray: Ray, intersection: Intersection, depth: int
    ) -> Color:
        """Transmission through the surface, filtered by its refraction color.

        The ratio is the surface's refraction ratio when entering through the
        front face and its reciprocal when leaving. Under total internal
        reflection the ray follows the mirror direction instead.
        """
        if depth == 0:
            return BLACK
        thing = self._world.thing(intersection.thing_index)
        refraction = thing.refraction(intersection.position)
        if refraction.is_black():
            return BLACK

        ratio = thing.refraction_ratio()
        if not intersection.front_face:
            ratio = 1.0 / ratio
        refracted = refract(ray.direction, intersection.normal, ratio)
        seen = self.launch_ray(Ray(intersection.position, refracted), depth - 1)
        return seen * refraction
