"""Pinhole camera model mapping pixels to primary rays.

The camera is described by an image plane in world space and an eye point
behind it:

- ``position`` is the center of the image plane.
- ``direction``, ``up`` and ``right`` form the (roughly orthonormal) camera
  basis. ``direction`` points into the scene.
- The eye ("image spot") sits ``focal_dist`` behind the plane:
  ``image_spot = position - direction * focal_dist``.
- The plane is ``image_len_width`` x ``image_len_height`` world units and is
  divided into ``image_pixels_width`` x ``image_pixels_height`` pixels.

Pixel (0, 0) is the top-left corner of the plane. x grows along ``right``
and y grows downward, against ``up``. Every primary ray starts at the eye
and passes through its pixel's corner on the plane.

Example:
    >>> from src.whitted.camera.pinhole import Camera
    >>> camera = Camera()  # looks down +x with z up, 640x480 pixels
    >>> camera.image_spot()
    Vector3(x=-2.0, y=0.0, z=0.0)
    >>> ray = camera.get_ray(320, 240)
    >>> ray.direction
    Vector3(x=1.0, y=0.0, z=0.0)
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.whitted.core.ray import Ray
from src.whitted.core.vector import Vector3

DEFAULT_PIXELS_WIDTH = 640
DEFAULT_PIXELS_HEIGHT = 480
DEFAULT_PIXEL_PER_UNIT = 320.0
DEFAULT_FOCAL_DIST = 2.0


def compute_image_size(pixels: int, pixel_per_unit: float) -> float:
    """Physical length of an image side, in world units."""
    return pixels / pixel_per_unit


@dataclass(frozen=True)
class Camera:
    """A pinhole camera.

    Attributes:
        direction: Viewing direction (must be non-zero).
        up: Up vector of the image plane.
        right: Right vector of the image plane.
        position: Center of the image plane.
        focal_dist: Distance from the eye to the image plane.
        image_pixels_width: Horizontal resolution in pixels.
        image_pixels_height: Vertical resolution in pixels.
        pixel_per_unit: Pixels per world unit on the image plane.
        image_len_width: Width of the image plane in world units. Derived
            as ``image_pixels_width / pixel_per_unit`` when omitted.
        image_len_height: Height of the image plane in world units. Derived
            as ``image_pixels_height / pixel_per_unit`` when omitted.
    """

    direction: Vector3[float] = field(default_factory=lambda: Vector3.x_axis())
    up: Vector3[float] = field(default_factory=lambda: Vector3.z_axis())
    right: Vector3[float] = field(default_factory=lambda: -Vector3.y_axis())
    position: Vector3[float] = field(default_factory=lambda: Vector3.zero())
    focal_dist: float = DEFAULT_FOCAL_DIST
    image_pixels_width: int = DEFAULT_PIXELS_WIDTH
    image_pixels_height: int = DEFAULT_PIXELS_HEIGHT
    pixel_per_unit: float = DEFAULT_PIXEL_PER_UNIT
    image_len_width: float | None = None
    image_len_height: float | None = None

    def __post_init__(self) -> None:
        """Validate the camera.

        Raises:
            DivideByZeroError: If ``direction`` is the zero vector.
            ValueError: If a pixel dimension is not positive, or if
                ``pixel_per_unit`` is not positive while an image length
                has to be derived from it.
        """
        self.direction.normalize()
        if self.image_pixels_width <= 0 or self.image_pixels_height <= 0:
            raise ValueError(
                "Camera pixel dimensions must be positive, got "
                f"{self.image_pixels_width}x{self.image_pixels_height}"
            )
        if self.image_len_width is None or self.image_len_height is None:
            if self.pixel_per_unit <= 0.0:
                raise ValueError(
                    f"pixel_per_unit must be positive, got {self.pixel_per_unit}"
                )
        # Frozen dataclass: fill derived lengths through object.__setattr__
        if self.image_len_width is None:
            object.__setattr__(
                self,
                "image_len_width",
                compute_image_size(self.image_pixels_width, self.pixel_per_unit),
            )
        if self.image_len_height is None:
            object.__setattr__(
                self,
                "image_len_height",
                compute_image_size(self.image_pixels_height, self.pixel_per_unit),
            )

    @classmethod
    def from_pixels(
        cls,
        *,
        direction: Vector3[float] | None = None,
        up: Vector3[float] | None = None,
        right: Vector3[float] | None = None,
        position: Vector3[float] | None = None,
        focal_dist: float = DEFAULT_FOCAL_DIST,
        image_pixels_width: int = DEFAULT_PIXELS_WIDTH,
        image_pixels_height: int = DEFAULT_PIXELS_HEIGHT,
        pixel_per_unit: float = DEFAULT_PIXEL_PER_UNIT,
    ) -> Camera:
        """Build a camera whose physical image size follows from its pixels.

        ``image_len_width`` and ``image_len_height`` are computed as
        ``pixels / pixel_per_unit``. Omitted basis vectors take the defaults
        (looking down +x, z up, right along -y, plane centered at origin).

        Raises:
            DivideByZeroError: If ``direction`` is the zero vector.
            ValueError: If ``pixel_per_unit`` or a pixel dimension is not
                positive.
        """
        if pixel_per_unit <= 0.0:
            raise ValueError(f"pixel_per_unit must be positive, got {pixel_per_unit}")
        return cls(
            direction=direction if direction is not None else Vector3.x_axis(),
            up=up if up is not None else Vector3.z_axis(),
            right=right if right is not None else -Vector3.y_axis(),
            position=position if position is not None else Vector3.zero(),
            focal_dist=focal_dist,
            image_pixels_width=image_pixels_width,
            image_pixels_height=image_pixels_height,
            pixel_per_unit=pixel_per_unit,
            image_len_width=compute_image_size(image_pixels_width, pixel_per_unit),
            image_len_height=compute_image_size(image_pixels_height, pixel_per_unit),
        )

    def get_pixel_size(self) -> tuple[int, int]:
        """Return ``(width, height)`` in pixels."""
        return (self.image_pixels_width, self.image_pixels_height)

    def image_spot(self) -> Vector3[float]:
        """The eye point every primary ray starts from."""
        return self.position - self.direction * self.focal_dist

    def up_left(self) -> Vector3[float]:
        """World-space top-left corner of the image plane."""
        return (
            self.position
            + self.up * (self.image_len_height / 2.0)
            - self.right * (self.image_len_width / 2.0)
        )

    def get_ray(self, pixel_x: int, pixel_y: int) -> Ray:
        """Generate the primary ray for pixel ``(pixel_x, pixel_y)``.

        Args:
            pixel_x: Column, 0 at the left edge.
            pixel_y: Row, 0 at the top edge.

        Returns:
            A ray from the eye through the pixel's point on the image plane.

        Raises:
            DivideByZeroError: If the pixel's point coincides with the eye
                (only possible with ``focal_dist == 0``).
        """
        x_increment = self.right * (
            self.image_len_width * pixel_x / self.image_pixels_width
        )
        y_increment = -self.up * (
            self.image_len_height * pixel_y / self.image_pixels_height
        )
        point_on_screen = self.up_left() + x_increment + y_increment
        start = self.image_spot()
        return Ray(start, point_on_screen - start)
