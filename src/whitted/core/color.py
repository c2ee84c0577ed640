"""RGB color values used throughout shading.

Channels are unconstrained floats while light is being accumulated; an
intersection can sum ambient, diffuse, specular and refraction terms well
past 1.0. Clamping only happens in ``to_drawing_color`` at display time.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Color:
    """An RGB color with float channels.

    Attributes:
        r: Red channel.
        g: Green channel.
        b: Blue channel.
    """

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    def __add__(self, other: Color) -> Color:
        return Color(self.r + other.r, self.g + other.g, self.b + other.b)

    def __mul__(self, other: Color) -> Color:
        """Component-wise product, e.g. light color filtered by a surface."""
        return Color(self.r * other.r, self.g * other.g, self.b * other.b)

    def scale(self, k: float) -> Color:
        return Color(k * self.r, k * self.g, k * self.b)

    def is_black(self) -> bool:
        return self.r == 0.0 and self.g == 0.0 and self.b == 0.0

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.r, self.g, self.b)

    def to_drawing_color(self) -> Color:
        """Convert to the 0-255 range used by display collaborators.

        Each channel is capped at 1.0 and multiplied by 255. Values below
        zero are passed through unchanged; bounding them is left to the
        8-bit conversion in ``preview.export``.
        """
        return Color(
            255.0 * min(self.r, 1.0),
            255.0 * min(self.g, 1.0),
            255.0 * min(self.b, 1.0),
        )


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
