"""Rendered image buffer.

An ``Image`` is a dense width x height grid of colors backed by a NumPy
array of shape ``(height, width, 3)``. Rows run top to bottom, matching the
camera's pixel coordinates, so ``to_numpy()`` can be handed directly to
Pillow or Matplotlib.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

from src.whitted.core.color import BLACK, Color


class Image:
    """A 2D buffer of colors.

    Attributes:
        width: Number of columns (x coordinates).
        height: Number of rows (y coordinates).
    """

    def __init__(self, width: int, height: int, default_color: Color = BLACK) -> None:
        """Allocate an image filled with a single color.

        Args:
            width: Image width in pixels (must be positive).
            height: Image height in pixels (must be positive).
            default_color: Initial color of every pixel.

        Raises:
            ValueError: If either dimension is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
        self._width = width
        self._height = height
        self._data = np.empty((height, width, 3), dtype=np.float64)
        self._data[:, :] = default_color.as_tuple()

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(
                f"Pixel ({x}, {y}) is outside a {self._width}x{self._height} image"
            )

    def get_color(self, x: int, y: int) -> Color:
        """Read the color at column ``x``, row ``y``.

        Raises:
            IndexError: If the coordinate is out of bounds.
        """
        self._check_bounds(x, y)
        r, g, b = self._data[y, x]
        return Color(float(r), float(g), float(b))

    def set_color(self, x: int, y: int, color: Color) -> None:
        """Write the color at column ``x``, row ``y``.

        Raises:
            IndexError: If the coordinate is out of bounds.
        """
        self._check_bounds(x, y)
        self._data[y, x] = color.as_tuple()

    def set_row(self, y: int, colors: Sequence[Color]) -> None:
        """Write a full row of colors at once.

        Raises:
            IndexError: If ``y`` is out of bounds.
            ValueError: If ``colors`` does not have exactly ``width`` entries.
        """
        self._check_bounds(0, y)
        if len(colors) != self._width:
            raise ValueError(f"Row has {len(colors)} colors, expected {self._width}")
        self._data[y] = [c.as_tuple() for c in colors]

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return a copy of the raw (unclamped) color buffer, shape (H, W, 3)."""
        return self._data.copy()

    def __repr__(self) -> str:
        return f"Image(width={self._width}, height={self._height})"
