"""Generic 2D and 3D vectors over an arithmetic scalar type.

Vectors are immutable value types: every operation returns a new vector.
The scalar type parameter is constrained to ``int`` or ``float``. Operations
that need a square root or trigonometry (``magnitude``, ``normalize``,
``angle``) are declared on ``Vector3[float]`` / ``Vector2[float]`` only, so a
static type checker rejects them on integer vectors.

Example:
    >>> from src.whitted.core.vector import Vector3
    >>> v = Vector3(3.0, 0.0, 4.0)
    >>> v.magnitude()
    5.0
    >>> Vector3(0.0, 0.0, 2.0).normalize()
    Vector3(x=0.0, y=0.0, z=1.0)
    >>> Vector3(1, 0, 0).cross(Vector3(0, 1, 0))
    Vector3(x=0, y=0, z=1)
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar

# Scalar capability bundle: add/sub/mul/div/eq/zero/one. Only float also
# carries sqrt and trigonometry.
T = TypeVar("T", int, float)
D = TypeVar("D", int, float)


class DivideByZeroError(ZeroDivisionError):
    """Raised when normalizing a vector whose magnitude is exactly zero."""

    def __init__(self, message: str = "Division by zero.") -> None:
        super().__init__(message)


def _clamp_cosine(value: float) -> float:
    # Rounding can push the cosine of parallel vectors just past +/-1.
    return max(-1.0, min(1.0, value))


@dataclass(frozen=True)
class Vector2(Generic[T]):
    """A 2D vector, used for surface (UV) coordinates.

    Attributes:
        x: First component (u for surface coordinates).
        y: Second component (v for surface coordinates).
    """

    x: T
    y: T

    @classmethod
    def zero(cls, scalar: type = float) -> Vector2:
        return cls(scalar(0), scalar(0))

    @classmethod
    def with_value(cls, value: T) -> Vector2[T]:
        return cls(value, value)

    @classmethod
    def x_axis(cls, scalar: type = float) -> Vector2:
        return cls(scalar(1), scalar(0))

    @classmethod
    def y_axis(cls, scalar: type = float) -> Vector2:
        return cls(scalar(0), scalar(1))

    @property
    def u(self) -> T:
        return self.x

    @property
    def v(self) -> T:
        return self.y

    def __iter__(self) -> Iterator[T]:
        yield self.x
        yield self.y

    def __add__(self, other: Vector2[T]) -> Vector2[T]:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2[T]) -> Vector2[T]:
        return Vector2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Vector2[T]:
        return Vector2(-self.x, -self.y)

    def __mul__(self, scalar: T) -> Vector2[T]:
        return self.each_mul(scalar)

    def __rmul__(self, scalar: T) -> Vector2[T]:
        return self.each_mul(scalar)

    def __truediv__(self, scalar: T) -> Vector2:
        return self.each_div(scalar)

    def __str__(self) -> str:
        return f"Vector({self.x},{self.y})"

    def each_mul(self, t: T) -> Vector2[T]:
        return Vector2(self.x * t, self.y * t)

    def each_div(self, t: T) -> Vector2:
        return Vector2(self.x / t, self.y / t)

    def each_add(self, t: T) -> Vector2[T]:
        return Vector2(self.x + t, self.y + t)

    def each_sub(self, t: T) -> Vector2[T]:
        return Vector2(self.x - t, self.y - t)

    def map(self, f: Callable[[T], D]) -> Vector2[D]:
        return Vector2(f(self.x), f(self.y))

    def dot(self, other: Vector2[T]) -> T:
        return self.x * other.x + self.y * other.y

    def magnitude(self: Vector2[float]) -> float:
        return math.sqrt(self.dot(self))

    def normalize(self: Vector2[float]) -> Vector2[float]:
        """Return the unit vector pointing the same way.

        Raises:
            DivideByZeroError: If the magnitude is exactly zero.
        """
        mag = self.magnitude()
        if mag == 0:
            raise DivideByZeroError()
        return self.each_mul(1.0 / mag)

    def angle(self: Vector2[float], other: Vector2[float]) -> float:
        """Return the angle in radians between two vectors.

        Raises:
            DivideByZeroError: If either vector has zero magnitude.
        """
        return math.acos(_clamp_cosine(self.normalize().dot(other.normalize())))


@dataclass(frozen=True)
class Vector3(Generic[T]):
    """A 3D vector.

    The world uses a right-handed, z-up frame::

              z
              |
              |_____ y
             /
            / x

    Attributes:
        x: X component.
        y: Y component.
        z: Z component.
    """

    x: T
    y: T
    z: T

    @classmethod
    def zero(cls, scalar: type = float) -> Vector3:
        return cls(scalar(0), scalar(0), scalar(0))

    @classmethod
    def with_value(cls, value: T) -> Vector3[T]:
        return cls(value, value, value)

    @classmethod
    def x_axis(cls, scalar: type = float) -> Vector3:
        return cls(scalar(1), scalar(0), scalar(0))

    @classmethod
    def y_axis(cls, scalar: type = float) -> Vector3:
        return cls(scalar(0), scalar(1), scalar(0))

    @classmethod
    def z_axis(cls, scalar: type = float) -> Vector3:
        return cls(scalar(0), scalar(0), scalar(1))

    def __iter__(self) -> Iterator[T]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vector3[T]) -> Vector3[T]:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3[T]) -> Vector3[T]:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector3[T]:
        return Vector3(-self.x, -self.y, -self.z)

    def __mul__(self, scalar: T) -> Vector3[T]:
        return self.each_mul(scalar)

    def __rmul__(self, scalar: T) -> Vector3[T]:
        return self.each_mul(scalar)

    def __truediv__(self, scalar: T) -> Vector3:
        return self.each_div(scalar)

    def __str__(self) -> str:
        return f"Vector({self.x},{self.y},{self.z})"

    def each_mul(self, t: T) -> Vector3[T]:
        return Vector3(self.x * t, self.y * t, self.z * t)

    def each_div(self, t: T) -> Vector3:
        return Vector3(self.x / t, self.y / t, self.z / t)

    def each_add(self, t: T) -> Vector3[T]:
        return Vector3(self.x + t, self.y + t, self.z + t)

    def each_sub(self, t: T) -> Vector3[T]:
        return Vector3(self.x - t, self.y - t, self.z - t)

    def map(self, f: Callable[[T], D]) -> Vector3[D]:
        """Apply ``f`` to every component, possibly changing the scalar type."""
        return Vector3(f(self.x), f(self.y), f(self.z))

    def dot(self, other: Vector3[T]) -> T:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3[T]) -> Vector3[T]:
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def magnitude(self: Vector3[float]) -> float:
        return math.sqrt(self.dot(self))

    def normalize(self: Vector3[float]) -> Vector3[float]:
        """Return the unit vector pointing the same way.

        The zero test is an exact comparison; vectors with a tiny but
        non-zero magnitude still normalize.

        Returns:
            A new vector of magnitude 1.

        Raises:
            DivideByZeroError: If the magnitude is exactly zero.
        """
        mag = self.magnitude()
        if mag == 0:
            raise DivideByZeroError()
        return self.each_mul(1.0 / mag)

    def angle(self: Vector3[float], other: Vector3[float]) -> float:
        """Return the angle in radians between two vectors.

        Args:
            other: The second vector.

        Returns:
            ``acos(dot(normalize(self), normalize(other)))`` in ``[0, pi]``.

        Raises:
            DivideByZeroError: If either vector has zero magnitude.
        """
        return math.acos(_clamp_cosine(self.normalize().dot(other.normalize())))
