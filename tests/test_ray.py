"""Unit tests for rays and the reflection/refraction helpers.

Tests cover:
- Ray construction normalizes the direction
- Zero direction is rejected
- Mirror reflection about a normal
- Snell refraction, pass-through at ratio 1, and total internal reflection
"""

import math

import pytest


def _approx_vec(actual, expected, tol=1e-9):
    return all(abs(a - e) < tol for a, e in zip(actual, expected))


class TestRay:
    """Tests for the Ray dataclass."""

    def test_direction_is_normalized(self):
        from src.whitted.core.ray import Ray
        from src.whitted.core.vector import Vector3

        ray = Ray(Vector3(1.0, 2.0, 3.0), Vector3(0.0, 0.0, -2.0))
        assert ray.start == Vector3(1.0, 2.0, 3.0)
        assert ray.direction == Vector3(0.0, 0.0, -1.0)

    def test_zero_direction_raises(self):
        from src.whitted.core.ray import Ray
        from src.whitted.core.vector import DivideByZeroError, Vector3

        with pytest.raises(DivideByZeroError):
            Ray(Vector3.zero(), Vector3.zero())

    def test_at(self):
        from src.whitted.core.ray import Ray
        from src.whitted.core.vector import Vector3

        ray = Ray(Vector3(1.0, 0.0, 0.0), Vector3(0.0, 3.0, 4.0))
        point = ray.at(5.0)
        assert _approx_vec(point, (1.0, 3.0, 4.0))

    def test_ray_is_immutable(self):
        from dataclasses import FrozenInstanceError

        from src.whitted.core.ray import Ray
        from src.whitted.core.vector import Vector3

        ray = Ray(Vector3.zero(), Vector3.x_axis())
        with pytest.raises(FrozenInstanceError):
            ray.start = Vector3.y_axis()


class TestReflect:
    """Tests for mirror reflection."""

    def test_head_on_reflection_reverses(self):
        from src.whitted.core.ray import reflect
        from src.whitted.core.vector import Vector3

        result = reflect(Vector3(0.0, 0.0, -1.0), Vector3(0.0, 0.0, 1.0))
        assert result == Vector3(0.0, 0.0, 1.0)

    def test_45_degree_reflection(self):
        from src.whitted.core.ray import reflect
        from src.whitted.core.vector import Vector3

        incident = Vector3(1.0, 0.0, -1.0).normalize()
        result = reflect(incident, Vector3(0.0, 0.0, 1.0))
        expected = Vector3(1.0, 0.0, 1.0).normalize()
        assert _approx_vec(result, expected)

    def test_reflection_preserves_length(self):
        from src.whitted.core.ray import reflect
        from src.whitted.core.vector import Vector3

        incident = Vector3(0.3, -0.4, -0.5).normalize()
        normal = Vector3(0.1, 0.2, 1.0).normalize()
        assert reflect(incident, normal).magnitude() == pytest.approx(1.0)


class TestRefract:
    """Tests for Snell refraction."""

    def test_ratio_one_passes_straight_through(self):
        from src.whitted.core.ray import refract
        from src.whitted.core.vector import Vector3

        incident = Vector3(1.0, 0.0, -1.0).normalize()
        result = refract(incident, Vector3(0.0, 0.0, 1.0), 1.0)
        assert _approx_vec(result, incident)

    def test_normal_incidence_is_unbent(self):
        from src.whitted.core.ray import refract
        from src.whitted.core.vector import Vector3

        result = refract(Vector3(0.0, 0.0, -1.0), Vector3(0.0, 0.0, 1.0), 1.0 / 1.5)
        assert _approx_vec(result, (0.0, 0.0, -1.0))

    def test_snell_law(self):
        """sin(theta_t) = ratio * sin(theta_i) when entering glass."""
        from src.whitted.core.ray import refract
        from src.whitted.core.vector import Vector3

        ratio = 1.0 / 1.5
        theta_i = math.radians(30.0)
        incident = Vector3(math.sin(theta_i), 0.0, -math.cos(theta_i))
        result = refract(incident, Vector3(0.0, 0.0, 1.0), ratio)

        assert result.magnitude() == pytest.approx(1.0)
        sin_t = result.x
        assert sin_t == pytest.approx(ratio * math.sin(theta_i))
        assert result.z < 0.0

    def test_total_internal_reflection_returns_mirror_direction(self):
        """Beyond the critical angle the ray is reflected instead."""
        from src.whitted.core.ray import reflect, refract
        from src.whitted.core.vector import Vector3

        # Leaving glass (ratio 1.5) at 60 degrees, past the ~41.8 degree critical angle
        theta_i = math.radians(60.0)
        incident = Vector3(math.sin(theta_i), 0.0, -math.cos(theta_i))
        normal = Vector3(0.0, 0.0, 1.0)

        result = refract(incident, normal, 1.5)
        assert _approx_vec(result, reflect(incident, normal))
        assert result.z > 0.0
