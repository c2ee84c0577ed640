"""Unit tests for the sphere primitive.

Tests cover:
- Ray hitting sphere from outside (two candidates, near one first)
- Ray missing sphere
- Ray starting inside sphere (one candidate behind the start)
- Ray tangent to sphere
- Normals and UV mapping
- Document round trip and validation
"""

import math

import pytest


def _approx_vec(actual, expected, tol=1e-9):
    return all(abs(a - e) < tol for a, e in zip(actual, expected))


@pytest.fixture
def unit_sphere():
    from src.whitted.core.vector import Vector3
    from src.whitted.geometry.sphere import Sphere
    from src.whitted.surfaces.surface import Surface

    return Sphere(Vector3(0.0, 0.0, 0.0), 1.0, Surface())


class TestSphereIntersection:
    """Tests for ray-sphere intersection candidates."""

    def test_direct_hit_returns_both_points(self, unit_sphere):
        from src.whitted.core.ray import Ray
        from src.whitted.core.vector import Vector3

        points = unit_sphere.intersect(Ray(Vector3(-5.0, 0.0, 0.0), Vector3(1.0, 0.0, 0.0)))

        assert len(points) == 2
        assert _approx_vec(points[0], (-1.0, 0.0, 0.0))
        assert _approx_vec(points[1], (1.0, 0.0, 0.0))

    def test_miss_returns_nothing(self, unit_sphere):
        from src.whitted.core.ray import Ray
        from src.whitted.core.vector import Vector3

        ray = Ray(Vector3(-5.0, 0.0, 2.0), Vector3(1.0, 0.0, 0.0))
        assert unit_sphere.intersect(ray) == []

    def test_ray_pointing_away_still_reports_candidates(self, unit_sphere):
        """Candidates behind the start are filtered later by the scene search."""
        from src.whitted.core.ray import Ray
        from src.whitted.core.vector import Vector3

        ray = Ray(Vector3(-5.0, 0.0, 0.0), Vector3(-1.0, 0.0, 0.0))
        points = unit_sphere.intersect(ray)
        assert len(points) == 2
        assert _approx_vec(points[0], (1.0, 0.0, 0.0))
        assert _approx_vec(points[1], (-1.0, 0.0, 0.0))

    def test_ray_from_inside(self, unit_sphere):
        from src.whitted.core.ray import Ray
        from src.whitted.core.vector import Vector3

        points = unit_sphere.intersect(Ray(Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, 1.0)))
        assert _approx_vec(points[0], (0.0, 0.0, -1.0))
        assert _approx_vec(points[1], (0.0, 0.0, 1.0))

    def test_tangent_ray_reports_same_point_twice(self, unit_sphere):
        from src.whitted.core.ray import Ray
        from src.whitted.core.vector import Vector3

        points = unit_sphere.intersect(Ray(Vector3(-5.0, 0.0, 1.0), Vector3(1.0, 0.0, 0.0)))
        assert len(points) == 2
        assert _approx_vec(points[0], (0.0, 0.0, 1.0))
        assert _approx_vec(points[1], (0.0, 0.0, 1.0))

    def test_offset_sphere(self):
        from src.whitted.core.ray import Ray
        from src.whitted.core.vector import Vector3
        from src.whitted.geometry.sphere import Sphere
        from src.whitted.surfaces.surface import Surface

        sphere = Sphere(Vector3(10.0, 2.0, 0.0), 0.5, Surface())
        points = sphere.intersect(Ray(Vector3(0.0, 2.0, 0.0), Vector3(1.0, 0.0, 0.0)))
        assert _approx_vec(points[0], (9.5, 2.0, 0.0))


class TestSphereSurface:
    """Tests for normals and UV mapping."""

    def test_normal_points_outward(self, unit_sphere):
        from src.whitted.core.vector import Vector3

        assert unit_sphere.normal(Vector3(0.0, 1.0, 0.0)) == Vector3(0.0, 1.0, 0.0)

    def test_normal_is_unit_for_large_sphere(self):
        from src.whitted.core.vector import Vector3
        from src.whitted.geometry.sphere import Sphere
        from src.whitted.surfaces.surface import Surface

        sphere = Sphere(Vector3(1.0, 1.0, 1.0), 4.0, Surface())
        normal = sphere.normal(Vector3(1.0, 1.0, 5.0))
        assert _approx_vec(normal, (0.0, 0.0, 1.0))

    def test_uv_poles(self, unit_sphere):
        from src.whitted.core.vector import Vector3

        assert unit_sphere.get_uv_mapping(Vector3(0.0, 0.0, 1.0)).v == pytest.approx(1.0)
        assert unit_sphere.get_uv_mapping(Vector3(0.0, 0.0, -1.0)).v == pytest.approx(0.0)

    def test_uv_equator(self, unit_sphere):
        from src.whitted.core.vector import Vector3

        uv = unit_sphere.get_uv_mapping(Vector3(1.0, 0.0, 0.0))
        assert uv.u == pytest.approx(0.5)
        assert uv.v == pytest.approx(0.5)

        uv = unit_sphere.get_uv_mapping(Vector3(0.0, 1.0, 0.0))
        assert uv.u == pytest.approx(0.5 + 0.25)

    def test_uv_in_unit_square(self, unit_sphere):
        from src.whitted.core.vector import Vector3

        for point in [
            Vector3(-1.0, 0.0, 0.0),
            Vector3(0.0, -1.0, 0.0),
            Vector3(math.sqrt(0.5), 0.0, math.sqrt(0.5)),
        ]:
            uv = unit_sphere.get_uv_mapping(point)
            assert 0.0 <= uv.u <= 1.0
            assert 0.0 <= uv.v <= 1.0

    def test_shading_delegates_to_surface(self):
        from src.whitted.core.color import Color
        from src.whitted.core.vector import Vector3
        from src.whitted.geometry.sphere import Sphere
        from src.whitted.surfaces.surface import Surface

        red = Color(1.0, 0.0, 0.0)
        sphere = Sphere(Vector3.zero(), 1.0, Surface.matte(red))
        point = Vector3(1.0, 0.0, 0.0)

        assert sphere.ambient(point) == red
        assert sphere.diffuse(point) == red
        assert sphere.specular(point).is_black()
        assert sphere.refraction(point).is_black()
        assert sphere.refraction_ratio() == 1.0


class TestSphereDocument:
    """Tests for from_dict/to_dict and validation."""

    def test_invalid_radius_raises(self):
        from src.whitted.core.vector import Vector3
        from src.whitted.geometry.sphere import Sphere
        from src.whitted.surfaces.surface import Surface

        with pytest.raises(ValueError):
            Sphere(Vector3.zero(), 0.0, Surface())

    def test_round_trip(self):
        from src.whitted.core.color import Color
        from src.whitted.core.vector import Vector3
        from src.whitted.geometry.sphere import Sphere
        from src.whitted.geometry.thing import thing_from_dict
        from src.whitted.surfaces.surface import Surface

        sphere = Sphere(Vector3(1.0, 2.0, 3.0), 0.5, Surface.matte(Color(0.2, 0.4, 0.6)))
        data = sphere.to_dict()

        assert data["type"] == "sphere"
        assert thing_from_dict(data, "thing") == sphere

    def test_missing_radius_names_path(self):
        from src.whitted.core.parsing import SceneLoadError
        from src.whitted.geometry.thing import thing_from_dict

        with pytest.raises(SceneLoadError, match=r"things\[0\].*radius"):
            thing_from_dict({"type": "sphere", "position": [0, 0, 0]}, "things[0]")

    def test_negative_radius_becomes_scene_error(self):
        from src.whitted.core.parsing import SceneLoadError
        from src.whitted.geometry.thing import thing_from_dict

        data = {
            "type": "sphere",
            "position": [0, 0, 0],
            "radius": -1,
            "surface": {
                "ambient": {"type": "const_color", "color": [0, 0, 0]},
                "diffuse": {"type": "const_color", "color": [0, 0, 0]},
            },
        }
        with pytest.raises(SceneLoadError, match="radius"):
            thing_from_dict(data, "things[0]")

    def test_unknown_type_raises(self):
        from src.whitted.core.parsing import SceneLoadError
        from src.whitted.geometry.thing import thing_from_dict

        with pytest.raises(SceneLoadError, match="unknown thing type 'cone'"):
            thing_from_dict({"type": "cone"}, "things[0]")
