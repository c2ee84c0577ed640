"""Unit tests for the scene-level nearest-hit search.

Tests cover:
- Nearest hit among several primitives, independent of scene order
- Candidates behind the ray start or at its origin are discarded
- Normals are oriented toward the incoming ray (front/back face)
- Ties keep the first primitive
- World container validation
"""

import pytest


def _approx_vec(actual, expected, tol=1e-9):
    return all(abs(a - e) < tol for a, e in zip(actual, expected))


def _sphere(x, y, z, radius=1.0):
    from src.whitted.core.vector import Vector3
    from src.whitted.geometry.sphere import Sphere
    from src.whitted.surfaces.surface import Surface

    return Sphere(Vector3(x, y, z), radius, Surface())


class TestFindIntersection:
    """Tests for find_intersection."""

    def test_miss_returns_none(self):
        from src.whitted.core.ray import Ray
        from src.whitted.core.vector import Vector3
        from src.whitted.scene.intersection import find_intersection

        ray = Ray(Vector3(-5.0, 0.0, 0.0), Vector3(0.0, 1.0, 0.0))
        assert find_intersection([_sphere(0.0, 0.0, 0.0)], ray) is None

    def test_empty_scene_returns_none(self):
        from src.whitted.core.ray import Ray
        from src.whitted.core.vector import Vector3
        from src.whitted.scene.intersection import find_intersection

        assert find_intersection([], Ray(Vector3.zero(), Vector3.x_axis())) is None

    def test_front_hit(self):
        from src.whitted.core.ray import Ray
        from src.whitted.core.vector import Vector3
        from src.whitted.scene.intersection import find_intersection

        ray = Ray(Vector3(-5.0, 0.0, 0.0), Vector3(1.0, 0.0, 0.0))
        hit = find_intersection([_sphere(0.0, 0.0, 0.0)], ray)

        assert hit is not None
        assert hit.thing_index == 0
        assert _approx_vec(hit.position, (-1.0, 0.0, 0.0))
        assert _approx_vec(hit.normal, (-1.0, 0.0, 0.0))
        assert hit.distance == pytest.approx(4.0)
        assert hit.front_face

    @pytest.mark.parametrize("order", [(0, 1), (1, 0)])
    def test_nearest_wins_regardless_of_order(self, order):
        from src.whitted.core.ray import Ray
        from src.whitted.core.vector import Vector3
        from src.whitted.scene.intersection import find_intersection

        spheres = [_sphere(5.0, 0.0, 0.0), _sphere(10.0, 0.0, 0.0)]
        things = [spheres[i] for i in order]
        hit = find_intersection(things, Ray(Vector3.zero(), Vector3.x_axis()))

        assert hit is not None
        assert things[hit.thing_index] is spheres[0]
        assert hit.distance == pytest.approx(4.0)

    def test_hits_behind_start_are_ignored(self):
        from src.whitted.core.ray import Ray
        from src.whitted.core.vector import Vector3
        from src.whitted.scene.intersection import find_intersection

        ray = Ray(Vector3(5.0, 0.0, 0.0), Vector3(1.0, 0.0, 0.0))
        assert find_intersection([_sphere(0.0, 0.0, 0.0)], ray) is None

    def test_ray_from_surface_does_not_hit_its_origin(self):
        """A secondary ray leaving a surface skips the point it starts on."""
        from src.whitted.core.ray import Ray
        from src.whitted.core.vector import Vector3
        from src.whitted.scene.intersection import find_intersection

        ray = Ray(Vector3(-1.0, 0.0, 0.0), Vector3(-1.0, 0.0, 1.0))
        assert find_intersection([_sphere(0.0, 0.0, 0.0)], ray) is None

    def test_inside_hit_is_back_face(self):
        from src.whitted.core.ray import Ray
        from src.whitted.core.vector import Vector3
        from src.whitted.scene.intersection import find_intersection

        ray = Ray(Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, 1.0))
        hit = find_intersection([_sphere(0.0, 0.0, 0.0)], ray)

        assert hit is not None
        assert _approx_vec(hit.position, (0.0, 0.0, 1.0))
        # Outward normal is +z; it is flipped to face the ray
        assert _approx_vec(hit.normal, (0.0, 0.0, -1.0))
        assert not hit.front_face

    def test_quad_normal_faces_ray_from_either_side(self):
        from src.whitted.core.ray import Ray
        from src.whitted.core.vector import Vector3
        from src.whitted.geometry.quad import Quad
        from src.whitted.scene.intersection import find_intersection
        from src.whitted.surfaces.surface import Surface

        quad = Quad(
            corner=Vector3(-1.0, -1.0, 0.0),
            edge_u=Vector3(2.0, 0.0, 0.0),
            edge_v=Vector3(0.0, 2.0, 0.0),
            surface=Surface(),
        )
        from_above = find_intersection([quad], Ray(Vector3(0.0, 0.0, 3.0), Vector3(0.0, 0.0, -1.0)))
        from_below = find_intersection([quad], Ray(Vector3(0.0, 0.0, -3.0), Vector3(0.0, 0.0, 1.0)))

        assert from_above.front_face
        assert _approx_vec(from_above.normal, (0.0, 0.0, 1.0))
        assert not from_below.front_face
        assert _approx_vec(from_below.normal, (0.0, 0.0, -1.0))

    def test_tie_keeps_first(self):
        from src.whitted.core.ray import Ray
        from src.whitted.core.vector import Vector3
        from src.whitted.scene.intersection import find_intersection

        things = [_sphere(5.0, 0.0, 0.0), _sphere(5.0, 0.0, 0.0)]
        hit = find_intersection(things, Ray(Vector3.zero(), Vector3.x_axis()))
        assert hit.thing_index == 0


class TestValidHit:
    """Tests for is_valid_hit and the EPSILON threshold."""

    def test_epsilon_value(self):
        from src.whitted.scene.intersection import EPSILON

        assert EPSILON == 1e-7

    def test_hit_within_epsilon_is_invalid(self):
        from src.whitted.core.ray import Ray
        from src.whitted.core.vector import Vector3
        from src.whitted.scene.intersection import Intersection, is_valid_hit

        ray = Ray(Vector3.zero(), Vector3.x_axis())
        near = Intersection(0, Vector3(5e-8, 0.0, 0.0), Vector3(-1.0, 0.0, 0.0), 5e-8, True)
        far = Intersection(0, Vector3(1e-6, 0.0, 0.0), Vector3(-1.0, 0.0, 0.0), 1e-6, True)

        assert not is_valid_hit(near, ray)
        assert is_valid_hit(far, ray)

    def test_hit_behind_is_invalid(self):
        from src.whitted.core.ray import Ray
        from src.whitted.core.vector import Vector3
        from src.whitted.scene.intersection import Intersection, is_valid_hit

        ray = Ray(Vector3.zero(), Vector3.x_axis())
        behind = Intersection(0, Vector3(-2.0, 0.0, 0.0), Vector3(1.0, 0.0, 0.0), 2.0, True)
        assert not is_valid_hit(behind, ray)


class TestWorld:
    """Tests for the World container."""

    def test_sequences_stored_as_tuples(self):
        from src.whitted.scene.world import World

        sphere = _sphere(0.0, 0.0, 0.0)
        world = World(things=[sphere])
        assert world.things == (sphere,)
        assert world.lights == ()
        assert world.thing(0) is sphere

    def test_defaults(self):
        from src.whitted.scene.world import DEFAULT_MAX_RECURSIONS, World

        world = World()
        assert world.ambient_light.is_black()
        assert world.max_recursions == DEFAULT_MAX_RECURSIONS
        assert world.camera.get_pixel_size() == (640, 480)

    def test_negative_depth_raises(self):
        from src.whitted.scene.world import World

        with pytest.raises(ValueError):
            World(max_recursions=-1)
