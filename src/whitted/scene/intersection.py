"""Scene-level nearest-hit search.

Every primitive reports raw candidate points; this module turns them into
``Intersection`` records and keeps the closest valid one. A candidate is
valid when it is:

- more than ``EPSILON`` away from the ray start, so a secondary ray leaving
  a surface does not hit that same surface at its own origin, and
- ahead of the ray (``dot(position - start, direction) > 0``).

The normal stored on an intersection always faces the incoming ray. When
the primitive's outward normal points away from the ray (the ray is inside
the primitive) it is flipped and the hit is marked as a back-face hit.

Example:
    >>> from src.whitted.scene.intersection import find_intersection
    >>> hit = find_intersection(world.things, camera.get_ray(10, 10))
    >>> if hit is not None:
    ...     thing = world.thing(hit.thing_index)
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from src.whitted.core.ray import Ray
from src.whitted.core.vector import Vector3
from src.whitted.geometry.thing import Thing

# Minimum distance from the ray start for a hit to count.
EPSILON = 1e-7


@dataclass(frozen=True)
class Intersection:
    """Record of a ray hitting a primitive.

    Attributes:
        thing_index: Index of the primitive in ``World.things``.
        position: The hit point.
        normal: Unit surface normal at the hit, facing the incoming ray.
        distance: Distance from the ray start to the hit point (> 0).
        front_face: True if the ray came from outside the primitive.
    """

    thing_index: int
    position: Vector3[float]
    normal: Vector3[float]
    distance: float
    front_face: bool


def iter_candidates(things: Sequence[Thing], ray: Ray) -> Iterator[Intersection]:
    """Yield an oriented ``Intersection`` for every raw candidate point.

    No filtering is applied; see ``find_intersection``.
    """
    for index, thing in enumerate(things):
        for position in thing.intersect(ray):
            normal = thing.normal(position)
            front_face = True
            if normal.dot(ray.direction) > 0.0:
                normal = -normal
                front_face = False
            yield Intersection(
                thing_index=index,
                position=position,
                normal=normal,
                distance=(position - ray.start).magnitude(),
                front_face=front_face,
            )


def is_valid_hit(intersection: Intersection, ray: Ray) -> bool:
    """Check the self-intersection and in-front-of-start conditions."""
    ahead = (intersection.position - ray.start).dot(ray.direction) > 0.0
    return intersection.distance > EPSILON and ahead


def find_intersection(things: Sequence[Thing], ray: Ray) -> Intersection | None:
    """Find the closest valid hit of ``ray`` among ``things``.

    Ties keep the first candidate encountered.

    Args:
        things: The primitives to test, in scene order.
        ray: The ray to trace.

    Returns:
        The nearest valid intersection, or None if the ray hits nothing.
    """
    nearest: Intersection | None = None
    for candidate in iter_candidates(things, ray):
        if not is_valid_hit(candidate, ray):
            continue
        if nearest is None or candidate.distance < nearest.distance:
            nearest = candidate
    return nearest
