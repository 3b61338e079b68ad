"""
Ray/object intersection records.

- Intersection: a single hit at parameter t on an object
- Intersections: a collection kept sorted by t, with the visible-hit rule
- IntersectionState: shading inputs precomputed for one hit
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, TYPE_CHECKING

from .vec3 import EPSILON, Point, Vector, float_eq
from .ray import Ray

if TYPE_CHECKING:
    from .objects import SceneObject


@dataclass(frozen=True, eq=False)
class Intersection:
    """A ray hits ``object`` at parameter ``t``."""
    t: float
    object: SceneObject

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Intersection):
            return NotImplemented
        return float_eq(self.t, other.t) and self.object == other.object

    __hash__ = None


class Intersections:
    """An immutable sequence of intersections ordered by ascending t."""

    __slots__ = ('_items',)

    def __init__(self, items: Iterable[Intersection] = ()):
        self._items = tuple(sorted(items, key=lambda i: i.t))

    @classmethod
    def of(cls, *items: Intersection) -> Intersections:
        return cls(items)

    @classmethod
    def empty(cls) -> Intersections:
        return cls()

    @classmethod
    def merge(cls, *collections: Intersections) -> Intersections:
        """Concatenate several collections and re-sort them by t."""
        return cls(i for collection in collections for i in collection)

    def hit(self) -> Optional[Intersection]:
        """Return the visible hit: the lowest non-negative t, or None.

        Negative t values lie behind the ray origin and are never selected.
        """
        for intersection in self._items:
            if intersection.t >= 0.0:
                return intersection
        return None

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> Intersection:
        return self._items[index]

    def __iter__(self) -> Iterator[Intersection]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Intersections):
            return NotImplemented
        return self._items == other._items

    __hash__ = None

    def __repr__(self) -> str:
        return f"Intersections({', '.join(f't={i.t:.5f}' for i in self._items)})"


@dataclass(frozen=True)
class IntersectionState:
    """Precomputed shading inputs for a single hit.

    Attributes:
        t: Ray parameter of the hit
        object: The object that was hit
        point: Hit point in world space
        eye_v: Direction from the point back towards the eye
        normal_v: Surface normal, flipped to face the eye when ``inside``
        inside: True if the ray originated inside the object
        over_point: ``point`` nudged along the normal by EPSILON, used as
            the origin of shadow rays so the surface does not shadow itself
    """
    t: float
    object: SceneObject
    point: Point
    eye_v: Vector
    normal_v: Vector
    inside: bool
    over_point: Point

    @classmethod
    def prepare(cls, intersection: Intersection, ray: Ray) -> IntersectionState:
        t = intersection.t
        obj = intersection.object
        point = ray.position(t)
        eye_v = -ray.direction
        normal_v = obj.normal_at(point)

        # The normal points away from the eye: we are inside the object
        inside = normal_v.dot(eye_v) < 0.0
        if inside:
            normal_v = -normal_v

        return cls(
            t=t,
            object=obj,
            point=point,
            eye_v=eye_v,
            normal_v=normal_v,
            inside=inside,
            over_point=point + normal_v * EPSILON,
        )
