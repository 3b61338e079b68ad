"""
Ray class for representing rays in 3D space.

A ray is defined by an origin point and a direction vector.
Ray(t) = origin + t * direction
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from .vec3 import Point, Vector
from .matrix import Matrix

if TYPE_CHECKING:
    from .intersections import Intersections
    from .objects import SceneObject


class Ray:
    """A ray with origin and direction.

    The parametric form is: P(t) = origin + t * direction.
    Negative t values lie behind the origin.
    """

    __slots__ = ('origin', 'direction')

    def __init__(self, origin: Point, direction: Vector):
        """Create a ray with given origin and direction.

        Args:
            origin: The starting point of the ray
            direction: The direction vector (not necessarily normalized)
        """
        self.origin = origin
        self.direction = direction

    def position(self, t: float) -> Point:
        """Get the point along the ray at parameter t."""
        return self.origin + self.direction * t

    def transform(self, matrix: Matrix) -> Ray:
        """Return a new ray with origin and direction mapped by ``matrix``."""
        return Ray(matrix @ self.origin, matrix @ self.direction)

    def intersect(self, obj: SceneObject) -> Intersections:
        """Intersect this world-space ray with a single object."""
        return obj.intersect(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ray):
            return NotImplemented
        return self.origin == other.origin and self.direction == other.direction

    __hash__ = None

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin}, direction={self.direction})"
