"""
Primitive surface kinds.

Shapes live in object space and own no transform: the enclosing
SceneObject maps rays and points between world and object space. Each
kind contributes two pure functions:

- normal_at(object_point) -> Vector
- intersect(obj, object_ray) -> Intersections

Adding a shape means adding an enum member and registering its pair in
``_NORMALS`` and ``_INTERSECTORS``.
"""

from __future__ import annotations
from enum import Enum
import math
from typing import TYPE_CHECKING

from .vec3 import EPSILON, Point, Vector
from .ray import Ray
from .intersections import Intersection, Intersections

if TYPE_CHECKING:
    from .objects import SceneObject


class Shape(Enum):
    """Closed set of primitive surface kinds."""
    SPHERE = 'sphere'
    PLANE = 'plane'

    def object_normal_at(self, object_point: Point) -> Vector:
        """Surface normal at a point given in object space."""
        return _NORMALS[self](object_point)

    def object_intersect_at(self, obj: SceneObject, object_ray: Ray) -> Intersections:
        """Intersections of a ray already transformed into object space."""
        return _INTERSECTORS[self](obj, object_ray)


def sphere_normal_at(object_point: Point) -> Vector:
    """Normal of the unit sphere centered at the origin."""
    return (object_point - Point.origin()).normalize()


def sphere_intersect(obj: SceneObject, ray: Ray) -> Intersections:
    """Test ray against the unit sphere using the quadratic formula.

    |O + tD - C|^2 = 1 expands to a*t^2 + b*t + c = 0 with
    a = D.D, b = 2 D.(O-C), c = (O-C).(O-C) - 1.
    Tangent rays yield the same t twice.
    """
    center_to_origin = ray.origin - Point.origin()
    a = ray.direction.dot(ray.direction)
    b = 2.0 * ray.direction.dot(center_to_origin)
    c = center_to_origin.dot(center_to_origin) - 1.0

    discriminant = b * b - 4.0 * a * c
    if discriminant < 0:
        return Intersections.empty()

    sqrtd = math.sqrt(discriminant)
    t1 = (-b - sqrtd) / (2.0 * a)
    t2 = (-b + sqrtd) / (2.0 * a)
    return Intersections.of(Intersection(t1, obj), Intersection(t2, obj))


def plane_normal_at(object_point: Point) -> Vector:
    """The xz plane faces +y everywhere."""
    return Vector(0.0, 1.0, 0.0)


def plane_intersect(obj: SceneObject, ray: Ray) -> Intersections:
    """Intersect the infinite xz plane.

    Rays parallel to the plane, including coplanar ones, never hit it: the
    plane is infinitely thin.
    """
    if abs(ray.direction.y) < EPSILON:
        return Intersections.empty()

    t = -ray.origin.y / ray.direction.y
    return Intersections.of(Intersection(t, obj))


_NORMALS = {
    Shape.SPHERE: sphere_normal_at,
    Shape.PLANE: plane_normal_at,
}

_INTERSECTORS = {
    Shape.SPHERE: sphere_intersect,
    Shape.PLANE: plane_intersect,
}
