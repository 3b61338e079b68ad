"""
Scene objects.

A SceneObject pairs a shape kind with a world transform and a material. All
intersection and normal math happens in object space: rays and points are
mapped in with the inverse transform, and normals are mapped back with the
transpose of the inverse so that non-uniform scaling does not skew them.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Optional

from .vec3 import Point, Vector
from .matrix import Matrix
from .ray import Ray
from .shapes import Shape
from .materials import Material
from .intersections import Intersections


@dataclass(frozen=True)
class SceneObject:
    """A shape placed in the world.

    Attributes:
        shape: Which primitive this object is
        transform: Object-to-world transform; must be invertible
        material: Surface appearance
    """
    shape: Shape = Shape.SPHERE
    transform: Matrix = field(default_factory=Matrix.identity)
    material: Material = field(default_factory=Material)

    __hash__ = None

    @classmethod
    def sphere(cls, transform: Optional[Matrix] = None, material: Optional[Material] = None) -> SceneObject:
        return cls._build(Shape.SPHERE, transform, material)

    @classmethod
    def plane(cls, transform: Optional[Matrix] = None, material: Optional[Material] = None) -> SceneObject:
        return cls._build(Shape.PLANE, transform, material)

    @classmethod
    def _build(cls, shape: Shape, transform: Optional[Matrix], material: Optional[Material]) -> SceneObject:
        return cls(
            shape=shape,
            transform=transform if transform is not None else Matrix.identity(),
            material=material if material is not None else Material(),
        )

    def with_transform(self, transform: Matrix) -> SceneObject:
        """Return a copy with ``transform`` applied after the current one."""
        return replace(self, transform=self.transform >> transform)

    def with_material(self, material: Material) -> SceneObject:
        return replace(self, material=material)

    def intersect(self, ray: Ray) -> Intersections:
        """Intersect a world-space ray with this object."""
        object_ray = ray.transform(self.transform.inverse())
        return self.shape.object_intersect_at(self, object_ray)

    def normal_at(self, world_point: Point) -> Vector:
        """Unit surface normal at a world-space point on this object."""
        inverse = self.transform.inverse()
        object_point = inverse @ world_point
        object_normal = self.shape.object_normal_at(object_point)
        # the w produced by the transposed inverse is dropped here
        world_normal = inverse.transpose() @ object_normal
        return world_normal.normalize()
