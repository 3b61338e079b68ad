"""
The scene: a flat collection of lights and objects.

Every ray is tested against every object; there is no spatial index.
"""

from __future__ import annotations
from typing import Iterable

from .vec3 import EPSILON, Point, Color
from .ray import Ray
from .lights import PointLight
from .objects import SceneObject
from .materials import Material
from .lighting import lighting
from .intersections import Intersections, IntersectionState
from . import transformations


class World:
    """Lights and objects making up a scene. Read-only during a render."""

    __slots__ = ('lights', 'objects')

    def __init__(self, lights: Iterable[PointLight] = (), objects: Iterable[SceneObject] = ()):
        self.lights: tuple[PointLight, ...] = tuple(lights)
        self.objects: tuple[SceneObject, ...] = tuple(objects)

    @classmethod
    def default(cls) -> World:
        """Reference scene: one light and two concentric spheres."""
        light = PointLight(Point(-10, 10, -10), Color(1, 1, 1))
        outer = SceneObject.sphere(
            material=Material.from_color(Color(0.8, 1.0, 0.6), diffuse=0.7, specular=0.2)
        )
        inner = SceneObject.sphere(transform=transformations.scaling(0.5, 0.5, 0.5))
        return cls([light], [outer, inner])

    def __getstate__(self):
        return self.lights, self.objects

    def __setstate__(self, state):
        self.lights, self.objects = state

    def __repr__(self) -> str:
        return f"World(lights={len(self.lights)}, objects={len(self.objects)})"

    def intersect(self, ray: Ray) -> Intersections:
        """All intersections of ``ray`` with every object, sorted by t."""
        return Intersections.merge(*(obj.intersect(ray) for obj in self.objects))

    def shade_hit(self, state: IntersectionState) -> Color:
        """Sum the Phong contribution of every light at a precomputed hit."""
        color = Color.black()
        for light in self.lights:
            color = color + lighting(
                state.object.material,
                light,
                state.point,
                state.eye_v,
                state.normal_v,
                in_shadow=self.is_shadowed(light, state.over_point),
                obj=state.object,
            )
        return color

    def is_shadowed(self, light: PointLight, point: Point) -> bool:
        """Check whether an object lies between ``point`` and ``light``.

        Objects beyond the light do not cast a shadow on the point.
        """
        to_light = light.position - point
        distance = to_light.magnitude()
        if distance < EPSILON:
            return False
        shadow_ray = Ray(point, to_light.normalize())

        hit = self.intersect(shadow_ray).hit()
        return hit is not None and hit.t < distance

    def color_at(self, ray: Ray) -> Color:
        """Color seen along ``ray``: black on a miss, shaded hit otherwise."""
        hit = self.intersect(ray).hit()
        if hit is None:
            return Color.black()
        return self.shade_hit(IntersectionState.prepare(hit, ray))
