"""
Phong reflection model.

See https://en.wikipedia.org/wiki/Phong_reflection_model
"""

from __future__ import annotations
from typing import Optional, TYPE_CHECKING

from .vec3 import EPSILON, Point, Vector, Color
from .materials import Material
from .lights import PointLight

if TYPE_CHECKING:
    from .objects import SceneObject


def lighting(
    material: Material,
    light: PointLight,
    position: Point,
    eye_v: Vector,
    normal_v: Vector,
    in_shadow: bool = False,
    obj: Optional[SceneObject] = None,
) -> Color:
    """Shade a surface point lit by a single light.

    Args:
        material: Surface material
        light: The light source
        position: Point being shaded, in world space
        eye_v: Unit vector from the point towards the eye
        normal_v: Unit surface normal at the point
        in_shadow: If True only the ambient term is returned
        obj: Object owning the material; positions the material's pattern

    Returns:
        Sum of the ambient, diffuse and specular contributions (unclamped)
    """
    # combine the surface color with the light's color/intensity
    effective_color = material.pattern.color_at(obj, position) * light.intensity
    ambient = effective_color * material.ambient

    if in_shadow:
        return ambient

    to_light = light.position - position
    # a light sitting on the point has no direction
    if to_light.magnitude() < EPSILON:
        return ambient
    light_v = to_light.normalize()

    # cosine of the angle between light and normal; negative means the
    # light is on the other side of the surface
    light_dot_normal = light_v.dot(normal_v)
    if light_dot_normal < 0:
        return ambient

    diffuse = effective_color * material.diffuse * light_dot_normal

    # cosine of the angle between reflection and eye; non-positive means
    # the light reflects away from the eye
    reflect_v = (-light_v).reflect(normal_v)
    reflect_dot_eye = reflect_v.dot(eye_v)
    if reflect_dot_eye <= 0:
        return ambient + diffuse

    factor = reflect_dot_eye ** material.shininess
    specular = light.intensity * material.specular * factor
    return ambient + diffuse + specular
