"""
Light sources for the ray tracer.

Only point lights are supported: they emit equally in all directions from
a single position, without falloff, and produce hard shadows.
"""

from __future__ import annotations
from dataclasses import dataclass

from .vec3 import Point, Color


@dataclass(frozen=True)
class PointLight:
    """A point light source.

    Attributes:
        position: Position of the light in world space
        intensity: Color and brightness of the light
    """
    position: Point
    intensity: Color

    __hash__ = None
