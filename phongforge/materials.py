"""
Phong surface materials.

A material combines a pattern (surface color) with the coefficients of the
Phong reflection model. Coefficients are conventionally within
0..1 (ambient, diffuse, specular) and 10..200 (shininess) but are not
clamped; negative values are rejected.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace

from .vec3 import Color, float_eq
from .patterns import Pattern, SolidPattern


@dataclass(frozen=True, eq=False)
class Material:
    """Surface appearance of an object.

    Attributes:
        pattern: Maps surface points to colors
        ambient: Light reflected from the environment
        diffuse: Light reflected from matte surfaces
        specular: Brightness of the specular highlight
        shininess: Size of the highlight (higher is smaller and tighter)
    """
    pattern: Pattern = field(default_factory=lambda: SolidPattern(Color.white()))
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0

    def __post_init__(self):
        for name in ('ambient', 'diffuse', 'specular', 'shininess'):
            if getattr(self, name) < 0:
                raise ValueError(f"Material {name} must be non-negative, got {getattr(self, name)}")

    @classmethod
    def from_color(cls, color: Color, **coefficients: float) -> Material:
        """Create a material with a solid color pattern."""
        return cls(pattern=SolidPattern(color), **coefficients)

    def with_pattern(self, pattern: Pattern) -> Material:
        return replace(self, pattern=pattern)

    def with_color(self, color: Color) -> Material:
        return replace(self, pattern=SolidPattern(color))

    def with_coefficients(self, **coefficients: float) -> Material:
        """Return a copy with some of ambient/diffuse/specular/shininess replaced."""
        return replace(self, **coefficients)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Material):
            return NotImplemented
        return (
            self.pattern == other.pattern
            and float_eq(self.ambient, other.ambient)
            and float_eq(self.diffuse, other.diffuse)
            and float_eq(self.specular, other.specular)
            and float_eq(self.shininess, other.shininess)
        )

    __hash__ = None
