"""
Surface patterns.

A pattern maps a point to a color. Patterns carry their own transform so
they can be positioned independently of the object they decorate: a world
point is first mapped into object space (object transform inverse) and then
into pattern space (pattern transform inverse) before sampling.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
import math
from typing import Optional, TYPE_CHECKING

from .vec3 import Point, Color
from .matrix import Matrix

if TYPE_CHECKING:
    from .objects import SceneObject


class Pattern(ABC):
    """Abstract base class for patterns."""

    def __init__(self, transform: Optional[Matrix] = None):
        self.transform = transform if transform is not None else Matrix.identity()

    @abstractmethod
    def pattern_at(self, pattern_point: Point) -> Color:
        """Get the color at a point given in pattern space."""
        pass

    def color_at(self, obj: Optional[SceneObject], world_point: Point) -> Color:
        """Get the color of ``obj`` at a world-space point.

        Args:
            obj: Object the pattern is applied to (None means untransformed)
            world_point: Point on the object's surface in world space

        Returns:
            Color at this location
        """
        object_point = world_point
        if obj is not None:
            object_point = obj.transform.inverse() @ world_point
        pattern_point = self.transform.inverse() @ object_point
        return self.pattern_at(pattern_point)

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return vars(self) == vars(other)

    __hash__ = None


class SolidPattern(Pattern):
    """A single color everywhere."""

    def __init__(self, color: Color):
        super().__init__()
        self.color = color

    def pattern_at(self, pattern_point: Point) -> Color:
        return self.color

    def color_at(self, obj: Optional[SceneObject], world_point: Point) -> Color:
        # No need to leave world space for a constant color
        return self.color

    def __repr__(self) -> str:
        return f"SolidPattern({self.color})"


class StripePattern(Pattern):
    """Alternating stripes along x, constant in y and z.

    Stripes are one unit wide: floor(x) even gives ``color_a``, odd gives
    ``color_b``.
    """

    def __init__(self, color_a: Color, color_b: Color, transform: Optional[Matrix] = None):
        super().__init__(transform)
        self.color_a = color_a
        self.color_b = color_b

    def pattern_at(self, pattern_point: Point) -> Color:
        if math.floor(pattern_point.x) % 2 == 0:
            return self.color_a
        return self.color_b

    def __repr__(self) -> str:
        return f"StripePattern({self.color_a}, {self.color_b})"
