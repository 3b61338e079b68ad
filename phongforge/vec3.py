"""
Geometric value types for the ray tracer.

Points and vectors are kept as distinct classes so the homogeneous
coordinate (w = 1 for points, w = 0 for vectors) is part of the type:
- Point - Point gives a Vector
- Point +/- Vector gives a Point
- only vectors can be normalized, dotted or crossed

Colors share the same storage but follow their own channel-wise algebra.
"""

from __future__ import annotations
import math
from typing import Union
import numpy as np

# Shared tolerance for every geometric comparison.
EPSILON = 1e-5


def float_eq(a: float, b: float) -> bool:
    """Return True if two scalars differ by less than EPSILON."""
    return abs(a - b) < EPSILON


class Vec3:
    """Three float components stored in a numpy array.

    Base class for Point, Vector and Color. It only provides storage,
    component access and tolerance-based equality; arithmetic lives on the
    subclasses so that illegal mixes are rejected.
    """

    __slots__ = ('_data',)

    # numpy scalars defer to our reflected operators
    __array_ufunc__ = None

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self._data = np.array([x, y, z], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: np.ndarray):
        """Create an instance from a numpy array of length 3."""
        v = cls.__new__(cls)
        v._data = np.asarray(arr, dtype=np.float64)
        return v

    @property
    def x(self) -> float:
        return float(self._data[0])

    @property
    def y(self) -> float:
        return float(self._data[1])

    @property
    def z(self) -> float:
        return float(self._data[2])

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def __iter__(self):
        return iter(self.to_tuple())

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return bool(np.all(np.abs(self._data - other._data) < EPSILON))

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.x:.5f}, {self.y:.5f}, {self.z:.5f})"

    def to_array(self) -> np.ndarray:
        """Return the underlying numpy array (copy)."""
        return self._data.copy()

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


class Point(Vec3):
    """A position in space (homogeneous w = 1)."""

    __slots__ = ()
    w = 1.0

    @classmethod
    def origin(cls) -> Point:
        return cls(0.0, 0.0, 0.0)

    def __add__(self, other: Vector) -> Point:
        if not isinstance(other, Vector):
            return NotImplemented
        return Point.from_array(self._data + other._data)

    def __sub__(self, other: Union[Point, Vector]) -> Union[Point, Vector]:
        if isinstance(other, Point):
            return Vector.from_array(self._data - other._data)
        if isinstance(other, Vector):
            return Point.from_array(self._data - other._data)
        return NotImplemented


class Vector(Vec3):
    """A direction in space (homogeneous w = 0)."""

    __slots__ = ()
    w = 0.0

    def __neg__(self) -> Vector:
        return Vector.from_array(-self._data)

    def __add__(self, other: Vector) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector.from_array(self._data + other._data)

    def __sub__(self, other: Vector) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector.from_array(self._data - other._data)

    def __mul__(self, scalar: float) -> Vector:
        if isinstance(scalar, Vec3):
            return NotImplemented
        return Vector.from_array(self._data * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector:
        if isinstance(scalar, Vec3):
            return NotImplemented
        return Vector.from_array(self._data / scalar)

    def magnitude(self) -> float:
        """Return the length of the vector."""
        return math.sqrt(self.dot(self))

    def normalize(self) -> Vector:
        """Return a unit vector in the same direction.

        Raises:
            ValueError: if the vector has zero length
        """
        length = self.magnitude()
        if length == 0.0:
            raise ValueError("Cannot normalize a zero-length vector")
        return Vector.from_array(self._data / length)

    def dot(self, other: Vector) -> float:
        """Compute dot product with another vector."""
        return float(np.dot(self._data, other._data))

    def cross(self, other: Vector) -> Vector:
        """Compute cross product with another vector."""
        return Vector.from_array(np.cross(self._data, other._data))

    def reflect(self, normal: Vector) -> Vector:
        """Reflect this vector around the given normal."""
        return self - normal * 2 * self.dot(normal)


class Color(Vec3):
    """An RGB color. Channels are not clamped during shading."""

    __slots__ = ()

    @classmethod
    def black(cls) -> Color:
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def white(cls) -> Color:
        return cls(1.0, 1.0, 1.0)

    @property
    def red(self) -> float:
        return self.x

    @property
    def green(self) -> float:
        return self.y

    @property
    def blue(self) -> float:
        return self.z

    def __add__(self, other: Color) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return Color.from_array(self._data + other._data)

    def __sub__(self, other: Color) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return Color.from_array(self._data - other._data)

    def __mul__(self, other: Union[Color, float]) -> Color:
        # Color * Color blends channel-wise (Hadamard product)
        if isinstance(other, Color):
            return Color.from_array(self._data * other._data)
        if isinstance(other, Vec3):
            return NotImplemented
        return Color.from_array(self._data * other)

    def __rmul__(self, other: float) -> Color:
        if isinstance(other, Vec3):
            return NotImplemented
        return Color.from_array(other * self._data)

    def scale(self, min_val: float, max_val: float) -> Color:
        """Clamp channels to [0, 1] and map them linearly into [min_val, max_val]."""
        clamped = np.clip(self._data, 0.0, 1.0)
        return Color.from_array(min_val + clamped * (max_val - min_val))
