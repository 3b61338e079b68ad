"""
Affine transforms as 4x4 matrices.

Each builder starts from the identity matrix and overwrites specific cells.
Transforms are composed in application order with ``>>`` (or ``chain``):

    scaling(2, 2, 2) >> translation(0, 1, 0)

scales first and translates second, i.e. evaluates to
``translation(0, 1, 0) @ scaling(2, 2, 2)``.
"""

from __future__ import annotations
import math
import numpy as np

from .matrix import Matrix
from .vec3 import Point, Vector


def identity() -> Matrix:
    return Matrix.identity(4)


def translation(x: float, y: float, z: float) -> Matrix:
    m = np.identity(4)
    m[0, 3] = x
    m[1, 3] = y
    m[2, 3] = z
    return Matrix(m)


def scaling(x: float, y: float, z: float) -> Matrix:
    m = np.identity(4)
    m[0, 0] = x
    m[1, 1] = y
    m[2, 2] = z
    return Matrix(m)


def rotation_x(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    m = np.identity(4)
    m[1, 1] = c
    m[1, 2] = -s
    m[2, 1] = s
    m[2, 2] = c
    return Matrix(m)


def rotation_y(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    m = np.identity(4)
    m[0, 0] = c
    m[0, 2] = s
    m[2, 0] = -s
    m[2, 2] = c
    return Matrix(m)


def rotation_z(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    m = np.identity(4)
    m[0, 0] = c
    m[0, 1] = -s
    m[1, 0] = s
    m[1, 1] = c
    return Matrix(m)


def shearing(xy: float, xz: float, yx: float, yz: float, zx: float, zy: float) -> Matrix:
    """Shear each axis in proportion to the other two.

    Args:
        xy: How much x moves in proportion to y (likewise for the others)
    """
    m = np.identity(4)
    m[0, 1] = xy
    m[0, 2] = xz
    m[1, 0] = yx
    m[1, 2] = yz
    m[2, 0] = zx
    m[2, 1] = zy
    return Matrix(m)


def chain(*transforms: Matrix) -> Matrix:
    """Compose transforms given in the order they are applied.

    ``chain(a, b, c)`` returns ``c @ b @ a``. No arguments gives the identity.
    """
    result = identity()
    for transform in transforms:
        result = result >> transform
    return result


def view_transform(from_: Point, to: Point, up: Vector) -> Matrix:
    """Orient the world as seen from an eye at ``from_`` looking at ``to``.

    Args:
        from_: Eye position
        to: Point the eye is looking at
        up: Rough up direction; it need not be normalized or perpendicular

    Returns:
        Matrix moving the world into the camera's frame
    """
    forward = (to - from_).normalize()
    left = forward.cross(up.normalize())
    true_up = left.cross(forward)

    orientation = Matrix([
        [left.x, left.y, left.z, 0.0],
        [true_up.x, true_up.y, true_up.z, 0.0],
        [-forward.x, -forward.y, -forward.z, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])
    return translation(-from_.x, -from_.y, -from_.z) >> orientation
