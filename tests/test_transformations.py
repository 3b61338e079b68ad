"""Tests for transform builders and the view transform."""

import math

import pytest

from phongforge.vec3 import Point, Vector
from phongforge.matrix import Matrix
from phongforge.transformations import (
    identity, translation, scaling, rotation_x, rotation_y, rotation_z,
    shearing, chain, view_transform
)

HALF_SQRT2 = math.sqrt(2) / 2


class TestTranslation:
    """Test translation matrices."""

    def test_moves_point(self):
        assert translation(5, -3, 2) @ Point(-3, 4, 5) == Point(2, 1, 7)

    def test_inverse_moves_back(self):
        assert translation(5, -3, 2).inverse() @ Point(-3, 4, 5) == Point(-8, 7, 3)

    def test_does_not_affect_vectors(self):
        v = Vector(-3, 4, 5)
        assert translation(5, -3, 2) @ v == v


class TestScaling:
    """Test scaling matrices."""

    def test_scales_point_and_vector(self):
        t = scaling(2, 3, 4)
        assert t @ Point(-4, 6, 8) == Point(-8, 18, 32)
        assert t @ Vector(-4, 6, 8) == Vector(-8, 18, 32)

    def test_inverse_shrinks(self):
        assert scaling(2, 3, 4).inverse() @ Vector(-4, 6, 8) == Vector(-2, 2, 2)

    def test_reflection(self):
        assert scaling(-1, 1, 1) @ Point(2, 3, 4) == Point(-2, 3, 4)


class TestRotation:
    """Test rotations around each axis."""

    def test_rotation_x(self):
        p = Point(0, 1, 0)
        assert rotation_x(math.pi / 4) @ p == Point(0, HALF_SQRT2, HALF_SQRT2)
        assert rotation_x(math.pi / 2) @ p == Point(0, 0, 1)

    def test_rotation_x_inverse(self):
        assert rotation_x(math.pi / 4).inverse() @ Point(0, 1, 0) == Point(0, HALF_SQRT2, -HALF_SQRT2)

    def test_rotation_y(self):
        p = Point(0, 0, 1)
        assert rotation_y(math.pi / 4) @ p == Point(HALF_SQRT2, 0, HALF_SQRT2)
        assert rotation_y(math.pi / 2) @ p == Point(1, 0, 0)

    def test_rotation_z(self):
        p = Point(0, 1, 0)
        assert rotation_z(math.pi / 4) @ p == Point(-HALF_SQRT2, HALF_SQRT2, 0)
        assert rotation_z(math.pi / 2) @ p == Point(-1, 0, 0)


class TestShearing:
    """Test each shearing factor in isolation."""

    @pytest.mark.parametrize("factors,expected", [
        ((1, 0, 0, 0, 0, 0), Point(5, 3, 4)),
        ((0, 1, 0, 0, 0, 0), Point(6, 3, 4)),
        ((0, 0, 1, 0, 0, 0), Point(2, 5, 4)),
        ((0, 0, 0, 1, 0, 0), Point(2, 7, 4)),
        ((0, 0, 0, 0, 1, 0), Point(2, 3, 6)),
        ((0, 0, 0, 0, 0, 1), Point(2, 3, 7)),
    ])
    def test_shearing(self, factors, expected):
        assert shearing(*factors) @ Point(2, 3, 4) == expected


class TestChaining:
    """Test composing transforms in application order."""

    def test_sequence_matches_chain(self):
        p = Point(1, 0, 1)
        a = rotation_x(math.pi / 2)
        b = scaling(5, 5, 5)
        c = translation(10, 5, 7)

        p2 = a @ p
        assert p2 == Point(1, -1, 0)
        p3 = b @ p2
        assert p3 == Point(5, -5, 0)
        p4 = c @ p3
        assert p4 == Point(15, 0, 7)

        assert (a >> b >> c) @ p == Point(15, 0, 7)
        assert chain(a, b, c) @ p == Point(15, 0, 7)
        assert (c @ b @ a) @ p == Point(15, 0, 7)

    def test_empty_chain_is_identity(self):
        assert chain() == identity()
        assert identity() == Matrix.identity()


class TestViewTransform:
    """Test orienting the world relative to an eye."""

    def test_default_orientation(self):
        t = view_transform(Point(0, 0, 0), Point(0, 0, -1), Vector(0, 1, 0))
        assert t == identity()

    def test_looking_in_positive_z(self):
        t = view_transform(Point(0, 0, 0), Point(0, 0, 1), Vector(0, 1, 0))
        assert t == scaling(-1, 1, -1)

    def test_moves_the_world(self):
        t = view_transform(Point(0, 0, 8), Point(0, 0, 0), Vector(0, 1, 0))
        assert t == translation(0, 0, -8)

    def test_arbitrary(self):
        t = view_transform(Point(1, 3, 2), Point(4, -2, 8), Vector(1, 1, 0))
        expected = Matrix([
            [-0.50709, 0.50709, 0.67612, -2.36643],
            [0.76772, 0.60609, 0.12122, -2.82843],
            [-0.35857, 0.59761, -0.71714, 0.00000],
            [0.00000, 0.00000, 0.00000, 1.00000],
        ])
        assert t == expected
