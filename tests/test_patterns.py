"""Tests for surface patterns."""

import pytest

from phongforge.vec3 import Point, Color
from phongforge.matrix import Matrix
from phongforge.objects import SceneObject
from phongforge.patterns import Pattern, SolidPattern, StripePattern
from phongforge.transformations import translation, scaling

WHITE = Color.white()
BLACK = Color.black()


class TestSolidPattern:
    """Test the constant-color pattern."""

    def test_same_everywhere(self):
        p = SolidPattern(Color(0.2, 0.4, 0.6))
        assert p.pattern_at(Point(10, -3, 7)) == Color(0.2, 0.4, 0.6)
        assert p.color_at(SceneObject.sphere(transform=scaling(2, 2, 2)), Point(1, 1, 1)) == Color(0.2, 0.4, 0.6)

    def test_equality(self):
        assert SolidPattern(WHITE) == SolidPattern(Color(1, 1, 1))
        assert SolidPattern(WHITE) != SolidPattern(BLACK)


class TestStripePattern:
    """Test alternating stripes."""

    def test_default_transform(self):
        assert StripePattern(WHITE, BLACK).transform == Matrix.identity()

    def test_constant_in_y_and_z(self):
        p = StripePattern(WHITE, BLACK)
        for point in (Point(0, 0, 0), Point(0, 1, 0), Point(0, 2, 0),
                      Point(0, 0, 1), Point(0, 0, 2)):
            assert p.pattern_at(point) == WHITE

    @pytest.mark.parametrize("x,expected", [
        (0, WHITE),
        (0.9, WHITE),
        (1, BLACK),
        (-0.1, BLACK),
        (-1, BLACK),
        (-1.1, WHITE),
    ])
    def test_alternates_in_x(self, x, expected):
        assert StripePattern(WHITE, BLACK).pattern_at(Point(x, 0, 0)) == expected

    def test_object_transform(self):
        obj = SceneObject.sphere(transform=scaling(2, 2, 2))
        assert StripePattern(WHITE, BLACK).color_at(obj, Point(1.5, 0, 0)) == WHITE

    def test_pattern_transform(self):
        p = StripePattern(WHITE, BLACK, scaling(2, 2, 2))
        assert p.color_at(SceneObject.sphere(), Point(1.5, 0, 0)) == WHITE

    def test_object_and_pattern_transform(self):
        obj = SceneObject.sphere(transform=scaling(2, 2, 2))
        p = StripePattern(WHITE, BLACK, translation(0.5, 0, 0))
        assert p.color_at(obj, Point(2.5, 0, 0)) == WHITE

    def test_without_object(self):
        p = StripePattern(WHITE, BLACK, scaling(0.5, 0.5, 0.5))
        assert p.color_at(None, Point(0.75, 0, 0)) == BLACK

    def test_equality(self):
        assert StripePattern(WHITE, BLACK) == StripePattern(WHITE, BLACK)
        assert StripePattern(WHITE, BLACK) != StripePattern(BLACK, WHITE)
        assert StripePattern(WHITE, BLACK) != SolidPattern(WHITE)


class TestPatternBase:
    """Test the abstract base."""

    def test_cannot_instantiate(self):
        with pytest.raises(TypeError):
            Pattern()

    def test_custom_pattern(self):
        class PositionPattern(Pattern):
            def pattern_at(self, pattern_point):
                return Color(pattern_point.x, pattern_point.y, pattern_point.z)

        obj = SceneObject.sphere(transform=scaling(2, 2, 2))
        p = PositionPattern(translation(0.5, 1, 1.5))
        assert p.color_at(obj, Point(2.5, 3, 3.5)) == Color(0.75, 0.5, 0.25)
