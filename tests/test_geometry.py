"""
Tests for rectangle primitives and the circle/rectangle test.
"""

import math

import pytest

from tilt_maze.maze_core.geometry import Rect, clamp, intersects


@pytest.fixture
def rect():
    return Rect(100, 100, 200, 150)


class TestRect:
    """Test Rect construction and queries."""

    def test_dimensions(self, rect):
        assert rect.width == 100
        assert rect.height == 50
        assert rect.as_tuple() == (100, 100, 200, 150)

    def test_contains_is_closed(self, rect):
        """Edges and corners count as inside."""
        assert rect.contains(100, 100)
        assert rect.contains(200, 150)
        assert rect.contains(150, 125)
        assert not rect.contains(99.999, 125)
        assert not rect.contains(150, 150.001)

    def test_closest_point(self, rect):
        assert rect.closest_point(50, 125) == (100, 125)
        assert rect.closest_point(250, 300) == (200, 150)
        assert rect.closest_point(150, 120) == (150, 120)

    @pytest.mark.parametrize("bounds", [
        (10, 0, 10, 5),
        (20, 0, 10, 5),
        (0, 5, 10, 5),
        (0, 0, math.nan, 5),
        (0, 0, 10, math.inf),
    ])
    def test_invalid_rect_rejected(self, bounds):
        with pytest.raises(ValueError):
            Rect(*bounds)

    def test_immutable(self, rect):
        with pytest.raises(AttributeError):
            rect.left = 0

    def test_within(self, rect):
        assert rect.within(800, 1200)
        assert not rect.within(150, 1200)


class TestIntersects:
    """Test circle vs rectangle overlap."""

    def test_center_inside(self, rect):
        assert intersects(150, 125, 5, rect)

    def test_far_away(self, rect):
        assert not intersects(500, 500, 30, rect)

    def test_tangent_is_not_collision(self, rect):
        """Distance exactly equal to the radius does not count."""
        assert not intersects(70, 125, 30, rect)
        assert not intersects(150, 180, 30, rect)

    def test_just_inside_tangent(self, rect):
        assert intersects(70.5, 125, 30, rect)

    def test_corner_distance(self):
        """Near a corner the Euclidean distance is used, not per-axis."""
        square = Rect(0, 0, 10, 10)
        # (13, 14) is 5 away from the corner (10, 10)
        assert not intersects(13, 14, 5, square)
        assert intersects(13, 14, 5.01, square)
        # Per-axis gaps are 3 and 4, both under 4.5, yet no overlap
        assert not intersects(13, 14, 4.5, square)


def test_clamp():
    assert clamp(5, 0, 10) == 5
    assert clamp(-1, 0, 10) == 0
    assert clamp(11, 0, 10) == 10
