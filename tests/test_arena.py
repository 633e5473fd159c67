"""
Tests for the static arena layout.
"""

import pytest

from tilt_maze.maze_core.config_loader import load_config
from tilt_maze.maze_core.arena import Arena, Goal, Obstacle, build_border_walls, default_arena
from tilt_maze.maze_core.geometry import Rect


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def arena(config):
    return Arena.from_config(config.arena)


class TestDefaultArena:
    """Test the packaged maze layout."""

    def test_bounds(self, arena):
        assert arena.bounds() == (800, 1200)

    def test_obstacle_order(self, arena):
        """Frame walls come first, then the interior walls."""
        obstacles = arena.obstacles()
        assert len(obstacles) == 6
        assert [o.kind for o in obstacles] == ["border"] * 4 + ["interior"] * 2

    def test_border_walls(self, arena):
        assert [w.as_tuple() for w in arena.border_walls()] == [
            (0, 0, 800, 20),
            (0, 1180, 800, 1200),
            (0, 0, 20, 1200),
            (780, 0, 800, 1200),
        ]

    def test_interior_walls(self, arena):
        assert [w.as_tuple() for w in arena.interior_walls()] == [
            (220, 20, 780, 700),
            (20, 900, 780, 1180),
        ]

    def test_goal(self, arena):
        goal = arena.goal()
        assert isinstance(goal, Goal)
        assert goal.as_tuple() == (740, 750, 780, 790)

    def test_default_arena_helper(self, arena):
        assert default_arena().obstacles() == arena.obstacles()

    def test_all_obstacles_inside(self, arena):
        width, height = arena.bounds()
        for obstacle in arena.obstacles():
            assert obstacle.within(width, height)


class TestArenaValidation:
    """Test construction-time checks."""

    def test_obstacle_outside_rejected(self):
        with pytest.raises(ValueError):
            Arena(800, 1200, [Rect(700, 0, 900, 100)], Rect(10, 10, 50, 50))

    def test_goal_outside_rejected(self):
        with pytest.raises(ValueError):
            Arena(800, 1200, [], Rect(700, 1150, 780, 1250))

    def test_non_positive_size_rejected(self):
        with pytest.raises(ValueError):
            Arena(0, 1200, [], Rect(10, 10, 50, 50))

    def test_no_frame(self):
        arena = Arena(800, 1200, [Rect(220, 20, 780, 700)], Rect(740, 750, 780, 790), border_thickness=0)
        assert arena.border_walls() == ()
        assert len(arena.obstacles()) == 1
        assert isinstance(arena.obstacles()[0], Obstacle)

    def test_build_border_walls_thickness(self):
        walls = build_border_walls(100, 200, 5)
        assert walls[0].as_tuple() == (0, 0, 100, 5)
        assert walls[3].as_tuple() == (95, 0, 100, 200)
        assert all(w.kind == "border" for w in walls)
