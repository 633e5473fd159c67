"""
Tests for the numpy renderer.
"""

import numpy as np
import pytest

from tilt_maze.maze_core.config_loader import load_config
from tilt_maze.maze_core.game import GameSession
from tilt_maze.maze_core.render_solid import SolidRenderer


def place(sim, x, y):
    sim.ball.x, sim.ball.y = x, y


@pytest.fixture
def session():
    return GameSession(config=load_config())


@pytest.fixture
def renderer():
    return SolidRenderer()


class TestSolidRenderer:
    """Test rendered frames at 1/4 scale (200x300 for 800x1200)."""

    def test_shape_and_dtype(self, renderer, session):
        img = renderer.render(session.get_render_data(), 200, 300)
        assert img.shape == (300, 200, 3)
        assert img.dtype == np.uint8

    def test_ball_drawn_at_position(self, renderer, session):
        img = renderer.render(session.get_render_data(), 200, 300)
        assert tuple(img[10, 30]) == (220, 40, 40)

    def test_goal_drawn(self, renderer, session):
        img = renderer.render(session.get_render_data(), 200, 300)
        # goal (740, 750, 780, 790) -> pixels x 185..195, y 187..197
        assert tuple(img[192, 188]) == (40, 180, 60)

    def test_walls_drawn(self, renderer, session):
        img = renderer.render(session.get_render_data(), 200, 300)
        assert tuple(img[100, 100]) == (128, 128, 128)
        assert tuple(img[250, 100]) == (128, 128, 128)
        assert tuple(img[200, 100]) == (235, 235, 235)

    def test_win_frame(self, renderer, session):
        place(session.simulator, 745, 780)
        session.tick()
        img = renderer.render(session.get_render_data(), 200, 300)
        assert tuple(img[0, 0]) == (40, 180, 60)
        assert tuple(img[299, 199]) == (40, 180, 60)
