"""
Tests for Gymnasium environment API.
"""

from pathlib import Path

import numpy as np
import pytest
import yaml

from tilt_maze.maze_core import config_loader
from tilt_maze.maze_core.env_gym import TiltMazeEnv


DEFAULT_CONFIG_PATH = Path(config_loader.__file__).parent.parent / "maze_config.yaml"


@pytest.fixture
def env():
    env = TiltMazeEnv()
    yield env
    env.close()


@pytest.fixture
def short_config(tmp_path):
    with open(DEFAULT_CONFIG_PATH, "r") as f:
        raw = yaml.safe_load(f)
    raw["episode"]["max_ticks"] = 5
    path = tmp_path / "maze_config.yaml"
    with open(path, "w") as f:
        yaml.safe_dump(raw, f)
    return str(path)


DOWN = np.array([1.0, 0.0, 0.0], dtype=np.float32)
RIGHT = np.array([0.0, -1.0, 0.0], dtype=np.float32)


class TestTiltMazeEnv:
    """Test single environment API."""

    def test_reset_returns_obs_and_info(self, env):
        result = env.reset(seed=42)

        assert isinstance(result, tuple)
        assert len(result) == 2

        obs, info = result
        assert isinstance(obs, dict)
        assert isinstance(info, dict)
        assert info["tick_count"] == 0

    def test_observation_structure(self, env):
        obs, _ = env.reset()

        assert obs["ball_pos"].shape == (2,)
        assert obs["ball_pos"].dtype == np.float32
        assert obs["ball_vel"].shape == (2,)
        assert obs["goal"].shape == (4,)
        assert int(obs["has_won"]) == 0
        np.testing.assert_allclose(obs["ball_pos"], [120, 40])
        np.testing.assert_allclose(obs["goal"], [740, 750, 780, 790])
        assert "board_rgb" not in obs

    def test_observation_in_space(self, env):
        obs, _ = env.reset()
        assert env.observation_space.contains(obs)

    def test_action_space(self, env):
        assert env.action_space.shape == (3,)
        assert env.action_space.dtype == np.float32

    def test_step_returns_five_values(self, env):
        env.reset()
        result = env.step(DOWN)

        assert len(result) == 5
        obs, reward, terminated, truncated, info = result
        assert isinstance(obs, dict)
        assert reward == 0.0
        assert terminated is False
        assert truncated is False
        assert info["moved"] is True
        np.testing.assert_allclose(obs["ball_pos"], [120, 50])

    def test_blocked_step_reported(self, env):
        env.reset()
        _, _, _, _, info = env.step(RIGHT)
        assert info["blocked"] is True
        assert info["moved"] is False

    def test_reaching_goal(self, env):
        env.reset()
        for _ in range(74):
            env.step(DOWN)

        rewards = []
        terminated = False
        for _ in range(62):
            obs, reward, terminated, truncated, info = env.step(RIGHT)
            rewards.append(reward)

        assert terminated
        assert rewards[-1] == 1.0
        assert sum(rewards) == 1.0
        assert int(obs["has_won"]) == 1

    def test_truncation(self, short_config):
        env = TiltMazeEnv(config_path=short_config)
        env.reset()
        truncated = False
        for i in range(5):
            _, _, terminated, truncated, _ = env.step(np.zeros(3, dtype=np.float32))
            assert not terminated
            assert truncated == (i == 4)
        env.close()

    def test_image_observation(self):
        env = TiltMazeEnv(image_obs=True)
        obs, _ = env.reset()
        cfg = env.config.observation
        assert obs["board_rgb"].shape == (cfg.image_height, cfg.image_width, 3)
        assert obs["board_rgb"].dtype == np.uint8
        env.close()

    def test_render_rgb_array(self):
        env = TiltMazeEnv(render_mode="rgb_array")
        env.reset()
        frame = env.render()
        assert frame.shape == (env.config.observation.image_height, env.config.observation.image_width, 3)
        env.close()

    def test_render_headless_returns_none(self, env):
        env.reset()
        assert env.render() is None
