"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to the tilt maze.
One step feeds one angular-rate sample and advances one tick.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np

import gymnasium as gym
from gymnasium import spaces

from tilt_maze.maze_core.config_loader import MazeConfig, load_config
from tilt_maze.maze_core.game import GameSession
from tilt_maze.maze_core.render_solid import SolidRenderer
from tilt_maze.maze_core.state_snapshot import SessionSnapshot


class TiltMazeEnv(gym.Env):
    """
    Tilt maze as a Gymnasium environment.

    Action Space:
        Box(low=-max_rate, high=max_rate, shape=(3,), dtype=float32)
        Angular rates (rx, ry, rz) in rad/s, as a gyroscope would report them.

    Observation Space:
        Dict with ball position/velocity, goal rectangle, win flag and an
        optional RGB image.

    Reward:
        1.0 on the tick the ball reaches the goal, 0.0 otherwise.

    Episode end:
        terminated when won, truncated after episode.max_ticks ticks.
    """

    metadata = {
        "render_modes": ["rgb_array"],
        "render_fps": 60,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        render_mode: Optional[str] = None,
        image_obs: Optional[bool] = None,
        debug: bool = False,
    ):
        """
        Initialize tilt maze environment.

        Args:
            config_path: Path to maze_config.yaml. Uses default if None.
            render_mode: "rgb_array" for numpy frames, None for headless.
            image_obs: If True, include board_rgb in observations.
                Defaults to observation.image_enabled from the config.
            debug: If True, enables verbose debug output.
        """
        super().__init__()

        self._config = load_config(config_path)

        self.render_mode = render_mode
        self._debug = debug
        self._image_obs = self._config.observation.image_enabled if image_obs is None else image_obs
        self._img_width = self._config.observation.image_width
        self._img_height = self._config.observation.image_height

        self._session = GameSession(config=self._config, debug=debug)
        self._renderer: Optional[SolidRenderer] = None

        max_rate = self._config.episode.max_rate
        self.action_space = spaces.Box(
            low=-max_rate,
            high=max_rate,
            shape=(3,),
            dtype=np.float32
        )

        self.observation_space = self._build_observation_space()

        goal = self._session.arena.goal()
        self._goal_obs = np.array(goal.as_tuple(), dtype=np.float32)

        if self._debug:
            print(f"[DEBUG] TiltMazeEnv initialized")
            print(f"[DEBUG]   Arena: {self._session.arena}")
            print(f"[DEBUG]   Max ticks: {self._config.episode.max_ticks}")

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        arena = self._config.arena
        high = max(arena.width, arena.height)

        obs_dict = {
            "ball_pos": spaces.Box(
                low=np.array([0.0, 0.0], dtype=np.float32),
                high=np.array([arena.width, arena.height], dtype=np.float32),
                dtype=np.float32
            ),
            "ball_vel": spaces.Box(low=-np.inf, high=np.inf, shape=(2,), dtype=np.float32),
            "goal": spaces.Box(low=0, high=high, shape=(4,), dtype=np.float32),
            "has_won": spaces.Discrete(2),
        }

        if self._image_obs:
            obs_dict["board_rgb"] = spaces.Box(
                low=0,
                high=255,
                shape=(self._img_height, self._img_width, 3),
                dtype=np.uint8
            )

        return spaces.Dict(obs_dict)

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment.

        Args:
            seed: Random seed (the maze is deterministic; kept for API parity).
            options: Additional options (unused).

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        snapshot = self._session.reset()
        return self._snapshot_to_obs(snapshot), self._session.get_info()

    def step(
        self,
        action: np.ndarray
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one step.

        Args:
            action: (rx, ry, rz) angular rates.

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
        """
        action = np.asarray(action, dtype=np.float64).reshape(-1)
        rz = float(action[2]) if action.shape[0] > 2 else 0.0
        self._session.on_input_sample(float(action[0]), float(action[1]), rz)

        result = self._session.tick()
        snapshot = self._session.snapshot()

        reward = 1.0 if result.won_this_tick else 0.0
        terminated = snapshot.has_won
        truncated = (not terminated) and snapshot.tick_count >= self._config.episode.max_ticks

        info = self._session.get_info()
        info["moved"] = result.moved
        info["blocked"] = result.blocked_by is not None

        if self._debug:
            print(f"[DEBUG] Step: action=({action[0]:.3f}, {action[1]:.3f}), "
                  f"ball=({snapshot.ball_x:.1f}, {snapshot.ball_y:.1f}), moved={result.moved}")
            if terminated:
                print(f"[DEBUG] TERMINATED: goal reached at tick {snapshot.tick_count}")

        return self._snapshot_to_obs(snapshot), reward, terminated, truncated, info

    def _snapshot_to_obs(self, snapshot: SessionSnapshot) -> Dict[str, np.ndarray]:
        """Convert snapshot to observation dict."""
        obs = snapshot.to_obs_dict()
        obs["goal"] = self._goal_obs.copy()

        if self._image_obs:
            obs["board_rgb"] = self._render_to_array()

        return obs

    def _render_to_array(self) -> np.ndarray:
        """Render board to RGB array."""
        if self._renderer is None:
            self._renderer = SolidRenderer()

        return self._renderer.render(
            self._session.get_render_data(),
            self._img_width,
            self._img_height
        )

    def render(self) -> Optional[np.ndarray]:
        """
        Render the current state.

        Returns:
            RGB array if render_mode is "rgb_array", None otherwise.
        """
        if self.render_mode == "rgb_array":
            return self._render_to_array()
        return None

    def close(self) -> None:
        """Clean up resources."""
        if self._renderer is not None:
            self._renderer.close()
            self._renderer = None

    @property
    def session(self) -> GameSession:
        """Access to underlying session (for debugging/tools)."""
        return self._session

    @property
    def config(self) -> MazeConfig:
        """Maze configuration."""
        return self._config
