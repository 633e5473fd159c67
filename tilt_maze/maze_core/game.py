"""
Game Session
============

Orchestrates input mapping and simulation, and exposes the entry points the
platform loop calls: on_input_sample(), tick(), reset() and snapshot().
"""

from __future__ import annotations

import threading
from typing import Any, Dict, Optional, Tuple

from tilt_maze.maze_core.arena import Arena
from tilt_maze.maze_core.config_loader import MazeConfig, get_config
from tilt_maze.maze_core.input_mapper import InputMapper, InputSample
from tilt_maze.maze_core.simulator import Simulator, TickResult
from tilt_maze.maze_core.state_snapshot import SessionSnapshot


class GameSession:
    """
    Main game session.

    Holds:
    - The static arena
    - An input mapper (sample -> command velocity)
    - The simulator (ball state, collisions, win flag)

    The session never schedules itself: the caller delivers samples whenever
    they arrive and calls tick() at its own fixed cadence. The command velocity
    is the only value shared with a sensor thread and is guarded by a lock.
    """

    def __init__(
        self,
        config: Optional[MazeConfig] = None,
        arena: Optional[Arena] = None,
        debug: bool = False
    ):
        """
        Initialize session.

        Args:
            config: Maze configuration. Uses default if None.
            arena: Play field. Built from config if None.
            debug: If True, print state transitions.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._debug = debug
        self._mapper = InputMapper.from_config(config.input)
        self._simulator = Simulator(arena=arena, config=config)

        self._velocity_lock = threading.Lock()
        self._command_velocity: Tuple[float, float] = (0.0, 0.0)

    @property
    def config(self) -> MazeConfig:
        return self._config

    @property
    def arena(self) -> Arena:
        """Static layout, queried once by the renderer."""
        return self._simulator.arena

    @property
    def simulator(self) -> Simulator:
        return self._simulator

    @property
    def input_mapper(self) -> InputMapper:
        return self._mapper

    @property
    def command_velocity(self) -> Tuple[float, float]:
        with self._velocity_lock:
            return self._command_velocity

    @property
    def has_won(self) -> bool:
        return self._simulator.has_won

    @property
    def tick_count(self) -> int:
        return self._simulator.tick_count

    def on_input_sample(self, rx: float, ry: float, rz: float = 0.0) -> Tuple[float, float]:
        """
        Deliver a raw orientation-rate reading.

        The mapped velocity replaces the previous command; only the last
        sample before a tick matters.

        Returns:
            The new command velocity.
        """
        return self.feed_sample(InputSample(rx, ry, rz))

    def feed_sample(self, sample: InputSample) -> Tuple[float, float]:
        """Same as on_input_sample() for a prebuilt sample."""
        velocity = self._mapper.map(sample)
        with self._velocity_lock:
            self._command_velocity = velocity
        return velocity

    def tick(self) -> TickResult:
        """Advance the simulation one step with the current command velocity."""
        result = self._simulator.tick(self.command_velocity)

        if self._debug and result.won_this_tick:
            print(f"[DEBUG] WON at tick {self._simulator.tick_count}: "
                  f"ball=({result.x:.1f}, {result.y:.1f})")

        return result

    def snapshot(self) -> SessionSnapshot:
        """Current state for rendering. No side effects."""
        return SessionSnapshot.from_simulator(self._simulator)

    def reset(self) -> SessionSnapshot:
        """Restart from the start position and clear the command velocity."""
        self._simulator.reset()
        with self._velocity_lock:
            self._command_velocity = (0.0, 0.0)

        if self._debug:
            print(f"[DEBUG] Session reset: ball=({self._simulator.ball.x:.1f}, "
                  f"{self._simulator.ball.y:.1f})")

        return self.snapshot()

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for Gymnasium."""
        ball = self._simulator.ball
        return {
            "ball_x": ball.x,
            "ball_y": ball.y,
            "has_won": self._simulator.has_won,
            "tick_count": self._simulator.tick_count,
            "command_velocity": self.command_velocity,
        }

    def get_render_data(self) -> Dict[str, Any]:
        """
        Get data needed for rendering.

        Returns:
            Dict with arena layout, ball and win flag.
        """
        arena = self._simulator.arena
        ball = self._simulator.ball
        return {
            "board_width": arena.width,
            "board_height": arena.height,
            "obstacles": [o.as_tuple() for o in arena.obstacles()],
            "goal": arena.goal().as_tuple(),
            "ball_x": ball.x,
            "ball_y": ball.y,
            "ball_radius": ball.radius,
            "has_won": self._simulator.has_won,
            "tick_count": self._simulator.tick_count,
        }
