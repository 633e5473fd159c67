"""
Maze Core - The tilt maze simulation.

This module provides the per-tick ball simulation, the session the platform
loop drives, and the supporting pieces (config, arena, input mapping).

Main exports:
- GameSession: on_input_sample() / tick() / reset() / snapshot()
- Simulator: Ball state, collisions and win detection
- Arena: Static walls and goal
- InputMapper: Angular-rate sample to velocity
- TiltMazeEnv: Gymnasium environment wrapper
- MazeConfig: Configuration loaded from maze_config.yaml
"""

from tilt_maze.maze_core.config_loader import MazeConfig, load_config
from tilt_maze.maze_core.geometry import Rect, intersects
from tilt_maze.maze_core.arena import Arena, Obstacle, Goal, default_arena
from tilt_maze.maze_core.input_mapper import InputMapper, InputSample, map_sample
from tilt_maze.maze_core.simulator import Simulator, SimState, BallState, TickResult
from tilt_maze.maze_core.state_snapshot import SessionSnapshot
from tilt_maze.maze_core.game import GameSession
from tilt_maze.maze_core.env_gym import TiltMazeEnv
from tilt_maze.maze_core.replay_recorder import (
    SessionRecorder,
    load_replay,
    replay_session,
    generate_replay_filename,
)

__all__ = [
    "MazeConfig",
    "load_config",
    "Rect",
    "intersects",
    "Arena",
    "Obstacle",
    "Goal",
    "default_arena",
    "InputMapper",
    "InputSample",
    "map_sample",
    "Simulator",
    "SimState",
    "BallState",
    "TickResult",
    "SessionSnapshot",
    "GameSession",
    "TiltMazeEnv",
    "SessionRecorder",
    "load_replay",
    "replay_session",
    "generate_replay_filename",
]
