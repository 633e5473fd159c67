"""
State Snapshot
==============

Read-only view of the session state for renderers and Gymnasium observations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from tilt_maze.maze_core.simulator import Simulator


@dataclass(frozen=True)
class SessionSnapshot:
    """Copy of the ball state taken between ticks."""
    ball_x: float
    ball_y: float
    has_won: bool
    ball_vx: float
    ball_vy: float
    radius: float
    tick_count: int

    @classmethod
    def from_simulator(cls, simulator: "Simulator") -> "SessionSnapshot":
        ball = simulator.ball
        return cls(
            ball_x=ball.x,
            ball_y=ball.y,
            has_won=simulator.has_won,
            ball_vx=ball.vx,
            ball_vy=ball.vy,
            radius=ball.radius,
            tick_count=simulator.tick_count
        )

    @property
    def ball_position(self):
        return (self.ball_x, self.ball_y)

    def as_dict(self) -> Dict[str, Any]:
        """Plain dict with the renderer-facing fields."""
        return {
            "ball_x": self.ball_x,
            "ball_y": self.ball_y,
            "has_won": self.has_won,
        }

    def to_obs_dict(self) -> Dict[str, np.ndarray]:
        """Convert to Gymnasium observation arrays (goal is added by the env)."""
        return {
            "ball_pos": np.array([self.ball_x, self.ball_y], dtype=np.float32),
            "ball_vel": np.array([self.ball_vx, self.ball_vy], dtype=np.float32),
            "has_won": np.int64(1 if self.has_won else 0),
        }
