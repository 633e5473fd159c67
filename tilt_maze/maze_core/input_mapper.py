"""
Input Mapper
============

Converts raw 3-axis angular-rate samples into a 2D velocity command.
"""

from __future__ import annotations

import math
from typing import NamedTuple, Optional, Tuple

from tilt_maze.maze_core.config_loader import InputConfig, get_config


DEFAULT_DEAD_ZONE = 0.05
DEFAULT_SENSITIVITY = 10.0


class InputSample(NamedTuple):
    """Raw angular rates (rad/s) around the device x, y and z axes."""
    rx: float
    ry: float
    rz: float = 0.0


def _axis_velocity(value: float, dead_zone: float, sensitivity: float) -> float:
    if not math.isfinite(value):
        return 0.0
    if abs(value) > dead_zone:
        return value * sensitivity
    return 0.0


def map_sample(
    sample: InputSample,
    dead_zone: float = DEFAULT_DEAD_ZONE,
    sensitivity: float = DEFAULT_SENSITIVITY
) -> Tuple[float, float]:
    """
    Map one sample to (vx, vy).

    Rotation about y drives horizontal motion (sign inverted so tilting
    right rolls the ball right); rotation about x drives vertical motion.
    rz is ignored. Axes at or under the dead zone, or non-finite, read as 0.
    """
    horizontal = -sample.ry
    vertical = sample.rx
    return (
        _axis_velocity(horizontal, dead_zone, sensitivity),
        _axis_velocity(vertical, dead_zone, sensitivity),
    )


class InputMapper:
    """Stateless sample-to-velocity transform with configurable knobs."""

    def __init__(
        self,
        dead_zone: float = DEFAULT_DEAD_ZONE,
        sensitivity: float = DEFAULT_SENSITIVITY
    ):
        if dead_zone < 0:
            raise ValueError(f"dead_zone must be >= 0, got {dead_zone}")
        self._dead_zone = float(dead_zone)
        self._sensitivity = float(sensitivity)

    @classmethod
    def from_config(cls, config: Optional[InputConfig] = None) -> "InputMapper":
        if config is None:
            config = get_config().input
        return cls(dead_zone=config.dead_zone, sensitivity=config.sensitivity)

    @property
    def dead_zone(self) -> float:
        return self._dead_zone

    @property
    def sensitivity(self) -> float:
        return self._sensitivity

    def map(self, sample: InputSample) -> Tuple[float, float]:
        return map_sample(sample, self._dead_zone, self._sensitivity)
