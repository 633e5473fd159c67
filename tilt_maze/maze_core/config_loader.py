"""
Configuration Loader
====================

Loads and validates maze_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Optional

import yaml


COLLISION_MODES = ("freeze", "slide")


@dataclass(frozen=True)
class ArenaConfig:
    """Play field geometry."""
    width: float
    height: float
    border_thickness: float
    obstacles: Tuple[Tuple[float, float, float, float], ...]  # Interior walls only
    goal: Tuple[float, float, float, float]


@dataclass(frozen=True)
class BallConfig:
    """Ball size and start position."""
    radius: float
    start_x: float
    start_y: float

    @property
    def start(self) -> Tuple[float, float]:
        return (self.start_x, self.start_y)


@dataclass(frozen=True)
class InputConfig:
    """Sensor-to-velocity mapping knobs."""
    dead_zone: float
    sensitivity: float


@dataclass(frozen=True)
class SimulationConfig:
    """Per-tick simulation parameters."""
    tick_hz: float
    collision_mode: str
    max_speed: Optional[float]

    @property
    def dt(self) -> float:
        """Wall-clock seconds between ticks for a driver running at tick_hz."""
        return 1.0 / self.tick_hz


@dataclass(frozen=True)
class EpisodeConfig:
    """Gymnasium episode limits."""
    max_ticks: int
    max_rate: float


@dataclass(frozen=True)
class ObservationConfig:
    """Observation image parameters."""
    image_enabled: bool
    image_width: int
    image_height: int


@dataclass(frozen=True)
class MazeConfig:
    """
    Complete maze configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    arena: ArenaConfig
    ball: BallConfig
    input: InputConfig
    simulation: SimulationConfig
    episode: EpisodeConfig
    observation: ObservationConfig


def _parse_rect(rect_data: List, what: str) -> Tuple[float, float, float, float]:
    """Parse a [left, top, right, bottom] list from YAML."""
    if len(rect_data) != 4:
        raise ValueError(f"{what} must have 4 values [left, top, right, bottom], got {rect_data}")
    return (float(rect_data[0]), float(rect_data[1]), float(rect_data[2]), float(rect_data[3]))


def _validate_config(config: MazeConfig) -> None:
    """Validate configuration consistency."""
    arena = config.arena
    if arena.width <= 0 or arena.height <= 0:
        raise ValueError(f"Arena size must be positive, got {arena.width}x{arena.height}")

    if arena.border_thickness < 0:
        raise ValueError(f"border_thickness must be >= 0, got {arena.border_thickness}")

    # Ball must fit inside the containment box
    radius = config.ball.radius
    if radius <= 0:
        raise ValueError(f"Ball radius must be positive, got {radius}")
    if 2 * radius > min(arena.width, arena.height):
        raise ValueError(f"Ball radius {radius} does not fit in a {arena.width}x{arena.height} arena")

    if not (radius <= config.ball.start_x <= arena.width - radius):
        raise ValueError(f"start_x ({config.ball.start_x}) outside [{radius}, {arena.width - radius}]")
    if not (radius <= config.ball.start_y <= arena.height - radius):
        raise ValueError(f"start_y ({config.ball.start_y}) outside [{radius}, {arena.height - radius}]")

    if config.input.dead_zone < 0:
        raise ValueError(f"dead_zone must be >= 0, got {config.input.dead_zone}")

    sim = config.simulation
    if sim.collision_mode not in COLLISION_MODES:
        raise ValueError(f"collision_mode must be one of {COLLISION_MODES}, got '{sim.collision_mode}'")
    if sim.tick_hz <= 0:
        raise ValueError(f"tick_hz must be positive, got {sim.tick_hz}")
    if sim.max_speed is not None and not (sim.max_speed > 0 and math.isfinite(sim.max_speed)):
        raise ValueError(f"max_speed must be a positive number or null, got {sim.max_speed}")

    if config.episode.max_ticks <= 0:
        raise ValueError(f"max_ticks must be positive, got {config.episode.max_ticks}")


def load_config(config_path: Optional[str] = None) -> MazeConfig:
    """
    Load and validate maze configuration from YAML.

    Rectangle geometry (ordering, arena containment) is validated when the
    Arena is built from this config.

    Args:
        config_path: Path to maze_config.yaml. If None, uses default location.

    Returns:
        Validated MazeConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "maze_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    arena_data = raw["arena"]
    arena = ArenaConfig(
        width=float(arena_data["width"]),
        height=float(arena_data["height"]),
        border_thickness=float(arena_data.get("border_thickness", 20)),
        obstacles=tuple(
            _parse_rect(o, "Obstacle") for o in arena_data.get("obstacles", [])
        ),
        goal=_parse_rect(arena_data["goal"], "Goal")
    )

    ball_data = raw["ball"]
    ball = BallConfig(
        radius=float(ball_data["radius"]),
        start_x=float(ball_data["start_x"]),
        start_y=float(ball_data["start_y"])
    )

    input_data = raw.get("input", {})
    input_cfg = InputConfig(
        dead_zone=float(input_data.get("dead_zone", 0.05)),
        sensitivity=float(input_data.get("sensitivity", 10.0))
    )

    sim_data = raw.get("simulation", {})
    max_speed = sim_data.get("max_speed")
    simulation = SimulationConfig(
        tick_hz=float(sim_data.get("tick_hz", 60)),
        collision_mode=str(sim_data.get("collision_mode", "freeze")),
        max_speed=None if max_speed is None else float(max_speed)
    )

    episode_data = raw.get("episode", {})
    episode = EpisodeConfig(
        max_ticks=int(episode_data.get("max_ticks", 3600)),
        max_rate=float(episode_data.get("max_rate", 5.0))
    )

    obs_data = raw.get("observation", {})
    observation = ObservationConfig(
        image_enabled=bool(obs_data.get("image_enabled", False)),
        image_width=int(obs_data.get("image_width", 200)),
        image_height=int(obs_data.get("image_height", 300))
    )

    config = MazeConfig(
        arena=arena,
        ball=ball,
        input=input_cfg,
        simulation=simulation,
        episode=episode,
        observation=observation
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[MazeConfig] = None


def get_config() -> MazeConfig:
    """Get the cached maze configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> MazeConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
