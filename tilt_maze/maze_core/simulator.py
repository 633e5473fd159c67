"""
Simulator
=========

Owns the ball state and advances it one fixed step at a time against the
arena walls, then evaluates the win condition.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from tilt_maze.maze_core.arena import Arena, Obstacle
from tilt_maze.maze_core.config_loader import MazeConfig, get_config
from tilt_maze.maze_core.geometry import clamp, intersects


class SimState(enum.Enum):
    PLAYING = 0
    WON = 1


@dataclass
class BallState:
    """Dynamic ball state. Mutated only by Simulator.tick and Simulator.reset."""
    x: float = 120.0
    y: float = 40.0
    vx: float = 0.0
    vy: float = 0.0
    radius: float = 30.0
    has_won: bool = False

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def velocity(self) -> Tuple[float, float]:
        return (self.vx, self.vy)


@dataclass
class TickResult:
    """Result of a single simulation tick."""
    x: float
    y: float
    has_won: bool
    moved: bool
    blocked_by: Optional[Obstacle]
    won_this_tick: bool


class Simulator:
    """
    Fixed-step ball simulation.

    Each tick:
    - Clamps the candidate position into the inset arena bounds
    - Rejects the candidate if the ball would overlap any wall
    - Checks the committed position against the goal

    WON is terminal until reset(); ticks in that state leave the position alone.
    """

    def __init__(
        self,
        arena: Optional[Arena] = None,
        config: Optional[MazeConfig] = None
    ):
        """
        Initialize simulator.

        Args:
            arena: Play field. Built from config if None.
            config: Maze configuration. Uses default if None.

        Raises:
            ValueError: If the ball or its start position does not fit the arena.
        """
        if config is None:
            config = get_config()
        if arena is None:
            arena = Arena.from_config(config.arena)

        self._config = config
        self._arena = arena
        self._radius = config.ball.radius
        self._start = config.ball.start
        self._collision_mode = config.simulation.collision_mode
        self._max_speed = config.simulation.max_speed

        # Inset bounds for the ball center
        self._min_x = self._radius
        self._max_x = arena.width - self._radius
        self._min_y = self._radius
        self._max_y = arena.height - self._radius

        if 2 * self._radius > min(arena.width, arena.height):
            raise ValueError(
                f"Ball radius {self._radius} does not fit in a {arena.width}x{arena.height} arena"
            )
        start_x, start_y = self._start
        if not (self._min_x <= start_x <= self._max_x and self._min_y <= start_y <= self._max_y):
            raise ValueError(
                f"Start ({start_x}, {start_y}) outside [{self._min_x}, {self._max_x}] x "
                f"[{self._min_y}, {self._max_y}] for a {arena.width}x{arena.height} arena"
            )

        self._ball = BallState(radius=self._radius)
        self._state = SimState.PLAYING
        self._tick_count = 0
        self.reset()

    @property
    def arena(self) -> Arena:
        return self._arena

    @property
    def ball(self) -> BallState:
        """Live ball state. Treat as read-only outside the simulator."""
        return self._ball

    @property
    def state(self) -> SimState:
        return self._state

    @property
    def has_won(self) -> bool:
        return self._state is SimState.WON

    @property
    def tick_count(self) -> int:
        """Ticks processed since the last reset, including inert ones after a win."""
        return self._tick_count

    @property
    def collision_mode(self) -> str:
        return self._collision_mode

    def reset(self) -> None:
        """Put the ball back at the start, at rest, playing."""
        self._ball.x, self._ball.y = self._start
        self._ball.vx = 0.0
        self._ball.vy = 0.0
        self._ball.has_won = False
        self._state = SimState.PLAYING
        self._tick_count = 0

    def _sanitize(self, value: float) -> float:
        """Non-finite components, and components beyond max_speed, become 0."""
        if not math.isfinite(value):
            return 0.0
        if self._max_speed is not None and abs(value) > self._max_speed:
            return 0.0
        return value

    def first_collision(self, x: float, y: float) -> Optional[Obstacle]:
        """First obstacle (in arena order) the ball would overlap at (x, y)."""
        for obstacle in self._arena.obstacles():
            if intersects(x, y, self._radius, obstacle):
                return obstacle
        return None

    def tick(self, velocity: Tuple[float, float]) -> TickResult:
        """
        Advance one step with the given velocity.

        Args:
            velocity: (vx, vy) in arena units per tick.

        Returns:
            TickResult describing what happened.
        """
        vx = self._sanitize(float(velocity[0]))
        vy = self._sanitize(float(velocity[1]))
        self._ball.vx = vx
        self._ball.vy = vy
        self._tick_count += 1

        if self._state is SimState.WON:
            return TickResult(
                x=self._ball.x,
                y=self._ball.y,
                has_won=True,
                moved=False,
                blocked_by=None,
                won_this_tick=False
            )

        x, y = self._ball.x, self._ball.y
        new_x = clamp(x + vx, self._min_x, self._max_x)
        new_y = clamp(y + vy, self._min_y, self._max_y)

        blocked_by = self.first_collision(new_x, new_y)
        if blocked_by is None:
            committed = (new_x, new_y)
        elif self._collision_mode == "slide":
            committed = self._slide(x, y, new_x, new_y)
        else:
            committed = (x, y)

        moved = committed != (x, y)
        self._ball.x, self._ball.y = committed

        won_this_tick = False
        if self._arena.goal().contains(self._ball.x, self._ball.y):
            self._state = SimState.WON
            self._ball.has_won = True
            won_this_tick = True

        return TickResult(
            x=self._ball.x,
            y=self._ball.y,
            has_won=self._ball.has_won,
            moved=moved,
            blocked_by=blocked_by,
            won_this_tick=won_this_tick
        )

    def _slide(self, x: float, y: float, new_x: float, new_y: float) -> Tuple[float, float]:
        """Try the x-only then the y-only move; stay put if both collide."""
        if new_x != x and self.first_collision(new_x, y) is None:
            return (new_x, y)
        if new_y != y and self.first_collision(x, new_y) is None:
            return (x, new_y)
        return (x, y)
