"""
Arena
=====

Static play field: frame walls, interior maze walls and the goal region.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from tilt_maze.maze_core.config_loader import ArenaConfig, get_config
from tilt_maze.maze_core.geometry import Rect


@dataclass(frozen=True)
class Obstacle(Rect):
    """Impassable wall. kind is "border" for frame walls, "interior" otherwise."""
    kind: str = "interior"


@dataclass(frozen=True)
class Goal(Rect):
    """Win target."""


def build_border_walls(width: float, height: float, thickness: float) -> Tuple[Obstacle, ...]:
    """
    Build the four frame walls (top, bottom, left, right).

    Returns an empty tuple when thickness is 0.
    """
    if thickness <= 0:
        return ()
    return (
        Obstacle(0.0, 0.0, width, thickness, kind="border"),
        Obstacle(0.0, height - thickness, width, height, kind="border"),
        Obstacle(0.0, 0.0, thickness, height, kind="border"),
        Obstacle(width - thickness, 0.0, width, height, kind="border"),
    )


class Arena:
    """
    Immutable maze layout.

    Obstacles are ordered frame walls first, then interior walls in the
    order given.
    """

    def __init__(
        self,
        width: float,
        height: float,
        interior_walls: Iterable[Rect],
        goal: Rect,
        border_thickness: float = 20.0
    ):
        """
        Build an arena.

        Args:
            width: Arena width.
            height: Arena height.
            interior_walls: Maze walls inside the frame.
            goal: Goal rectangle.
            border_thickness: Frame wall thickness (0 for no frame).

        Raises:
            ValueError: If any wall or the goal lies outside the arena.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Arena size must be positive, got {width}x{height}")

        self._width = float(width)
        self._height = float(height)
        self._border_thickness = float(border_thickness)

        self._border = build_border_walls(self._width, self._height, self._border_thickness)
        self._interior = tuple(
            w if isinstance(w, Obstacle) else Obstacle(w.left, w.top, w.right, w.bottom)
            for w in interior_walls
        )
        self._obstacles = self._border + self._interior
        self._goal = goal if isinstance(goal, Goal) else Goal(goal.left, goal.top, goal.right, goal.bottom)

        for obstacle in self._obstacles:
            if not obstacle.within(self._width, self._height):
                raise ValueError(f"Obstacle {obstacle.as_tuple()} lies outside {self._width}x{self._height} arena")
        if not self._goal.within(self._width, self._height):
            raise ValueError(f"Goal {self._goal.as_tuple()} lies outside {self._width}x{self._height} arena")

    @classmethod
    def from_config(cls, config: ArenaConfig) -> "Arena":
        """Build an arena from the arena section of the config."""
        return cls(
            width=config.width,
            height=config.height,
            interior_walls=[Rect(*r) for r in config.obstacles],
            goal=Rect(*config.goal),
            border_thickness=config.border_thickness
        )

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    @property
    def border_thickness(self) -> float:
        return self._border_thickness

    def obstacles(self) -> Tuple[Obstacle, ...]:
        """All walls: frame walls followed by interior walls."""
        return self._obstacles

    def border_walls(self) -> Tuple[Obstacle, ...]:
        return self._border

    def interior_walls(self) -> Tuple[Obstacle, ...]:
        return self._interior

    def goal(self) -> Goal:
        return self._goal

    def bounds(self) -> Tuple[float, float]:
        """(width, height)"""
        return (self._width, self._height)

    def __repr__(self) -> str:
        return (f"Arena({self._width:g}x{self._height:g}, "
                f"obstacles={len(self._obstacles)}, goal={self._goal.as_tuple()})")


def default_arena(config: Optional[ArenaConfig] = None) -> Arena:
    """Arena from the packaged maze_config.yaml (or the given arena config)."""
    if config is None:
        config = get_config().arena
    return Arena.from_config(config)
