"""
Geometry
========

Axis-aligned rectangles and the circle-vs-rectangle overlap test.

Coordinates are arena units with y growing downward, so ``top < bottom``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


@dataclass(frozen=True)
class Rect:
    """Immutable axis-aligned rectangle."""
    left: float
    top: float
    right: float
    bottom: float

    def __post_init__(self):
        for name in ("left", "top", "right", "bottom"):
            if not math.isfinite(getattr(self, name)):
                raise ValueError(f"Rect {name} must be finite, got {getattr(self, name)}")
        if not self.left < self.right:
            raise ValueError(f"Rect requires left < right, got {self.left} >= {self.right}")
        if not self.top < self.bottom:
            raise ValueError(f"Rect requires top < bottom, got {self.top} >= {self.bottom}")

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def contains(self, x: float, y: float) -> bool:
        """True if (x, y) lies in the closed rectangle."""
        return self.left <= x <= self.right and self.top <= y <= self.bottom

    def closest_point(self, x: float, y: float) -> Tuple[float, float]:
        """Point on or inside the rectangle nearest to (x, y)."""
        return clamp(x, self.left, self.right), clamp(y, self.top, self.bottom)

    def within(self, width: float, height: float) -> bool:
        """True if the rectangle lies inside [0, width] x [0, height]."""
        return self.left >= 0 and self.top >= 0 and self.right <= width and self.bottom <= height

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.left, self.top, self.right, self.bottom)


def intersects(cx: float, cy: float, radius: float, rect: Rect) -> bool:
    """
    Circle vs rectangle overlap test.

    A circle exactly tangent to an edge does not intersect (strict ``<``).

    Args:
        cx: Circle center X.
        cy: Circle center Y.
        radius: Circle radius.
        rect: Rectangle to test against.

    Returns:
        True if the circle overlaps the rectangle.
    """
    closest_x, closest_y = rect.closest_point(cx, cy)
    dx = cx - closest_x
    dy = cy - closest_y
    return dx * dx + dy * dy < radius * radius
