"""
Solid Renderer
==============

Fast numpy-based renderer that draws the maze as solid-color shapes.
"""

from __future__ import annotations

from typing import Dict, Any, Tuple

import numpy as np


class SolidRenderer:
    """
    Renders the arena to an RGB array.

    Draws walls, the goal and the ball. A won session gets a green frame.
    Uses numpy only, no window required.
    """

    def __init__(self):
        self._bg_color = np.array([235, 235, 235], dtype=np.uint8)
        self._wall_color = np.array([128, 128, 128], dtype=np.uint8)
        self._goal_color = np.array([40, 180, 60], dtype=np.uint8)
        self._ball_color = np.array([220, 40, 40], dtype=np.uint8)
        self._win_frame_color = np.array([40, 180, 60], dtype=np.uint8)

    def render(
        self,
        render_data: Dict[str, Any],
        width: int,
        height: int
    ) -> np.ndarray:
        """
        Render the session state to an RGB array.

        Args:
            render_data: Data from GameSession.get_render_data().
            width: Output image width.
            height: Output image height.

        Returns:
            (height, width, 3) uint8 array.
        """
        img = np.zeros((height, width, 3), dtype=np.uint8)
        img[:] = self._bg_color

        board_width = render_data["board_width"]
        board_height = render_data["board_height"]
        scale = min(width / board_width, height / board_height)

        # Center the board in the image
        offset_x = (width - board_width * scale) / 2
        offset_y = (height - board_height * scale) / 2

        def to_px(x: float, y: float) -> Tuple[int, int]:
            return int(round(x * scale + offset_x)), int(round(y * scale + offset_y))

        for left, top, right, bottom in render_data["obstacles"]:
            self._fill_rect(img, to_px(left, top), to_px(right, bottom), self._wall_color)

        left, top, right, bottom = render_data["goal"]
        self._fill_rect(img, to_px(left, top), to_px(right, bottom), self._goal_color)

        cx, cy = to_px(render_data["ball_x"], render_data["ball_y"])
        radius = max(1, int(round(render_data["ball_radius"] * scale)))
        self._draw_circle(img, cx, cy, radius, self._ball_color)

        if render_data.get("has_won", False):
            frame = max(2, min(width, height) // 50)
            img[:frame, :] = self._win_frame_color
            img[-frame:, :] = self._win_frame_color
            img[:, :frame] = self._win_frame_color
            img[:, -frame:] = self._win_frame_color

        return img

    def _fill_rect(
        self,
        img: np.ndarray,
        top_left: Tuple[int, int],
        bottom_right: Tuple[int, int],
        color: np.ndarray
    ) -> None:
        """Fill an axis-aligned pixel rectangle, clipped to the image."""
        height, width = img.shape[:2]
        x0 = max(0, top_left[0])
        y0 = max(0, top_left[1])
        x1 = min(width, bottom_right[0])
        y1 = min(height, bottom_right[1])
        if x0 >= x1 or y0 >= y1:
            return
        img[y0:y1, x0:x1] = color

    def _draw_circle(
        self,
        img: np.ndarray,
        cx: int,
        cy: int,
        radius: int,
        color: np.ndarray
    ) -> None:
        """Draw a filled circle using numpy."""
        height, width = img.shape[:2]

        # Calculate bounding box
        y_min = max(0, cy - radius)
        y_max = min(height, cy + radius + 1)
        x_min = max(0, cx - radius)
        x_max = min(width, cx + radius + 1)

        if y_min >= y_max or x_min >= x_max:
            return

        yy, xx = np.meshgrid(np.arange(y_min, y_max), np.arange(x_min, x_max), indexing='ij')
        mask = (xx - cx)**2 + (yy - cy)**2 <= radius**2

        img[y_min:y_max, x_min:x_max][mask] = color

    def close(self) -> None:
        """Clean up resources (no-op for solid renderer)."""
        pass
