"""
Human Play Mode
================

Play the tilt maze interactively. The arrow keys stand in for the gyroscope:
holding a key produces a steady angular-rate sample, releasing all keys
produces a zero sample (the dead zone keeps the ball still).

Controls:
    - Arrow keys / WASD: Tilt
    - R: Reset
    - ESC: Quit

Usage:
    python -m tools.play_human [--scale SCALE] [--tilt-rate RATE] [--record PATH]
"""

from __future__ import annotations

import argparse
import sys
import time
from typing import Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from tilt_maze.maze_core.config_loader import load_config, MazeConfig
from tilt_maze.maze_core.game import GameSession
from tilt_maze.maze_core.replay_recorder import SessionRecorder


class MazeRenderer:
    """Draws the arena, goal and ball into a pygame surface."""

    def __init__(self, scale: float):
        self._scale = scale

        self._bg = (235, 235, 235)
        self._wall = (128, 128, 128)
        self._goal = (40, 180, 60)
        self._ball = (220, 40, 40)
        self._text = (20, 20, 20)

        pygame.font.init()
        self._font_large = pygame.font.Font(None, 64)
        self._font_small = pygame.font.Font(None, 24)

    def _rect(self, bounds: Tuple[float, float, float, float]) -> pygame.Rect:
        left, top, right, bottom = bounds
        s = self._scale
        return pygame.Rect(int(left * s), int(top * s), int((right - left) * s), int((bottom - top) * s))

    def render(self, screen: pygame.Surface, render_data: dict) -> None:
        screen.fill(self._bg)

        for obstacle in render_data["obstacles"]:
            pygame.draw.rect(screen, self._wall, self._rect(obstacle))

        pygame.draw.rect(screen, self._goal, self._rect(render_data["goal"]))

        center = (int(render_data["ball_x"] * self._scale), int(render_data["ball_y"] * self._scale))
        pygame.draw.circle(screen, self._ball, center, max(1, int(render_data["ball_radius"] * self._scale)))

        ticks = self._font_small.render(f"Tick {render_data['tick_count']}", True, self._text)
        screen.blit(ticks, (10, screen.get_height() - 24))

        if render_data["has_won"]:
            text = self._font_large.render("You Win!", True, self._text)
            rect = text.get_rect(center=(screen.get_width() // 2, screen.get_height() - 80))
            screen.blit(text, rect)


class HumanPlayer:
    """
    Keyboard-driven platform loop.

    Samples are delivered once per frame; ticks run at the configured cadence
    from a fixed-step accumulator, independent of the display frame rate.
    """

    def __init__(
        self,
        config: Optional[MazeConfig] = None,
        scale: float = 0.6,
        tilt_rate: float = 1.0,
        target_fps: int = 60,
        record_path: Optional[str] = None
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        if config is None:
            config = load_config()

        self._config = config
        self._tilt_rate = tilt_rate
        self._target_fps = target_fps
        self._record_path = record_path

        # Initialize session (optionally recorded)
        self._session = GameSession(config=config)
        self._driver = SessionRecorder(self._session) if record_path else self._session
        self._driver.reset()

        # Initialize pygame
        pygame.init()
        window = (int(config.arena.width * scale), int(config.arena.height * scale))
        self._screen = pygame.display.set_mode(window)
        pygame.display.set_caption("Tilt Maze")
        self._clock = pygame.time.Clock()

        self._renderer = MazeRenderer(scale)

        self._running = True
        self._was_won = False

        # Fixed-step timing
        self._tick_dt = config.simulation.dt
        self._accumulator = 0.0
        self._last_time = time.time()

    def run(self) -> bool:
        """Run the game loop. Returns True if the maze was solved."""
        print("=== Tilt Maze ===")
        print("Arrow keys / WASD to tilt, R to reset, ESC to quit")
        print()

        while self._running:
            self._handle_events()
            self._deliver_sample()
            self._update_simulation()
            self._render()
            self._clock.tick(self._target_fps)

        if self._record_path:
            self._driver.save(self._record_path)

        pygame.quit()
        return self._session.has_won

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                elif event.key == pygame.K_r:
                    self._restart()

    def _deliver_sample(self) -> None:
        """Turn held keys into a gyroscope-style sample."""
        keys = pygame.key.get_pressed()
        horizontal = (keys[pygame.K_RIGHT] or keys[pygame.K_d]) - (keys[pygame.K_LEFT] or keys[pygame.K_a])
        vertical = (keys[pygame.K_DOWN] or keys[pygame.K_s]) - (keys[pygame.K_UP] or keys[pygame.K_w])

        # horizontal velocity is -ry, vertical velocity is rx
        rx = vertical * self._tilt_rate
        ry = -horizontal * self._tilt_rate
        self._driver.on_input_sample(rx, ry, 0.0)

    def _update_simulation(self) -> None:
        """Run as many fixed ticks as wall-clock time allows."""
        current_time = time.time()
        self._accumulator += current_time - self._last_time
        self._last_time = current_time

        # Limit to prevent spiral
        if self._accumulator > 0.2:
            self._accumulator = 0.2

        while self._accumulator >= self._tick_dt:
            self._accumulator -= self._tick_dt
            self._driver.tick()

        if self._session.has_won and not self._was_won:
            print(f"\nYOU WIN - {self._session.tick_count} ticks")
        self._was_won = self._session.has_won

    def _restart(self) -> None:
        """Restart the game."""
        self._driver.reset()
        self._was_won = False
        self._accumulator = 0.0
        self._last_time = time.time()
        print("\n=== Game Restarted ===\n")

    def _render(self) -> None:
        self._renderer.render(self._screen, self._session.get_render_data())
        pygame.display.flip()


def main():
    parser = argparse.ArgumentParser(description="Play the tilt maze interactively")
    parser.add_argument("--config", type=str, default=None, help="Path to maze_config.yaml")
    parser.add_argument("--scale", type=float, default=0.6, help="Window scale (default: 0.6)")
    parser.add_argument("--tilt-rate", type=float, default=1.0, help="Angular rate per held key in rad/s")
    parser.add_argument("--fps", type=int, default=60, help="Target FPS")
    parser.add_argument("--record", type=str, default=None, help="Save a replay JSON on exit")

    args = parser.parse_args()

    try:
        config = load_config(args.config)
        player = HumanPlayer(
            config=config,
            scale=args.scale,
            tilt_rate=args.tilt_rate,
            target_fps=args.fps,
            record_path=args.record
        )
        solved = player.run()
        print(f"\nSolved: {solved}")
        return 0
    except ImportError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
