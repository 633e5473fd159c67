"""
Session Recorder
================

Records the inbound calls a platform loop makes on a GameSession so the run
can be replayed deterministically.

Usage:
    from tilt_maze.maze_core import GameSession, SessionRecorder

    recorder = SessionRecorder(GameSession())
    recorder.reset()
    recorder.on_input_sample(0.3, -0.2, 0.0)
    recorder.tick()
    recorder.save("run.json")

    snapshot = replay_session(load_replay("run.json"), GameSession())
"""

from __future__ import annotations

import json
import hashlib
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from tilt_maze.maze_core.arena import Arena
from tilt_maze.maze_core.config_loader import MazeConfig
from tilt_maze.maze_core.game import GameSession
from tilt_maze.maze_core.simulator import TickResult
from tilt_maze.maze_core.state_snapshot import SessionSnapshot


REPLAY_VERSION = 1
EVENT_TYPES = ("sample", "tick", "reset")


def generate_replay_filename(
    name: str = "maze",
    directory: Optional[Union[str, Path]] = None
) -> Path:
    """
    Generate a timestamped replay filename.

    Format: {name}_{YYYYMMDD_HHMMSS}.json
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filename = f"{name}_{timestamp}.json"

    if directory:
        return Path(directory) / filename
    return Path(filename)


def compute_config_hash(config: MazeConfig, arena: Optional[Arena] = None) -> str:
    """
    Hash of every value that affects ball motion.

    Args:
        config: Maze configuration.
        arena: Layout the session actually plays on. Built from config if None.
    """
    if arena is None:
        arena = Arena.from_config(config.arena)

    hash_data = {
        "arena": {
            "bounds": list(arena.bounds()),
            "obstacles": [list(o.as_tuple()) for o in arena.obstacles()],
            "goal": list(arena.goal().as_tuple()),
        },
        "ball": {
            "radius": config.ball.radius,
            "start": list(config.ball.start),
        },
        "input": {
            "dead_zone": config.input.dead_zone,
            "sensitivity": config.input.sensitivity,
        },
        "simulation": {
            "collision_mode": config.simulation.collision_mode,
            "max_speed": config.simulation.max_speed,
        },
    }
    return hashlib.md5(json.dumps(hash_data, sort_keys=True).encode()).hexdigest()[:8]


class SessionRecorder:
    """
    Wrapper that records session calls for replay.

    Forwards on_input_sample(), tick() and reset() to the wrapped session and
    logs each call in order. Ticks are stored as bare markers; the sample
    values fully determine the run.
    """

    def __init__(self, session: GameSession, name: str = "maze"):
        self.session = session
        self.name = name
        self._events: List[List[Any]] = []
        self._config_hash = compute_config_hash(session.config, session.arena)

    @property
    def events(self) -> List[List[Any]]:
        return list(self._events)

    @property
    def config_hash(self) -> str:
        return self._config_hash

    def on_input_sample(self, rx: float, ry: float, rz: float = 0.0):
        self._events.append(["sample", float(rx), float(ry), float(rz)])
        return self.session.on_input_sample(rx, ry, rz)

    def tick(self) -> TickResult:
        self._events.append(["tick"])
        return self.session.tick()

    def reset(self) -> SessionSnapshot:
        self._events.append(["reset"])
        return self.session.reset()

    def snapshot(self) -> SessionSnapshot:
        return self.session.snapshot()

    def get_replay_data(self) -> Dict[str, Any]:
        """Get the replay as a JSON-serializable dict."""
        final = self.session.snapshot()
        return {
            "version": REPLAY_VERSION,
            "name": self.name,
            "timestamp": datetime.now().isoformat(),
            "config_hash": self._config_hash,
            "events": list(self._events),
            "final": final.as_dict(),
        }

    def save(self, path: Optional[Union[str, Path]] = None) -> Path:
        """
        Save the replay to a JSON file.

        Args:
            path: Output path. Generated from the name if None.

        Returns:
            Path the replay was written to.
        """
        path = Path(path) if path is not None else generate_replay_filename(self.name)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.get_replay_data(), f, indent=2)

        print(f"Replay saved: {path}")
        return path


def load_replay(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load and validate a replay file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file has an unknown version or event type.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Replay file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)

    if data.get("version") != REPLAY_VERSION:
        raise ValueError(f"Unsupported replay version: {data.get('version')}")

    for event in data["events"]:
        if not event or event[0] not in EVENT_TYPES:
            raise ValueError(f"Unknown replay event: {event}")
        if event[0] == "sample" and len(event) != 4:
            raise ValueError(f"Sample event needs [\"sample\", rx, ry, rz], got {event}")

    return data


def replay_session(
    replay: Dict[str, Any],
    session: GameSession,
    strict: bool = True
) -> SessionSnapshot:
    """
    Re-drive a session from a recorded event list.

    Args:
        replay: Data from load_replay() or SessionRecorder.get_replay_data().
        session: Session to drive. It is reset first.
        strict: If True, refuse replays recorded under a different config
            or arena layout.

    Returns:
        Snapshot after the last event.

    Raises:
        ValueError: On config hash mismatch (strict mode) or unknown events.
    """
    if strict:
        expected = compute_config_hash(session.config, session.arena)
        if replay.get("config_hash") != expected:
            raise ValueError(
                f"Replay config hash {replay.get('config_hash')} does not match "
                f"session config hash {expected}"
            )

    session.reset()
    for event in replay["events"]:
        kind = event[0]
        if kind == "sample":
            session.on_input_sample(event[1], event[2], event[3])
        elif kind == "tick":
            session.tick()
        elif kind == "reset":
            session.reset()
        else:
            raise ValueError(f"Unknown replay event: {event}")

    return session.snapshot()
