"""
Tests for session recording and deterministic replay.
"""

import json
from dataclasses import replace

import pytest

from tilt_maze.maze_core.arena import Arena
from tilt_maze.maze_core.config_loader import load_config
from tilt_maze.maze_core.game import GameSession
from tilt_maze.maze_core.geometry import Rect
from tilt_maze.maze_core.replay_recorder import (
    SessionRecorder,
    compute_config_hash,
    load_replay,
    replay_session,
)


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def recorder(config):
    recorder = SessionRecorder(GameSession(config=config), name="test")
    recorder.reset()
    recorder.on_input_sample(1.0, 0.0, 0.0)
    for _ in range(30):
        recorder.tick()
    recorder.on_input_sample(0.3, 0.01, 0.2)
    for _ in range(10):
        recorder.tick()
    return recorder


class TestSessionRecorder:
    """Test recording and replay."""

    def test_events_logged_in_order(self, recorder):
        events = recorder.events
        assert events[0] == ["reset"]
        assert events[1] == ["sample", 1.0, 0.0, 0.0]
        assert events[2] == ["tick"]
        assert len(events) == 1 + 1 + 30 + 1 + 10

    def test_forwards_to_session(self, recorder):
        assert recorder.snapshot().ball_position == (120, 370)

    def test_save_and_replay(self, recorder, config, tmp_path):
        path = recorder.save(tmp_path / "run.json")
        replay = load_replay(path)

        assert replay["final"] == recorder.snapshot().as_dict()
        final = replay_session(replay, GameSession(config=config))
        assert final == recorder.snapshot()

    def test_config_hash_mismatch(self, recorder, config):
        other = replace(config, input=replace(config.input, sensitivity=5.0))
        assert compute_config_hash(other) != recorder.config_hash

        with pytest.raises(ValueError):
            replay_session(recorder.get_replay_data(), GameSession(config=other))

        # Non-strict replay still runs; vy=5 then vy=1.5 never clears the top frame
        final = replay_session(recorder.get_replay_data(), GameSession(config=other), strict=False)
        assert final.ball_position == (120, 40)
        assert final != recorder.snapshot()

    def test_arena_hash_mismatch(self, config):
        recorder = SessionRecorder(GameSession(config=config))
        recorder.reset()
        recorder.on_input_sample(1.0, 0.0, 0.0)
        for _ in range(10):
            recorder.tick()
        assert recorder.snapshot().ball_position == (120, 140)

        arena = Arena(800, 1200, [Rect(20, 60, 780, 80)], Rect(740, 750, 780, 790))
        session = GameSession(config=config, arena=arena)
        assert compute_config_hash(config, arena) != recorder.config_hash

        with pytest.raises(ValueError):
            replay_session(recorder.get_replay_data(), session)

        final = replay_session(recorder.get_replay_data(), session, strict=False)
        assert final.ball_position == (120, 40)

    def test_default_arena_hash_matches_config(self, config):
        session = GameSession(config=config)
        assert compute_config_hash(config) == compute_config_hash(config, session.arena)

    def test_unknown_event_rejected(self, recorder, tmp_path):
        data = recorder.get_replay_data()
        data["events"].append(["jump"])
        path = tmp_path / "bad.json"
        with open(path, "w") as f:
            json.dump(data, f)

        with pytest.raises(ValueError):
            load_replay(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_replay(tmp_path / "missing.json")
