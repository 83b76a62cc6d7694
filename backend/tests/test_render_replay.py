"""
Tests for the replay rendering CLI.
"""

import json
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cli.render_replay import (  # noqa: E402
    extract_game_id_from_filename,
    load_local_replay,
    main,
    render_replay,
)
from config import GameConfig  # noqa: E402
from main import run_simulation  # noqa: E402


@pytest.fixture
def replay_path(tmp_path):
    path = tmp_path / "snake_game_abc-123.json"
    run_simulation(GameConfig(cell_count=8), ticks=12, seed=2, output=str(path))
    return path


def test_extract_game_id_from_filename():
    assert extract_game_id_from_filename("/x/snake_game_abc-123.json") == "abc-123"
    assert extract_game_id_from_filename("replay.json") == "replay"


def test_load_missing_replay(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_local_replay(str(tmp_path / "missing.json"))


def test_render_every_frame(replay_path, tmp_path):
    out_dir = tmp_path / "frames"
    paths = render_replay(load_local_replay(str(replay_path)), str(out_dir), cell_size=10)
    assert len(paths) == 12
    assert all(os.path.exists(p) for p in paths)


def test_render_every_nth_frame(replay_path, tmp_path):
    paths = render_replay(load_local_replay(str(replay_path)), str(tmp_path / "f"), every=5)
    assert [os.path.basename(p) for p in paths] == ["frame_00000.png", "frame_00005.png", "frame_00010.png"]


def test_render_rejects_bad_every(replay_path, tmp_path):
    with pytest.raises(ValueError):
        render_replay(load_local_replay(str(replay_path)), str(tmp_path), every=0)


def test_main_cli(replay_path, tmp_path, monkeypatch):
    out_dir = tmp_path / "cli_frames"
    monkeypatch.setattr(sys, "argv", ["render_replay.py", str(replay_path), "--out-dir", str(out_dir)])
    assert main() == 0
    assert len(list(out_dir.iterdir())) == 12


def test_main_cli_missing_file(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["render_replay.py", str(tmp_path / "nope.json")])
    assert main() == 1


def test_main_cli_invalid_replay(tmp_path, monkeypatch):
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"rounds": [{"cells": [[0, 0]]}]}))
    monkeypatch.setattr(sys, "argv", ["render_replay.py", str(bad), "--out-dir", str(tmp_path / "o")])
    assert main() == 1
