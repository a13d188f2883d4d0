"""Tests for the simulation runner."""

import json
import sys
from datetime import date
from pathlib import Path

from fortune_merge.main import game_seed, generate_log_filename, main


class TestHelpers:
    """Tests for runner helpers."""

    def test_game_seed(self):
        """Test per-game seeds."""
        assert game_seed(date(2024, 1, 1), "", 3) == "2024-01-01:3"
        assert game_seed(date(2024, 1, 1), "alice", 3) == "2024-01-01:alice-3"

    def test_log_filename(self):
        """Test log filename layout."""
        path = Path(generate_log_filename("logs", date(2024, 1, 1), "alice"))
        assert path.parent == Path("logs")
        assert path.name.endswith("_2024-01-01_alice.jsonl")

    def test_log_filename_without_salt(self):
        """Test filename without salt."""
        path = Path(generate_log_filename("logs", date(2024, 1, 1), ""))
        assert path.name.endswith("_2024-01-01.jsonl")


class TestMain:
    """Tests for the command-line entry point."""

    def test_runs_session(self, tmp_path, monkeypatch, capsys):
        """Test a short session with a game log."""
        monkeypatch.setattr(
            sys,
            "argv",
            ["fortune-merge", "-n", "2", "--date", "2024-01-01", "-s", "bot", "--game-log", str(tmp_path)],
        )

        assert main() == 0

        output = capsys.readouterr().out
        assert "FINAL RESULTS" in output
        assert "GAME 2/2" in output

        logs = list(tmp_path.glob("*.jsonl"))
        assert len(logs) == 1
        with open(logs[0], encoding="utf-8") as f:
            types = [json.loads(line)["type"] for line in f]
        assert types[0] == "session_start"
        assert types[-1] == "session_end"
        assert types.count("game_over") == 2
