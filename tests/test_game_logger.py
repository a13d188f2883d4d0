"""Tests for the JSONL game logger."""

import asyncio
import json

import pytest

from fortune_merge.config import Config, GameLogConfig, TimingConfig
from fortune_merge.game.engine import GameEngine
from fortune_merge.logging import GameLogger, format_card, format_cards, format_columns
from fortune_merge.models.board import Column
from fortune_merge.models.card import Card, LuckSuit, LuckTier


def read_events(path) -> list[dict]:
    with open(path, encoding="utf-8") as f:
        return [json.loads(line) for line in f if line.strip()]


@pytest.fixture
def log_path(tmp_path):
    return tmp_path / "logs" / "game.jsonl"


class TestFormatters:
    """Tests for compact card formatting."""

    def test_format_card(self):
        """Test value:tier:suit format."""
        card = Card(id=1, value=16, tier=LuckTier.SYMBOLIC, suit=LuckSuit.LOVE)
        assert format_card(card) == "16:2:love"

    def test_format_cards(self):
        """Test comma-separated cards."""
        cards = [Card(id=1, value=2), Card(id=2, value=4)]
        assert format_cards(cards) == "2:1:growth,4:1:growth"
        assert format_cards([]) == ""

    def test_format_columns(self):
        """Test columns keyed by id."""
        columns = [Column(id=1, cards=[Card(id=1, value=8)]), Column(id=2)]
        assert format_columns(columns) == {"1": "8:1:growth", "2": ""}


class TestGameLogger:
    """Tests for GameLogger."""

    def test_disabled_writes_nothing(self, log_path):
        """Test disabled logger creates no file."""
        with GameLogger(GameLogConfig(enabled=False, output_path=str(log_path))) as game_logger:
            game_logger.log_session_start(1, "")
        assert not log_path.exists()

    def test_session_events(self, log_path):
        """Test session start and end records."""
        with GameLogger(GameLogConfig(enabled=True, output_path=str(log_path))) as game_logger:
            game_logger.log_session_start(2, "alice")
            game_logger.log_session_end(2, [120, 48])

        events = read_events(log_path)
        assert [e["type"] for e in events] == ["session_start", "session_end"]
        assert events[0]["num_games"] == 2
        assert events[0]["salt"] == "alice"

    def test_append_mode(self, log_path):
        """Test reopening appends."""
        config = GameLogConfig(enabled=True, output_path=str(log_path))
        for _ in range(2):
            with GameLogger(config) as game_logger:
                game_logger.log_special(1, "undo")
        assert len(read_events(log_path)) == 2

    def test_engine_events(self, log_path):
        """Test engine writes game, move and merge records."""
        config = Config(timing=TimingConfig(merge_start_delay=0, merge_settle_delay=0))

        with GameLogger(GameLogConfig(enabled=True, output_path=str(log_path))) as game_logger:
            engine = GameEngine(config, game_logger)
            engine.new_game("logged")

            card = engine.state.placeable_card()
            target = next(c.id for c in engine.state.columns if c.top().value >= card.value)
            asyncio.run(engine.move(target))
            engine.discard()

        events = read_events(log_path)
        types = [e["type"] for e in events]

        assert types[0] == "game_start"
        assert events[0]["seed"] == "logged"
        assert set(events[0]["columns"]) == {"1", "2", "3", "4"}
        assert types[1] == "move"
        assert events[1]["column"] == target
        assert types[-1] == "discard"
        assert events[-1]["detail"]["trash_left"] == 0

    def test_game_over_event(self, log_path):
        """Test game over record carries the fortune summary."""
        config = Config(timing=TimingConfig(merge_start_delay=0, merge_settle_delay=0))

        with GameLogger(GameLogConfig(enabled=True, output_path=str(log_path))) as game_logger:
            engine = GameEngine(config, game_logger)
            engine.new_game("over")
            for column in engine.state.columns:
                column.cards = []
            engine.state.queue = [Card(id=900, value=2)]
            engine.state.deck = []
            asyncio.run(engine.move(1))

        event = read_events(log_path)[-1]
        assert event["type"] == "game_over"
        assert event["reason"] == "deckEmpty"
        assert event["fortune"]["label"]
        assert event["fortune"]["top_cards"] == "2:1:growth"
